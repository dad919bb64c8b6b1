# ==============================================================================
# SERVICIO DE PROMOCIONES
# ==============================================================================
# Validación de códigos promocionales y administración del catálogo de
# promociones.
#
# La búsqueda del código es una llamada bloqueante a un colaborador externo:
# se ejecuta en un pool de hilos con timeout. Un timeout o un error de E/S
# se reporta como PromoLookupUnavailable, nunca como UnknownCode.
# ==============================================================================

from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from laundry_app.models import PromoCode, PromoStatus
from laundry_app.repositories.interfaces import IPromotionRepository
from laundry_app.services.audit_service import AuditService
from laundry_app.services.errors import (
    DuplicateCode,
    PromoLookupUnavailable,
    PromoNotApplicable,
    UnknownCode,
)


DEFAULT_LOOKUP_TIMEOUT = 2.0

# Pool compartido por todas las instancias del servicio
_LOOKUP_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix='promo-lookup')

# Estado no activo → motivo de rechazo
_STATUS_REASONS = {
    PromoStatus.SCHEDULED: 'not_started',
    PromoStatus.EXPIRED: 'expired',
    PromoStatus.DRAFT: 'inactive',
}


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return datetime.strptime(value[:10], '%Y-%m-%d').date()


class PromoService:
    """
    Servicio de promociones.

    Responsabilidades:
    - Validar un código contra el subtotal y las promos ya aplicadas
    - Listar y crear promociones (administración)
    - Revalidar las promos de un carrito antes de confirmar el pedido
    - Reservar usos (respetando max_usage) al confirmar un pedido
    """

    def __init__(
        self,
        promo_repo: IPromotionRepository,
        lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        audit_service: AuditService = None
    ):
        self.promo_repo = promo_repo
        self.lookup_timeout = lookup_timeout
        self.audit_service = audit_service

    # =========================================================================
    # VALIDACIÓN
    # =========================================================================

    def validate(
        self,
        code: str,
        cart_subtotal: float,
        already_applied: Iterable[str],
        today: date = None
    ) -> PromoCode:
        """
        Valida un código promocional.

        Orden de las verificaciones:
        1. Código vacío → UnknownCode
        2. Ya aplicado (sin mayúsculas ni espacios) → DuplicateCode, sin consultar
        3. Consulta al catálogo (timeout / E/S → PromoLookupUnavailable)
        4. No existe → UnknownCode
        5. Vigencia, mínimo y usos → PromoNotApplicable(reason)

        Returns:
            La promoción encontrada

        Raises:
            CashierError según el caso
        """
        normalized = PromoCode.normalize_code(code)
        if not normalized:
            raise UnknownCode('Ingrese un código de promoción')

        if any(PromoCode.normalize_code(c) == normalized for c in already_applied):
            raise DuplicateCode(code=code.strip())

        promo = self._lookup(code.strip())
        if promo is None:
            raise UnknownCode(code=code.strip())

        self.check_applicable(promo, cart_subtotal, today or date.today())
        return promo

    def _lookup(self, code: str) -> Optional[PromoCode]:
        future = _LOOKUP_EXECUTOR.submit(self.promo_repo.find_by_code, code)
        try:
            return future.result(timeout=self.lookup_timeout)
        except FuturesTimeoutError:
            future.cancel()
            raise PromoLookupUnavailable(code=code)
        except OSError as e:
            raise PromoLookupUnavailable(code=code) from e

    @staticmethod
    def check_applicable(promo: PromoCode, subtotal: float, today: date = None) -> None:
        """
        Vigencia, pedido mínimo y usos de una promoción.

        Raises:
            PromoNotApplicable(reason)
        """
        today = today or date.today()
        if promo.status != PromoStatus.ACTIVE:
            raise PromoNotApplicable(
                _STATUS_REASONS.get(promo.status, 'inactive'),
                'La promoción no está activa',
                code=promo.code
            )

        start = _parse_date(promo.start_date)
        if start and today < start:
            raise PromoNotApplicable(
                'not_started',
                f'La promoción inicia el {promo.start_date}',
                code=promo.code
            )

        end = _parse_date(promo.end_date)
        if end and today > end:
            raise PromoNotApplicable(
                'expired',
                f'La promoción venció el {promo.end_date}',
                code=promo.code
            )

        if subtotal < promo.min_order:
            raise PromoNotApplicable(
                'min_order',
                f'Pedido mínimo de Rp {promo.min_order:,.0f}'.replace(',', '.'),
                code=promo.code,
                min_order=promo.min_order
            )

        if promo.usage_exhausted:
            raise PromoNotApplicable(
                'usage_limit',
                'La promoción alcanzó su límite de usos',
                code=promo.code
            )

    def revalidate(self, promos: Iterable[PromoCode], subtotal: float, today: date = None) -> List[PromoCode]:
        """
        Vuelve a validar promos ya aplicadas contra el catálogo actual.

        Cada código se consulta de nuevo: una promo eliminada, vencida o
        agotada desde que se aplicó deja de ser válida.

        Returns:
            Las promociones tal como están hoy en el catálogo

        Raises:
            UnknownCode, PromoLookupUnavailable, PromoNotApplicable
        """
        current = []
        for applied in promos:
            promo = self._lookup(applied.code)
            if promo is None:
                raise UnknownCode(code=applied.code)
            self.check_applicable(promo, subtotal, today)
            current.append(promo)
        return current

    # =========================================================================
    # ADMINISTRACIÓN
    # =========================================================================

    def list_promotions(self, status: str = None) -> List[PromoCode]:
        promos = self.promo_repo.list_promotions()
        if status:
            promos = [p for p in promos if p.status.value == status]
        return promos

    def create_promotion(self, data: Dict[str, Any], user: str = None) -> Dict[str, Any]:
        """
        Crea una promoción.

        Returns:
            Dict con resultado (ok, error, promotion)
        """
        code = (data.get('code') or '').strip().upper()
        if not code:
            return {'ok': False, 'error': 'Código requerido'}

        if self.promo_repo.find_by_code(code):
            return {'ok': False, 'error': f'El código {code} ya existe'}

        promo_type = data.get('type', 'percentage')
        if promo_type not in ('percentage', 'fixed'):
            return {'ok': False, 'error': 'Tipo de promoción inválido'}

        try:
            value = float(data.get('value', 0))
            min_order = float(data.get('minOrder', 0) or 0)
            _parse_date(data.get('startDate'))
            _parse_date(data.get('endDate'))
        except (TypeError, ValueError):
            return {'ok': False, 'error': 'Valores de promoción inválidos'}

        if value <= 0 or (promo_type == 'percentage' and value > 100):
            return {'ok': False, 'error': 'Valor de descuento inválido'}
        if min_order < 0:
            return {'ok': False, 'error': 'Pedido mínimo inválido'}

        next_id = max((int(p.id) for p in self.promo_repo.list_promotions() if p.id.isdigit()), default=0) + 1
        record = dict(data)
        record.update({
            'id': str(next_id),
            'code': code,
            'value': value,
            'minOrder': min_order,
            'usageCount': 0,
            'createdAt': datetime.now().strftime('%Y-%m-%d')
        })
        promo = PromoCode.from_dict(record)
        self.promo_repo.save_promotion(promo)

        if self.audit_service:
            self.audit_service.log_promo_created(user, code)

        return {'ok': True, 'promotion': promo.to_dict()}

    # =========================================================================
    # USOS
    # =========================================================================

    def reserve_usage(self, promos: Iterable[PromoCode]) -> List[str]:
        """
        Reserva un uso de cada promo de forma atómica.

        Si alguna ya no tiene cupo, libera las reservadas hasta ese punto.

        Returns:
            Códigos reservados (para release_usage)

        Raises:
            PromoNotApplicable('usage_limit')
        """
        reserved = []
        for promo in promos:
            if not self.promo_repo.increment_usage(promo.code):
                self.release_usage(reserved)
                raise PromoNotApplicable(
                    'usage_limit',
                    'La promoción alcanzó su límite de usos',
                    code=promo.code
                )
            reserved.append(promo.code)
        return reserved

    def release_usage(self, codes: Iterable[str]) -> None:
        for code in codes:
            self.promo_repo.decrement_usage(code)

    def log_usage(self, promos: Iterable[PromoCode], invoice: str, user: str = None) -> None:
        if not self.audit_service:
            return
        for promo in promos:
            self.audit_service.log_promo_used(user, promo.code, invoice)
