# ==============================================================================
# SERVICIO DE AUDITORÍA
# ==============================================================================
# Centraliza todo el registro de auditoría de la caja.
# Formatea mensajes humanizados y categoriza eventos.
# ==============================================================================

from typing import Any, Dict, List

from laundry_app.models import AuditLog, AuditType, Order
from laundry_app.repositories.audit_repository import AuditRepository


def _rupiah(amount: float) -> str:
    """Formato Rp 35.000 (separador de miles con punto)."""
    return 'Rp ' + f"{amount:,.0f}".replace(',', '.')


class AuditService:
    """
    Servicio para registro y consulta de auditoría.

    Centraliza:
    - Registro de eventos con mensajes humanizados
    - Categorización de eventos (PEDIDO, PAGO, PROMO, CLIENTE, SISTEMA)
    - Consulta de logs recientes

    La regla de oro: Si entra dinero → siempre log de PAGO
    """

    def __init__(self, audit_repo: AuditRepository):
        self.audit_repo = audit_repo

    # =========================================================================
    # REGISTRO DE EVENTOS
    # =========================================================================

    def log(
        self,
        log_type: AuditType,
        user: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None
    ) -> None:
        """
        Registra un evento de auditoría genérico.

        Args:
            log_type: Tipo de evento
            user: Usuario que realizó la acción
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado (invoice, código de promo, etc.)
            details: Detalles adicionales
        """
        self.audit_repo.log(AuditLog(
            type=log_type.value,
            user=user or 'sistema',
            message=message,
            related_id=related_id,
            details=details or {}
        ))

    def log_order_created(self, user: str, order: Order) -> None:
        """Registra un pedido confirmado en caja (y su pago si entró dinero)."""
        customer = order.customer.name if order.customer else 'compra rápida'
        message = (
            f"Pedido {order.invoice} creado por {user} - Cliente: {customer} - "
            f"Total: {_rupiah(order.total)} - {len(order.lines)} líneas"
        )
        self.log(
            AuditType.PEDIDO,
            user,
            message,
            order.invoice,
            {
                'total': order.total,
                'discount': order.discount,
                'promos': [p.code for p in order.promos],
                'status': order.order_status_id
            }
        )
        if order.is_paid:
            self.log_payment(user, order.invoice, order.total, order.payment_method.value)

    def log_status_change(
        self,
        user: str,
        invoice: str,
        old_status: str,
        new_status: str
    ) -> None:
        message = f"Pedido {invoice}: {old_status} → {new_status} por {user}"
        self.log(
            AuditType.PEDIDO,
            user,
            message,
            invoice,
            {'from': old_status, 'to': new_status}
        )

    def log_payment(self, user: str, invoice: str, amount: float, method: str) -> None:
        message = f"Pago de {_rupiah(amount)} ({method}) registrado en pedido {invoice} por {user}"
        self.log(
            AuditType.PAGO,
            user,
            message,
            invoice,
            {'amount': amount, 'method': method}
        )

    def log_promo_created(self, user: str, code: str) -> None:
        self.log(AuditType.PROMO, user, f"Promoción {code} creada por {user}", code)

    def log_promo_used(self, user: str, code: str, invoice: str) -> None:
        self.log(
            AuditType.PROMO,
            user,
            f"Promoción {code} usada en pedido {invoice}",
            code,
            {'invoice': invoice}
        )

    def log_customer_created(self, user: str, customer_id: str, name: str) -> None:
        self.log(
            AuditType.CLIENTE,
            user,
            f"Cliente {name} registrado por {user}",
            customer_id
        )

    def log_user_login(self, user: str) -> None:
        self.log(AuditType.SISTEMA, user, f"Inicio de sesión de {user}")

    def log_user_logout(self, user: str) -> None:
        self.log(AuditType.SISTEMA, user, f"Cierre de sesión de {user}")

    def log_user_created(self, admin_user: str, new_user: str, role: str) -> None:
        self.log(
            AuditType.SISTEMA,
            admin_user,
            f"Usuario {new_user} ({role}) creado por {admin_user}",
            new_user,
            {'role': role}
        )

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_recent_logs(self, limit: int = 100) -> List[Dict[str, Any]]:
        return self.audit_repo.get_recent_logs(limit)

    def search_logs(
        self,
        query: str = '',
        log_type: str = None,
        user: str = None
    ) -> List[Dict[str, Any]]:
        return self.audit_repo.search_logs(query, log_type, user)
