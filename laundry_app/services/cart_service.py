# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza toda la lógica de negocio del carrito de la caja.
# El carrito es un objeto explícito (Cart) que recibe cada método;
# la capa HTTP lo guarda en la sesión de Flask entre requests.
# ==============================================================================

import math
from typing import Any, Dict, List, Optional, Union

from laundry_app.models import (
    Cart,
    CartLine,
    CatalogItem,
    ProductLine,
    PromoCode,
    ServiceLine,
    WEIGHT_STEP,
)
from laundry_app.repositories.interfaces import ICatalogRepository
from laundry_app.services.discount_service import DiscountService
from laundry_app.services.errors import (
    CatalogItemNotFound,
    InvalidQuantity,
    ItemUnavailable,
    LineNotFound,
    OutOfStock,
    PromoNotApplicable,
    VariationRequired,
)
from laundry_app.services.promo_service import PromoService


Amount = Union[int, float]


def make_line_id(item_id: str, variation_id: Optional[str] = None) -> str:
    """ID de línea: "<itemId>" o "<itemId>_<variationId>"."""
    return f"{item_id}_{variation_id}" if variation_id else str(item_id)


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidQuantity(value=value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidQuantity(value=value)
    if not math.isfinite(number):
        raise InvalidQuantity(value=value)
    return number


def validate_quantity(value: Any) -> int:
    """Cantidad de producto: entero >= 1."""
    number = _to_number(value)
    if number < 1 or not number.is_integer():
        raise InvalidQuantity('La cantidad debe ser un entero mayor o igual a 1', value=value)
    return int(number)


def validate_weight(value: Any) -> float:
    """Peso de servicio: >= 0.5 kg en pasos de 0.5."""
    number = _to_number(value)
    steps = number / WEIGHT_STEP
    if number < WEIGHT_STEP or abs(steps - round(steps)) > 1e-9:
        raise InvalidQuantity(
            f'El peso debe ser mayor o igual a {WEIGHT_STEP} kg en pasos de {WEIGHT_STEP}',
            value=value
        )
    return round(round(steps) * WEIGHT_STEP, 1)


class CartService:
    """
    Servicio para gestión del carrito de la caja.

    Responsabilidades:
    - Agregar/actualizar/eliminar líneas (productos por unidad, servicios por kilo)
    - Validar stock de productos y estado de los ítems
    - Aplicar/quitar códigos promocionales
    - Resumen con subtotal, descuento y total
    """

    def __init__(
        self,
        catalog_repo: ICatalogRepository,
        promo_service: PromoService,
        discount_service: DiscountService
    ):
        self.catalog_repo = catalog_repo
        self.promo_service = promo_service
        self.discount_service = discount_service

    # =========================================================================
    # LÍNEAS
    # =========================================================================

    def add_item(
        self,
        cart: Cart,
        item_id: str,
        variation_id: Optional[str] = None,
        quantity_or_weight: Amount = 1
    ) -> CartLine:
        """Como add_line, resolviendo primero el ítem en el catálogo."""
        item = self.catalog_repo.get_item(str(item_id))
        if item is None:
            raise CatalogItemNotFound(item_id=item_id)
        return self.add_line(cart, item, variation_id, quantity_or_weight)

    def add_line(
        self,
        cart: Cart,
        catalog_item: CatalogItem,
        variation_id: Optional[str] = None,
        quantity_or_weight: Amount = 1
    ) -> CartLine:
        """
        Agrega un ítem al carrito.

        Si ya existe una línea con el mismo ID se suma la cantidad/peso
        en lugar de crear otra.

        Raises:
            ItemUnavailable, VariationRequired, InvalidQuantity, OutOfStock
        """
        if not catalog_item.is_active:
            raise ItemUnavailable(item_id=catalog_item.id)

        variation = None
        if catalog_item.has_variations:
            variation = catalog_item.get_variation(variation_id)
            if variation is None:
                raise VariationRequired(item_id=catalog_item.id, variation_id=variation_id)

        if catalog_item.is_service:
            amount = validate_weight(quantity_or_weight)
        else:
            amount = validate_quantity(quantity_or_weight)

        line_id = make_line_id(catalog_item.id, variation.id if variation else None)
        existing = cart.get_line(line_id)

        if existing is not None:
            new_amount = existing.quantity_or_weight + amount
            self._check_stock(catalog_item, variation, new_amount)
            self._set_amount(existing, new_amount)
            return existing

        self._check_stock(catalog_item, variation, amount)
        line = self._build_line(line_id, catalog_item, variation, amount)
        cart.lines.append(line)
        return line

    def update_line(self, cart: Cart, line_id: str, new_quantity_or_weight: Amount) -> CartLine:
        """
        Cambia la cantidad/peso de una línea. El subtotal se recalcula solo.
        Las promos que dejan de aplicar con el nuevo subtotal se quitan.

        Raises:
            LineNotFound, InvalidQuantity, OutOfStock
        """
        line = cart.get_line(line_id)
        if line is None:
            raise LineNotFound(line_id=line_id)

        if isinstance(line, ServiceLine):
            amount = validate_weight(new_quantity_or_weight)
        else:
            amount = validate_quantity(new_quantity_or_weight)
            item = self.catalog_repo.get_item(line.catalog_item_id)
            if item is not None:
                self._check_stock(item, item.get_variation(line.variation_id), amount)

        self._set_amount(line, amount)
        self.drop_inapplicable_promos(cart)
        return line

    def remove_line(self, cart: Cart, line_id: str) -> bool:
        """
        Quita una línea. Un ID inexistente no es error.
        Las promos que dejan de aplicar con el nuevo subtotal se quitan.

        Returns:
            True si se eliminó algo
        """
        before = len(cart.lines)
        cart.lines = [line for line in cart.lines if line.id != line_id]
        if len(cart.lines) == before:
            return False
        self.drop_inapplicable_promos(cart)
        return True

    def clear(self, cart: Cart) -> None:
        """Vacía líneas y promociones."""
        cart.lines.clear()
        cart.applied_promos.clear()

    def subtotal(self, cart: Cart) -> float:
        return cart.subtotal

    # =========================================================================
    # PROMOCIONES
    # =========================================================================

    def apply_promo(self, cart: Cart, code: str) -> PromoCode:
        """
        Valida y aplica un código. Ante cualquier error el carrito no cambia.
        """
        promo = self.promo_service.validate(
            code,
            cart.subtotal,
            [p.code for p in cart.applied_promos]
        )
        cart.applied_promos.append(promo)
        return promo

    def remove_promo(self, cart: Cart, code_or_id: str) -> bool:
        promo = cart.find_promo(code_or_id)
        if promo is None:
            return False
        cart.applied_promos.remove(promo)
        return True

    def drop_inapplicable_promos(self, cart: Cart) -> List[PromoCode]:
        """
        Quita las promos aplicadas que ya no aplican con el subtotal actual.

        Returns:
            Las promos quitadas
        """
        subtotal = cart.subtotal
        dropped = []
        for promo in list(cart.applied_promos):
            try:
                self.promo_service.check_applicable(promo, subtotal)
            except PromoNotApplicable:
                cart.applied_promos.remove(promo)
                dropped.append(promo)
        return dropped

    # =========================================================================
    # RESUMEN
    # =========================================================================

    def summary(self, cart: Cart) -> Dict[str, Any]:
        """
        Carrito con totales calculados.

        Returns:
            Dict con items, promos, subtotal, discount, total, etc.
        """
        totals = self.discount_service.calculate_cart(cart)
        return {
            'items': [line.to_dict() for line in cart.lines],
            'items_count': len(cart.lines),
            'total_quantity': sum(
                line.quantity for line in cart.lines if isinstance(line, ProductLine)
            ),
            'total_weight': round(sum(
                line.weight for line in cart.lines if isinstance(line, ServiceLine)
            ), 2),
            'promos': [p.to_dict() for p in cart.applied_promos],
            'subtotal': totals['subtotal'],
            'discount': totals['discount'],
            'total': totals['total'],
            'discount_clamped': totals['discount_clamped'],
            'discount_breakdown': totals['breakdown']
        }

    # =========================================================================
    # INTERNOS
    # =========================================================================

    @staticmethod
    def _check_stock(item: CatalogItem, variation, amount: Amount) -> None:
        available = item.available_stock(variation)
        if available is not None and amount > available:
            raise OutOfStock(
                f'Stock insuficiente para {item.name}. Solicitado: {amount}, Disponible: {available}',
                item_id=item.id,
                requested=amount,
                available=available
            )

    @staticmethod
    def _set_amount(line: CartLine, amount: Amount) -> None:
        if isinstance(line, ServiceLine):
            line.weight = float(amount)
        else:
            line.quantity = int(amount)

    @staticmethod
    def _build_line(line_id: str, item: CatalogItem, variation, amount: Amount) -> CartLine:
        common = dict(
            id=line_id,
            catalog_item_id=item.id,
            name=item.name,
            sku=variation.sku if variation else item.sku,
            unit_price=variation.price if variation else item.price,
            variation_id=variation.id if variation else None,
            variation_name=variation.name if variation else None
        )
        if item.is_service:
            return ServiceLine(weight=amount, lead_time_days=item.effective_lead_time, **common)
        return ProductLine(quantity=amount, **common)
