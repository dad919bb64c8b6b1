# ==============================================================================
# SERVICIO DE DESCUENTOS
# ==============================================================================
# Cálculo puro del total a pagar a partir del subtotal y las promociones
# aplicadas. Las promociones se suman (sin precedencia ni exclusión) y el
# total nunca es negativo.
# ==============================================================================

from typing import Any, Dict, Iterable

from laundry_app.models import Cart, PromoCode


class DiscountService:
    """Motor de descuentos. Sin estado y sin modos de fallo propios."""

    @staticmethod
    def promo_discount(promo: PromoCode, subtotal: float) -> float:
        """
        Descuento de una sola promoción.

        Porcentaje: sobre el subtotal antes de descuentos, con tope
        max_discount si lo tiene. Fijo: el monto tal cual.
        """
        if promo.is_percentage:
            amount = subtotal * promo.discount_value / 100
            if promo.max_discount is not None:
                amount = min(amount, promo.max_discount)
        else:
            amount = promo.discount_value
        return round(max(amount, 0.0), 2)

    def calculate(self, subtotal: float, promos: Iterable[PromoCode]) -> Dict[str, Any]:
        """
        Calcula descuento y total.

        Returns:
            Dict con subtotal, discount, total, discount_clamped y el
            desglose por promoción
        """
        breakdown = [
            {'code': p.code, 'amount': self.promo_discount(p, subtotal)}
            for p in promos
        ]
        discount = round(sum(b['amount'] for b in breakdown), 2)
        total = round(max(0.0, subtotal - discount), 2)
        return {
            'subtotal': round(subtotal, 2),
            'discount': discount,
            'total': total,
            # El descuento bruto supera el subtotal: avisar al operador
            'discount_clamped': discount > subtotal,
            'breakdown': breakdown
        }

    def calculate_cart(self, cart: Cart) -> Dict[str, Any]:
        return self.calculate(cart.subtotal, cart.applied_promos)
