# ==============================================================================
# ERRORES DE NEGOCIO DE LA CAJA
# ==============================================================================
# Todos los errores son recuperables: los servicios los lanzan y la capa
# HTTP los traduce a {"ok": False, "error": ..., "code": ...}.
# El atributo code es estable (nombre de la clase) para que el frontend
# pueda distinguir "código inválido" de "servicio caído".
# ==============================================================================

from typing import Any, Dict, Optional


class CashierError(Exception):
    """Base de todos los errores de caja."""

    message = 'Error en la operación de caja'
    http_status = 400

    def __init__(self, message: Optional[str] = None, **details: Any):
        self.message = message or self.message
        self.details = details
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        d = {'ok': False, 'error': self.message, 'code': self.code}
        if self.details:
            d['details'] = self.details
        return d


# ---- Carrito -----------------------------------------------------------------

class InvalidQuantity(CashierError):
    message = 'Cantidad o peso inválido'


class LineNotFound(CashierError):
    message = 'La línea no existe en el carrito'
    http_status = 404


class CatalogItemNotFound(CashierError):
    message = 'Producto o servicio no encontrado'
    http_status = 404


class VariationRequired(CashierError):
    message = 'Debe seleccionar una variación válida'


class ItemUnavailable(CashierError):
    message = 'El producto o servicio no está activo'


class OutOfStock(CashierError):
    message = 'Stock insuficiente'


# ---- Promociones -------------------------------------------------------------

class DuplicateCode(CashierError):
    message = 'La promoción ya fue aplicada'


class UnknownCode(CashierError):
    message = 'Código de promoción no válido'


class PromoNotApplicable(CashierError):
    """La promo existe pero no puede usarse (vigencia, mínimo, usos)."""
    message = 'La promoción no aplica a este pedido'

    def __init__(self, reason: str, message: Optional[str] = None, **details: Any):
        self.reason = reason
        super().__init__(message, reason=reason, **details)


class PromoLookupUnavailable(CashierError):
    message = 'El servicio de promociones no está disponible, intente de nuevo'
    http_status = 503


# ---- Pedidos -----------------------------------------------------------------

class EmptyCart(CashierError):
    message = 'El carrito está vacío'


class MissingCustomer(CashierError):
    message = 'Seleccione un cliente o marque "compra rápida"'


class InvalidCustomer(CashierError):
    message = 'Datos de cliente inválidos'


class InvalidOrderStatus(CashierError):
    message = 'Estado de pedido inválido'


class InvalidPaymentOption(CashierError):
    message = 'Método o estado de pago inválido'


class OrderNotFound(CashierError):
    message = 'Pedido no encontrado'
    http_status = 404


class InvalidLookupTerm(CashierError):
    message = 'El número de factura debe tener al menos 5 caracteres'


class InvalidEstimate(CashierError):
    message = 'Datos de estimación inválidos'
