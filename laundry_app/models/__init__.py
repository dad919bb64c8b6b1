# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
# Las entidades no conocen la persistencia (JSON ahora) ni Flask.
# ==============================================================================

from .entities import (
    # Usuarios
    User,
    UserRole,

    # Catálogo
    CatalogItem,
    Variation,
    ItemType,

    # Promociones
    PromoCode,
    PromoStatus,

    # Carrito
    Cart,
    CartLine,
    ProductLine,
    ServiceLine,
    DEFAULT_LEAD_TIME_DAYS,
    WEIGHT_STEP,

    # Clientes
    Customer,
    CustomerRef,

    # Pedidos
    Order,
    OrderStatus,
    OrderProgress,
    PaymentMethod,
    PaymentStatus,

    # Auditoría
    AuditLog,
    AuditType,
)

__all__ = [
    # Usuarios
    'User',
    'UserRole',

    # Catálogo
    'CatalogItem',
    'Variation',
    'ItemType',

    # Promociones
    'PromoCode',
    'PromoStatus',

    # Carrito
    'Cart',
    'CartLine',
    'ProductLine',
    'ServiceLine',
    'DEFAULT_LEAD_TIME_DAYS',
    'WEIGHT_STEP',

    # Clientes
    'Customer',
    'CustomerRef',

    # Pedidos
    'Order',
    'OrderStatus',
    'OrderProgress',
    'PaymentMethod',
    'PaymentStatus',

    # Auditoría
    'AuditLog',
    'AuditType',
]
