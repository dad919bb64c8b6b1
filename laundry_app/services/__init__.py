# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la caja.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas (controllers) solo llaman a servicios
# 4. Los servicios dependen de interfaces, no del almacenamiento
# 5. Los errores de negocio son CashierError (services/errors.py)
#
# ESTRUCTURA:
# ├── cart_service.py          → Líneas del carrito, promos aplicadas
# ├── promo_service.py         → Validación de códigos, promociones
# ├── discount_service.py      → Cálculo de descuento y total
# ├── order_service.py         → Pedidos (crear, confirmar, estados, pago)
# ├── invoice_service.py       → Números de factura únicos
# ├── catalog_service.py       → Productos y servicios
# ├── customer_service.py      → Clientes
# ├── order_status_service.py  → Estados de pedido
# ├── estimation_service.py    → Estimación pública de precio
# ├── audit_service.py         → Logs de actividad
# └── user_service.py          → Usuarios, autenticación
# ==============================================================================

from laundry_app.services.errors import CashierError
from laundry_app.services.audit_service import AuditService
from laundry_app.services.user_service import UserService
from laundry_app.services.catalog_service import CatalogService
from laundry_app.services.customer_service import CustomerService
from laundry_app.services.order_status_service import OrderStatusService
from laundry_app.services.discount_service import DiscountService
from laundry_app.services.promo_service import PromoService
from laundry_app.services.cart_service import CartService
from laundry_app.services.invoice_service import InvoiceNumberGenerator
from laundry_app.services.order_service import OrderService
from laundry_app.services.estimation_service import EstimationService

__all__ = [
    'CashierError',
    'AuditService',
    'UserService',
    'CatalogService',
    'CustomerService',
    'OrderStatusService',
    'DiscountService',
    'PromoService',
    'CartService',
    'InvoiceNumberGenerator',
    'OrderService',
    'EstimationService',
]
