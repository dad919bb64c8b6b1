# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (actualmente JSON).
# Los servicios dependen de las interfaces (puertos), no de estas clases.
#
# ESTRUCTURA:
# ├── interfaces.py               → Protocolos (puertos de la caja)
# ├── base.py                     → Clases base JSON (DictRepository, ListRepository)
# ├── catalog_repository.py       → catalog.json
# ├── promotion_repository.py     → promotions.json
# ├── customer_repository.py      → customers.json
# ├── order_status_repository.py  → order_statuses.json
# ├── order_repository.py         → orders.json
# ├── audit_repository.py         → audit.json
# └── user_repository.py          → users.json
# ==============================================================================

# Interfaces
from .interfaces import (
    ICatalogRepository,
    IPromotionRepository,
    ICustomerRepository,
    IOrderStatusRepository,
    IOrderRepository,
)

# Implementaciones concretas (JSON)
from .base import BaseRepository, DictRepository, ListRepository
from .catalog_repository import CatalogRepository
from .promotion_repository import PromotionRepository
from .customer_repository import CustomerRepository
from .order_status_repository import OrderStatusRepository, DEFAULT_ORDER_STATUSES
from .order_repository import OrderRepository
from .audit_repository import AuditRepository
from .user_repository import UserRepository

__all__ = [
    # Interfaces
    'ICatalogRepository',
    'IPromotionRepository',
    'ICustomerRepository',
    'IOrderStatusRepository',
    'IOrderRepository',

    # Clases base
    'BaseRepository',
    'DictRepository',
    'ListRepository',

    # Implementaciones JSON
    'CatalogRepository',
    'PromotionRepository',
    'CustomerRepository',
    'OrderStatusRepository',
    'DEFAULT_ORDER_STATUSES',
    'OrderRepository',
    'AuditRepository',
    'UserRepository',
]
