# ==============================================================================
# INTERFACES DE REPOSITORIOS - Puertos de la caja
# ==============================================================================
#
# Los servicios de caja dependen de estos protocolos, NO de los
# repositorios JSON concretos. Esto permite:
#
# 1. INDEPENDENCIA DE ALMACENAMIENTO
#    - Cambiar JSON → base de datos o API remota solo requiere una nueva
#      implementación
#
# 2. TESTING
#    - Los tests usan fakes en memoria que cumplen estos protocolos,
#      sin archivos ni timers
#
# ==============================================================================

from typing import List, Optional, Protocol, runtime_checkable

from laundry_app.models import (
    CatalogItem,
    Customer,
    Order,
    OrderStatus,
    PromoCode,
)


@runtime_checkable
class ICatalogRepository(Protocol):
    """Proveedor de catálogo (productos y servicios)."""

    def list_items(self) -> List[CatalogItem]:
        """Todos los ítems del catálogo."""
        ...

    def get_item(self, item_id: str) -> Optional[CatalogItem]:
        """Ítem por ID o None."""
        ...

    def save_item(self, item: CatalogItem) -> None:
        """Crea o reemplaza un ítem (solo administración)."""
        ...


@runtime_checkable
class IPromotionRepository(Protocol):
    """Catálogo de promociones."""

    def find_by_code(self, code: str) -> Optional[PromoCode]:
        """Promo cuyo código coincide (sin distinguir mayúsculas) o None."""
        ...

    def list_promotions(self) -> List[PromoCode]:
        ...

    def save_promotion(self, promo: PromoCode) -> None:
        ...

    def increment_usage(self, code: str) -> bool:
        """Suma un uso de forma atómica si queda cupo (False si no existe o se agotó)."""
        ...

    def decrement_usage(self, code: str) -> None:
        ...


@runtime_checkable
class ICustomerRepository(Protocol):
    """Directorio de clientes."""

    def search(self, term: str) -> List[Customer]:
        ...

    def get(self, customer_id: str) -> Optional[Customer]:
        ...

    def create(self, customer: Customer) -> Customer:
        """Persiste un cliente nuevo y lo retorna con ID asignado."""
        ...

    def update(self, customer: Customer) -> None:
        ...


@runtime_checkable
class IOrderStatusRepository(Protocol):
    """Directorio de estados de pedido."""

    def list_statuses(self) -> List[OrderStatus]:
        ...


@runtime_checkable
class IOrderRepository(Protocol):
    """Colaborador de persistencia de pedidos."""

    def save_order(self, order: Order) -> None:
        ...

    def replace_order(self, order: Order) -> bool:
        ...

    def get_by_invoice(self, invoice: str) -> Optional[Order]:
        ...

    def list_orders(self) -> List[Order]:
        """Pedidos, más recientes primero."""
        ...

    def last_invoice_number(self) -> int:
        """Mayor número de factura persistido (0 si no hay)."""
        ...
