# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto único donde se crean repositorios y servicios de la caja.
#   - Las rutas piden servicios al contenedor, nunca crean repositorios
#   - Los tests crean un contenedor apuntando a una carpeta temporal
#
# CAMBIO DE ALMACENAMIENTO:
# Los servicios dependen de los protocolos de repositories/interfaces.py.
# Para pasar de JSON a una base de datos basta con implementar esos
# protocolos y cambiar las instancias creadas aquí.
# ==============================================================================

import os
from typing import Optional

from laundry_app import config

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia (JSON)
# ═══════════════════════════════════════════════════════════════════════════════
from laundry_app.repositories import (
    CatalogRepository,
    PromotionRepository,
    CustomerRepository,
    OrderStatusRepository,
    OrderRepository,
    UserRepository,
    AuditRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from laundry_app.services import (
    AuditService,
    CartService,
    CatalogService,
    CustomerService,
    DiscountService,
    EstimationService,
    InvoiceNumberGenerator,
    OrderService,
    OrderStatusService,
    PromoService,
    UserService,
)


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Implementa el patrón Singleton para asegurar una única instancia
    de cada repositorio y servicio (en particular un único generador
    de facturas por proceso).

    Uso:
        container = AppContainer(base_path='/path/to/data')
        cart_service = container.cart_service
        order_service = container.order_service
    """

    _instance: Optional['AppContainer'] = None

    def __new__(cls, base_path: str = None, promo_lookup_timeout: float = None):
        """Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, base_path: str = None, promo_lookup_timeout: float = None):
        """
        Args:
            base_path: Carpeta donde están los JSON (default: config.DATA_DIR)
            promo_lookup_timeout: Timeout de búsqueda de promos en segundos
        """
        if self._initialized:
            return

        self._base_path = base_path or config.DATA_DIR
        self._promo_lookup_timeout = (
            promo_lookup_timeout if promo_lookup_timeout is not None
            else config.PROMO_LOOKUP_TIMEOUT
        )
        self.reset()
        self._initialized = True

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def catalog_repo(self) -> CatalogRepository:
        if self._catalog_repo is None:
            self._catalog_repo = CatalogRepository(self._base_path)
        return self._catalog_repo

    @property
    def promotion_repo(self) -> PromotionRepository:
        if self._promotion_repo is None:
            self._promotion_repo = PromotionRepository(self._base_path)
        return self._promotion_repo

    @property
    def customer_repo(self) -> CustomerRepository:
        if self._customer_repo is None:
            self._customer_repo = CustomerRepository(self._base_path)
        return self._customer_repo

    @property
    def order_status_repo(self) -> OrderStatusRepository:
        if self._order_status_repo is None:
            self._order_status_repo = OrderStatusRepository(self._base_path)
        return self._order_status_repo

    @property
    def order_repo(self) -> OrderRepository:
        if self._order_repo is None:
            self._order_repo = OrderRepository(self._base_path)
        return self._order_repo

    @property
    def user_repo(self) -> UserRepository:
        if self._user_repo is None:
            self._user_repo = UserRepository(self._base_path)
        return self._user_repo

    @property
    def audit_repo(self) -> AuditRepository:
        if self._audit_repo is None:
            self._audit_repo = AuditRepository(self._base_path)
        return self._audit_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def audit_service(self) -> AuditService:
        if self._audit_service is None:
            self._audit_service = AuditService(self.audit_repo)
        return self._audit_service

    @property
    def user_service(self) -> UserService:
        if self._user_service is None:
            self._user_service = UserService(self.user_repo, self.audit_service)
        return self._user_service

    @property
    def catalog_service(self) -> CatalogService:
        if self._catalog_service is None:
            self._catalog_service = CatalogService(self.catalog_repo)
        return self._catalog_service

    @property
    def customer_service(self) -> CustomerService:
        if self._customer_service is None:
            self._customer_service = CustomerService(self.customer_repo, self.audit_service)
        return self._customer_service

    @property
    def order_status_service(self) -> OrderStatusService:
        if self._order_status_service is None:
            self._order_status_service = OrderStatusService(self.order_status_repo)
        return self._order_status_service

    @property
    def promo_service(self) -> PromoService:
        if self._promo_service is None:
            self._promo_service = PromoService(
                self.promotion_repo,
                self._promo_lookup_timeout,
                self.audit_service
            )
        return self._promo_service

    @property
    def discount_service(self) -> DiscountService:
        if self._discount_service is None:
            self._discount_service = DiscountService()
        return self._discount_service

    @property
    def cart_service(self) -> CartService:
        if self._cart_service is None:
            self._cart_service = CartService(
                self.catalog_repo,
                self.promo_service,
                self.discount_service
            )
        return self._cart_service

    @property
    def invoice_generator(self) -> InvoiceNumberGenerator:
        """Generador de facturas, sembrado con la mayor factura persistida."""
        if self._invoice_generator is None:
            self._invoice_generator = InvoiceNumberGenerator(
                self.order_repo.last_invoice_number()
            )
        return self._invoice_generator

    @property
    def order_service(self) -> OrderService:
        if self._order_service is None:
            self._order_service = OrderService(
                self.order_repo,
                self.order_status_service,
                self.discount_service,
                self.invoice_generator,
                promo_service=self.promo_service,
                customer_service=self.customer_service,
                audit_service=self.audit_service
            )
        return self._order_service

    @property
    def estimation_service(self) -> EstimationService:
        if self._estimation_service is None:
            self._estimation_service = EstimationService()
        return self._estimation_service

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def seed_demo_data(self, admin_user: str, admin_password: str) -> None:
        """
        Siembra catálogo, promociones y admin de demostración
        (solo en colecciones vacías).
        """
        from laundry_app.demo_data import DEMO_CATALOG, DEMO_PROMOTIONS

        if not self.catalog_repo.get_all():
            self.catalog_repo.save_all([dict(i) for i in DEMO_CATALOG])
        if not self.promotion_repo.get_all():
            self.promotion_repo.save_all([dict(p) for p in DEMO_PROMOTIONS])
        if self.user_service.ensure_default_admin(admin_user, admin_password):
            print(f"👤 Usuario demo creado: {admin_user}")

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        Útil para testing o para recargar datos.
        """
        self._catalog_repo = None
        self._promotion_repo = None
        self._customer_repo = None
        self._order_status_repo = None
        self._order_repo = None
        self._user_repo = None
        self._audit_repo = None

        self._audit_service = None
        self._user_service = None
        self._catalog_service = None
        self._customer_service = None
        self._order_status_service = None
        self._promo_service = None
        self._discount_service = None
        self._cart_service = None
        self._invoice_generator = None
        self._order_service = None
        self._estimation_service = None

    @classmethod
    def get_instance(cls, base_path: str = None, promo_lookup_timeout: float = None) -> 'AppContainer':
        """
        Obtiene la instancia singleton del contenedor.

        Args:
            base_path: Carpeta de datos (solo se usa en la primera llamada)
        """
        if cls._instance is None:
            return cls(base_path, promo_lookup_timeout)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Elimina la instancia singleton (útil para tests)."""
        if cls._instance is not None:
            cls._instance.reset()
            cls._instance = None


def get_container(base_path: str = None, promo_lookup_timeout: float = None) -> AppContainer:
    """Contenedor de dependencias global."""
    return AppContainer.get_instance(base_path, promo_lookup_timeout)
