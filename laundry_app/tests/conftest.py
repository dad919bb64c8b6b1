import os
import sys
import threading
from dataclasses import replace

import pytest

# ensure project root is on sys.path when running from tests/ folder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..')))

from laundry_app.models import (
    Cart,
    CatalogItem,
    Customer,
    ItemType,
    OrderStatus,
    PromoCode,
    PromoStatus,
    Variation,
)
from laundry_app.repositories.order_status_repository import DEFAULT_ORDER_STATUSES
from laundry_app.services import (
    CartService,
    DiscountService,
    InvoiceNumberGenerator,
    OrderService,
    OrderStatusService,
    PromoService,
)


# ---------------------------------------------------------------------------
# Fakes en memoria de los puertos (repositories/interfaces.py)
# ---------------------------------------------------------------------------

class FakeCatalog:
    def __init__(self, items):
        self.items = {i.id: i for i in items}

    def list_items(self):
        return list(self.items.values())

    def get_item(self, item_id):
        return self.items.get(str(item_id))

    def save_item(self, item):
        self.items[item.id] = item


class FakePromotions:
    def __init__(self, promos, lookup=None):
        self.promos = list(promos)
        self.lookups = 0
        self._lookup = lookup
        self._lock = threading.Lock()

    def find_by_code(self, code):
        self.lookups += 1
        if self._lookup is not None:
            return self._lookup(code)
        for p in self.promos:
            if p.matches(code):
                return p
        return None

    def list_promotions(self):
        return list(self.promos)

    def save_promotion(self, promo):
        self.promos = [p for p in self.promos if p.id != promo.id] + [promo]

    def increment_usage(self, code):
        return self._bump(code, 1)

    def decrement_usage(self, code):
        self._bump(code, -1)

    def _bump(self, code, step):
        with self._lock:
            for i, p in enumerate(self.promos):
                if p.matches(code):
                    if step > 0 and p.usage_exhausted:
                        return False
                    self.promos[i] = replace(p, usage_count=max(p.usage_count + step, 0))
                    return True
            return False


class FakeCustomers:
    def __init__(self, customers=()):
        self.customers = {c.id: c for c in customers}

    def search(self, term):
        term = term.lower()
        return [c for c in self.customers.values() if term in c.name.lower()]

    def get(self, customer_id):
        return self.customers.get(str(customer_id))

    def create(self, customer):
        customer.id = str(len(self.customers) + 1)
        self.customers[customer.id] = customer
        return customer

    def update(self, customer):
        self.customers[customer.id] = customer


class FakeStatuses:
    def __init__(self, statuses=None):
        self.statuses = statuses or [OrderStatus.from_dict(d) for d in DEFAULT_ORDER_STATUSES]

    def list_statuses(self):
        return list(self.statuses)


class FakeOrders:
    def __init__(self):
        self.orders = []

    def save_order(self, order):
        self.orders.append(order)

    def replace_order(self, order):
        for i, existing in enumerate(self.orders):
            if existing.invoice == order.invoice:
                self.orders[i] = order
                return True
        return False

    def get_by_invoice(self, invoice):
        for order in self.orders:
            if order.invoice == invoice:
                return order
        return None

    def list_orders(self):
        return list(reversed(self.orders))

    def last_invoice_number(self):
        return 0


# ---------------------------------------------------------------------------
# Datos de ejemplo
# ---------------------------------------------------------------------------

def make_catalog():
    return FakeCatalog([
        CatalogItem(id='1', name='Cuci Kiloan Express', sku='SRV-CKE', type=ItemType.SERVICE,
                    price=5000, lead_time_days=1),
        CatalogItem(id='2', name='Cuci Kiloan Reguler', sku='SRV-CKR', type=ItemType.SERVICE,
                    price=3000),
        CatalogItem(id='3', name='Deterjen Cair', sku='PRD-DC', type=ItemType.PRODUCT,
                    price=25000, stock=10),
        CatalogItem(id='4', name='Parfum Laundry', sku='PRD-PFM', type=ItemType.PRODUCT,
                    has_variations=True, variations=[
                        Variation(id='var4', name='Lavender', sku='PRD-PFM-V01', price=18000, stock=2),
                        Variation(id='var6', name='Vanilla', sku='PRD-PFM-V03', price=20000, stock=0),
                    ]),
        CatalogItem(id='5', name='Dry Clean Jas', sku='SRV-DCJ', type=ItemType.SERVICE,
                    price=15000, status='inactive'),
    ])


def make_promos():
    return [
        PromoCode(id='1', code='DISKON10', discount_value=10),
        PromoCode(id='2', code='DISKON20', discount_value=20),
        PromoCode(id='3', code='POTONGAN10K', discount_value=10000, is_percentage=False),
        PromoCode(id='4', code='MIN50K', discount_value=25, min_order=50000, max_discount=20000),
        PromoCode(id='5', code='MERDEKA45', discount_value=45, start_date='2024-08-17',
                  end_date='2024-08-31'),
        PromoCode(id='6', code='DRAFT15', discount_value=15, status=PromoStatus.DRAFT),
        PromoCode(id='7', code='LIMITED', discount_value=5, usage_count=3, max_usage=3),
    ]


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def promo_repo():
    return FakePromotions(make_promos())


@pytest.fixture
def promo_service(promo_repo):
    return PromoService(promo_repo, lookup_timeout=1.0)


@pytest.fixture
def cart_service(catalog, promo_service):
    return CartService(catalog, promo_service, DiscountService())


@pytest.fixture
def cart():
    return Cart()


@pytest.fixture
def order_repo():
    return FakeOrders()


@pytest.fixture
def customers():
    return FakeCustomers([Customer(id='1', name='Ahmad Santoso', phone='081234567890')])


@pytest.fixture
def order_service(order_repo):
    return OrderService(
        order_repo,
        OrderStatusService(FakeStatuses()),
        DiscountService(),
        InvoiceNumberGenerator()
    )


