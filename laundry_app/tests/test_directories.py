import json

import pytest

from conftest import FakeStatuses
from laundry_app.models import ItemType, Order, OrderStatus
from laundry_app.repositories import (
    CatalogRepository,
    CustomerRepository,
    OrderRepository,
    OrderStatusRepository,
)
from laundry_app.services import (
    CatalogService,
    CustomerService,
    DiscountService,
    InvoiceNumberGenerator,
    OrderService,
    OrderStatusService,
)
from laundry_app.services.errors import CatalogItemNotFound, InvalidCustomer, InvalidOrderStatus


@pytest.fixture
def catalog(tmp_path):
    service = CatalogService(CatalogRepository(str(tmp_path)))
    service.create_item({'name': 'Cuci Kiloan Express', 'sku': 'SRV-CKE', 'type': 'service',
                         'price': 5000, 'leadTimeDays': 1})
    service.create_item({'name': 'Parfum Laundry', 'sku': 'PRD-PFM', 'type': 'product',
                         'hasVariations': True, 'variations': [
                             {'id': 'var4', 'name': 'Lavender', 'sku': 'PRD-PFM-V01',
                              'price': 18000, 'stock': 12}]})
    return service


def test_catalog_create_and_list(catalog):
    items = catalog.list_items()
    assert [i.id for i in items] == ['1', '2']
    assert catalog.get_item('1').lead_time_days == 1
    assert catalog.get_item('2').get_variation('var4').price == 18000

    assert [i.name for i in catalog.list_items(item_type='product')] == ['Parfum Laundry']
    assert [i.id for i in catalog.list_items(search='srv-')] == ['1']


def test_catalog_rejects_invalid_items(catalog):
    assert catalog.create_item({'name': 'ab', 'sku': 'X'})['ok'] is False
    assert catalog.create_item({'name': 'Sabun', 'sku': ''})['ok'] is False
    assert catalog.create_item({'name': 'Sabun', 'sku': 'PRD-PFM-V01'})['ok'] is False
    assert catalog.create_item({'name': 'Sabun', 'sku': 'S1', 'type': 'gadget'})['ok'] is False
    assert catalog.create_item({'name': 'Sabun', 'sku': 'S2', 'hasVariations': True})['ok'] is False
    assert catalog.create_item({'name': 'Sabun', 'sku': 'S3', 'price': -1})['ok'] is False
    assert len(catalog.list_items()) == 2


def test_catalog_unknown_item(catalog):
    with pytest.raises(CatalogItemNotFound):
        catalog.get_item('404')


def test_customers(tmp_path):
    service = CustomerService(CustomerRepository(str(tmp_path)))

    first = service.create_customer('  Ahmad Santoso ', '0812-3456-7890')
    second = service.create_customer('Siti Nurhaliza')

    assert (first.id, second.id) == ('1', '2')
    assert first.name == 'Ahmad Santoso'
    assert second.phone is None
    assert [c.id for c in service.search_customers('siti')] == ['2']
    assert [c.id for c in service.search_customers('3456')] == ['1']
    assert len(service.search_customers('')) == 2

    service.record_order('1', 17500, '2025-01-20')
    stored = service.get_customer('1')
    assert stored.total_orders == 1
    assert stored.total_spent == 17500
    assert stored.last_order_date == '2025-01-20'


@pytest.mark.parametrize('name,phone', [('', None), ('   ', '0812'), ('Budi', '08ab12')])
def test_invalid_customers(tmp_path, name, phone):
    service = CustomerService(CustomerRepository(str(tmp_path)))
    with pytest.raises(InvalidCustomer):
        service.create_customer(name, phone)


def test_default_statuses_are_seeded(tmp_path):
    service = OrderStatusService(OrderStatusRepository(str(tmp_path)))

    names = [s.name for s in service.list_active_statuses()]
    assert names[0] == 'Pesanan Diterima'
    assert names[-1] == 'Dibatalkan'
    assert service.default_status().id == '1'
    assert service.get_status('5').name == 'Siap Diambil'

    with open(tmp_path / 'order_statuses.json', encoding='utf-8') as f:
        assert len(json.load(f)) == 7


def test_no_active_status(tmp_path):
    repo = OrderStatusRepository(str(tmp_path))
    repo.save_all([OrderStatus(id='1', name='Off', order=1, is_active=False).to_dict()])
    service = OrderStatusService(repo)
    with pytest.raises(InvalidOrderStatus):
        service.default_status()
    with pytest.raises(InvalidOrderStatus):
        service.resolve_active('1')


def test_order_repository_round_trip(tmp_path, cart_service, cart):
    repo = OrderRepository(str(tmp_path))
    service = OrderService(repo, OrderStatusService(FakeStatuses()), DiscountService(),
                           InvoiceNumberGenerator(last_number=repo.last_invoice_number()))
    cart_service.add_item(cart, '1', quantity_or_weight=1.5)
    cart_service.add_item(cart, '4', variation_id='var4', quantity_or_weight=1)
    cart_service.apply_promo(cart, 'DISKON10')

    order = service.submit_order(cart, None, 'cash', 'paid', quick_purchase=True)
    loaded = repo.get_by_invoice(order.invoice)

    assert isinstance(loaded, Order)
    assert loaded.lines[0].type == ItemType.SERVICE
    assert loaded.lines[1].quantity == 1
    assert loaded.total == order.total
    assert loaded.promos[0].code == 'DISKON10'
    assert repo.last_invoice_number() == int(order.invoice[3:])
