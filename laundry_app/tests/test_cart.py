import pytest

from laundry_app.models import ProductLine, ServiceLine
from laundry_app.services.errors import (
    CatalogItemNotFound,
    InvalidQuantity,
    ItemUnavailable,
    LineNotFound,
    OutOfStock,
    VariationRequired,
)


def test_add_service_and_product_lines(cart_service, cart, catalog):
    service = cart_service.add_line(cart, catalog.get_item('1'), quantity_or_weight=2)
    product = cart_service.add_item(cart, '3', quantity_or_weight=1)

    assert isinstance(service, ServiceLine)
    assert service.id == '1'
    assert service.weight == 2
    assert service.lead_time_days == 1
    assert isinstance(product, ProductLine)
    assert product.quantity == 1
    assert cart.subtotal == 35000
    assert cart_service.subtotal(cart) == sum(l.subtotal for l in cart.lines)


def test_variation_line_uses_variation_price_and_id(cart_service, cart):
    line = cart_service.add_item(cart, '4', variation_id='var4', quantity_or_weight=2)
    assert line.id == '4_var4'
    assert line.unit_price == 18000
    assert line.sku == 'PRD-PFM-V01'
    assert line.variation_name == 'Lavender'
    assert line.subtotal == 36000


def test_adding_same_item_merges_into_existing_line(cart_service, cart):
    cart_service.add_item(cart, '1', quantity_or_weight=1.5)
    cart_service.add_item(cart, '1', quantity_or_weight=1)
    assert len(cart.lines) == 1
    assert cart.lines[0].weight == 2.5
    assert cart.subtotal == 12500


def test_variation_required(cart_service, cart):
    with pytest.raises(VariationRequired):
        cart_service.add_item(cart, '4')
    with pytest.raises(VariationRequired):
        cart_service.add_item(cart, '4', variation_id='nope')
    assert cart.is_empty


def test_out_of_stock_products(cart_service, cart):
    with pytest.raises(OutOfStock):
        cart_service.add_item(cart, '4', variation_id='var6')
    with pytest.raises(OutOfStock):
        cart_service.add_item(cart, '3', quantity_or_weight=11)

    cart_service.add_item(cart, '4', variation_id='var4', quantity_or_weight=2)
    with pytest.raises(OutOfStock):
        cart_service.add_item(cart, '4', variation_id='var4', quantity_or_weight=1)
    assert cart.get_line('4_var4').quantity == 2


def test_services_do_not_track_stock(cart_service, cart):
    line = cart_service.add_item(cart, '2', quantity_or_weight=40)
    assert line.weight == 40


def test_inactive_and_unknown_items(cart_service, cart):
    with pytest.raises(ItemUnavailable):
        cart_service.add_item(cart, '5')
    with pytest.raises(CatalogItemNotFound):
        cart_service.add_item(cart, '999')


@pytest.mark.parametrize('item_id,amount', [
    ('3', 0),
    ('3', -1),
    ('3', 1.5),
    ('3', True),
    ('3', 'abc'),
    ('1', 0.25),
    ('1', 0),
    ('1', 1.2),
    ('1', float('inf')),
])
def test_invalid_amounts_are_rejected(cart_service, cart, item_id, amount):
    with pytest.raises(InvalidQuantity):
        cart_service.add_item(cart, item_id, quantity_or_weight=amount)
    assert cart.is_empty


def test_update_line_recomputes_subtotal(cart_service, cart):
    cart_service.add_item(cart, '1', quantity_or_weight=2)
    cart_service.add_item(cart, '3', quantity_or_weight=1)

    cart_service.update_line(cart, '1', 3.5)
    cart_service.update_line(cart, '3', '2')

    assert cart.get_line('1').subtotal == 17500
    assert cart.get_line('3').subtotal == 50000
    assert cart.subtotal == 67500


def test_update_line_to_zero_keeps_previous_quantity(cart_service, cart):
    cart_service.add_item(cart, '3', quantity_or_weight=2)
    with pytest.raises(InvalidQuantity):
        cart_service.update_line(cart, '3', 0)
    line = cart.get_line('3')
    assert line.quantity == 2
    assert line.subtotal == 50000


def test_update_line_checks_stock_and_existence(cart_service, cart):
    cart_service.add_item(cart, '3', quantity_or_weight=1)
    with pytest.raises(OutOfStock):
        cart_service.update_line(cart, '3', 20)
    with pytest.raises(LineNotFound):
        cart_service.update_line(cart, 'missing', 1)


def test_remove_line_is_idempotent(cart_service, cart):
    cart_service.add_item(cart, '1', quantity_or_weight=1)
    assert cart_service.remove_line(cart, '1') is True
    assert cart_service.remove_line(cart, '1') is False
    assert cart.subtotal == 0


def test_clear_empties_lines_and_promos(cart_service, cart):
    cart_service.add_item(cart, '1', quantity_or_weight=2)
    cart_service.apply_promo(cart, 'DISKON10')

    cart_service.clear(cart)

    assert cart.lines == []
    assert cart.applied_promos == []
    assert cart_service.subtotal(cart) == 0


def test_subtotal_matches_lines_through_mutations(cart_service, cart):
    steps = [
        lambda: cart_service.add_item(cart, '1', quantity_or_weight=2),
        lambda: cart_service.add_item(cart, '3', quantity_or_weight=3),
        lambda: cart_service.update_line(cart, '1', 0.5),
        lambda: cart_service.add_item(cart, '4', variation_id='var4'),
        lambda: cart_service.remove_line(cart, '3'),
        lambda: cart_service.remove_line(cart, 'ghost'),
    ]
    for step in steps:
        step()
        assert cart.subtotal == pytest.approx(sum(l.subtotal for l in cart.lines))


def test_summary_and_session_round_trip(cart_service, cart):
    from laundry_app.models import Cart

    cart_service.add_item(cart, '1', quantity_or_weight=2)
    cart_service.add_item(cart, '4', variation_id='var4', quantity_or_weight=1)
    cart_service.apply_promo(cart, 'potongan10k')

    summary = cart_service.summary(cart)
    assert summary['items_count'] == 2
    assert summary['total_weight'] == 2
    assert summary['total_quantity'] == 1
    assert summary['subtotal'] == 28000
    assert summary['discount'] == 10000
    assert summary['total'] == 18000

    restored = Cart.from_dict(cart.to_dict())
    assert isinstance(restored.get_line('1'), ServiceLine)
    assert isinstance(restored.get_line('4_var4'), ProductLine)
    assert restored.subtotal == cart.subtotal
    assert [p.code for p in restored.applied_promos] == ['POTONGAN10K']


def test_remove_promo_by_code_or_id(cart_service, cart):
    cart_service.add_item(cart, '1', quantity_or_weight=2)
    cart_service.apply_promo(cart, 'DISKON10')
    cart_service.apply_promo(cart, 'DISKON20')

    assert cart_service.remove_promo(cart, 'diskon10') is True
    assert cart_service.remove_promo(cart, '2') is True
    assert cart_service.remove_promo(cart, 'DISKON10') is False
    assert cart.applied_promos == []


def test_update_line_drops_promo_below_min_order(cart_service, cart):
    cart_service.add_item(cart, '3', quantity_or_weight=2)
    cart_service.apply_promo(cart, 'MIN50K')
    cart_service.apply_promo(cart, 'DISKON10')
    assert cart_service.summary(cart)['discount'] == 17500

    cart_service.update_line(cart, '3', 1)

    assert [p.code for p in cart.applied_promos] == ['DISKON10']
    summary = cart_service.summary(cart)
    assert summary['subtotal'] == 25000
    assert summary['discount'] == 2500


def test_remove_line_drops_promo_below_min_order(cart_service, cart):
    cart_service.add_item(cart, '3', quantity_or_weight=1)
    cart_service.add_item(cart, '1', quantity_or_weight=5)
    cart_service.apply_promo(cart, 'MIN50K')

    cart_service.remove_line(cart, '1')

    assert cart.applied_promos == []
    assert cart_service.summary(cart)['discount'] == 0


def test_promos_that_still_apply_are_kept(cart_service, cart):
    cart_service.add_item(cart, '3', quantity_or_weight=3)
    cart_service.apply_promo(cart, 'MIN50K')

    cart_service.update_line(cart, '3', 2)

    assert [p.code for p in cart.applied_promos] == ['MIN50K']
    assert cart_service.drop_inapplicable_promos(cart) == []
