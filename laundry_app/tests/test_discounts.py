import pytest

from laundry_app.models import PromoCode
from laundry_app.services import DiscountService


@pytest.fixture
def discounts():
    return DiscountService()


def pct(code, value, **kwargs):
    return PromoCode(id=code, code=code, discount_value=value, **kwargs)


def fixed(code, value):
    return PromoCode(id=code, code=code, discount_value=value, is_percentage=False)


def test_no_promos(discounts):
    result = discounts.calculate(35000, [])
    assert result['discount'] == 0
    assert result['total'] == 35000
    assert result['discount_clamped'] is False
    assert result['breakdown'] == []


def test_single_percentage(discounts):
    result = discounts.calculate(35000, [pct('DISKON10', 10)])
    assert result['discount'] == 3500
    assert result['total'] == 31500


def test_percentages_are_based_on_subtotal_and_stack(discounts):
    result = discounts.calculate(35000, [pct('DISKON10', 10), pct('DISKON20', 20)])
    assert result['discount'] == 10500
    assert result['total'] == 24500
    assert result['breakdown'] == [
        {'code': 'DISKON10', 'amount': 3500},
        {'code': 'DISKON20', 'amount': 7000},
    ]


def test_fixed_discount_larger_than_subtotal_is_clamped(discounts):
    result = discounts.calculate(5000, [fixed('POTONGAN10K', 10000)])
    assert result['discount'] == 10000
    assert result['total'] == 0
    assert result['discount_clamped'] is True


def test_max_discount_caps_percentage(discounts):
    promo = pct('MIN50K', 25, max_discount=20000)
    assert discounts.promo_discount(promo, 60000) == 15000
    assert discounts.promo_discount(promo, 100000) == 20000


def test_mixed_promos_on_cart(cart_service, cart, discounts):
    cart_service.add_item(cart, '1', quantity_or_weight=3)
    cart_service.add_item(cart, '3', quantity_or_weight=2)
    cart_service.apply_promo(cart, 'DISKON10')
    cart_service.apply_promo(cart, 'POTONGAN10K')

    result = discounts.calculate_cart(cart)

    assert result['subtotal'] == 65000
    assert result['discount'] == 16500
    assert result['total'] == 48500


def test_total_is_never_negative(discounts):
    promos = [pct('A', 60), pct('B', 60), fixed('C', 1)]
    result = discounts.calculate(1000, promos)
    assert result['total'] == 0
    assert result['discount_clamped'] is True
