import pytest

from laundry_app.services import EstimationService
from laundry_app.services.errors import InvalidEstimate


@pytest.fixture
def estimation():
    return EstimationService()


def test_estimate_by_weight_standard(estimation):
    result = estimation.estimate_by_weight(2.5)
    assert result['service'] == 'Standar'
    assert result['exact_price'] == 7500
    assert result['lead_time_days'] == 3


def test_estimate_by_weight_express(estimation):
    result = estimation.estimate_by_weight('4', service='Express')
    assert result['exact_weight'] == 4
    assert result['exact_price'] == 20000
    assert result['lead_time_days'] == 1


def test_estimate_by_items(estimation):
    result = estimation.estimate_by_items({'kaos': 5, 'Celana Panjang': 2}, service='standar')
    assert result['pieces'] == 7
    assert result['weight_range'] == [1.35, 1.8]
    assert result['price_range'] == [4050, 5400]


@pytest.mark.parametrize('weight', [0, -1, 'abc', None, 'nan', 'inf', '-inf'])
def test_invalid_weight(estimation, weight):
    with pytest.raises(InvalidEstimate):
        estimation.estimate_by_weight(weight)


@pytest.mark.parametrize('counts', [
    {},
    ['Kaos'],
    {'Kaos': 0},
    {'Kaos': -2},
    {'Kaos': 'dua'},
    {'Topi': 1},
])
def test_invalid_items(estimation, counts):
    with pytest.raises(InvalidEstimate):
        estimation.estimate_by_items(counts)


def test_unknown_service(estimation):
    with pytest.raises(InvalidEstimate):
        estimation.estimate_by_weight(1, service='kilat')
