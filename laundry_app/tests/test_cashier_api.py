import pytest

from laundry_app.app_container import AppContainer, get_container
from laundry_app.main import app


@pytest.fixture
def container(tmp_path):
    AppContainer.reset_instance()
    c = get_container(str(tmp_path), promo_lookup_timeout=1.0)
    c.seed_demo_data('admin', '1234')
    c.user_service.create_user('kasir1', 'kasir', 'kasir')
    yield c
    AppContainer.reset_instance()


@pytest.fixture
def client(container):
    app.config['TESTING'] = True
    with app.test_client() as c:
        yield c


def login(client, username='admin', password='1234'):
    r = client.post('/api/auth/login', json={'username': username, 'password': password})
    assert r.status_code == 200
    return r.get_json()['csrf_token']


def post(client, url, token, **body):
    return client.post(url, json=body, headers={'X-CSRF-Token': token})


def test_requires_login(client):
    assert client.get('/api/cart').status_code == 401
    assert client.post('/api/cart/items', json={'item_id': '2'}).status_code == 401


def test_bad_credentials(client):
    r = client.post('/api/auth/login', json={'username': 'admin', 'password': 'nope'})
    assert r.status_code == 401
    assert r.get_json()['ok'] is False


def test_csrf_is_required(client):
    login(client)
    r = client.post('/api/cart/items', json={'item_id': '2'})
    assert r.status_code == 403
    r = post(client, '/api/cart/items', 'not-the-token', item_id='2')
    assert r.status_code == 403


def test_cart_flow_and_checkout(client, container):
    token = login(client)

    r = post(client, '/api/cart/items', token, item_id='2', weight=3)
    assert r.status_code == 200
    assert r.get_json()['carrito']['subtotal'] == 15000

    r = post(client, '/api/cart/items', token, item_id='5', variation_id='var4', quantity=1)
    assert r.get_json()['line']['id'] == '5_var4'

    r = post(client, '/api/cart/promos', token, code='diskon10')
    cart = r.get_json()['carrito']
    assert cart['subtotal'] == 33000
    assert cart['discount'] == 3300
    assert cart['total'] == 29700

    r = post(client, '/api/cart/checkout', token,
             customer={'name': 'Budi Pratama', 'phone': '081298765432'},
             payment_method='cash', payment_status='paid')
    assert r.status_code == 201
    order = r.get_json()['order']
    assert order['invoice'].startswith('INV')
    assert order['total'] == 29700
    assert order['customer']['name'] == 'Budi Pratama'
    assert order['status'] == '1'

    assert client.get('/api/cart').get_json()['carrito']['items'] == []
    assert container.order_repo.get_by_invoice(order['invoice']) is not None
    assert container.promotion_repo.find_by_code('DISKON10').usage_count == 1


def test_business_errors_map_to_json(client):
    token = login(client, 'kasir1', 'kasir')

    r = post(client, '/api/cart/items', token, item_id='2', weight=0.3)
    assert r.status_code == 400
    assert r.get_json()['code'] == 'InvalidQuantity'

    r = post(client, '/api/cart/items', token, item_id='999')
    assert r.status_code == 404
    assert r.get_json()['code'] == 'CatalogItemNotFound'

    r = post(client, '/api/cart/items', token, item_id='5', variation_id='var6')
    assert r.get_json()['code'] == 'OutOfStock'

    r = post(client, '/api/cart/checkout', token, quick_purchase=True)
    assert r.status_code == 400
    assert r.get_json()['code'] == 'EmptyCart'

    post(client, '/api/cart/items', token, item_id='1', weight=1)
    r = post(client, '/api/cart/checkout', token, payment_method='cash')
    assert r.get_json()['code'] == 'MissingCustomer'

    r = post(client, '/api/cart/promos', token, code='MERDEKA45')
    body = r.get_json()
    assert body['code'] == 'PromoNotApplicable'
    assert body['details']['reason'] == 'expired'


def test_promo_lookup_failure_is_503(client, container, monkeypatch):
    token = login(client)
    post(client, '/api/cart/items', token, item_id='1', weight=2)

    def broken(code):
        raise OSError('promotions.json unavailable')

    monkeypatch.setattr(container.promotion_repo, 'find_by_code', broken)
    r = post(client, '/api/cart/promos', token, code='DISKON10')

    assert r.status_code == 503
    assert r.get_json()['code'] == 'PromoLookupUnavailable'
    cart = client.get('/api/cart').get_json()['carrito']
    assert cart['promos'] == []


def test_public_lookup_and_status_update(client):
    token = login(client)
    post(client, '/api/cart/items', token, item_id='1', weight=2.5)
    r = post(client, '/api/cart/checkout', token, quick_purchase=True,
             payment_method='qris', payment_status='unpaid')
    invoice = r.get_json()['order']['invoice']

    post(client, '/api/orders/%s/status' % invoice, token, status_id='5')
    post(client, '/api/orders/%s/pay' % invoice, token)
    post(client, '/api/auth/logout', token)

    r = client.get('/api/orders/lookup?q=%s' % invoice)
    assert r.status_code == 200
    result = r.get_json()['orders'][0]
    assert result['customerName'] == 'Pelanggan Umum'
    assert result['status'] == 'Siap Diambil'
    assert result['progress'] == 'ready'
    assert result['totalWeight'] == 2.5
    assert 'total' not in result

    r = client.get('/api/orders/lookup?q=INV')
    assert r.status_code == 400


def test_public_estimate(client):
    r = client.post('/api/estimate', json={'service': 'express', 'weight': 2})
    assert r.status_code == 200
    assert r.get_json()['estimate']['exact_price'] == 10000

    r = client.post('/api/estimate', json={'method': 'items', 'items': {'Jaket': 1}})
    assert r.get_json()['estimate']['price_range'] == [1500, 2400]


def test_admin_only_routes(client):
    token = login(client, 'kasir1', 'kasir')
    assert client.get('/api/audit').status_code == 403
    r = post(client, '/api/promotions', token, code='HEMAT5', value=5)
    assert r.status_code == 403

    client.post('/api/auth/logout', headers={'X-CSRF-Token': token})
    token = login(client)
    r = post(client, '/api/promotions', token, code='HEMAT5', value=5)
    assert r.status_code == 201

    logs = client.get('/api/audit?type=PROMO').get_json()['logs']
    assert any(log['related_id'] == 'HEMAT5' for log in logs)


def test_rejected_checkout_does_not_register_customer(client, container):
    token = login(client)
    post(client, '/api/cart/items', token, item_id='1', weight=2)

    r = post(client, '/api/cart/checkout', token,
             customer={'name': 'Dewi Lestari'}, payment_method='bitcoin')

    assert r.status_code == 400
    assert r.get_json()['code'] == 'InvalidPaymentOption'
    assert container.customer_service.search_customers('') == []
    assert client.get('/api/cart').get_json()['carrito']['items_count'] == 1


@pytest.mark.parametrize('customer', ['Dewi Lestari', ['Dewi'], {'name': 42}])
def test_malformed_customer_is_invalid(client, customer):
    token = login(client)
    post(client, '/api/cart/items', token, item_id='1', weight=2)

    r = post(client, '/api/cart/checkout', token, customer=customer, payment_method='cash')

    assert r.status_code == 400
    assert r.get_json()['code'] == 'InvalidCustomer'


@pytest.mark.parametrize('body', [['x'], 'x', 7])
def test_non_object_json_body_is_not_a_server_error(client, body):
    token = login(client)

    r = client.post('/api/cart/items', json=body, headers={'X-CSRF-Token': token})
    assert r.status_code == 400

    r = client.post('/api/cart/items', json=body)
    assert r.status_code == 403


def test_quick_purchase_must_be_a_boolean(client):
    token = login(client)
    post(client, '/api/cart/items', token, item_id='1', weight=2)

    r = post(client, '/api/cart/checkout', token, quick_purchase='false', payment_method='cash')

    assert r.status_code == 400
    assert r.get_json()['code'] == 'MissingCustomer'


def test_line_update_reports_dropped_promos(client):
    token = login(client)
    post(client, '/api/promotions', token, code='MIN30K', value=10, minOrder=30000)
    post(client, '/api/cart/items', token, item_id='1', weight=10)
    post(client, '/api/cart/promos', token, code='MIN30K')

    r = post(client, '/api/cart/items/1', token, weight=5)

    body = r.get_json()
    assert r.status_code == 200
    assert body['dropped_promos'] == ['MIN30K']
    assert body['carrito']['promos'] == []
    assert body['carrito']['discount'] == 0


@pytest.mark.parametrize('weight', ['nan', 'inf'])
def test_estimate_rejects_non_finite_weight(client, weight):
    r = client.post('/api/estimate', json={'weight': weight})
    assert r.status_code == 400
    assert r.get_json()['code'] == 'InvalidEstimate'
