"""Tests for the JSON API."""

import pytest

from fasttrack.models import Order


class TestCartApi:
    def test_add(self, client, catalog):
        response = client.post('/api/cart/add', json={'product_id': catalog['milk']})
        data = response.get_json()

        assert data['success'] is True
        assert data['changed'] is True
        assert data['quantity'] == 1
        assert data['cart_count'] == 1
        assert data['cart_total'] == 210.0
        assert data['message'] == 'Fresh Milk added to cart'

    def test_add_past_stock(self, client, catalog):
        for _ in range(3):
            client.post('/api/cart/add', json={'product_id': catalog['milk']})
        data = client.post('/api/cart/add', json={'product_id': catalog['milk']}).get_json()

        assert data['changed'] is False
        assert data['quantity'] == 3
        assert data['message'] == 'No more Fresh Milk in stock'

    def test_add_unknown_product(self, client, catalog):
        response = client.post('/api/cart/add', json={'product_id': 9999})
        assert response.status_code == 404

    def test_update_decrement_remove(self, client, catalog):
        eggs = catalog['eggs']
        client.post('/api/cart/add', json={'product_id': eggs})

        assert client.put('/api/cart/update', json={'product_id': eggs, 'quantity': 5}).get_json()['quantity'] == 5
        assert client.post(f'/api/cart/decrement/{eggs}').get_json()['quantity'] == 4
        assert client.delete(f'/api/cart/remove/{eggs}').get_json()['quantity'] == 0
        assert client.get('/api/cart/count').get_json() == {'count': 0}

    def test_update_rejects_garbage(self, client, catalog):
        response = client.put('/api/cart/update', json={'product_id': 'x', 'quantity': 1})
        assert response.status_code == 400

    def test_get_cart(self, client, catalog):
        client.post('/api/cart/add', json={'product_id': catalog['eggs']})
        data = client.get('/api/cart').get_json()

        assert data['cart_count'] == 1
        assert data['items'][0]['product']['name'] == 'Farm Eggs'

    def test_staff_cart_is_disabled(self, staff_client, catalog):
        response = staff_client.post('/api/cart/add', json={'product_id': catalog['milk']})

        assert response.status_code == 403
        assert staff_client.get('/api/cart/count').get_json() == {'count': 0}


class TestOrdersApi:
    ORDER = {
        'customer_name': 'Ayesha Khan',
        'email': 'ayesha@example.com',
        'shipping_address': 'House 12, Street 4, Gulberg',
        'city': 'Lahore',
        'phone': '03001234567',
    }

    def test_place_order_from_session_cart(self, client, app, catalog):
        client.post('/api/cart/add', json={'product_id': catalog['eggs']})
        response = client.post('/api/orders', json=self.ORDER)

        assert response.status_code == 201
        data = response.get_json()
        assert data['success'] is True
        assert client.get('/api/cart/count').get_json() == {'count': 0}
        with app.app_context():
            assert Order.query.one().id == data['order_id']

    def test_explicit_cart(self, client, catalog):
        cart = [{'product': {'id': catalog['rice'], 'name': 'Basmati Rice', 'price': 2100.0,
                             'stock_quantity': 8}, 'quantity': 2}]
        response = client.post('/api/orders', json=dict(self.ORDER, cart=cart))

        assert response.status_code == 201

    def test_empty_cart(self, client, catalog):
        response = client.post('/api/orders', json=self.ORDER)

        assert response.status_code == 400
        assert response.get_json() == {'success': False, 'message': 'Your cart is empty.'}

    def test_staff_cannot_order(self, staff_client, catalog):
        assert staff_client.post('/api/orders', json=self.ORDER).status_code == 403


class TestStaffApi:
    def test_restock(self, staff_client, catalog):
        response = staff_client.post('/api/products/restock',
                                     json={'product_id': catalog['milk'], 'quantity': 12})

        assert response.status_code == 200
        assert response.get_json()['message'] == 'Added 12 units to "Fresh Milk". New stock: 15'

    def test_restock_invalid(self, staff_client, catalog):
        response = staff_client.post('/api/products/restock',
                                     json={'product_id': catalog['milk'], 'quantity': -2})
        assert response.status_code == 400

    @pytest.mark.parametrize('who', ['client', 'customer_client'])
    def test_restock_forbidden(self, request, who, catalog):
        client = request.getfixturevalue(who)
        response = client.post('/api/products/restock',
                               json={'product_id': catalog['milk'], 'quantity': 12})

        assert response.status_code == 403
        assert response.get_json()['message'] == 'Unauthorized. Admin access required.'

    def test_dashboard_stats(self, staff_client, catalog):
        data = staff_client.get('/api/dashboard/stats?range=24h').get_json()

        assert data['range'] == '24h'
        assert len(data['sales_trend']) == 24
        assert data['total_products'] == 4

    def test_dashboard_stats_forbidden(self, customer_client):
        assert customer_client.get('/api/dashboard/stats').status_code == 403


def test_search(client, catalog):
    data = client.get('/api/search?q=egg').get_json()
    assert [p['name'] for p in data['products']] == ['Farm Eggs']
