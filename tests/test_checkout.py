"""Tests for placing orders."""

import json

import pytest
from sqlalchemy.exc import SQLAlchemyError

from fasttrack.extensions import db, mail
from fasttrack.models import Order, OrderItem
from fasttrack.services import checkout
from fasttrack.services.checkout import place_order


def cart_line(product_id, quantity, price=210.0, name='Fresh Milk', stock=10):
    return {
        'product': {'id': product_id, 'name': name, 'price': price,
                    'stock_quantity': stock, 'image_url': None},
        'quantity': quantity,
    }


@pytest.fixture
def form_data(catalog):
    return {
        'customer_name': 'Ayesha Khan',
        'email': 'ayesha@example.com',
        'shipping_address': 'House 12, Street 4, Gulberg',
        'city': 'Lahore',
        'phone': '03001234567',
        'cart': json.dumps([
            cart_line(catalog['milk'], 2),
            cart_line(catalog['eggs'], 1, price=390.0, name='Farm Eggs'),
        ]),
    }


class TestPlaceOrder:
    def test_guest_order(self, ctx, form_data):
        result = place_order(form_data)

        assert result.success
        assert result.message == (f'Order #{result.order_id} placed successfully! '
                                  'Thank you for shopping with FastTrack.')
        order = db.session.get(Order, result.order_id)
        assert order.user_id is None
        assert order.status == 'completed'
        assert order.payment_method == 'COD'
        assert order.total_amount == pytest.approx(2 * 210.0 + 390.0)
        assert order.items.count() == 2

    def test_customer_order_is_linked(self, ctx, form_data, customer_viewer):
        result = place_order(form_data, customer_viewer)

        assert db.session.get(Order, result.order_id).user_id == customer_viewer.user_id

    def test_lines_keep_cart_prices(self, ctx, form_data, catalog):
        result = place_order(form_data)

        milk = OrderItem.query.filter_by(order_id=result.order_id,
                                         product_id=catalog['milk']).one()
        assert milk.product_name == 'Fresh Milk'
        assert milk.unit_price == 210.0
        assert milk.quantity == 2

    def test_accepts_decoded_cart_list(self, ctx, form_data):
        form_data['cart'] = json.loads(form_data['cart'])
        assert place_order(form_data).success

    def test_unnamed_product_gets_placeholder_name(self, ctx, form_data):
        form_data['cart'] = json.dumps([cart_line(42, 1, name=None)])
        result = place_order(form_data)

        item = OrderItem.query.filter_by(order_id=result.order_id).one()
        assert item.product_name == 'Product #42'

    def test_sends_confirmation_email(self, ctx, form_data):
        with mail.record_messages() as outbox:
            result = place_order(form_data)

        assert len(outbox) == 1
        assert outbox[0].subject == f'FastTrack order #{result.order_id}'
        assert outbox[0].recipients == ['ayesha@example.com']

    def test_confirmation_email_can_be_disabled(self, ctx, form_data):
        ctx.config['ORDER_CONFIRMATION_EMAILS'] = False
        with mail.record_messages() as outbox:
            assert place_order(form_data).success
        assert outbox == []


class TestValidation:
    @pytest.mark.parametrize('field, message', [
        ('customer_name', 'Name is required'),
        ('email', 'Email is required'),
        ('shipping_address', 'Address is required'),
        ('city', 'City is required'),
        ('phone', 'Phone number is required'),
    ])
    def test_required_fields(self, ctx, form_data, field, message):
        form_data[field] = '   '
        result = place_order(form_data)

        assert not result.success
        assert result.message == message
        assert Order.query.count() == 0

    def test_first_missing_field_wins(self, ctx, form_data):
        form_data['city'] = ''
        form_data['customer_name'] = ''

        assert place_order(form_data).message == 'Name is required'

    def test_invalid_email(self, ctx, form_data):
        form_data['email'] = 'not-an-email'
        assert place_order(form_data).message == 'Please enter a valid email address'

    @pytest.mark.parametrize('cart, message', [
        ('', 'Your cart is empty.'),
        ('[]', 'Your cart is empty.'),
        ('not json', 'Invalid cart data.'),
        ('[{"product": {"id": 1}, "quantity": -1}]', 'Invalid cart data.'),
    ])
    def test_bad_carts(self, ctx, form_data, cart, message):
        form_data['cart'] = cart
        result = place_order(form_data)

        assert result.message == message
        assert Order.query.count() == 0


class TestFailures:
    def test_order_insert_failure(self, ctx, form_data, monkeypatch):
        def broken_add(instance):
            raise SQLAlchemyError('disk full')

        monkeypatch.setattr(db.session, 'add', broken_add)
        result = place_order(form_data)

        assert result.message == 'Failed to create order. Please try again.'

    def test_items_failure_leaves_order_without_items(self, ctx, form_data, monkeypatch):
        def broken_save(order_id, items):
            raise SQLAlchemyError('constraint failed')

        monkeypatch.setattr(checkout, '_save_items', broken_save)
        result = place_order(form_data)

        assert result.message == 'Failed to add order items. Please try again.'
        order = Order.query.one()
        assert order.items.count() == 0

    def test_unexpected_error(self, ctx, form_data, monkeypatch):
        def explode(raw):
            raise RuntimeError('boom')

        monkeypatch.setattr(checkout, 'parse_cart', explode)
        result = place_order(form_data)

        assert result.message == 'An unexpected error occurred. Please try again.'
