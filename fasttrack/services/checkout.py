"""Turning a submitted cart into an order."""

import json
import smtplib

from flask import current_app
from flask_mail import Message
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import MultiDict

from fasttrack.cart import parse_cart
from fasttrack.extensions import db, mail
from fasttrack.forms.checkout import CheckoutForm
from fasttrack.models import Order, OrderItem
from fasttrack.services.cache import invalidate_storefront
from fasttrack.services.results import ActionResult
from fasttrack.utils.viewer import Customer


def _as_formdata(form_data):
    if hasattr(form_data, 'getlist'):
        return form_data
    data = {}
    for key, value in (form_data or {}).items():
        if value is None:
            continue
        if key == 'cart' and not isinstance(value, str):
            value = json.dumps(value)
        data[key] = str(value)
    return MultiDict(data)


def order_total(items):
    """Sum of price x quantity over cart lines."""
    return sum(item.product.price * item.quantity for item in items)


def _save_items(order_id, items):
    for item in items:
        db.session.add(OrderItem(
            order_id=order_id,
            product_id=item.product.id,
            product_name=item.product.name or f'Product #{item.product.id}',
            quantity=item.quantity,
            unit_price=item.product.price,
        ))
    db.session.commit()


def send_order_confirmation(order, items):
    """Email the customer a receipt. Mail failures never fail the order."""
    if not current_app.config.get('ORDER_CONFIRMATION_EMAILS'):
        return False

    lines = [f'{item.quantity} x {item.product.name} @ {item.product.price:.2f}' for item in items]
    msg = Message(
        subject=f'FastTrack order #{order.id}',
        recipients=[order.email],
        body='\n'.join([
            f'Hi {order.customer_name},',
            '',
            f'Thanks for your order #{order.id}. You will pay cash on delivery.',
            '',
            *lines,
            '',
            f'Total: {order.total_amount:.2f}',
            f'Shipping to: {order.shipping_address}, {order.city}',
        ])
    )
    try:
        mail.send(msg)
    except (smtplib.SMTPException, OSError) as exc:
        current_app.logger.warning('Could not send confirmation for order %s: %s', order.id, exc)
        return False
    return True


def place_order(form_data, viewer=None):
    """Validate a checkout submission and persist the order with its items.

    The order row and its items are written in two commits. If the items
    fail after the order was saved, the order is left in place without
    items and the failure is reported.
    """
    try:
        # CSRF is enforced for the whole request by CSRFProtect
        form = CheckoutForm(formdata=_as_formdata(form_data), meta={'csrf': False})
        if not form.validate():
            return ActionResult.fail(form.first_error() or 'Please fill in all required fields.')

        raw_cart = (form.cart.data or '').strip()
        if not raw_cart:
            return ActionResult.fail('Your cart is empty.')
        try:
            items = parse_cart(raw_cart)
        except (TypeError, ValueError):
            return ActionResult.fail('Invalid cart data.')
        if not items:
            return ActionResult.fail('Your cart is empty.')

        order = Order(
            user_id=viewer.user_id if isinstance(viewer, Customer) else None,
            customer_name=form.customer_name.data.strip(),
            email=form.email.data.strip(),
            shipping_address=form.shipping_address.data.strip(),
            city=form.city.data.strip(),
            phone=form.phone.data.strip(),
            total_amount=order_total(items),
            status='completed',
            payment_method=Order.PAYMENT_COD,
        )
        try:
            db.session.add(order)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('Order creation failed')
            return ActionResult.fail('Failed to create order. Please try again.')

        order_id = order.id
        try:
            _save_items(order_id, items)
        except SQLAlchemyError:
            db.session.rollback()
            current_app.logger.exception('Order %s was saved without its items', order_id)
            return ActionResult.fail('Failed to add order items. Please try again.')

        current_app.logger.info('Order %s placed: %d lines, total %.2f',
                                order_id, len(items), order.total_amount)
        invalidate_storefront()
        send_order_confirmation(order, items)

        return ActionResult.ok(
            f'Order #{order_id} placed successfully! Thank you for shopping with FastTrack.',
            order_id=order_id
        )
    except Exception:
        db.session.rollback()
        current_app.logger.exception('Checkout error')
        return ActionResult.fail('An unexpected error occurred. Please try again.')
