"""Checkout and order history routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, g, session, abort
from flask_login import current_user
from fasttrack.forms.checkout import CheckoutForm
from fasttrack.models import Order
from fasttrack.services.checkout import place_order
from fasttrack.utils.decorators import customer_required
from fasttrack.utils.viewer import Customer

orders_bp = Blueprint('orders', __name__)


@orders_bp.route('/checkout', methods=['GET', 'POST'])
def checkout():
    """Checkout page."""
    if not g.cart.enabled:
        flash('Staff accounts cannot place orders.', 'warning')
        return redirect(url_for('admin.dashboard'))

    if request.method == 'POST':
        form_data = request.form.copy()
        if not form_data.get('cart'):
            form_data['cart'] = g.cart.to_json()

        result = place_order(form_data, g.viewer)
        if result.success:
            g.cart.clear()
            session['last_order_id'] = result.order_id
            flash(result.message, result.category)
            return redirect(url_for('orders.confirmation', order_id=result.order_id))

        flash(result.message, result.category)
        form = CheckoutForm(formdata=form_data)
    else:
        if not len(g.cart):
            flash('Your cart is empty.', 'warning')
            return redirect(url_for('cart.view_cart'))
        form = CheckoutForm()
        if isinstance(g.viewer, Customer):
            form.email.data = form.email.data or g.viewer.email
            form.customer_name.data = form.customer_name.data or current_user.display_name

    form.cart.data = g.cart.to_json()
    return render_template('orders/checkout.html',
                         form=form,
                         cart_items=g.cart.items,
                         cart_total=g.cart.total())


@orders_bp.route('/orders/<int:order_id>/confirmation')
def confirmation(order_id):
    """Order confirmation page, only for the session that placed the order."""
    if session.get('last_order_id') != order_id:
        abort(404)
    order = Order.query.filter_by(id=order_id).first_or_404()
    return render_template('orders/confirmation.html', order=order)


@orders_bp.route('/my-orders')
@customer_required
def my_orders():
    """Order history for the signed-in customer."""
    orders = Order.query.filter_by(
        user_id=g.viewer.user_id
    ).order_by(Order.created_at.desc(), Order.id.desc()).all()

    return render_template('orders/my_orders.html', orders=orders)
