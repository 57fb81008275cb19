"""Cart routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, g
from fasttrack.models import Product

cart_bp = Blueprint('cart', __name__)


def _back():
    return redirect(request.referrer or url_for('cart.view_cart'))


def _full_message():
    return (f'Your cart is full ({g.cart.max_lines} products max). '
            'Check out or remove items first.')


@cart_bp.route('/')
def view_cart():
    """View shopping cart."""
    return render_template('cart/cart.html',
                         cart_items=g.cart.items,
                         cart_total=g.cart.total())


@cart_bp.route('/add', methods=['GET', 'POST'])
def add_to_cart():
    """Add one unit of a product to the cart."""
    # If accessed via GET, redirect to cart
    if request.method == 'GET':
        return redirect(url_for('cart.view_cart'))

    if not g.cart.enabled:
        flash('Staff accounts cannot place orders.', 'warning')
        return redirect(url_for('admin.dashboard'))

    product_id = request.form.get('product_id', type=int)
    product = Product.query.filter_by(id=product_id).first_or_404()

    if g.cart.add(product):
        flash(f'{product.name} added to cart!', 'success')
    elif not g.cart.quantity_of(product.id) and g.cart.is_full:
        flash(_full_message(), 'warning')
    elif not product.is_in_stock():
        flash(f'{product.name} is out of stock.', 'warning')
    else:
        flash(f'Only {product.stock_quantity} of {product.name} in stock.', 'warning')
    return _back()


@cart_bp.route('/decrement/<int:product_id>', methods=['POST'])
def decrement(product_id):
    """Take one unit off a cart line."""
    g.cart.decrement(product_id)
    return _back()


@cart_bp.route('/update', methods=['POST'])
def update_cart():
    """Update cart item quantity."""
    product_id = request.form.get('product_id', type=int)
    quantity = request.form.get('quantity', type=int)

    if product_id is None or quantity is None:
        flash('Please enter a valid quantity.', 'danger')
        return redirect(url_for('cart.view_cart'))

    line = next((item for item in g.cart if item.product.id == product_id), None)
    if line is None:
        flash('That product is not in your cart.', 'warning')
        return redirect(url_for('cart.view_cart'))

    changed = g.cart.set_quantity(product_id, quantity)
    kept = g.cart.quantity_of(product_id)
    if not kept:
        flash('Item removed from cart.', 'success')
    elif kept < quantity:
        flash(f'Only {kept} of {line.product.name} in stock.', 'warning')
    elif changed:
        flash('Cart updated.', 'success')
    else:
        flash('Cart unchanged.', 'info')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/remove/<int:product_id>', methods=['POST'])
def remove_from_cart(product_id):
    """Remove item from cart."""
    g.cart.remove(product_id)
    flash('Item removed from cart.', 'success')
    return redirect(url_for('cart.view_cart'))


@cart_bp.route('/clear', methods=['POST'])
def clear_cart():
    """Clear all items from cart."""
    g.cart.clear()
    flash('Cart cleared.', 'success')
    return redirect(url_for('cart.view_cart'))
