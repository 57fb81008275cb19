"""JSON API endpoints for AJAX operations."""

from flask import Blueprint, jsonify, request, g
from fasttrack.models import Product
from fasttrack.services.analytics import get_dashboard_stats, normalise_range
from fasttrack.services.catalog import search_products
from fasttrack.services.checkout import place_order
from fasttrack.services.inventory import restock_product
from fasttrack.utils.viewer import is_staff

api_bp = Blueprint('api', __name__)


def _cart_state(product_id=None, **extra):
    state = {
        'success': True,
        'cart_count': g.cart.item_count(),
        'cart_total': g.cart.total(),
    }
    if product_id is not None:
        state['quantity'] = g.cart.quantity_of(product_id)
    state.update(extra)
    return jsonify(state)


def _cart_disabled():
    return jsonify({'success': False, 'message': 'Staff accounts cannot place orders.'}), 403


@api_bp.route('/cart', methods=['GET'])
def get_cart():
    """Current cart contents."""
    return jsonify({
        'items': g.cart.to_list(),
        'cart_count': g.cart.item_count(),
        'cart_total': g.cart.total(),
    })


@api_bp.route('/cart/add', methods=['POST'])
def add_to_cart():
    """Add product to cart via AJAX."""
    if not g.cart.enabled:
        return _cart_disabled()

    data = request.get_json(silent=True) or {}
    product = Product.query.filter_by(id=data.get('product_id')).first()
    if not product:
        return jsonify({'success': False, 'message': 'Product not available'}), 404

    changed = g.cart.add(product)
    if changed:
        message = f'{product.name} added to cart'
    elif not g.cart.quantity_of(product.id) and g.cart.is_full:
        message = f'Your cart is full ({g.cart.max_lines} products max)'
    else:
        message = f'No more {product.name} in stock'
    return _cart_state(product.id, changed=changed, message=message)


@api_bp.route('/cart/decrement/<int:product_id>', methods=['POST'])
def decrement(product_id):
    if not g.cart.enabled:
        return _cart_disabled()
    g.cart.decrement(product_id)
    return _cart_state(product_id)


@api_bp.route('/cart/update', methods=['PUT'])
def update_cart():
    """Update cart item quantity."""
    if not g.cart.enabled:
        return _cart_disabled()

    data = request.get_json(silent=True) or {}
    try:
        product_id = int(data.get('product_id'))
        quantity = int(data.get('quantity', 1))
    except (TypeError, ValueError):
        return jsonify({'success': False, 'message': 'Invalid cart update'}), 400

    g.cart.set_quantity(product_id, quantity)
    return _cart_state(product_id)


@api_bp.route('/cart/remove/<int:product_id>', methods=['DELETE'])
def remove_from_cart(product_id):
    """Remove item from cart."""
    if not g.cart.enabled:
        return _cart_disabled()
    g.cart.remove(product_id)
    return _cart_state(product_id)


@api_bp.route('/cart/count')
def cart_count():
    """Get cart item count."""
    return jsonify({'count': g.cart.item_count()})


@api_bp.route('/orders', methods=['POST'])
def create_order():
    """Place an order from a JSON or form payload."""
    if not g.cart.enabled:
        return _cart_disabled()

    payload = request.get_json(silent=True)
    form_data = dict(payload) if isinstance(payload, dict) else request.form.to_dict()
    form_data.setdefault('cart', g.cart.to_list())
    result = place_order(form_data, g.viewer)
    if result.success:
        g.cart.clear()
    return jsonify(result.to_dict()), (201 if result.success else 400)


@api_bp.route('/products/restock', methods=['POST'])
def restock():
    """Restock a product; staff only."""
    result = restock_product(g.viewer, request.get_json(silent=True) or {})
    status = 200 if result.success else (403 if not is_staff(g.viewer) else 400)
    return jsonify(result.to_dict()), status


@api_bp.route('/dashboard/stats')
def dashboard_stats():
    """Dashboard numbers for the range given in ?range=."""
    if not is_staff(g.viewer):
        return jsonify({'success': False, 'message': 'Unauthorized. Admin access required.'}), 403
    return jsonify(get_dashboard_stats(normalise_range(request.args.get('range'))))


@api_bp.route('/search')
def search():
    """Search products by name or description."""
    return jsonify({'products': search_products(request.args.get('q', ''))})
