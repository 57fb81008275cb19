"""Staff dashboard and inventory routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, g, current_app
from fasttrack.models import Order, OrderItem
from fasttrack.services.analytics import get_dashboard_stats, normalise_range, RANGE_LABELS
from fasttrack.services.catalog import list_departments
from fasttrack.services.inventory import (create_product, restock_product,
                                          delete_product, inventory_rows)
from fasttrack.utils.decorators import admin_required

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/')
@admin_required
def dashboard():
    """Store overview with revenue chart for the selected range."""
    time_range = normalise_range(request.args.get('range'))
    stats = get_dashboard_stats(time_range)
    return render_template('admin/dashboard.html',
                         stats=stats,
                         time_range=time_range,
                         range_labels=RANGE_LABELS)


@admin_bp.route('/inventory')
@admin_required
def inventory():
    """Inventory table with add and restock forms."""
    return render_template('admin/inventory.html',
                         products=inventory_rows(),
                         departments=list_departments())


@admin_bp.route('/products', methods=['POST'])
@admin_required
def add_product():
    """Create a product."""
    result = create_product(g.viewer, request.form)
    flash(result.message, result.category)
    return redirect(url_for('admin.inventory'))


@admin_bp.route('/products/restock', methods=['POST'])
@admin_required
def restock():
    """Add stock to a product."""
    result = restock_product(g.viewer, request.form)
    flash(result.message, result.category)
    return redirect(url_for('admin.inventory'))


@admin_bp.route('/products/<int:product_id>/delete', methods=['POST'])
@admin_required
def remove_product(product_id):
    """Delete a product."""
    result = delete_product(g.viewer, product_id)
    flash(result.message, result.category)
    return redirect(url_for('admin.inventory'))


# --- Order Monitoring ---
@admin_bp.route('/orders')
@admin_required
def orders():
    """All orders."""
    page = request.args.get('page', 1, type=int)
    status = request.args.get('status', '')

    query = Order.query

    if status in Order.STATUSES:
        query = query.filter_by(status=status)

    pagination = query.order_by(Order.created_at.desc(), Order.id.desc()).paginate(
        page=page, per_page=current_app.config['ITEMS_PER_PAGE'], error_out=False
    )

    return render_template('admin/orders.html',
                         orders=pagination.items,
                         pagination=pagination,
                         statuses=Order.STATUSES,
                         current_status=status)


@admin_bp.route('/orders/<int:order_id>')
@admin_required
def order_detail(order_id):
    """Single order with its lines."""
    order = Order.query.filter_by(id=order_id).first_or_404()
    items = order.items.order_by(OrderItem.id).all()
    return render_template('admin/order_detail.html', order=order, items=items)
