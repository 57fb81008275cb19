"""Storefront catalog routes."""

from flask import Blueprint, render_template, request
from fasttrack.models import Product
from fasttrack.services.catalog import list_products, list_departments, get_department

shop_bp = Blueprint('shop', __name__)


@shop_bp.route('/')
def index():
    """Product listing with department filter and name search."""
    category = request.args.get('category', '')
    search = request.args.get('search', '').strip()

    department = get_department(category)
    products = list_products(category or None, search or None)

    return render_template('shop/index.html',
                         products=products,
                         departments=list_departments(),
                         current_category=department.slug if department else 'all',
                         heading=department.name if department else 'All Products',
                         search=search)


@shop_bp.route('/product/<int:product_id>')
def product_detail(product_id):
    """Product detail page."""
    product = Product.query.filter_by(id=product_id).first_or_404()
    return render_template('shop/product_detail.html', product=product.to_dict())
