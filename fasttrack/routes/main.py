"""Main public routes."""

from flask import Blueprint, render_template
from fasttrack.services.catalog import featured_products, list_departments

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Homepage with featured products."""
    return render_template('main/index.html',
                         products=featured_products(),
                         departments=list_departments())
