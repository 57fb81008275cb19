"""Product catalog reads for the storefront."""

from sqlalchemy import or_
from fasttrack.extensions import cache
from fasttrack.models import Department, Product


def _normalise_category(category):
    if category is None:
        return None
    category = category.strip().lower()
    if not category or category == 'all':
        return None
    return category


@cache.memoize()
def list_products(category=None, search=None):
    """Products newest first, optionally narrowed by department slug and name search.

    An unknown department slug leaves the list unfiltered.
    """
    query = Product.query

    slug = _normalise_category(category)
    if slug:
        department = Department.query.filter_by(slug=slug).first()
        if department:
            query = query.filter(Product.department_id == department.id)

    search = (search or '').strip()
    if search:
        query = query.filter(Product.name.ilike(f'%{search}%'))

    products = query.order_by(Product.created_at.desc(), Product.id.desc()).all()
    return [p.to_dict() for p in products]


@cache.memoize()
def featured_products(limit=8):
    """In-stock products for the home page."""
    products = Product.query.filter(
        Product.stock_quantity > 0
    ).order_by(Product.created_at.desc(), Product.id.desc()).limit(limit).all()
    return [p.to_dict() for p in products]


def list_departments():
    return [d.to_dict() for d in Department.query.order_by(Department.name).all()]


def get_department(slug):
    slug = _normalise_category(slug)
    if not slug:
        return None
    return Department.query.filter_by(slug=slug).first()


def filter_products(products, category):
    """Filter an already fetched product list by department name.

    Matching ignores case and surrounding whitespace; None or "all"
    keeps every product.
    """
    wanted = _normalise_category(category)
    if wanted is None:
        return list(products)
    return [
        p for p in products
        if (p.get('department_name') or '').strip().lower() == wanted
    ]


def search_products(term, limit=10):
    """Name or description search for the JSON API."""
    term = (term or '').strip()
    if len(term) < 2:
        return []
    products = Product.query.filter(
        or_(
            Product.name.ilike(f'%{term}%'),
            Product.description.ilike(f'%{term}%')
        )
    ).order_by(Product.name.asc()).limit(limit).all()
    return [p.to_dict() for p in products]
