"""Staff mutations on the product catalog.

Each action checks the viewer first and performs no reads or writes for
anyone but staff. Outcomes are reported as ActionResult, never raised.
"""

import math
from datetime import datetime

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from fasttrack.extensions import db
from fasttrack.models import Product
from fasttrack.services.cache import invalidate_storefront
from fasttrack.services.results import ActionResult, UNAUTHORIZED
from fasttrack.utils.viewer import is_staff


def _field(form_data, name):
    value = form_data.get(name)
    if value is None:
        return ''
    return str(value).strip()


def parse_price(value):
    """Float price >= 0, or None if the text is not one."""
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(price) or math.isinf(price) or price < 0:
        return None
    return price


def parse_count(value, minimum=0):
    """Strict integer >= minimum, or None."""
    try:
        count = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    if count < minimum:
        return None
    return count


def _parse_optional_id(value):
    try:
        return int(value) if value else None
    except (TypeError, ValueError):
        return None


def create_product(viewer, form_data):
    """Add a product to the catalog."""
    if not is_staff(viewer):
        return ActionResult.fail(UNAUTHORIZED)

    name = _field(form_data, 'name')
    price_text = _field(form_data, 'price')
    stock_text = _field(form_data, 'stock')

    if not name or not price_text or not stock_text:
        return ActionResult.fail('Name, price, and stock are required.')

    price = parse_price(price_text)
    if price is None:
        return ActionResult.fail('Please enter a valid price.')

    stock = parse_count(stock_text)
    if stock is None:
        return ActionResult.fail('Please enter a valid stock quantity.')

    expiry_text = _field(form_data, 'expiry_date')
    expiry_date = None
    if expiry_text:
        try:
            expiry_date = datetime.strptime(expiry_text, '%Y-%m-%d').date()
        except ValueError:
            return ActionResult.fail('Please enter a valid expiry date (YYYY-MM-DD).')

    product = Product(
        name=name,
        description=_field(form_data, 'description') or None,
        price=price,
        stock_quantity=stock,
        image_url=_field(form_data, 'image_url') or current_app.config['PLACEHOLDER_IMAGE_URL'],
        department_id=_parse_optional_id(_field(form_data, 'department_id')),
        expiry_date=expiry_date,
    )
    try:
        db.session.add(product)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Product creation failed')
        return ActionResult.fail('Failed to create product. Please try again.')

    current_app.logger.info('Product %s "%s" created by %s', product.id, name, viewer.email)
    invalidate_storefront()
    return ActionResult.ok(f'Product "{name}" created successfully!')


def restock_product(viewer, form_data):
    """Add units to a product's stock.

    The increment runs as one UPDATE in the database. The reported new
    stock is the pre-update reading plus the added units, for display only.
    """
    if not is_staff(viewer):
        return ActionResult.fail(UNAUTHORIZED)

    product_id_text = _field(form_data, 'product_id')
    quantity_text = _field(form_data, 'quantity')
    if not product_id_text or not quantity_text:
        return ActionResult.fail('Product and quantity are required.')

    product_id = parse_count(product_id_text, minimum=1)
    if product_id is None:
        return ActionResult.fail('Product not found.')

    added = parse_count(quantity_text, minimum=1)
    if added is None:
        return ActionResult.fail('Please enter a valid quantity greater than 0.')

    try:
        product = Product.query.filter_by(id=product_id).first()
        if product is None:
            return ActionResult.fail('Product not found.')
        name, stock_before = product.name, product.stock_quantity or 0

        if not Product.increment_stock(product_id, added):
            db.session.rollback()
            return ActionResult.fail('Product not found.')
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Restock of product %s failed', product_id)
        return ActionResult.fail('Failed to update stock. Please try again.')

    current_app.logger.info('Product %s restocked by %d (%s)', product_id, added, viewer.email)
    invalidate_storefront()
    return ActionResult.ok(f'Added {added} units to "{name}". New stock: {stock_before + added}')


def delete_product(viewer, product_id):
    """Hard-delete a product. Order items keep their own name and price."""
    if not is_staff(viewer):
        return ActionResult.fail(UNAUTHORIZED)

    try:
        deleted = Product.query.filter_by(id=product_id).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Deletion of product %s failed', product_id)
        return ActionResult.fail('Failed to delete product.')

    if not deleted:
        return ActionResult.fail('Product not found.')

    current_app.logger.info('Product %s deleted by %s', product_id, viewer.email)
    invalidate_storefront()
    return ActionResult.ok('Product deleted successfully.')


def inventory_rows():
    """Products for the staff inventory table, lowest stock first."""
    try:
        products = Product.query.order_by(Product.stock_quantity.asc(), Product.name.asc()).all()
    except SQLAlchemyError:
        current_app.logger.exception('Could not load inventory')
        return []
    return [p.to_dict() for p in products]

