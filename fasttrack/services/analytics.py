"""Read-only aggregates for the staff dashboard."""

from datetime import datetime, timedelta

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from fasttrack.extensions import cache, db
from fasttrack.models import Order, Product

TIME_RANGES = ('1h', '24h', '7d', '30d', '90d')
DEFAULT_RANGE = '7d'

RANGE_LABELS = {
    '1h': 'Last Hour',
    '24h': 'Last 24 Hours',
    '7d': 'Last 7 Days',
    '30d': 'Last 30 Days',
    '90d': 'Last 90 Days',
}

# range -> (lookback, bucket width, bucket count)
_RANGES = {
    '1h': (timedelta(hours=1), timedelta(minutes=5), 12),
    '24h': (timedelta(hours=24), timedelta(hours=1), 24),
    '7d': (timedelta(days=7), timedelta(days=1), 7),
    '30d': (timedelta(days=30), timedelta(days=1), 30),
    '90d': (timedelta(days=90), timedelta(weeks=1), 13),
}


def normalise_range(time_range):
    return time_range if time_range in _RANGES else DEFAULT_RANGE


def range_start(time_range, now):
    """Earliest created_at that the range looks at."""
    lookback, _, _ = _RANGES[normalise_range(time_range)]
    return now - lookback


def bucket_floor(moment, time_range):
    """Start of the bucket that contains ``moment``."""
    time_range = normalise_range(time_range)
    if time_range == '1h':
        return moment.replace(minute=moment.minute - moment.minute % 5, second=0, microsecond=0)
    if time_range == '24h':
        return moment.replace(minute=0, second=0, microsecond=0)
    day = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    if time_range == '90d':
        return day - timedelta(days=day.weekday())
    return day


def bucket_label(moment, time_range):
    """Chart label for the bucket containing ``moment``."""
    time_range = normalise_range(time_range)
    start = bucket_floor(moment, time_range)
    if time_range == '1h':
        return start.strftime('%H:%M')
    if time_range == '24h':
        return start.strftime('%b %d %H:00')
    if time_range == '90d':
        return start.strftime('Week of %b %d')
    return start.strftime('%a, %b %d')


def empty_buckets(time_range, now):
    """Zero-filled buckets covering the range, oldest first."""
    time_range = normalise_range(time_range)
    _, width, count = _RANGES[time_range]
    newest = bucket_floor(now, time_range)
    starts = [newest - width * offset for offset in range(count - 1, -1, -1)]
    return [{'label': bucket_label(start, time_range), 'revenue': 0.0} for start in starts]


def build_sales_trend(orders, time_range, now):
    """Revenue per bucket for ``orders`` (objects or dicts with total_amount/created_at).

    Orders whose bucket is outside the range are ignored.
    """
    buckets = empty_buckets(time_range, now)
    by_label = {bucket['label']: bucket for bucket in buckets}
    for order in orders:
        if isinstance(order, dict):
            created_at, amount = order.get('created_at'), order.get('total_amount')
        else:
            created_at, amount = order.created_at, order.total_amount
        if created_at is None:
            continue
        bucket = by_label.get(bucket_label(created_at, time_range))
        if bucket is not None:
            bucket['revenue'] += amount or 0
    return buckets


def empty_stats(time_range=DEFAULT_RANGE, now=None):
    now = now or datetime.utcnow()
    return {
        'range': normalise_range(time_range),
        'total_revenue': 0.0,
        'orders_today': 0,
        'total_products': 0,
        'low_stock_count': 0,
        'critical_stock_items': [],
        'expiring_soon_count': 0,
        'sales_trend': empty_buckets(time_range, now),
        'recent_orders': [],
    }


def _critical_item(product):
    return {
        'id': product.id,
        'name': product.name,
        'stock_quantity': product.stock_quantity or 0,
        'department_name': product.department.name if product.department else 'Unknown',
    }


@cache.memoize()
def get_dashboard_stats(time_range=DEFAULT_RANGE, now=None):
    """Dashboard numbers for ``time_range``.

    A failed query gives the empty defaults rather than an error.
    """
    time_range = normalise_range(time_range)
    now = now or datetime.utcnow()
    config = current_app.config

    try:
        total_revenue = db.session.query(
            func.coalesce(func.sum(Order.total_amount), 0)
        ).scalar() or 0

        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        orders_today = Order.query.filter(Order.created_at >= midnight).count()

        total_products = Product.query.count()
        low_stock_count = Product.query.filter(
            Product.stock_quantity < config['LOW_STOCK_THRESHOLD']
        ).count()

        critical = Product.query.filter(
            Product.stock_quantity < config['CRITICAL_STOCK_THRESHOLD']
        ).order_by(Product.stock_quantity.asc(), Product.id.asc()).limit(
            config['CRITICAL_STOCK_LIMIT']
        ).all()

        today = now.date()
        expiring_soon_count = Product.query.filter(
            Product.expiry_date.isnot(None),
            Product.expiry_date >= today,
            Product.expiry_date <= today + timedelta(days=config['EXPIRY_WARNING_DAYS'])
        ).count()

        window = Order.query.filter(
            Order.created_at >= range_start(time_range, now)
        ).order_by(Order.created_at.asc()).all()

        recent = Order.query.order_by(
            Order.created_at.desc(), Order.id.desc()
        ).limit(config['RECENT_ORDERS_LIMIT']).all()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Dashboard stats query failed')
        return empty_stats(time_range, now)

    return {
        'range': time_range,
        'total_revenue': float(total_revenue),
        'orders_today': orders_today,
        'total_products': total_products,
        'low_stock_count': low_stock_count,
        'critical_stock_items': [_critical_item(p) for p in critical],
        'expiring_soon_count': expiring_soon_count,
        'sales_trend': build_sales_trend(window, time_range, now),
        'recent_orders': [
            {
                'id': o.id,
                'customer_name': o.customer_name,
                'total_amount': o.total_amount,
                'created_at': o.created_at.isoformat() if o.created_at else None,
            }
            for o in recent
        ],
    }
