"""Invalidation of cached storefront and dashboard reads."""

from flask import current_app
from fasttrack.extensions import cache


def invalidate_storefront():
    """Drop every cached view of product stock or orders.

    Called after a write has been committed.
    """
    from fasttrack.services import analytics, catalog

    cache.delete_memoized(catalog.list_products)
    cache.delete_memoized(catalog.featured_products)
    cache.delete_memoized(analytics.get_dashboard_stats)
    current_app.logger.debug('Storefront caches invalidated')
