"""Database models package."""

from .user import User
from .product import Department, Product
from .order import Order, OrderItem

__all__ = [
    'User',
    'Department',
    'Product',
    'Order',
    'OrderItem',
]
