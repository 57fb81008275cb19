"""Role-based access decorators."""

from functools import wraps
from flask import redirect, url_for, flash, g, request
from flask_login import current_user
from fasttrack.utils.viewer import Customer, is_staff


def admin_required(f):
    """Decorator to require the staff role; others are sent to the shop."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login', next=request.path))
        if not is_staff(g.viewer):
            flash('Access denied. Admin privileges required.', 'danger')
            return redirect(url_for('shop.index'))
        return f(*args, **kwargs)
    return decorated_function


def customer_required(f):
    """Decorator to require a signed-in shopper."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return redirect(url_for('auth.login', next=request.path))
        if not isinstance(g.viewer, Customer):
            flash('Access denied.', 'danger')
            return redirect(url_for('main.index'))
        return f(*args, **kwargs)
    return decorated_function
