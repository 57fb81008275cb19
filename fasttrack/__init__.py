"""Flask application factory."""

import os
from flask import Flask, render_template, g, session
from .config import config
from .extensions import db, migrate, login_manager, bcrypt, csrf, mail, cache


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.environ.get('FLASK_CONFIG', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)
    mail.init_app(app)
    cache.init_app(app)

    if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') and not app.testing:
        os.makedirs(app.instance_path, exist_ok=True)

    # Register blueprints
    from .routes import register_blueprints
    register_blueprints(app)

    # User loader for Flask-Login
    from .models import User

    @login_manager.user_loader
    def load_user(user_id):
        return User.query.filter_by(id=int(user_id)).first()

    # One viewer and one cart per request; staff carts are never stored
    from .cart import CART_STORAGE_KEY, CartStore
    from .models import Product
    from .utils.viewer import resolve_viewer
    from flask_login import current_user

    @app.before_request
    def load_viewer_and_cart():
        g.viewer = resolve_viewer(current_user)
        if not g.viewer.shops and CART_STORAGE_KEY in session:
            session.pop(CART_STORAGE_KEY, None)
        g.cart = CartStore.load(session if g.viewer.shops else None,
                                max_lines=app.config['CART_MAX_LINES'])
        if len(g.cart):
            g.cart.fill_details(
                Product.query.filter(Product.id.in_(g.cart.product_ids())).all()
            )

    # Error handlers
    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(403)
    def forbidden_error(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return render_template('errors/500.html'), 500

    # Context processors
    @app.context_processor
    def inject_globals():
        cart = g.get('cart')
        return dict(
            viewer=g.get('viewer'),
            cart=cart,
            cart_count=cart.item_count() if cart is not None else 0,
        )

    @app.template_filter('money')
    def money_filter(value):
        """Format an amount for display."""
        return f"PKR {float(value or 0):,.2f}"

    return app
