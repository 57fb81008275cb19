"""Authentication routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, g, session
from flask_login import login_user, logout_user, login_required, current_user
from fasttrack.cart import CART_STORAGE_KEY
from fasttrack.extensions import db
from fasttrack.models import User
from fasttrack.forms.auth import LoginForm, SignupForm

auth_bp = Blueprint('auth', __name__)


def _home_for(user):
    """Redirect based on role."""
    if user.is_admin():
        return redirect(url_for('admin.dashboard'))
    return redirect(url_for('shop.index'))


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """User login."""
    if current_user.is_authenticated:
        return _home_for(current_user)

    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.lower()).first()

        if user and user.check_password(form.password.data):
            if not user.is_active:
                flash('Your account has been deactivated. Please contact support.', 'danger')
                return render_template('auth/login.html', form=form)

            login_user(user, remember=form.remember.data)
            flash(f'Welcome back, {user.display_name}!', 'success')

            next_page = request.args.get('next')
            if next_page and next_page.startswith('/') and not next_page.startswith('//'):
                return redirect(next_page)
            return _home_for(user)
        else:
            flash('Invalid email or password.', 'danger')

    return render_template('auth/login.html', form=form)


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    """Customer or staff registration."""
    if current_user.is_authenticated:
        return _home_for(current_user)

    form = SignupForm()
    if form.validate_on_submit():
        user = User(
            email=form.email.data.lower(),
            username=form.username.data.lower(),
            first_name=form.first_name.data,
            last_name=form.last_name.data,
            role=form.role.data
        )
        user.set_password(form.password.data)

        db.session.add(user)
        db.session.commit()

        login_user(user)
        flash('Registration successful!', 'success')
        return _home_for(user)

    return render_template('auth/signup.html', form=form)


@auth_bp.route('/logout')
@login_required
def logout():
    """User logout. The cart goes with the session."""
    g.cart.clear()
    session.pop(CART_STORAGE_KEY, None)
    logout_user()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
