"""Pytest fixtures for FastTrack tests."""

from datetime import date, datetime, timedelta

import pytest

from fasttrack import create_app
from fasttrack.extensions import db
from fasttrack.models import User, Department, Product
from fasttrack.utils.viewer import Guest, Customer, Staff


CUSTOMER_EMAIL = 'ayesha@example.com'
CUSTOMER_PASSWORD = 'secret123'
STAFF_EMAIL = 'manager@fasttrack.com'
STAFF_PASSWORD = 'staffpass'


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database.

    No app context stays pushed while tests run, so each test client
    request gets its own ``g`` and session.
    """
    app = create_app('testing')
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    """Request context for calling services directly."""
    with app.test_request_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    """One customer and one staff account; returns their ids."""
    with app.app_context():
        customer = User(email=CUSTOMER_EMAIL, username='ayesha',
                        first_name='Ayesha', last_name='Khan', role='customer')
        customer.set_password(CUSTOMER_PASSWORD)
        staff = User(email=STAFF_EMAIL, username='staff',
                     first_name='Store', last_name='Manager', role='admin')
        staff.set_password(STAFF_PASSWORD)
        db.session.add_all([customer, staff])
        db.session.commit()
        return {'customer': customer.id, 'staff': staff.id}


@pytest.fixture
def catalog(app):
    """Two departments and four products with known stock; returns ids."""
    today = date.today()
    created = datetime(2026, 1, 1, 9, 0)
    with app.app_context():
        dairy = Department(name='Dairy & Eggs')
        dairy.generate_slug()
        bakery = Department(name='Bakery')
        bakery.generate_slug()
        db.session.add_all([dairy, bakery])
        db.session.flush()

        products = {
            'milk': Product(name='Fresh Milk', price=210.0, stock_quantity=3,
                            department_id=dairy.id, expiry_date=today + timedelta(days=3),
                            created_at=created),
            'eggs': Product(name='Farm Eggs', price=390.0, stock_quantity=25,
                            department_id=dairy.id, expiry_date=today + timedelta(days=30),
                            created_at=created + timedelta(minutes=1)),
            'bread': Product(name='Sourdough Loaf', price=450.0, stock_quantity=0,
                             description='Tangy sourdough with a crispy crust',
                             department_id=bakery.id, created_at=created + timedelta(minutes=2)),
            'rice': Product(name='Basmati Rice', price=2100.0, stock_quantity=8,
                            created_at=created + timedelta(minutes=3)),
        }
        db.session.add_all(products.values())
        db.session.commit()

        ids = {key: product.id for key, product in products.items()}
        ids['dairy'] = dairy.id
        ids['bakery'] = bakery.id
        return ids


@pytest.fixture
def staff_viewer(users):
    return Staff(user_id=users['staff'], email=STAFF_EMAIL, display_name='Store Manager')


@pytest.fixture
def customer_viewer(users):
    return Customer(user_id=users['customer'], email=CUSTOMER_EMAIL, display_name='Ayesha Khan')


@pytest.fixture
def guest_viewer():
    return Guest()


def login(client, email, password):
    return client.post('/login', data={'email': email, 'password': password})


@pytest.fixture
def customer_client(client, users):
    login(client, CUSTOMER_EMAIL, CUSTOMER_PASSWORD)
    return client


@pytest.fixture
def staff_client(client, users):
    login(client, STAFF_EMAIL, STAFF_PASSWORD)
    return client
