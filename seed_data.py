"""Seed script to populate database with sample data."""

from datetime import date, datetime, timedelta

from fasttrack import create_app
from fasttrack.extensions import db
from fasttrack.models import User, Department, Product, Order, OrderItem


DEPARTMENTS = {
    'Fruits & Vegetables': [
        {'name': 'Bananas (1 dozen)', 'price': 180, 'stock': 40, 'shelf_days': 6,
         'description': 'Ripe Cavendish bananas'},
        {'name': 'Tomatoes (1 kg)', 'price': 220, 'stock': 8, 'shelf_days': 5,
         'description': 'Fresh red tomatoes'},
        {'name': 'Potatoes (2 kg)', 'price': 240, 'stock': 60, 'shelf_days': 30},
    ],
    'Dairy & Eggs': [
        {'name': 'Fresh Milk (1 L)', 'price': 210, 'stock': 3, 'shelf_days': 4,
         'description': 'Full cream pasteurised milk'},
        {'name': 'Farm Eggs (12)', 'price': 390, 'stock': 25, 'shelf_days': 14},
        {'name': 'Cheddar Cheese (200 g)', 'price': 850, 'stock': 12, 'shelf_days': 60},
    ],
    'Bakery': [
        {'name': 'Sourdough Loaf', 'price': 450, 'stock': 0, 'shelf_days': 3,
         'description': 'Classic tangy sourdough with a crispy crust'},
        {'name': 'Croissant', 'price': 180, 'stock': 15, 'shelf_days': 2},
    ],
    'Pantry': [
        {'name': 'Basmati Rice (5 kg)', 'price': 2100, 'stock': 30},
        {'name': 'Cooking Oil (1 L)', 'price': 650, 'stock': 4},
    ],
}


def seed_database():
    """Seed the database with sample data."""
    app = create_app()

    with app.app_context():
        # Create tables
        db.create_all()

        # Check if already seeded
        if User.query.filter_by(email='admin@fasttrack.com').first():
            print('Database already seeded!')
            return

        print('Seeding database...')

        admin = User(
            email='admin@fasttrack.com',
            username='admin',
            first_name='Store',
            last_name='Admin',
            role='admin'
        )
        admin.set_password('admin123')
        db.session.add(admin)

        customer = User(
            email='ayesha@example.com',
            username='ayesha',
            first_name='Ayesha',
            last_name='Khan',
            role='customer'
        )
        customer.set_password('user123')
        db.session.add(customer)

        products = []
        today = date.today()
        for dept_name, items in DEPARTMENTS.items():
            department = Department(name=dept_name)
            department.generate_slug()
            db.session.add(department)
            db.session.flush()

            for data in items:
                shelf_days = data.get('shelf_days')
                product = Product(
                    department_id=department.id,
                    name=data['name'],
                    description=data.get('description'),
                    price=data['price'],
                    stock_quantity=data['stock'],
                    image_url=app.config['PLACEHOLDER_IMAGE_URL'],
                    expiry_date=today + timedelta(days=shelf_days) if shelf_days else None
                )
                db.session.add(product)
                products.append(product)

        db.session.flush()

        # A few past orders so the dashboard chart has data
        now = datetime.utcnow()
        for days_ago, picks in [(0, products[:2]), (1, products[3:5]), (4, products[5:8])]:
            order = Order(
                user_id=customer.id,
                customer_name=customer.display_name,
                email=customer.email,
                shipping_address='House 12, Street 4, Gulberg',
                city='Lahore',
                phone='03001234567',
                total_amount=sum(p.price for p in picks),
                created_at=now - timedelta(days=days_ago)
            )
            db.session.add(order)
            db.session.flush()
            for product in picks:
                db.session.add(OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    product_name=product.name,
                    quantity=1,
                    unit_price=product.price
                ))

        db.session.commit()
        print('Database seeded successfully!')
        print('\nTest Accounts:')
        print('  Staff: admin@fasttrack.com / admin123')
        print('  Customer: ayesha@example.com / user123')


if __name__ == '__main__':
    seed_database()
