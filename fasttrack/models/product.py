"""Department and Product models."""

from datetime import datetime
from slugify import slugify
from fasttrack.extensions import db


class Department(db.Model):
    """Store department a product is shelved under."""
    __tablename__ = 'departments'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(120), unique=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    products = db.relationship('Product', backref='department', lazy='dynamic')

    def generate_slug(self):
        """Generate a unique slug for the department."""
        base_slug = slugify(self.name) if self.name else 'department'
        slug = base_slug
        counter = 1
        while Department.query.filter_by(slug=slug).first() is not None:
            slug = f"{base_slug}-{counter}"
            counter += 1
        self.slug = slug

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'slug': self.slug}

    def __repr__(self):
        return f'<Department {self.name}>'


class Product(db.Model):
    """Product model."""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    department_id = db.Column(db.Integer, db.ForeignKey('departments.id'))
    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Float, nullable=False, default=0.0)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)
    image_url = db.Column(db.String(255))
    expiry_date = db.Column(db.Date)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def is_in_stock(self):
        """Check if product is in stock."""
        return (self.stock_quantity or 0) > 0

    @classmethod
    def increment_stock(cls, product_id, quantity):
        """Add to a product's stock in one UPDATE statement.

        The addition happens inside the database, so concurrent restocks
        never overwrite each other. Returns True if a row was updated;
        the caller commits.
        """
        updated = cls.query.filter_by(id=product_id).update(
            {cls.stock_quantity: cls.stock_quantity + quantity},
            synchronize_session=False
        )
        return updated == 1

    def to_dict(self):
        """Product record as rendered by views and stored in carts."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'price': self.price or 0.0,
            'stock_quantity': self.stock_quantity or 0,
            'image_url': self.image_url,
            'department_id': self.department_id,
            'department_name': self.department.name if self.department else None,
            'expiry_date': self.expiry_date.isoformat() if self.expiry_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Product {self.name}>'
