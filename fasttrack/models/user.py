"""User model."""

from datetime import datetime
from flask_login import UserMixin
from fasttrack.extensions import db, bcrypt


class User(UserMixin, db.Model):
    """User model for customers and staff."""
    __tablename__ = 'users'

    ROLES = ('customer', 'admin')

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    username = db.Column(db.String(64), unique=True, index=True)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    role = db.Column(db.String(20), nullable=False, default='customer')  # customer, admin
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    orders = db.relationship('Order', backref='customer', lazy='dynamic')

    @property
    def display_name(self):
        """Full name, falling back to username then email."""
        full_name = ' '.join(part for part in (self.first_name, self.last_name) if part)
        return full_name or self.username or self.email

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_admin(self):
        """Check if user is staff."""
        return self.role == 'admin'

    def __repr__(self):
        return f'<User {self.email}>'
