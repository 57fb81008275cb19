"""Order models."""

from datetime import datetime
from fasttrack.extensions import db


class Order(db.Model):
    """Order model."""
    __tablename__ = 'orders'

    STATUSES = ('pending', 'processing', 'completed', 'cancelled', 'refunded')
    PAYMENT_COD = 'COD'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), index=True)

    # Contact and shipping
    customer_name = db.Column(db.String(150), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    shipping_address = db.Column(db.String(500), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(20), nullable=False)

    total_amount = db.Column(db.Float, nullable=False)
    # Cash on delivery is the only payment method, so orders are final when placed
    status = db.Column(db.String(20), nullable=False, default='completed')
    payment_method = db.Column(db.String(20), nullable=False, default=PAYMENT_COD)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    # Relationships
    items = db.relationship('OrderItem', backref='order', lazy='dynamic', cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'customer_name': self.customer_name,
            'email': self.email,
            'shipping_address': self.shipping_address,
            'city': self.city,
            'phone': self.phone,
            'total_amount': self.total_amount,
            'status': self.status,
            'payment_method': self.payment_method,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Order {self.id}>'


class OrderItem(db.Model):
    """Order line, immutable once written."""
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False)
    # No foreign key: deleting a product leaves its order history intact
    product_id = db.Column(db.Integer, nullable=False, index=True)
    product_name = db.Column(db.String(150), nullable=False)  # Snapshot of product name
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)

    product = db.relationship(
        'Product',
        primaryjoin='foreign(OrderItem.product_id) == Product.id',
        viewonly=True
    )

    @property
    def subtotal(self):
        return self.unit_price * self.quantity

    def to_dict(self):
        return {
            'id': self.id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'product_name': self.product_name,
            'quantity': self.quantity,
            'unit_price': self.unit_price,
        }

    def __repr__(self):
        return f'<OrderItem {self.product_name} x {self.quantity}>'
