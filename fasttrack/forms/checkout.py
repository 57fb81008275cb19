"""Checkout form."""

from flask_wtf import FlaskForm
from wtforms import StringField, HiddenField
from wtforms.validators import DataRequired, Email, Length


class CheckoutForm(FlaskForm):
    """Shipping details plus the serialized cart."""
    customer_name = StringField('Full Name', validators=[
        DataRequired(message='Name is required'),
        Length(max=150)
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    shipping_address = StringField('Shipping Address', validators=[
        DataRequired(message='Address is required'),
        Length(max=500)
    ])
    city = StringField('City', validators=[
        DataRequired(message='City is required'),
        Length(max=100)
    ])
    phone = StringField('Phone Number', validators=[
        DataRequired(message='Phone number is required'),
        Length(max=20)
    ])
    cart = HiddenField('Cart')

    def first_error(self):
        """Message of the first failing field, in form order."""
        for field in self:
            if field.errors:
                return field.errors[0]
        return None
