"""Authentication forms."""

from flask import current_app
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SelectField
from wtforms.validators import DataRequired, Email, Length, EqualTo, ValidationError
from fasttrack.models import User


class LoginForm(FlaskForm):
    """Login form."""
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])
    remember = BooleanField('Remember Me')


class SignupForm(FlaskForm):
    """Customer or staff registration form."""
    first_name = StringField('First Name', validators=[
        DataRequired(message='Please fill in all required fields.'),
        Length(max=100)
    ])
    last_name = StringField('Last Name', validators=[
        DataRequired(message='Please fill in all required fields.'),
        Length(max=100)
    ])
    username = StringField('Username', validators=[
        DataRequired(message='Please fill in all required fields.'),
        Length(max=64)
    ])
    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Please enter a valid email address')
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=6, message='Password must be at least 6 characters.')
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        DataRequired(message='Please confirm your password'),
        EqualTo('password', message='Passwords must match')
    ])
    role = SelectField('Account Type', choices=[('customer', 'Customer'), ('admin', 'Staff')],
                       default='customer')
    staff_id = StringField('Staff Secret ID')

    def validate_email(self, field):
        """Check if email already exists."""
        if User.query.filter_by(email=field.data.lower()).first():
            raise ValidationError('This email is already registered.')

    def validate_username(self, field):
        if User.query.filter_by(username=field.data.lower()).first():
            raise ValidationError('This username is already taken.')

    def validate_staff_id(self, field):
        """Staff accounts need the shared staff code."""
        if self.role.data == 'admin' and field.data != current_app.config['STAFF_SIGNUP_CODE']:
            raise ValidationError('Invalid Staff Secret ID. Access denied.')
