"""Profile form."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Length, Regexp


class ProfileForm(FlaskForm):
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
        Length(max=64),
        Regexp(r'^[a-z0-9_]+$',
               message='Username can only contain lowercase letters, numbers, and underscores.')
    ])
