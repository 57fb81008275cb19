"""Profile updates for signed-in users."""

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from fasttrack.extensions import db
from fasttrack.forms.profile import ProfileForm
from fasttrack.models import User
from fasttrack.services.results import ActionResult
from fasttrack.utils.viewer import user_id_of


def update_profile(viewer, form_data):
    user_id = user_id_of(viewer)
    if user_id is None:
        return ActionResult.fail('You must be logged in to update your profile.')

    form = ProfileForm(formdata=form_data)
    if not form.validate():
        for field in form:
            if field.errors:
                return ActionResult.fail(field.errors[0])

    username = form.username.data.lower()
    taken = User.query.filter(User.username == username, User.id != user_id).first()
    if taken:
        return ActionResult.fail('This username is already taken.')

    user = User.query.filter_by(id=user_id).first()
    if user is None:
        return ActionResult.fail('You must be logged in to update your profile.')

    user.first_name = form.first_name.data.strip()
    user.last_name = form.last_name.data.strip()
    user.username = username
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception('Profile update failed for user %s', user_id)
        return ActionResult.fail('Failed to update profile. Please try again.')

    return ActionResult.ok('Profile updated successfully!')
