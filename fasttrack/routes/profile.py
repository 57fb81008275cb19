"""Profile routes."""

from flask import Blueprint, render_template, redirect, url_for, flash, request, g
from flask_login import login_required, current_user
from fasttrack.forms.profile import ProfileForm
from fasttrack.services.profile import update_profile

profile_bp = Blueprint('profile', __name__)


@profile_bp.route('/', methods=['GET', 'POST'])
@login_required
def edit():
    """View and update the signed-in user's profile."""
    if request.method == 'POST':
        result = update_profile(g.viewer, request.form)
        flash(result.message, result.category)
        if result.success:
            return redirect(url_for('profile.edit'))
        form = ProfileForm(formdata=request.form)
    else:
        form = ProfileForm(obj=current_user)

    return render_template('profile/edit.html', form=form)
