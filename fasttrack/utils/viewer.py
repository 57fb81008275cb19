"""Who is making the request, resolved once per request.

A viewer is exactly one of ``Guest``, ``Customer`` or ``Staff``. Code that
needs to branch on role takes a viewer instead of poking at the user row.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class Guest:
    """Anonymous visitor."""

    shops = True


@dataclass(frozen=True)
class Customer:
    """Signed-in shopper."""

    user_id: int
    email: str
    display_name: Optional[str] = None

    shops = True


@dataclass(frozen=True)
class Staff:
    """Signed-in administrator. Staff manage the store and do not shop."""

    user_id: int
    email: str
    display_name: Optional[str] = None

    shops = False


Viewer = Union[Guest, Customer, Staff]


def resolve_viewer(user) -> Viewer:
    """Turn a Flask-Login user (or anonymous user) into a viewer."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return Guest()
    if user.is_admin():
        return Staff(user_id=user.id, email=user.email, display_name=user.display_name)
    return Customer(user_id=user.id, email=user.email, display_name=user.display_name)


def is_staff(viewer) -> bool:
    return isinstance(viewer, Staff)


def user_id_of(viewer) -> Optional[int]:
    """User id for signed-in viewers, None for guests."""
    if isinstance(viewer, (Customer, Staff)):
        return viewer.user_id
    return None
