"""Uniform outcome of a user-triggered action."""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class ActionResult:
    success: bool
    message: str
    order_id: Optional[int] = None

    @classmethod
    def ok(cls, message, **extra):
        return cls(True, message, **extra)

    @classmethod
    def fail(cls, message):
        return cls(False, message)

    @property
    def category(self):
        """Flash category for this result."""
        return 'success' if self.success else 'danger'

    def to_dict(self):
        data = asdict(self)
        if data['order_id'] is None:
            del data['order_id']
        return data


UNAUTHORIZED = 'Unauthorized. Admin access required.'
