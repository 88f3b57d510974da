"""Storefront-specific failures.

Rule violations extend Protean's ``ValidationError`` so they travel the same
path as field validation errors. Access failures are separate: they carry a
fixed message that never says whether the target exists.
"""

from protean.exceptions import ValidationError


class EmptyCartError(ValidationError):
    """Checkout attempted on a cart with no line items."""

    def __init__(self):
        super().__init__({"cart": ["Cart is empty"]})


class InvalidQuantityError(ValidationError):
    """Cart quantity is not a positive integer."""

    def __init__(self, quantity):
        super().__init__({"quantity": [f"Quantity must be a positive integer, got {quantity!r}"]})


class AccessDeniedError(Exception):
    """Base for authorization failures."""

    message = "Access denied"

    def __init__(self):
        super().__init__(self.message)


class UnauthorizedError(AccessDeniedError):
    """Requester neither owns the resource nor holds the admin role."""

    message = "Unauthorized"


class ForbiddenError(AccessDeniedError):
    """Operation is restricted to admins."""

    message = "Forbidden"
