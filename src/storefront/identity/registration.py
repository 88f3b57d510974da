"""User registration: command and handler.

Covers both self-service sign-up and admin provisioning; the API decides
who may set ``is_admin``.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)
    phone = String(max_length=20)
    is_admin = Boolean(default=False)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["User already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password=command.password,
            phone=command.phone,
            is_admin=bool(command.is_admin),
        )
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), is_admin=user.is_admin)
        return str(user.id)
