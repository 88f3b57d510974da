"""User aggregate with credentials, role flag, contact details and favorites."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, List, String, Text

from storefront.domain import storefront
from storefront.identity.passwords import hash_password, verify_password

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@storefront.aggregate
class User:
    """A registered shopper or admin.

    Users are never hard-deleted. ``favorites`` holds product ids; entries
    for products removed from the catalogue are tolerated and simply resolve
    to nothing.
    """

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    is_admin = Boolean(default=False)
    phone = String(max_length=20)
    address = Text()
    favorites = List(content_type=String, default=list)
    registered_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        email = self.email or ""
        local_part, _, domain_part = email.partition("@")
        if not local_part or "." not in domain_part or " " in email or "@" in domain_part:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @classmethod
    def register(cls, name, email, password, phone=None, is_admin=False):
        if not password or len(password) < 6:
            raise ValidationError({"password": ["Password must be at least 6 characters"]})

        return cls(
            name=name,
            email=email.strip().lower(),
            password_hash=hash_password(password),
            is_admin=is_admin,
            phone=phone,
            registered_at=datetime.now(UTC),
        )

    def check_password(self, password) -> bool:
        return verify_password(password, self.password_hash)

    def update_profile(self, name=_UNSET, phone=_UNSET, address=_UNSET, password=_UNSET):
        """Apply a partial profile update; only the arguments given are changed."""
        if name is not _UNSET and name is not None:
            self.name = name
        if phone is not _UNSET:
            self.phone = phone
        if address is not _UNSET:
            self.address = address
        if password is not _UNSET and password:
            if len(password) < 6:
                raise ValidationError({"password": ["Password must be at least 6 characters"]})
            self.password_hash = hash_password(password)

    # -------------------------------------------------------------------
    # Favorites
    # -------------------------------------------------------------------
    def add_favorite(self, product_id):
        favorites = list(self.favorites or [])
        if str(product_id) not in favorites:
            favorites.append(str(product_id))
            self.favorites = favorites

    def remove_favorite(self, product_id):
        self.favorites = [f for f in (self.favorites or []) if f != str(product_id)]


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email) -> User | None:
        results = self._dao.query.filter(email=email.strip().lower()).all().items
        return results[0] if results else None
