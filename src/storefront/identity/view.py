"""Public shape of a user. Never includes the password hash."""

from storefront.identity.user import User


def user_profile(user: User) -> dict:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "is_admin": bool(user.is_admin),
        "phone": user.phone,
        "address": user.address,
        "favorites": list(user.favorites or []),
        "registered_at": user.registered_at,
    }
