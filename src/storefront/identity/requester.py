"""Authenticated requester passed explicitly into every lifecycle operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Requester:
    """Who is asking: the resolved user id and whether they hold the admin role.

    Produced by the HTTP auth layer after the bearer token is verified. The
    core compares ids and checks the flag; it never verifies credentials.
    """

    user_id: str
    is_admin: bool = False

    def owns(self, owner_id) -> bool:
        return str(owner_id) == str(self.user_id)

    def can_access(self, owner_id) -> bool:
        return self.is_admin or self.owns(owner_id)
