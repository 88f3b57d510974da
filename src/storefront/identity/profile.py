"""Profile and favorites management: commands and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    name = String(max_length=100)
    phone = String(max_length=20)
    address = Text()
    password = String(max_length=128)


@storefront.command(part_of="User")
class AddFavorite:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class RemoveFavorite:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        changes = {}
        for field_name in ("name", "phone", "address", "password"):
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value

        user.update_profile(**changes)
        repo.add(user)

    @handle(AddFavorite)
    def add_favorite(self, command):
        # Only existing products can be favorited
        current_domain.repository_for(Product).get(command.product_id)

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.add_favorite(command.product_id)
        repo.add(user)

    @handle(RemoveFavorite)
    def remove_favorite(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_favorite(command.product_id)
        repo.add(user)
