"""Shopping Cart aggregate, the single mutable staging list per user.

A user has at most one cart. It is created on the first write, emptied at
checkout and never deleted. Each product appears at most once; adding a
product that is already present replaces its quantity.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.domain import storefront
from storefront.exceptions import InvalidQuantityError


def ensure_positive_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantityError(quantity)
    return quantity


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def product_appears_at_most_once(self):
        product_ids = [str(i.product_id) for i in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def _find(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def upsert_item(self, product_id, quantity):
        """Set the quantity for a product, adding the line if it is new."""
        ensure_positive_quantity(quantity)

        now = datetime.now(UTC)
        existing = self._find(product_id)
        if existing:
            existing.quantity = quantity
        else:
            self.add_items(CartItem(product_id=product_id, quantity=quantity, added_at=now))

        self.updated_at = now

    def remove_item(self, product_id):
        """Drop the line for a product. Removing a product that is not in the cart is a no-op."""
        existing = self._find(product_id)
        if existing is None:
            return

        self.remove_items(existing)
        self.updated_at = datetime.now(UTC)

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_user(self, user_id) -> ShoppingCart | None:
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        # Reload through the repository so line items are attached and tracked
        return self.get(results[0].id) if results else None
