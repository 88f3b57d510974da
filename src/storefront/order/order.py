"""Order aggregate: an immutable snapshot of a completed checkout.

Line items carry the catalogue price captured when the order was placed and
are never re-priced. After creation only ``status`` changes, and it changes
freely: payments are reconciled by hand, so an admin may move an order from
any status to any other, including back to Processing.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.exceptions import EmptyCartError

ORDER_NUMBER_PREFIX = "OR"
ORDER_NUMBER_DIGITS = 5


class OrderStatus(Enum):
    PROCESSING = "Processing"
    PAID = "Paid"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


def format_order_number(sequence: int) -> str:
    return f"{ORDER_NUMBER_PREFIX}{sequence:0{ORDER_NUMBER_DIGITS}d}"


def parse_order_number(order_number) -> int | None:
    """Sequence part of an order number, or ``None`` if it is not one of ours."""
    if not order_number or not order_number.startswith(ORDER_NUMBER_PREFIX):
        return None
    digits = order_number[len(ORDER_NUMBER_PREFIX) :]
    return int(digits) if digits.isdigit() else None


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A purchased product, its quantity, and the unit price paid for it."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=20, unique=True)
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    shipping_address = Text(required=True)
    payment_method = String(required=True, max_length=50)
    phone = String(required=True, max_length=20)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_matches_line_items(self):
        if not self.items:
            return
        expected = round(sum(item.price * item.quantity for item in self.items), 2)
        if abs(expected - self.total_amount) > 0.005:
            raise ValidationError(
                {"total_amount": [f"Total {self.total_amount} does not match line items {expected}"]}
            )

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, order_number, user_id, lines, shipping_address, payment_method, phone):
        """Create an order from priced cart lines.

        Args:
            order_number: Freshly allocated human-facing number.
            user_id: Owner of the order.
            lines: List of dicts with product_id, quantity and price, where
                price is the catalogue price at this moment.
        """
        if not lines:
            raise EmptyCartError()

        now = datetime.now(UTC)
        total_amount = round(sum(line["price"] * line["quantity"] for line in lines), 2)

        order = cls(
            order_number=order_number,
            user_id=user_id,
            total_amount=total_amount,
            shipping_address=shipping_address,
            payment_method=payment_method,
            phone=phone,
            status=OrderStatus.PROCESSING.value,
            created_at=now,
            updated_at=now,
        )
        with atomic_change(order):
            for line in lines:
                order.add_items(
                    OrderItem(
                        product_id=line["product_id"],
                        quantity=line["quantity"],
                        price=line["price"],
                    )
                )
        return order

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def change_status(self, new_status):
        """Overwrite the status. Every status is reachable from every other."""
        try:
            status = OrderStatus(new_status)
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError({"status": [f"Unknown status {new_status!r}; expected one of {allowed}"]}) from None

        self.status = status.value
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=Order)
class OrderRepository:
    def _all(self, queryset):
        """Evaluate ``queryset`` in full, past the default page size."""
        results = queryset.all()
        if results.total > len(results.items):
            results = queryset.limit(results.total).all()
        return list(results.items)

    def find_by_number(self, order_number) -> Order | None:
        results = self._dao.query.filter(order_number=order_number).all().items
        return self.get(results[0].id) if results else None

    def for_user(self, user_id) -> list[Order]:
        """Every order owned by ``user_id``, newest first."""
        orders = [self.get(o.id) for o in self._all(self._dao.query.filter(user_id=str(user_id)))]
        orders.sort(key=lambda o: (o.created_at, o.order_number), reverse=True)
        return orders

    def next_order_number(self) -> str:
        """One past the highest number issued so far, starting at OR00001."""
        sequences = [parse_order_number(o.order_number) for o in self._all(self._dao.query)]
        return format_order_number(max((s for s in sequences if s is not None), default=0) + 1)
