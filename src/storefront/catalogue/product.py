"""Product aggregate root and its repository."""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, Integer, List, String, Text

from storefront.domain import storefront

_DETAIL_FIELDS = (
    "name",
    "description",
    "long_description",
    "price",
    "brand",
    "category",
    "stock",
    "images",
    "compatibility",
)


@storefront.aggregate
class Product:
    """A catalogue entry: camera body, lens or accessory.

    ``stock`` is a single integer. Whether the product can be bought is
    derived from it (``in_stock``); there is no separate flag.
    """

    name = String(required=True, max_length=255)
    description = Text(required=True)
    long_description = Text()
    price = Float(required=True, min_value=0.0)
    brand = String(required=True, max_length=100)
    category = String(required=True, max_length=100)  # e.g. Camera, Lens, Accessory
    stock = Integer(default=0, min_value=0)
    images = List(content_type=String, default=list)  # Image URLs
    compatibility = List(content_type=String, default=list)  # Ids of compatible products
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cannot_be_compatible_with_itself(self):
        if self.id and str(self.id) in (self.compatibility or []):
            raise ValidationError({"compatibility": ["A product cannot be compatible with itself"]})

    @property
    def in_stock(self) -> bool:
        return (self.stock or 0) > 0

    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        brand,
        category,
        long_description=None,
        stock=0,
        images=None,
        compatibility=None,
    ):
        now = datetime.now(UTC)
        return cls(
            name=name,
            description=description,
            long_description=long_description,
            price=price,
            brand=brand,
            category=category,
            stock=stock or 0,
            images=list(images or []),
            compatibility=[str(c) for c in compatibility or []],
            created_at=now,
            updated_at=now,
        )

    def update_details(self, **changes):
        """Apply a partial update. Unknown keys are rejected, ``None`` values skipped."""
        unknown = set(changes) - set(_DETAIL_FIELDS)
        if unknown:
            raise ValidationError({"_entity": [f"Unknown product fields: {', '.join(sorted(unknown))}"]})

        for field_name, value in changes.items():
            if value is None:
                continue
            if field_name in ("images", "compatibility"):
                value = [str(v) for v in value]
            setattr(self, field_name, value)

        self.updated_at = datetime.now(UTC)

    def toggle_stock(self, restock_quantity=1):
        """Flip availability: in stock drops to zero, out of stock is restocked."""
        if self.in_stock:
            self.stock = 0
        else:
            if restock_quantity is None or restock_quantity < 1:
                raise ValidationError({"restock_quantity": ["Restock quantity must be at least 1"]})
            self.stock = restock_quantity
        self.updated_at = datetime.now(UTC)


@storefront.repository(part_of=Product)
class ProductRepository:
    def _all(self, queryset):
        """Evaluate ``queryset`` in full, past the default page size."""
        results = queryset.all()
        if results.total > len(results.items):
            results = queryset.limit(results.total).all()
        return list(results.items)

    def resolve(self, ids) -> dict:
        """Map each existing product id in ``ids`` to its Product. Missing ids are left out."""
        wanted = list({str(i) for i in ids})
        if not wanted:
            return {}
        products = self._all(self._dao.query.filter(id__in=wanted))
        return {str(p.id): p for p in products}

    def are_compatible(self, first_id, second_id) -> bool:
        """True if either product lists the other in its compatibility.

        Raises ``ObjectNotFoundError`` if either product does not exist.
        """
        products = self.resolve([first_id, second_id])
        first, second = products.get(str(first_id)), products.get(str(second_id))
        if first is None or second is None:
            raise ObjectNotFoundError({"_entity": "Product(s) not found"})
        return str(second.id) in (first.compatibility or []) or str(first.id) in (second.compatibility or [])

    def search(self, keyword=None, category=None, brand=None, page=1, limit=20):
        """Filter the catalogue and return one page as ``(products, total)``.

        ``keyword`` matches name or description, case-insensitively.
        """
        queryset = self._dao.query
        if category:
            queryset = queryset.filter(category=category)
        if brand:
            queryset = queryset.filter(brand=brand)

        products = self._all(queryset)
        if keyword:
            needle = keyword.lower()
            products = [
                p for p in products if needle in (p.name or "").lower() or needle in (p.description or "").lower()
            ]

        products.sort(key=lambda p: p.created_at or datetime.min.replace(tzinfo=UTC))
        page = max(page, 1)
        start = (page - 1) * limit
        return products[start : start + limit], len(products)
