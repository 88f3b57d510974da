"""Read-side shapes for products, joined into carts, orders and favorites."""

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def product_summary(product: Product | None) -> dict | None:
    if product is None:
        return None
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "brand": product.brand,
        "category": product.category,
        "images": list(product.images or []),
        "stock": product.stock,
        "in_stock": product.in_stock,
    }


def product_detail(product: Product) -> dict:
    """Full product with ``compatibility`` expanded to ``{id, name, brand}``."""
    compatible = current_domain.repository_for(Product).resolve(product.compatibility or [])
    return {
        **product_summary(product),
        "long_description": product.long_description,
        "compatibility": [
            {"id": pid, "name": compatible[pid].name, "brand": compatible[pid].brand}
            for pid in product.compatibility or []
            if pid in compatible
        ],
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def resolve_products(product_ids) -> list[dict]:
    """Summaries for ``product_ids`` in the given order, skipping ids no longer in the catalogue."""
    products = current_domain.repository_for(Product).resolve(product_ids)
    return [product_summary(products[pid]) for pid in product_ids if pid in products]
