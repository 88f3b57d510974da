"""Storefront bounded context covering the catalogue, customers, carts and orders.

Handles the cart-to-order checkout and the order status lifecycle, plus the
identity and catalogue records the checkout reads from.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
