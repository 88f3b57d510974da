"""Catalogue management: commands and handler for admin product maintenance."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def _load_list(value):
    if value is None:
        return None
    return json.loads(value) if isinstance(value, str) else list(value)


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255)
    description = Text(required=True)
    long_description = Text()
    price = Float(required=True, min_value=0.0)
    brand = String(required=True, max_length=100)
    category = String(required=True, max_length=100)
    stock = Integer(default=0, min_value=0)
    images = Text()  # JSON: list of image URLs
    compatibility = Text()  # JSON: list of product ids


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    long_description = Text()
    price = Float(min_value=0.0)
    brand = String(max_length=100)
    category = String(max_length=100)
    stock = Integer(min_value=0)
    images = Text()  # JSON: list of image URLs
    compatibility = Text()  # JSON: list of product ids


@storefront.command(part_of="Product")
class ToggleProductStock:
    product_id = Identifier(required=True)
    restock_quantity = Integer(default=1)


@storefront.command(part_of="Product")
class DeleteProduct:
    """Remove a product. Carts, favorites and orders that reference it are left alone."""

    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            long_description=command.long_description,
            price=command.price,
            brand=command.brand,
            category=command.category,
            stock=command.stock,
            images=_load_list(command.images),
            compatibility=_load_list(command.compatibility),
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product created", product_id=str(product.id), price=product.price)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            long_description=command.long_description,
            price=command.price,
            brand=command.brand,
            category=command.category,
            stock=command.stock,
            images=_load_list(command.images),
            compatibility=_load_list(command.compatibility),
        )
        repo.add(product)

    @handle(ToggleProductStock)
    def toggle_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_stock(restock_quantity=command.restock_quantity)
        repo.add(product)

        logger.info("Product stock toggled", product_id=str(product.id), stock=product.stock)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        logger.info("Product deleted", product_id=str(command.product_id))
