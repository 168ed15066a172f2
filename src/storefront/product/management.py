"""Catalogue management: admin commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=100)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=20)
    stock = Integer(required=True, min_value=0)
    image_url = String(required=True, max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    price = Float(min_value=0.0)
    category = String(max_length=20)
    stock = Integer(min_value=0)
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), category=product.category)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        repo.lock([command.product_id])
        product = repo.fetch(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
            image_url=command.image_url,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        repo.lock([command.product_id])
        product = repo.fetch(command.product_id)
        repo.remove(product)
        logger.info("Product deleted", product_id=str(command.product_id))
