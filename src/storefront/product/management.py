"""Product catalog management: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.product.product import Product


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=100)
    description = String(max_length=500)
    price = Float(required=True, min_value=0.01)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100)
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Replace a product's details, price and stock level in one edit."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = String(max_length=500)
    price = Float(required=True, min_value=0.01)
    stock = Integer(required=True, min_value=0)
    category = String(max_length=100)
    image_url = String(max_length=500)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)


@storefront.command(part_of="Product")
class SetProductImage:
    product_id = Identifier(required=True)
    image_url = String(required=True, max_length=500)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            category=command.category,
            image_url=command.image_url,
        )
        product.change_price(command.price)
        product.set_stock(command.stock, reason="Stock adjusted")
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
        logger.info("Product deactivated", product_id=str(product.id))

    @handle(SetProductImage)
    def set_product_image(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=product.name,
            description=product.description,
            category=product.category,
            image_url=command.image_url,
        )
        repo.add(product)
