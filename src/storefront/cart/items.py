"""Cart item management: commands and handler.

Every command names the cart by its session id. The cart is created on first
use and every mutation is written back to the repository.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.product.product import Product


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(default=1, min_value=1)
    user_id = Identifier()


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Set a line's quantity. Zero or a negative value removes the line."""

    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id = String(required=True, max_length=255)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    session_id = String(required=True, max_length=255)


def _live_product(product_id) -> Product:
    product = current_domain.repository_for(Product).find_live(product_id)
    if product is None:
        raise ObjectNotFoundError({"_entity": f"Product `{product_id}` not found"})
    return product


def _insufficient_stock(product, requested):
    return ValidationError(
        {"quantity": [f"Insufficient stock for '{product.name}': {product.stock} available, {requested} requested"]}
    )


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = _live_product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.session_id)

        existing = cart.item_for(product.id)
        requested = (existing.quantity if existing else 0) + command.quantity
        if requested > product.stock:
            logger.warning(
                "Insufficient stock for cart add",
                product_id=str(product.id),
                requested=requested,
                available=product.stock,
            )
            raise _insufficient_stock(product, requested)

        if command.user_id and not cart.user_id:
            cart.user_id = command.user_id

        cart.add_item(
            product_id=str(product.id),
            product_name=product.name,
            unit_price=product.price,
            quantity=command.quantity,
            image_url=product.image_url,
            stock_available=product.stock,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.session_id)

        if cart.item_for(command.product_id) is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        if command.quantity > 0:
            product = _live_product(command.product_id)
            if command.quantity > product.stock:
                raise _insufficient_stock(product, command.quantity)

        cart.update_quantity(command.product_id, command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        if cart is None:
            return

        cart.remove_item(command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        if cart is None:
            return

        cart.clear()
        repo.add(cart)
