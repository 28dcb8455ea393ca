"""Cart validation: reconcile cart lines against the live product store.

``validate_cart`` is a pure function over a cart and a product lookup. It
mutates the cart in place and returns the warnings a shopper should see.
``ValidateCart`` wraps it for a stored cart and persists any adjustment.
"""

from collections.abc import Callable

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import logger, storefront
from storefront.product.product import Product
from storefront.shared.pricing import money

ProductLookup = Callable[[str], Product | None]


def validate_cart(cart: ShoppingCart, lookup: ProductLookup) -> tuple[ShoppingCart, list[str]]:
    """Bring every line in line with the live product data.

    ``lookup`` returns the live product for an id, or None when it no longer
    exists (or is no longer on sale).
    """
    warnings: list[str] = []

    for item in list(cart.items):
        product_id = str(item.product_id)
        name = item.product_name
        product = lookup(product_id)

        if product is None:
            warnings.append(f"'{name}' is no longer available and has been removed from your cart.")
            cart.remove_item(product_id)
            continue

        if money(product.price) != money(item.unit_price):
            warnings.append(f"The price for '{name}' has changed to {product.price:.2f}.")
            cart.reprice_item(product_id, product.price)

        item.stock_available = product.stock
        if product.stock < item.quantity:
            if product.stock == 0:
                warnings.append(f"'{name}' is now out of stock and has been removed.")
                cart.remove_item(product_id)
            else:
                warnings.append(f"Only {product.stock} of '{name}' are available. Your quantity has been updated.")
                cart.update_quantity(product_id, product.stock)

    return cart, warnings


def live_product_lookup() -> ProductLookup:
    return current_domain.repository_for(Product).find_live


@storefront.command(part_of="ShoppingCart")
class ValidateCart:
    session_id = String(required=True, max_length=255)


@storefront.command_handler(part_of=ShoppingCart)
class ValidateCartHandler:
    @handle(ValidateCart)
    def validate_cart(self, command):
        """Reconcile the session's cart and return the warnings raised."""
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_session(command.session_id)
        if cart is None or cart.is_empty:
            return []

        cart, warnings = validate_cart(cart, live_product_lookup())
        if warnings:
            repo.add(cart)
            logger.info(
                "Cart adjusted during validation",
                session_id=command.session_id,
                adjustments=len(warnings),
            )
        return warnings
