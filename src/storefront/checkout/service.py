"""Checkout workflow: validate the cart, then place the order.

``review_checkout`` backs the checkout page and ``submit_checkout`` backs the
form submission. Both return outcome objects instead of raising, so the
caller can show the shopper a message in every case.
"""

from dataclasses import dataclass, field

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.validation import ValidateCart
from storefront.checkout.placement import PlaceOrder
from storefront.domain import logger
from storefront.order.order import Order

EMPTY_CART = "Your cart is empty."
EMPTY_CART_AT_REVIEW = "Your cart is empty. Please add items before checkout."
CART_ADJUSTED = "Your cart was updated. Please review the changes before placing your order."
CHECKOUT_FAILED = "Unable to process your order. Please try again."


@dataclass
class CheckoutCustomer:
    customer_name: str
    customer_email: str
    shipping_address: str
    phone_number: str | None = None
    notes: str | None = None
    user_id: str | None = None


@dataclass
class CheckoutOutcome:
    order_id: str | None = None
    order_number: str | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.order_id is not None


@dataclass
class CheckoutReview:
    cart: ShoppingCart | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ready(self) -> bool:
        return self.error is None


def _first_message(exc: ValidationError) -> str:
    messages = exc.messages if isinstance(exc.messages, dict) else {"_": [str(exc.messages)]}
    for values in messages.values():
        if isinstance(values, list) and values:
            return str(values[0])
        if values:
            return str(values)
    return CHECKOUT_FAILED


def _cart_for(session_id) -> ShoppingCart | None:
    return current_domain.repository_for(ShoppingCart).for_session(session_id)


def review_checkout(session_id: str) -> CheckoutReview:
    """Validate the cart for the checkout page. Refuses empty or adjusted carts."""
    cart = _cart_for(session_id)
    if cart is None or cart.is_empty:
        return CheckoutReview(cart=cart, error=EMPTY_CART_AT_REVIEW)

    warnings = current_domain.process(ValidateCart(session_id=session_id), asynchronous=False)
    cart = _cart_for(session_id)
    if warnings:
        return CheckoutReview(cart=cart, warnings=warnings, error=CART_ADJUSTED)
    if cart is None or cart.is_empty:
        return CheckoutReview(cart=cart, error=EMPTY_CART_AT_REVIEW)
    return CheckoutReview(cart=cart)


def submit_checkout(session_id: str, customer: CheckoutCustomer) -> CheckoutOutcome:
    """Revalidate the cart and, if nothing changed, place the order."""
    cart = _cart_for(session_id)
    if cart is None or cart.is_empty:
        logger.warning("Checkout failed: cart is empty", session_id=session_id)
        return CheckoutOutcome(error=EMPTY_CART)

    try:
        warnings = current_domain.process(ValidateCart(session_id=session_id), asynchronous=False)
        if warnings:
            return CheckoutOutcome(warnings=warnings, error=CART_ADJUSTED)

        order_id = current_domain.process(
            PlaceOrder(
                session_id=session_id,
                user_id=customer.user_id,
                customer_name=customer.customer_name,
                customer_email=customer.customer_email,
                shipping_address=customer.shipping_address,
                phone_number=customer.phone_number,
                notes=customer.notes,
            ),
            asynchronous=False,
        )
    except ValidationError as exc:
        logger.warning("Checkout rejected", session_id=session_id, errors=exc.messages)
        return CheckoutOutcome(error=_first_message(exc))
    except Exception:
        logger.exception("Checkout failed during order creation", session_id=session_id)
        return CheckoutOutcome(error=CHECKOUT_FAILED)

    order = current_domain.repository_for(Order).get(order_id)
    return CheckoutOutcome(order_id=order_id, order_number=order.order_number)
