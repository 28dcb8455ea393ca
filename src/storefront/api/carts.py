"""FastAPI endpoints for session carts and checkout.

Carts are addressed by the caller's session id.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    AddToCartRequest,
    CartCountResponse,
    CartView,
    CheckoutRequest,
    CheckoutResponse,
    CheckoutReviewResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity
from storefront.checkout.service import CheckoutCustomer, review_checkout, submit_checkout

cart_router = APIRouter(prefix="/carts", tags=["carts"])


def _cart_view(session_id: str) -> CartView:
    cart = current_domain.repository_for(ShoppingCart).get_or_create(session_id)
    return CartView.from_cart(cart)


@cart_router.get("/{session_id}", response_model=CartView)
async def view_cart(session_id: str) -> CartView:
    return _cart_view(session_id)


@cart_router.get("/{session_id}/count", response_model=CartCountResponse)
async def cart_count(session_id: str) -> CartCountResponse:
    cart = current_domain.repository_for(ShoppingCart).for_session(session_id)
    return CartCountResponse(count=cart.total_items if cart else 0)


@cart_router.post("/{session_id}/items", status_code=201, response_model=CartView)
async def add_to_cart(session_id: str, body: AddToCartRequest) -> CartView:
    command = AddToCart(
        session_id=session_id,
        product_id=body.product_id,
        quantity=body.quantity,
        user_id=body.user_id,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_view(session_id)


@cart_router.put("/{session_id}/items/{product_id}", response_model=CartView)
async def update_cart_quantity(session_id: str, product_id: str, body: UpdateCartQuantityRequest) -> CartView:
    command = UpdateCartQuantity(session_id=session_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_view(session_id)


@cart_router.delete("/{session_id}/items/{product_id}", response_model=CartView)
async def remove_from_cart(session_id: str, product_id: str) -> CartView:
    current_domain.process(RemoveFromCart(session_id=session_id, product_id=product_id), asynchronous=False)
    return _cart_view(session_id)


@cart_router.delete("/{session_id}", response_model=StatusResponse)
async def clear_cart(session_id: str) -> StatusResponse:
    current_domain.process(ClearCart(session_id=session_id), asynchronous=False)
    return StatusResponse()


@cart_router.get("/{session_id}/checkout", response_model=CheckoutReviewResponse)
async def checkout_page(session_id: str):
    """Validate the cart ahead of checkout. 409 when the cart had to be adjusted."""
    review = review_checkout(session_id)
    body = CheckoutReviewResponse(
        cart=CartView.from_cart(review.cart) if review.cart else None,
        warnings=review.warnings,
        error=review.error,
    )
    if review.ready:
        return body
    return JSONResponse(status_code=409 if review.warnings else 400, content=body.model_dump())


@cart_router.post("/{session_id}/checkout", status_code=201, response_model=CheckoutResponse)
async def submit_checkout_form(session_id: str, body: CheckoutRequest):
    outcome = submit_checkout(
        session_id,
        CheckoutCustomer(
            customer_name=body.customer_name,
            customer_email=body.customer_email,
            shipping_address=body.shipping_address,
            phone_number=body.phone_number,
            notes=body.notes,
            user_id=body.user_id,
        ),
    )
    response = CheckoutResponse(
        order_id=outcome.order_id,
        order_number=outcome.order_number,
        warnings=outcome.warnings,
        error=outcome.error,
    )
    if outcome.succeeded:
        return response
    return JSONResponse(status_code=409 if outcome.warnings else 400, content=response.model_dump())
