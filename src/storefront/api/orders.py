"""FastAPI endpoints for orders: history, detail, manual entry, status workflow."""

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.api.schemas import (
    CancelOrderRequest,
    CustomerOption,
    ManualOrderOptions,
    ManualOrderRequest,
    OrderCreatedResponse,
    OrderStatusResponse,
    OrderView,
    PaymentProofResponse,
    ProductAvailability,
    UpdateOrderStatusRequest,
)
from storefront.media.functions import get_functions_client
from storefront.order.manual import CreateManualOrder
from storefront.order.order import Order
from storefront.order.status import CancelOrder, UpdateOrderStatus
from storefront.product.product import Product

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.get("", response_model=list[OrderView])
async def list_orders(user_id: str | None = None) -> list[OrderView]:
    """A user's orders when ``user_id`` is given, otherwise all recent orders."""
    repo = current_domain.repository_for(Order)
    orders = repo.for_user(user_id) if user_id else repo.all_recent()
    return [OrderView.from_order(o) for o in orders]


@order_router.get("/new", response_model=ManualOrderOptions)
async def manual_order_options() -> ManualOrderOptions:
    """Customers and in-stock products to compose a manual order from."""
    customers = current_domain.repository_for(User).list_active()
    products = current_domain.repository_for(Product).list_active()
    return ManualOrderOptions(
        customers=[CustomerOption(customer_id=str(c.id), name=c.full_name, email=c.email) for c in customers],
        products=[
            ProductAvailability(product_id=str(p.id), product_name=p.name, price=p.price, stock=p.stock)
            for p in products
            if p.stock > 0
        ],
    )


@order_router.post("", status_code=201, response_model=OrderCreatedResponse)
async def create_manual_order(body: ManualOrderRequest) -> OrderCreatedResponse:
    command = CreateManualOrder(
        customer_id=body.customer_id,
        product_id=body.product_id,
        quantity=body.quantity,
        shipping_address=body.shipping_address,
        phone_number=body.phone_number,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return OrderCreatedResponse(order_id=order_id, order_number=order.order_number)


@order_router.get("/{order_id}", response_model=OrderView)
async def get_order(order_id: str) -> OrderView:
    return OrderView.from_order(current_domain.repository_for(Order).get(order_id))


@order_router.put("/{order_id}", response_model=OrderStatusResponse)
async def edit_order(order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    """Edit an order's status and tracking number."""
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
    )
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.post("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderStatusResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
    )
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.post("/{order_id}/cancel", response_model=OrderStatusResponse)
async def cancel_order(order_id: str, body: CancelOrderRequest | None = None) -> OrderStatusResponse:
    command = CancelOrder(order_id=order_id, reason=body.reason if body else None)
    status = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order_id=order_id, status=status)


@order_router.post("/{order_id}/payment-proof", response_model=PaymentProofResponse)
async def upload_payment_proof(order_id: str, file: UploadFile = File(...)) -> PaymentProofResponse:
    current_domain.repository_for(Order).get(order_id)

    content = await file.read()
    file_name = await run_in_threadpool(
        get_functions_client().upload_payment_proof, file.filename, content, file.content_type
    )
    if not file_name:
        raise HTTPException(status_code=502, detail="Payment proof upload failed. Please try again.")
    return PaymentProofResponse(order_id=order_id, file_name=file_name)
