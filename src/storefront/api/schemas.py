"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the internal Protean
commands and aggregates.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared responses
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float = Field(gt=0, le=999999.99)
    stock: int = Field(ge=0, default=0)
    category: str | None = None
    image_url: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Wireless Mouse",
                    "description": "Ergonomic 2.4 GHz mouse",
                    "price": 24.99,
                    "stock": 40,
                    "category": "Electronics",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float = Field(gt=0, le=999999.99)
    stock: int = Field(ge=0)
    category: str | None = None
    image_url: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductView(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    stock: int
    is_active: bool
    category: str | None = None
    image_url: str | None = None

    @classmethod
    def from_product(cls, product) -> "ProductView":
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            is_active=product.is_active,
            category=product.category,
            image_url=product.image_url,
        )


class ProductAvailability(BaseModel):
    product_id: str
    product_name: str
    price: float
    stock: int


class ImageUploadResponse(BaseModel):
    product_id: str
    image_url: str


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)
    user_id: str | None = None


class UpdateCartQuantityRequest(BaseModel):
    quantity: int  # zero or less removes the line


class CartLineView(BaseModel):
    product_id: str
    product_name: str
    unit_price: float
    quantity: int
    total_price: float
    image_url: str | None = None


class CartView(BaseModel):
    session_id: str
    items: list[CartLineView] = []
    total_items: int = 0
    subtotal: float = 0.0
    tax: float = 0.0
    shipping_cost: float = 0.0
    total: float = 0.0

    @classmethod
    def from_cart(cls, cart) -> "CartView":
        return cls(
            session_id=cart.session_id,
            items=[
                CartLineView(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                    total_price=item.total_price,
                    image_url=item.image_url,
                )
                for item in cart.items
            ],
            total_items=cart.total_items,
            subtotal=cart.subtotal,
            tax=cart.tax,
            shipping_cost=cart.shipping_cost,
            total=cart.total,
        )


class CartCountResponse(BaseModel):
    count: int


class CheckoutRequest(BaseModel):
    customer_name: str = Field(min_length=1, max_length=100)
    customer_email: str = Field(min_length=3, max_length=254)
    shipping_address: str = Field(min_length=1, max_length=500)
    phone_number: str | None = Field(default=None, max_length=20)
    notes: str | None = Field(default=None, max_length=1000)
    user_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Thandi Mokoena",
                    "customer_email": "thandi@example.com",
                    "shipping_address": "12 Long Street, Cape Town, 8001",
                    "phone_number": "+27 21 555 0101",
                }
            ]
        }
    }


class CheckoutResponse(BaseModel):
    order_id: str | None = None
    order_number: str | None = None
    warnings: list[str] = []
    error: str | None = None


class CheckoutReviewResponse(BaseModel):
    cart: CartView | None = None
    warnings: list[str] = []
    error: str | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class UpdateOrderStatusRequest(BaseModel):
    status: str
    tracking_number: str | None = Field(default=None, max_length=100)


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class OrderStatusResponse(BaseModel):
    order_id: str
    status: str


class OrderLineView(BaseModel):
    product_id: str
    product_name: str
    image_url: str | None = None
    quantity: int
    unit_price: float
    total_price: float


class OrderView(BaseModel):
    order_id: str
    order_number: str
    user_id: str | None = None
    status: str
    customer_name: str
    customer_email: str | None = None
    shipping_address: str | None = None
    phone_number: str | None = None
    notes: str | None = None
    items: list[OrderLineView] = []
    subtotal: float
    tax: float
    shipping_cost: float
    total_amount: float
    tracking_number: str | None = None
    cancellation_reason: str | None = None
    ordered_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderView":
        return cls(
            order_id=str(order.id),
            order_number=order.order_number,
            user_id=str(order.user_id) if order.user_id else None,
            status=order.status,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            shipping_address=order.shipping_address,
            phone_number=order.phone_number,
            notes=order.notes,
            items=[
                OrderLineView(
                    product_id=str(item.product_id),
                    product_name=item.product_name,
                    image_url=item.image_url,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    total_price=item.total_price,
                )
                for item in order.items
            ],
            subtotal=order.subtotal,
            tax=order.tax,
            shipping_cost=order.shipping_cost,
            total_amount=order.total_amount,
            tracking_number=order.tracking_number,
            cancellation_reason=order.cancellation_reason,
            ordered_at=order.ordered_at,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
        )


class PaymentProofResponse(BaseModel):
    order_id: str
    file_name: str


class ManualOrderRequest(BaseModel):
    customer_id: str
    product_id: str
    quantity: int = Field(ge=1)
    shipping_address: str | None = Field(default=None, max_length=500)
    phone_number: str | None = Field(default=None, max_length=20)
    notes: str | None = Field(default=None, max_length=1000)


class OrderCreatedResponse(BaseModel):
    order_id: str
    order_number: str


class CustomerOption(BaseModel):
    customer_id: str
    name: str
    email: str


class ManualOrderOptions(BaseModel):
    """What staff can pick from: active customers and products with stock."""

    customers: list[CustomerOption] = []
    products: list[ProductAvailability] = []


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    email: str = Field(max_length=254)
    password: str = Field(min_length=1, max_length=128)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    phone_number: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=200)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserIdResponse(BaseModel):
    user_id: str


class UpdateProfileRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    phone_number: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=200)


class ProfileView(BaseModel):
    user_id: str
    username: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone_number: str | None = None
    address: str | None = None
    role: str
    is_active: bool
    registered_at: datetime | None = None
    last_login_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> "ProfileView":
        return cls(
            user_id=str(user.id),
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            phone_number=user.phone_number,
            address=user.address,
            role=user.role,
            is_active=user.is_active,
            registered_at=user.registered_at,
            last_login_at=user.last_login_at,
        )
