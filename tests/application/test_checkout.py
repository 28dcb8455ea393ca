"""Application tests for cart validation, checkout and order placement."""

from datetime import UTC, datetime

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart
from storefront.cart.validation import ValidateCart
from storefront.checkout.placement import PlaceOrder
from storefront.checkout.service import (
    CART_ADJUSTED,
    CHECKOUT_FAILED,
    EMPTY_CART,
    EMPTY_CART_AT_REVIEW,
    CheckoutCustomer,
    review_checkout,
    submit_checkout,
)
from storefront.order.order import Order, OrderStatus
from storefront.product.management import CreateProduct, DeactivateProduct, UpdateProduct
from storefront.product.product import Product

SESSION = "sess-checkout-001"

CUSTOMER = CheckoutCustomer(
    customer_name="Ayanda Zulu",
    customer_email="ayanda@example.com",
    shipping_address="22 Church Street, Pretoria",
    phone_number="+27 12 555 0199",
    user_id="user-001",
)


def _create_product(**overrides):
    defaults = {"name": "Headphones", "price": 40.00, "stock": 10}
    defaults.update(overrides)
    return current_domain.process(CreateProduct(**defaults), asynchronous=False)


def _add(product_id, quantity=1):
    current_domain.process(AddToCart(session_id=SESSION, product_id=product_id, quantity=quantity), asynchronous=False)


def _reprice(product_id, price):
    product = current_domain.repository_for(Product).get(product_id)
    current_domain.process(
        UpdateProduct(product_id=product_id, name=product.name, price=price, stock=product.stock),
        asynchronous=False,
    )


def _restock(product_id, stock):
    product = current_domain.repository_for(Product).get(product_id)
    current_domain.process(
        UpdateProduct(product_id=product_id, name=product.name, price=product.price, stock=stock),
        asynchronous=False,
    )


def _cart():
    return current_domain.repository_for(ShoppingCart).for_session(SESSION)


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


class TestValidateCartCommand:
    def test_no_cart_yields_no_warnings(self):
        warnings = current_domain.process(ValidateCart(session_id="sess-unknown"), asynchronous=False)
        assert warnings == []

    def test_price_drift_is_persisted(self):
        product_id = _create_product()
        _add(product_id, quantity=2)
        _reprice(product_id, 35.00)

        warnings = current_domain.process(ValidateCart(session_id=SESSION), asynchronous=False)
        assert warnings == ["The price for 'Headphones' has changed to 35.00."]
        assert _cart().items[0].unit_price == 35.00

    def test_deactivated_product_is_removed(self):
        product_id = _create_product()
        _add(product_id)
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        warnings = current_domain.process(ValidateCart(session_id=SESSION), asynchronous=False)
        assert warnings == ["'Headphones' is no longer available and has been removed from your cart."]
        assert _cart().is_empty


class TestReviewCheckout:
    def test_empty_cart_is_refused(self):
        review = review_checkout("sess-empty")
        assert not review.ready
        assert review.error == EMPTY_CART_AT_REVIEW

    def test_valid_cart_is_ready(self):
        _add(_create_product())
        review = review_checkout(SESSION)
        assert review.ready
        assert review.cart.total_items == 1

    def test_adjusted_cart_is_refused_with_warnings(self):
        product_id = _create_product()
        _add(product_id, quantity=4)
        _restock(product_id, 2)

        review = review_checkout(SESSION)
        assert review.error == CART_ADJUSTED
        assert review.warnings == ["Only 2 of 'Headphones' are available. Your quantity has been updated."]
        assert review.cart.items[0].quantity == 2


class TestSubmitCheckout:
    def test_successful_checkout(self):
        first = _create_product(name="Headphones", price=40.00, stock=10)
        second = _create_product(name="Charger", price=15.00, stock=4)
        _add(first, quantity=2)
        _add(second, quantity=1)

        outcome = submit_checkout(SESSION, CUSTOMER)

        assert outcome.succeeded
        assert outcome.error is None
        order = current_domain.repository_for(Order).get(outcome.order_id)
        assert order.status == OrderStatus.PENDING.value
        assert len(order.items) == 2
        assert order.user_id == "user-001"
        assert order.subtotal == pytest.approx(95.00)
        assert order.total_amount == pytest.approx(95.00 * 1.15 + 10.00)
        assert outcome.order_number == order.order_number

        assert _cart().is_empty
        assert _stock(first) == 8
        assert _stock(second) == 3

    def test_order_number_sequence(self):
        product_id = _create_product()
        today = datetime.now(UTC).strftime("%Y%m%d")

        _add(product_id)
        first = submit_checkout(SESSION, CUSTOMER)
        _add(product_id)
        second = submit_checkout(SESSION, CUSTOMER)

        assert first.order_number == f"ORD-{today}-0001"
        assert second.order_number == f"ORD-{today}-0002"

    def test_empty_cart_fails_without_writes(self):
        outcome = submit_checkout("sess-nothing", CUSTOMER)
        assert not outcome.succeeded
        assert outcome.error == EMPTY_CART
        assert current_domain.repository_for(Order).all_recent() == []

    def test_adjusted_cart_stops_checkout(self):
        product_id = _create_product(price=40.00)
        _add(product_id)
        _reprice(product_id, 44.00)

        outcome = submit_checkout(SESSION, CUSTOMER)
        assert not outcome.succeeded
        assert outcome.error == CART_ADJUSTED
        assert outcome.warnings == ["The price for 'Headphones' has changed to 44.00."]
        assert current_domain.repository_for(Order).all_recent() == []
        assert _cart().items[0].unit_price == 44.00
        assert _stock(product_id) == 10

    def test_resubmitting_after_adjustment_succeeds(self):
        product_id = _create_product(price=40.00)
        _add(product_id)
        _reprice(product_id, 44.00)

        submit_checkout(SESSION, CUSTOMER)
        outcome = submit_checkout(SESSION, CUSTOMER)
        assert outcome.succeeded
        order = current_domain.repository_for(Order).get(outcome.order_id)
        assert order.items[0].unit_price == 44.00

    def test_unexpected_error_becomes_generic_failure(self, monkeypatch):
        product_id = _create_product()
        _add(product_id)

        def _boom(*args, **kwargs):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(Order, "place", classmethod(_boom))

        outcome = submit_checkout(SESSION, CUSTOMER)
        assert not outcome.succeeded
        assert outcome.error == CHECKOUT_FAILED
        assert _cart().total_items == 1
        assert _stock(product_id) == 10


class TestPlaceOrderCommand:
    def test_empty_cart_is_rejected(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(
                    session_id="sess-empty",
                    customer_name="A",
                    customer_email="a@example.com",
                    shipping_address="Somewhere",
                ),
                asynchronous=False,
            )

    def test_stock_shortfall_rolls_back_everything(self):
        plenty = _create_product(name="Cable", stock=10)
        scarce = _create_product(name="Adapter", stock=3)
        _add(plenty, quantity=2)
        _add(scarce, quantity=3)
        _restock(scarce, 1)

        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(
                    session_id=SESSION,
                    customer_name="A",
                    customer_email="a@example.com",
                    shipping_address="Somewhere",
                ),
                asynchronous=False,
            )

        assert _stock(plenty) == 10
        assert _stock(scarce) == 1
        assert _cart().total_items == 5
        assert current_domain.repository_for(Order).all_recent() == []

    def test_price_change_after_validation_is_rejected(self):
        product_id = _create_product(price=40.00, stock=5)
        _add(product_id, quantity=2)
        _reprice(product_id, 44.00)

        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                PlaceOrder(
                    session_id=SESSION,
                    customer_name="A",
                    customer_email="a@example.com",
                    shipping_address="Somewhere",
                ),
                asynchronous=False,
            )

        assert exc.value.messages["cart"] == ["The price for 'Headphones' has changed to 44.00."]
        assert _stock(product_id) == 5
        assert _cart().items[0].unit_price == 40.00
        assert current_domain.repository_for(Order).all_recent() == []
