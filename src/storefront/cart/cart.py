"""Shopping Cart aggregate: a per-session basket keyed by an explicit session id.

Each line keeps a denormalized snapshot of the product (name, unit price,
image, stock at the time it was added). Those snapshots go stale; the cart
validator brings them back in line with the product store before checkout.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartItemRepriced,
    CartQuantityUpdated,
)
from storefront.domain import storefront
from storefront.shared.pricing import calculate_totals, line_total, money


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=100)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=500)
    stock_available = Integer(default=0)
    added_at = DateTime()

    @property
    def total_price(self) -> float:
        return line_total(self.quantity, self.unit_price)


@storefront.aggregate
class ShoppingCart:
    session_id = String(required=True, max_length=255)
    user_id = Identifier()  # Set once the shopper signs in
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, session_id, user_id=None):
        now = datetime.now(UTC)
        return cls(
            session_id=session_id,
            user_id=user_id,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived totals
    # -------------------------------------------------------------------
    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> float:
        return money(sum(item.total_price for item in self.items))

    @property
    def tax(self) -> float:
        return calculate_totals(self.subtotal).tax

    @property
    def shipping_cost(self) -> float:
        return calculate_totals(self.subtotal).shipping_cost

    @property
    def total(self) -> float:
        return calculate_totals(self.subtotal).total

    @property
    def is_empty(self) -> bool:
        return not self.items

    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, product_name, unit_price, quantity, image_url=None, stock_available=0):
        """Add a product line, or merge into the existing line for the same product."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.item_for(product_id)
        now = datetime.now(UTC)

        if existing:
            existing.quantity += quantity
            existing.stock_available = stock_available
            line_quantity = existing.quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    product_name=product_name,
                    unit_price=unit_price,
                    quantity=quantity,
                    image_url=image_url,
                    stock_available=stock_available,
                    added_at=now,
                )
            )
            line_quantity = quantity

        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                session_id=self.session_id,
                product_id=str(product_id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_quantity(self, product_id, quantity):
        """Replace a line's quantity. Zero or less removes the line."""
        item = self.item_for(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        if quantity <= 0:
            self.remove_item(product_id)
            return

        previous_quantity = item.quantity
        if previous_quantity == quantity:
            return

        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        """Drop the line for a product. Absent products are ignored."""
        item = self.item_for(product_id)
        if item is None:
            return

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def reprice_item(self, product_id, new_price):
        item = self.item_for(product_id)
        if item is None:
            raise ValidationError({"product_id": ["Item not found in cart"]})

        previous_price = item.unit_price
        item.unit_price = new_price
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartItemRepriced(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_price=previous_price,
                new_price=new_price,
            )
        )

    def clear(self):
        if not self.items:
            return

        for item in list(self.items):
            self.remove_items(item)
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(CartCleared(cart_id=str(self.id), cleared_at=now))
