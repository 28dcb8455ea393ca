"""Product aggregate: the authoritative record for price and stock.

Carts hold denormalized copies of a product's name and price; the cart
validator compares those copies against this aggregate before checkout.
Stock is decremented when an order is placed and restored when it is
cancelled.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from storefront.domain import storefront
from storefront.product.events import (
    ProductCreated,
    ProductDeactivated,
    ProductDetailsUpdated,
    ProductPriceChanged,
    ProductStockChanged,
)


@storefront.aggregate
class Product:
    name = String(required=True, max_length=100)
    description = String(max_length=500)
    price = Float(required=True, min_value=0.01, max_value=999999.99)
    stock = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    image_url = String(max_length=500)
    category = String(max_length=100)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, price, stock=0, description=None, category=None, image_url=None):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            price=price,
            stock=stock,
            description=description,
            category=category,
            image_url=image_url,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=product.name,
                price=product.price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Catalog maintenance
    # -------------------------------------------------------------------
    def update_details(self, name, description=None, category=None, image_url=None):
        """Replace descriptive fields. An omitted image keeps the current one."""
        self.name = name
        self.description = description
        self.category = category
        if image_url:
            self.image_url = image_url
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                updated_at=now,
            )
        )

    def change_price(self, new_price):
        if new_price is None or new_price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})
        if round(new_price, 2) == round(self.price, 2):
            return

        previous_price = self.price
        self.price = new_price
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductPriceChanged(
                product_id=str(self.id),
                previous_price=previous_price,
                new_price=new_price,
                changed_at=now,
            )
        )

    def deactivate(self):
        """Withdraw the product from sale. Existing orders keep their snapshots."""
        if not self.is_active:
            return

        self.is_active = False
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductDeactivated(
                product_id=str(self.id),
                deactivated_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def set_stock(self, new_stock, reason="Stock adjusted"):
        if new_stock is None or new_stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})
        if new_stock == self.stock:
            return
        self._move_stock(new_stock, reason)

    def remove_stock(self, quantity, reason="Order placed"):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if quantity > self.stock:
            raise ValidationError(
                {"stock": [f"Insufficient stock for '{self.name}': {self.stock} available, {quantity} requested"]}
            )
        self._move_stock(self.stock - quantity, reason)

    def restore_stock(self, quantity, reason="Order cancelled"):
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self._move_stock(self.stock + quantity, reason)

    def _move_stock(self, new_stock, reason):
        previous_stock = self.stock
        self.stock = new_stock
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            ProductStockChanged(
                product_id=str(self.id),
                previous_stock=previous_stock,
                new_stock=new_stock,
                reason=reason,
                changed_at=now,
            )
        )
