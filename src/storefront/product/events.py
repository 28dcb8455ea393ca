"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalog."""

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Name, description, category or image of a product changed."""

    product_id = Identifier(required=True)
    name = String(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """The selling price of a product changed. Carts pick this up at validation time."""

    product_id = Identifier(required=True)
    previous_price = Float(required=True)
    new_price = Float(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductStockChanged:
    """Stock level of a product moved (admin edit, order placed, order cancelled)."""

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    reason = String(max_length=100)
    changed_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from sale (soft delete)."""

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
