"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.domain import storefront
from storefront.product.product import Product


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_live(self, product_id) -> Product | None:
        """Return the product if it exists and is on sale, else None."""
        if not product_id:
            return None
        try:
            product = self.get(str(product_id))
        except ObjectNotFoundError:
            return None
        return product if product.is_active else None

    def list_active(self) -> list[Product]:
        return self._dao.query.filter(is_active=True).order_by("name").all().items
