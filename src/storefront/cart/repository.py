from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def for_session(self, session_id) -> ShoppingCart | None:
        """Look up the cart bound to a session id."""
        return self._dao.query.filter(session_id=session_id).all().first

    def get_or_create(self, session_id) -> ShoppingCart:
        """Return the session's cart, creating an empty one on first use.

        A freshly created cart is not persisted until it is mutated.
        """
        return self.for_session(session_id) or ShoppingCart.create(session_id=session_id)
