from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """Orders placed by one user, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-ordered_at").all().items

    def all_recent(self, limit=100) -> list[Order]:
        return self._dao.query.order_by("-ordered_at").limit(limit).all().items

    def count_placed_on(self, order_day: str) -> int:
        return self._dao.query.filter(order_day=order_day).all().total

    def next_order_number(self, order_day: str) -> str:
        """``ORD-YYYYMMDD-NNNN`` where NNNN continues the day's sequence."""
        return f"ORD-{order_day}-{self.count_placed_on(order_day) + 1:04d}"
