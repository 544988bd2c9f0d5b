"""Repository for the Order aggregate.

Adds lookups that apply the access policy and the ownership-scoped listing
used by customers and staff.
"""

from dataclasses import dataclass, field

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError

from catering.domain import catering
from catering.order.access import Requester, ensure_access
from catering.order.errors import OrderConflict, OrderNotFound
from catering.order.order import Order

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class OrderPage:
    """One page of orders, newest first, with the total across all pages."""

    items: list = field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def has_next(self) -> bool:
        return self.offset + len(self.items) < self.total


@catering.repository(part_of=Order)
class OrderRepository:
    def load(self, order_id) -> Order:
        """Fetch an order without any access check."""
        try:
            return self.get(order_id)
        except ObjectNotFoundError:
            raise OrderNotFound(order_id) from None

    def get_for(self, order_id, requester: Requester) -> Order:
        """Fetch an order on behalf of ``requester``."""
        order = self.load(order_id)
        ensure_access(order, requester)
        return order

    def find_by_number(self, order_number: str) -> Order | None:
        results = self._dao.query.filter(order_number=order_number).all()
        return results.items[0] if results.items else None

    def store(self, order: Order) -> Order:
        """Persist ``order``; a write against a stale version is a conflict."""
        try:
            self.add(order)
        except ExpectedVersionError as exc:
            raise OrderConflict({"order_id": [f"Order {order.id} was changed concurrently, reload and retry"]}) from exc
        return order

    def page_for(
        self,
        requester: Requester,
        status: str | None = None,
        owner_id: str | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> OrderPage:
        """List orders visible to ``requester``, newest first.

        Customers only ever see their own orders, whatever ``owner_id`` they
        pass. Staff see every order, optionally narrowed by owner and status.
        """
        offset = max(int(offset), 0)
        limit = min(max(int(limit), 1), MAX_PAGE_SIZE)

        criteria = {}
        if status:
            criteria["status"] = status
        if not requester.is_staff:
            criteria["owner_id"] = requester.user_id
        elif owner_id:
            criteria["owner_id"] = str(owner_id)

        query = self._dao.query
        if criteria:
            query = query.filter(**criteria)
        results = query.order_by("-created_at").offset(offset).limit(limit).all()

        return OrderPage(items=list(results.items), total=results.total, offset=offset, limit=limit)
