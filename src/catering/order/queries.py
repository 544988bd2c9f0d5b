"""Read-side operations over orders.

Reads go straight to the repository (or the board projection) and never
mutate anything, so they run outside a command.
"""

from protean.utils.globals import current_domain

from catering.order.access import Requester
from catering.order.order import Order
from catering.order.repository import DEFAULT_PAGE_SIZE, OrderPage
from catering.order.status import BOARD_ORDER
from catering.projections.order_board import OrderBoardCard


def get_order(order_id, requester: Requester) -> Order:
    return current_domain.repository_for(Order).get_for(order_id, requester)


def list_orders(
    requester: Requester,
    status: str | None = None,
    owner_id: str | None = None,
    offset: int = 0,
    limit: int = DEFAULT_PAGE_SIZE,
) -> OrderPage:
    return current_domain.repository_for(Order).page_for(
        requester, status=status, owner_id=owner_id, offset=offset, limit=limit
    )


def get_status_history(order_id, requester: Requester | None = None) -> list:
    """Status changes of an order, oldest first.

    When ``requester`` is given the access policy applies as for ``get_order``.
    """
    repo = current_domain.repository_for(Order)
    order = repo.get_for(order_id, requester) if requester else repo.load(order_id)
    return order.history()


def order_board(limit: int = 500) -> dict[str, list]:
    """Board cards grouped into one column per status, newest update first."""
    cards = current_domain.repository_for(OrderBoardCard)._dao.query.order_by("-updated_at").limit(limit).all().items
    board = {status.value: [] for status in BOARD_ORDER}
    for card in cards:
        board.setdefault(card.status, []).append(card)
    return board
