"""Order status state machine.

State Machine (7 states):
    PENDING → CONFIRMED → PREPARING → READY → DELIVERING → DELIVERED
    {PENDING, CONFIRMED, PREPARING} → CANCELLED

DELIVERED and CANCELLED are terminal. Details may only be edited, and the
order may only be cancelled by its requester, while it is PENDING or
CONFIRMED.
"""

from enum import Enum


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.DELIVERING},
    OrderStatus.DELIVERING: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # terminal
    OrderStatus.CANCELLED: set(),  # terminal
}

EDITABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})

CANCELLABLE_STATUSES = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})

# Statuses that carry a dedicated "entered at" timestamp on the Order
STATUS_TIMESTAMPS = {
    OrderStatus.CONFIRMED: "confirmed_at",
    OrderStatus.DELIVERED: "delivered_at",
    OrderStatus.CANCELLED: "cancelled_at",
}

# Main-path statuses that can only be reached through CONFIRMED
CONFIRMED_PATH = frozenset(
    {
        OrderStatus.CONFIRMED,
        OrderStatus.PREPARING,
        OrderStatus.READY,
        OrderStatus.DELIVERING,
        OrderStatus.DELIVERED,
    }
)

# Board column order
BOARD_ORDER = [
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
]


def allowed_transitions(status: OrderStatus) -> frozenset[OrderStatus]:
    """Return the statuses reachable from ``status`` in a single step."""
    return frozenset(_VALID_TRANSITIONS[OrderStatus(status)])


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return OrderStatus(target) in _VALID_TRANSITIONS.get(OrderStatus(current), set())


def is_terminal(status: OrderStatus) -> bool:
    return not _VALID_TRANSITIONS[OrderStatus(status)]


def replay(changes) -> OrderStatus:
    """Replay a sequence of status changes starting from PENDING.

    Each change must start from the status produced by the previous one and
    follow a legal edge. Returns the resulting status, or raises ``ValueError``
    naming the first change that breaks the chain.
    """
    status = OrderStatus.PENDING
    for position, change in enumerate(changes, start=1):
        old_status = OrderStatus(change.old_status)
        new_status = OrderStatus(change.new_status)
        if old_status is not status or not can_transition(old_status, new_status):
            raise ValueError(
                f"Status change #{position} ({old_status.value} -> {new_status.value}) "
                f"does not follow from {status.value}"
            )
        status = new_status
    return status
