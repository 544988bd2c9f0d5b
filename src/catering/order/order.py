"""Order aggregate (CQRS), the core of the catering domain.

An Order is placed by a customer in PENDING status and moves through the
kitchen and delivery pipeline described in ``catering.order.status``. Every
status change goes through ``transition_to``, which validates the edge,
stamps the status timestamp, and appends one ``StatusChange`` to the order's
history as a single atomic change. Cancellation is a transition too.
"""

import re
from datetime import UTC, date, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, Float, HasMany, Identifier, Integer, String, Text

from catering.domain import catering
from catering.order.errors import InvalidStatusTransition, OrderNotEditable
from catering.order.events import OrderDetailsUpdated, OrderPlaced, OrderStatusChanged
from catering.order.status import (
    CANCELLABLE_STATUSES,
    CONFIRMED_PATH,
    EDITABLE_STATUSES,
    STATUS_TIMESTAMPS,
    OrderStatus,
    can_transition,
    replay,
)

_DELIVERY_HOUR = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _as_utc(moment: datetime) -> datetime:
    # Some providers hand back naive datetimes; everything here is written in UTC
    return moment if moment.tzinfo else moment.replace(tzinfo=UTC)


# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@catering.entity(part_of="Order")
class StatusChange:
    """One audit record of a single status transition.

    Entries are appended by ``Order.transition_to`` and never modified.
    ``sequence`` is the 1-based position of the entry in the order's log.
    """

    sequence = Integer(required=True, min_value=1)
    old_status = String(required=True, max_length=20, choices=OrderStatus)
    new_status = String(required=True, max_length=20, choices=OrderStatus)
    notes = Text()
    changed_by = Identifier()
    changed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@catering.aggregate
class Order:
    order_number = String(required=True, max_length=30, unique=True)
    owner_id = Identifier(required=True)
    status = String(
        max_length=20,
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    delivery_date = Date(required=True)
    delivery_hour = String(required=True, max_length=5)
    delivery_address = String(required=True, max_length=500)
    person_count = Integer(required=True, min_value=1)
    menu_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    special_instructions = Text()
    cancellation_reason = String(max_length=500)
    confirmed_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    status_history = HasMany(StatusChange)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def delivery_hour_is_a_clock_time(self):
        if self.delivery_hour and not _DELIVERY_HOUR.match(self.delivery_hour):
            raise ValidationError({"delivery_hour": ["Delivery hour must be in HH:MM format"]})

    @invariant.post
    def status_timestamps_are_recorded(self):
        status = OrderStatus(self.status)
        if status in CONFIRMED_PATH and self.confirmed_at is None:
            raise ValidationError({"confirmed_at": [f"A {status.value} order must have been confirmed"]})
        if status == OrderStatus.DELIVERED and self.delivered_at is None:
            raise ValidationError({"delivered_at": ["A delivered order must record its delivery time"]})
        if status == OrderStatus.CANCELLED and self.cancelled_at is None:
            raise ValidationError({"cancelled_at": ["A cancelled order must record its cancellation time"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number: str,
        owner_id: str,
        delivery_date: date,
        delivery_hour: str,
        delivery_address: str,
        person_count: int,
        menu_price: float,
        total_price: float,
        special_instructions: str | None = None,
    ):
        """Create a new PENDING order for ``owner_id``."""
        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            owner_id=owner_id,
            status=OrderStatus.PENDING.value,
            delivery_date=delivery_date,
            delivery_hour=delivery_hour,
            delivery_address=delivery_address,
            person_count=person_count,
            menu_price=menu_price,
            total_price=total_price,
            special_instructions=special_instructions,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                owner_id=str(owner_id),
                delivery_date=delivery_date.isoformat(),
                delivery_hour=delivery_hour,
                delivery_address=delivery_address,
                person_count=person_count,
                menu_price=menu_price,
                total_price=total_price,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries over the aggregate
    # -------------------------------------------------------------------
    @property
    def is_editable(self) -> bool:
        return OrderStatus(self.status) in EDITABLE_STATUSES

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus(self.status) in CANCELLABLE_STATUSES

    def history(self) -> list:
        """Status changes in the order they happened."""
        return sorted(self.status_history or [], key=lambda change: (_as_utc(change.changed_at), change.sequence))

    def replayed_status(self) -> OrderStatus:
        """Rebuild the current status from the history log alone."""
        try:
            return replay(self.history())
        except ValueError as exc:
            raise ValidationError({"status_history": [str(exc)]}) from exc

    # -------------------------------------------------------------------
    # Status transitions
    # -------------------------------------------------------------------
    def transition_to(self, new_status, notes: str | None = None, changed_by: str | None = None):
        """Move the order along one edge of the state machine.

        Validation happens before anything is touched, so a rejected
        transition leaves status, timestamps and history unchanged.
        Returns the appended ``StatusChange``.
        """
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status {new_status!r}"]}) from None

        current = OrderStatus(self.status)
        if not can_transition(current, target):
            raise InvalidStatusTransition(current.value, target.value)

        changes = self.history()
        now = datetime.now(UTC)
        if changes and _as_utc(changes[-1].changed_at) > now:
            # Keep the log ordered by time even if the clock stepped back
            now = _as_utc(changes[-1].changed_at)

        change = StatusChange(
            sequence=len(changes) + 1,
            old_status=current.value,
            new_status=target.value,
            notes=notes,
            changed_by=changed_by,
            changed_at=now,
        )

        with atomic_change(self):
            self.status = target.value
            timestamp_field = STATUS_TIMESTAMPS.get(target)
            if timestamp_field and getattr(self, timestamp_field) is None:
                setattr(self, timestamp_field, now)
            self.add_status_history(change)
            self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                old_status=current.value,
                new_status=target.value,
                notes=notes,
                changed_by=changed_by,
                changed_at=now,
            )
        )
        return change

    def cancel(self, reason: str, cancelled_by: str | None = None):
        """Cancel the order while it is still PENDING or CONFIRMED."""
        current = OrderStatus(self.status)
        if current not in CANCELLABLE_STATUSES:
            raise OrderNotEditable(current.value, action="cancelled")

        change = self.transition_to(OrderStatus.CANCELLED, notes=reason, changed_by=cancelled_by)
        self.cancellation_reason = reason
        return change

    # -------------------------------------------------------------------
    # Detail updates
    # -------------------------------------------------------------------
    def update_details(
        self,
        delivery_address=_UNSET,
        delivery_hour=_UNSET,
        special_instructions=_UNSET,
    ) -> None:
        """Change delivery details. Only allowed while PENDING or CONFIRMED."""
        current = OrderStatus(self.status)
        if current not in EDITABLE_STATUSES:
            raise OrderNotEditable(current.value)

        changes = {
            field: value
            for field, value in (
                ("delivery_address", delivery_address),
                ("delivery_hour", delivery_hour),
                ("special_instructions", special_instructions),
            )
            if value is not _UNSET
        }
        if not changes:
            return

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value)
            self.updated_at = now

        self.raise_(
            OrderDetailsUpdated(
                order_id=str(self.id),
                delivery_address=self.delivery_address,
                delivery_hour=self.delivery_hour,
                special_instructions=self.special_instructions,
                updated_at=now,
            )
        )
