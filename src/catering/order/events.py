"""Order domain events: immutable facts about order changes.

All events are past tense, versioned, and carry enough data for the board
projection to stay current without reloading the aggregate.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from catering.domain import catering


@catering.event(part_of="Order")
class OrderPlaced:
    """A customer placed a new catering order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    order_number = String(required=True)
    owner_id = Identifier(required=True)
    delivery_date = String(required=True)  # ISO date string
    delivery_hour = String(required=True)
    delivery_address = String(required=True)
    person_count = Integer(required=True)
    menu_price = Float(required=True)
    total_price = Float(required=True)
    placed_at = DateTime(required=True)


@catering.event(part_of="Order")
class OrderDetailsUpdated:
    """Delivery details of a pending or confirmed order were changed."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    delivery_address = String()
    delivery_hour = String()
    special_instructions = Text()
    updated_at = DateTime(required=True)


@catering.event(part_of="Order")
class OrderStatusChanged:
    """An order moved along one edge of the status state machine."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    order_number = String(required=True)
    old_status = String(required=True)
    new_status = String(required=True)
    notes = Text()
    changed_by = Identifier()
    changed_at = DateTime(required=True)
