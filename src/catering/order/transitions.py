"""Order status transitions — command and handler.

Moves an order one step along the state machine. The caller is expected to
have authorized the change (only staff drive the kitchen and delivery
pipeline); the handler validates the edge and records the history entry.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from catering.domain import catering, logger
from catering.order.errors import InvalidStatusTransition
from catering.order.order import Order
from catering.order.status import OrderStatus


@catering.command(part_of="Order")
class TransitionOrderStatus:
    order_id = Identifier(required=True)
    new_status = String(required=True, max_length=20, choices=OrderStatus)
    notes = Text()
    changed_by = Identifier()


@catering.command_handler(part_of=Order)
class TransitionOrderStatusHandler:
    @handle(TransitionOrderStatus)
    def transition_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.load(command.order_id)
        try:
            change = order.transition_to(command.new_status, notes=command.notes, changed_by=command.changed_by)
        except InvalidStatusTransition:
            logger.warning(
                "Order status transition rejected",
                order_id=str(order.id),
                order_number=order.order_number,
                old_status=order.status,
                new_status=command.new_status,
            )
            raise
        repo.store(order)

        logger.info(
            "Order status changed",
            order_id=str(order.id),
            order_number=order.order_number,
            old_status=change.old_status,
            new_status=change.new_status,
            changed_by=command.changed_by,
        )
        return order
