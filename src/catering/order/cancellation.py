"""Order cancellation — command and handler.

Cancels an order that has not yet gone into preparation. Cancellation is
recorded in the status history like any other transition.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catering.domain import catering, logger
from catering.order.access import Requester, Role
from catering.order.order import Order


@catering.command(part_of="Order")
class CancelOrder:
    """Cancel a PENDING or CONFIRMED order."""

    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    requester_role = String(required=True, max_length=20, choices=Role)
    reason = String(required=True, max_length=500)


@catering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        requester = Requester(command.requester_id, command.requester_role)
        repo = current_domain.repository_for(Order)
        order = repo.get_for(command.order_id, requester)
        order.cancel(command.reason, cancelled_by=requester.user_id)
        repo.store(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            order_number=order.order_number,
            requester_id=requester.user_id,
        )
        return order
