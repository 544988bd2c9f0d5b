"""Order detail updates — command and handler.

Customers and staff can change the delivery address, delivery hour and
special instructions while the order is still PENDING or CONFIRMED.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from catering.domain import catering, logger
from catering.order.access import Requester, Role
from catering.order.order import Order


@catering.command(part_of="Order")
class UpdateOrderDetails:
    """Change delivery details of an order the requester may access."""

    order_id = Identifier(required=True)
    requester_id = Identifier(required=True)
    requester_role = String(required=True, max_length=20, choices=Role)
    delivery_address = String(max_length=500)
    delivery_hour = String(max_length=5)
    special_instructions = Text()


@catering.command_handler(part_of=Order)
class UpdateOrderDetailsHandler:
    @handle(UpdateOrderDetails)
    def update_order_details(self, command):
        requester = Requester(command.requester_id, command.requester_role)
        repo = current_domain.repository_for(Order)
        order = repo.get_for(command.order_id, requester)

        changes = {
            field: getattr(command, field)
            for field in ("delivery_address", "delivery_hour", "special_instructions")
            if getattr(command, field) is not None
        }
        order.update_details(**changes)
        repo.store(order)

        logger.info(
            "Order details updated",
            order_id=str(order.id),
            fields=sorted(changes),
            requester_id=requester.user_id,
        )
        return order
