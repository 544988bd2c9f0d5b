"""Order placement — command and handler."""

from datetime import date

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catering.domain import catering, logger
from catering.order.errors import OrderConflict
from catering.order.numbering import generate_order_number
from catering.order.order import Order


@catering.command(part_of="Order")
class PlaceOrder:
    """Place a new catering order on behalf of its owner."""

    owner_id = Identifier(required=True)
    delivery_date = String(required=True, max_length=10)  # ISO date
    delivery_hour = String(required=True, max_length=5)
    delivery_address = String(required=True, max_length=500)
    person_count = Integer(required=True, min_value=1)
    menu_price = Float(required=True, min_value=0.0)
    total_price = Float(required=True, min_value=0.0)
    special_instructions = Text()


def _collision(order_number):
    return OrderConflict({"order_number": [f"Order number {order_number} is already taken, retry placement"]})


@catering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            delivery_date = date.fromisoformat(command.delivery_date)
        except ValueError:
            raise ValidationError({"delivery_date": ["Delivery date must be in YYYY-MM-DD format"]}) from None

        repo = current_domain.repository_for(Order)
        order_number = generate_order_number()
        if repo.find_by_number(order_number) is not None:
            raise _collision(order_number)

        order = Order.place(
            order_number=order_number,
            owner_id=command.owner_id,
            delivery_date=delivery_date,
            delivery_hour=command.delivery_hour,
            delivery_address=command.delivery_address,
            person_count=command.person_count,
            menu_price=command.menu_price,
            total_price=command.total_price,
            special_instructions=command.special_instructions,
        )

        try:
            repo.add(order)
        except ValidationError as exc:
            # The unique constraint on order_number is the final word on collisions
            if "order_number" in (exc.messages or {}):
                raise _collision(order_number) from exc
            raise

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order_number,
            owner_id=str(command.owner_id),
        )
        return str(order.id)
