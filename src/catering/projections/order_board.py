"""Order board: one card per order for the kitchen and delivery board."""

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from catering.domain import catering
from catering.order.events import OrderDetailsUpdated, OrderPlaced, OrderStatusChanged
from catering.order.order import Order


@catering.projection
class OrderBoardCard:
    order_id = Identifier(identifier=True, required=True)
    order_number = String(required=True, max_length=30)
    owner_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    delivery_date = String(max_length=10)
    delivery_hour = String(max_length=5)
    delivery_address = String(max_length=500)
    person_count = Integer(default=0)
    placed_at = DateTime()
    updated_at = DateTime()


@catering.projector(projector_for=OrderBoardCard, aggregates=[Order])
class OrderBoardProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        current_domain.repository_for(OrderBoardCard).add(
            OrderBoardCard(
                order_id=event.order_id,
                order_number=event.order_number,
                owner_id=event.owner_id,
                status="pending",
                delivery_date=event.delivery_date,
                delivery_hour=event.delivery_hour,
                delivery_address=event.delivery_address,
                person_count=event.person_count,
                placed_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(OrderDetailsUpdated)
    def on_order_details_updated(self, event):
        repo = current_domain.repository_for(OrderBoardCard)
        card = repo.get(event.order_id)
        card.delivery_address = event.delivery_address
        card.delivery_hour = event.delivery_hour
        card.updated_at = event.updated_at
        repo.add(card)

    @on(OrderStatusChanged)
    def on_order_status_changed(self, event):
        repo = current_domain.repository_for(OrderBoardCard)
        card = repo.get(event.order_id)
        card.status = event.new_status
        card.updated_at = event.changed_at
        repo.add(card)
