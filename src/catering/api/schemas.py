"""Pydantic API schemas for the Catering domain.

These are the external API contracts, kept separate from domain commands.
The API layer translates between these schemas and domain commands.
"""

from datetime import date, datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    delivery_date: date
    delivery_hour: str
    delivery_address: str
    person_count: int
    menu_price: float
    total_price: float
    special_instructions: str | None = None


class UpdateOrderDetailsRequest(BaseModel):
    delivery_address: str | None = None
    delivery_hour: str | None = None
    special_instructions: str | None = None


class TransitionStatusRequest(BaseModel):
    status: str
    notes: str | None = None


class CancelOrderRequest(BaseModel):
    reason: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    owner_id: str
    status: str
    delivery_date: date
    delivery_hour: str
    delivery_address: str
    person_count: int
    menu_price: float
    total_price: float
    special_instructions: str | None = None
    cancellation_reason: str | None = None
    confirmed_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            order_id=str(order.id),
            order_number=order.order_number,
            owner_id=str(order.owner_id),
            status=order.status,
            delivery_date=order.delivery_date,
            delivery_hour=order.delivery_hour,
            delivery_address=order.delivery_address,
            person_count=order.person_count,
            menu_price=order.menu_price,
            total_price=order.total_price,
            special_instructions=order.special_instructions,
            cancellation_reason=order.cancellation_reason,
            confirmed_at=order.confirmed_at,
            delivered_at=order.delivered_at,
            cancelled_at=order.cancelled_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderPageResponse(BaseModel):
    items: list[OrderResponse]
    total: int
    offset: int
    limit: int
    has_next: bool


class StatusChangeResponse(BaseModel):
    sequence: int
    old_status: str
    new_status: str
    notes: str | None = None
    changed_by: str | None = None
    changed_at: datetime


class BoardCardResponse(BaseModel):
    order_id: str
    order_number: str
    owner_id: str
    status: str
    delivery_date: str | None = None
    delivery_hour: str | None = None
    delivery_address: str | None = None
    person_count: int = 0
    updated_at: datetime | None = None
