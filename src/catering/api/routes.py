"""FastAPI routes for the Catering domain.

The upstream auth layer identifies the caller through the ``X-User-Id`` and
``X-User-Role`` headers. Customers place and manage their own orders; staff
see every order and drive the status pipeline.
"""

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from protean.utils.globals import current_domain

from catering.api.schemas import (
    BoardCardResponse,
    CancelOrderRequest,
    OrderIdResponse,
    OrderPageResponse,
    OrderResponse,
    PlaceOrderRequest,
    StatusChangeResponse,
    TransitionStatusRequest,
    UpdateOrderDetailsRequest,
)
from catering.order import queries
from catering.order.access import Requester
from catering.order.cancellation import CancelOrder
from catering.order.details import UpdateOrderDetails
from catering.order.placement import PlaceOrder
from catering.order.repository import DEFAULT_PAGE_SIZE
from catering.order.transitions import TransitionOrderStatus


async def get_requester(
    x_user_id: str = Header(...),
    x_user_role: str = Header(...),
) -> Requester:
    """Build the requester from the identity headers."""
    if not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing user identity")
    try:
        return Requester(x_user_id, x_user_role.lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role {x_user_role!r}") from None


async def get_staff(requester: Requester = Depends(get_requester)) -> Requester:
    if not requester.is_staff:
        raise HTTPException(status_code=403, detail="Only staff may perform this action")
    return requester


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest, requester: Requester = Depends(get_requester)) -> OrderIdResponse:
    """Place a new order for the requesting user."""
    command = PlaceOrder(
        owner_id=requester.user_id,
        delivery_date=body.delivery_date.isoformat(),
        delivery_hour=body.delivery_hour,
        delivery_address=body.delivery_address,
        person_count=body.person_count,
        menu_price=body.menu_price,
        total_price=body.total_price,
        special_instructions=body.special_instructions,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("", response_model=OrderPageResponse)
async def list_orders(
    status: str | None = None,
    owner_id: str | None = None,
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1),
    requester: Requester = Depends(get_requester),
) -> OrderPageResponse:
    """List orders visible to the requester, newest first."""
    page = queries.list_orders(requester, status=status, owner_id=owner_id, offset=offset, limit=limit)
    return OrderPageResponse(
        items=[OrderResponse.from_order(order) for order in page.items],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_next=page.has_next,
    )


# Declared before "/{order_id}" so "board" is not taken for an id
@order_router.get("/board", response_model=dict[str, list[BoardCardResponse]])
async def order_board(requester: Requester = Depends(get_staff)) -> dict[str, list[BoardCardResponse]]:
    """Kitchen board: order cards grouped by status."""
    return {
        status: [
            BoardCardResponse(
                order_id=str(card.order_id),
                order_number=card.order_number,
                owner_id=str(card.owner_id),
                status=card.status,
                delivery_date=card.delivery_date,
                delivery_hour=card.delivery_hour,
                delivery_address=card.delivery_address,
                person_count=card.person_count,
                updated_at=card.updated_at,
            )
            for card in cards
        ]
        for status, cards in queries.order_board().items()
    }


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, requester: Requester = Depends(get_requester)) -> OrderResponse:
    return OrderResponse.from_order(queries.get_order(order_id, requester))


@order_router.put("/{order_id}", response_model=OrderResponse)
async def update_order_details(
    order_id: str,
    body: UpdateOrderDetailsRequest,
    requester: Requester = Depends(get_requester),
) -> OrderResponse:
    """Change delivery details while the order is pending or confirmed."""
    command = UpdateOrderDetails(
        order_id=order_id,
        requester_id=requester.user_id,
        requester_role=requester.role.value,
        **body.model_dump(exclude_none=True),
    )
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.post("/{order_id}/status", response_model=OrderResponse)
async def transition_order_status(
    order_id: str,
    body: TransitionStatusRequest,
    requester: Requester = Depends(get_staff),
) -> OrderResponse:
    """Move the order one step along the status pipeline (staff only)."""
    command = TransitionOrderStatus(
        order_id=order_id,
        new_status=body.status,
        notes=body.notes,
        changed_by=requester.user_id,
    )
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str,
    body: CancelOrderRequest,
    requester: Requester = Depends(get_requester),
) -> OrderResponse:
    command = CancelOrder(
        order_id=order_id,
        requester_id=requester.user_id,
        requester_role=requester.role.value,
        reason=body.reason,
    )
    order = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(order)


@order_router.get("/{order_id}/history", response_model=list[StatusChangeResponse])
async def get_status_history(order_id: str, requester: Requester = Depends(get_requester)) -> list[StatusChangeResponse]:
    """Status changes of the order, oldest first."""
    return [
        StatusChangeResponse(
            sequence=change.sequence,
            old_status=change.old_status,
            new_status=change.new_status,
            notes=change.notes,
            changed_by=str(change.changed_by) if change.changed_by else None,
            changed_at=change.changed_at,
        )
        for change in queries.get_status_history(order_id, requester)
    ]
