"""Application tests for order cancellation via domain.process()."""

import pytest
from catering.order.cancellation import CancelOrder
from catering.order.errors import OrderAccessDenied, OrderNotEditable, OrderNotFound
from catering.order.order import Order
from catering.order.placement import PlaceOrder
from catering.order.transitions import TransitionOrderStatus
from protean import current_domain
from protean.exceptions import ValidationError


def _place_order(owner_id="cust-001"):
    return current_domain.process(
        PlaceOrder(
            owner_id=owner_id,
            delivery_date="2026-11-20",
            delivery_hour="12:30",
            delivery_address="12 Rue de la Paix, Paris",
            person_count=25,
            menu_price=18.5,
            total_price=462.5,
        ),
        asynchronous=False,
    )


def _cancel(order_id, reason="Event postponed", requester_id="cust-001", requester_role="customer"):
    return current_domain.process(
        CancelOrder(order_id=order_id, requester_id=requester_id, requester_role=requester_role, reason=reason),
        asynchronous=False,
    )


def _advance(order_id, *statuses):
    for status in statuses:
        current_domain.process(TransitionOrderStatus(order_id=order_id, new_status=status), asynchronous=False)


class TestCancelOrder:
    def test_cancel_pending(self):
        order_id = _place_order()
        _cancel(order_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "cancelled"
        assert order.cancelled_at is not None
        assert order.cancellation_reason == "Event postponed"

    def test_cancel_records_history(self):
        order_id = _place_order()
        _advance(order_id, "confirmed")
        _cancel(order_id, reason="Venue closed")

        history = current_domain.repository_for(Order).get(order_id).history()
        assert len(history) == 2
        assert history[-1].old_status == "confirmed"
        assert history[-1].new_status == "cancelled"
        assert history[-1].notes == "Venue closed"
        assert history[-1].changed_by == "cust-001"

    def test_staff_can_cancel(self):
        order_id = _place_order()
        _cancel(order_id, requester_id="admin-1", requester_role="admin")
        assert current_domain.repository_for(Order).get(order_id).status == "cancelled"

    def test_other_customer_is_denied(self):
        order_id = _place_order()
        with pytest.raises(OrderAccessDenied):
            _cancel(order_id, requester_id="cust-999")
        assert current_domain.repository_for(Order).get(order_id).status == "pending"

    def test_cannot_cancel_once_preparing(self):
        order_id = _place_order()
        _advance(order_id, "confirmed", "preparing")
        with pytest.raises(OrderNotEditable):
            _cancel(order_id)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "preparing"
        assert len(order.history()) == 2

    def test_missing_order(self):
        with pytest.raises(OrderNotFound):
            _cancel("does-not-exist")

    def test_reason_is_required(self):
        with pytest.raises(ValidationError):
            CancelOrder(order_id="any", requester_id="cust-001", requester_role="customer")
