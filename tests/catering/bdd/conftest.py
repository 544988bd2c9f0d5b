"""Shared BDD fixtures and step definitions for the Catering domain."""

from datetime import date

import pytest
from catering.order.errors import InvalidStatusTransition, OrderNotEditable
from catering.order.events import OrderDetailsUpdated, OrderPlaced, OrderStatusChanged
from catering.order.order import Order
from pytest_bdd import given, parsers, then

_ORDER_EVENT_CLASSES = {
    "OrderPlaced": OrderPlaced,
    "OrderDetailsUpdated": OrderDetailsUpdated,
    "OrderStatusChanged": OrderStatusChanged,
}


def _place(owner_id="cust-bdd"):
    order = Order.place(
        order_number="VG-20261120-BDD001",
        owner_id=owner_id,
        delivery_date=date(2026, 11, 20),
        delivery_hour="12:30",
        delivery_address="12 Rue de la Paix, Paris",
        person_count=25,
        menu_price=18.5,
        total_price=462.5,
    )
    return order


def _advanced(*statuses):
    order = _place()
    for status in statuses:
        order.transition_to(status)
    order._events.clear()
    return order


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order")
def pending_order():
    return _advanced()


@given("a confirmed order", target_fixture="order")
def confirmed_order():
    return _advanced("confirmed")


@given("an order in preparation", target_fixture="order")
def preparing_order():
    return _advanced("confirmed", "preparing")


@given("a delivered order", target_fixture="order")
def delivered_order():
    return _advanced("confirmed", "preparing", "ready", "delivering", "delivered")


@given(parsers.cfparse('an order placed by "{owner_id}"'), target_fixture="order")
def order_placed_by(owner_id):
    return _place(owner_id=owner_id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse("the order has {count:d} history entries"))
def order_has_n_history_entries(order, count):
    assert len(order.history()) == count


@then("the status change is rejected as an invalid transition")
def status_change_rejected(error):
    assert isinstance(error["exc"], InvalidStatusTransition), f"Expected InvalidStatusTransition, got {error['exc']!r}"


@then("the order action fails because the order is not editable")
def order_not_editable(error):
    assert isinstance(error["exc"], OrderNotEditable), f"Expected OrderNotEditable, got {error['exc']!r}"


@then(parsers.cfparse("an {event_type} event is raised"))
def order_event_raised(order, event_type):
    event_cls = _ORDER_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in order._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in order._events]}"
