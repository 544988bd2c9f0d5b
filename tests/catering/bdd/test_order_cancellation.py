"""BDD tests for order cancellation and the editable window."""

from catering.order.errors import OrderNotEditable
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_cancellation.feature")


@when(parsers.cfparse('the order is cancelled with reason "{reason}"'), target_fixture="order")
def cancel_order(order, reason):
    order.cancel(reason, cancelled_by="cust-bdd")
    return order


@when(parsers.cfparse('cancellation is attempted with reason "{reason}"'), target_fixture="order")
def attempt_cancellation(order, reason, error):
    try:
        order.cancel(reason)
    except OrderNotEditable as exc:
        error["exc"] = exc
    return order


@when(parsers.cfparse('a delivery hour change to "{hour}" is attempted'), target_fixture="order")
def attempt_detail_change(order, hour, error):
    try:
        order.update_details(delivery_hour=hour)
    except OrderNotEditable as exc:
        error["exc"] = exc
    return order


@then(parsers.cfparse('the cancellation reason is "{reason}"'))
def cancellation_reason_is(order, reason):
    assert order.cancellation_reason == reason
