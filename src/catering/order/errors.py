"""Order exceptions.

Every failure the catering core can report has its own class so callers can
tell them apart. They extend Protean's exception hierarchy: a missing order
is an ``ObjectNotFoundError`` and rule violations on the order's status are
``ValidationError`` keyed by ``status``.
"""

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError


class OrderNotFound(ObjectNotFoundError):
    """No order exists with the requested identifier."""

    def __init__(self, order_id):
        self.order_id = str(order_id)
        super().__init__({"order_id": [f"Order {order_id} does not exist"]})


class OrderAccessDenied(ProteanException):
    """The requester may neither read nor change this order."""

    def __init__(self, order_id, requester_id):
        self.order_id = str(order_id)
        self.requester_id = str(requester_id)
        super().__init__({"order_id": [f"Access to order {order_id} denied"]})


class InvalidStatusTransition(ValidationError):
    """The requested status is not reachable from the current one."""

    def __init__(self, current_status, requested_status):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__({"status": [f"Cannot transition from {current_status} to {requested_status}"]})


class OrderNotEditable(ValidationError):
    """A detail update or cancellation was attempted outside the pending/confirmed window."""

    def __init__(self, status, action="modified"):
        self.status = status
        super().__init__({"status": [f"Order cannot be {action} in {status} status"]})


class OrderConflict(ProteanException):
    """A concurrent write or an order-number collision; the caller may retry."""
