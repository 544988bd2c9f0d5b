"""Catering bounded context: order placement, the status lifecycle and its audit trail.

Orders are CQRS aggregates: every mutation is a command processed inside a
Unit of Work, and each status change appends one entry to the order's
status history in the same transaction.
"""

from protean.domain import Domain

from catering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

catering = Domain(name="catering")
