"""Catering domain API package."""

from catering.api.errors import register_error_handlers
from catering.api.routes import order_router

__all__ = ["order_router", "register_error_handlers"]
