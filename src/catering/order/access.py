"""Access policy: who may read or change an order.

Staff (admin, manager, employee) may access any order. A customer may only
access orders they placed. Every read and write of an order goes through
``ensure_access``; status transitions are authorized by their caller before
the command is issued.
"""

from dataclasses import dataclass
from enum import Enum

from catering.order.errors import OrderAccessDenied


class Role(Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    CUSTOMER = "customer"


STAFF_ROLES = frozenset({Role.ADMIN, Role.MANAGER, Role.EMPLOYEE})


@dataclass(frozen=True)
class Requester:
    """The authenticated user on whose behalf an operation runs."""

    user_id: str
    role: Role

    def __post_init__(self):
        # Accept raw role strings from commands and headers
        object.__setattr__(self, "user_id", str(self.user_id))
        object.__setattr__(self, "role", Role(self.role))

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES


def can_access(role: Role, is_owner: bool) -> bool:
    return Role(role) in STAFF_ROLES or is_owner


def ensure_access(order, requester: Requester) -> None:
    """Raise ``OrderAccessDenied`` unless ``requester`` may access ``order``."""
    is_owner = str(order.owner_id) == requester.user_id
    if not can_access(requester.role, is_owner):
        raise OrderAccessDenied(order.id, requester.user_id)
