"""Requester identity and role checks.

The authentication collaborator hands us a user id and a role label on every
request. The label is normalized exactly once, at the HTTP boundary, into a
``Role``; everything below works with the typed ``Requester``.
"""

from dataclasses import dataclass
from enum import Enum

from ordering.errors import AuthorizationError


class Role(Enum):
    CUSTOMER = "customer"
    SUPPORT = "support"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    @classmethod
    def parse(cls, value) -> "Role":
        """Normalize a role given as a label or as a ``{"name": ...}`` mapping.

        Unknown or missing roles fall back to ``CUSTOMER``, the least privileged.
        """
        if isinstance(value, dict):
            value = value.get("name")
        if isinstance(value, Role):
            return value
        label = str(value or "").strip().lower().replace(" ", "").replace("_", "")
        for role in cls:
            if role.value == label:
                return role
        return cls.CUSTOMER


_PRIVILEGED_ROLES = {Role.ADMIN, Role.SUPERADMIN}


@dataclass(frozen=True)
class Requester:
    user_id: str
    role: Role = Role.CUSTOMER
    name: str | None = None
    email: str | None = None

    @property
    def is_privileged(self) -> bool:
        return self.role in _PRIVILEGED_ROLES

    @property
    def display_name(self) -> str:
        return self.name or self.email or "System"

    def owns(self, customer_id) -> bool:
        return str(customer_id) == str(self.user_id)

    def can_access(self, customer_id) -> bool:
        return self.is_privileged or self.owns(customer_id)


def require_privileged(requester: Requester) -> None:
    if not requester.is_privileged:
        raise AuthorizationError("Admin access required")


def require_superadmin(requester: Requester) -> None:
    if requester.role != Role.SUPERADMIN:
        raise AuthorizationError("Superadmin access required")


def require_access(requester: Requester, customer_id) -> None:
    """Raise unless the requester is privileged or owns the resource."""
    if not requester.can_access(customer_id):
        raise AuthorizationError("You do not have access to this order")
