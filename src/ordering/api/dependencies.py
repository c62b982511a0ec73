"""Request identity supplied by the authentication collaborator.

The gateway in front of this service authenticates the caller and forwards
the identity as headers. Role labels are normalized here, once, into ``Role``.
"""

from fastapi import Header, HTTPException

from ordering.access import Requester, Role
from ordering.utils.logging import add_context


def get_requester(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default="customer"),
    x_user_name: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
) -> Requester:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")

    requester = Requester(
        user_id=x_user_id,
        role=Role.parse(x_user_role),
        name=x_user_name,
        email=x_user_email,
    )
    add_context(user_id=requester.user_id, role=requester.role.value)
    return requester
