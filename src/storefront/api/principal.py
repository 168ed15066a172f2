"""Request principal supplied by the authentication gateway.

Credentials are verified upstream; the gateway forwards the verified
identity as ``X-User-Id`` and ``X-User-Role`` headers.
"""

from dataclasses import dataclass

from fastapi import Depends, Header

from storefront.errors import Unauthorized

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Principal:
    user_id: str
    is_admin: bool = False


async def get_principal(
    x_user_id: str = Header(default=""),
    x_user_role: str = Header(default="user"),
) -> Principal:
    if not x_user_id.strip():
        raise Unauthorized("Access denied. No credentials provided.")
    return Principal(user_id=x_user_id.strip(), is_admin=x_user_role.strip().lower() == ADMIN_ROLE)


async def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise Unauthorized("Access denied. Insufficient permissions.", forbidden=True)
    return principal
