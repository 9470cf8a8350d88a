"""Caller identity handed to the application layer.

Authentication happens outside the engine; handlers only check the role
that was resolved for the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from settlement.domain.exceptions import AuthorizationError


class Role(Enum):
    ADMIN = "admin"
    VENDOR = "vendor"
    CUSTOMER = "customer"


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_role(caller: Caller, *roles: Role) -> None:
    if caller.role not in roles:
        allowed = ", ".join(r.value for r in roles)
        raise AuthorizationError(
            f"Role '{caller.role.value}' is not allowed here (requires {allowed})"
        )
