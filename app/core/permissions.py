import enum
from dataclasses import dataclass, field
import re
from typing import FrozenSet, Iterable, Optional, Union

from app.core.config import settings
from app.core.exceptions import AuthorizationDeniedError

RolesInput = Union[None, str, Iterable[str]]

_ROLE_SEPARATORS = re.compile(r"[,;\s]+")
_ROLE_STRIP_CHARS = "[]{}()\"' "


class Decision(enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


def _normalize_role(token: str) -> str:
    token = token.strip(_ROLE_STRIP_CHARS).upper()
    if token.startswith("ROLE_"):
        token = token[len("ROLE_"):]
    return token


def parse_roles(raw: RolesInput) -> FrozenSet[str]:
    """Turn the gateway's role encoding into a set of role tokens.

    Accepts the raw header string ("ADMIN,USER", "[ROLE_ADMIN, ROLE_USER]", ...)
    or any iterable of tokens. Anything unusable is treated as no roles.
    """
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        tokens = _ROLE_SEPARATORS.split(raw)
    else:
        try:
            tokens = [token for token in raw if isinstance(token, str)]
        except TypeError:
            return frozenset()
    return frozenset(role for role in (_normalize_role(t) for t in tokens) if role)


def is_admin(requester_roles: RolesInput) -> bool:
    return _normalize_role(settings.ADMIN_ROLE) in parse_roles(requester_roles)


def decide(
    requester_id: Optional[str],
    requester_roles: RolesInput,
    resource_owner_id: Optional[str],
) -> Decision:
    """Ownership-or-admin rule. Never raises."""
    if is_admin(requester_roles):
        return Decision.ALLOW
    if requester_id and requester_id == resource_owner_id:
        return Decision.ALLOW
    return Decision.DENY


def require_admin(requester_roles: RolesInput) -> Decision:
    return Decision.ALLOW if is_admin(requester_roles) else Decision.DENY


def check_ownership_or_admin(
    resource_owner_id: Optional[str],
    requester_id: Optional[str],
    requester_roles: RolesInput,
) -> None:
    """Raise AuthorizationDeniedError unless the requester owns the resource or is admin"""
    if decide(requester_id, requester_roles, resource_owner_id) is Decision.DENY:
        raise AuthorizationDeniedError(
            "You do not have permission to access this registration"
        )


def check_is_admin(requester_roles: RolesInput) -> None:
    """Raise AuthorizationDeniedError unless the requester is an administrator"""
    if require_admin(requester_roles) is Decision.DENY:
        raise AuthorizationDeniedError("Administrator role required")


@dataclass(frozen=True)
class Requester:
    """Caller identity as forwarded by the gateway, passed explicitly into every operation"""

    id: str
    roles: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_headers(cls, user_id: str, raw_roles: RolesInput) -> "Requester":
        return cls(id=user_id, roles=parse_roles(raw_roles))
