from dataclasses import dataclass
from typing import Optional

from flask import current_app

from app.auth.permissions import ROLES, role_has_scope
from app.utils.jwt import decode_token, TokenError


@dataclass(frozen=True)
class Principal:
    """The authenticated caller of a request."""

    id: int
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def can(self, action: str) -> bool:
        return role_has_scope(self.role, action)

    def to_dict(self):
        return {"id": self.id, "email": self.email, "name": self.name, "role": self.role}


def _session_token(req) -> Optional[str]:
    auth = req.headers.get("Authorization", "")
    # other schemes (Basic from a proxy, say) leave the cookie in charge
    if auth.startswith("Bearer "):
        token = auth.split(" ", 1)[1].strip()
        if token:
            return token
    return req.cookies.get(current_app.config["AUTH_COOKIE_NAME"])


def principal_from_claims(claims) -> Optional[Principal]:
    role = claims.get("role")
    if role not in ROLES:
        return None
    try:
        principal_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return Principal(
        id=principal_id,
        email=claims.get("email") or "",
        name=claims.get("name") or "",
        role=role,
    )


def resolve_principal(req) -> Optional[Principal]:
    """Return the request's principal, or None when there is no valid session.

    Absence is an ordinary outcome here, so token problems are never raised.
    """
    token = _session_token(req)
    if not token:
        return None
    try:
        claims = decode_token(token, expected_type="access")
    except TokenError as e:
        current_app.logger.debug("Ignoring session token: %s", e)
        return None
    return principal_from_claims(claims)
