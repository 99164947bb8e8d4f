"""Authorization — pure decision from a resolved session to a SessionOutcome.

Invariants:
    - Exactly one outcome variant per evaluation
    - No principal → Unauthenticated; non-admin principal → Forbidden
    - Only Authorized carries a principal

Design Decisions:
    - Tagged union as three frozen dataclasses: callers branch with isinstance,
      no optional success/failure fields on a single record
"""

from dataclasses import dataclass

from admin_console.core.domain_types import Principal


@dataclass(frozen=True)
class Authorized:
    principal: Principal


@dataclass(frozen=True)
class Unauthenticated:
    reason: str = "No valid session"


@dataclass(frozen=True)
class Forbidden:
    principal_id: str


SessionOutcome = Authorized | Unauthenticated | Forbidden


def decide_outcome(principal: Principal | None) -> SessionOutcome:
    """Map a resolved principal (or its absence) to the admin gate outcome."""
    if principal is None:
        return Unauthenticated()
    if not principal.is_admin:
        return Forbidden(principal_id=principal.id)
    return Authorized(principal=principal)


def extract_session_token(
    cookies: dict[str, str], authorization: str | None, cookie_name: str,
) -> str | None:
    """Pull the session token from the cookie, else from a Bearer header.

    Signed cookie values look like ``<token>.<signature>``; only the token
    part identifies the session.
    """
    raw = cookies.get(cookie_name)
    if raw:
        token = raw.split(".", 1)[0].strip()
        return token or None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    return None
