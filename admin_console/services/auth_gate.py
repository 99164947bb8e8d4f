"""Auth Gate — authorize(request) for every admin endpoint.

Invariants:
    - Returns a SessionOutcome; expected failures are values, not exceptions
    - Reads session state only; never writes
    - Dependency failures (database down) propagate as DatabaseError
"""

import logging

from fastapi import Request

from admin_console.core.authorization import (
    Forbidden, SessionOutcome, Unauthenticated,
    decide_outcome, extract_session_token,
)
from admin_console.core.repository_protocols import SessionResolver

logger = logging.getLogger(__name__)


class AuthGate:
    """Admin gate: session token → principal → role decision."""

    def __init__(self, resolver: SessionResolver, cookie_name: str):
        self._resolver = resolver
        self._cookie_name = cookie_name

    async def authorize(self, request: Request) -> SessionOutcome:
        token = extract_session_token(
            dict(request.cookies),
            request.headers.get("authorization"),
            self._cookie_name,
        )
        if token is None:
            return Unauthenticated(reason="No session token")

        principal = await self._resolver.resolve(token)
        outcome = decide_outcome(principal)
        if isinstance(outcome, Forbidden):
            logger.warning(
                f"Non-admin access attempt on {request.url.path}",
                extra={"actor_id": outcome.principal_id, "path": request.url.path},
            )
        return outcome
