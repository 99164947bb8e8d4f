"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions never await them
"""

from typing import Protocol

from admin_console.core.domain_types import Principal


class SessionResolver(Protocol):
    """Resolve a session token to its principal, or None if invalid/expired."""
    async def resolve(self, token: str) -> Principal | None: ...


class KeyValueStore(Protocol):
    """String-keyed store with optional per-key expiry."""
    async def get(self, key: str) -> str | None: ...
    async def set(
        self, key: str, value: str, ttl_seconds: int | None = None,
    ) -> None: ...
    async def delete(self, *keys: str) -> None: ...
    async def ping(self) -> bool: ...
