"""Response Envelope — the {success, message, data, error} shape every endpoint returns."""

from typing import Any


def ok(data: Any = None, message: str | None = None) -> dict:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body["data"] = data
    return body
