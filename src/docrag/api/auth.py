"""Shared-secret bearer token gate."""

import hmac

from fastapi import Request

from docrag.core.errors import Unauthorized


async def require_bearer(request: Request) -> None:
    """Reject the request unless it carries ``Authorization: Bearer <api_key>``.

    The gate is open when no ``api_key`` is configured.
    """
    api_key = request.app.state.settings.api_key
    if not api_key:
        return

    header = request.headers.get("authorization", "")
    if not hmac.compare_digest(header.encode(), f"Bearer {api_key}".encode()):
        raise Unauthorized("Unauthorized")
