"""Helpers for putting a consumed request body back on a request."""

from starlette.requests import Request
from starlette.types import Message


CONTENT_LENGTH = b"content-length"


def replace_content_length(
    raw_headers: list[tuple[bytes, bytes]], length: int
) -> list[tuple[bytes, bytes]]:
    """Return ASGI headers with a single ``content-length`` set to ``length``."""
    headers = [
        (name, value) for name, value in raw_headers if name.lower() != CONTENT_LENGTH
    ]
    headers.append((CONTENT_LENGTH, str(length).encode("latin-1")))
    return headers


def install_replay_body(request: Request, body: bytes) -> None:
    """Re-install ``body`` as the unread body of ``request``.

    The ASGI scope headers get a matching ``content-length`` and the request's
    ``receive`` is replaced, so any request object built later from the same
    scope and ``receive`` reads the same bytes again.
    """
    request.scope["headers"] = replace_content_length(
        list(request.scope.get("headers", [])), len(body)
    )
    # Starlette caches the parsed headers
    if hasattr(request, "_headers"):
        del request._headers

    request._body = body

    async def receive() -> Message:
        return {"type": "http.request", "body": body, "more_body": False}

    request._receive = receive
