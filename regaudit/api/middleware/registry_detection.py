"""Middleware that classifies registry requests before they are handled."""

from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from regaudit.core.errors import EmptyChainError, NoHitError
from regaudit.core.logging import get_logger
from regaudit.services.chain import DetectorChain, create_default_chain
from regaudit.utils.body import install_replay_body


logger = get_logger(__name__)

STATE_KEY = "registry_metadata"


class RegistryDetectionMiddleware(BaseHTTPMiddleware):
    """Attach registry metadata to every request.

    The metadata is stored on ``request.state.registry_metadata`` (``None``
    when no detector matched). A body consumed during detection is put back
    before the request reaches the next handler. Detection never changes the
    response.
    """

    def __init__(self, app: Any, chain: DetectorChain | None = None) -> None:
        """Initialize the detection middleware.

        Args:
            app: The ASGI application
            chain: Detector chain to run; the default npm/image chain if omitted
        """
        super().__init__(app)
        self.chain = chain if chain is not None else create_default_chain()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        setattr(request.state, STATE_KEY, None)

        try:
            result = await self.chain.detect(request)
        except NoHitError as e:
            logger.warning(
                "registry_detection_no_hit",
                method=request.method,
                path=request.url.path,
                errors=e.errors,
            )
            if e.replay_body is not None:
                install_replay_body(request, e.replay_body)
        except EmptyChainError as e:
            logger.error("registry_detection_unavailable", error=e.message)
        else:
            if result.replay_body is not None:
                install_replay_body(request, result.replay_body)
            setattr(request.state, STATE_KEY, result.metadata)
            logger.info(
                "registry_request_classified",
                method=request.method,
                registry_kind=result.metadata.registry_kind,
                command=result.metadata.attributes.get("command"),
            )

        return await call_next(request)
