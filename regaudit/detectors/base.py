"""Detector protocol and the callable adapter."""

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from starlette.requests import Request

from regaudit.core.errors import InvalidDetectorError
from regaudit.models.detection import DetectionResult


DetectFunc = Callable[[Request], Awaitable[DetectionResult]]


@runtime_checkable
class Detector(Protocol):
    """Protocol for objects that classify a request for one registry protocol.

    ``detect`` returns a matched result, a declined result for requests that
    do not belong to the protocol, or raises ``DetectorFailure`` when the
    request looks like the protocol's traffic but cannot be parsed.
    """

    name: str

    async def detect(self, request: Request) -> DetectionResult:
        """Classify the request."""
        ...


class FunctionDetector:
    """Detector backed by a plain async callable."""

    def __init__(self, func: DetectFunc, name: str | None = None) -> None:
        if not callable(func):
            raise InvalidDetectorError(f"invalid detector: {func!r} is not callable")
        self._func = func
        self.name = name or getattr(func, "__name__", type(func).__name__)

    async def detect(self, request: Request) -> DetectionResult:
        return await self._func(request)

    def __repr__(self) -> str:
        return f"FunctionDetector(name={self.name!r})"
