"""Catch-all detector for container image registry traffic."""

from starlette.requests import Request

from regaudit.models.detection import DetectionResult, RegistryKind


class FallbackDetector:
    """Matches every request as image registry traffic.

    Register it last so that a chain always ends with a result.
    """

    name = "image"

    def __init__(self, registry_kind: RegistryKind | str = RegistryKind.IMAGE) -> None:
        self.registry_kind = registry_kind

    async def detect(self, request: Request) -> DetectionResult:
        return DetectionResult.hit(self.registry_kind)
