"""Ordered chain of protocol detectors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from regaudit.core.errors import (
    DetectorFailure,
    EmptyChainError,
    InvalidDetectorError,
    NoHitError,
)
from regaudit.core.logging import configure_logging, get_logger
from regaudit.detectors import Detector, FallbackDetector, NpmDetector


if TYPE_CHECKING:
    from starlette.requests import Request

    from regaudit.config.detection import DetectionSettings
    from regaudit.config.settings import Settings
    from regaudit.models.detection import DetectionResult


logger = get_logger(__name__)


class DetectorChain:
    """Runs detectors in registration order; the first match wins.

    Detectors are registered once at start-up and the list is not mutated
    while requests are being served, so one chain can be shared by
    concurrent ``detect`` calls.
    """

    def __init__(self, settings: DetectionSettings | None = None) -> None:
        self.settings = settings
        self._detectors: list[Detector] = []

    def __len__(self) -> int:
        return len(self._detectors)

    @property
    def detectors(self) -> tuple[Detector, ...]:
        return tuple(self._detectors)

    def initialize(self) -> None:
        """Reset the chain to the default order: npm first, image fallback last."""
        self._detectors = []
        self.register(NpmDetector(self.settings))
        self.register(FallbackDetector())

    def register(self, detector: Detector) -> None:
        """Append a detector to the end of the chain.

        Raises:
            InvalidDetectorError: ``detector`` is missing or has no ``detect``
        """
        if detector is None or not isinstance(detector, Detector):
            raise InvalidDetectorError(f"invalid detector: {detector!r}")

        self._detectors.append(detector)
        logger.debug(
            "detector_registered",
            detector=detector.name,
            detector_type=type(detector).__name__,
            position=len(self._detectors),
        )

    async def detect(self, request: Request) -> DetectionResult:
        """Classify a request with the first detector that recognises it.

        A failing detector does not stop the chain; its message is kept and
        reported only if nothing matches. A body consumed along the way is
        returned on the result (or on ``NoHitError``) for the caller to
        re-install.

        Raises:
            EmptyChainError: No detectors are registered
            NoHitError: Every detector declined or failed
        """
        if not self._detectors:
            raise EmptyChainError()

        errors: list[str] = []
        replay_body: bytes | None = None

        for detector in self._detectors:
            try:
                result = await detector.detect(request)
            except DetectorFailure as e:
                if e.replay_body is not None:
                    replay_body = e.replay_body
                errors.append(f"{detector.name}: {e.message}")
                logger.warning(
                    "detector_failed",
                    detector=detector.name,
                    error=e.message,
                )
                continue
            except Exception as e:
                errors.append(f"{detector.name}: {e}")
                logger.error(
                    "detector_error",
                    detector=detector.name,
                    error=str(e),
                    exc_info=e,
                )
                continue

            if result.replay_body is not None:
                replay_body = result.replay_body

            if result.matched:
                logger.debug(
                    "detector_matched",
                    detector=detector.name,
                    registry_kind=result.metadata.registry_kind,
                )
                if result.replay_body is None and replay_body is not None:
                    result = result.model_copy(update={"replay_body": replay_body})
                return result

        logger.info("detection_no_hit", errors=errors, detectors=len(self._detectors))
        raise NoHitError(errors, replay_body=replay_body)


def create_default_chain(
    settings: Settings | None = None, setup_logs: bool = True
) -> DetectorChain:
    """Build a chain with the default detectors registered.

    Args:
        settings: Settings to use; the cached environment settings if omitted
        setup_logs: Also configure logging from ``settings.logging``
    """
    if settings is None:
        from regaudit.config.settings import get_settings

        settings = get_settings()

    if setup_logs:
        configure_logging(settings.logging)

    chain = DetectorChain(settings.detection)
    chain.initialize()
    return chain
