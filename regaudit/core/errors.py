"""Custom exceptions for registry request detection."""

from typing import Any


NO_HIT_MARKER = "no hit"
ERROR_DELIMITER = ";"


class DetectionError(Exception):
    """Base exception for all detection errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidDetectorError(DetectionError):
    """Raised when registering something that is not a detector."""

    def __init__(self, message: str = "invalid detector") -> None:
        super().__init__(message)


class EmptyChainError(DetectionError):
    """Raised when detection runs against a chain with no detectors."""

    def __init__(self, message: str = "no detectors") -> None:
        super().__init__(message)


class DetectorFailure(DetectionError):
    """Raised by a detector that recognised a request but could not parse it.

    When the detector had already consumed the request body, the buffered
    bytes are carried in ``replay_body`` so the caller can put them back.
    """

    def __init__(
        self,
        message: str,
        detector: str = "unknown",
        replay_body: bytes | None = None,
    ) -> None:
        super().__init__(message, details={"detector": detector})
        self.detector = detector
        self.replay_body = replay_body


class NoHitError(DetectionError):
    """Raised when every detector in a chain declined or failed."""

    def __init__(
        self,
        errors: list[str] | None = None,
        replay_body: bytes | None = None,
    ) -> None:
        self.errors = list(errors or [])
        self.replay_body = replay_body
        super().__init__(
            f"{NO_HIT_MARKER}:{ERROR_DELIMITER.join(self.errors)}",
            details={"errors": self.errors},
        )
