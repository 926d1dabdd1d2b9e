"""Request metadata extraction for package-registry traffic."""

from .core.errors import (
    DetectionError,
    DetectorFailure,
    EmptyChainError,
    InvalidDetectorError,
    NoHitError,
)
from .models.detection import DetectionResult, RegistryKind, RequestMetadata
from .services.chain import DetectorChain, create_default_chain


__version__ = "0.1.0"

__all__ = [
    "DetectionError",
    "DetectionResult",
    "DetectorChain",
    "DetectorFailure",
    "EmptyChainError",
    "InvalidDetectorError",
    "NoHitError",
    "RegistryKind",
    "RequestMetadata",
    "create_default_chain",
]
