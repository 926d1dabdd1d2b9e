"""Protocol detectors."""

from .base import DetectFunc, Detector, FunctionDetector
from .fallback import FallbackDetector
from .npm import NpmDetector


__all__ = [
    "DetectFunc",
    "Detector",
    "FallbackDetector",
    "FunctionDetector",
    "NpmDetector",
]
