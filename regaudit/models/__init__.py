from .detection import (
    DetectionResult,
    DistTags,
    NpmPackageManifest,
    RegistryKind,
    RequestMetadata,
)


__all__ = [
    "DetectionResult",
    "DistTags",
    "NpmPackageManifest",
    "RegistryKind",
    "RequestMetadata",
]
