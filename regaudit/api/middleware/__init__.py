from .registry_detection import STATE_KEY, RegistryDetectionMiddleware


__all__ = ["RegistryDetectionMiddleware", "STATE_KEY"]
