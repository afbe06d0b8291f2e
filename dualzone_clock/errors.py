"""Exception types for Dual-Zone Clock."""


class ConfigurationError(ValueError):
    """Raised when the face cannot be configured (bad interval, zone or file)."""


class GeometryNotReadyError(RuntimeError):
    """Raised when a frame is rendered before any bounds were supplied."""
