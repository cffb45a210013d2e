"""Custom exception classes for the finance dashboard."""


class DashboardError(Exception):
    """Base exception for the finance dashboard."""
    pass


class ConfigError(DashboardError):
    """Configuration-related errors."""
    pass


class UpstreamError(DashboardError):
    """Transaction backend unreachable or answered badly."""
    pass


class InvalidDataError(DashboardError):
    """Upstream payload is not a list of transaction records."""
    pass
