"""FishGame exception hierarchy.

Centralised base classes so callers can catch narrowly and failures
become easier to diagnose.
"""


class FishGameError(Exception):
    """Root of all FishGame exceptions."""


class ConfigurationError(FishGameError):
    """Invalid or missing configuration."""


class AssetError(FishGameError):
    """An image resource could not be found or decoded."""


class PhysicsError(FishGameError):
    """Invalid physics body or world configuration."""


class ActionError(FishGameError):
    """Invalid action parameters (negative durations, empty sequences)."""
