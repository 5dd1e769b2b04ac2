"""Exceptions raised by the board engine."""


class InvalidConfigurationError(ValueError):
    """Board dimensions or mine count cannot produce a playable board."""
