"""Error types raised for user-correctable misconfiguration."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a required configuration value cannot be determined.

    The message names the missing field (or environment variable) so it can be
    shown to the user as-is.
    """
