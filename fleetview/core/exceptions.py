"""Custom exception hierarchy for fleetview.

All fleetview-specific exceptions inherit from FleetviewError, enabling
callers to catch every fleetview exception with a single except clause.
"""

from __future__ import annotations


class FleetviewError(Exception):
    """Base exception for all fleetview errors."""


class ConfigurationError(FleetviewError):
    """Raised for invalid configuration or unknown preference values."""


class StorageError(FleetviewError):
    """Raised when the durable key-value store cannot be written."""


class RPCError(FleetviewError):
    """Raised when a remote call returns an unusable response."""

    def __init__(self, method: str, reason: str = "unknown") -> None:
        self.method = method
        self.reason = reason
        super().__init__(f"RPC {method} failed: {reason}")
