from __future__ import annotations


class MetadataClientError(Exception):
    """Base class for errors raised by mdata_client."""


class InvalidArgument(MetadataClientError, ValueError):
    """An empty key or value was passed to a metadata operation."""


class LaunchError(MetadataClientError, RuntimeError):
    """The external binary could not be spawned."""

    def __init__(self, binary: str, reason: str) -> None:
        super().__init__(f"Failed to launch '{binary}': {reason}")
        self.binary = binary
        self.reason = reason


__all__ = ["InvalidArgument", "LaunchError", "MetadataClientError"]
