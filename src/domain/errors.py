"""
Error taxonomy for the relay.

Per-message errors (DecodeError, PublishError) are caught at the message
boundary and turned into batch item failures. Batch and configuration
errors propagate to the runtime.
"""


class RelayError(Exception):
    """Base class for relay errors."""


class DecodeError(RelayError):
    """Message body could not be decoded into a payload."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Body decode failed: {reason}")
        self.reason = reason


class PublishError(RelayError):
    """The sink rejected or failed the publish call."""

    def __init__(self, destination: str, reason: str, throttled: bool = False) -> None:
        super().__init__(f"Publish to {destination} failed: {reason}")
        self.destination = destination
        self.reason = reason
        self.throttled = throttled


class BatchFormatError(RelayError):
    """The invocation event is not a valid batch descriptor."""


class ConfigurationError(RelayError):
    """Required settings are missing or invalid."""
