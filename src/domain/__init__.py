from .errors import (
    BatchFormatError,
    ConfigurationError,
    DecodeError,
    PublishError,
    RelayError,
)
from .models import BatchOutcome, InboundMessage, ParsedPayload, PublishResult

__all__ = [
    "BatchFormatError",
    "BatchOutcome",
    "ConfigurationError",
    "DecodeError",
    "InboundMessage",
    "ParsedPayload",
    "PublishError",
    "PublishResult",
    "RelayError",
]
