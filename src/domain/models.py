"""
Domain models for a single relay invocation.

Nothing here outlives one batch.
"""

import json
from dataclasses import dataclass

from .errors import DecodeError


@dataclass(frozen=True)
class InboundMessage:
    """A message delivered by the queue."""

    message_id: str
    body: str


@dataclass(frozen=True)
class ParsedPayload:
    """Decoded message body."""

    message: str

    @classmethod
    def from_body(cls, body: str) -> "ParsedPayload":
        """
        Decode a raw message body.

        Args:
            body: JSON text expected to hold an object with a "message" string

        Returns:
            ParsedPayload carrying the extracted message

        Raises:
            DecodeError: If the body is not a JSON object with a string "message"
        """
        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            raise DecodeError(str(e)) from e
        except RecursionError as e:
            raise DecodeError("body is nested too deeply") from e

        if not isinstance(data, dict):
            raise DecodeError("body must be a JSON object")

        message = data.get("message")
        if not isinstance(message, str):
            raise DecodeError("missing string field 'message'")

        return cls(message=message)


@dataclass(frozen=True)
class PublishResult:
    """Acknowledgment returned by the sink."""

    acknowledgment_id: str


@dataclass(frozen=True)
class BatchOutcome:
    """Ids the queue must redeliver, in batch order."""

    failed_ids: tuple[str, ...] = ()

    @property
    def is_success(self) -> bool:
        return not self.failed_ids

    def to_response(self) -> dict:
        """Render the SQS partial batch response."""
        return {
            "batchItemFailures": [{"itemIdentifier": mid} for mid in self.failed_ids],
        }
