"""
SQS batch consumer for the relay.

This module maps the SQS event handed to the function into domain
messages, delegates to BatchRelayService, and renders the partial batch
response the event source mapping expects.

Following hexagonal architecture, the relay service is injected via constructor.
"""

import time
from collections.abc import Mapping
from typing import Any

import structlog

from .application.services import BatchRelayService
from .domain import BatchFormatError, InboundMessage
from .infrastructure.logging import bind_correlation_id

logger = structlog.get_logger()


def parse_sqs_event(event: Any) -> list[InboundMessage]:
    """
    Extract messages from an SQS event.

    Args:
        event: Invocation event with a "Records" list

    Returns:
        Messages in delivery order

    Raises:
        BatchFormatError: If the event or one of its records is malformed
    """
    if not isinstance(event, Mapping):
        raise BatchFormatError(f"Event must be a mapping, got {type(event).__name__}")

    records = event.get("Records")
    if not isinstance(records, list):
        raise BatchFormatError("Event is missing a 'Records' list")

    messages = []
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise BatchFormatError(f"Record {index} is not a mapping")

        message_id = record.get("messageId")
        body = record.get("body")
        if not isinstance(message_id, str) or not message_id:
            raise BatchFormatError(f"Record {index} has no 'messageId'")
        if not isinstance(body, str):
            raise BatchFormatError(f"Record {message_id} has no string 'body'")

        messages.append(InboundMessage(message_id=message_id, body=body))

    return messages


class SqsBatchConsumer:
    """
    Handles one SQS batch per invocation.

    Following hexagonal architecture:
    - BatchRelayService is injected (not created internally)
    """

    def __init__(self, relay_service: BatchRelayService) -> None:
        """
        Initialize with injected dependencies.

        Args:
            relay_service: BatchRelayService instance
        """
        self._relay_service = relay_service

    async def handle(self, event: Any, request_id: str | None = None) -> dict:
        """
        Relay the batch carried by an SQS event.

        Args:
            event: SQS invocation event
            request_id: Invocation request id used as correlation id

        Returns:
            SQS partial batch response
        """
        bind_correlation_id(request_id)

        batch = parse_sqs_event(event)
        logger.info("Received SQS event", record_count=len(batch))

        if not batch:
            logger.info("Empty SQS event received")

        started = time.perf_counter()
        outcome = await self._relay_service.relay(batch)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        logger.info(
            "Batch relayed",
            record_count=len(batch),
            failed_count=len(outcome.failed_ids),
            duration_ms=duration_ms,
        )
        return outcome.to_response()
