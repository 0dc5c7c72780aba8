"""
Application service for relaying a batch of queue messages.

Each message is decoded and republished independently. Failures are
collected per message so only those ids are redelivered by the queue.
"""

import asyncio
from collections.abc import Sequence

import structlog

from ...domain import BatchOutcome, DecodeError, InboundMessage, ParsedPayload, PublishError
from ...domain.ports import MessagePublisher
from ...infrastructure.logging import truncate_body

logger = structlog.get_logger()

DEFAULT_MAX_CONCURRENCY = 10


class BatchRelayService:
    """
    Relays queue messages to a pub/sub destination.

    Following hexagonal architecture, the publisher is injected and the
    destination is fixed for the lifetime of the service.
    """

    def __init__(
        self,
        publisher: MessagePublisher,
        destination: str,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """
        Initialize with a publisher implementation.

        Args:
            publisher: Implementation of MessagePublisher port
            destination: Topic identifier every payload is published to
            max_concurrency: Upper bound on in-flight publishes per batch
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._publisher = publisher
        self._destination = destination
        self._max_concurrency = max_concurrency

    async def relay(self, batch: Sequence[InboundMessage]) -> BatchOutcome:
        """
        Relay every message in the batch.

        Args:
            batch: Messages in delivery order

        Returns:
            BatchOutcome listing the ids that must be redelivered
        """
        if not batch:
            return BatchOutcome()

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def bounded(message: InboundMessage) -> bool:
            async with semaphore:
                return await self._relay_one(message)

        results = await asyncio.gather(*(bounded(m) for m in batch), return_exceptions=True)

        failed: dict[str, None] = {}
        for message, ok in zip(batch, results):
            if isinstance(ok, BaseException):
                logger.error(
                    "Message relay failed",
                    message_id=message.message_id,
                    error=str(ok),
                    error_type=type(ok).__name__,
                )
            if ok is not True:
                failed[message.message_id] = None

        return BatchOutcome(failed_ids=tuple(failed))

    async def _relay_one(self, message: InboundMessage) -> bool:
        """Relay a single message. Returns False when it must be retried."""
        log = logger.bind(message_id=message.message_id)
        log.info("Processing message", body=truncate_body(message.body))

        try:
            payload = ParsedPayload.from_body(message.body)
        except DecodeError as e:
            log.error("Message body decode failed", error=e.reason)
            return False

        try:
            result = await self._publisher.publish(self._destination, payload.message)
        except PublishError as e:
            log.error(
                "Message publish failed",
                destination=e.destination,
                error=e.reason,
                throttled=e.throttled,
            )
            return False
        except Exception as e:
            log.error("Message publish failed", destination=self._destination, error=str(e))
            return False

        log.info(
            "Message published",
            destination=self._destination,
            acknowledgment_id=result.acknowledgment_id,
        )
        return True
