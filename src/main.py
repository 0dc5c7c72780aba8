"""
Lambda entry point for the SQS to SNS relay.

The settings, logging and SNS session are set up once per process; each
invocation relays one batch and returns the partial batch response.
"""

import asyncio
from typing import Any

import structlog

from .application.services import BatchRelayService
from .config import Settings, settings
from .consumer import SqsBatchConsumer
from .domain import ConfigurationError
from .domain.ports import MessagePublisher
from .infrastructure.adapters import SnsPublisher
from .infrastructure.logging import configure_logging

configure_logging(settings.service_name, settings.log_level)

logger = structlog.get_logger()

_publisher: SnsPublisher | None = None


def get_publisher(config: Settings | None = None) -> SnsPublisher:
    """Return the process-wide SNS publisher, creating it on first use."""
    global _publisher
    config = config or settings
    if _publisher is None:
        logger.info(
            "Creating SNS publisher",
            region=config.region,
            endpoint_url=config.aws_endpoint_url,
        )
        _publisher = SnsPublisher(region=config.region, endpoint_url=config.aws_endpoint_url)
    return _publisher


def build_consumer(publisher: MessagePublisher, config: Settings | None = None) -> SqsBatchConsumer:
    """Wire up the consumer (Composition Root)."""
    config = config or settings
    if not config.sns_topic_arn:
        raise ConfigurationError("SNS_TOPIC_ARN must be set")

    relay_service = BatchRelayService(
        publisher=publisher,
        destination=config.sns_topic_arn,
        max_concurrency=config.max_concurrency,
    )
    return SqsBatchConsumer(relay_service)


async def relay_event(event: Any, request_id: str | None = None) -> dict:
    """Relay one SQS event using the process-wide publisher."""
    publisher = get_publisher()
    consumer = build_consumer(publisher)
    async with publisher:
        return await consumer.handle(event, request_id=request_id)


def handler(event: dict, context) -> dict:
    """AWS Lambda handler for SQS event source."""
    request_id = getattr(context, "aws_request_id", None)
    return asyncio.run(relay_event(event, request_id=request_id))
