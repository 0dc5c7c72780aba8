"""Shared fixtures for relay tests."""

import pytest

from src.domain import InboundMessage, PublishError, PublishResult
from src.domain.ports import MessagePublisher

TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:relay-topic"


class FakePublisher(MessagePublisher):
    """Records publishes and fails for configured contents."""

    def __init__(self) -> None:
        self.published: list[tuple[str, str]] = []
        self.failures: dict[str, Exception] = {}

    def fail_on(self, content: str, error: Exception | None = None) -> None:
        self.failures[content] = error or PublishError(TOPIC_ARN, "Transport error")

    async def publish(self, destination: str, content: str) -> PublishResult:
        if content in self.failures:
            raise self.failures[content]
        self.published.append((destination, content))
        return PublishResult(acknowledgment_id=f"ack-{len(self.published)}")


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


def sqs_record(message_id: str, body: str) -> dict:
    return {
        "messageId": message_id,
        "receiptHandle": f"handle-{message_id}",
        "body": body,
        "attributes": {"ApproximateReceiveCount": "1"},
        "messageAttributes": {},
        "eventSource": "aws:sqs",
        "eventSourceARN": "arn:aws:sqs:us-east-1:123456789012:relay-queue",
        "awsRegion": "us-east-1",
    }


def message(message_id: str, body: str) -> InboundMessage:
    return InboundMessage(message_id=message_id, body=body)
