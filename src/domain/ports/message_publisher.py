"""
Outbound port for republishing message payloads.

The application layer depends on this abstraction; the SNS adapter
(or a test double) implements it.
"""

from abc import ABC, abstractmethod

from ..models import PublishResult


class MessagePublisher(ABC):
    """Outbound port for the pub/sub sink."""

    @abstractmethod
    async def publish(self, destination: str, content: str) -> PublishResult:
        """
        Publish content to a destination.

        Args:
            destination: Topic identifier
            content: Message payload

        Returns:
            PublishResult with the sink's acknowledgment id

        Raises:
            PublishError: If the sink rejects the message or the call fails
        """
        ...
