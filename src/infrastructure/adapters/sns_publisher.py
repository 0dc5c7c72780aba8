"""
SNS implementation of the MessagePublisher port.

The aiobotocore session is created once per process. Entering the
publisher as an async context manager opens a single SNS client that is
shared by every publish in the batch.
"""

from contextlib import AsyncExitStack
from typing import Any

import structlog
from aiobotocore.session import get_session
from botocore.exceptions import BotoCoreError, ClientError

from ...domain import PublishError, PublishResult
from ...domain.ports import MessagePublisher

logger = structlog.get_logger()

THROTTLING_ERROR_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "ThrottledException",
        "TooManyRequestsException",
    }
)


class SnsPublisher(MessagePublisher):
    """AWS SNS topic publisher."""

    def __init__(self, region: str = "us-east-1", endpoint_url: str | None = None) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        self._session = get_session()
        self._exit_stack: AsyncExitStack | None = None
        self._client: Any = None

    async def __aenter__(self) -> "SnsPublisher":
        self._exit_stack = AsyncExitStack()
        self._client = await self._exit_stack.enter_async_context(self._create_client())
        return self

    async def __aexit__(self, *args) -> None:
        exit_stack, self._exit_stack = self._exit_stack, None
        self._client = None
        if exit_stack is not None:
            await exit_stack.aclose()

    def _create_client(self):
        client_kwargs = {"region_name": self._region}
        if self._endpoint_url:
            client_kwargs["endpoint_url"] = self._endpoint_url
        return self._session.create_client("sns", **client_kwargs)

    async def publish(self, destination: str, content: str) -> PublishResult:
        """Publish content to an SNS topic."""
        try:
            if self._client is not None:
                response = await self._client.publish(TopicArn=destination, Message=content)
            else:
                async with self._create_client() as client:
                    response = await client.publish(TopicArn=destination, Message=content)
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code", "")
            raise PublishError(
                destination,
                f"{code}: {error.get('Message', str(e))}",
                throttled=code in THROTTLING_ERROR_CODES,
            ) from e
        except BotoCoreError as e:
            raise PublishError(destination, str(e)) from e

        message_id = response.get("MessageId")
        if not message_id:
            raise PublishError(destination, "response did not include a MessageId")

        logger.debug("SNS publish acknowledged", topic_arn=destination, message_id=message_id)
        return PublishResult(acknowledgment_id=message_id)
