"""Tests for the SNS publisher adapter."""

import pytest
from unittest.mock import AsyncMock, patch
from botocore.exceptions import ClientError, EndpointConnectionError

from src.domain import PublishError
from src.infrastructure.adapters import SnsPublisher

TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:relay-topic"


def client_error(code: str, message: str = "error") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, "Publish")


class TestSnsPublisher:
    @pytest.fixture
    def publisher(self):
        return SnsPublisher(region="us-east-1")

    @pytest.mark.asyncio
    async def test_publish_success(self, publisher):
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(return_value={"MessageId": "sns-msg-123"})
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            result = await publisher.publish(TOPIC_ARN, "hello")

        assert result.acknowledgment_id == "sns-msg-123"
        mock_client.publish.assert_awaited_once_with(TopicArn=TOPIC_ARN, Message="hello")
        mock_session.create_client.assert_called_once_with("sns", region_name="us-east-1")

    @pytest.mark.asyncio
    async def test_endpoint_url_passed_to_client(self):
        publisher = SnsPublisher(region="eu-west-1", endpoint_url="http://localhost:4566")
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(return_value={"MessageId": "m"})
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            await publisher.publish(TOPIC_ARN, "hello")

        mock_session.create_client.assert_called_once_with(
            "sns", region_name="eu-west-1", endpoint_url="http://localhost:4566"
        )

    @pytest.mark.asyncio
    async def test_context_manager_shares_one_client(self, publisher):
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(return_value={"MessageId": "m"})
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            async with publisher:
                await publisher.publish(TOPIC_ARN, "one")
                await publisher.publish(TOPIC_ARN, "two")

        assert mock_session.create_client.call_count == 1
        assert mock_client.publish.await_count == 2
        mock_session.create_client.return_value.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "code, throttled",
        [
            ("Throttling", True),
            ("ThrottlingException", True),
            ("ThrottledException", True),
            ("TooManyRequestsException", True),
            ("InternalError", False),
        ],
    )
    async def test_client_error_throttle_flag(self, publisher, code, throttled):
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(side_effect=client_error(code, "Rate exceeded"))
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            with pytest.raises(PublishError) as exc_info:
                await publisher.publish(TOPIC_ARN, "hello")

        assert exc_info.value.throttled is throttled
        assert exc_info.value.destination == TOPIC_ARN
        assert "Rate exceeded" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_client_error_raises_publish_error(self, publisher):
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(side_effect=client_error("NotFound", "Topic does not exist"))
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            with pytest.raises(PublishError) as exc_info:
                await publisher.publish(TOPIC_ARN, "hello")

        assert exc_info.value.throttled is False
        assert exc_info.value.reason.startswith("NotFound")

    @pytest.mark.asyncio
    async def test_transport_error_raises_publish_error(self, publisher):
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(
                side_effect=EndpointConnectionError(endpoint_url="https://sns.us-east-1.amazonaws.com")
            )
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            with pytest.raises(PublishError):
                await publisher.publish(TOPIC_ARN, "hello")

    @pytest.mark.asyncio
    async def test_missing_message_id_raises_publish_error(self, publisher):
        with patch.object(publisher, "_session") as mock_session:
            mock_client = AsyncMock()
            mock_client.publish = AsyncMock(return_value={})
            mock_session.create_client.return_value.__aenter__.return_value = mock_client

            with pytest.raises(PublishError):
                await publisher.publish(TOPIC_ARN, "hello")
