from .message_publisher import MessagePublisher

__all__ = [
    "MessagePublisher",
]
