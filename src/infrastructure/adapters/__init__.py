from .sns_publisher import SnsPublisher

__all__ = [
    "SnsPublisher",
]
