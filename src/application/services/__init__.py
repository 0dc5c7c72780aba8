from .batch_relay_service import DEFAULT_MAX_CONCURRENCY, BatchRelayService

__all__ = [
    "BatchRelayService",
    "DEFAULT_MAX_CONCURRENCY",
]
