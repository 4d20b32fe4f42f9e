"""Utility functions."""

from flashgen_core.utils.logging import get_logger, mask_secret
from flashgen_core.utils.retry import calculate_backoff, is_retryable_status, with_retry

__all__ = [
    "calculate_backoff",
    "get_logger",
    "is_retryable_status",
    "mask_secret",
    "with_retry",
]
