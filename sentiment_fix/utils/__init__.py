"""Utility helpers for batch processing."""
from sentiment_fix.utils.batch_runner import chunked, run_in_waves, run_sequential_batches
import logging
logger = logging.getLogger(__name__)


__all__ = ["chunked", "run_in_waves", "run_sequential_batches"]
