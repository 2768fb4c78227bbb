"""Data models for the sentiment re-labeling run."""
from sentiment_fix.models.sentiment import (
    ReconcileResult,
    RunStats,
    Sentiment,
    SENTIMENT_LABELS,
)
import logging
logger = logging.getLogger(__name__)


__all__ = ["ReconcileResult", "RunStats", "Sentiment", "SENTIMENT_LABELS"]
