"""Sentiment labels and per-run result structures."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List
import logging
logger = logging.getLogger(__name__)


class Sentiment(str, Enum):
    """Sentiment of an article relative to a market resolving YES."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


SENTIMENT_LABELS = tuple(s.value for s in Sentiment)


@dataclass
class ReconcileResult:
    """Outcome of re-labeling one market file."""
    market_id: str
    articles: List[Dict[str, Any]] = field(default_factory=list)
    changed: bool = False


@dataclass
class RunStats:
    """
    Counters accumulated over a single run.

    Shared by every coroutine in a wave. Increments never span an await,
    so no lock is needed under asyncio.
    """
    files_processed: int = 0
    articles_processed: int = 0
    sentiment_changes: Dict[str, int] = field(
        default_factory=lambda: {label: 0 for label in SENTIMENT_LABELS}
    )
    errors: int = 0

    def record_change(self, label: str) -> None:
        self.sentiment_changes[label] = self.sentiment_changes.get(label, 0) + 1

    def record_error(self) -> None:
        self.errors += 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "files_processed": self.files_processed,
            "articles_processed": self.articles_processed,
            "sentiment_changes": dict(self.sentiment_changes),
            "errors": self.errors,
        }
