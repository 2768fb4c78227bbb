"""Propagate re-labeled sentiments into the top-news aggregate index."""
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Union

from sentiment_fix.models import ReconcileResult, RunStats
from sentiment_fix.storage.json_store import read_json, write_json
import logging
logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_sentiment_lookup(results: List[ReconcileResult]) -> Dict[str, str]:
    """
    Map article id to its latest sentiment across all results.

    Ids are expected to be globally unique. If two markets share an id the
    market processed last wins.
    """
    lookup: Dict[str, str] = {}
    for result in results:
        for article in result.articles:
            lookup[article.get("id")] = article.get("sentiment")
    return lookup


class AggregateUpdater:
    """Keeps top-news.json in sync with per-market sentiment changes."""

    def __init__(
        self,
        top_news_file: Union[str, Path],
        stats: RunStats,
        dry_run: bool = False
    ):
        """
        Initialize updater.

        Args:
            top_news_file: Path to the aggregate index
            stats: Run statistics (a failed update counts as one error)
            dry_run: If True, the index is never written
        """
        self.top_news_file = Path(top_news_file)
        self.stats = stats
        self.dry_run = dry_run

    async def update(self, results: List[ReconcileResult]) -> int:
        """
        Apply the latest sentiments to matching articles in the index.

        A missing or malformed index is logged and counted; the index is then
        left untouched so per-market changes already saved are unaffected.

        Args:
            results: Results from every reconciled market

        Returns:
            Number of index articles whose sentiment changed
        """
        try:
            top_news = await read_json(self.top_news_file)
            lookup = build_sentiment_lookup(results)

            updated = 0
            for market_id, articles in top_news["markets"].items():
                for article in articles:
                    new_sentiment = lookup.get(article.get("id"))
                    if new_sentiment and article.get("sentiment") != new_sentiment:
                        article["sentiment"] = new_sentiment
                        updated += 1

            top_news["updatedAt"] = utc_timestamp()

            if not self.dry_run:
                await write_json(self.top_news_file, top_news)

            logger.info(f"  Updated {updated} articles in {self.top_news_file.name}")
            return updated

        except Exception as e:
            logger.error(f"Error updating {self.top_news_file.name}: {e}")
            self.stats.record_error()
            return 0
