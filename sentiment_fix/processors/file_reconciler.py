"""Re-label the articles of a single market news file."""
from pathlib import Path
from typing import Any, Dict, List, Union
import re

from sentiment_fix.models import ReconcileResult, RunStats, Sentiment
from sentiment_fix.services.article_batcher import ArticleBatcher
from sentiment_fix.storage.json_store import read_json, write_json
import logging
logger = logging.getLogger(__name__)


def market_id_to_title(market_id: str) -> str:
    """
    Derive a market question from its id.

    Drops a trailing numeric suffix, turns dashes into spaces and upper-cases
    the first letter of every word, e.g. "will-btc-hit-100k-123" becomes
    "Will Btc Hit 100k?".
    """
    title = re.sub(r"-\d+$", "", market_id)
    title = title.replace("-", " ")
    title = re.sub(r"\b\w", lambda m: m.group(0).upper(), title, flags=re.ASCII)
    return title + "?"


class FileReconciler:
    """Reads a market file, applies fresh labels and persists changes."""

    def __init__(
        self,
        news_dir: Union[str, Path],
        batcher: ArticleBatcher,
        stats: RunStats,
        dry_run: bool = False
    ):
        """
        Initialize reconciler.

        Args:
            news_dir: Directory containing <marketId>.json files
            batcher: ArticleBatcher used to label articles
            stats: Run statistics
            dry_run: If True, never write files
        """
        self.news_dir = Path(news_dir)
        self.batcher = batcher
        self.stats = stats
        self.dry_run = dry_run

    def _apply_labels(
        self,
        articles: List[Dict[str, Any]],
        labels: List[str]
    ) -> tuple[List[Dict[str, Any]], bool]:
        """Return new article dicts carrying the new labels and whether any changed."""
        updated = []
        changed = False
        for i, article in enumerate(articles):
            new_sentiment = labels[i] if i < len(labels) else Sentiment.NEUTRAL.value
            if article.get("sentiment") != new_sentiment:
                updated.append({**article, "sentiment": new_sentiment})
                self.stats.record_change(new_sentiment)
                changed = True
            else:
                updated.append(dict(article))
        return updated, changed

    async def reconcile(self, filename: str) -> ReconcileResult:
        """
        Re-label one market file.

        Never raises: read, parse and processing errors are logged, counted
        and turned into an empty unchanged result.

        Args:
            filename: File name inside news_dir, e.g. "will-x-happen-42.json"

        Returns:
            ReconcileResult with the updated articles
        """
        file_path = self.news_dir / filename
        market_id = filename.replace(".json", "", 1)

        try:
            articles = await read_json(file_path)

            if not isinstance(articles, list) or not articles:
                return ReconcileResult(market_id=market_id)

            market_title = market_id_to_title(market_id)
            labels = await self.batcher.classify(articles, market_title)

            updated, changed = self._apply_labels(articles, labels)
            self.stats.articles_processed += len(articles)

            if changed and not self.dry_run:
                await write_json(file_path, updated)
                logger.debug(f"Saved {filename}")

            return ReconcileResult(market_id=market_id, articles=updated, changed=changed)

        except Exception as e:
            logger.error(f"Error processing {filename}: {e}")
            self.stats.record_error()
            return ReconcileResult(market_id=market_id)
