"""Classify a market's articles in small sequential LLM batches."""
from typing import Any, Dict, List, Optional
import time

from sentiment_fix.config import SENTIMENT_CONFIG
from sentiment_fix.models import RunStats, Sentiment
from sentiment_fix.services.completion_client import CompletionClient
from sentiment_fix.services.label_parser import parse_labels
from sentiment_fix.utils.batch_runner import run_sequential_batches
import logging
logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "Analyze if each news article is BULLISH (suggests YES), BEARISH (suggests NO), "
    "or NEUTRAL for the prediction market. Return ONLY a JSON array of sentiments."
)


class ArticleBatcher:
    """Splits articles into small batches and labels each batch via the LLM."""

    def __init__(
        self,
        client: CompletionClient,
        stats: RunStats,
        batch_size: Optional[int] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize batcher.

        Args:
            client: CompletionClient used for every batch
            stats: Run statistics (errors are recorded here)
            batch_size: Articles per API call (defaults to SENTIMENT_CONFIG)
            config: Overrides for SENTIMENT_CONFIG truncation limits
        """
        self.client = client
        self.stats = stats
        self.config = {**SENTIMENT_CONFIG, **(config or {})}
        self.batch_size = batch_size or self.config['articles_per_batch']

    def build_messages(
        self,
        articles: List[Dict[str, Any]],
        market_title: str
    ) -> List[Dict[str, str]]:
        """
        Build the chat messages for one batch.

        Titles and summaries are truncated to keep the prompt small.

        Args:
            articles: Articles in this batch
            market_title: Human-readable market question

        Returns:
            System and user messages
        """
        title_limit = self.config['article_title_max_chars']
        summary_limit = self.config['summary_max_chars']

        lines = []
        for idx, article in enumerate(articles, 1):
            title = (article.get('title') or '')[:title_limit]
            summary = (article.get('summary') or '')[:summary_limit]
            lines.append(f"{idx}. {title}: {summary}")
        article_list = "\n".join(lines)

        market = market_title[:self.config['market_title_max_chars']]
        user_prompt = f"""Market: "{market}"

Articles:
{article_list}

Return JSON array: ["bullish", "neutral", "bearish", ...]"""

        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_prompt},
        ]

    async def _classify_batch(
        self,
        batch: List[Dict[str, Any]],
        batch_num: int,
        market_title: str
    ) -> List[str]:
        """Label one batch; any failure degrades just this batch to neutral."""
        neutral = [Sentiment.NEUTRAL.value] * len(batch)
        start_time = time.time()

        try:
            content = await self.client.submit(self.build_messages(batch, market_title))
        except Exception as e:
            logger.error(f"Batch error ({market_title[:60]!r}, batch {batch_num}): {e}")
            self.stats.record_error()
            return neutral

        logger.debug(f"Batch {batch_num} took {time.time() - start_time:.1f}s")

        labels = parse_labels(content, len(batch))
        # Parsed array may be shorter or longer than the batch
        return [labels[i] if i < len(labels) else Sentiment.NEUTRAL.value for i in range(len(batch))]

    async def classify(
        self,
        articles: List[Dict[str, Any]],
        market_title: str
    ) -> List[str]:
        """
        Label every article relative to the market question.

        Args:
            articles: Articles with 'title' and optional 'summary'
            market_title: Human-readable market question

        Returns:
            One label per article, in input order
        """
        if not articles:
            return []

        async def worker(batch, batch_num):
            return await self._classify_batch(batch, batch_num, market_title)

        return await run_sequential_batches(articles, self.batch_size, worker)
