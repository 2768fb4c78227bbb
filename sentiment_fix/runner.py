"""Wire the pipeline together for one sentiment fix run."""
from pathlib import Path
from typing import List, Optional, Union

from sentiment_fix.models import ReconcileResult, RunStats
from sentiment_fix.processors.file_reconciler import FileReconciler
from sentiment_fix.processors.wave_scheduler import WaveScheduler
from sentiment_fix.services.article_batcher import ArticleBatcher
from sentiment_fix.services.completion_client import CompletionClient
from sentiment_fix.storage.aggregate_updater import AggregateUpdater
from sentiment_fix.storage.json_store import list_news_files
import logging
logger = logging.getLogger(__name__)


async def run_sentiment_fix(
    client: CompletionClient,
    news_dir: Union[str, Path],
    top_news_file: Union[str, Path],
    stats: RunStats,
    dry_run: bool = False,
    limit: Optional[int] = None,
    wave_size: Optional[int] = None,
    batch_size: Optional[int] = None
) -> List[ReconcileResult]:
    """
    Re-label every market file, then sync the top-news index.

    Args:
        client: CompletionClient for the classification endpoint
        news_dir: Directory of <marketId>.json files
        top_news_file: Aggregate index path
        stats: Accumulator for run statistics
        dry_run: Classify and count, but write nothing
        limit: Process only the first N market files (0 or None processes all)
        wave_size: Files per concurrent wave
        batch_size: Articles per API call

    Returns:
        One ReconcileResult per processed file
    """
    files = list_news_files(news_dir)
    logger.info(f"Found {len(files)} news files")

    # Zero or None means no limit
    if limit:
        files = files[:limit]
        logger.info(f"Processing limited to {len(files)} files")

    batcher = ArticleBatcher(client, stats, batch_size=batch_size)
    reconciler = FileReconciler(news_dir, batcher, stats, dry_run=dry_run)
    scheduler = WaveScheduler(reconciler, stats, wave_size=wave_size)

    logger.info("Starting sentiment analysis...")
    results = await scheduler.run(files)

    logger.info(f"Updating {Path(top_news_file).name}...")
    updater = AggregateUpdater(top_news_file, stats, dry_run=dry_run)
    await updater.update(results)

    return results
