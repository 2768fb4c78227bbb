"""Run the file reconciler over all market files in concurrent waves."""
from typing import List, Optional

from sentiment_fix.config import SENTIMENT_CONFIG
from sentiment_fix.models import ReconcileResult, RunStats
from sentiment_fix.processors.file_reconciler import FileReconciler
from sentiment_fix.utils.batch_runner import run_in_waves
import logging
logger = logging.getLogger(__name__)


class WaveScheduler:
    """Processes market files in waves of bounded concurrency."""

    def __init__(
        self,
        reconciler: FileReconciler,
        stats: RunStats,
        wave_size: Optional[int] = None
    ):
        self.reconciler = reconciler
        self.stats = stats
        self.wave_size = wave_size or SENTIMENT_CONFIG['wave_size']

    async def run(self, filenames: List[str]) -> List[ReconcileResult]:
        """
        Reconcile every file exactly once.

        Files in a wave run concurrently; waves run back to back.

        Args:
            filenames: Market file names

        Returns:
            One ReconcileResult per file, in input order
        """
        total = len(filenames)
        processed = 0

        def report(wave: List[str], results: List[ReconcileResult]) -> None:
            nonlocal processed
            processed += len(wave)
            self.stats.files_processed += len(wave)
            pct = int(processed * 100 / total + 0.5)
            changed = sum(1 for r in results if r.changed)
            logger.info(f"  Processed {processed}/{total} ({pct}%) - {changed} files changed in batch")

        return await run_in_waves(filenames, self.wave_size, self.reconciler.reconcile, report)
