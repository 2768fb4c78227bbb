"""Processors that reconcile market files and schedule them in waves."""
from sentiment_fix.processors.file_reconciler import FileReconciler, market_id_to_title
from sentiment_fix.processors.wave_scheduler import WaveScheduler
import logging
logger = logging.getLogger(__name__)


__all__ = ["FileReconciler", "WaveScheduler", "market_id_to_title"]
