"""Storage layer for market news files and the aggregate index."""
from sentiment_fix.storage.aggregate_updater import AggregateUpdater
from sentiment_fix.storage.json_store import list_news_files, read_json, write_json
import logging
logger = logging.getLogger(__name__)


__all__ = ["AggregateUpdater", "list_news_files", "read_json", "write_json"]
