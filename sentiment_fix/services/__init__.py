"""LLM-facing services: completion client, label parsing, article batching."""
from sentiment_fix.services.completion_client import (
    CompletionAPIError,
    CompletionClient,
    ConfigurationError,
)
from sentiment_fix.services.label_parser import normalize_sentiment, parse_labels
from sentiment_fix.services.article_batcher import ArticleBatcher
import logging
logger = logging.getLogger(__name__)


__all__ = [
    "ArticleBatcher",
    "CompletionAPIError",
    "CompletionClient",
    "ConfigurationError",
    "normalize_sentiment",
    "parse_labels",
]
