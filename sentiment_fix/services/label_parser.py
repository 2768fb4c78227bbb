"""Parse loosely formatted LLM output into sentiment labels."""
from typing import List
import json
import re

from sentiment_fix.models import Sentiment, SENTIMENT_LABELS
import logging
logger = logging.getLogger(__name__)

# First '[' through last ']', across newlines
_ARRAY_PATTERN = re.compile(r"\[.*\]", re.DOTALL)


def normalize_sentiment(value) -> str:
    """
    Map a raw label to one of bullish/bearish/neutral.

    Comparison is case-insensitive; anything unrecognised is neutral.
    """
    lowered = str(value).lower()
    if lowered in SENTIMENT_LABELS:
        return lowered
    return Sentiment.NEUTRAL.value


def parse_labels(raw_text: str, expected_count: int) -> List[str]:
    """
    Extract sentiment labels from an LLM response.

    Takes the longest array-literal substring of raw_text and maps each element
    with normalize_sentiment. Never raises.

    Args:
        raw_text: Completion text, possibly wrapped in prose or code fences
        expected_count: Number of labels to return when nothing can be parsed

    Returns:
        One label per array element, or expected_count neutral labels if no
        JSON array could be parsed. When an array is found its length wins,
        even if it differs from expected_count.
    """
    fallback = [Sentiment.NEUTRAL.value] * expected_count

    match = _ARRAY_PATTERN.search(raw_text or "")
    if not match:
        logger.debug(f"No JSON array in response: {(raw_text or '')[:200]}")
        return fallback

    try:
        parsed = json.loads(match.group(0))
    except (ValueError, RecursionError) as e:
        logger.debug(f"Failed to parse LLM response: {e}")
        return fallback

    if not isinstance(parsed, list):
        return fallback

    return [normalize_sentiment(item) for item in parsed]
