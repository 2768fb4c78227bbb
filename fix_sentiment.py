#!/usr/bin/env python3
"""Re-analyze sentiment for all market news articles with the OpenAI API.

Usage:
    OPENAI_API_KEY=sk-xxx python fix_sentiment.py [--dry-run] [--limit N]
"""
import argparse
import asyncio
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from sentiment_fix.config import LLM_MODELS, PATHS
from sentiment_fix.models import RunStats
from sentiment_fix.runner import run_sentiment_fix
from sentiment_fix.services.completion_client import CompletionClient, ConfigurationError
import logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Re-analyze news sentiment for prediction markets")
    parser.add_argument("--dry-run", action="store_true", help="Preview changes without saving")
    parser.add_argument("--limit", type=int, default=None, help="Process only N markets (for testing)")
    parser.add_argument("--news-dir", type=Path, default=Path(PATHS['news_dir']),
                        help="Directory of per-market news JSON files")
    parser.add_argument("--top-news-file", type=Path, default=Path(PATHS['top_news_file']),
                        help="Aggregate top-news JSON file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def log_summary(stats: RunStats, dry_run: bool) -> None:
    summary = stats.as_dict()
    changes = summary["sentiment_changes"]
    logger.info("")
    logger.info("=" * 70)
    logger.info("SUMMARY")
    logger.info("=" * 70)
    logger.info(f"Files processed: {summary['files_processed']}")
    logger.info(f"Articles processed: {summary['articles_processed']}")
    logger.info("Sentiment changes:")
    logger.info(f"   Bullish: {changes['bullish']}")
    logger.info(f"   Bearish: {changes['bearish']}")
    logger.info(f"   Neutral: {changes['neutral']}")
    logger.info(f"Errors: {summary['errors']}")
    logger.info("")

    if dry_run:
        logger.info("This was a dry run. No files were modified.")
        logger.info("Run without --dry-run to save changes.")
    else:
        logger.info("Done! Changes have been saved.")


async def main(argv: Optional[List[str]] = None) -> int:
    """Run the sentiment fix. Returns the process exit code."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s"
    )
    # Set httpx logging to WARNING to suppress HTTP request logs
    logging.getLogger("httpx").setLevel(logging.WARNING)

    model_config = LLM_MODELS['sentiment']
    logger.info("=" * 70)
    logger.info("FIX SENTIMENT")
    logger.info("=" * 70)
    logger.info(f"Model: {model_config['model']}")
    logger.info(f"Max tokens: {model_config['max_completion_tokens']}")
    logger.info(f"Mode: {'DRY RUN (no changes saved)' if args.dry_run else 'LIVE'}")
    if args.limit:
        logger.info(f"Limit: {args.limit} markets")
    logger.info("")

    # Load environment from ./.env (does not override variables already set)
    load_dotenv(Path(".env"))

    try:
        client = CompletionClient(api_key=os.getenv("OPENAI_API_KEY"))
    except ConfigurationError as e:
        logger.error(f"Error: {e}")
        logger.info("Usage: OPENAI_API_KEY=sk-xxx python fix_sentiment.py")
        return 1

    stats = RunStats()
    try:
        async with client:
            await run_sentiment_fix(
                client,
                news_dir=args.news_dir,
                top_news_file=args.top_news_file,
                stats=stats,
                dry_run=args.dry_run,
                limit=args.limit,
            )
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1

    log_summary(stats, args.dry_run)
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
