"""Configuration for LLM-based news sentiment re-labeling."""
import logging
logger = logging.getLogger(__name__)


# LLM Model Configuration
LLM_MODELS = {
    "sentiment": {
        "base_url": "https://api.openai.com/v1/chat/completions",
        "model": "gpt-5-nano",
        "max_completion_tokens": 1500,    # Reasoning model burns most of this before answering
        "timeout": 60.0,                  # Request timeout in seconds
        "max_retries": 3,                 # Retries after the first attempt
        "retry_delay": 1.0,               # Base backoff in seconds (doubles per attempt)
        "retryable_status_codes": [429, 502, 503, 504],
    },
}

# Sentiment Processing Configuration
SENTIMENT_CONFIG = {
    "articles_per_batch": 5,       # Articles per LLM API call (keeps prompt small)
    "wave_size": 100,              # Market files processed concurrently
    "market_title_max_chars": 100,
    "article_title_max_chars": 80,
    "summary_max_chars": 100,
}

# File locations, relative to the working directory unless overridden on the CLI
PATHS = {
    "news_dir": "news",
    "top_news_file": "top-news.json",
}
