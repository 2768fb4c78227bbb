"""Re-label prediction-market news sentiment with an LLM."""
import logging
logger = logging.getLogger(__name__)

__version__ = "0.1.0"
