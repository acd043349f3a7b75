import os
import logging
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Existing environment variables take precedence over .env
load_dotenv(override=False)

DEFAULT_FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
DEFAULT_PORT = 4000
_PLACEHOLDER_KEYS = {"your_key_here"}


def get_finnhub_key() -> Optional[str]:
    """Finnhub API key, or None when unset or left at the template default."""
    key = (os.environ.get("FINNHUB_API_KEY") or "").strip()
    if not key or key in _PLACEHOLDER_KEYS:
        return None
    return key


def get_upstream_timeout() -> Optional[float]:
    raw = (os.environ.get("UPSTREAM_TIMEOUT") or "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid UPSTREAM_TIMEOUT={raw!r}")
        return None


def get_port() -> int:
    try:
        return int(os.environ.get("PORT", DEFAULT_PORT))
    except ValueError:
        logger.warning(f"Ignoring invalid PORT={os.environ.get('PORT')!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT


def load_config() -> Dict[str, Any]:
    """Snapshot of the environment-driven settings used by create_app."""
    return {
        "FINNHUB_API_KEY": get_finnhub_key(),
        "FINNHUB_BASE_URL": os.environ.get("FINNHUB_BASE_URL") or DEFAULT_FINNHUB_BASE_URL,
        "UPSTREAM_TIMEOUT": get_upstream_timeout(),
        "PORT": get_port(),
        "LOG_LEVEL": (os.environ.get("LOG_LEVEL") or "INFO").upper(),
    }
