# =============================================================================
# coupon_proxy/settings.py  -  Process settings read from the environment
# =============================================================================
#
# main.py calls load_dotenv() first, so values may come from a .env file.
#
#   LOG_LEVEL            logging level name                  (default INFO)
#   LOG_COLOR            ANSI colours in server log lines    (default true)
#   COUPON_HTTP_TIMEOUT  httpx timeout in seconds; "none"
#                        or "0" disables it                  (default 30)
#
# The upstream base address is NOT a setting: it is registry.BASE_URL.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_color: bool = True
    http_timeout: Optional[float] = DEFAULT_HTTP_TIMEOUT


def _parse_bool(raw: str, default: bool) -> bool:
    value = raw.strip().lower()
    if not value:
        return default
    return value in ("1", "true", "yes", "on")


def _parse_timeout(raw: str) -> Optional[float]:
    value = raw.strip().lower()
    if not value:
        return DEFAULT_HTTP_TIMEOUT
    if value == "none":
        return None
    try:
        seconds = float(value)
    except ValueError:
        logger.warning(
            "COUPON_HTTP_TIMEOUT=%r is not a number; using %ss", raw, DEFAULT_HTTP_TIMEOUT
        )
        return DEFAULT_HTTP_TIMEOUT
    return seconds if seconds > 0 else None


def load_settings(environ: Optional[dict[str, str]] = None) -> Settings:
    """Build Settings from ``environ`` (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ
    return Settings(
        log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_color=_parse_bool(env.get("LOG_COLOR", ""), True),
        http_timeout=_parse_timeout(env.get("COUPON_HTTP_TIMEOUT", "")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
