"""News desk settings read from the environment (a .env file is loaded by the entry point)."""

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_SPORTS_INTERVAL_SEC = 2.0
DEFAULT_POLITICS_INTERVAL_SEC = 3.0
DEFAULT_SPORTS_FAN_LIMIT = 10
DEFAULT_POLITICAL_ANALYST_LIMIT = 5


@dataclass(frozen=True)
class NewsDeskSettings:
    """Delays between staggered notifications and the subscribers' completion limits."""
    sports_interval_sec: float = DEFAULT_SPORTS_INTERVAL_SEC
    politics_interval_sec: float = DEFAULT_POLITICS_INTERVAL_SEC
    sports_fan_limit: int = DEFAULT_SPORTS_FAN_LIMIT
    political_analyst_limit: int = DEFAULT_POLITICAL_ANALYST_LIMIT


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    try:
        value = float(environ.get(name, default))
    except (ValueError, TypeError):
        return default
    return value if math.isfinite(value) and value >= 0 else default


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    try:
        value = int(environ.get(name, default))
    except (ValueError, TypeError):
        return default
    return value if value > 0 else default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> NewsDeskSettings:
    """Build settings from environ (os.environ by default); bad values fall back to defaults."""
    env = os.environ if environ is None else environ
    return NewsDeskSettings(
        sports_interval_sec=_env_float(env, "SPORTS_INTERVAL_SEC", DEFAULT_SPORTS_INTERVAL_SEC),
        politics_interval_sec=_env_float(env, "POLITICS_INTERVAL_SEC", DEFAULT_POLITICS_INTERVAL_SEC),
        sports_fan_limit=_env_int(env, "SPORTS_FAN_LIMIT", DEFAULT_SPORTS_FAN_LIMIT),
        political_analyst_limit=_env_int(env, "POLITICAL_ANALYST_LIMIT", DEFAULT_POLITICAL_ANALYST_LIMIT),
    )
