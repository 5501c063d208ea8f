# baller/config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables from .env
load_dotenv()

DEFAULT_SEASON = 2018
DEFAULT_TIMEOUT = 10
DEFAULT_MAX_PAGES = 1000
DEFAULT_DATABASE_URL = "sqlite:///baller_cache.db"

REQUIRED_VARS = {
    "BALLER_API_URL": "base_url",
    "BALLER_PLAYERS_PATH": "players_path",
    "BALLER_SEASON_AVERAGES_PATH": "season_averages_path",
}


@dataclass(frozen=True)
class BallerConfig:
    base_url: str
    players_path: str
    season_averages_path: str
    api_key: Optional[str] = None
    season: int = DEFAULT_SEASON
    timeout: int = DEFAULT_TIMEOUT
    max_pages: int = DEFAULT_MAX_PAGES
    database_url: str = DEFAULT_DATABASE_URL


def _int_setting(env: Mapping[str, str], name: str, default: int, problems: list) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        problems.append(f"{name} must be an integer (got {raw!r})")
        return default
    if value < 1:
        problems.append(f"{name} must be at least 1 (got {value})")
        return default
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> BallerConfig:
    """
    Build a validated BallerConfig from environment variables.

    Args:
        env: Mapping to read from. Defaults to os.environ (after .env is loaded).

    Raises:
        ConfigurationError listing every missing or malformed variable.
    """
    env = os.environ if env is None else env
    problems = []

    required = {}
    for var, field in REQUIRED_VARS.items():
        value = (env.get(var) or "").strip()
        if not value:
            problems.append(f"{var} is not set")
        required[field] = value

    season = _int_setting(env, "BALLER_SEASON", DEFAULT_SEASON, problems)
    timeout = _int_setting(env, "BALLER_TIMEOUT", DEFAULT_TIMEOUT, problems)
    max_pages = _int_setting(env, "BALLER_MAX_PAGES", DEFAULT_MAX_PAGES, problems)

    if problems:
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(problems)
            + ". Please add them to your .env file."
        )

    return BallerConfig(
        api_key=(env.get("BALLER_API_KEY") or "").strip() or None,
        season=season,
        timeout=timeout,
        max_pages=max_pages,
        database_url=(env.get("DATABASE_URL") or "").strip() or DEFAULT_DATABASE_URL,
        **required,
    )
