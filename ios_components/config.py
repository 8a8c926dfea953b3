"""
Runtime settings for the component server.

Values come from the process environment, optionally seeded from a `.env`
file at the project root. Settings are read fresh for every tool call so a
changed environment takes effect without restarting the host.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/evgenyshkuratov-rgb/ios-components/main/specs"
DEFAULT_WATCH_PREFIXES = ("Sources/", "specs/")

_ENV_PREFIX = "IOS_COMPONENTS_"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    http_timeout: float = 15.0
    repo_root: Path = ROOT
    git_remote: str = "origin"
    git_branch: str = "main"
    git_timeout: float = 10.0
    watch_prefixes: tuple[str, ...] = DEFAULT_WATCH_PREFIXES
    log_level: str = "WARNING"


def load_env() -> None:
    """Load env vars from the first .env found (project root, then package dir)."""
    for env_path in [ROOT / ".env", ROOT / "ios_components" / ".env"]:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            break


def _env(name: str, default: str) -> str:
    value = os.environ.get(_ENV_PREFIX + name, "").strip()
    return value or default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(_ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("[config] %s%s=%r is not a number, using %s", _ENV_PREFIX, name, raw, default)
        return default
    if value <= 0:
        logger.warning("[config] %s%s must be positive, using %s", _ENV_PREFIX, name, default)
        return default
    return value


def parse_prefixes(raw: str) -> tuple[str, ...]:
    """Split a comma-separated prefix list, dropping blanks and leading './'."""
    prefixes = []
    for part in raw.split(","):
        part = part.strip()
        if part.startswith("./"):
            part = part[2:]
        if part:
            prefixes.append(part)
    return tuple(prefixes)


def _env_log_level(default: str) -> str:
    level = _env("LOG_LEVEL", default).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        logger.warning("[config] unknown %sLOG_LEVEL %r, using %s", _ENV_PREFIX, level, default)
        return default
    return level


def load_settings() -> Settings:
    load_env()
    prefixes_raw = os.environ.get(_ENV_PREFIX + "WATCH_PREFIXES")
    prefixes = parse_prefixes(prefixes_raw) if prefixes_raw is not None else DEFAULT_WATCH_PREFIXES
    return Settings(
        base_url=_env("BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        http_timeout=_env_float("HTTP_TIMEOUT", 15.0),
        repo_root=Path(_env("REPO_ROOT", str(ROOT))).expanduser().resolve(),
        git_remote=_env("GIT_REMOTE", "origin"),
        git_branch=_env("GIT_BRANCH", "main"),
        git_timeout=_env_float("GIT_TIMEOUT", 10.0),
        watch_prefixes=prefixes,
        log_level=_env_log_level("WARNING"),
    )
