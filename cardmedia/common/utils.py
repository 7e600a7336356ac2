"""Common utility functions shared across the library."""

import os
from pathlib import Path


# Project root .env, e.g. CARDMEDIA_OUTPUT=decks/out
ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"

_DEF_ENV_LOADED = False


def _load_env_file(path: Path = ENV_FILE) -> None:
    """Load KEY=value lines from the project .env without overriding the environment."""
    global _DEF_ENV_LOADED
    if _DEF_ENV_LOADED or not path.exists():
        return
    _DEF_ENV_LOADED = True
    for raw in path.read_text(encoding="utf-8", errors="ignore").splitlines():
        line = raw.strip().removeprefix("export ").strip()
        if line.startswith("#") or "=" not in line:
            continue
        key, val = (part.strip() for part in line.split("=", 1))
        if key:
            os.environ.setdefault(key, val.strip('"').strip("'"))


def ensure_dir(path: Path) -> None:
    """Create directory if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)
