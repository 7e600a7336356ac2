"""Per-word data cache stored as a single JSON file.

Cache structure (data_cache.json):
{
  "ねこ": {"copyright": "Image from <a href=\"...\">Wikipedia</a><br>"},
  "dog": {}
}

Entries are never removed; a run adds or updates at most one word.
"""

import json
from pathlib import Path
from typing import Dict


CACHE_FILENAME = "data_cache.json"

DataCache = Dict[str, Dict[str, str]]


def cache_path_for(out_dir: Path) -> Path:
    """Get the data cache path for an output directory."""
    return Path(out_dir) / CACHE_FILENAME


def load_cache(path: Path, verbose: bool = False) -> DataCache:
    """Load the data cache, creating an empty file if it is missing.

    Malformed JSON (including an empty file or bytes that aren't UTF-8) yields
    an empty cache, and entries that aren't objects are reset to {}. Any other
    filesystem error propagates to the caller.
    """
    path = Path(path)
    path.touch(exist_ok=True)
    raw = path.read_bytes()
    try:
        data = json.loads(raw.decode("utf-8"))
    except ValueError:
        # UnicodeDecodeError and JSONDecodeError
        if verbose and raw.strip():
            print(f"[cache] [warn] Ignoring malformed cache: {path.name}")
        return {}
    if not isinstance(data, dict):
        return {}
    return {word: entry if isinstance(entry, dict) else {} for word, entry in data.items()}


def merge_copyright(cache: DataCache, word: str, copyright: str) -> DataCache:
    """Set the copyright for a word, keeping every other entry and field."""
    cache.setdefault(word, {})["copyright"] = copyright
    return cache


def dump_cache(cache: DataCache) -> str:
    """Serialize the cache the way it is stored on disk."""
    return json.dumps(cache, ensure_ascii=False, indent=2) + "\n"


__all__ = [
    "CACHE_FILENAME",
    "DataCache",
    "cache_path_for",
    "load_cache",
    "merge_copyright",
    "dump_cache",
]
