"""Logging utilities for media resolution."""

import sys
import threading


# Thread-local log context (the word currently being resolved)
_LOG_CTX = threading.local()

_TAG_EMOJI = {
    "cache-hit": "🎯",
    "cache-miss": "💥",
    "download": "💾",
    "skip": "⏭️",
}


def set_log_context(word: str = "") -> None:
    """Set the logging context for the current thread."""
    _LOG_CTX.word = word


def get_log_context() -> str:
    return getattr(_LOG_CTX, "word", "")


def log_debug(enabled: bool, message: str) -> None:
    """Print a debug message if debugging is enabled."""
    if enabled:
        print(f"[debug] {message}")


def _tag_with_emoji(line: str) -> str:
    """Add the emoji after the first status tag like '[download]' in a line."""
    for tag, emoji in _TAG_EMOJI.items():
        marker = f"[{tag}]"
        if marker in line:
            return line.replace(marker, f"{marker} {emoji}", 1)
    return line


class _PrefixedWriter:
    """Wrapper for stdout that prefixes each line with the current word."""

    def __init__(self, wrapped):
        self._wrapped = wrapped
        self._lock = threading.Lock()

    def write(self, s: str) -> int:
        if not isinstance(s, str):
            return 0
        # Bare newline from print's second write
        if s == "\n":
            with self._lock:
                self._wrapped.write("\n")
                self.flush()
            return 1

        word = get_log_context()
        prefix = f"[{word}] " if word else "[main] "

        with self._lock:
            parts = s.split("\n")
            for i, part in enumerate(parts):
                if part == "" and i == len(parts) - 1:
                    continue
                self._wrapped.write(prefix + _tag_with_emoji(part))
                if i < len(parts) - 1:
                    self._wrapped.write("\n")
            self.flush()
        return len(s)

    def flush(self) -> None:
        try:
            self._wrapped.flush()
        except (OSError, ValueError):
            pass

    def isatty(self) -> bool:
        try:
            return bool(self._wrapped.isatty())
        except (OSError, ValueError):
            return False


def setup_prefixed_stdout() -> None:
    """Set up the word-prefixed stdout writer."""
    if isinstance(sys.stdout, _PrefixedWriter):
        return
    try:
        sys.stdout.reconfigure(line_buffering=True)  # type: ignore
    except AttributeError:
        pass
    sys.stdout = _PrefixedWriter(sys.stdout)  # type: ignore
