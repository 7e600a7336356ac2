"""Resolver configuration for media generation.

A word-list folder can have a -config.json file that specifies:
- output: base directory for the cache, import file and assets (default: out)
- media: subdirectory of output for downloaded images (default: media)
- basename: prefix for the import file, e.g. "n5" -> n5_import.txt (default: none)
- dictionary_host / stock_host: provider hosts
- selector_timeout_ms: how long to wait for the dictionary infobox (default: 10000)
- download_timeout: HTTP timeout in seconds for image downloads (default: 30)
- headless: run the browser without a window (default: true)
"""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional


CONFIG_FILENAME = "-config.json"

DEFAULT_OUTPUT = "out"
DEFAULT_MEDIA = "media"


@dataclass
class ResolverConfig:
    """Configuration for resolving word media."""
    output: Optional[str] = None  # None means the relative "out" directory
    media: Optional[str] = None  # None means "media"
    basename: str = ""
    dictionary_host: str = "https://ja.wikipedia.org"
    stock_host: str = "https://unsplash.com"
    selector_timeout_ms: int = 10000
    download_timeout: float = 30.0
    headless: bool = True

    def __post_init__(self):
        if self.selector_timeout_ms <= 0:
            raise ValueError(f"selector_timeout_ms must be positive, got {self.selector_timeout_ms}")
        if self.download_timeout <= 0:
            raise ValueError(f"download_timeout must be positive, got {self.download_timeout}")
        self.dictionary_host = self.dictionary_host.rstrip("/")
        self.stock_host = self.stock_host.rstrip("/")

    @property
    def out_dir(self) -> Path:
        """Output directory; an explicit one is resolved against the cwd."""
        if self.output:
            return Path(self.output).resolve()
        return Path(DEFAULT_OUTPUT)

    @property
    def media_dir(self) -> str:
        return self.media or DEFAULT_MEDIA


def load_config(config_path: Path) -> Optional[ResolverConfig]:
    """Load configuration from a -config.json file.

    Returns None if the file doesn't exist. Relative output paths are taken
    relative to the config file's folder. Unknown keys are ignored.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        return None

    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        return None

    known = {f.name for f in fields(ResolverConfig)}
    values = {k: v for k, v in data.items() if k in known}

    output = values.get("output")
    if output and not Path(output).is_absolute():
        values["output"] = str(config_path.parent / output)

    return ResolverConfig(**values)


def with_overrides(config: ResolverConfig, **overrides) -> ResolverConfig:
    """Return a copy of config with every non-None override applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **changes) if changes else config
