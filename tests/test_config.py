from __future__ import annotations

import json
from pathlib import Path

import pytest

from cardmedia.common.config import CONFIG_FILENAME, ResolverConfig, load_config, with_overrides


def test_defaults():
    config = ResolverConfig()

    assert config.out_dir == Path("out")
    assert config.media_dir == "media"
    assert config.selector_timeout_ms == 10000


def test_explicit_output_is_resolved(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    assert ResolverConfig(output="decks").out_dir == tmp_path / "decks"


def test_invalid_timeout_rejected():
    with pytest.raises(ValueError):
        ResolverConfig(selector_timeout_ms=0)


def test_load_config_relative_to_config_folder(tmp_path):
    path = tmp_path / CONFIG_FILENAME
    path.write_text(
        json.dumps({"output": "../out", "media": "collection.media", "stock_host": "https://unsplash.com/", "extra": 1}),
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.out_dir == (tmp_path.parent / "out").resolve()
    assert config.media_dir == "collection.media"
    assert config.stock_host == "https://unsplash.com"


def test_load_missing_config(tmp_path):
    assert load_config(tmp_path / CONFIG_FILENAME) is None


def test_with_overrides_ignores_none():
    config = ResolverConfig(media="m")

    updated = with_overrides(config, output=None, media="other", headless=False)

    assert updated.media == "other"
    assert updated.headless is False
    assert with_overrides(config, output=None) is config
