from __future__ import annotations

import sys
from pathlib import Path

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

# Make the package and generate.py importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cardmedia.common.config import ResolverConfig  # noqa: E402
from cardmedia.output import assets  # noqa: E402


class FakeElement:
    def __init__(self, src):
        self.src = src
        self.disposed = False

    def dispose(self):
        self.disposed = True


class FakePage:
    """Page double: selector -> list of FakeElement, every call recorded."""

    def __init__(self, selectors=None, fail_on_goto=None):
        self.selectors = selectors or {}
        self.fail_on_goto = fail_on_goto
        self.calls = []
        self._url = "about:blank"

    @property
    def url(self):
        return self._url

    def goto(self, url, **kwargs):
        self.calls.append(("goto", url))
        if self.fail_on_goto is not None:
            raise self.fail_on_goto
        self._url = url

    def wait_for_selector(self, selector, *, timeout=None):
        self.calls.append(("wait_for_selector", selector, timeout))
        if not self.selectors.get(selector):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        return self.selectors[selector][0]

    def query_selector(self, selector):
        self.calls.append(("query_selector", selector))
        matches = self.selectors.get(selector)
        return matches[0] if matches else None

    def query_selector_all(self, selector):
        self.calls.append(("query_selector_all", selector))
        return list(self.selectors.get(selector, []))

    def evaluate(self, expression, arg=None):
        self.calls.append(("evaluate", expression))
        return arg.src


@pytest.fixture
def config(tmp_path):
    return ResolverConfig(output=str(tmp_path / "out"))


@pytest.fixture
def out_dir(config):
    config.out_dir.mkdir(parents=True, exist_ok=True)
    return config.out_dir


@pytest.fixture
def downloads(monkeypatch):
    """Replace the network download with one that writes a small file."""
    calls = []

    def fake_download(url, name, ext, out_dir, media_dir, timeout=30.0, verbose=False):
        calls.append(url)
        target = Path(out_dir) / media_dir / f"{name}{ext}"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(b"\xff\xd8\xff")
        return target

    monkeypatch.setattr(assets, "download_asset", fake_download)
    return calls


@pytest.fixture
def failing_downloads(monkeypatch):
    calls = []

    def fake_download(url, name, ext, out_dir, media_dir, timeout=30.0, verbose=False):
        calls.append(url)
        raise assets.DownloadError(url, "Connection refused")

    monkeypatch.setattr(assets, "download_asset", fake_download)
    return calls
