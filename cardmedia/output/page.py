"""Browser page access used by the image providers.

Providers only need the operations in PageDriver, which a Playwright sync
``Page`` already has. Tests pass in small fakes instead.
"""

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Protocol

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright


class ElementHandle(Protocol):
    def dispose(self) -> None: ...


class PageDriver(Protocol):
    """The page operations the providers depend on."""

    @property
    def url(self) -> str: ...

    def goto(self, url: str, **kwargs: Any) -> Any: ...

    def wait_for_selector(self, selector: str, *, timeout: Optional[float] = None) -> Any: ...

    def query_selector(self, selector: str) -> Optional[ElementHandle]: ...

    def query_selector_all(self, selector: str) -> List[ElementHandle]: ...

    def evaluate(self, expression: str, arg: Any = None) -> Any: ...


# Raised by wait_for_selector when the selector never shows up
SelectorTimeout = PlaywrightTimeoutError


@contextmanager
def open_browser_page(headless: bool = True) -> Iterator[PageDriver]:
    """Launch Chromium and yield a single page, closing the browser after."""
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=headless)
        try:
            context = browser.new_context()
            yield context.new_page()
        finally:
            browser.close()


__all__ = [
    "ElementHandle",
    "PageDriver",
    "SelectorTimeout",
    "open_browser_page",
]
