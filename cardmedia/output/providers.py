"""Image providers: dictionary infobox, stock photo, and direct URL.

Each strategy returns a ProviderResult instead of raising, so the caller can
log failures and carry on. Which strategies run is decided by the supplier:

- unset     -> dictionary (Wikipedia infobox image)
- unsplash  -> stock photo
- direct    -> direct URL
- local, media, none -> nothing to fetch
"""

import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import requests
from playwright.sync_api import Error as PlaywrightError

from cardmedia.common.config import ResolverConfig
from cardmedia.input.instruction import AssetReference, Instruction, Supplier
from cardmedia.output import assets
from cardmedia.output.assets import DownloadError
from cardmedia.output.page import PageDriver, SelectorTimeout


INFOBOX_SELECTOR = ".infobox img"
# The first image on a photo page is the author's avatar, the second is the photo.
# This follows the site's current markup and will break if it changes.
STOCK_PHOTO_SELECTOR = '[data-test="photos-route"] img'
STOCK_PHOTO_INDEX = 1

_GET_SRC = "(el) => el.getAttribute('src')"
_THUMB_WIDTH_RE = re.compile(r"[0-9]+px-")
_WIKI_HOST_RE = re.compile(r"wikimedia|wikipedia")


class Status(str, Enum):
    OK = "ok"
    SKIP = "skip"
    FAIL = "fail"


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider attempt.

    attribution is the HTML credit line to store for the word, or None when
    the attempt produced nothing to credit.
    """
    provider: str
    status: Status
    attribution: Optional[str] = None
    reason: str = ""


Strategy = Callable[[PageDriver, Instruction, AssetReference, ResolverConfig, bool], ProviderResult]


def upsize_thumbnail(src: str) -> str:
    """Rewrite a Wikimedia thumbnail URL to its 1000px rendition."""
    return _THUMB_WIDTH_RE.sub("1000px-", src, count=1)


def _absolute(src: str) -> str:
    """Make a protocol-relative URL ("//upload...") absolute."""
    return f"https:{src}" if src.startswith("//") else src


def _download(url: str, asset: AssetReference, config: ResolverConfig, verbose: bool) -> None:
    assets.download_asset(
        url,
        asset.name,
        asset.ext,
        asset.out_dir,
        asset.media_dir,
        timeout=config.download_timeout,
        verbose=verbose,
    )


def dictionary_url_for_word(word: str, host: str = "https://ja.wikipedia.org") -> str:
    """Get the Wikipedia article URL for a word."""
    return f"{host}/wiki/{requests.utils.requote_uri(word)}"


def fetch_from_dictionary(
    page: PageDriver,
    instruction: Instruction,
    asset: AssetReference,
    config: ResolverConfig,
    verbose: bool = False,
) -> ProviderResult:
    """Download the article's infobox image, if the article has one."""
    page.goto(dictionary_url_for_word(instruction.word, config.dictionary_host))
    try:
        page.wait_for_selector(INFOBOX_SELECTOR, timeout=config.selector_timeout_ms)
    except SelectorTimeout:
        return ProviderResult("dictionary", Status.SKIP, reason="no infobox image")

    entry = page.query_selector(INFOBOX_SELECTOR)
    if entry is None:
        return ProviderResult("dictionary", Status.SKIP, reason="no infobox image")

    try:
        src = page.evaluate(_GET_SRC, entry)
    finally:
        entry.dispose()
    if not src:
        return ProviderResult("dictionary", Status.SKIP, reason="infobox image has no src")

    try:
        _download(_absolute(upsize_thumbnail(src)), asset, config, verbose)
    except DownloadError as e:
        return ProviderResult("dictionary", Status.FAIL, reason=str(e))

    return ProviderResult(
        "dictionary",
        Status.OK,
        attribution=f'Image from <a href="{page.url}">Wikipedia</a><br>',
    )


def fetch_from_stock_photo(
    page: PageDriver,
    instruction: Instruction,
    asset: AssetReference,
    config: ResolverConfig,
    verbose: bool = False,
) -> ProviderResult:
    """Download a photo page's main image as a jpg."""
    page.goto(f"{config.stock_host}/photos/{instruction.image.id}")
    handles = page.query_selector_all(STOCK_PHOTO_SELECTOR)
    try:
        if len(handles) <= STOCK_PHOTO_INDEX:
            return ProviderResult("unsplash", Status.SKIP, reason=f"found {len(handles)} images, need {STOCK_PHOTO_INDEX + 1}")

        src = page.evaluate(_GET_SRC, handles[STOCK_PHOTO_INDEX])
        if not src:
            return ProviderResult("unsplash", Status.SKIP, reason="photo has no src")

        photo_page = page.url
        try:
            _download(src.replace("auto=format", "fm=jpg", 1), asset, config, verbose)
        except DownloadError as e:
            return ProviderResult("unsplash", Status.FAIL, reason=str(e))

        return ProviderResult(
            "unsplash",
            Status.OK,
            attribution=f'Image from <a href="{photo_page}">Unsplash</a><br>',
        )
    finally:
        for handle in handles:
            handle.dispose()


def fetch_direct(
    page: PageDriver,
    instruction: Instruction,
    asset: AssetReference,
    config: ResolverConfig,
    verbose: bool = False,
) -> ProviderResult:
    """Download the image id as a URL.

    Wikimedia-hosted images get a Wikipedia credit whether or not the download
    succeeds; other hosts get none.
    """
    image_id = instruction.image.id
    if _WIKI_HOST_RE.search(image_id):
        attribution = f'Image from <a href="{image_id}">Wikipedia</a>'
    else:
        attribution = ""

    url = image_id if re.match(r"^https?://", image_id) else f"https://{image_id}"
    try:
        _download(url, asset, config, verbose)
    except DownloadError as e:
        return ProviderResult("direct", Status.FAIL, attribution=attribution, reason=str(e))
    return ProviderResult("direct", Status.OK, attribution=attribution)


_STRATEGIES: Dict[Supplier, List[Tuple[str, Strategy]]] = {
    Supplier.DICTIONARY: [("dictionary", fetch_from_dictionary)],
    Supplier.UNSPLASH: [("unsplash", fetch_from_stock_photo)],
    Supplier.DIRECT: [("direct", fetch_direct)],
    Supplier.LOCAL: [],
    Supplier.MEDIA: [],
    Supplier.NONE: [],
}


def strategies_for(supplier: Supplier) -> List[Tuple[str, Strategy]]:
    """Get the (provider, strategy) pairs to try, in order, for a supplier."""
    return list(_STRATEGIES[supplier])


def run_providers(
    page: PageDriver,
    instruction: Instruction,
    asset: AssetReference,
    config: ResolverConfig,
    verbose: bool = False,
) -> List[ProviderResult]:
    """Run every strategy for the instruction's supplier, in order.

    Page errors become FAIL results and never stop the remaining strategies.
    """
    results: List[ProviderResult] = []
    for provider, strategy in strategies_for(instruction.image.supplier):
        try:
            result = strategy(page, instruction, asset, config, verbose)
        except PlaywrightError as e:
            result = ProviderResult(provider, Status.FAIL, reason=str(e))

        if result.status is Status.FAIL:
            print(f"[provider] [fail] {result.provider}: {result.reason}", file=sys.stderr)
        elif verbose and result.status is Status.SKIP:
            print(f"[provider] [skip] {result.provider}: {result.reason}")
        results.append(result)
    return results


def latest_attribution(results: List[ProviderResult]) -> str:
    """Get the last non-empty attribution produced by a run."""
    for result in reversed(results):
        if result.attribution:
            return result.attribution
    return ""


__all__ = [
    "INFOBOX_SELECTOR",
    "STOCK_PHOTO_SELECTOR",
    "Status",
    "ProviderResult",
    "upsize_thumbnail",
    "dictionary_url_for_word",
    "fetch_from_dictionary",
    "fetch_from_stock_photo",
    "fetch_direct",
    "strategies_for",
    "run_providers",
    "latest_attribution",
]
