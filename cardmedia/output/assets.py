"""Image asset storage: existence checks and streamed downloads."""

from pathlib import Path

import requests

from cardmedia.common.utils import ensure_dir


# Module-level session for connection reuse
_session = requests.Session()
_session.headers.update({
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
})

_CHUNK_SIZE = 64 * 1024


class DownloadError(Exception):
    """Raised when an image could not be fetched."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def asset_path(name: str, ext: str, out_dir: Path, media_dir: str) -> Path:
    """Get the on-disk path for an asset."""
    return Path(out_dir) / media_dir / f"{name}{ext}"


def asset_exists(name: str, ext: str, out_dir: Path, media_dir: str) -> bool:
    """Check whether the asset is on disk. Errors count as missing."""
    try:
        return asset_path(name, ext, out_dir, media_dir).is_file()
    except OSError:
        return False


def download_asset(
    url: str,
    name: str,
    ext: str,
    out_dir: Path,
    media_dir: str,
    timeout: float = 30.0,
    verbose: bool = False,
) -> Path:
    """Stream url to <out_dir>/<media_dir>/<name><ext>, overwriting any file.

    Directory creation errors propagate as OSError. Transport failures and
    HTTP error statuses raise DownloadError; an existing file is only replaced
    once the whole body has arrived.
    """
    target = asset_path(name, ext, out_dir, media_dir)
    ensure_dir(target.parent)
    partial = target.with_name(target.name + ".part")

    if verbose:
        print(f"[media] [download] {url}")

    try:
        with _session.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            with open(partial, "wb") as f:
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
    except requests.RequestException as e:
        partial.unlink(missing_ok=True)
        raise DownloadError(url, str(e)) from e

    partial.replace(target)

    if verbose:
        print(f"[media] [ok] Saved {target.name}")
    return target


__all__ = [
    "DownloadError",
    "asset_path",
    "asset_exists",
    "download_asset",
]
