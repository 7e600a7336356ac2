"""Output generation: image providers, asset downloads, and import records."""

from cardmedia.output.assets import (
    DownloadError,
    asset_path,
    asset_exists,
    download_asset,
)
from cardmedia.output.page import (
    PageDriver,
    SelectorTimeout,
    open_browser_page,
)
from cardmedia.output.providers import (
    Status,
    ProviderResult,
    dictionary_url_for_word,
    strategies_for,
    run_providers,
)
from cardmedia.output.files import (
    import_path_for,
    write_import_file,
    write_data_cache_file,
)
from cardmedia.output.processing import (
    needs_fetch,
    build_content_line,
    resolve_word,
    process_input_file,
)

__all__ = [
    # assets
    "DownloadError",
    "asset_path",
    "asset_exists",
    "download_asset",
    # page
    "PageDriver",
    "SelectorTimeout",
    "open_browser_page",
    # providers
    "Status",
    "ProviderResult",
    "dictionary_url_for_word",
    "strategies_for",
    "run_providers",
    # files
    "import_path_for",
    "write_import_file",
    "write_data_cache_file",
    # processing
    "needs_fetch",
    "build_content_line",
    "resolve_word",
    "process_input_file",
]
