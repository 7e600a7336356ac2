"""Common utilities shared across input and output processing."""

from cardmedia.common.utils import (
    _load_env_file,
    ensure_dir,
)
from cardmedia.common.logging import (
    log_debug,
    set_log_context,
    get_log_context,
    setup_prefixed_stdout,
)
from cardmedia.common.config import (
    CONFIG_FILENAME,
    ResolverConfig,
    load_config,
    with_overrides,
)
from cardmedia.common.cache import (
    CACHE_FILENAME,
    DataCache,
    cache_path_for,
    load_cache,
    merge_copyright,
    dump_cache,
)

__all__ = [
    # utils
    "_load_env_file",
    "ensure_dir",
    # logging
    "log_debug",
    "set_log_context",
    "get_log_context",
    "setup_prefixed_stdout",
    # config
    "CONFIG_FILENAME",
    "ResolverConfig",
    "load_config",
    "with_overrides",
    # cache
    "CACHE_FILENAME",
    "DataCache",
    "cache_path_for",
    "load_cache",
    "merge_copyright",
    "dump_cache",
]
