"""Writers for the Anki import file and the data cache file."""

from pathlib import Path

from cardmedia.common.cache import DataCache, cache_path_for, dump_cache


def import_path_for(out_dir: Path, basename: str = "") -> Path:
    """Get the import file path, e.g. out/n5_import.txt for basename "n5"."""
    prefix = f"{basename}_" if basename else ""
    return Path(out_dir) / f"{prefix}import.txt"


def write_import_file(content: str, out_dir: Path, basename: str = "") -> Path:
    """Write (overwrite) the import file with the given records."""
    path = import_path_for(out_dir, basename)
    path.write_text(content, encoding="utf-8")
    return path


def write_data_cache_file(cache: DataCache, out_dir: Path) -> Path:
    """Write the whole data cache back to <out_dir>/data_cache.json."""
    path = cache_path_for(out_dir)
    path.write_text(dump_cache(cache), encoding="utf-8")
    return path
