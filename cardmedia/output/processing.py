"""Media resolution pipeline.

For each word:
1. Load data_cache.json from the output folder
2. Skip all network work if the word is cached and its image is on disk
3. Otherwise run the supplier's providers (dictionary, stock photo, direct URL)
4. Merge any fresh attribution into the cache
5. Build the import record: word;question;<img>;<attribution>;[appendix]

The caller owns persisting the cache; process_input_file does this after
every word.
"""

import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from cardmedia.common.cache import DataCache, cache_path_for, load_cache, merge_copyright
from cardmedia.common.config import ResolverConfig
from cardmedia.common.logging import log_debug, set_log_context
from cardmedia.common.utils import ensure_dir
from cardmedia.input.instruction import AssetReference, Instruction, InstructionError, Supplier, parse_instruction
from cardmedia.input.reader import read_word_list
from cardmedia.output import assets
from cardmedia.output.files import write_data_cache_file, write_import_file
from cardmedia.output.page import PageDriver
from cardmedia.output.providers import latest_attribution, run_providers


def needs_fetch(instruction: Instruction, asset: AssetReference, cache: DataCache) -> bool:
    """Whether the word must go to the network.

    Uncached words always do. Cached words only do when their image is missing,
    and never for supplier "none".
    """
    if instruction.word not in cache:
        return True
    if instruction.image.supplier is Supplier.NONE:
        return False
    return not assets.asset_exists(asset.name, asset.ext, asset.out_dir, asset.media_dir)


def build_content_line(
    instruction: Instruction,
    asset: AssetReference,
    cache: DataCache,
    fresh_attribution: str = "",
) -> str:
    """Build the import record, storing a fresh attribution in the cache."""
    content = f"{instruction.word};{instruction.question};"

    if assets.asset_exists(asset.name, asset.ext, asset.out_dir, asset.media_dir):
        content += f'<img src="{asset.filename}" />;'
    elif instruction.image.supplier is Supplier.MEDIA:
        # Already in Anki's collection.media, which this pipeline doesn't manage
        content += f'<img src="{instruction.image.id}{asset.ext}" />;'
    else:
        content += ";"

    cached = cache.get(instruction.word, {}).get("copyright")
    if fresh_attribution:
        merge_copyright(cache, instruction.word, fresh_attribution)
        content += f"{fresh_attribution};"
    elif cached:
        content += f"{cached};"
    else:
        content += ";"

    if instruction.appendix:
        content += instruction.appendix

    return content


def resolve_word(
    page: PageDriver,
    fields: Sequence[Optional[str]],
    options: Optional[ResolverConfig] = None,
    verbose: bool = False,
    debug: bool = False,
) -> Tuple[str, DataCache]:
    """Resolve one word's image and return (content_line, updated_cache).

    Raises InstructionError for a malformed instruction and OSError when the
    cache file or the media folder can't be accessed. Provider failures are
    logged and leave the image and attribution fields empty.
    """
    options = options or ResolverConfig()
    out_dir = options.out_dir
    media_dir = options.media_dir

    cache = load_cache(cache_path_for(out_dir), verbose=verbose)
    instruction = parse_instruction(fields)
    asset = instruction.asset_reference(out_dir, media_dir)
    log_debug(debug, f"{instruction.word}: supplier={instruction.image.supplier.value!r} asset={asset.path}")

    fresh_attribution = ""
    if needs_fetch(instruction, asset, cache):
        if verbose:
            print(f"[media] [cache-miss] {instruction.word}")
        cache.setdefault(instruction.word, {})
        results = run_providers(page, instruction, asset, options, verbose=verbose)
        log_debug(debug, f"{instruction.word}: " + ", ".join(f"{r.provider}={r.status.value}" for r in results))
        fresh_attribution = latest_attribution(results)
    elif verbose:
        print(f"[media] [cache-hit] {instruction.word}")

    content = build_content_line(instruction, asset, cache, fresh_attribution)
    return content, cache


def process_input_file(
    page: PageDriver,
    input_path: Path,
    options: Optional[ResolverConfig] = None,
    verbose: bool = False,
    debug: bool = False,
) -> Tuple[int, int]:
    """Resolve every word in a word-list file and write the import file.

    The cache is written back after each word so an interrupted run keeps its
    progress. Lines with a malformed instruction are skipped.

    Returns (words_read, records_written).
    """
    options = options or ResolverConfig()
    out_dir = options.out_dir
    ensure_dir(out_dir)

    rows = read_word_list(input_path, verbose=verbose)
    lines: List[str] = []

    for fields in rows:
        set_log_context(fields[0] or "")
        try:
            content, cache = resolve_word(page, fields, options, verbose=verbose, debug=debug)
        except InstructionError as e:
            print(f"[input] [error] {e}", file=sys.stderr)
            continue
        finally:
            set_log_context("")
        write_data_cache_file(cache, out_dir)
        lines.append(content)

    import_path = write_import_file("\n".join(lines) + "\n" if lines else "", out_dir, options.basename)
    if verbose:
        print(f"[file] Wrote {len(lines)} records to {import_path}")

    return len(rows), len(lines)
