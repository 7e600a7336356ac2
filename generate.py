#!/usr/bin/env python3
"""Flashcard media generation.

Reads a word list, finds an image and credit line for each word, and writes
an Anki import file.

Folder structure:
    out/
        data_cache.json   (word -> {"copyright": ...})
        import.txt        (word;question;<img>;<credit>;[appendix])
        media/
            ねこ.jpg
            ...

Word list format (one per line, # for comments):
    word;question[;supplier:id:name[;appendix]]

Usage:
    python generate.py words.txt --output out --verbose
    python generate.py words.txt --config decks/n5/-config.json
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from cardmedia.common.config import CONFIG_FILENAME, ResolverConfig, load_config, with_overrides
from cardmedia.common.logging import setup_prefixed_stdout
from cardmedia.common.utils import _load_env_file
from cardmedia.output.page import open_browser_page
from cardmedia.output.processing import process_input_file


# Load .env on import
_load_env_file()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve images and credits for a word list and write an Anki import file"
    )
    parser.add_argument(
        "input",
        type=str,
        help="Path to the word list",
    )
    parser.add_argument(
        "--config",
        type=str,
        help=f"Path to a {CONFIG_FILENAME} file",
    )
    parser.add_argument(
        "--output",
        default=os.environ.get("CARDMEDIA_OUTPUT"),
        help="Output directory for cache, import file and media (default: out)",
    )
    parser.add_argument(
        "--media",
        default=os.environ.get("CARDMEDIA_MEDIA"),
        help="Media subdirectory inside the output directory (default: media)",
    )
    parser.add_argument(
        "--basename",
        default=None,
        help="Prefix for the import file name, e.g. n5 -> n5_import.txt",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"[error] Input file does not exist: {input_path}", file=sys.stderr)
        return 2

    config = ResolverConfig()
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"[error] Config file does not exist: {config_path}", file=sys.stderr)
            return 2
        if config_path.name != CONFIG_FILENAME:
            print(f"[error] Config file must be named {CONFIG_FILENAME}, got: {config_path.name}", file=sys.stderr)
            return 2
        config = load_config(config_path) or config

    config = with_overrides(
        config,
        output=args.output,
        media=args.media,
        basename=args.basename,
        headless=False if args.headed else None,
    )

    if args.verbose:
        setup_prefixed_stdout()
        print(f"\n{'=' * 60}")
        print("🚀 Media Resolution")
        print(f"{'=' * 60}")
        print(f"📝 Word list: {input_path}")
        print(f"📁 Output folder: {config.out_dir}")
        print(f"🖼️ Media folder: {config.out_dir / config.media_dir}")

    with open_browser_page(headless=config.headless) as page:
        words, records = process_input_file(
            page,
            input_path,
            config,
            verbose=args.verbose,
            debug=args.debug,
        )

    if args.verbose:
        print(f"\n{'=' * 60}")
        print("✅ Complete!")
        print(f"   Words read: {words}")
        print(f"   Records written: {records}")
        print(f"{'=' * 60}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
