"""Word-list input reading.

Each non-blank line holds one instruction with semicolon-separated fields:

    ねこ;猫:cat;;note:pet
    dog;犬;direct:upload.wikimedia.org/wikipedia/commons/dog.png:dog1
    fox;狐;none::

Lines starting with # are treated as comments.
"""

import sys
from pathlib import Path
from typing import List, Optional


def split_instruction_line(line: str) -> List[Optional[str]]:
    """Split a line into the four instruction fields, padding with None."""
    parts: List[Optional[str]] = list(line.split(";", 3))
    parts += [None] * (4 - len(parts))
    return [p if p else None for p in parts]


def read_word_list(input_path: Path, verbose: bool = False) -> List[List[Optional[str]]]:
    """Read instruction rows from a word-list file.

    Rows need at least a word and a question; shorter lines are skipped with a
    warning.
    """
    rows: List[List[Optional[str]]] = []
    text = Path(input_path).read_text(encoding="utf-8")

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()

        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue

        if ";" not in line:
            print(f"[input] [warn] Line {lineno}: expected 'word;question[;image[;appendix]]', got {line!r}", file=sys.stderr)
            continue

        rows.append(split_instruction_line(line))

    if verbose:
        print(f"[input] Read {len(rows)} words from {Path(input_path).name}")
    return rows
