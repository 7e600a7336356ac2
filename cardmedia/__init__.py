"""Flashcard media resolution library.

Subpackages:
- cardmedia.common: Shared utilities (utils, logging, config, data cache)
- cardmedia.input: Input processing (word lists to structured instructions)
- cardmedia.output: Output generation (provider lookup, asset download, import records)
"""
