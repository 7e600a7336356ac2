"""Input processing for word lists and image instructions."""

from cardmedia.input.instruction import (
    DEFAULT_EXT,
    InstructionError,
    Supplier,
    ImageSpec,
    AssetReference,
    Instruction,
    parse_image_spec,
    parse_instruction,
)
from cardmedia.input.reader import (
    split_instruction_line,
    read_word_list,
)

__all__ = [
    # instruction
    "DEFAULT_EXT",
    "InstructionError",
    "Supplier",
    "ImageSpec",
    "AssetReference",
    "Instruction",
    "parse_image_spec",
    "parse_instruction",
    # reader
    "split_instruction_line",
    "read_word_list",
]
