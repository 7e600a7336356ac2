"""Structured instructions for resolving a word's image.

An instruction arrives as four ordered fields:

    [word, "question:...", "supplier:id:name", "appendix:..."]

Only the first colon-separated token of the question and appendix fields is
kept. The image field may be missing or empty, which selects the default
dictionary lookup.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence


DEFAULT_EXT = ".jpg"


class InstructionError(ValueError):
    """Raised when an instruction cannot be parsed."""


class Supplier(str, Enum):
    """Where a word's image comes from."""
    DICTIONARY = ""  # unset: look the word up in the dictionary
    LOCAL = "local"
    DIRECT = "direct"
    UNSPLASH = "unsplash"
    MEDIA = "media"
    NONE = "none"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Supplier":
        try:
            return cls(value or "")
        except ValueError:
            allowed = ", ".join(repr(s.value) for s in cls)
            raise InstructionError(f"Unknown image supplier {value!r} (expected one of {allowed})") from None


@dataclass(frozen=True)
class ImageSpec:
    """The "supplier:id:name" part of an instruction."""
    supplier: Supplier = Supplier.DICTIONARY
    id: str = ""
    name: str = ""

    def __post_init__(self):
        # "local::" is allowed: the asset is <word>.jpg placed there by hand
        needs_id = (Supplier.DIRECT, Supplier.UNSPLASH, Supplier.MEDIA)
        if self.supplier in needs_id and not self.id:
            raise InstructionError(f"Supplier '{self.supplier.value}' requires an image id")

    @property
    def carries_filename(self) -> bool:
        """Whether the id is itself a filename (local) or a URL to a file (direct)."""
        return self.supplier in (Supplier.LOCAL, Supplier.DIRECT)


@dataclass(frozen=True)
class AssetReference:
    """Where a word's image is, or will be, stored on disk."""
    name: str
    ext: str
    out_dir: Path
    media_dir: str

    @property
    def filename(self) -> str:
        return f"{self.name}{self.ext}"

    @property
    def path(self) -> Path:
        return Path(self.out_dir) / self.media_dir / self.filename


@dataclass(frozen=True)
class Instruction:
    """A parsed instruction driving one resolution."""
    word: str
    question: str = ""
    image: ImageSpec = field(default_factory=ImageSpec)
    appendix: Optional[str] = None

    def asset_reference(self, out_dir: Path, media_dir: str) -> AssetReference:
        """Derive the asset's name and extension.

        Local and direct ids carry their own extension (lowercased); anything
        else, or an id without one, is stored as .jpg. An explicit name wins,
        then the id's basename for local/direct, then the word itself.
        """
        ext = DEFAULT_EXT
        name = ""
        if self.image.carries_filename:
            stem, suffix = os.path.splitext(os.path.basename(self.image.id))
            if suffix:
                ext = suffix.lower()
            name = stem
        name = self.image.name or name or self.word
        return AssetReference(name=name, ext=ext, out_dir=Path(out_dir), media_dir=media_dir)


def _first_token(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value.split(":")[0]


def parse_image_spec(value: Optional[str]) -> ImageSpec:
    """Parse "supplier:id:name". Missing parts are empty."""
    if not value:
        return ImageSpec()
    parts = value.split(":")
    supplier = Supplier.parse(parts[0])
    image_id = parts[1] if len(parts) > 1 else ""
    name = parts[2] if len(parts) > 2 else ""
    return ImageSpec(supplier=supplier, id=image_id, name=name)


def parse_instruction(fields: Sequence[Optional[str]]) -> Instruction:
    """Parse the four instruction fields into an Instruction.

    Raises InstructionError for an empty word or an unknown supplier.
    """
    if not fields or not fields[0]:
        raise InstructionError("Instruction has no word")
    padded = list(fields) + [None] * (4 - len(fields))
    word, question_data, image_data, appendix_data = padded[:4]
    return Instruction(
        word=word,
        question=_first_token(question_data) or "",
        image=parse_image_spec(image_data),
        appendix=_first_token(appendix_data),
    )


__all__ = [
    "DEFAULT_EXT",
    "InstructionError",
    "Supplier",
    "ImageSpec",
    "AssetReference",
    "Instruction",
    "parse_image_spec",
    "parse_instruction",
]
