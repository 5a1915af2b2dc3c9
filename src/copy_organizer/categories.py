"""A fixed mapping between a file extension and its category folder.

The target directory ends up organized as such:

--Target/
  |--Archives/
  |--Audio/
  |--Documents/
  |--Images/
  |--Other/
  |--Videos/
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum, unique
from pathlib import Path
from types import MappingProxyType
from typing import Final

__all__ = (
    "EXTENSION_TO_CATEGORY",
    "Category",
    "FileEntry",
    "categorize",
    "sanitize_ext",
)


@unique
class Category(StrEnum):
    """A classification bucket. The value is the destination folder name."""

    IMAGES = "Images"
    DOCUMENTS = "Documents"
    VIDEOS = "Videos"
    AUDIO = "Audio"
    ARCHIVES = "Archives"
    OTHER = "Other"


_CATEGORY_EXTENSIONS: Final = {
    Category.IMAGES: (
        "jpg", "jpeg", "png", "gif", "svg", "bmp", "webp", "tif", "tiff",
        "heic", "ico",
    ),
    Category.DOCUMENTS: (
        "pdf", "doc", "docx", "txt", "rtf", "odt", "xls", "xlsx", "ods",
        "csv", "ppt", "pptx", "odp", "md",
    ),
    Category.VIDEOS: ("mp4", "mov", "mkv", "webm", "avi", "wmv", "flv", "m4v"),
    Category.AUDIO: ("mp3", "wav", "flac", "aac", "ogg", "m4a", "wma"),
    Category.ARCHIVES: ("zip", "rar", "tar", "gz", "tgz", "bz2", "xz", "7z"),
}


def sanitize_ext(ext: str) -> str:
    """Strip spaces and dots from `ext`, then lowercase it.

    Returns:
        The sanitized extension prepended with a single dot, or an empty
            string if nothing is left.
    """

    if ext := ext.strip(" .").lower():
        return f".{ext}"
    return ""


def _build_extension_map(
    category_extensions: Mapping[Category, Iterable[str]],
) -> MappingProxyType[str, Category]:
    """Invert `category_extensions` into an extension lookup table.

    Raises:
        ValueError: If an extension is empty or listed under more than one
            category.
    """

    ext_to_category: dict[str, Category] = {}
    for category, extensions in category_extensions.items():
        for ext in extensions:
            if not (sanitized := sanitize_ext(ext)):
                raise ValueError(f"Empty extension listed under '{category}'.")

            if (existing := ext_to_category.get(sanitized)) is not None:
                msg = f"'{sanitized}' is listed under both '{existing}' and "
                msg += f"'{category}'."
                raise ValueError(msg)

            ext_to_category[sanitized] = category

    return MappingProxyType(ext_to_category)


EXTENSION_TO_CATEGORY: Final = _build_extension_map(_CATEGORY_EXTENSIONS)
"""Sanitized extension (e.g. `.jpg`) to its category."""


def categorize(ext: str) -> Category:
    """Return the category for `ext`, case-insensitively.

    Missing and unknown extensions fall back to `Category.OTHER`.
    """

    return EXTENSION_TO_CATEGORY.get(sanitize_ext(ext), Category.OTHER)


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A regular file found while scanning the target directory."""

    path: Path
    extension: str
    category: Category

    @classmethod
    def from_path(cls, path: Path) -> FileEntry:
        # `Path.suffix` is "" for "README" and ".bashrc", and may be "." for
        # "file." depending on the Python version.
        ext: Final = sanitize_ext(path.suffix)
        return cls(path, ext, categorize(ext))

    @property
    def name(self) -> str:
        return self.path.name
