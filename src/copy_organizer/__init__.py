"""Copy the top-level files of a directory into category folders."""

from .categories import EXTENSION_TO_CATEGORY, Category, FileEntry, categorize
from .errors import (
    CopyError,
    FolderCreateError,
    NamingAttemptsExceededError,
    OrganizerError,
    PathError,
)
from .file_organizer import FileOrganizer, RunSummary
from .organizer_config import ConflictPolicy, RunConfig

__all__ = (
    "EXTENSION_TO_CATEGORY",
    "Category",
    "ConflictPolicy",
    "CopyError",
    "FileEntry",
    "FileOrganizer",
    "FolderCreateError",
    "NamingAttemptsExceededError",
    "OrganizerError",
    "PathError",
    "RunConfig",
    "RunSummary",
    "categorize",
)

__version__ = "1.0.0"
