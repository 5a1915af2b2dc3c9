"""Exceptions raised while organizing a directory."""

from pathlib import Path

__all__ = (
    "CopyError",
    "FolderCreateError",
    "NamingAttemptsExceededError",
    "OrganizerError",
    "PathError",
)


class OrganizerError(Exception): ...


class PathError(OrganizerError, NotADirectoryError):
    """Raised when the target directory is missing, not a directory, or
    cannot be read.
    """


class CopyError(OrganizerError, OSError):
    """Raised when a single file cannot be copied into its category folder."""

    def __init__(self, src: Path, dst: Path, reason: object) -> None:
        super().__init__(f"Copying '{src}' -> '{dst}': {reason}")
        self.src = src
        self.dst = dst


class NamingAttemptsExceededError(CopyError):
    """Raised when a unique destination filename cannot be generated."""


class FolderCreateError(OrganizerError, OSError):
    """Raised when a category folder cannot be created."""

    def __init__(self, folder: Path, reason: object) -> None:
        super().__init__(f"Creating folder '{folder}': {reason}")
        self.folder = folder
