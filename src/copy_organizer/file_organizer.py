import logging
import os
import shutil
import stat
from collections import Counter
from collections.abc import Generator
from dataclasses import dataclass, field
from itertools import count, islice
from pathlib import Path
from typing import Final

from .categories import Category, FileEntry
from .errors import (
    CopyError,
    FolderCreateError,
    NamingAttemptsExceededError,
    PathError,
)
from .logs import LogActions
from .organizer_config import ConflictPolicy, RunConfig

__all__ = "FileOrganizer", "RunSummary"


_IGNORED_NAMES: Final = frozenset(
    name.casefold()
    for name in (".DS_Store", ".localized", "Thumbs.db", "desktop.ini")
)
"""Casefolded system file names the organizer should skip entirely."""

_HIDDEN_FILE_ATTRIBUTES: Final = (
    stat.FILE_ATTRIBUTE_HIDDEN | stat.FILE_ATTRIBUTE_SYSTEM
)
"""Windows file attributes that mark an entry as hidden."""

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RunSummary:
    """Counters collected over one run.

    Attributes:
        dry_run: Whether `copied` counts intended rather than performed copies.
        scanned: Regular files considered for copying, plus entries that
            could not be inspected.
        copied: Files copied, or that would be copied in a dry run.
        skipped: Files left alone because their destination already existed.
        errors: Entries that failed to be inspected, copied or given a
            category folder.
        by_category: `copied` broken down by category.
    """

    dry_run: bool = False
    scanned: int = 0
    copied: int = 0
    skipped: int = 0
    errors: int = 0
    by_category: Counter[Category] = field(default_factory=Counter)

    def lines(self) -> list[str]:
        """Render the summary as human-readable lines."""

        verb: Final = "would copy" if self.dry_run else "copied"
        msg = f"{LogActions.SUMMARY}: {self.scanned} scanned, {self.copied} "
        msg += f"{verb}, {self.skipped} skipped, {self.errors} errors."

        width: Final = max(len(category) for category in Category)
        return [msg] + [
            f"  {category:<{width}} : {self.by_category[category]}"
            for category in Category
        ]


class FileOrganizer:
    """Copies the top-level files of a directory into category folders.

    Each regular file is classified by its extension and copied, with its
    metadata, to `<target>/<Category>/<name>`. Originals are never modified.
    Per-file failures are logged and counted without stopping the run.

    Attributes:
        config (RunConfig): The settings for this run.
    """

    # Magic methods

    def __init__(self, config: RunConfig) -> None:
        self.config: Final = config
        self._ready_dirs: set[Path] = set()

    # Public methods

    def organize(self) -> RunSummary:
        """Organize the top-level files of the configured target directory.

        Returns:
            The counters collected over the run.

        Raises:
            PathError: If the target directory is missing, is not a directory,
                or cannot be read.
        """

        root: Final = self._resolve_target_dir()
        summary: Final = RunSummary(dry_run=self.config.dry_run)
        self._ready_dirs.clear()

        logger.info(f"{LogActions.STARTED}: Organizing '{root}'.")
        if self.config.dry_run:
            logger.info(f"{LogActions.DRY_RUN} No files will be copied.")

        # Category folders are created while copying, so take a snapshot of
        # the entries first.
        for entry in list(self.scan(root, summary)):
            self._process_entry(entry, root, summary)

        for line in summary.lines():
            logger.info(line)

        logger.info(f"{LogActions.FINISHED}: Organizing '{root}'.")
        return summary

    def scan(
        self, root: Path, summary: RunSummary | None = None
    ) -> Generator[FileEntry, None, None]:
        """Yield the regular files directly inside `root`.

        Directories, symlinks, and hidden or system entries are skipped.
        Entries that cannot be inspected are logged and, if `summary` is
        given, counted as scanned and errored.

        Raises:
            PathError: If `root` cannot be read or its enumeration fails.
        """

        try:
            it = os.scandir(root)
        except OSError as e:
            msg = f"{LogActions.FAILED}: Reading '{root}': {e.strerror or e}."
            raise PathError(msg) from e

        with it:
            while True:
                try:
                    dir_entry = next(it)
                except StopIteration:
                    break
                except OSError as e:
                    msg = f"{LogActions.FAILED}: Reading '{root}': "
                    msg += f"{e.strerror or e}."
                    raise PathError(msg) from e

                try:
                    if self._should_skip(dir_entry):
                        continue
                except OSError as e:
                    msg = f"{LogActions.FAILED}: Inspecting '{dir_entry.path}'"
                    msg += f": {e.strerror or e}."
                    logger.error(msg)
                    if summary is not None:
                        summary.scanned += 1
                        summary.errors += 1
                    continue

                yield FileEntry.from_path(Path(dir_entry.path))

    # Private methods

    def _resolve_target_dir(self) -> Path:
        """Return the canonical path of the target directory.

        Raises:
            PathError: If the target directory does not exist or is not a
                directory.
        """

        target: Final = self.config.target_dir
        try:
            root = target.resolve(strict=True)
        except FileNotFoundError as e:
            msg = f"{LogActions.FAILED}: '{target}' does not exist."
            raise PathError(msg) from e
        except (OSError, RuntimeError) as e:
            msg = f"{LogActions.FAILED}: '{target}' is not a valid directory: "
            msg += f"{e}."
            raise PathError(msg) from e

        if not root.is_dir():
            msg = f"{LogActions.FAILED}: '{target}' is not a directory."
            raise PathError(msg)

        return root

    @staticmethod
    def _should_skip(dir_entry: os.DirEntry[str]) -> bool:
        """Determine whether a directory entry should not be copied.

        Raises:
            OSError: If the entry cannot be inspected.
        """

        name: Final = dir_entry.name

        if name.casefold() in _IGNORED_NAMES or name.startswith("."):
            logger.debug(f"{LogActions.SKIPPED}: Hidden entry '{name}'.")
            return True

        if dir_entry.is_symlink():
            logger.debug(f"{LogActions.SKIPPED}: Symlink '{name}'.")
            return True

        if dir_entry.is_dir(follow_symlinks=False):
            logger.debug(f"{LogActions.SKIPPED}: Directory '{name}'.")
            return True

        if not dir_entry.is_file(follow_symlinks=False):
            logger.debug(f"{LogActions.SKIPPED}: Not a regular file '{name}'.")
            return True

        if os.name == "nt":
            info = dir_entry.stat(follow_symlinks=False)
            attributes = info.st_file_attributes
            if attributes & _HIDDEN_FILE_ATTRIBUTES:
                logger.debug(f"{LogActions.SKIPPED}: Hidden entry '{name}'.")
                return True

        return False

    def _process_entry(
        self, entry: FileEntry, root: Path, summary: RunSummary
    ) -> None:
        """Copy `entry` into its category folder and update `summary`."""

        summary.scanned += 1
        dst_dir: Final = root / entry.category.value

        try:
            dst = self._resolve_destination(entry.path, dst_dir / entry.name)
            if dst is None:
                summary.skipped += 1
                return

            if self.config.dry_run:
                msg = f"{LogActions.DRY_RUN} would copy {entry.path} -> {dst}"
                logger.info(msg)
            else:
                self._ensure_dir(dst_dir)
                self._copy_file(entry.path, dst)
                logger.info(f"{LogActions.COPIED} {entry.path} -> {dst}")

        except (CopyError, FolderCreateError) as e:
            logger.error(f"{LogActions.FAILED}: {e}")
            summary.errors += 1
            return

        summary.copied += 1
        summary.by_category[entry.category] += 1

    def _resolve_destination(self, src: Path, dst: Path) -> Path | None:
        """Apply the conflict policy to the destination path `dst`.

        Returns:
            The path to copy `src` to, or `None` if `src` should be skipped.

        Raises:
            CopyError: If `dst` is a directory or cannot be inspected.
            NamingAttemptsExceededError: If no unique name can be generated.
        """

        try:
            if not dst.exists():
                return dst
            is_dir = dst.is_dir()
        except OSError as e:
            raise CopyError(src, dst, e.strerror or e) from e

        if is_dir:
            raise CopyError(src, dst, "Destination is a directory")

        policy: Final = self.config.on_conflict

        if policy is ConflictPolicy.SKIP:
            if self.config.dry_run:
                logger.info(f"{LogActions.DRY_RUN} would skip {src} -> {dst}")
            else:
                msg = f"{LogActions.SKIPPED}: '{dst}' already exists, not "
                msg += f"copying '{src}'."
                logger.warning(msg)
            return None

        if policy is ConflictPolicy.RENAME:
            return self._find_unique_destination(src, dst)

        logger.debug(f"{LogActions.REPLACED}: Existing '{dst}'.")
        return dst

    def _find_unique_destination(self, src: Path, dst: Path) -> Path:
        """Find the first numbered variant of `dst` that does not exist.

        Raises:
            CopyError: If a candidate name cannot be inspected.
            NamingAttemptsExceededError: If every attempted name is taken.
        """

        attempts: Final = self.config.max_collision_attempts
        paths: Final = self._generate_unique_destination_path(dst)

        for path in islice(paths, attempts):
            try:
                taken = path.exists()
            except OSError as e:
                raise CopyError(src, path, e.strerror or e) from e

            if not taken:
                msg = f"{LogActions.RENAMED}: '{dst.name}' is taken, using "
                msg += f"'{path.name}'."
                if self.config.dry_run:
                    msg = f"{LogActions.DRY_RUN} {msg}"
                logger.info(msg)
                return path

        raise NamingAttemptsExceededError(
            src, dst, f"No unique name after {attempts:,} attempts"
        )

    def _generate_unique_destination_path(
        self,
        path: Path,
    ) -> Generator[Path, None, None]:
        """Generate paths with an incrementing counter appended to their stem.

        Args:
            path: A path that encounters a name collision.

        Yields:
            A path with an incremented counter appended to its stem.
        """

        stem: Final = path.stem
        padding: Final = len(str(self.config.max_collision_attempts))

        for n in count(1):
            yield path.with_stem(f"{stem}_{n:0{padding}}")

    def _ensure_dir(self, dst_dir: Path) -> None:
        """Create the category folder `dst_dir` if it is missing.

        Raises:
            FolderCreateError: If `dst_dir` cannot be created.
        """

        if dst_dir in self._ready_dirs:
            return

        try:
            created = not dst_dir.is_dir()
            if created:
                dst_dir.mkdir(exist_ok=True)
        except OSError as e:
            raise FolderCreateError(dst_dir, e.strerror or e) from e

        if created:
            logger.info(f"{LogActions.CREATED}: Folder '{dst_dir}'.")

        self._ready_dirs.add(dst_dir)

    @staticmethod
    def _copy_file(src: Path, dst: Path) -> None:
        """Copy `src` to `dst` with its metadata, replacing `dst` if present.

        Raises:
            CopyError: If the copy fails.
        """

        try:
            shutil.copy2(src, dst)
        except OSError as e:
            raise CopyError(src, dst, e.strerror or e) from e
