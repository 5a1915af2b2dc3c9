from dataclasses import dataclass
from enum import StrEnum, unique
from pathlib import Path
from typing import Final

__all__ = (
    "DEFAULT_MAX_COLLISION_ATTEMPTS",
    "ConflictPolicy",
    "RunConfig",
)


DEFAULT_MAX_COLLISION_ATTEMPTS: Final = 99
"""The number of numbered names tried before a renamed copy gives up."""


@unique
class ConflictPolicy(StrEnum):
    """What to do when a file with the same name is already in its category
    folder.
    """

    OVERWRITE = "overwrite"
    """Replace the existing copy. Re-running yields the same destination set."""

    SKIP = "skip"
    """Leave the existing copy alone and warn."""

    RENAME = "rename"
    """Copy under a numbered name such as `photo_01.jpg`."""


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Settings for one invocation of the organizer.

    Attributes:
        target_dir: The directory whose top-level files are organized.
        dry_run: If `True`, report intended copies without touching the
            filesystem.
        on_conflict: The duplicate policy.
        max_collision_attempts: The maximum number of numbered names tried
            under `ConflictPolicy.RENAME`.
    """

    target_dir: Path
    dry_run: bool = False
    on_conflict: ConflictPolicy = ConflictPolicy.OVERWRITE
    max_collision_attempts: int = DEFAULT_MAX_COLLISION_ATTEMPTS

    def __post_init__(self) -> None:
        # Accept plain strings from callers other than the CLI.
        object.__setattr__(self, "target_dir", Path(self.target_dir))
        object.__setattr__(
            self, "on_conflict", ConflictPolicy(self.on_conflict)
        )

        if self.max_collision_attempts < 1:
            msg = "`max_collision_attempts` must be at least 1, got "
            msg += f"{self.max_collision_attempts}."
            raise ValueError(msg)
