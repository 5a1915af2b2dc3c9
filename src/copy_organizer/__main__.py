"""Copy the files of a directory into category folders by extension."""

import logging
import sys
from argparse import ArgumentParser
from collections.abc import Sequence
from pathlib import Path

from copy_organizer import ConflictPolicy, FileOrganizer, PathError, RunConfig
from copy_organizer import __name__ as co_name
from copy_organizer.logs import configure_logging

logger = logging.getLogger(co_name)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="organizer", description=__doc__)
    parser.add_argument(
        "target_dir", type=Path, help="the directory to organize"
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="report what would be copied without copying anything",
    )
    parser.add_argument(
        "--on-conflict",
        type=ConflictPolicy,
        choices=list(ConflictPolicy),
        default=ConflictPolicy.OVERWRITE,
        help="what to do when a copy already exists (default: %(default)s)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="show debug messages"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the organizer and return the process exit code.

    Returns 0 once the target directory has been read, even if some files
    failed to copy, and 1 if the target directory is unusable.
    """

    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    config = RunConfig(
        args.target_dir, dry_run=args.dry_run, on_conflict=args.on_conflict
    )

    try:
        FileOrganizer(config).organize()
    except PathError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
