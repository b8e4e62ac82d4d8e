"""Command line options of the application."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Sequence

APP_NAME = "SceneExplorer"
APP_VERSION = "1.0.0"


@dataclass
class CommandOption:
    """Options given on the command line.

    Non-empty paths are made absolute.
    """

    db_dir: str = ""
    doc: str = ""
    no_recent: bool = False

    def __post_init__(self) -> None:
        if self.db_dir:
            self.db_dir = os.path.abspath(self.db_dir)
        if self.doc:
            self.doc = os.path.abspath(self.doc)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME)
    parser.add_argument(
        "-v", "--version", action="version", version=f"{APP_NAME} {APP_VERSION}"
    )
    parser.add_argument("document", nargs="*", help="document to open.")
    parser.add_argument(
        "-d",
        "--database-directory",
        dest="database_directory",
        metavar="directory",
        default="",
        help="Set database directory <directory>.",
    )
    parser.add_argument(
        "-n",
        dest="no_recent",
        action="store_true",
        help="Do not add to recent open documents.",
    )
    return parser


def parse_command_line(argv: Sequence[str] | None = None) -> CommandOption:
    """Parse command line arguments into a :class:`CommandOption`.

    Help and version requests print their text and raise ``SystemExit``.
    Unknown options are ignored.
    """
    if argv is None:
        argv = sys.argv[1:]
    parser = _build_parser()
    args, _unknown = parser.parse_known_args(list(argv))

    doc = ""
    if args.document:
        doc = args.document[0]
        if doc == "/?":
            parser.print_help()
            parser.exit(0)

    return CommandOption(args.database_directory, doc, args.no_recent)