import argparse
import inspect
from pathlib import Path

from .. import constants
from ..concat import cat


class Command:
    name = "cat"
    help = "concatenate sources into one stream and write it out"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        group = parser.add_argument_group(
            f"{constants.ANSI_BOLD}CAT OPTIONS{constants.ANSI_RESET_ALL}"
        )
        group.add_argument(
            "--offset",
            help="Start writing from this offset of the concatenated stream. [default: %(default)s]",
            default=0,
            type=int,
            required=False,
        )
        group.add_argument(
            "--length",
            help="Write at most this many bytes. [default: until the end]",
            default=None,
            type=int,
            required=False,
        )
        group.add_argument(
            "--output",
            help="Path to write the stream to. [default: STDOUT]",
            default=None,
            type=Path,
            required=False,
        )

    def run(self, vars_args: dict):
        cat(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(cat).args
                }
            )
        )
