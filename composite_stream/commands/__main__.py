import argparse
import logging
import sys
from pathlib import Path

from .. import exceptions, VERSION
from ..concat import log_exception
from ..utils import configure_logger, get_app_name
from . import cat, stat

composite_stream_commands = [
    cat,
    stat,
]


# Root logger of composite_stream (not including third-party libraries)
LOG = logging.getLogger(get_app_name())


# Handle shared arguments/options here
def add_general_arguments(parser, command):
    if command in ["cat", "stat"]:
        parser.add_argument(
            "import_path",
            help='Paths to the files to concatenate, in order. "-" reads STDIN.',
            nargs="+",
            type=Path,
        )


def _log_params(argvars: dict) -> None:
    for k, v in argvars.items():
        if v is None:
            continue
        if callable(v):
            continue
        if isinstance(v, (list, set, tuple)):
            v = ", ".join(str(x) for x in v)
        LOG.debug("CLI param: %s: %s", k, v)


def main():
    version_text = f"composite_stream version {VERSION}"

    parser = argparse.ArgumentParser(
        "composite_stream",
    )
    parser.add_argument(
        "--version",
        help="show the version of composite_stream and exit",
        action="version",
        version=version_text,
    )
    parser.add_argument(
        "--verbose",
        help="show verbose",
        action="store_true",
        default=False,
        required=False,
    )
    parser.set_defaults(func=lambda _: parser.print_help())

    all_commands = [module.Command() for module in composite_stream_commands]

    subparsers = parser.add_subparsers(
        description="please choose one of the available subcommands",
    )
    for command in all_commands:
        cmd_parser = subparsers.add_parser(
            command.name, help=command.help, conflict_handler="resolve"
        )
        add_general_arguments(cmd_parser, command.name)
        command.add_basic_arguments(cmd_parser)
        cmd_parser.set_defaults(func=command.run)

    args = parser.parse_args()

    configure_logger(
        LOG, level=logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr
    )

    LOG.debug("%s", version_text)
    argvars = vars(args)
    _log_params(argvars)

    try:
        args.func(argvars)
    except exceptions.CompositeStreamUserError as ex:
        log_exception(ex)
        sys.exit(ex.exit_code)

    except KeyboardInterrupt:
        LOG.info("Interrupted by user...")
        sys.exit(130)


if __name__ == "__main__":
    main()
