import argparse
import inspect

from ..concat import describe


class Command:
    name = "stat"
    help = "show the segment table and total size of the concatenated sources"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--md5",
            help="Also compute the MD5 checksum of the concatenated stream.",
            action="store_true",
            default=False,
            required=False,
        )

    def run(self, vars_args: dict):
        describe(
            **(
                {
                    k: v
                    for k, v in vars_args.items()
                    if k in inspect.getfullargspec(describe).args
                }
            )
        )
