import argparse
import logging
import sys
from typing import List

from ieee754.errors import IEEE754Error
from scripts.universal.common import func_print_help, print_error
from scripts.universal.convert.convert import add_convert_sub_commands
from scripts.universal.describe.describe import add_describe_sub_commands

ArgumentSubParser = argparse._SubParsersAction


def add_sub_commands(sub_parsers: ArgumentSubParser):
    add_convert_sub_commands(sub_parsers)
    add_describe_sub_commands(sub_parsers)


def create_parser():
    ieee754_parser = argparse.ArgumentParser(prog="ieee754", description="Master tool for converting between decimal numbers and binary floating-point bit patterns.")
    ieee754_parser.set_defaults(func=func_print_help(ieee754_parser))
    ieee754_subparsers = ieee754_parser.add_subparsers(description="Conversions and lookups on float layouts.", help="Conversions and lookups on float layouts.")
    add_sub_commands(ieee754_subparsers)

    return ieee754_parser


Parser = create_parser()


def main(args: List = None) -> int:
    args = sys.argv[1:] if args is None else args
    r = Parser.parse_args(args)
    if getattr(r, "verbose", False):
        logging.basicConfig(level=logging.DEBUG)
    if hasattr(r, 'func') and r.func:
        try:
            r.func(r)
        except IEEE754Error as e:
            print_error(e)
            return 1
        return 0
    else:
        raise NotImplementedError("An entry point for the command was not supplied!")


if __name__ == "__main__":
    sys.exit(main())
