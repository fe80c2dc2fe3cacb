import argparse
import sys
from dataclasses import dataclass
from typing import Callable

from ieee754.config import get_default_layout
from ieee754.errors import LayoutNotFoundError
from ieee754.layout import FloatLayout, get_predefined_layout


def layout_arg(name: str) -> FloatLayout:
    try:
        return get_predefined_layout(name)
    except LayoutNotFoundError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_shared_layout_parser():
    parser = argparse.ArgumentParser(description="Shared layout arguments. This should never be seen.", add_help=False)
    parser.add_argument("-l", "--layout", type=layout_arg, default=None, help="The float layout to use; a predefined name such as 'float32', 'double' or 'bf16'. (IEEE754_LAYOUT or float32 by default.)")
    parser.add_argument("-v", "--verbose", action='store_true', required=False, help="Debug logging will be printed to the console.")
    parser.add_argument("-x", "-q", "--squelch", "--quiet", action='store_true', required=False, help="Only the result will be printed, without labels.")
    return parser


SharedLayoutParser = build_shared_layout_parser()


@dataclass
class PrintOptions:
    quiet: bool = False
    verbose: bool = False


def get_layout(run_args: argparse.Namespace) -> FloatLayout:
    return run_args.layout or get_default_layout()


def get_print_options(run_args: argparse.Namespace) -> PrintOptions:
    return PrintOptions(getattr(run_args, "squelch", False), getattr(run_args, "verbose", False))


def print_any(f: str, indent: int = 0):
    indent = '\t' * indent
    print(f"{indent}{f}")


def print_field(label: str, value, indent: int = 0, print_opts: PrintOptions = None):
    if print_opts and print_opts.quiet:
        print_any(str(value), indent)
    else:
        print_any(f"{label}:\t{value}", indent)


def print_error(e: BaseException, indent: int = 0):
    indent = '\t' * indent
    print(f"{indent}ERROR \"{e}\"...")


def func_print_help(arg_parser: argparse.ArgumentParser, exit_code: int = 0) -> Callable[[argparse.Namespace], None]:
    def wrapper(_: argparse.Namespace):
        arg_parser.print_help()
        sys.exit(exit_code)

    return wrapper
