import argparse

from ieee754.layout import FloatLayout
from ieee754.native import hex_to_binary

SharedBinaryParser = argparse.ArgumentParser(add_help=False)
SharedBinaryParser.add_argument("value", type=str, help="The MSB-first bit pattern; exactly as many digits as the layout is wide.")
SharedBinaryParser.add_argument("--hex", action="store_true", help="The value is hex text instead of a bit pattern.")


def read_binary_arg(run_args: argparse.Namespace, layout: FloatLayout) -> str:
    if run_args.hex:
        return hex_to_binary(run_args.value, layout)
    return run_args.value
