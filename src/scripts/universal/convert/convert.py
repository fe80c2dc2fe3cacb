import argparse

from ieee754.codec import encode, decode
from ieee754.native import binary_to_hex, hex_to_binary
from scripts.universal.common import SharedLayoutParser, get_layout, get_print_options, print_field
from scripts.universal.convert.common import SharedBinaryParser, read_binary_arg

ArgumentSubParser = argparse._SubParsersAction


def run_encode(run_args: argparse.Namespace):
    layout = get_layout(run_args)
    print_opts = get_print_options(run_args)
    binary = encode(run_args.value, layout)
    print_field("Binary", binary, print_opts=print_opts)
    if run_args.hex:
        print_field("Hex", binary_to_hex(binary, layout), print_opts=print_opts)


def run_decode(run_args: argparse.Namespace):
    layout = get_layout(run_args)
    binary = read_binary_arg(run_args, layout)
    print_field("Decimal", decode(binary, layout, run_args.precision), print_opts=get_print_options(run_args))


def run_hex(run_args: argparse.Namespace):
    layout = get_layout(run_args)
    print_opts = get_print_options(run_args)
    if run_args.reverse:
        print_field("Binary", hex_to_binary(run_args.value, layout), print_opts=print_opts)
    else:
        print_field("Hex", binary_to_hex(run_args.value, layout), print_opts=print_opts)


def add_convert_sub_commands(sub_parser: ArgumentSubParser):
    encode_parser = sub_parser.add_parser("encode", help="Converts a decimal number to its bit pattern.", parents=[SharedLayoutParser])
    encode_parser.add_argument("value", type=str, help="The decimal text to encode; 'inf', '-inf' and 'nan' are accepted. Use '--' before negative infinities.")
    encode_parser.add_argument("--hex", action="store_true", help="Also print the bit pattern as hex.")
    encode_parser.set_defaults(func=run_encode)

    decode_parser = sub_parser.add_parser("decode", help="Converts a bit pattern to a decimal number.", parents=[SharedLayoutParser, SharedBinaryParser])
    decode_parser.add_argument("-p", "--precision", type=int, default=None, help="Fractional digits to round to. (IEEE754_PRECISION or 20 by default.)")
    decode_parser.set_defaults(func=run_decode)

    hex_parser = sub_parser.add_parser("hex", help="Converts a bit pattern to hex.", parents=[SharedLayoutParser])
    hex_parser.add_argument("value", type=str, help="The bit pattern, or hex text when reversing.")
    hex_parser.add_argument("-r", "--reverse", action="store_true", help="Convert hex text to a bit pattern instead.")
    hex_parser.set_defaults(func=run_hex)
