import argparse

from ieee754.bitfield import BitField
from ieee754.codec import decode_ext, parse_binary
from ieee754.layout import PredefinedLayout
from ieee754.native import binary_to_hex
from ieee754.special import SpecialValue, SpecialValueKind, classify, make_binary_special
from scripts.universal.common import SharedLayoutParser, get_layout, get_print_options, print_any, print_field
from scripts.universal.convert.common import SharedBinaryParser, read_binary_arg

ArgumentSubParser = argparse._SubParsersAction


def run_inspect(run_args: argparse.Namespace):
    layout = get_layout(run_args)
    print_opts = get_print_options(run_args)
    binary = read_binary_arg(run_args, layout)
    decoded = decode_ext(binary, layout, run_args.precision)

    print_field("Layout", layout, print_opts=print_opts)
    if layout.sign_char is not None:
        print_field("Sign", binary[layout.sign_char], 1, print_opts)
    print_field("Exponent", binary[layout.exponent_start_char:layout.exponent_end_char + 1], 1, print_opts)
    print_field("Mantissa", binary[layout.mantissa_start_char:layout.mantissa_end_char + 1], 1, print_opts)
    print_field("Hex", binary_to_hex(binary, layout), print_opts=print_opts)
    print_field("Decimal", decoded.text, print_opts=print_opts)
    if decoded.are_exponent_and_mantissa_valid:
        print_field("True Exponent", decoded.exponent, 1, print_opts)
        print_field("Significand", decoded.mantissa, 1, print_opts)
        print_field("Denormalized", decoded.is_denormalized, 1, print_opts)
    print_field("Special", decoded.special if decoded.special is not None else "None", print_opts=print_opts)


def run_classify(run_args: argparse.Namespace):
    layout = get_layout(run_args)
    binary = read_binary_arg(run_args, layout)
    special = classify(parse_binary(binary, layout), layout)
    print_field("Special", special if special is not None else "None", print_opts=get_print_options(run_args))


def _special_from_args(run_args: argparse.Namespace) -> SpecialValue:
    kind = SpecialValueKind(run_args.kind)
    if kind == SpecialValueKind.NaN:
        payload = BitField.parse(run_args.payload) if run_args.payload else None
        return SpecialValue.nan(signaling=run_args.signaling, payload=payload)
    return SpecialValue(kind, positive=not run_args.negative)


def run_special(run_args: argparse.Namespace):
    layout = get_layout(run_args)
    binary = make_binary_special(layout, _special_from_args(run_args))
    print_field("Binary", binary, print_opts=get_print_options(run_args))


def run_layouts(run_args: argparse.Namespace):
    print_opts = get_print_options(run_args)
    for predefined in PredefinedLayout:
        layout = predefined.layout
        if print_opts.quiet:
            print_any(predefined.name)
        else:
            print_any(f"{predefined.name}:\t{layout.size} bits, sign {layout.sign}, exponent {layout.exponent}, mantissa {layout.mantissa}, bias {layout.exponent_bias}")


def add_describe_sub_commands(sub_parser: ArgumentSubParser):
    inspect_parser = sub_parser.add_parser("inspect", help="Breaks a bit pattern into its fields and decoded parts.", parents=[SharedLayoutParser, SharedBinaryParser])
    inspect_parser.add_argument("-p", "--precision", type=int, default=None, help="Fractional digits to round to. (IEEE754_PRECISION or 20 by default.)")
    inspect_parser.set_defaults(func=run_inspect)

    classify_parser = sub_parser.add_parser("classify", help="Names the landmark value a bit pattern matches, if any.", parents=[SharedLayoutParser, SharedBinaryParser])
    classify_parser.set_defaults(func=run_classify)

    special_parser = sub_parser.add_parser("special", help="Prints the bit pattern of a landmark value.", parents=[SharedLayoutParser])
    special_parser.add_argument("kind", type=str, choices=[kind.value for kind in SpecialValueKind], help="The landmark to build.")
    special_parser.add_argument("-n", "--negative", action="store_true", help="Build the negative zero or infinity.")
    special_parser.add_argument("-s", "--signaling", action="store_true", help="Build a signaling NaN instead of a quiet one.")
    special_parser.add_argument("--payload", type=str, default=None, help="The NaN payload as a bit pattern.")
    special_parser.set_defaults(func=run_special)

    layouts_parser = sub_parser.add_parser("layouts", help="Lists the predefined layouts.", parents=[SharedLayoutParser])
    layouts_parser.set_defaults(func=run_layouts)
