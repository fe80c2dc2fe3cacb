from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, localcontext
from typing import Optional, Tuple

from ieee754.bitfield import BitField, ResizePolicy
from ieee754.config import MAX_PRECISION, get_default_precision
from ieee754.errors import BinaryLengthMismatchError, DecimalParseError, PrecisionError
from ieee754.layout import FloatLayout
from ieee754.special import SpecialValue, SpecialValueKind, classify, make_binary_infinity, make_binary_nan, make_binary_zero

logger = logging.getLogger(__name__)

# 2^-1 .. 2^-255, each exact as a double
HALF_POWS: Tuple[float, ...] = tuple(0.5 ** (i + 1) for i in range(255))

_TWO = Decimal(2)
_LOG10_2 = math.log10(2)
_LOG2_10 = math.log2(10)
# Significant digits carried while scaling the mantissa by 2^exponent
_SCALE_DIGITS = 80


@dataclass(frozen=True)
class DecodedFloat:
    """
    A decoded bit pattern, broken into the parts shown next to the decimal text.
    """
    """ The decimal text `decode` returns """
    text: str
    is_positive: bool
    """ The unbiased exponent; None for zero, infinity and NaN """
    exponent: Optional[int]
    """ The mantissa magnitude (1.m, or 0.m when denormalized); None for zero, infinity and NaN """
    mantissa: Optional[float]
    are_exponent_and_mantissa_valid: bool
    is_denormalized: bool
    """ The landmark the pattern matched, if any """
    special: Optional[SpecialValue] = None


def _parse_decimal(text: str) -> Decimal:
    try:
        value = Decimal(text)
    except InvalidOperation as e:
        raise DecimalParseError(text) from e
    if not value.is_finite():
        raise DecimalParseError(text)
    return value


def _exact_digits(value: Decimal) -> int:
    # Enough digits that splitting and doubling the value never rounds
    _, digits, exponent = value.as_tuple()
    return len(digits) + abs(exponent) + 2


def _doublings_below(fraction: Decimal) -> int:
    # A lower bound on the doublings a fraction needs to reach 1, from its decimal magnitude alone
    return max(0, math.floor(-(fraction.adjusted() + 1) * _LOG2_10) - 1)


def parse_binary(binary: str, layout: FloatLayout) -> BitField:
    if len(binary) != layout.size:
        raise BinaryLengthMismatchError(len(binary), layout.size)
    return BitField.parse(binary, layout.size)


def _round_up(binary: BitField, positive: bool, layout: FloatLayout) -> BitField:
    magnitude = layout.zero_sign_bits().concat(binary.get_sub(0, layout.exponent_end_bit + 1))
    if classify(magnitude, layout) == SpecialValue.largest_normal():
        logger.debug("Rounding up the largest normal number; result is infinity")
        return make_binary_infinity(layout, positive)

    # Increment mantissa + exponent as one unsigned counter; the carry may move into the exponent
    binary = binary.copy()
    for i in range(layout.mantissa_start_bit, layout.exponent_end_bit + 1):
        if binary.get_bit(i):
            binary.set_bit(i, False)
        else:
            binary.set_bit(i, True)
            break
    return binary


def _encode_finite(value: Decimal, positive: bool, layout: FloatLayout) -> BitField:
    integer = int(value)
    fraction = value - integer
    round_up = False

    # Binary digits of the integer part without the implicit leading one
    int_digits = bin(integer)[3:] if integer else ""
    int_exponent = len(int_digits)
    if len(int_digits) > layout.mantissa:
        round_up = int_digits[layout.mantissa] == "1"
        int_digits = int_digits[:layout.mantissa]
        fraction = Decimal(0)
    int_bin = BitField.parse(int_digits)

    negative_exponent = 0
    subnormal = False
    if not integer:
        # Find the leading one of the fraction; give up once it falls below the smallest normal exponent
        negative_exponent = min(_doublings_below(fraction), layout.exponent_bias - 1)
        fraction *= _TWO ** negative_exponent
        while True:
            if negative_exponent >= layout.exponent_bias - 1:
                subnormal = True
                break
            fraction *= _TWO
            negative_exponent += 1
            if fraction >= 1:
                fraction -= 1
                break

    fract_bin = BitField(0)
    for _ in range(layout.mantissa - int_bin.size):
        if fraction.is_zero():
            break
        fraction *= _TWO
        digit = fraction >= 1
        fract_bin.push_low_bit(digit)
        if digit:
            fraction -= 1

    if not fraction.is_zero():
        round_up = fraction * _TWO >= 1

    if subnormal:
        logger.debug("%s is below the smallest normal number; encoding as subnormal", value)
        exponent = 0
    else:
        exponent = int_exponent - negative_exponent + layout.exponent_bias
    if exponent >= layout.max_exponent:
        logger.debug("%s overflows the exponent (%d >= %d); result is infinity", value, exponent, layout.max_exponent)
        return make_binary_infinity(layout, positive)

    exponent_bin = BitField.from_unsigned(exponent, layout.exponent, 128)
    mantissa_bin = int_bin.concat(fract_bin).resize(layout.mantissa, ResizePolicy.AffectLowBits)

    binary = layout.sign_bits(0 if positive else 1)
    binary.concat_in_place(exponent_bin)
    binary.concat_in_place(mantissa_bin)

    if round_up:
        binary = _round_up(binary, positive, layout)
    return binary


def encode(decimal: str, layout: FloatLayout) -> str:
    """
    Converts decimal text to the MSB-first bit string of `layout`.

    Text containing 'inf' or 'nan' (any case) encodes infinity or a quiet NaN; otherwise the text must be a decimal number.
    Rounds to nearest on the first discarded bit, ties away from zero.
    """
    text = decimal.strip().lower()
    logger.debug("Encoding %r with %s", text, layout)

    if "inf" in text:
        return str(make_binary_infinity(layout, not text.startswith("-")))

    if "nan" in text:
        return str(make_binary_nan(layout, False, BitField(0)))

    value = _parse_decimal(text)
    positive = not value.is_signed()

    if value.is_zero():
        return str(make_binary_zero(layout, positive))

    # Magnitudes that are out of range by whole decimal digits never reach the bit-level algorithm
    if value.adjusted() > (layout.max_exponent - layout.exponent_bias) * _LOG10_2 + 2:
        logger.debug("%s is far above the largest normal number; result is infinity", value)
        return str(make_binary_infinity(layout, positive))
    if value.adjusted() < (1 - layout.exponent_bias - layout.mantissa) * _LOG10_2 - 2:
        logger.debug("%s is far below the smallest subnormal number; result is zero", value)
        return str(make_binary_zero(layout, positive))

    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _exact_digits(value))
        binary = _encode_finite(value.copy_abs(), positive, layout)
    return str(binary)


def _check_precision(precision: Optional[int]) -> int:
    if precision is None:
        precision = get_default_precision()
    if isinstance(precision, bool) or not isinstance(precision, int) or not 0 <= precision <= MAX_PRECISION:
        raise PrecisionError(precision, MAX_PRECISION)
    return precision


def _special_text(special: Optional[SpecialValue]) -> Optional[str]:
    if special is None:
        return None
    elif special.kind == SpecialValueKind.Zero:
        return "0.0" if special.positive else "-0.0"
    elif special.kind == SpecialValueKind.Infinity:
        return "Infinity" if special.positive else "-Infinity"
    elif special.kind == SpecialValueKind.NaN:
        return "NaN"
    return None


def _to_decimal_text(positive: bool, exponent: int, mantissa: float, precision: int) -> str:
    with localcontext() as ctx:
        ctx.prec = _SCALE_DIGITS
        value = Decimal(mantissa) * _TWO ** exponent
        if not positive:
            value = value.copy_negate()
        ctx.prec = max(ctx.prec, value.adjusted() + precision + 2)
        rounded = value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_EVEN)
        if rounded.is_zero():
            rounded = rounded.copy_abs()
        return format(rounded.normalize(), "f")


def decode_ext(binary: str, layout: FloatLayout, precision: Optional[int] = None) -> DecodedFloat:
    """
    Decodes an MSB-first bit string of `layout`, returning the decimal text and the parts it was built from.

    An all-zero exponent field decodes as a subnormal, 0.m x 2^(1 - bias).
    """
    precision = _check_precision(precision)
    bits = parse_binary(binary, layout)
    logger.debug("Decoding %s with %s", bits, layout)

    special = classify(bits, layout)
    positive = not bits.get_bit(layout.sign_bit_unchecked)
    text = _special_text(special)
    if text is not None:
        return DecodedFloat(text, positive, None, None, False, False, special)

    exponent_bits = bits.get_sub(layout.exponent_start_bit, layout.exponent_end_bit + 1)
    mantissa_bits = bits.get_sub(layout.mantissa_start_bit, layout.mantissa_end_bit + 1)

    denormalized = exponent_bits.all_bits_are(False)
    if denormalized:
        exponent = 1 - layout.exponent_bias
        mantissa = 0.0
    else:
        exponent = exponent_bits.to_unsigned() - layout.exponent_bias
        mantissa = 1.0

    for i in range(mantissa_bits.size):
        if mantissa_bits.get_bit(mantissa_bits.size - i - 1):
            mantissa += HALF_POWS[i]

    text = _to_decimal_text(positive, exponent, mantissa, precision)
    return DecodedFloat(text, positive, exponent, mantissa, True, denormalized, special)


def decode(binary: str, layout: FloatLayout, precision: Optional[int] = None) -> str:
    """
    Converts an MSB-first bit string of `layout` to decimal text rounded to `precision` fractional digits.

    Zero, infinity and NaN decode to '0.0', '-0.0', 'Infinity', '-Infinity' and 'NaN'.
    """
    return decode_ext(binary, layout, precision).text


# Binary/decimal naming of the same operations
decimal_to_binary = encode
binary_to_decimal = decode
binary_to_decimal_ext = decode_ext

__all__ = [
    "HALF_POWS",
    "DecodedFloat",
    "encode",
    "decode",
    "decode_ext",
    "parse_binary",
    "decimal_to_binary",
    "binary_to_decimal",
    "binary_to_decimal_ext",
]
