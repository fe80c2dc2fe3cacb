from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ieee754.bitfield import BitField, ResizePolicy
from ieee754.layout import FloatLayout


class SpecialValueKind(Enum):
    Zero = "zero"
    Infinity = "infinity"
    NaN = "nan"
    SmallestPositiveSubnormal = "smallest_positive_subnormal"
    LargestSubnormal = "largest_subnormal"
    SmallestPositiveNormal = "smallest_positive_normal"
    LargestNormal = "largest_normal"
    LargestLessThanOne = "largest_less_than_one"
    One = "one"
    SmallestLargerThanOne = "smallest_larger_than_one"


@dataclass(frozen=True)
class SpecialValue:
    """
    A landmark value of a float layout.

    `positive` only applies to Zero and Infinity; `signaling` and `payload` only apply to NaN.
    """
    kind: SpecialValueKind
    positive: bool = True
    signaling: bool = False
    payload: Optional[BitField] = None

    def __str__(self) -> str:
        if self.kind in (SpecialValueKind.Zero, SpecialValueKind.Infinity):
            return ("+" if self.positive else "-") + self.kind.name
        elif self.kind == SpecialValueKind.NaN:
            name = "SignalingNaN" if self.signaling else "QuietNaN"
            return f"{name}({self.payload})" if self.payload else name
        return self.kind.name

    @classmethod
    def zero(cls, positive: bool = True) -> SpecialValue:
        return cls(SpecialValueKind.Zero, positive=positive)

    @classmethod
    def infinity(cls, positive: bool = True) -> SpecialValue:
        return cls(SpecialValueKind.Infinity, positive=positive)

    @classmethod
    def nan(cls, signaling: bool = False, payload: Optional[BitField] = None) -> SpecialValue:
        return cls(SpecialValueKind.NaN, signaling=signaling, payload=payload if payload is not None else BitField(0))

    @classmethod
    def smallest_positive_subnormal(cls) -> SpecialValue:
        return cls(SpecialValueKind.SmallestPositiveSubnormal)

    @classmethod
    def largest_subnormal(cls) -> SpecialValue:
        return cls(SpecialValueKind.LargestSubnormal)

    @classmethod
    def smallest_positive_normal(cls) -> SpecialValue:
        return cls(SpecialValueKind.SmallestPositiveNormal)

    @classmethod
    def largest_normal(cls) -> SpecialValue:
        return cls(SpecialValueKind.LargestNormal)

    @classmethod
    def largest_less_than_one(cls) -> SpecialValue:
        return cls(SpecialValueKind.LargestLessThanOne)

    @classmethod
    def one(cls) -> SpecialValue:
        return cls(SpecialValueKind.One)

    @classmethod
    def smallest_larger_than_one(cls) -> SpecialValue:
        return cls(SpecialValueKind.SmallestLargerThanOne)


def make_binary_zero(layout: FloatLayout, positive: bool) -> BitField:
    if positive or layout.is_unsigned:
        return BitField.all_zeros(layout.size)
    return layout.sign_bits(1).concat(layout.zero_exponent_bits()).concat(layout.zero_mantissa_bits())


def make_binary_infinity(layout: FloatLayout, positive: bool) -> BitField:
    return layout.sign_bits(0 if positive else 1).concat(layout.one_exponent_bits()).concat(layout.zero_mantissa_bits())


def make_binary_nan(layout: FloatLayout, signaling: bool, payload: BitField) -> BitField:
    # x 11111111 Qppppppppppppppppppppp1
    # The trailing 1 keeps the mantissa non-zero so a NaN never reads as infinity
    payload = payload.resize(layout.mantissa - 2, ResizePolicy.AffectHighBits)
    quiet_flag = BitField.from_unsigned(0 if signaling else 1, 1, 8)
    return layout.zero_sign_bits() \
        .concat(layout.one_exponent_bits()) \
        .concat(quiet_flag) \
        .concat(payload) \
        .concat(BitField.from_unsigned(1, 1, 8))


def make_binary_special(layout: FloatLayout, value: SpecialValue) -> BitField:
    kind = value.kind
    if kind == SpecialValueKind.Zero:
        return make_binary_zero(layout, value.positive)
    elif kind == SpecialValueKind.Infinity:
        return make_binary_infinity(layout, value.positive)
    elif kind == SpecialValueKind.NaN:
        return make_binary_nan(layout, value.signaling, value.payload if value.payload is not None else BitField(0))
    elif kind == SpecialValueKind.SmallestPositiveSubnormal:
        # 0 00000000 00000000000000000000001
        return layout.zero_sign_bits() \
            .concat(layout.zero_exponent_bits()) \
            .concat(BitField.from_unsigned(1, layout.mantissa, 8))
    elif kind == SpecialValueKind.LargestSubnormal:
        # 0 00000000 11111111111111111111111
        return layout.zero_sign_bits() \
            .concat(layout.zero_exponent_bits()) \
            .concat(layout.one_mantissa_bits())
    elif kind == SpecialValueKind.SmallestPositiveNormal:
        # 0 00000001 00000000000000000000000
        return layout.zero_sign_bits() \
            .concat(BitField.from_unsigned(1, layout.exponent, 8)) \
            .concat(layout.zero_mantissa_bits())
    elif kind == SpecialValueKind.LargestNormal:
        # 0 11111110 11111111111111111111111
        return layout.zero_sign_bits() \
            .concat(BitField.all_ones(layout.exponent - 1)) \
            .concat(BitField.all_zeros(1)) \
            .concat(layout.one_mantissa_bits())
    elif kind == SpecialValueKind.LargestLessThanOne:
        # 0 01111110 11111111111111111111111
        return layout.zero_sign_bits() \
            .concat(BitField.all_zeros(1)) \
            .concat(BitField.all_ones(layout.exponent - 2)) \
            .concat(BitField.all_zeros(1)) \
            .concat(layout.one_mantissa_bits())
    elif kind == SpecialValueKind.One:
        # 0 01111111 00000000000000000000000
        return layout.zero_sign_bits() \
            .concat(BitField.all_zeros(1)) \
            .concat(BitField.all_ones(layout.exponent - 1)) \
            .concat(layout.zero_mantissa_bits())
    elif kind == SpecialValueKind.SmallestLargerThanOne:
        # 0 01111111 00000000000000000000001
        return layout.zero_sign_bits() \
            .concat(BitField.all_zeros(1)) \
            .concat(BitField.all_ones(layout.exponent - 1)) \
            .concat(BitField.from_unsigned(1, layout.mantissa, 8))
    else:
        raise NotImplementedError(kind)


def is_binary_positive_zero(binary: BitField, layout: FloatLayout) -> bool:
    # 0 00000000 00000000000000000000000
    return binary.all_bits_are(False)


def is_binary_negative_zero(binary: BitField, layout: FloatLayout) -> bool:
    # 1 00000000 00000000000000000000000
    if layout.is_unsigned:
        return False
    return binary.all_bits_in_range_are(0, layout.exponent_end_bit + 1, False) \
        and binary.get_bit(layout.sign_bit_unchecked)


def is_binary_zero(binary: BitField, layout: FloatLayout) -> bool:
    return is_binary_positive_zero(binary, layout) or is_binary_negative_zero(binary, layout)


def is_binary_positive_infinity(binary: BitField, layout: FloatLayout) -> bool:
    # 0 11111111 00000000000000000000000
    return binary.all_bits_in_range_are(0, layout.mantissa_end_bit + 1, False) \
        and binary.all_bits_in_range_are(layout.exponent_start_bit, layout.exponent_end_bit + 1, True) \
        and not binary.get_bit(layout.sign_bit_unchecked)


def is_binary_negative_infinity(binary: BitField, layout: FloatLayout) -> bool:
    # 1 11111111 00000000000000000000000
    if layout.is_unsigned:
        return False
    return binary.all_bits_in_range_are(0, layout.mantissa_end_bit + 1, False) \
        and binary.all_bits_in_range_are(layout.exponent_start_bit, layout.end_bit + 1, True)


def is_binary_infinity(binary: BitField, layout: FloatLayout) -> bool:
    return is_binary_positive_infinity(binary, layout) or is_binary_negative_infinity(binary, layout)


def _get_nan_payload(binary: BitField, layout: FloatLayout, quiet: bool) -> Optional[BitField]:
    # x 11111111 Qxxxxxxxxxxxxxxxxxxxxxx, mantissa != 0
    if not binary.all_bits_in_range_are(layout.exponent_start_bit, layout.exponent_end_bit + 1, True):
        return None
    if binary.all_bits_in_range_are(0, layout.mantissa_end_bit + 1, False):
        return None  # infinity
    if binary.get_bit(layout.mantissa_end_bit) != quiet:
        return None
    return binary.get_sub(1, layout.mantissa_end_bit)


def get_quiet_nan_payload(binary: BitField, layout: FloatLayout) -> Optional[BitField]:
    """
    The payload of a quiet NaN, or None if `binary` is not a quiet NaN.
    """
    return _get_nan_payload(binary, layout, True)


def get_signaling_nan_payload(binary: BitField, layout: FloatLayout) -> Optional[BitField]:
    """
    The payload of a signaling NaN, or None if `binary` is not a signaling NaN.
    """
    return _get_nan_payload(binary, layout, False)


def is_binary_nan(binary: BitField, layout: FloatLayout) -> bool:
    return get_quiet_nan_payload(binary, layout) is not None or get_signaling_nan_payload(binary, layout) is not None


def classify(binary: BitField, layout: FloatLayout) -> Optional[SpecialValue]:
    """
    Matches `binary` against the landmark values of `layout`; returns the first match or None.

    Zero and infinity are checked before the magnitude landmarks, several of which share their mantissa or exponent patterns.
    """
    if is_binary_negative_zero(binary, layout):
        return SpecialValue.zero(positive=False)

    if is_binary_positive_zero(binary, layout):
        return SpecialValue.zero(positive=True)

    if is_binary_negative_infinity(binary, layout):
        return SpecialValue.infinity(positive=False)

    if is_binary_positive_infinity(binary, layout):
        return SpecialValue.infinity(positive=True)

    payload = get_quiet_nan_payload(binary, layout)
    if payload is not None:
        return SpecialValue.nan(signaling=False, payload=payload)

    payload = get_signaling_nan_payload(binary, layout)
    if payload is not None:
        return SpecialValue.nan(signaling=True, payload=payload)

    mantissa_stop = layout.mantissa_end_bit + 1
    exponent_start, exponent_end = layout.exponent_start_bit, layout.exponent_end_bit

    # 0 00000000 00000000000000000000001
    if binary.get_bit(0) and binary.all_bits_in_range_are(1, None, False):
        return SpecialValue.smallest_positive_subnormal()

    # 0 00000000 11111111111111111111111
    if binary.all_bits_in_range_are(0, mantissa_stop, True) \
            and binary.all_bits_in_range_are(exponent_start, None, False):
        return SpecialValue.largest_subnormal()

    # 0 00000001 00000000000000000000000
    if binary.all_bits_in_range_are(0, mantissa_stop, False) \
            and binary.get_bit(exponent_start) \
            and binary.all_bits_in_range_are(exponent_start + 1, None, False):
        return SpecialValue.smallest_positive_normal()

    # 0 11111110 11111111111111111111111
    if binary.all_bits_in_range_are(0, mantissa_stop, True) \
            and not binary.get_bit(exponent_start) \
            and binary.all_bits_in_range_are(exponent_start + 1, exponent_end + 1, True) \
            and not binary.get_bit(layout.sign_bit_unchecked):
        return SpecialValue.largest_normal()

    # 0 01111110 11111111111111111111111
    if binary.all_bits_in_range_are(0, mantissa_stop, True) \
            and not binary.get_bit(exponent_start) \
            and binary.all_bits_in_range_are(exponent_start + 1, exponent_end, True) \
            and binary.all_bits_in_range_are(exponent_end, None, False):
        return SpecialValue.largest_less_than_one()

    # 0 01111111 00000000000000000000000
    if binary.all_bits_in_range_are(0, mantissa_stop, False) \
            and binary.all_bits_in_range_are(exponent_start, exponent_end, True) \
            and binary.all_bits_in_range_are(exponent_end, None, False):
        return SpecialValue.one()

    # 0 01111111 00000000000000000000001
    if binary.get_bit(0) \
            and binary.all_bits_in_range_are(1, mantissa_stop, False) \
            and binary.all_bits_in_range_are(exponent_start, exponent_end, True) \
            and binary.all_bits_in_range_are(exponent_end, None, False):
        return SpecialValue.smallest_larger_than_one()

    return None


__all__ = [
    "SpecialValueKind",
    "SpecialValue",
    "make_binary_zero",
    "make_binary_infinity",
    "make_binary_nan",
    "make_binary_special",
    "is_binary_positive_zero",
    "is_binary_negative_zero",
    "is_binary_zero",
    "is_binary_positive_infinity",
    "is_binary_negative_infinity",
    "is_binary_infinity",
    "get_quiet_nan_payload",
    "get_signaling_nan_payload",
    "is_binary_nan",
    "classify",
]
