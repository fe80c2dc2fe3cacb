from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from ieee754.bitfield import BitField
from ieee754.errors import LayoutError, LayoutNotFoundError


@dataclass(frozen=True)
class FloatLayout:
    """
    The bit layout of a binary floating-point format.

    Fields are ordered sign, exponent, mantissa from the most significant bit down.
    Bit positions count from the least significant bit (0); character positions count from the left of the MSB-first text.
    """
    """ Width of the sign field; 0 for unsigned formats """
    sign: int
    """ Width of the exponent field """
    exponent: int
    """ Width of the mantissa (fraction) field """
    mantissa: int
    """ Subtracted from the stored exponent to get the true exponent """
    exponent_bias: int

    def __post_init__(self):
        if self.sign < 0:
            raise LayoutError(f"Sign width must not be negative; got {self.sign}!")
        # Landmark values need at least two exponent bits, NaNs at least two mantissa bits (quiet flag + trailing 1)
        if self.exponent < 2:
            raise LayoutError(f"Exponent width must be at least 2; got {self.exponent}!")
        if self.mantissa < 2:
            raise LayoutError(f"Mantissa width must be at least 2; got {self.mantissa}!")
        if self.exponent_bias < 1:
            raise LayoutError(f"Exponent bias must be at least 1; got {self.exponent_bias}!")
        if self.size > BitField.MAX_SIZE:
            raise LayoutError(f"Layout is {self.size} bits wide; at most {BitField.MAX_SIZE} bits are supported!")

    def __str__(self) -> str:
        return f"Layout s{self.sign}e{self.exponent}m{self.mantissa} (bias {self.exponent_bias})"

    @property
    def size(self) -> int:
        return self.sign + self.exponent + self.mantissa

    @property
    def sign_size(self) -> int:
        return self.sign

    @property
    def exponent_size(self) -> int:
        return self.exponent

    @property
    def mantissa_size(self) -> int:
        return self.mantissa

    @property
    def is_unsigned(self) -> bool:
        return self.sign == 0

    @property
    def max_exponent(self) -> int:
        """ The stored exponent reserved for infinities and NaNs (all ones). """
        return (1 << self.exponent) - 1

    # Bit positions (LSB = 0, inclusive ends)
    @property
    def start_bit(self) -> int:
        return 0

    @property
    def end_bit(self) -> int:
        return self.size - 1

    @property
    def sign_bit(self) -> Optional[int]:
        return self.sign_bit_unchecked if self.sign > 0 else None

    @property
    def sign_bit_unchecked(self) -> int:
        # Past the end of an unsigned layout, where every read is 0
        return self.mantissa + self.exponent

    @property
    def exponent_start_bit(self) -> int:
        return self.mantissa

    @property
    def exponent_end_bit(self) -> int:
        return self.mantissa + self.exponent - 1

    @property
    def mantissa_start_bit(self) -> int:
        return self.start_bit

    @property
    def mantissa_end_bit(self) -> int:
        return self.mantissa - 1

    # Character positions (MSB-first text, inclusive ends)
    @property
    def start_char(self) -> int:
        return 0

    @property
    def end_char(self) -> int:
        return self.size - 1

    @property
    def sign_char(self) -> Optional[int]:
        return self.start_char if self.sign > 0 else None

    @property
    def exponent_start_char(self) -> int:
        return self.sign

    @property
    def exponent_end_char(self) -> int:
        return self.mantissa_start_char - 1

    @property
    def mantissa_start_char(self) -> int:
        return self.sign + self.exponent

    @property
    def mantissa_end_char(self) -> int:
        return self.end_char

    def zero_sign_bits(self) -> BitField:
        return BitField.all_zeros(self.sign)

    def one_sign_bits(self) -> BitField:
        return BitField.all_ones(self.sign)

    def sign_bits(self, value: int) -> BitField:
        return BitField.from_unsigned(value, self.sign, 8)

    def zero_exponent_bits(self) -> BitField:
        return BitField.all_zeros(self.exponent)

    def one_exponent_bits(self) -> BitField:
        return BitField.all_ones(self.exponent)

    def zero_mantissa_bits(self) -> BitField:
        return BitField.all_zeros(self.mantissa)

    def one_mantissa_bits(self) -> BitField:
        return BitField.all_ones(self.mantissa)


FLOAT16_LAYOUT = FloatLayout(sign=1, exponent=5, mantissa=10, exponent_bias=15)
FLOAT32_LAYOUT = FloatLayout(sign=1, exponent=8, mantissa=23, exponent_bias=127)
FLOAT64_LAYOUT = FloatLayout(sign=1, exponent=11, mantissa=52, exponent_bias=1023)
FLOAT128_LAYOUT = FloatLayout(sign=1, exponent=15, mantissa=112, exponent_bias=16383)
FLOAT256_LAYOUT = FloatLayout(sign=1, exponent=19, mantissa=236, exponent_bias=262143)
FP8_E4M3_LAYOUT = FloatLayout(sign=1, exponent=4, mantissa=3, exponent_bias=7)
FP8_E5M2_LAYOUT = FloatLayout(sign=1, exponent=5, mantissa=2, exponent_bias=15)
BFLOAT16_LAYOUT = FloatLayout(sign=1, exponent=8, mantissa=7, exponent_bias=127)
TENSOR_FLOAT32_LAYOUT = FloatLayout(sign=1, exponent=8, mantissa=10, exponent_bias=127)


class PredefinedLayout(Enum):
    Float16 = FLOAT16_LAYOUT
    Float32 = FLOAT32_LAYOUT
    Float64 = FLOAT64_LAYOUT
    Float128 = FLOAT128_LAYOUT
    Float256 = FLOAT256_LAYOUT
    Fp8E4M3 = FP8_E4M3_LAYOUT
    Fp8E5M2 = FP8_E5M2_LAYOUT
    BFloat16 = BFLOAT16_LAYOUT
    TensorFloat32 = TENSOR_FLOAT32_LAYOUT

    @property
    def layout(self) -> FloatLayout:
        return self.value


_ALIASES: Dict[str, PredefinedLayout] = {
    "half": PredefinedLayout.Float16,
    "fp16": PredefinedLayout.Float16,
    "single": PredefinedLayout.Float32,
    "fp32": PredefinedLayout.Float32,
    "double": PredefinedLayout.Float64,
    "fp64": PredefinedLayout.Float64,
    "quad": PredefinedLayout.Float128,
    "fp128": PredefinedLayout.Float128,
    "octuple": PredefinedLayout.Float256,
    "fp256": PredefinedLayout.Float256,
    "e4m3": PredefinedLayout.Fp8E4M3,
    "fp8": PredefinedLayout.Fp8E4M3,
    "e5m2": PredefinedLayout.Fp8E5M2,
    "bf16": PredefinedLayout.BFloat16,
    "tf32": PredefinedLayout.TensorFloat32,
}
_NAMES: Dict[str, PredefinedLayout] = {layout.name.lower(): layout for layout in PredefinedLayout}


def get_predefined_layout(name: Union[PredefinedLayout, str]) -> FloatLayout:
    if isinstance(name, PredefinedLayout):
        return name.layout
    key = str(name).strip().lower().replace("-", "").replace("_", "")
    predefined = _NAMES.get(key) or _ALIASES.get(key)
    if predefined is None:
        raise LayoutNotFoundError(name, [layout.name for layout in PredefinedLayout])
    return predefined.layout


__all__ = [
    "FloatLayout",
    "PredefinedLayout",
    "get_predefined_layout",
    "FLOAT16_LAYOUT",
    "FLOAT32_LAYOUT",
    "FLOAT64_LAYOUT",
    "FLOAT128_LAYOUT",
    "FLOAT256_LAYOUT",
    "FP8_E4M3_LAYOUT",
    "FP8_E5M2_LAYOUT",
    "BFLOAT16_LAYOUT",
    "TENSOR_FLOAT32_LAYOUT",
]
