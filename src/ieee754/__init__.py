from ieee754.bitfield import BitField, ResizePolicy
from ieee754.codec import DecodedFloat, encode, decode, decode_ext, decimal_to_binary, binary_to_decimal, binary_to_decimal_ext
from ieee754.errors import *
from ieee754.layout import *
from ieee754.native import binary_to_hex, hex_to_binary, write_binary, read_binary, binary_to_float, float_to_binary
from ieee754.special import SpecialValue, SpecialValueKind, classify, make_binary_special

__version__ = "0.1.0"
