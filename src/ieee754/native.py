import string
from typing import BinaryIO, Dict, Tuple

from serialization_tools.structx import Struct

from ieee754.codec import parse_binary
from ieee754.errors import HexParseError, LayoutError, MismatchError
from ieee754.layout import FloatLayout, FLOAT16_LAYOUT, FLOAT32_LAYOUT, FLOAT64_LAYOUT

_UInt64 = Struct("< Q")
_UInt32 = Struct("< L")
_UInt16 = Struct("< H")
_UInt8 = Struct("< B")
_UIntLookup: Dict[int, Struct] = {64: _UInt64, 32: _UInt32, 16: _UInt16, 8: _UInt8}

_Float64 = Struct("< d")
_Float32 = Struct("< f")
_Float16 = Struct("< e")
_NativeLookup: Dict[FloatLayout, Tuple[Struct, Struct]] = {
    FLOAT64_LAYOUT: (_UInt64, _Float64),
    FLOAT32_LAYOUT: (_UInt32, _Float32),
    FLOAT16_LAYOUT: (_UInt16, _Float16),
}


def _hex_digits(layout: FloatLayout) -> int:
    return -(-layout.size // 4)


def binary_to_hex(binary: str, layout: FloatLayout) -> str:
    value = parse_binary(binary, layout).to_unsigned()
    return format(value, f"0{_hex_digits(layout)}X")


def hex_to_binary(text: str, layout: FloatLayout) -> str:
    digits = text.strip()
    if digits[:2].lower() == "0x":
        digits = digits[2:]
    if not digits:
        raise HexParseError(text, "no digits")
    for c in digits:
        if c not in string.hexdigits:
            raise HexParseError(text, f"{repr(c)} is not a hex digit")
    value = int(digits, 16)
    if value.bit_length() > layout.size:
        raise HexParseError(text, f"value does not fit in {layout.size} bits")
    return format(value, f"0{layout.size}b")


def _byte_size(layout: FloatLayout) -> int:
    if layout.size % 8 != 0:
        raise LayoutError(f"{layout} is {layout.size} bits wide; only whole bytes can be serialized!")
    return layout.size // 8


def write_binary(stream: BinaryIO, binary: str, layout: FloatLayout) -> int:
    """
    Writes the bit pattern as a little-endian unsigned integer; returns the number of bytes written.
    """
    byte_size = _byte_size(layout)
    value = parse_binary(binary, layout).to_unsigned()
    layout_struct = _UIntLookup.get(layout.size)
    if layout_struct is not None:
        return layout_struct.pack_stream(stream, value)
    return stream.write(value.to_bytes(byte_size, "little"))


def read_binary(stream: BinaryIO, layout: FloatLayout) -> str:
    byte_size = _byte_size(layout)
    layout_struct = _UIntLookup.get(layout.size)
    if layout_struct is not None:
        value = layout_struct.unpack_stream(stream)[0]
    else:
        buffer = stream.read(byte_size)
        if len(buffer) != byte_size:
            raise MismatchError("Buffer Size", len(buffer), byte_size)
        value = int.from_bytes(buffer, "little")
    return format(value, f"0{layout.size}b")


def _native_structs(layout: FloatLayout) -> Tuple[Struct, Struct]:
    structs = _NativeLookup.get(layout)
    if structs is None:
        raise LayoutError(f"{layout} has no native float format; only float16, float32 and float64 do!")
    return structs


def binary_to_float(binary: str, layout: FloatLayout) -> float:
    uint_struct, float_struct = _native_structs(layout)
    buffer = uint_struct.pack(parse_binary(binary, layout).to_unsigned())
    return float_struct.unpack(buffer)[0]


def float_to_binary(value: float, layout: FloatLayout) -> str:
    uint_struct, float_struct = _native_structs(layout)
    bits = uint_struct.unpack(float_struct.pack(value))[0]
    return format(bits, f"0{layout.size}b")


__all__ = [
    "binary_to_hex",
    "hex_to_binary",
    "write_binary",
    "read_binary",
    "binary_to_float",
    "float_to_binary",
]
