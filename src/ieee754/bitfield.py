from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from ieee754.errors import BitFieldCapacityError, BitFieldIndexError, BitFieldParseError


class ResizePolicy(Enum):
    """
    How `BitField.resize` treats the field when its size changes.
    """
    """ Treat the field as an unsigned magnitude; growing shifts up, shrinking drops the low bits. """
    AffectLowBits = "low"
    """ Keep bits in place; growing exposes zeroed high bits, shrinking drops the high bits. """
    AffectHighBits = "high"


_UNSIGNED_WIDTHS = (8, 16, 32, 64, 128)


def _mask(size: int) -> int:
    return (1 << size) - 1


class BitField:
    """
    An ordered, fixed capacity sequence of bits; bit 0 is the least significant.

    Bits live in `BLOCK_COUNT` words of `BLOCK_SIZE` bits. Only the low `size` bits are part of the value,
    anything stored above `size` is ignored by every read.
    """
    MAX_SIZE = 256
    BLOCK_SIZE = 32
    BLOCK_COUNT = MAX_SIZE // BLOCK_SIZE
    _BLOCK_MASK = _mask(BLOCK_SIZE)

    def __init__(self, size: int = 0):
        self._check_size(size)
        self._data: List[int] = [0] * self.BLOCK_COUNT
        self._size = size

    @classmethod
    def _check_size(cls, size: int):
        if not 0 <= size <= cls.MAX_SIZE:
            raise BitFieldCapacityError(size, cls.MAX_SIZE)

    @classmethod
    def _from_unsigned_unchecked(cls, value: int, size: int) -> BitField:
        field = cls(size)
        field._load(value)
        return field

    def _load(self, value: int):
        for i in range(self.BLOCK_COUNT):
            self._data[i] = (value >> (i * self.BLOCK_SIZE)) & self._BLOCK_MASK

    @property
    def size(self) -> int:
        return self._size

    @classmethod
    def all_zeros(cls, size: int) -> BitField:
        return cls(size)

    @classmethod
    def all_ones(cls, size: int) -> BitField:
        cls._check_size(size)
        return cls._from_unsigned_unchecked(_mask(size), size)

    @classmethod
    def from_unsigned(cls, value: int, size: int, width: int = 32) -> BitField:
        """
        Places an unsigned integer of `width` bits (8, 16, 32, 64 or 128) in the low bits of a `size` bit field.

        Bits of `value` at or above `size` are kept in storage but never read.
        """
        if width not in _UNSIGNED_WIDTHS:
            raise ValueError(f"Unsigned width must be one of {_UNSIGNED_WIDTHS}; got {width}!")
        if not 0 <= value <= _mask(width):
            raise BitFieldCapacityError(value.bit_length(), width)
        cls._check_size(size)
        return cls._from_unsigned_unchecked(value, size)

    @classmethod
    def parse(cls, text: str, size: Optional[int] = None) -> BitField:
        """
        Parses MSB-first binary text.

        With an explicit `size` the text is truncated to its low `size` characters, or zero extended.
        """
        size = len(text) if size is None else size
        cls._check_size(size)
        for c in text:
            if c not in "01":
                raise BitFieldParseError(text, c)
        kept = text[len(text) - size:] if size < len(text) else text
        value = int(kept, 2) if kept else 0
        return cls._from_unsigned_unchecked(value, size)

    def to_unsigned(self) -> int:
        value = 0
        for i, word in enumerate(self._data):
            value |= word << (i * self.BLOCK_SIZE)
        return value & _mask(self._size)

    def get_bit(self, pos: int) -> bool:
        if pos < 0:
            raise BitFieldIndexError(pos, self._size)
        if pos >= self._size:
            return False
        block_index, bit_position = divmod(pos, self.BLOCK_SIZE)
        return (self._data[block_index] >> bit_position) & 1 == 1

    def set_bit(self, pos: int, value: bool):
        # Grow the field first (resize / push_low_bit); writes never extend it
        if not 0 <= pos < self._size:
            raise BitFieldIndexError(pos, self._size)
        block_index, bit_position = divmod(pos, self.BLOCK_SIZE)
        if value:
            self._data[block_index] |= 1 << bit_position
        else:
            self._data[block_index] &= ~(1 << bit_position) & self._BLOCK_MASK

    def push_low_bit(self, value: bool):
        grown = self.resize(self._size + 1, ResizePolicy.AffectLowBits)
        grown.set_bit(0, value)
        self._replace(grown)

    def concat(self, low: BitField) -> BitField:
        """
        Returns a new field with `self` in the high bits and `low` in the low bits.
        """
        total_bits = self._size + low.size
        self._check_size(total_bits)
        value = (self.to_unsigned() << low.size) | low.to_unsigned()
        return self._from_unsigned_unchecked(value, total_bits)

    def concat_in_place(self, low: BitField):
        self._replace(self.concat(low))

    def resize(self, new_size: int, policy: ResizePolicy) -> BitField:
        self._check_size(new_size)
        value = self.to_unsigned()
        if policy == ResizePolicy.AffectLowBits:
            if new_size >= self._size:
                value <<= new_size - self._size
            else:
                value >>= self._size - new_size
        elif policy == ResizePolicy.AffectHighBits:
            value &= _mask(new_size)
        else:
            raise NotImplementedError(policy)
        return self._from_unsigned_unchecked(value, new_size)

    def get_sub(self, start: int, stop: Optional[int] = None) -> BitField:
        """
        Extracts bits `start` (inclusive) to `stop` (exclusive); positions past `size` read as zero.
        """
        stop = self._size if stop is None else stop
        if start < 0 or stop < start:
            raise BitFieldIndexError(start if start < 0 else stop, self._size)
        sub_size = stop - start
        self._check_size(sub_size)
        return self._from_unsigned_unchecked((self.to_unsigned() >> start) & _mask(sub_size), sub_size)

    def all_bits_are(self, value: bool) -> bool:
        expected = _mask(self._size) if value else 0
        return self.to_unsigned() == expected

    def all_bits_in_range_are(self, start: int, stop: Optional[int], value: bool) -> bool:
        return self.get_sub(start, stop).all_bits_are(value)

    def copy(self) -> BitField:
        return self._from_unsigned_unchecked(self.to_unsigned(), self._size)

    def _replace(self, other: BitField):
        self._data = list(other._data)
        self._size = other._size

    def __getitem__(self, key: Union[int, slice]) -> Union[bool, BitField]:
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("BitField slices do not support a step!")
            start = 0 if key.start is None else key.start
            return self.get_sub(start, key.stop)
        return self.get_bit(key)

    def __len__(self) -> int:
        return self._size

    def __int__(self) -> int:
        return self.to_unsigned()

    def __eq__(self, other):
        if isinstance(other, BitField):
            return self._size == other._size and self.to_unsigned() == other.to_unsigned()
        return NotImplemented

    __hash__ = None

    def __str__(self) -> str:
        if self._size == 0:
            return ""
        return format(self.to_unsigned(), f"0{self._size}b")

    def __repr__(self) -> str:
        return f"BitField('{self}')"


__all__ = [
    "BitField",
    "ResizePolicy",
]
