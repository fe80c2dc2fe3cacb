from typing import Any, Optional


class IEEE754Error(Exception):
    pass


class MismatchError(IEEE754Error):
    def __init__(self, name: str, received: Any = None, expected: Any = None, *args):
        super().__init__(*args)
        self.name = name
        self.received = received
        self.expected = expected

    def __str__(self):
        msg = f"Unexpected {self.name}"
        if self.received is None and self.expected is None:
            return msg + "!"
        elif self.received is None:
            return msg + f"; expected {repr(self.expected)}!"
        elif self.expected is None:
            return msg + f"; got {repr(self.received)}!"
        else:
            return msg + f"; got {repr(self.received)}, expected {repr(self.expected)}!"


class BitFieldError(IEEE754Error):
    pass


class BitFieldCapacityError(BitFieldError, ValueError):
    def __init__(self, size: int = None, capacity: int = None, *args):
        super().__init__(*args)
        self.size = size
        self.capacity = capacity

    def __str__(self):
        msg = f"BitField size must be between 0 and {self.capacity} bits"
        if self.size is None:
            return msg + "!"
        else:
            return msg + f"; got {self.size}!"


class BitFieldIndexError(BitFieldError, IndexError):
    def __init__(self, position: int = None, size: int = None, *args):
        super().__init__(*args)
        self.position = position
        self.size = size

    def __str__(self):
        return f"Bit position {self.position} is out of range for a {self.size}-bit field!"


class BitFieldParseError(BitFieldError, ValueError):
    def __init__(self, text: str = None, char: str = None, *args):
        super().__init__(*args)
        self.text = text
        self.char = char

    def __str__(self):
        msg = "Binary text may only contain '0' and '1'"
        if self.char is None:
            return msg + "!"
        else:
            return msg + f"; got {repr(self.char)} in {repr(self.text)}!"


class BinaryLengthMismatchError(MismatchError, ValueError):
    def __init__(self, received: int = None, expected: int = None):
        super().__init__("Binary Length", received, expected)


class LayoutError(IEEE754Error, ValueError):
    pass


class LayoutNotFoundError(LayoutError):
    def __init__(self, name: Any = None, supported: Optional[list] = None, *args):
        super().__init__(*args)
        self.name = name
        self.supported = supported

    def __str__(self):
        msg = f"Layout `{self.name}` is not a predefined layout"
        if not self.supported:
            return msg + "!"
        else:
            return msg + f". Layouts supported: `{self.supported}`"


class DecimalParseError(IEEE754Error, ValueError):
    def __init__(self, text: str = None, *args):
        super().__init__(*args)
        self.text = text

    def __str__(self):
        return f"Could not parse {repr(self.text)} as a decimal number!"


class HexParseError(IEEE754Error, ValueError):
    def __init__(self, text: str = None, reason: str = None, *args):
        super().__init__(*args)
        self.text = text
        self.reason = reason

    def __str__(self):
        msg = f"Could not parse {repr(self.text)} as hexadecimal"
        if not self.reason:
            return msg + "!"
        else:
            return msg + f"; {self.reason}!"


class PrecisionError(IEEE754Error, ValueError):
    def __init__(self, precision: Any = None, maximum: int = None, *args):
        super().__init__(*args)
        self.precision = precision
        self.maximum = maximum

    def __str__(self):
        return f"Precision must be an integer between 0 and {self.maximum}; got {repr(self.precision)}!"


__all__ = [
    "IEEE754Error",
    "MismatchError",
    "BitFieldError",
    "BitFieldCapacityError",
    "BitFieldIndexError",
    "BitFieldParseError",
    "BinaryLengthMismatchError",
    "LayoutError",
    "LayoutNotFoundError",
    "DecimalParseError",
    "HexParseError",
    "PrecisionError",
]
