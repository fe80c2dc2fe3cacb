from os import environ

from ieee754.errors import PrecisionError
from ieee754.layout import FloatLayout, PredefinedLayout, get_predefined_layout

PRECISION_ENV_VAR = "IEEE754_PRECISION"
LAYOUT_ENV_VAR = "IEEE754_LAYOUT"

# Fractional decimal digits kept when decoding
DEFAULT_PRECISION = 20
MAX_PRECISION = 255
DEFAULT_LAYOUT = PredefinedLayout.Float32


def get_default_precision() -> int:
    raw = environ.get(PRECISION_ENV_VAR)
    if raw is None or raw.strip() == "":
        return DEFAULT_PRECISION
    try:
        return int(raw)
    except ValueError as e:
        raise PrecisionError(raw, MAX_PRECISION) from e


def get_default_layout() -> FloatLayout:
    raw = environ.get(LAYOUT_ENV_VAR)
    if raw is None or raw.strip() == "":
        return DEFAULT_LAYOUT.layout
    return get_predefined_layout(raw)


if __name__ == "__main__":
    print("Precision:\t", get_default_precision())
    print("Layout:\t", get_default_layout())
