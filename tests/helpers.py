from ieee754.layout import PredefinedLayout, FLOAT16_LAYOUT, FLOAT32_LAYOUT, FLOAT64_LAYOUT

TF = [True, False]

ALL_LAYOUTS = [predefined.layout for predefined in PredefinedLayout]
ALL_LAYOUT_IDS = [predefined.name for predefined in PredefinedLayout]

# Layouts the struct module can pack natively ('e', 'f', 'd')
NATIVE_LAYOUTS = [FLOAT16_LAYOUT, FLOAT32_LAYOUT, FLOAT64_LAYOUT]
NATIVE_LAYOUT_IDS = ["Float16", "Float32", "Float64"]


def bits(*fields: str) -> str:
    """ Joins sign, exponent and mantissa fields, e.g. bits("0", "01111111", "0" * 23). """
    return "".join(fields)
