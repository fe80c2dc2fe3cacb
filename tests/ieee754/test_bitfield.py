import pytest

from ieee754.bitfield import BitField, ResizePolicy
from ieee754.errors import BitFieldCapacityError, BitFieldIndexError, BitFieldParseError

_SAMPLE = "001111011001"


def test_parse_bit_order():
    field = BitField.parse(_SAMPLE)
    assert field.size == 12
    expected = [True, False, False, True, True, False, True, True, True, True, False, False]
    assert [field.get_bit(i) for i in range(12)] == expected


def test_parse_truncates_to_low_chars():
    field = BitField.parse(_SAMPLE, 4)
    assert field.size == 4
    assert str(field) == "1001"


def test_parse_zero_extends():
    field = BitField.parse("101111", 10)
    assert field.size == 10
    expected = [True, True, True, True, False, True, False, False, False, False]
    assert [field.get_bit(i) for i in range(10)] == expected
    assert str(field) == "0000101111"


@pytest.mark.parametrize("text", ["0120", "1 0", "0b1", "x"])
def test_parse_rejects_non_binary(text: str):
    with pytest.raises(BitFieldParseError):
        BitField.parse(text)


def test_parse_empty():
    field = BitField.parse("")
    assert field.size == 0
    assert str(field) == ""
    assert field.to_unsigned() == 0


@pytest.mark.parametrize(["size", "valid"], [(0, True), (1, True), (256, True), (257, False), (-1, False)])
def test_capacity(size: int, valid: bool):
    if valid:
        assert BitField(size).size == size
    else:
        with pytest.raises(BitFieldCapacityError):
            BitField(size)


def test_capacity_error_is_value_error():
    with pytest.raises(ValueError):
        BitField.all_ones(300)


def test_concat_builds_float32_one():
    sign = BitField(1)
    exponent = BitField.all_ones(8)
    exponent.set_bit(7, False)
    mantissa = BitField(23)
    assert str(sign.concat(exponent).concat(mantissa)) == "00111111100000000000000000000000"


def test_concat_with_empty_field():
    field = BitField.parse("1011")
    assert field.concat(BitField(0)) == field
    assert BitField(0).concat(field) == field
    assert BitField(0).concat(BitField(0)).size == 0


def test_concat_in_place():
    field = BitField.parse("10")
    field.concat_in_place(BitField.parse("011"))
    assert str(field) == "10011"
    assert field.size == 5


def test_concat_over_capacity():
    with pytest.raises(BitFieldCapacityError):
        BitField.all_ones(200).concat(BitField.all_ones(57))


@pytest.mark.parametrize(
    ["size", "policy", "expected"],
    [(5, ResizePolicy.AffectLowBits, "00111"),
     (5, ResizePolicy.AffectHighBits, "11001"),
     (21, ResizePolicy.AffectLowBits, "001111011001000000000"),
     (15, ResizePolicy.AffectHighBits, "000001111011001"),
     (12, ResizePolicy.AffectLowBits, _SAMPLE),
     (0, ResizePolicy.AffectHighBits, "")]
)
def test_resize(size: int, policy: ResizePolicy, expected: str):
    original = BitField.parse(_SAMPLE)
    resized = original.resize(size, policy)
    assert resized.size == size
    assert str(resized) == expected
    assert str(original) == _SAMPLE


def test_get_sub():
    assert str(BitField.parse(_SAMPLE).get_sub(2, 7)) == "10110"


def test_get_sub_past_size_reads_zero():
    sub = BitField.parse("11").get_sub(1, 5)
    assert sub.size == 4
    assert str(sub) == "0001"


def test_get_sub_bad_range():
    field = BitField.parse(_SAMPLE)
    with pytest.raises(BitFieldIndexError):
        field.get_sub(5, 2)
    with pytest.raises(BitFieldIndexError):
        field.get_sub(-1, 2)


def test_slicing():
    field = BitField.parse(_SAMPLE)
    assert str(field[2:7]) == "10110"
    assert field[0] is True
    assert field[1] is False


def test_get_bit_past_size():
    field = BitField.all_ones(4)
    assert not field.get_bit(4)
    assert not field.get_bit(255)
    with pytest.raises(BitFieldIndexError):
        field.get_bit(-1)


def test_set_bit():
    field = BitField(40)
    field.set_bit(35, True)
    assert field.get_bit(35)
    assert field.to_unsigned() == 1 << 35
    field.set_bit(35, False)
    assert field.all_bits_are(False)


@pytest.mark.parametrize("pos", [-1, 8, 300])
def test_set_bit_out_of_range(pos: int):
    with pytest.raises(BitFieldIndexError):
        BitField(8).set_bit(pos, True)


def test_push_low_bit():
    field = BitField(0)
    for digit in [True, False, True, True]:
        field.push_low_bit(digit)
    assert field.size == 4
    assert str(field) == "1011"


def test_all_bits_are():
    assert BitField.all_ones(33).all_bits_are(True)
    assert not BitField.all_ones(33).all_bits_are(False)
    assert BitField.all_zeros(33).all_bits_are(False)
    # An empty field is vacuously all ones and all zeros
    assert BitField(0).all_bits_are(True)
    assert BitField(0).all_bits_are(False)


def test_all_bits_in_range_are():
    field = BitField.parse("1110001")
    assert field.all_bits_in_range_are(1, 4, False)
    assert field.all_bits_in_range_are(4, None, True)
    assert not field.all_bits_in_range_are(0, 4, False)


def test_from_unsigned():
    field = BitField.from_unsigned(5, 8, 8)
    assert str(field) == "00000101"
    # Bits above size are stored but never read
    field = BitField.from_unsigned(0xFF, 4, 8)
    assert str(field) == "1111"
    assert field.to_unsigned() == 15


def test_from_unsigned_width():
    with pytest.raises(BitFieldCapacityError):
        BitField.from_unsigned(256, 8, 8)
    with pytest.raises(ValueError):
        BitField.from_unsigned(1, 8, 12)
    assert BitField.from_unsigned(2 ** 100, 128, 128).get_bit(100)


def test_full_capacity():
    field = BitField.all_ones(256)
    assert field.to_unsigned() == 2 ** 256 - 1
    assert str(field) == "1" * 256
    assert field.resize(255, ResizePolicy.AffectLowBits).all_bits_are(True)


def test_copy_is_independent():
    field = BitField.parse("0000")
    other = field.copy()
    other.set_bit(0, True)
    assert str(field) == "0000"
    assert str(other) == "0001"


def test_equality():
    assert BitField.parse("0101") == BitField.parse("0101")
    assert BitField.parse("0101") != BitField.parse("00101")
    assert BitField.parse("0101") != "0101"
    assert len(BitField.parse("0101")) == 4
    assert int(BitField.parse("0101")) == 5
