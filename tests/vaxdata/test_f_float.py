import math
import struct

import pytest

from vaxdata import ConversionStatus, ieee_s_from_vax_f, pack_f_float, unpack_f_float, unpack_vax_word, vax_f_from_ieee_s
from vaxdata.errors import NoVaxEquivalentError, ReservedOperandError, VaxOverflowError


def single(value: float) -> float:
    return struct.unpack(">f", struct.pack(">f", value))[0]


# Stored (word-swapped) byte order
KNOWN_VALUES = [
    (1.000000, "00004080"),
    (-1.000000, "0000C080"),
    (3.500000, "00004160"),
    (-3.500000, "0000C160"),
    (3.141590, "0FD04149"),
    (-3.141590, "0FD0C149"),
    (9.9999999E+36, "BDC27DF0"),
    (-9.9999999E+36, "BDC2FDF0"),
    (9.9999999E-38, "1CEA0308"),
    (-9.9999999E-38, "1CEA8308"),
    (1.234568, "0653409E"),
    (-1.234568, "0653C09E"),
]


class TestKnownValues:
    @pytest.mark.parametrize(["value", "expected"], KNOWN_VALUES)
    def test_pack(self, value: float, expected: str):
        result = pack_f_float(value)
        assert result.ok
        assert result.value == bytes.fromhex(expected)

    @pytest.mark.parametrize(["expected", "buffer"], KNOWN_VALUES)
    def test_unpack(self, expected: float, buffer: str):
        result = unpack_f_float(bytes.fromhex(buffer))
        assert result.ok
        assert result.value == single(expected)

    def test_bits(self):
        assert ieee_s_from_vax_f(0x40800000).value == 0x3F800000
        assert vax_f_from_ieee_s(0x3F800000).value == 0x40800000
        assert vax_f_from_ieee_s(0xC0600000).value == 0xC1600000


class TestZero:
    @pytest.mark.parametrize(["value"], [(0.0,), (-0.0,)])
    def test_pack_zero(self, value: float):
        result = pack_f_float(value)
        assert result.ok
        assert result.value == b"\x00\x00\x00\x00"

    @pytest.mark.parametrize(
        ["natural"],
        [(0x00000000,), (0x00000001,), (0x00001234,), (0x007FFFFF,)]
    )
    def test_unpack_true_and_dirty_zero(self, natural: int):
        result = ieee_s_from_vax_f(natural)
        assert result.ok
        assert result.value == 0  # +zero, sign bit clear


class TestReservedOperand:
    @pytest.mark.parametrize(
        ["buffer"],
        [(b"\x00\x00\x80\x00",), (b"\x12\x34\x80\x00",), (b"\xFF\xFF\x80\x7F",)]
    )
    def test_unpack(self, buffer: bytes):
        assert unpack_vax_word(buffer) & 0xFF800000 == 0x80000000
        result = unpack_f_float(buffer)
        assert result.status == ConversionStatus.ReservedOperand
        assert result.value == 0.0
        assert math.copysign(1.0, result.value) == 1.0
        assert isinstance(result.error, ReservedOperandError)
        with pytest.raises(ReservedOperandError):
            result.unwrap()


class TestNoEquivalent:
    @pytest.mark.parametrize(
        ["value", "expected"],
        [(math.inf, "00007F80"),
         (-math.inf, "0000FF80")]
    )
    def test_infinity(self, value: float, expected: str):
        result = pack_f_float(value)
        assert result.status == ConversionStatus.NoEquivalent
        assert result.value == bytes.fromhex(expected)
        assert isinstance(result.error, NoVaxEquivalentError)

    def test_nan(self):
        result = pack_f_float(math.nan)
        assert result.status == ConversionStatus.NoEquivalent
        assert unpack_vax_word(result.value) & 0x7FFFFFFF == 0x7F800000

    def test_nan_bits_keep_sign(self):
        result = vax_f_from_ieee_s(0xFFC00001)
        assert result.status == ConversionStatus.NoEquivalent
        assert result.value == 0xFF800000


class TestOverflow:
    @pytest.mark.parametrize(
        ["value", "expected"],
        [(2.0 ** 127, "FFFF7FFF"),
         (-2.0 ** 127, "FFFFFFFF"),
         (3.4028234663852886e+38, "FFFF7FFF"),
         (-3.4028234663852886e+38, "FFFFFFFF"),
         # Too large for IEEE single as well
         (1e39, "FFFF7FFF"),
         (-1e300, "FFFFFFFF")]
    )
    def test_overflow(self, value: float, expected: str):
        result = pack_f_float(value)
        assert result.status == ConversionStatus.Overflow
        assert result.value == bytes.fromhex(expected)
        assert isinstance(result.error, VaxOverflowError)

    def test_largest_vax_value(self):
        largest = 2.0 ** 127 - 2.0 ** 103
        result = pack_f_float(largest)
        assert result.ok
        assert result.value == bytes.fromhex("FFFF7FFF")
        assert unpack_f_float(result.value).value == largest


class TestUnderflow:
    @pytest.mark.parametrize(["value"], [(2.0 ** -129,), (-2.0 ** -129,), (1e-45,), (-1e-40,), (2.0 ** -149,)])
    def test_silent_underflow(self, value: float):
        result = pack_f_float(value)
        assert result.ok
        assert result.value == b"\x00\x00\x00\x00"

    def test_smallest_vax_value(self):
        # 2**-128 is an IEEE subnormal, but VAX can hold it normalized
        result = pack_f_float(2.0 ** -128)
        assert result.ok
        assert result.value == bytes.fromhex("00000080")
        assert unpack_f_float(result.value).value == 2.0 ** -128

    @pytest.mark.parametrize(
        ["value"],
        [(2.0 ** -127,), (-2.0 ** -127,), (1.5 * 2.0 ** -128,), (2.0 ** -126 - 2.0 ** -149 * 4,), (2.0 ** -126,)]
    )
    def test_subnormal_round_trip(self, value: float):
        result = pack_f_float(value)
        assert result.ok
        assert unpack_f_float(result.value).value == value


class TestSubnormalDecode:
    @pytest.mark.parametrize(
        ["buffer", "expected"],
        [  # e=2, shifted right once; the low mantissa bit is chopped
            ("00010100", 2.0 ** -127),
            # e=1, shifted right twice; both low bits chopped (rounding would give 2**-128 + 2**-149)
            ("00030080", 2.0 ** -128),
            ("00038080", -2.0 ** -128),
            # e=1, a set mantissa bit that survives the shift
            ("00040080", 2.0 ** -128 + 2.0 ** -149)]
    )
    def test_chopped(self, buffer: str, expected: float):
        result = unpack_f_float(bytes.fromhex(buffer))
        assert result.ok
        assert result.value == expected

    def test_near_smallest_normal(self):
        assert unpack_f_float(bytes.fromhex("1CEA0308")).value == single(9.9999999E-38)


@pytest.mark.parametrize(
    ["value"],
    [(1.0,), (-2.5,), (1e-20,), (-6.02214076e23,), (1.17549435e-38,), (1.7e38,), (single(0.1),)]
)
def test_round_trip(value: float):
    value = single(value)
    packed = pack_f_float(value)
    assert packed.ok
    assert unpack_f_float(packed.value).value == value
