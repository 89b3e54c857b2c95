from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar

from serialization_tools.structx import Struct

from vaxdata.errors import NoVaxEquivalentError, ReservedOperandError, VaxDataError, VaxOverflowError

T = TypeVar("T")

SIGN_BIT = 0x80000000
WORD_MASK = 0xFFFFFFFF

# Two big-endian 16-bit words; the low-order word is stored first
VAX_WORD_LAYOUT = Struct(">2H")


@dataclass(frozen=True)
class FloatFormat:
    """
    The field layout of the high-order 32-bit word of a floating point format.
    """
    name: str
    exponent_mask: int
    exponent_size: int
    exponent_bias: int
    mantissa_mask: int
    mantissa_size: int

    @property
    def hidden_bit(self) -> int:
        return 1 << self.mantissa_size

    @property
    def max_exponent(self) -> int:
        return self.exponent_mask >> self.mantissa_size

    def exponent(self, word: int) -> int:
        return (word & self.exponent_mask) >> self.mantissa_size

    def mantissa(self, word: int) -> int:
        return word & self.mantissa_mask


#   VAX:  (-1)^s * 2^(e-bias) * 0.1m
VAX_F = FloatFormat("F_floating", 0x7F800000, 8, 1 << 7, 0x007FFFFF, 23)
VAX_G = FloatFormat("G_floating", 0x7FF00000, 11, 1 << 10, 0x000FFFFF, 20)
#   IEEE: (-1)^s * 2^(e-bias) * 1.m
IEEE_S = FloatFormat("S_floating", 0x7F800000, 8, (1 << 7) - 1, 0x007FFFFF, 23)
IEEE_T = FloatFormat("T_floating", 0x7FF00000, 11, (1 << 10) - 1, 0x000FFFFF, 20)


def exponent_adjustment(vax: FloatFormat, ieee: FloatFormat) -> int:
    # 0.1m -> 1.m moves the binary point one place; the rest is the bias difference
    return 1 + vax.exponent_bias - ieee.exponent_bias


def swap_words(value: int) -> int:
    return (value >> 16) | ((value & 0xFFFF) << 16)


def unpack_vax_word(buffer: bytes) -> int:
    low, high = VAX_WORD_LAYOUT.unpack(buffer)
    return low | (high << 16)


def pack_vax_word(value: int) -> bytes:
    value &= WORD_MASK
    return VAX_WORD_LAYOUT.pack(value & 0xFFFF, value >> 16)


class ConversionStatus(str, Enum):
    Ok = "ok"
    ReservedOperand = "reserved-operand"
    NoEquivalent = "no-equivalent"
    Overflow = "overflow"


@dataclass(frozen=True)
class ConversionResult(Generic[T]):
    """
    The outcome of a single conversion.

    Failed conversions still carry a well defined value (zero for reserved operands, the signed VAX extrema for
    infinities, NaNs and overflows); callers decide whether to treat the status as fatal or as a warning.
    """
    value: T
    status: ConversionStatus = ConversionStatus.Ok
    """ The offending input, kept for error messages. """
    source: Any = field(default=None, compare=False)

    ERRORS: ClassVar[dict] = {
        ConversionStatus.ReservedOperand: ReservedOperandError,
        ConversionStatus.NoEquivalent: NoVaxEquivalentError,
        ConversionStatus.Overflow: VaxOverflowError,
    }

    @property
    def ok(self) -> bool:
        return self.status == ConversionStatus.Ok

    @property
    def error(self) -> Optional[VaxDataError]:
        if self.ok:
            return None
        return self.ERRORS[self.status](self.source)

    def unwrap(self) -> T:
        if not self.ok:
            raise self.error
        return self.value
