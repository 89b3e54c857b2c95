"""
VAX F_floating <-> IEEE S_floating (single precision).

A VAX number is converted to IEEE by subtracting (1 + VAX bias - IEEE bias) from the exponent field; the one extra
bit moves the binary point from VAX's 0.1m form to IEEE's 1.m form. Both mantissas are 23 bits, so normalized values
only need their exponent adjusted. VAX true zero [s=e=m=0] and dirty zero [s=e=0, m<>0] both become IEEE +zero.
A VAX reserved operand [s=1, e=0] is a fault; the converted value is still set to zero.

Values too small for IEEE normalized form become subnormal [e=0, m>0]; bits that fall off the right are chopped,
not rounded. Going the other way, IEEE subnormals are renormalized first, and anything too small for VAX (which has
no subnormals) silently underflows to zero. VAX has no infinities or NaNs, so those (and overflows) are reported and
saturate to the signed VAX extrema.
"""
from __future__ import annotations

import math

from serialization_tools.structx import Struct

from vaxdata._core import ConversionResult, ConversionStatus, IEEE_S, SIGN_BIT, VAX_F, VAX_WORD_LAYOUT, WORD_MASK, exponent_adjustment, pack_vax_word, unpack_vax_word

F_FLOAT_SIZE = VAX_WORD_LAYOUT.size

_EXPONENT_ADJUSTMENT = exponent_adjustment(VAX_F, IEEE_S)
# Both mantissas are 23 bits; the exponent can be adjusted in place
_IN_PLACE_EXPONENT_ADJUSTMENT = _EXPONENT_ADJUSTMENT << IEEE_S.mantissa_size

_S_FLOAT_LAYOUT = Struct(">f")
_UINT32_LAYOUT = Struct(">I")


def ieee_s_from_vax_f(vax: int) -> ConversionResult[int]:
    """
    Converts the (unswapped) 32-bit VAX F_floating pattern to an IEEE S_floating bit pattern.

    :param vax: The VAX pattern, as returned by `unpack_vax_word`.
    :returns: The IEEE bits; a reserved operand is reported with a value of +zero.
    """
    biased = VAX_F.exponent(vax)
    if biased == 0:
        if vax & SIGN_BIT:
            return ConversionResult(0, ConversionStatus.ReservedOperand, vax)
        return ConversionResult(0)

    exponent = biased - _EXPONENT_ADJUSTMENT
    if exponent > 0:
        return ConversionResult(vax - _IN_PLACE_EXPONENT_ADJUSTMENT)

    # Subnormal; the effective biased exponent is 1, so shift right by n where e + n = 1.
    # n >= 1 guarantees the hidden bit becomes visible, giving the 0.m subnormal form.
    mantissa = (VAX_F.hidden_bit | VAX_F.mantissa(vax)) >> (1 - exponent)
    return ConversionResult((vax & SIGN_BIT) | mantissa)


def vax_f_from_ieee_s(ieee: int) -> ConversionResult[int]:
    """
    Converts an IEEE S_floating bit pattern to the (unswapped) 32-bit VAX F_floating pattern.

    :param ieee: The IEEE bits.
    :returns: The VAX pattern; infinities, NaNs and overflows are reported with the signed VAX extrema.
    """
    sign = ieee & SIGN_BIT
    if (ieee & ~SIGN_BIT) == 0:
        return ConversionResult(0)

    exponent = IEEE_S.exponent(ieee)
    if exponent == IEEE_S.max_exponent:
        return ConversionResult(sign | VAX_F.exponent_mask, ConversionStatus.NoEquivalent, ieee)

    mantissa = IEEE_S.mantissa(ieee)
    if exponent == 0:
        # Subnormal; move from 2**(1-bias) * 0.m to 2**(e-bias) * 1.m
        mantissa <<= 1
        while not mantissa & IEEE_S.hidden_bit:
            mantissa <<= 1
            exponent -= 1
        mantissa &= IEEE_S.mantissa_mask

    exponent += _EXPONENT_ADJUSTMENT
    if exponent <= 0:
        return ConversionResult(0)  # silent underflow
    elif exponent > 2 * VAX_F.exponent_bias - 1:
        return ConversionResult(sign | (~SIGN_BIT & WORD_MASK), ConversionStatus.Overflow, ieee)
    else:
        return ConversionResult(sign | (exponent << VAX_F.mantissa_size) | mantissa)


def _float_from_bits(bits: int) -> float:
    return _S_FLOAT_LAYOUT.unpack(_UINT32_LAYOUT.pack(bits))[0]


def _bits_from_float(value: float) -> int:
    return _UINT32_LAYOUT.unpack(_S_FLOAT_LAYOUT.pack(value))[0]


def unpack_f_float(buffer: bytes) -> ConversionResult[float]:
    vax = unpack_vax_word(buffer)
    result = ieee_s_from_vax_f(vax)
    return ConversionResult(_float_from_bits(result.value), result.status, bytes(buffer))


def pack_f_float(value: float) -> ConversionResult[bytes]:
    try:
        ieee = _bits_from_float(value)
    except OverflowError:
        # Finite, but beyond even IEEE single precision
        sign = SIGN_BIT if math.copysign(1.0, value) < 0 else 0
        return ConversionResult(pack_vax_word(sign | (~SIGN_BIT & WORD_MASK)), ConversionStatus.Overflow, value)
    result = vax_f_from_ieee_s(ieee)
    return ConversionResult(pack_vax_word(result.value), result.status, value)


__all__ = [
    "F_FLOAT_SIZE",
    "ieee_s_from_vax_f",
    "vax_f_from_ieee_s",
    "unpack_f_float",
    "pack_f_float",
]
