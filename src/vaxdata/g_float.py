"""
VAX G_floating <-> IEEE T_floating (double precision).

Same rules as F_floating <-> S_floating; the 52-bit mantissa is split 20/32 across two 32-bit halves, so subnormal
shifts carry bits between the halves.
"""
from __future__ import annotations

from typing import Tuple

from serialization_tools.structx import Struct

from vaxdata._core import ConversionResult, ConversionStatus, IEEE_T, SIGN_BIT, VAX_G, WORD_MASK, exponent_adjustment, pack_vax_word, unpack_vax_word

# (high, low) 32-bit halves; high holds the sign, exponent and top 20 mantissa bits
WordPair = Tuple[int, int]

# The low-order half is stored first; each half is word-swapped on its own
G_FLOAT_LAYOUT = Struct(">4s4s")
G_FLOAT_SIZE = G_FLOAT_LAYOUT.size

_EXPONENT_ADJUSTMENT = exponent_adjustment(VAX_G, IEEE_T)
# Both mantissas are 52 bits; the exponent can be adjusted in place
_IN_PLACE_EXPONENT_ADJUSTMENT = _EXPONENT_ADJUSTMENT << IEEE_T.mantissa_size

_T_FLOAT_LAYOUT = Struct(">d")
_UINT32_PAIR_LAYOUT = Struct(">2I")


def _shift_right_pair(high: int, low: int, count: int) -> WordPair:
    # Stops early once every bit has been chopped, so at most 53 iterations
    while count > 0 and (high or low):
        low = (low >> 1) | ((high & 1) << 31)
        high >>= 1
        count -= 1
    return high, low


def _shift_left_pair(high: int, low: int) -> WordPair:
    return (high << 1) | (low >> 31), (low << 1) & WORD_MASK


def ieee_t_from_vax_g(high: int, low: int) -> ConversionResult[WordPair]:
    """
    Converts an (unswapped) VAX G_floating pattern to an IEEE T_floating bit pattern.

    A reserved operand is reported with a value of +zero, the same as F_floating.
    """
    biased = VAX_G.exponent(high)
    if biased == 0:
        if high & SIGN_BIT:
            return ConversionResult((0, 0), ConversionStatus.ReservedOperand, (high, low))
        return ConversionResult((0, 0))

    exponent = biased - _EXPONENT_ADJUSTMENT
    if exponent > 0:
        return ConversionResult((high - _IN_PLACE_EXPONENT_ADJUSTMENT, low))

    # Subnormal; shift right by n = 1 - e, exposing the hidden bit
    mantissa = VAX_G.hidden_bit | VAX_G.mantissa(high)
    mantissa, low = _shift_right_pair(mantissa, low, 1 - exponent)
    return ConversionResult(((high & SIGN_BIT) | mantissa, low))


def vax_g_from_ieee_t(high: int, low: int) -> ConversionResult[WordPair]:
    """
    Converts an IEEE T_floating bit pattern to an (unswapped) VAX G_floating pattern.
    """
    sign = high & SIGN_BIT
    if ((high & ~SIGN_BIT) | low) == 0:
        return ConversionResult((0, 0))

    exponent = IEEE_T.exponent(high)
    if exponent == IEEE_T.max_exponent:
        return ConversionResult((sign | VAX_G.exponent_mask, 0), ConversionStatus.NoEquivalent, (high, low))

    mantissa = IEEE_T.mantissa(high)
    if exponent == 0:
        # Subnormal; move from 2**(1-bias) * 0.m to 2**(e-bias) * 1.m
        mantissa, low = _shift_left_pair(mantissa, low)
        while not mantissa & IEEE_T.hidden_bit:
            mantissa, low = _shift_left_pair(mantissa, low)
            exponent -= 1
        mantissa &= IEEE_T.mantissa_mask

    exponent += _EXPONENT_ADJUSTMENT
    if exponent <= 0:
        return ConversionResult((0, 0))  # silent underflow
    elif exponent > 2 * VAX_G.exponent_bias - 1:
        return ConversionResult((sign | (~SIGN_BIT & WORD_MASK), WORD_MASK), ConversionStatus.Overflow, (high, low))
    else:
        return ConversionResult((sign | (exponent << VAX_G.mantissa_size) | mantissa, low))


def unpack_g_float(buffer: bytes) -> ConversionResult[float]:
    low_buffer, high_buffer = G_FLOAT_LAYOUT.unpack(buffer)
    result = ieee_t_from_vax_g(unpack_vax_word(high_buffer), unpack_vax_word(low_buffer))
    value = _T_FLOAT_LAYOUT.unpack(_UINT32_PAIR_LAYOUT.pack(*result.value))[0]
    return ConversionResult(value, result.status, bytes(buffer))


def pack_g_float(value: float) -> ConversionResult[bytes]:
    high, low = _UINT32_PAIR_LAYOUT.unpack(_T_FLOAT_LAYOUT.pack(value))
    result = vax_g_from_ieee_t(high, low)
    vax_high, vax_low = result.value
    return ConversionResult(G_FLOAT_LAYOUT.pack(pack_vax_word(vax_low), pack_vax_word(vax_high)), result.status, value)


__all__ = [
    "G_FLOAT_SIZE",
    "ieee_t_from_vax_g",
    "vax_g_from_ieee_t",
    "unpack_g_float",
    "pack_g_float",
]
