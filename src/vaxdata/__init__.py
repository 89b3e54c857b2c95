from vaxdata._core import ConversionResult, ConversionStatus, FloatFormat, IEEE_S, IEEE_T, VAX_F, VAX_G, pack_vax_word, swap_words, unpack_vax_word
from vaxdata.errors import NoVaxEquivalentError, ReservedOperandError, ShortReadError, VaxDataError, VaxOverflowError
from vaxdata.f_float import F_FLOAT_SIZE, ieee_s_from_vax_f, pack_f_float, unpack_f_float, vax_f_from_ieee_s
from vaxdata.g_float import G_FLOAT_SIZE, ieee_t_from_vax_g, pack_g_float, unpack_g_float, vax_g_from_ieee_t
from vaxdata.io import FFloatReader, GFloatReader, write_f_float, write_f_floats, write_g_float, write_g_floats

__version__ = "2016.1.0"

__all__ = [
    "ConversionResult",
    "ConversionStatus",
    "FloatFormat",
    "VAX_F",
    "VAX_G",
    "IEEE_S",
    "IEEE_T",
    "swap_words",
    "unpack_vax_word",
    "pack_vax_word",

    "VaxDataError",
    "ReservedOperandError",
    "NoVaxEquivalentError",
    "VaxOverflowError",
    "ShortReadError",

    "F_FLOAT_SIZE",
    "ieee_s_from_vax_f",
    "vax_f_from_ieee_s",
    "unpack_f_float",
    "pack_f_float",

    "G_FLOAT_SIZE",
    "ieee_t_from_vax_g",
    "vax_g_from_ieee_t",
    "unpack_g_float",
    "pack_g_float",

    # Stream adapters
    "FFloatReader",
    "GFloatReader",
    "write_f_float",
    "write_g_float",
    "write_f_floats",
    "write_g_floats",
]
