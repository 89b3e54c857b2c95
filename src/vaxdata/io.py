from __future__ import annotations

import logging
from typing import BinaryIO, Callable, ClassVar, Iterable, Iterator, List

from vaxdata._core import ConversionResult
from vaxdata.errors import ShortReadError
from vaxdata.f_float import F_FLOAT_SIZE, pack_f_float, unpack_f_float
from vaxdata.g_float import G_FLOAT_SIZE, pack_g_float, unpack_g_float

logger = logging.getLogger(__name__)


class VaxFloatReader:
    """
    Reads VAX floating point units from a binary stream, one fixed-size unit at a time.
    """
    UNIT_SIZE: ClassVar[int]
    UNPACK: ClassVar[Callable[[bytes], ConversionResult[float]]]

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        """ The number of units read so far that did not convert cleanly. """
        self.errors = 0

    def read(self) -> ConversionResult[float]:
        buffer = self.stream.read(self.UNIT_SIZE)
        if len(buffer) == 0:
            raise EOFError
        elif len(buffer) != self.UNIT_SIZE:
            raise ShortReadError(len(buffer), self.UNIT_SIZE)

        result = self.UNPACK(buffer)
        if not result.ok:
            self.errors += 1
        return result

    def __iter__(self) -> Iterator[ConversionResult[float]]:
        while True:
            try:
                result = self.read()
            except ShortReadError:
                raise
            except EOFError:
                return
            yield result

    def read_all(self, strict: bool = True) -> List[float]:
        values = []
        for i, result in enumerate(self):
            if not result.ok:
                if strict:
                    raise result.error
                logger.warning("Unit %d: %s; using %r", i, result.error, result.value)
            values.append(result.value)
        return values


class FFloatReader(VaxFloatReader):
    UNIT_SIZE = F_FLOAT_SIZE
    UNPACK = staticmethod(unpack_f_float)


class GFloatReader(VaxFloatReader):
    UNIT_SIZE = G_FLOAT_SIZE
    UNPACK = staticmethod(unpack_g_float)


def _write_result(stream: BinaryIO, result: ConversionResult[bytes], strict: bool) -> int:
    if not result.ok:
        if strict:
            raise result.error  # nothing has been written
        logger.warning("%s; writing `%s`", result.error, result.value.hex(" ").upper())
    return stream.write(result.value)


def write_f_float(stream: BinaryIO, value: float, strict: bool = True) -> int:
    return _write_result(stream, pack_f_float(value), strict)


def write_g_float(stream: BinaryIO, value: float, strict: bool = True) -> int:
    return _write_result(stream, pack_g_float(value), strict)


def write_f_floats(stream: BinaryIO, values: Iterable[float], strict: bool = True) -> int:
    return sum(write_f_float(stream, value, strict) for value in values)


def write_g_floats(stream: BinaryIO, values: Iterable[float], strict: bool = True) -> int:
    return sum(write_g_float(stream, value, strict) for value in values)


__all__ = [
    "VaxFloatReader",
    "FFloatReader",
    "GFloatReader",
    "write_f_float",
    "write_g_float",
    "write_f_floats",
    "write_g_floats",
]
