from typing import Any


def _print_mismatch(name: str, received, expected):
    msg = f"Unexpected {name}"
    if received or expected:
        msg += ";"
    if received:
        msg += f" got `{str(received)}`"
    if received and expected:
        msg += ","
    if expected:
        msg += f" expected `{str(expected)}`"
    return msg + "!"


def _print_source(source: Any) -> str:
    if isinstance(source, (bytes, bytearray)):
        return source.hex(" ").upper()
    elif isinstance(source, int):
        return f"0x{source:08X}"
    elif isinstance(source, tuple):
        return " ".join(_print_source(part) for part in source)
    else:
        return repr(source)


class VaxDataError(Exception):
    """ Base class for every conversion condition reported by this package. """

    def __init__(self, source: Any = None, *args):
        super().__init__(*args)
        self.source = source

    def _message(self) -> str:
        raise NotImplementedError

    def __str__(self):
        msg = self._message()
        if self.source is None:
            return msg + "!"
        else:
            return msg + f"; got `{_print_source(self.source)}`!"


class ReservedOperandError(VaxDataError):
    def _message(self) -> str:
        return "VAX reserved operand fault"


class NoVaxEquivalentError(VaxDataError):
    def _message(self) -> str:
        return "No VAX equivalent for IEEE +-Infinity and +-NaN"


class VaxOverflowError(VaxDataError, OverflowError):
    def _message(self) -> str:
        return "IEEE value too large for VAX format"


class MismatchError(Exception):
    def __init__(self, name: str, received: Any = None, expected: Any = None):
        self.name = name
        self.received = received
        self.expected = expected

    def __str__(self):
        return _print_mismatch(self.name, self.received, self.expected)


class ShortReadError(MismatchError, EOFError):
    def __init__(self, received: int = None, expected: int = None):
        super().__init__("Read Size", received, expected)


__all__ = [
    "VaxDataError",
    "ReservedOperandError",
    "NoVaxEquivalentError",
    "VaxOverflowError",
    "MismatchError",
    "ShortReadError",
]
