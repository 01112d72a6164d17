"""
Drapeau value kinds and the value decoder.

Every flag carries one Kind out of a closed set: a boolean, four signed and
four unsigned integer widths, and a string. A single generic decode(kind, token)
turns a raw command-line token into a value of that kind.

Decoding rules
- BOOL: presence is the value; decode() always answers True (there is no
  "false" spelling on the command line).
- integers: an optional sign followed by a C-style literal
    0x1F / 0X1f → hexadecimal
    017         → octal (a leading zero)
    42          → decimal
  The whole token must be consumed and the value must fit the kind's
  [lower, upper] range.
- STR: the raw token, untouched.

decode() is pure: failures are answered with the Unset sentinel, never with
an exception, and nothing is remembered between calls.
"""
import re
from enum import Enum

from .utils import Unset

_INTEGER = re.compile(r"(?P<sign>[+-]?)(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))")


class Kind(Enum):
    """
    closed set of flag value kinds.

    members carry their display label (also the name of the typed shorthand on
    Program, e.g. Program.u16) and the inclusive bounds for integer kinds.
    """
    BOOL = ("boolean", None, None)
    I8 = ("i8", -2 ** 7, 2 ** 7 - 1)
    I16 = ("i16", -2 ** 15, 2 ** 15 - 1)
    I32 = ("i32", -2 ** 31, 2 ** 31 - 1)
    I64 = ("i64", -2 ** 63, 2 ** 63 - 1)
    U8 = ("u8", 0, 2 ** 8 - 1)
    U16 = ("u16", 0, 2 ** 16 - 1)
    U32 = ("u32", 0, 2 ** 32 - 1)
    U64 = ("u64", 0, 2 ** 64 - 1)
    STR = ("string", None, None)

    def __init__(self, label, lower, upper):
        self.label = label
        self.lower = lower
        self.upper = upper

    @property
    def integral(self):
        return self.lower is not None

    @property
    def zero(self):
        """default value used when a declaration does not provide one."""
        if self is Kind.BOOL:
            return False
        if self is Kind.STR:
            return None
        return 0

    def accepts(self, value, /):
        """
        tell whether a Python value may live in a cell of this kind.

        bool is rejected for integer kinds even though it subclasses int.
        """
        match self:
            case Kind.BOOL:
                return isinstance(value, bool)
            case Kind.STR:
                return value is None or isinstance(value, str)
        return isinstance(value, int) and not isinstance(value, bool) and self.lower <= value <= self.upper

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


def parse_integer(token, /):
    """
    parse a C-style integer literal, answering Unset when the token is not one.

    no range check happens here; see decode().
    literals too long to convert are answered with Unset as well.
    """
    if not (match := _INTEGER.fullmatch(token)):
        return Unset

    try:
        if match["hex"] is not None:
            value = int(match["hex"], 16)
        elif match["oct"] is not None:
            value = int(match["oct"], 8)
        else:
            value = int(match["dec"], 10)
    except ValueError:
        # Decimal literals past the interpreter digit limit fit no kind.
        return Unset

    return -value if match["sign"] == "-" else value


def decode(kind, token, /):
    """
    decode a raw token into a value of the given kind.

    returns
    - the decoded value on success.
    - Unset when the token is malformed or out of the kind's range.
    """
    if not isinstance(kind, Kind):
        raise TypeError("decode() first argument must be a Kind")
    if not isinstance(token, str):
        raise TypeError("decode() second argument must be a string")

    match kind:
        case Kind.BOOL:
            return True
        case Kind.STR:
            return token

    if (value := parse_integer(token)) is Unset:
        return Unset
    if not kind.lower <= value <= kind.upper:
        return Unset
    return value


__all__ = (
    "Kind",
    "parse_integer",
    "decode",
)
