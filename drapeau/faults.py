"""
Drapeau faults: the parse error taxonomy, its rendering, and the reporter.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault kind,
  grouped by domain (routing, flags, values, positionals, internal).
- DrapeauError and its subclasses: one class per fault kind. Each carries a
  static summary (the kind → message mapping), a detailed position-first
  message, and options (token, index, hint, suggestions, ...). They render
  themselves through rich (__rich__).
- Reporter: the single outstanding-fault slot of a program. The first fault
  wins; it is cleared only when the program is started again.

Integration
- The registry and parser never print and never exit. They hand faults to a
  Reporter; hosts read Program.error / Program.fault, or call Program.check()
  to raise, or Program.print_error() to render.
- Hosts can remap codes (__codes__), styles (__styles__) and the program label
  (__prog__) from their __main__ module.
"""
import copy
import logging
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType

logger = logging.getLogger(__name__)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x): SUBCOMMAND_NOT_FOUND
    - flags (1111x): FLAG_NOT_FOUND, LONG_FLAG_GIVEN_AS_SHORT, MISSING_VALUE,
      DUPLICATE_FLAG, FLAG_ASSIGNMENT
    - values (1112x): INVALID_NUMBER
    - positionals (1113x): POSITIONAL_ARG_OVERFLOW
    - internal (1119x): INTERNAL_ERROR
    """
    # --- routing ---
    SUBCOMMAND_NOT_FOUND        = 11101

    # --- flags ---
    FLAG_NOT_FOUND              = 11111
    LONG_FLAG_GIVEN_AS_SHORT    = 11112
    MISSING_VALUE               = 11113
    DUPLICATE_FLAG              = 11114
    FLAG_ASSIGNMENT             = 11115

    # --- values ---
    INVALID_NUMBER              = 11121

    # --- positionals ---
    POSITIONAL_ARG_OVERFLOW     = 11131

    # --- internal ---
    INTERNAL_ERROR              = 11191

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__ to
        override numeric ids with friendlier labels; otherwise the numeric
        value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class DrapeauError(Exception):
    """
    base fault: message + options, rendered in a lowercased, actionable way.

    class attributes
    - code: FaultCode of the kind.
    - title: short heading used when rendering.
    - summary: static text of the kind (what Program.error answers).
    """
    code = Unset
    title = "error"
    summary = "unexpected error"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        super().__init__(message if message is not Unset else self.summary)
        self.message = message if message is not Unset else self.summary
        self.options = MappingProxyType(options)

    @property
    def detail(self):
        return self.options.get("detail")

    @property
    def hint(self):
        return self.options.get("hint")

    @property
    def token(self):
        return self.options.get("token")

    @property
    def index(self):
        return self.options.get("index")

    def describe(self):
        """static, kind-level text (with the detail for internal errors)."""
        return self.summary

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.options.get("prog") or "drapeau"), "prog-name")
        header = Text.assemble(
            "[ ",
            prog,
            " | ",
            text(self.code.normalize() if self.code is not Unset else "", "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*parts), title=header, title_align="left")
        return Group(header, *parts)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SubcommandNotFoundError(DrapeauError):
    code = FaultCode.SUBCOMMAND_NOT_FOUND
    title = "unknown subcommand"
    summary = "cannot find an appropriate subcommand"


class FlagNotFoundError(DrapeauError):
    code = FaultCode.FLAG_NOT_FOUND
    title = "unknown flag"
    summary = "cannot find an appropriate flag"


class LongFlagGivenAsShortError(DrapeauError):
    code = FaultCode.LONG_FLAG_GIVEN_AS_SHORT
    title = "malformed short flag"
    summary = "long flag is given as a short flag"


class MissingValueError(DrapeauError):
    code = FaultCode.MISSING_VALUE
    title = "missing value"
    summary = "flag requires a value"


class DuplicateFlagError(DrapeauError):
    code = FaultCode.DUPLICATE_FLAG
    title = "duplicate flag"
    summary = "flag is given more than once"


class FlagAssignmentError(DrapeauError):
    code = FaultCode.FLAG_ASSIGNMENT
    title = "flag cannot take a value"
    summary = "boolean flag cannot take a value"


class InvalidNumberError(DrapeauError):
    code = FaultCode.INVALID_NUMBER
    title = "invalid number"
    summary = "invalid number or overflowed number is given"


class PositionalArgOverflowError(DrapeauError):
    code = FaultCode.POSITIONAL_ARG_OVERFLOW
    title = "unexpected positional"
    summary = "too many positional arguments are given"


class InternalError(DrapeauError):
    code = FaultCode.INTERNAL_ERROR
    title = "internal error"
    summary = "internal error"

    def describe(self):
        if self.detail:
            return f"{self.summary}: {self.detail}"
        return self.summary


class Reporter:
    """
    single outstanding-fault slot.

    contract
    - report() keeps the first fault and ignores later ones (they are logged).
    - reset() is only called when the owning program starts afresh.
    - message answers None when there is no fault, otherwise the static text
      of the fault kind.
    """

    def __init__(self, **options):
        self._fault = None
        self._options = options

    @property
    def fault(self):
        return self._fault

    @property
    def message(self):
        return None if self._fault is None else self._fault.describe()

    def __bool__(self):
        return self._fault is not None

    def report(self, fault, /, **options):
        """
        record a fault (merged with the reporter's rendering options).

        always answers False so callers can `return reporter.report(...)`.
        """
        if not isinstance(fault, DrapeauError):
            raise TypeError("report() argument must be a DrapeauError")
        if self._fault is not None:
            logger.debug("ignoring %s, %s is already outstanding", type(fault).__name__, type(self._fault).__name__)
            return False
        self._fault = copy.replace(fault, **{**self._options, **options})
        logger.info("%s: %s", self._fault.code.name.lower(), self._fault.message)
        return False

    def raise_for_fault(self):
        """raise the outstanding fault, if any."""
        if self._fault is not None:
            raise self._fault

    def reset(self):
        self._fault = None


__all__ = (
    "FaultCode",
    "DrapeauError",
    "SubcommandNotFoundError",
    "FlagNotFoundError",
    "LongFlagGivenAsShortError",
    "MissingValueError",
    "DuplicateFlagError",
    "FlagAssignmentError",
    "InvalidNumberError",
    "PositionalArgOverflowError",
    "InternalError",
    "Reporter",
)
