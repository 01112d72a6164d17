r"""
Drapeau registry entities: flags, positional arguments, scopes and subcommands.

Overview
- Flag: a typed, named value cell matched by "--long" and/or "-s".
- Positional: a string cell filled by the N-th bare token of its scope.
- Scope: the ordered flags and positionals a token may match against. The
  program-wide scope has no name; every Subcommand is a named Scope.
- Subcommand: a Scope that the parser activates at most once per parse.

Value cells
- Declaring returns the entity itself, and the entity *is* the cell: read
  flag.value, positional.value or subcommand.active after parsing. The object
  stays the same until the program is closed, so hosts may keep it around.
- Declared metadata (names, kind, default, description, scope) is exposed
  through read-only properties; only the cells are writable.

Metadata (sanitized on construction)
- descr: Unset | None | str | Text; strings are trimmed and must not be empty.
- long: str, possibly empty; non-empty names must not start with '-' and must
  not contain whitespace or '='.
- short: NO_SHORT (None) or a single character other than '-', '=' or whitespace.
- at least one of long/short is required.
- kind: a drapeau.kinds.Kind member.
- default: must fit the kind (see Kind.accepts); Unset means Kind.zero.
"""
import re

from rich.text import Text

from .kinds import Kind
from .utils import *

NO_SHORT = None
"""marker for a flag without a single-character short name."""

NO_SUBCOMMAND = None
"""marker for the program-wide (global) scope."""


class ArgumentType(type):
    """
    Metaclass giving registry entities read-only metadata and stable reprs.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" backing field.
    - Derive __typename__ from the class name ("Subcommand" → "subcommand"),
      used in declaration error messages.
    - Provide __repr__ and __rich_repr__ built from the introspectable names.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__()),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__displayable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if "__displayable__" not in namespace:
            self.__displayable__ = tuple(
                name for name in self.__introspectable__ if name not in ("flags", "positionals")
            )

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the description shared by every entity.

    - Unset becomes None; None is accepted as "no description".
    - strings are trimmed and must not be empty afterwards; rich Text is kept as-is.
    """
    if not isinstance(descr := metadata["descr"], str | Text | UnsetType | None):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_flag_metadata(cls, metadata, /):
    """
    Internal: validate names, kind and default of a Flag.

    Raises
    - TypeError: wrong types (names, kind, default of the wrong Python type).
    - ValueError: malformed names, no name at all, or an integer default that
      does not fit the kind's width.
    """
    if not isinstance(long := metadata["long"], str):
        raise TypeError(f"{cls.__typename__} long name must be a string")
    if long and not re.fullmatch(r"[^\s=-][^\s=]*", long):
        raise ValueError(f"{cls.__typename__} long name {long!r} must not start with '-' nor contain spaces or '='")

    if (short := metadata["short"]) is not NO_SHORT:
        if not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} short name must be a single character")
        if len(short) != 1 or short in "-=" or short.isspace():
            raise ValueError(f"{cls.__typename__} short name {short!r} must be a single character other than '-' or '='")

    if not long and short is NO_SHORT:
        raise ValueError(f"{cls.__typename__} must specify a long or a short name")

    if not isinstance(kind := metadata["kind"], Kind):
        raise TypeError(f"{cls.__typename__} 'kind' must be a Kind")

    default = coalesce(metadata["default"], kind.zero)
    if not kind.accepts(default):
        if kind.integral and isinstance(default, int) and not isinstance(default, bool):
            raise ValueError(f"{cls.__typename__} default {default!r} does not fit in {kind.label}")
        raise TypeError(f"{cls.__typename__} default must be a valid {kind.label} value")
    metadata["default"] = default


class Flag(metaclass=ArgumentType):
    """
    Named, typed value cell.

    Cells
    - value: the current value, seeded with default and overwritten once by
      the parser when the flag is given.
    - given: whether the flag was matched during the current parse.
    """

    __introspectable__ = (
        "long",
        "short",
        "kind",
        "default",
        "descr",
        "scope",
    )

    def __init__(
            self,
            long="",
            short=NO_SHORT,
            /,
            kind=Kind.BOOL,
            default=Unset,
            descr=Unset,
            *,
            scope=NO_SUBCOMMAND,
    ):
        metadata = {
            "long": long,
            "short": short,
            "kind": kind,
            "default": default,
            "descr": descr,
            "scope": scope,
        }
        _sanitize_metadata(type(self), metadata)
        _sanitize_flag_metadata(type(self), metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self.value = self.default
        self.given = False

    @property
    def names(self):
        """spelled names as typed on the command line, short first."""
        names = []
        if self.short is not NO_SHORT:
            names.append("-" + self.short)
        if self.long:
            names.append("--" + self.long)
        return tuple(names)

    def reset(self):
        self.value = self.default
        self.given = False


class Positional(metaclass=ArgumentType):
    """
    Named string cell filled by position; value stays None until matched.
    """

    __introspectable__ = (
        "name",
        "descr",
        "scope",
    )

    def __init__(self, name, descr=Unset, /, *, scope=NO_SUBCOMMAND):
        metadata = {
            "name": name,
            "descr": descr,
            "scope": scope,
        }
        _sanitize_metadata(type(self), metadata)

        if not isinstance(metadata["name"], str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        elif not (stripped := metadata["name"].strip()):
            raise ValueError(f"{type(self).__typename__} name cannot be empty")
        metadata["name"] = stripped

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self.value = None

    def reset(self):
        self.value = None


class Scope(metaclass=ArgumentType):
    """
    Ordered flags and positionals that tokens are matched against.

    Capacities are fixed at construction; attaching past them raises
    OverflowError, which is a programming error rather than a parse fault.
    """

    __introspectable__ = (
        "name",
        "descr",
        "flags",
        "positionals",
    )

    def __init__(self, name=NO_SUBCOMMAND, descr=Unset, /, *, flags=256, positionals=64):
        metadata = {"descr": descr}
        _sanitize_metadata(type(self), metadata)

        self._name = name
        self._descr = metadata["descr"]
        self._flags = []
        self._positionals = []
        self._limits = (flags, positionals)
        self.helper = None

    @property
    def label(self):
        return "global scope" if self.name is NO_SUBCOMMAND else f"subcommand {self.name!r}"

    def attach_flag(self, flag, /):
        if len(self._flags) >= self._limits[0]:
            raise OverflowError(f"{self.label} cannot hold more than {self._limits[0]} {pluralize('flag')}")
        self._flags.append(flag)
        return flag

    def attach_positional(self, positional, /):
        if len(self._positionals) >= self._limits[1]:
            raise OverflowError(f"{self.label} cannot hold more than {self._limits[1]} {pluralize('positional argument')}")
        self._positionals.append(positional)
        return positional

    def find_long(self, name, /):
        """first flag declared with this long name, or None."""
        if not name:
            return None
        for flag in self._flags:
            if flag.long == name:
                return flag
        return None

    def find_short(self, short, /):
        """first flag declared with this short name, or None."""
        if not short:
            return None
        for flag in self._flags:
            if flag.short == short:
                return flag
        return None

    def spellings(self):
        """every "--long" and "-s" spelling of this scope, for suggestions."""
        return [name for flag in self._flags for name in flag.names]

    def reset(self):
        for flag in self._flags:
            flag.reset()
        for positional in self._positionals:
            positional.reset()


class Subcommand(Scope):
    """
    Named scope; active turns True once the parser selects it and stays True.
    """

    __introspectable__ = Scope.__introspectable__
    __displayable__ = ("name", "descr", "active")

    def __init__(self, name, descr=Unset, /, **limits):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        elif not re.fullmatch(r"[^\s-]\S*", name):
            raise ValueError(f"{type(self).__typename__} name {name!r} must be non-empty, without spaces, and not start with '-'")
        super().__init__(name, descr, **limits)
        self.active = False

    def reset(self):
        super().reset()
        self.active = False


def describe(entity, /):
    """short, position-free label of an entity for messages."""
    match entity:
        case Flag():
            return "flag %r" % " / ".join(entity.names)
        case Positional():
            return "positional argument %r" % entity.name
        case Scope():
            return entity.label
    raise TypeError(f"describe() cannot describe {type(entity).__name__!r} objects")


__all__ = (
    # Markers
    "NO_SHORT",
    "NO_SUBCOMMAND",

    # Entities
    "Flag",
    "Positional",
    "Scope",
    "Subcommand",

    # Helpers
    "describe",
)

# Keep the metaclass out of star-imports; it is an implementation detail.
del ArgumentType
