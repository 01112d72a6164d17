"""
Drapeau registry: declared flags, positionals and subcommands, by scope.

The registry owns
- the global scope (flags and positionals that apply when no subcommand is
  selected, or when no subcommand exists at all),
- the ordered subcommands, each being its own scope,
- the subcommand index (name → slot in the subcommand list),
- the active subcommand, set by the parser.

Scopes are named by the subcommand they belong to; NO_SUBCOMMAND (None) names
the global scope. Declaring into an undeclared subcommand is not an exception:
it records an InternalError on the reporter and answers None, so a host can
keep declaring and inspect the fault once.
"""
import logging

from .arguments import NO_SHORT, NO_SUBCOMMAND, Flag, Positional, Scope, Subcommand
from .faults import InternalError
from .index import SubcommandIndex
from .kinds import Kind
from .utils import Unset, coalesce

logger = logging.getLogger(__name__)

FLAG_CAPACITY = 256
POSITIONAL_CAPACITY = 64
SUBCOMMAND_CAPACITY = 64
INDEX_CAPACITY = 64


class Registry:
    """
    declarations of one program.

    options
    - flags / positionals: per-scope capacities.
    - subcommands: maximum number of subcommands.
    - buckets: initial subcommand index capacity (a power of two).
    - helper: declare the implicit boolean "help" flag (--help / -h) in the
      global scope and in every subcommand.
    """

    def __init__(
            self,
            reporter,
            /,
            *,
            flags=FLAG_CAPACITY,
            positionals=POSITIONAL_CAPACITY,
            subcommands=SUBCOMMAND_CAPACITY,
            buckets=INDEX_CAPACITY,
            helper=True,
    ):
        for label, limit in (("flags", flags), ("positionals", positionals), ("subcommands", subcommands)):
            if not isinstance(limit, int) or isinstance(limit, bool):
                raise TypeError(f"registry {label!r} capacity must be an integer")
            if limit < 1:
                raise ValueError(f"registry {label!r} capacity must be positive")

        self._reporter = reporter
        self._limits = {"flags": flags, "positionals": positionals}
        self._capacity = subcommands
        self._helper = bool(helper)
        self._index = SubcommandIndex(buckets)
        self._buckets = buckets
        self._root = None
        self._subcommands = []
        self._active = None
        self._name = None
        self._descr = None
        self._open = False

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def root(self):
        """the global scope."""
        return self._root

    @property
    def subcommands(self):
        return tuple(self._subcommands)

    @property
    def index(self):
        return self._index

    @property
    def active(self):
        """the active subcommand, or None."""
        return self._active

    @property
    def scope(self):
        """the scope tokens are matched against: the active subcommand or the global scope."""
        return self._active if self._active is not None else self._root

    @property
    def open(self):
        return self._open

    def start(self, name=Unset, descr=Unset, /):
        """
        reset every declaration and record the program name and description.

        a registry that was not closed first is closed here, with a warning.
        """
        if self._open:
            logger.warning("program %r started again without close(); closing it first", self._name)
            self.close()

        self._name = coalesce(name)
        self._descr = coalesce(descr)
        self._root = Scope(NO_SUBCOMMAND, **self._limits)
        self._subcommands = []
        self._active = None
        self._index = SubcommandIndex(self._buckets)
        self._open = True

        if self._helper:
            self._root.helper = self._root.attach_flag(Flag("help", "h", Kind.BOOL, False, "print this help message"))

        logger.debug("started program %r", self._name)

    def close(self):
        """release the subcommand index; answers the number of chain nodes released."""
        released = self._index.clear()
        self._open = False
        logger.debug("closed program %r", self._name)
        return released

    def lookup(self, name, /):
        """the subcommand declared under name, or None."""
        slot = self._index.lookup(name)
        return None if slot is None else self._subcommands[slot]

    def _ensure_open(self):
        if not self._open:
            raise RuntimeError("program is closed; call start() before declaring")

    def resolve(self, scope, /):
        """
        turn a scope name into a Scope.

        unknown subcommand names record an InternalError and answer None.
        """
        if scope is NO_SUBCOMMAND:
            return self._root
        if not isinstance(scope, str):
            raise TypeError("scope must be a subcommand name or NO_SUBCOMMAND")
        if (subcommand := self.lookup(scope)) is None:
            self._reporter.report(InternalError(
                "subcommand %r is not declared" % scope,
                detail="subcommand %r is not declared" % scope,
                hint="declare the subcommand before declaring its flags or positional arguments",
            ))
        return subcommand

    def declare_flag(self, scope, long, short=NO_SHORT, kind=Kind.BOOL, default=Unset, descr=Unset, /):
        """
        append a flag to a scope and answer it (its .value is the cell).

        answers None when the scope names an undeclared subcommand.
        raises RuntimeError when the registry is closed.
        """
        self._ensure_open()
        if (target := self.resolve(scope)) is None:
            return None
        flag = target.attach_flag(Flag(long, short, kind, default, descr, scope=scope))
        logger.debug("declared %s flag %s in %s", kind.label, "/".join(flag.names), target.label)
        return flag

    def declare_positional(self, scope, name, descr=Unset, /):
        """
        append a positional argument to a scope and answer it.

        answers None when the scope names an undeclared subcommand.
        raises RuntimeError when the registry is closed.
        """
        self._ensure_open()
        if (target := self.resolve(scope)) is None:
            return None
        positional = target.attach_positional(Positional(name, descr, scope=scope))
        logger.debug("declared positional argument %r in %s", positional.name, target.label)
        return positional

    def declare_subcommand(self, name, descr=Unset, /):
        """
        append a subcommand, index it, and answer it (its .active is the cell).

        raises
        - OverflowError when the subcommand capacity is exhausted.
        - ValueError when the name is already declared.
        - RuntimeError when the registry is closed.
        """
        self._ensure_open()
        if len(self._subcommands) >= self._capacity:
            raise OverflowError(f"registry cannot hold more than {self._capacity} subcommands")

        subcommand = Subcommand(name, descr, **self._limits)
        # Index first: a duplicate name must leave the subcommand list untouched.
        self._index.insert(subcommand.name, len(self._subcommands))
        self._subcommands.append(subcommand)

        if self._helper:
            subcommand.helper = subcommand.attach_flag(Flag(
                "help", "h", Kind.BOOL, False, "print this help message", scope=subcommand.name
            ))

        logger.debug("declared subcommand %r", subcommand.name)
        return subcommand

    def activate(self, subcommand, /):
        """select a subcommand for the current parse; it stays active."""
        if self._active is not None and self._active is not subcommand:
            raise RuntimeError(f"subcommand {self._active.name!r} is already active")
        subcommand.active = True
        self._active = subcommand
        logger.debug("activated subcommand %r", subcommand.name)

    def help_flags(self):
        """boolean flags named "help" in the global scope and the active subcommand."""
        scopes = [self._root] if self._active is None else [self._root, self._active]
        for scope in scopes:
            for flag in scope.flags:
                if flag.long == "help" and flag.kind is Kind.BOOL:
                    yield flag


__all__ = (
    "FLAG_CAPACITY",
    "POSITIONAL_CAPACITY",
    "SUBCOMMAND_CAPACITY",
    "INDEX_CAPACITY",
    "Registry",
)
