"""
Drapeau program: the explicit context tying registry, parser and reporter.

Lifecycle
    program = Program("testing", "a test program")      # start
    fab = program.boolean("fab", descr="fab is great")   # declare
    install = program.subcommand("install", "installing a program")
    build = program.string("build", NO_SHORT, "./build", subcommand="install")
    program.parse(sys.argv)                              # one parse
    program.close()                                      # teardown

Each Program is independent; nothing is process-wide, so several programs
can be declared and parsed side by side (e.g., in tests). A program is parsed
once per start(); start() again to declare and parse afresh.

Queries after parsing
- help_requested: any boolean "help" flag of the global scope or of the
  active subcommand is set, or empty input was refused.
- error: static message of the outstanding fault, or None.
- fault: the outstanding DrapeauError, or None.
- active: the active Subcommand, or None.

Output
- parse() never prints and never exits. print_help() and print_error() are
  the only rendering entry points (see drapeau.helper).
"""
import logging
import sys

from .arguments import NO_SHORT, NO_SUBCOMMAND
from .faults import Reporter
from .helper import print_help, print_error
from .kinds import Kind
from .parser import Parser
from .registry import (
    Registry,
    FLAG_CAPACITY,
    POSITIONAL_CAPACITY,
    SUBCOMMAND_CAPACITY,
    INDEX_CAPACITY,
)
from .utils import Unset, coalesce, rename

logger = logging.getLogger(__name__)


def _shorthand(kind, /):
    """build the typed declaration method for one kind (Program.i32, ...)."""

    @rename(kind.label)
    def declare(self, long, short=NO_SHORT, /, default=Unset, descr=Unset, *, subcommand=NO_SUBCOMMAND):
        return self.flag(long, short, kind, default, descr, subcommand=subcommand)

    declare.__doc__ = f"declare a {kind.label} flag; see Program.flag()."
    return declare


class Program:
    """
    a command-line program: declarations, one parse, and its outcome.

    options
    - helper: declare the implicit --help / -h flag globally and per subcommand.
    - terminator: give "--" its conventional meaning (everything after it is
      positional). By default "--" is skipped without further effect.
    - flags / positionals: per-scope capacities.
    - subcommands: maximum number of subcommands.
    - buckets: initial capacity of the subcommand index (power of two).
    - colorful / fancy: rendering of help and faults.
    """

    def __init__(
            self,
            name=Unset,
            descr=Unset,
            /,
            *,
            helper=True,
            terminator=False,
            flags=FLAG_CAPACITY,
            positionals=POSITIONAL_CAPACITY,
            subcommands=SUBCOMMAND_CAPACITY,
            buckets=INDEX_CAPACITY,
            colorful=True,
            fancy=False,
    ):
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._reporter = Reporter(colorful=self._colorful, fancy=self._fancy)
        self._registry = Registry(
            self._reporter,
            flags=flags,
            positionals=positionals,
            subcommands=subcommands,
            buckets=buckets,
            helper=helper,
        )
        self._parser = Parser(self._registry, self._reporter, terminator=terminator)
        self._parsed = False
        self.start(name, descr)

    def start(self, name=Unset, descr=Unset, /):
        """
        (re)initialise: forget every declaration, the active subcommand and the fault.

        name and descr default to the ones of the previous start.
        """
        name = coalesce(name, self._registry.name)
        descr = coalesce(descr, self._registry.descr)
        self._registry.start(name, descr)
        self._reporter.reset()
        self._parser.reset()
        self._parsed = False

    def close(self):
        """release the subcommand index; answers the number of chain nodes released."""
        return self._registry.close()

    def __enter__(self):
        return self

    def __exit__(self, *exception):
        self.close()

    # --- declarations ---

    def flag(self, long, short=NO_SHORT, /, kind=Kind.BOOL, default=Unset, descr=Unset, *, subcommand=NO_SUBCOMMAND):
        """
        declare a flag and answer it; read .value after parsing.

        parameters
        - long: long name without dashes ("" for a short-only flag).
        - short: single character, or NO_SHORT.
        - kind: a Kind member.
        - default: initial value (Kind.zero when omitted).
        - descr: help text.
        - subcommand: owning subcommand name, NO_SUBCOMMAND for the global scope.

        returns None (and records an InternalError) when subcommand is not declared.
        """
        return self._registry.declare_flag(subcommand, long, short, kind, default, descr)

    boolean = _shorthand(Kind.BOOL)
    i8 = _shorthand(Kind.I8)
    i16 = _shorthand(Kind.I16)
    i32 = _shorthand(Kind.I32)
    i64 = _shorthand(Kind.I64)
    u8 = _shorthand(Kind.U8)
    u16 = _shorthand(Kind.U16)
    u32 = _shorthand(Kind.U32)
    u64 = _shorthand(Kind.U64)
    string = _shorthand(Kind.STR)

    def positional(self, name, descr=Unset, /, *, subcommand=NO_SUBCOMMAND):
        """declare a positional argument and answer it; read .value after parsing."""
        return self._registry.declare_positional(subcommand, name, descr)

    def subcommand(self, name, descr=Unset, /):
        """declare a subcommand and answer it; read .active after parsing."""
        return self._registry.declare_subcommand(name, descr)

    # --- parsing ---

    def parse(self, argv=None, /, allow_empty=True):
        """
        parse an argument vector whose first item is the program name.

        argv defaults to sys.argv. Returns True on success. A program parses
        once; start() it again before parsing another vector.
        """
        if self._parsed:
            raise RuntimeError("program is already parsed; call start() before parsing again")
        if not self._registry.open:
            raise RuntimeError("program is closed; call start() before parsing")
        self._parsed = True

        argv = list(sys.argv if argv is None else argv)

        logger.debug("parsing %r", argv[1:])
        return self._parser.parse(argv[1:], allow_empty)

    def check(self):
        """raise the outstanding fault, if any."""
        self._reporter.raise_for_fault()

    # --- queries ---

    @property
    def name(self):
        return self._registry.name

    @property
    def descr(self):
        return self._registry.descr

    @property
    def registry(self):
        return self._registry

    @property
    def root(self):
        """the global scope."""
        return self._registry.root

    @property
    def subcommands(self):
        return self._registry.subcommands

    @property
    def active(self):
        return self._registry.active

    @property
    def scope(self):
        return self._registry.scope

    @property
    def help_requested(self):
        return self._parser.empty or any(flag.value for flag in self._registry.help_flags())

    @property
    def error(self):
        return self._reporter.message

    @property
    def fault(self):
        return self._reporter.fault

    @property
    def colorful(self):
        return self._colorful

    @property
    def fancy(self):
        return self._fancy

    # --- rendering ---

    def print_help(self, file=None):
        print_help(self, file=file)

    def print_error(self, file=None):
        print_error(self, file=file)

    def __repr__(self):
        return "program(name=%r, subcommands=%d, active=%r, error=%r)" % (
            self.name, len(self.subcommands), self.active.name if self.active else None, self.error
        )


__all__ = (
    "Program",
)
