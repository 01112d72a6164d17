"""
Drapeau parser: the token-scanning state machine.

States
    init → scope-resolved → scanning → done | failed

init
- no user token at all: success when empty input is allowed, otherwise a
  failure without fault that marks help as requested.

scope-resolved
- when subcommands exist and the first token does not start with '-', that
  token names the subcommand: it is consumed and activated, or the parse fails
  with SubcommandNotFoundError (nothing becomes active).
- otherwise the global scope is used and the token stays in the stream.

scanning (one token at a time, left to right)
- "--"        → skipped; in terminator mode every later token is positional.
- "--name"    → long flag; "--name=value" carries the value inline.
- "-x"        → short flag; anything longer after one dash is malformed.
- other       → next unfilled positional slot of the scope, in declaration order.
- boolean flags become True; other kinds take the next token (or the inline
  value) through drapeau.kinds.decode.

done / failed
- the first fault is handed to the reporter and scanning stops; cells that
  were already written keep their values.
"""
import difflib
import logging
from collections import deque

from .arguments import describe
from .faults import (
    SubcommandNotFoundError,
    FlagNotFoundError,
    LongFlagGivenAsShortError,
    MissingValueError,
    DuplicateFlagError,
    FlagAssignmentError,
    InvalidNumberError,
    PositionalArgOverflowError,
)
from .kinds import Kind, decode
from .utils import Unset, ordinal, pluralize

logger = logging.getLogger(__name__)


class Parser:
    """
    scans one token vector against a registry, writing cells in place.

    options
    - terminator: when True, "--" switches the rest of the tokens to
      positional-only (the conventional meaning). When False, "--" is skipped
      and has no other effect.

    a flag is matched at most once per parse: giving it again, boolean flags
    included (e.g., "-f --fab"), is a DuplicateFlagError rather than an
    overwrite.
    """

    def __init__(self, registry, reporter, /, *, terminator=False):
        self._registry = registry
        self._reporter = reporter
        self._terminator = bool(terminator)
        self._tokens = deque()
        self._index = 0
        self._empty = False

    @property
    def empty(self):
        """True when the last parse failed because no token was given."""
        return self._empty

    def reset(self):
        """forget the tokens and the outcome of the previous parse."""
        self._tokens.clear()
        self._index = 0
        self._empty = False

    def _pop(self):
        self._index += 1
        return self._tokens.popleft()

    def _route(self):
        return " ".join(filter(None, (
            self._registry.name,
            self._registry.active.name if self._registry.active is not None else None,
        ))) or "program"

    def parse(self, tokens, /, allow_empty=True):
        """
        parse user tokens (the program name already stripped).

        returns True on success, False on failure; failures other than empty
        input leave their fault on the reporter.
        """
        self.reset()
        self._tokens.extend(tokens)

        if self._reporter.fault is not None:
            logger.debug("refusing to parse while %s is outstanding", type(self._reporter.fault).__name__)
            return False

        if not self._tokens:
            if allow_empty:
                return True
            self._empty = True
            logger.debug("no argument given, help requested")
            return False

        if (scope := self._resolve_scope()) is None:
            return False

        slots = deque(scope.positionals)
        positional = False

        while self._tokens:
            token = self._pop()

            if token == "--" and not positional:
                positional = self._terminator
                continue

            if token.startswith("-") and not positional:
                if not self._parse_flag(scope, token):
                    return False
            elif not self._parse_positional(scope, slots, token):
                return False

        logger.debug("parsed %d %s in %s", self._index, pluralize("token") if self._index != 1 else "token", scope.label)
        return True

    def _resolve_scope(self):
        token = self._tokens[0]
        if not self._registry.subcommands or token.startswith("-"):
            return self._registry.root

        token = self._pop()
        if (subcommand := self._registry.lookup(token)) is None:
            names = [subcommand.name for subcommand in self._registry.subcommands]
            suggestions = difflib.get_close_matches(token, names, 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see available subcommands" % (
                    suggestions[0], self._route()
                )
            except IndexError:
                hint = "run '%s --help' to see available subcommands" % self._route()
            return self._reporter.report(SubcommandNotFoundError(
                "unknown subcommand %r at %s position" % (token, ordinal(self._index)),
                token=token,
                index=self._index,
                suggestions=suggestions,
                hint=hint,
            )) or None

        self._registry.activate(subcommand)
        return subcommand

    def _parse_flag(self, scope, token):
        inline = Unset

        if token.startswith("--"):
            name, separator, value = token[2:].partition("=")
            if separator:
                inline = value
            flag = scope.find_long(name)
            spelled = "--" + name
        else:
            name = token[1:]
            if len(name) > 1:
                return self._reporter.report(LongFlagGivenAsShortError(
                    "short flag %r at %s position has more than one character" % (token, ordinal(self._index)),
                    token=token,
                    index=self._index,
                    hint="use '--%s' for a long flag, short flags are a single character (e.g., -%s)" % (name, name[0]),
                ))
            flag = scope.find_short(name)
            spelled = token

        if flag is None:
            suggestions = difflib.get_close_matches(spelled, scope.spellings(), 5)
            try:
                hint = "did you mean %r? you can also run '%s --help' to see all flags" % (suggestions[0], self._route())
            except IndexError:
                hint = "try '%s --help' to see all available flags" % self._route()
            return self._reporter.report(FlagNotFoundError(
                "unknown flag %r at %s position in %s" % (spelled, ordinal(self._index), scope.label),
                token=token,
                index=self._index,
                suggestions=suggestions,
                hint=hint,
            ))

        if flag.given:
            return self._reporter.report(DuplicateFlagError(
                "%s is given again at %s position" % (describe(flag), ordinal(self._index)),
                token=token,
                index=self._index,
                hint="keep a single occurrence of %s" % spelled,
            ))

        if flag.kind is Kind.BOOL:
            if inline is not Unset:
                return self._reporter.report(FlagAssignmentError(
                    "%s at %s position cannot have an inline value" % (describe(flag), ordinal(self._index)),
                    token=token,
                    index=self._index,
                    hint="remove everything from '=' (for example: %s)" % spelled,
                ))
            flag.value = True
            flag.given = True
            return True

        index = self._index
        if inline is Unset:
            if not self._tokens:
                return self._reporter.report(MissingValueError(
                    "%s at %s position requires a %s value" % (describe(flag), ordinal(index), flag.kind.label),
                    token=token,
                    index=index,
                    hint="pass a value after a space (for example: %s <value>)" % spelled,
                ))
            inline = self._pop()
            index = self._index

        if (value := decode(flag.kind, inline)) is Unset:
            return self._reporter.report(InvalidNumberError(
                "%r at %s position is not a valid %s value for %s (expected %d to %d)" % (
                    inline, ordinal(index), flag.kind.label, describe(flag), flag.kind.lower, flag.kind.upper
                ),
                token=inline,
                index=index,
                hint="pass a decimal, 0x-prefixed hexadecimal or 0-prefixed octal integer",
            ))

        flag.value = value
        flag.given = True
        return True

    def _parse_positional(self, scope, slots, token):
        try:
            slot = slots.popleft()
        except IndexError:
            declared = len(scope.positionals)
            return self._reporter.report(PositionalArgOverflowError(
                "unexpected positional argument %r at %s position, %s accepts %d %s" % (
                    token,
                    ordinal(self._index),
                    scope.label,
                    declared,
                    pluralize("positional argument") if declared != 1 else "positional argument",
                ),
                token=token,
                index=self._index,
                hint="remove this extra value or run '%s --help' to see the expected usage" % self._route(),
            ))
        slot.value = token
        return True


__all__ = (
    "Parser",
)
