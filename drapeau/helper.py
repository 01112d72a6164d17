"""
Drapeau help and fault rendering (rich based).

This module only reads a program: it lists the flags, positional arguments
and subcommands of the global scope, or of the active subcommand once one is
selected, with names and descriptions aligned in columns.

Palette keys
- usage-label, program-name, usage-section, description-section
- group-label, argument-description, default
- flag-name, metavar, subcommand-name
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Define __prog__ in __main__ to override the program label.
- When the program is not colorful, styling is dropped.
"""
import copy
import os.path
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .kinds import Kind


def _label(program):
    main = __import__("__main__")
    return getattr(main, "__prog__", None) or program.name or os.path.basename(sys.argv[0]) or "(*.*)"


def render_help(program, /):
    """build the help renderable of a program (nothing is printed)."""
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # cyan signature label
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "usage-section": "bold #36C5F0",  # sky-blue usage tail
        "description-section": "italic #A3A3A3",  # neutral gray

        # === Groups / arguments ===
        "group-label": "bold #FFFFFF",
        "argument-description": "#9CA3AF",
        "default": "#737373",

        # === Names ===
        "flag-name": "bold #22C55E",
        "metavar": "bold #FFD600",
        "subcommand-name": "bold #36C5F0",

        # === Fancy panel ===
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        # Normalize to rich Text; drop styles when the program is not colorful.
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if program.colorful else Text(fragment.plain)
        return Text(str(fragment), styles[style] if program.colorful else "")

    def table():
        grid = Table.grid(padding=(0, 4))
        grid.add_column(no_wrap=True)
        grid.add_column()
        return grid

    def section(label, grid):
        return Group(text(label, "group-label"), Padding(grid, (0, 0, 0, 4)))

    label = _label(program)
    scope = program.scope
    active = program.active
    renders = []

    if program.descr:
        renders.append(text(program.descr, "description-section"))
        renders.append(Text(""))

    if active is not None:
        tail = " [FLAGS]" + (" [ARGUMENTS]" if scope.positionals else "")
        usage = Text.assemble(
            text("Usage: ", "usage-label"),
            text(label, "program-name"),
            " ",
            text(active.name, "subcommand-name"),
            text(tail, "usage-section"),
        )
    else:
        tail = (" [SUBCOMMANDS]" if program.subcommands else "") + " [FLAGS]" + (" [ARGUMENTS]" if scope.positionals else "")
        usage = Text.assemble(text("Usage: ", "usage-label"), text(label, "program-name"), text(tail, "usage-section"))
    renders.append(usage)

    if active is not None and active.descr:
        renders.append(text(active.descr, "description-section"))

    if flags := scope.flags:
        grid = table()
        for flag in flags:
            name = Text(", ").join(text(spelled, "flag-name") for spelled in flag.names)
            if flag.kind is not Kind.BOOL:
                name = Text.assemble(name, " ", text("<%s>" % flag.kind.label, "metavar"))
            descr = text(flag.descr, "argument-description")
            if flag.default not in (None, False) and flag.kind is not Kind.BOOL:
                descr = Text.assemble(descr, " " if flag.descr else "", text("(default: %s)" % flag.default, "default"))
            grid.add_row(name, descr)
        renders.append(Text(""))
        renders.append(section("Options:", grid))

    if positionals := scope.positionals:
        grid = table()
        for positional in positionals:
            grid.add_row(text(positional.name, "metavar"), text(positional.descr, "argument-description"))
        renders.append(Text(""))
        renders.append(section("Arguments:", grid))

    if active is None and program.subcommands:
        grid = table()
        for subcommand in program.subcommands:
            grid.add_row(text(subcommand.name, "subcommand-name"), text(subcommand.descr, "argument-description"))
        renders.append(Text(""))
        renders.append(section("Subcommands:", grid))

    if program.fancy:
        return Panel(Group(*renders), title=text(label, "panel-title"), title_align="left")
    return Group(*renders)


def print_help(program, /, file=None):
    """print the help of a program to file (stdout by default)."""
    console = Console(file=file, highlight=False, no_color=not program.colorful)
    console.print(render_help(program))


def print_error(program, /, file=None):
    """print the outstanding fault of a program to file (stderr by default); no-op without fault."""
    if (fault := program.fault) is None:
        return
    console = Console(file=file, stderr=file is None, highlight=False, no_color=not program.colorful)
    console.print(copy.replace(fault, prog=_label(program)))


__all__ = (
    "render_help",
    "print_help",
    "print_error",
)
