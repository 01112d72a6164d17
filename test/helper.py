# python
"""
Helper module behavioral tests (help and fault rendering).

Scope
- Validate the help layout: usage line, sections, flag names, metavars, defaults.
- Validate the subcommand-scoped help.
- Validate fault printing and the program label.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured from a rich Console writing to a StringIO, without colors.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase

from drapeau import NO_SHORT, Program


class TestHelp(TestCase):
    """Behavioral tests for print_help."""

    def setUp(self):
        self.program = Program("testing", "a test program", colorful=False)
        self.program.boolean("fab", "f", descr="fab is great")
        self.program.u16("port", "p", 8080, "listening port")
        self.program.positional("source", "where to read from")
        self.program.subcommand("install", "installing a program")
        self.program.string("build", NO_SHORT, "./build", "build directory", subcommand="install")

    def tearDown(self):
        self.program.close()

    def render(self):
        file = io.StringIO()
        self.program.print_help(file=file)
        return file.getvalue()

    def testGlobalHelp(self):
        self.program.parse(["testing"])
        output = self.render()
        self.assertIn("a test program", output)
        self.assertIn("Usage: testing [SUBCOMMANDS] [FLAGS] [ARGUMENTS]", output)
        self.assertIn("Options:", output)
        self.assertIn("-h, --help", output)
        self.assertIn("-f, --fab", output)
        self.assertIn("fab is great", output)
        self.assertIn("-p, --port <u16>", output)
        self.assertIn("(default: 8080)", output)
        self.assertIn("Arguments:", output)
        self.assertIn("source", output)
        self.assertIn("Subcommands:", output)
        self.assertIn("installing a program", output)
        self.assertNotIn("--build", output)

    def testSubcommandHelp(self):
        self.program.parse(["testing", "install", "--help"])
        output = self.render()
        self.assertIn("Usage: testing install [FLAGS]", output)
        self.assertIn("--build <string>", output)
        self.assertIn("(default: ./build)", output)
        self.assertNotIn("--fab", output)
        self.assertNotIn("Subcommands:", output)

    def testFancyHelpIsBoxed(self):
        with Program("testing", colorful=False, fancy=True) as program:
            file = io.StringIO()
            program.print_help(file=file)
            self.assertIn("╭", file.getvalue())


class TestErrors(TestCase):
    """Behavioral tests for print_error."""

    def testNothingPrintedWithoutFault(self):
        with Program("testing", colorful=False) as program:
            program.parse(["testing"])
            file = io.StringIO()
            program.print_error(file=file)
            self.assertEqual(file.getvalue(), "")

    def testFaultIsPrintedWithProgramLabel(self):
        with Program("testing", colorful=False) as program:
            program.boolean("fab")
            program.parse(["testing", "--fob"])
            file = io.StringIO()
            program.print_error(file=file)
            output = file.getvalue()
            self.assertIn("[ testing | 11111 | Unknown Flag ]", output)
            self.assertIn("unknown flag '--fob' at first position in global scope", output)
            self.assertIn("did you mean '--fab'?", output)


if __name__ == "__main__":
    unittest.main()
