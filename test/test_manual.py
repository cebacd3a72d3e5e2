# python
"""
Manual page and process-facing helper tests.

Scope
- render(): usage line, about text, commands and arguments sections.
- print_manual(): custom printer precedence and fallback.
- exit(), fail(), parse_or_exit(): output streams and exit statuses.

Conventions
- Test method names follow CamelCase per project convention.
- Output is captured by patching the module consoles with recording ones.
"""

from __future__ import annotations

import io
import unittest
from unittest import TestCase, mock

from rich.console import Console
from rich.panel import Panel

from argot import Interface, Configuration, NoCommandSelectedError
from argot.manual import render


def recorder():
    return Console(file=io.StringIO(), width=100)


def rendered(cli):
    console = recorder()
    console.print(render(cli, width=100))
    return console.file.getvalue()


def sample(**options):
    cli = Interface("tool", "1.2", "builds things", **options)
    output = cli.argument("--output", "-o", type=str, default="dist", descr="where to write")
    cli.argument("--verbose", "-v", required=True)
    cli.argument("--tags", type=str, multiple=True)
    cli.command("build", requires=[output], descr="build the project")
    cli.command("clean")
    return cli


class TestRender(TestCase):

    def testUsageLine(self):
        self.assertIn("usage: tool [command] [arguments]", rendered(sample()))

    def testUsageLineWithoutEntities(self):
        output = rendered(Interface("tool"))
        self.assertIn("usage: tool", output)
        self.assertNotIn("[command]", output)

    def testAboutText(self):
        self.assertIn("builds things", rendered(sample()))

    def testCommandsSection(self):
        output = rendered(sample())
        self.assertIn("commands:", output)
        self.assertIn("build the project (requires --output)", output)
        self.assertIn("clean", output)

    def testArgumentsSection(self):
        output = rendered(sample())
        self.assertIn("arguments:", output)
        self.assertIn("-o | --output STRING", output)
        self.assertIn("where to write (default is 'dist')", output)
        self.assertIn("(required)", output)
        self.assertIn("--tags [STRING_1 STRING_2 ...]", output)

    def testFancyUsesPanel(self):
        self.assertIsInstance(render(sample(fancy=True), width=100), Panel)


class TestPrintManual(TestCase):

    def testBuiltInPage(self):
        console = recorder()
        with mock.patch("argot.interface.stdout", console):
            sample().print_manual()
        self.assertIn("usage: tool", console.file.getvalue())

    def testCustomPrinterWins(self):
        console = recorder()
        cli = Interface("tool", manual=lambda cli: "custom page for %s" % cli.name)
        with mock.patch("argot.interface.stdout", console):
            cli.print_manual()
        self.assertEqual(console.file.getvalue().strip(), "custom page for tool")

    def testCustomPrinterFallsBack(self):
        console = recorder()
        cli = Interface("tool", manual=lambda cli: None)
        with mock.patch("argot.interface.stdout", console):
            cli.print_manual()
        self.assertIn("usage: tool", console.file.getvalue())


class TestExitHelpers(TestCase):

    def setUp(self):
        self.stdout = recorder()
        self.stderr = recorder()
        self.faults = recorder()
        for target, console in (
            ("argot.interface.stdout", self.stdout),
            ("argot.interface.stderr", self.stderr),
            ("argot.faults.console", self.faults),
        ):
            patcher = mock.patch(target, console)
            patcher.start()
            self.addCleanup(patcher.stop)

    def testExitSuccess(self):
        with self.assertRaises(SystemExit) as context:
            Interface("tool").exit("done")
        self.assertEqual(context.exception.code, 0)
        self.assertIn("done", self.stdout.file.getvalue())

    def testExitFailure(self):
        with self.assertRaises(SystemExit) as context:
            Interface("tool").exit("broken", code=2)
        self.assertEqual(context.exception.code, 2)
        self.assertIn("error: broken", self.stderr.file.getvalue())

    def testExitWithManual(self):
        with self.assertRaises(SystemExit):
            Interface("tool").exit("done", manual=True)
        self.assertIn("usage: tool", self.stdout.file.getvalue())

    def testFailPrintsManualForNoSelection(self):
        cli = Interface("tool", configuration=Configuration.PRINT_HELP_FOR_NO_SELECTION)
        with self.assertRaises(SystemExit) as context:
            cli.fail(NoCommandSelectedError("no command selected"))
        self.assertEqual(context.exception.code, 1)
        self.assertIn("usage: tool", self.stdout.file.getvalue())
        self.assertIn("[ tool — 11101 | No Command Selected ]", self.faults.file.getvalue())

    def testFailPrintsErrorBeforeManual(self):
        shared = recorder()
        cli = Interface("tool", configuration=Configuration.PRINT_HELP_FOR_NO_SELECTION)
        with mock.patch("argot.interface.stdout", shared), mock.patch("argot.faults.console", shared):
            with self.assertRaises(SystemExit):
                cli.fail(NoCommandSelectedError("no command selected"))
        output = shared.file.getvalue()
        self.assertLess(output.index("No Command Selected"), output.index("usage: tool"))

    def testFailWithoutManual(self):
        with self.assertRaises(SystemExit):
            Interface("tool").fail(NoCommandSelectedError("no command selected"))
        self.assertEqual(self.stdout.file.getvalue(), "")

    def testFailRejectsOtherErrors(self):
        with self.assertRaises(TypeError):
            Interface("tool").fail(ValueError("x"))

    def testParseOrExit(self):
        cli = Interface("tool")
        with self.assertRaises(SystemExit) as context:
            cli.parse_or_exit(["tool", "mystery"])
        self.assertEqual(context.exception.code, 1)
        self.assertIn("unknown argument 'mystery'", self.faults.file.getvalue())

    def testParseOrExitSuccess(self):
        cli = Interface("tool")
        verbose = cli.argument("--verbose")
        cli.parse_or_exit(["tool", "--verbose"])
        self.assertTrue(verbose.selected)


if __name__ == "__main__":
    unittest.main()
