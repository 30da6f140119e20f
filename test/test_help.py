"""
Help formatter tests (plain text rendering).
"""
import unittest
from unittest import TestCase

from bosun import HelpFormatter, Runner, TerminalHelpFormatter


class TestTerminalHelpFormatter(TestCase):

    def setUp(self):
        self.runner = Runner([])
        self.runner.program("name", "test")
        self.runner.program("version", "1.2.3")
        self.runner.program("description", "A test program")
        self.runner.program("help", "Copyright", "2024 someone")
        self.runner.global_option("-c", "--config FILE", "Load config data")
        commit = self.runner.command("commit")
        commit.summary = "Record changes"
        commit.description = "Record changes to the repository"
        commit.option("--amend", "Amend the previous commit")
        commit.example("Amend", "test commit --amend")
        self.runner.alias_command("co", "commit", "--amend")
        self.formatter = TerminalHelpFormatter(self.runner, colorful=False, width=100)

    def testGlobalHelp(self):
        output = self.formatter.render()
        self.assertTrue(output.startswith("usage: test [global options] <command> [options] [arguments]"))
        for fragment in (
            "A test program",
            "commands:",
            "Record changes",
            "Display help documentation for <sub_command>",
            "aliases:",
            "commit --amend",
            "global options:",
            "-c, --config FILE",
            "Load config data",
            "Copyright:",
            "2024 someone",
        ):
            with self.subTest(fragment=fragment):
                self.assertIn(fragment, output)

    def testAliasesAreNotListedAsCommands(self):
        output = self.formatter.render()
        section = output.split("commands:")[1].split("aliases:")[0]
        names = [line.split()[0] for line in section.splitlines() if line.strip()]
        self.assertEqual(names, ["commit", "help"])

    def testCommandHelp(self):
        output = self.formatter.render_command(self.runner.commands["commit"])
        self.assertTrue(output.startswith("usage: test commit [options]"))
        self.assertIn("Record changes to the repository", output)
        self.assertIn("examples:", output)
        self.assertIn("test commit --amend", output)
        self.assertIn("Amend the previous commit", output)

    def testCommandSyntaxIsUsed(self):
        output = self.formatter.render_command(self.runner.commands["help"])
        self.assertTrue(output.startswith("usage: command help <sub_command>"))

    def testPlainTextHasNoEscapes(self):
        self.assertNotIn("\x1b[", self.formatter.render())

    def testRunnerBuildsConfiguredFormatter(self):
        class Custom(HelpFormatter):
            def render(self):
                return "custom"

        self.runner.program("help_formatter", Custom)
        self.assertEqual(self.runner.help_formatter.render(), "custom")
        self.assertIs(self.runner.help_formatter.runner, self.runner)

    def testBaseFormatterIsAbstract(self):
        with self.assertRaises(NotImplementedError):
            HelpFormatter(self.runner).render()


if __name__ == "__main__":
    unittest.main()
