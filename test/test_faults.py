"""
Fault rendering and trigger() tests.
"""
import copy
import io
import unittest
from unittest import TestCase, mock

from rich.console import Console

from bosun import faults
from bosun.faults import *


class TestFaults(TestCase):

    def render(self, fault):
        console = Console(file=io.StringIO(), width=200, color_system=None)
        console.print(fault)
        return console.file.getvalue()

    def testMessageIsStr(self):
        self.assertEqual(str(InvalidCommandError("invalid command")), "invalid command")

    def testFlagErrorOf(self):
        fault = InvalidArgumentError.of("--count", "three")
        self.assertEqual(fault.message, "invalid argument: --count three")
        self.assertEqual(fault.switch, "--count")
        self.assertEqual(fault.options["value"], "three")
        self.assertEqual(MissingArgumentError.of("-f").message, "missing argument: -f")

    def testHierarchy(self):
        self.assertTrue(issubclass(InvalidCommandError, CommandError))
        self.assertTrue(issubclass(UnknownSwitchError, FlagError))
        self.assertTrue(issubclass(FlagError, CommandException))

    def testCodes(self):
        self.assertEqual(InvalidCommandError.code, FaultCode.INVALID_COMMAND)
        self.assertEqual(int(UnknownSwitchError.code), 11112)
        self.assertEqual(FaultCode.INVALID_ARGUMENT.normalize(), "11124")

    def testRender(self):
        output = self.render(copy.replace(InvalidCommandError("invalid command"), prog="tool", hint="try again"))
        self.assertIn("[ tool — 11101 | Invalid Command ]", output)
        self.assertIn("invalid command", output)
        self.assertIn("→ try again", output)

    def testReplaceKeepsCause(self):
        cause = ValueError("boom")
        fault = DelegatedCommandError("error: boom")
        fault.__cause__ = cause
        replica = copy.replace(fault, prog="tool")
        self.assertIs(replica.__cause__, cause)
        self.assertEqual(replica.options["prog"], "tool")
        self.assertEqual(replica.message, "error: boom")

    def testTriggerExits(self):
        buffer = io.StringIO()
        with mock.patch.object(faults, "console", Console(file=buffer, width=200, color_system=None)):
            with self.assertRaises(SystemExit) as context:
                trigger(MissingArgumentError.of("--file"), prog="tool")
        self.assertEqual(context.exception.code, 1)
        self.assertIn("missing argument: --file", buffer.getvalue())

    def testTriggerRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(object())


if __name__ == "__main__":
    unittest.main()
