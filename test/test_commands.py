"""
Command behavioral tests.

Scope
- Registration: names, examples, options, handler variants.
- run(): option proxying into the accessor, positional arguments, proxied
  global values, handler results and propagated flag errors.
"""
import unittest
from unittest import TestCase

from bosun import Command, Callback, Constructor, BoundMethod
from bosun.faults import UnknownSwitchError, MissingArgumentError
from bosun.utils import Unset


class Recorder:
    """Handler target recording every call."""

    calls = []

    def __init__(self, *args):
        self.init_args = args
        if args:
            type(self).calls.append(("init",) + args)

    def execute(self, args, options):
        type(self).calls.append(("execute", args, options))
        return "executed"


class TestRegistration(TestCase):

    def testNameIsNormalized(self):
        self.assertEqual(Command("  remote   add ").name, "remote add")

    def testBadNames(self):
        with self.assertRaises(TypeError):
            Command(1)
        with self.assertRaises(ValueError):
            Command("   ")

    def testExamplesAndMetadata(self):
        command = Command("foo")
        command.syntax = "prog foo <bar>"
        command.summary = "Do foo"
        self.assertIs(command.example("Simple", "prog foo bar"), command)
        self.assertEqual(command.examples, (("Simple", "prog foo bar"),))
        self.assertEqual(command.syntax, "prog foo <bar>")
        self.assertIsNone(command.description)

    def testOptionReturnsSpec(self):
        command = Command("foo")
        spec = command.option("-f", "--file FILE", "Input")
        self.assertEqual(command.options, (spec,))

    def testWhenCalledVariants(self):
        command = Command("foo")

        def function(args, options):
            pass

        self.assertIs(command.when_called(function), function)
        self.assertEqual(command.handler, Callback(function))

        command.when_called(Recorder)
        self.assertEqual(command.handler, Constructor(Recorder, None))

        command.when_called(Recorder, "execute")
        self.assertEqual(command.handler, Constructor(Recorder, "execute"))

        recorder = Recorder()
        command.when_called(recorder, "execute")
        self.assertEqual(command.handler, BoundMethod(recorder, "execute"))

    def testWhenCalledAsDecorator(self):
        command = Command("foo")

        @command.when_called
        def handle(args, options):
            return args

        self.assertEqual(command.run("a"), ["a"])

    def testWhenCalledMisuse(self):
        command = Command("foo")
        with self.assertRaises(TypeError):
            command.when_called()
        with self.assertRaises(TypeError):
            command.when_called(object())
        with self.assertRaises(TypeError):
            command.when_called(object(), "missing")


class TestRun(TestCase):

    def setUp(self):
        Recorder.calls = []
        self.received = []
        self.command = Command("foo")
        self.command.when_called(lambda args, options: self.received.append((args, options)))

    def testNoHandlerIsNoOp(self):
        self.assertIsNone(Command("bare").run("x"))

    def testOptionsAreProxied(self):
        self.command.option("-f", "--file FILE")
        self.command.option("--[no-]color")
        self.command.option("--large-switch")
        self.command.run("--file", "a.txt", "--no-color", "--large-switch", "rest")
        args, options = self.received[-1]
        self.assertEqual(args, ["rest"])
        self.assertEqual(options["file"], "a.txt")
        self.assertIs(options["color"], False)
        self.assertIs(options["large_switch"], True)
        self.assertIs(options["missing"], Unset)

    def testOptionHandlerReplacesProxying(self):
        seen = []
        self.command.option("-c", "--count N", int, handler=seen.append)
        self.command.run("-c", "4")
        _, options = self.received[-1]
        self.assertEqual(seen, [4])
        self.assertNotIn("count", options)

    def testProxiedValuesComeFirst(self):
        self.command.option("--level N", int)
        self.command.run("--level", "2", proxied=[("config", "x.yml"), ("level", 1)])
        _, options = self.received[-1]
        self.assertEqual(options["config"], "x.yml")
        self.assertEqual(options["level"], 2)

    def testValuesDoNotLeakBetweenRuns(self):
        self.command.option("-v", "--verbose")
        self.command.run("-v")
        self.command.run()
        self.assertIs(self.received[0][1]["verbose"], True)
        self.assertIs(self.received[1][1]["verbose"], Unset)

    def testHandlerResultIsReturned(self):
        command = Command("foo")
        command.when_called(Recorder, "execute")
        self.assertEqual(command.run("a"), "executed")
        self.assertEqual(Recorder.calls[-1][0:2], ("execute", ["a"]))

    def testConstructorWithoutMethod(self):
        command = Command("foo")
        command.when_called(Recorder)
        instance = command.run("a")
        self.assertIsInstance(instance, Recorder)
        self.assertEqual(instance.init_args[0], ["a"])

    def testHandlerCanRunTwice(self):
        self.command.run("a")
        self.command.run("b")
        self.assertEqual([args for args, _ in self.received], [["a"], ["b"]])

    def testFlagErrorsPropagate(self):
        with self.assertRaises(UnknownSwitchError):
            self.command.run("--nope")
        self.command.option("--file FILE")
        with self.assertRaises(MissingArgumentError):
            self.command.run("--file")


if __name__ == "__main__":
    unittest.main()
