"""
Bosun command layer: one named command, its options and its handler.

What this module provides
- Command: owns a (possibly multi-word) name, help metadata (syntax, summary,
  description, examples), its OptionSpecs and a handler. It parses only its
  own arguments and invokes the handler with (remaining_args, options).
- Handler variants, resolved once by Command.when_called(...):
  • Callback(function)          → function(args, options)
  • Constructor(type, method)   → type(args, options), or type().method(args, options)
  • BoundMethod(object, name)   → object.name(args, options)

Option values
- An option registered without a handler proxies its value into the options
  accessor under the identifier derived from its last switch literal.
- Values proxied by the runner for global switches are passed to run() through
  `proxied`; they are materialized first, so a command's own value for the same
  identifier wins.
- Proxied values live for one run() call only.

Quick start
    from bosun import Command

    command = Command("remote add")
    command.option("-f", "--fetch", "Fetch after adding")
    command.option("--tags TAGS", list, "Import the given tags")

    @command.when_called
    def add(args, options):
        name, url = args
        ...

    command.run("origin", "git@host:repo", "--fetch")
"""
import functools
import inspect
import operator
from collections import namedtuple

from .arguments import OptionSpec, Options
from .flags import FlagParser
from .utils import *


class Callback(namedtuple("Callback", ("function",))):
    """Plain callable handler."""
    __slots__ = ()

    def __call__(self, args, options):
        return self.function(args, options)


class Constructor(namedtuple("Constructor", ("type", "method"))):
    """Class handler: the constructor itself, or a method of a fresh instance."""
    __slots__ = ()

    def __call__(self, args, options):
        if self.method is None:
            return self.type(args, options)
        return getattr(self.type(), self.method)(args, options)


class BoundMethod(namedtuple("BoundMethod", ("object", "name"))):
    """Named method of an existing object."""
    __slots__ = ()

    def __call__(self, args, options):
        return getattr(self.object, self.name)(args, options)


def _resolve_handler(target, method):
    """
    Pick the handler variant for when_called(target, method).

    Rules
    - a class → Constructor(target, method)
    - a callable without method → Callback(target)
    - any object with a method name → BoundMethod(target, method)
    """
    if method is not None and not isinstance(method, str):
        raise TypeError("when_called() method name must be a string")
    if inspect.isclass(target):
        return Constructor(target, method)
    if method is None:
        if not callable(target):
            raise TypeError("when_called() target must be callable, a class, or come with a method name")
        return Callback(target)
    if not callable(getattr(target, method, None)):
        raise TypeError("when_called() target has no method %r" % method)
    return BoundMethod(target, method)


class Command:
    """
    A named command: option set, help metadata and handler.

    Lifecycle
    - Created once (usually through Runner.command(name)) and configured with
      option()/example()/when_called() before the first run().
    - run(*args, proxied=...) parses, materializes options and calls the handler.

    Properties
    - name: the normalized name (inner whitespace collapsed to single spaces).
    - examples: tuple of (description, example_text).
    - options: tuple of the registered OptionSpecs.
    - handler: the resolved handler variant, or None.
    - syntax/summary/description: free-form help strings (writable).
    """

    __introspectable__ = (
        "name",
        "syntax",
        "summary",
        "description",
        "examples",
        "options",
        "handler",
    )

    name = mirror("name")
    examples = mirror("examples")
    options = mirror("options")

    def __init__(self, name, /):
        if not isinstance(name, str):
            raise TypeError("command name must be a string")
        elif not (name := " ".join(name.split())):
            raise ValueError("command name cannot be empty")
        self._name = name
        self._examples = []
        self._options = []
        self._handler = None
        self.syntax = None
        self.summary = None
        self.description = None

    @property
    def handler(self):
        return self._handler

    def example(self, description, text, /):
        """
        Add a usage example, displayed by help formatters.

        Returns self for chaining.
        """
        if not isinstance(description, str) or not isinstance(text, str):
            raise TypeError("example() arguments must be strings")
        self._examples.append((description, text))
        return self

    def option(self, *args, handler=None):
        """
        Register an option from a switch descriptor.

        The descriptor is split into switch literals, an optional coercion and a
        trailing description (see bosun.switches). Without a handler, the parsed
        value lands in the options accessor:

            -h, --help          options["help"]          # => True
            --[no-]feature      options["feature"]       # => True / False
            --large-switch      options["large_switch"]  # => True
            --file FILE         options["file"]          # => value passed
            --list WORDS        options["list"]          # => list, with `list` coercion
            --date [DATE]       options["date"]          # => value, or None when omitted

        Returns the registered OptionSpec.
        """
        spec = OptionSpec.parse(*args, handler=handler)
        self._options.append(spec)
        return spec

    def when_called(self, target=Unset, method=None, /):
        """
        Set the handler; the variant is resolved once, here.

        Usage
            command.when_called(function)
            command.when_called(SomeCommand)                # SomeCommand(args, options)
            command.when_called(SomeCommand, "execute")     # SomeCommand().execute(args, options)
            command.when_called(some_object, "execute")     # some_object.execute(args, options)

            @command.when_called
            def handle(args, options): ...

        Returns target, so it can be used as a decorator.
        """
        if target is Unset:
            raise TypeError("when_called() must be given an object, a class or a callable")
        self._handler = _resolve_handler(target, method)
        return target

    def run(self, *args, proxied=()):
        """
        Parse args, then call the handler with (remaining_args, options).

        Parameters
        - args: raw tokens for this command (name words already removed).
        - proxied: (identifier, value) pairs forwarded by the runner for this run.

        Returns the handler's result, or None when no handler is set.

        Raises
        - FlagError subclasses from the flag parser; they are not caught here.
        """
        args = list(args)
        values = list(proxied)

        parser = FlagParser()
        for spec in self._options:
            parser.on(spec, spec.handler or self._proxy(spec, values))
        parser.parse(args)

        options = self.proxy_options(values)
        if self._handler is None:
            return None
        return self._handler(args, options)

    @staticmethod
    def proxy_options(values, /):
        """Materialize (identifier, value) pairs into a fresh Options accessor."""
        return Options(values)

    @staticmethod
    def _proxy(spec, values):
        """default option callback: record the value under the spec's identifier."""
        return rename(lambda value: values.append((spec.identifier, value)), "proxy")

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "command(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


__all__ = (
    "Command",
    "Callback",
    "Constructor",
    "BoundMethod",
)
