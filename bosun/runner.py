"""
Bosun runner: command registry, name resolution, global switches and dispatch.

Flow of Runner.run()
1. program metadata "name", "version" and "description" must be set.
2. the built-in globals -h/--help, -v/--version and -t/--trace are installed.
3. the active command is resolved from argv without its global switches
   (see command_name_from_args), global switches are parsed from a copy of argv
   without failing on switches they do not know, then stripped from argv.
4. the active command parses what is left and calls its handler with
   (positional_args, options).

Errors are rendered on stderr and end the process with status 1, unless
--trace was given, in which case they propagate.

Quick start
    import sys
    from bosun import Runner

    runner = Runner(sys.argv[1:])
    runner.program("version", "1.0.0")
    runner.program("description", "Toolkit for remotes")

    command = runner.command("remote add")
    command.option("-f", "--fetch", "Fetch after adding")

    @command.when_called
    def add(args, options):
        ...

    runner.global_option("-c", "--config FILE", "Load config data for your commands to use")
    runner.alias_command("ra", "remote add", "--fetch")
    runner.run()
"""
import os
import sys

from rich.text import Text

from . import ui
from .arguments import OptionSpec
from .commands import Command
from .faults import *
from .flags import FlagParser
from .help import TerminalHelpFormatter
from .switches import delete_switches
from .utils import *


class _Halt(Exception):
    """stops a run after --help or --version did their job"""


def _discard(value):
    pass


class Runner:
    """
    Registry of commands, aliases and global switches for one program.

    Registration
    - program(key, *values), command(name), add_command(command),
      alias_command(alias, name, *args), default_command(name),
      global_option(*args, handler=None).

    Resolution and dispatch
    - command_name_from_args, active_command, args_without_command_name(),
      parse_global_options(), remove_global_options(), run_active_command().

    Per-invocation state (resolved name, active command, proxied global values,
    trace flag) is reset at the start of every run().
    """

    commands = mirror("commands")
    aliases = mirror("aliases")
    global_options = mirror("global_options")

    def __init__(self, argv=Unset, /):
        argv = sys.argv[1:] if argv is Unset else argv
        if isinstance(argv, str):
            raise TypeError("runner argv must be a sequence of strings")
        argv = list(argv)
        if not all(isinstance(arg, str) for arg in argv):
            raise TypeError("runner argv must be a sequence of strings")
        self._argv = argv
        self._commands = {}
        self._aliases = {}
        self._global_options = []
        self._default = None
        self._program = {
            "name": os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "bosun",
            "int_message": "\nProcess interrupted",
            "help_formatter": TerminalHelpFormatter,
        }
        self._installed = False
        self._reset()
        self._create_default_commands()

    @property
    def argv(self):
        """The (mutable) argument vector of this runner."""
        return self._argv

    def _reset(self):
        self._name = Unset
        self._active = Unset
        self._proxied = []
        self._trace = False

    # --- registration -------------------------------------------------------

    def program(self, key, /, *values):
        """
        Set or get program metadata.

        - program("version", "1.0.0")          set (one value)
        - program("version")                   get (None when unset)
        - program("help", "Copyright", "...")  add an extra global help block

        Keys used by bosun: name, version, description, int_message,
        help_formatter, help.
        """
        if not isinstance(key, str):
            raise TypeError("program() key must be a string")
        if key == "help" and values:
            if len(values) != 2:
                raise TypeError("program('help', title, body) takes exactly a title and a body")
            self._program.setdefault("help", {})[values[0]] = values[1]
        elif values:
            self._program[key] = values[0] if len(values) == 1 else values
        return self._program.get(key)

    def command(self, name, /):
        """Return the command registered under name, creating it when needed."""
        if (command := self.find_command(name)) is None:
            command = self.add_command(Command(name))
        return command

    def find_command(self, name, /):
        """Return the command registered under name, or None."""
        if not isinstance(name, str):
            return None
        return self._commands.get(" ".join(name.split()))

    def add_command(self, command, /):
        """Register command under its name, replacing any previous one. Returns it."""
        if not isinstance(command, Command):
            raise TypeError("add_command() argument must be a command")
        self._commands[command.name] = command
        return command

    def alias_command(self, alias, name, /, *args):
        """
        Make alias run the command registered under name, with args prepended
        to its positional arguments.

        Raises
        - InvalidCommandError: when no command is registered under name.
        """
        if not isinstance(alias, str) or not (alias := " ".join(alias.split())):
            raise TypeError("alias_command() alias must be a non-empty string")
        if (command := self.find_command(name)) is None:
            raise InvalidCommandError("invalid command %s" % name)
        self._commands[alias] = command
        self._aliases[alias] = list(args)
        return command

    def default_command(self, name, /):
        """Run the command registered under name when argv names no command."""
        if not isinstance(name, str):
            raise TypeError("default_command() argument must be a string")
        self._default = " ".join(name.split())

    def global_option(self, *args, handler=None):
        """
        Register a switch shared by every command.

        Its value is handed to handler (when given, and when the value is not
        None) and forwarded to the options of the active command.

        Returns the registered OptionSpec.
        """
        spec = OptionSpec.parse(*args, handler=handler)
        self._global_options.append(spec)
        return spec

    def is_alias(self, name, /):
        return isinstance(name, str) and " ".join(name.split()) in self._aliases

    def command_exists(self, name, /):
        return self.find_command(name) is not None

    # --- resolution ---------------------------------------------------------

    def valid_command_names_from(self, *args):
        """Registered names that the non-switch words of args start with."""
        words = " ".join(delete_switches(args))
        return [name for name in self._commands if words.startswith(name)]

    @property
    def command_name_from_args(self):
        """
        Name of the command argv refers to, cached per run.

        Global switches and the values they take are left out first. Among the
        registered names that the joined remaining non-switch words start
        with, the lexicographically greatest one wins ("remote add" over
        "remote"); the default command name otherwise; None when neither.
        """
        if self._name is Unset:
            self._name = max(self.valid_command_names_from(*self._without_global_options()), default=None) or self._default
        return self._name

    @property
    def active_command(self):
        """The command argv refers to (cached per run), or None."""
        if self._active is Unset:
            self._active = None if (name := self.command_name_from_args) is None else self.find_command(name)
        return self._active

    def args_without_command_name(self):
        """argv without the words of the resolved command name, each removed once."""
        parts = (self.command_name_from_args or "").split()
        removed = []
        args = []
        for arg in self._argv:
            if arg in parts and arg not in removed:
                removed.append(arg)
            else:
                args.append(arg)
        return args

    def require_valid_command(self, command=Unset, /):
        """Return command (the active one by default), raising InvalidCommandError when None."""
        if (command := coalesce(command, self.active_command)) is None:
            raise InvalidCommandError("invalid command")
        return command

    def require_program(self, *keys):
        """Raise MissingProgramMetadataError for the first key with no program metadata."""
        for key in keys:
            if not self._program.get(key):
                raise MissingProgramMetadataError("program %s required" % key)

    # --- global switches ----------------------------------------------------

    def _global_callback(self, spec):
        def callback(value):
            if self.active_command is not None:
                self._proxied.append((spec.identifier, value))
            if spec.handler is not None and value is not None:
                spec.handler(value)

        return rename(callback, "global_" + (spec.identifier or "option"))

    def parse_global_options(self):
        """
        Run the global switches over a copy of argv.

        Switches unknown to the global set are skipped; errors on switches it
        knows (missing, needless or invalid arguments) propagate.
        """
        parser = FlagParser()
        for spec in self._global_options:
            parser.on(spec, self._global_callback(spec))
        parser.parse(list(self._argv), lenient=True)

    def remove_global_options(self):
        """Strip global switches (and the values they took) from argv, in place."""
        self._strip(self._argv)

    def _without_global_options(self):
        return self._strip(list(self._argv))

    def _strip(self, args):
        parser = FlagParser()
        for spec in self._global_options:
            parser.on(spec, _discard)
        return parser.parse(args, lenient=True)

    def _install_global_options(self):
        if self._installed:
            return
        self._installed = True
        self.global_option("-h", "--help", "Display help documentation", handler=self._help_switch)
        self.global_option("-v", "--version", "Display version information", handler=self._version_switch)
        self.global_option("-t", "--trace", "Display backtrace when an error occurs", handler=self._trace_switch)

    def _help_switch(self, value):
        names = self.valid_command_names_from(*self._without_global_options())
        self.find_command("help").run(*max(names, default="").split())
        raise _Halt

    def _version_switch(self, value):
        ui.say(self.version)
        raise _Halt

    def _trace_switch(self, value):
        self._trace = True

    # --- dispatch -----------------------------------------------------------

    def run_active_command(self):
        """Dispatch argv to the active command and return its handler's result."""
        command = self.require_valid_command()
        args = self.args_without_command_name()
        if self.is_alias(name := self.command_name_from_args):
            args = self._aliases[name] + args
        return command.run(*args, proxied=self._proxied)

    def run(self):
        """
        Run the program against argv.

        Returns the handler's result (None after --help / --version).

        Raises
        - MissingProgramMetadataError: name, version or description is missing.
        - SystemExit(1): on any error while tracing is off, or on interruption.
        """
        self.require_program("name", "version", "description")
        self._reset()
        self._install_global_options()
        try:
            self.parse_global_options()
            self.remove_global_options()
            return self.run_active_command()
        except _Halt:
            return None
        except KeyboardInterrupt:
            trigger(InterruptionError(self.program("int_message").strip()), prog=self.program("name"))
        except Exception as exception:
            if self._trace:
                raise
            self._abort(exception)

    def _abort(self, exception):
        match exception:
            case InvalidCommandError():
                fault, hint = exception, "Use --help for more information"
            case FlagError():
                fault, hint = exception, None
            case _:
                fault = DelegatedCommandError("error: %s" % exception)
                fault.__cause__ = exception
                hint = "Use --trace to view backtrace"
        trigger(fault, prog=self.program("name"), hint=hint)

    # --- program information ------------------------------------------------

    @property
    def version(self):
        """"<name> <version>" as printed by --version."""
        return "%s %s" % (self.program("name"), self.program("version"))

    @property
    def help_formatter(self):
        """The help formatter instance (program("help_formatter") bound to this runner)."""
        return self.program("help_formatter")(self)

    def _create_default_commands(self):
        command = self.command("help")
        command.syntax = "command help <sub_command>"
        command.summary = "Display help documentation for <sub_command>"
        command.description = "Display help documentation for the global or sub commands"
        command.example("Display global help", "command help")
        command.example("Display help for 'foo'", "command help foo")
        command.when_called(self._help)

    def _help(self, args, options):
        with ui.paging():
            if not args:
                ui.say(Text.from_ansi(self.help_formatter.render()))
            else:
                command = self.require_valid_command(self.find_command(" ".join(args)))
                ui.say(Text.from_ansi(self.help_formatter.render_command(command)))

    def __repr__(self):
        return "runner(name=%r, commands=%r)" % (self.program("name"), tuple(self._commands))


__all__ = (
    "Runner",
)
