"""
Bosun help formatters.

A help formatter is a read-only view over a runner and its commands:

    formatter = TerminalHelpFormatter(runner)
    formatter.render()                     # global help → str
    formatter.render_command(command)      # one command → str

The runner instantiates the class stored in program("help_formatter") with
itself, so applications can plug their own formatter:

    class PlainHelp(HelpFormatter):
        def render(self): ...
        def render_command(self, command): ...

    runner.program("help_formatter", PlainHelp)
"""
from collections import defaultdict

from rich.console import Console, Group
from rich.padding import Padding
from rich.table import Table
from rich.text import Text

from . import ui


class HelpFormatter:
    """Base help formatter: holds the runner; subclasses render text."""

    def __init__(self, runner, /):
        self._runner = runner

    @property
    def runner(self):
        return self._runner

    def render(self):
        raise NotImplementedError

    def render_command(self, command, /):
        raise NotImplementedError


class TerminalHelpFormatter(HelpFormatter):
    """
    Help laid out for a terminal with rich, returned as text.

    Palette keys
    - usage-label, usage-section, description-section
    - section-label, command-name, alias-name, switch, summary
    - examples-dot, example-description, example

    Customization
    - Define a mapping named __styles__ in __main__ to override any palette entry.
    - colorful=False (the default when stdout is not a terminal) renders plain text.
    """

    def __init__(self, runner, /, *, colorful=None, width=None):
        super().__init__(runner)
        self.colorful = ui.console.is_terminal if colorful is None else colorful
        self.width = min(ui.console.width, 100) if width is None else width

    def _styles(self):
        return defaultdict(str, {
            "usage-label": "bold #00E6FF",
            "usage-section": "bold #36C5F0",
            "description-section": "italic #A3A3A3",

            "section-label": "bold #FFFFFF",
            "command-name": "bold #36C5F0",
            "alias-name": "bold #22C55E",
            "switch": "bold #00E6FF",
            "summary": "#9CA3AF",

            "examples-dot": "#22C55E dim",
            "example-description": "#E5E7EB",
            "example": "bold #FFD600",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def _text(self, fragment, style=""):
        if not fragment:
            return Text("")
        return Text(str(fragment), self._styles()[style] if self.colorful else "")

    def _section(self, label, rows):
        """label line followed by an indented two-column grid"""
        table = Table.grid(padding=(0, 3))
        table.add_column(no_wrap=True)
        table.add_column()
        for row in rows:
            table.add_row(*row)
        return Group(Text.assemble(self._text(label, "section-label"), ":"), Padding(table, (0, 0, 1, 2)))

    def _capture(self, renders):
        console = Console(
            width=self.width,
            color_system="truecolor" if self.colorful else None,
            force_terminal=self.colorful,
            highlight=False,
        )
        with console.capture() as capture:
            console.print(Group(*renders))
        return capture.get().rstrip() + "\n"

    def _usage(self, syntax):
        return Text.assemble(
            self._text("usage", "usage-label"), ": ",
            self._text(syntax, "usage-section"),
            "\n",
        )

    def render(self):
        """
        Global help: usage, description, commands, aliases, global options and
        the extra program("help", title, body) blocks, in that order.
        """
        runner = self._runner
        name = runner.program("name")
        renders = [self._usage("%s [global options] <command> [options] [arguments]" % name)]

        if description := runner.program("description"):
            renders.append(Text.assemble(self._text(description, "description-section"), "\n"))

        commands = [
            (self._text(command_name, "command-name"), self._text(command.summary or command.description, "summary"))
            for command_name, command in sorted(runner.commands.items())
            if not runner.is_alias(command_name)
        ]
        if commands:
            renders.append(self._section("commands", commands))

        aliases = [
            (self._text(alias, "alias-name"), self._text(" ".join((runner.commands[alias].name, *args)), "summary"))
            for alias, args in sorted(runner.aliases.items())
        ]
        if aliases:
            renders.append(self._section("aliases", aliases))

        if runner.global_options:
            renders.append(self._section("global options", [
                (self._text(", ".join(spec.switches), "switch"), self._text(spec.description, "summary"))
                for spec in runner.global_options
            ]))

        for title, body in (runner.program("help") or {}).items():
            renders.append(Group(
                Text.assemble(self._text(title, "section-label"), ":"),
                Padding(self._text(body, "summary"), (0, 0, 1, 2)),
            ))

        return self._capture(renders)

    def render_command(self, command, /):
        """Help of one command: usage (its syntax), description, examples and options."""
        name = self._runner.program("name")
        renders = [self._usage(command.syntax or "%s %s [options]" % (name, command.name))]

        if description := command.description or command.summary:
            renders.append(Text.assemble(self._text(description, "description-section"), "\n"))

        if command.examples:
            examples = Text.assemble(self._text("examples", "section-label"), ":\n")
            for description, example in command.examples:
                examples.append(self._text(" • ", "examples-dot"))
                examples.append(self._text(description, "example-description")).append("\n")
                examples.append("     ").append(self._text(example, "example")).append("\n")
            renders.append(examples)

        if command.options:
            renders.append(self._section("options", [
                (self._text(", ".join(spec.switches), "switch"), self._text(spec.description, "summary"))
                for spec in command.options
            ]))

        return self._capture(renders)


__all__ = (
    "HelpFormatter",
    "TerminalHelpFormatter",
)
