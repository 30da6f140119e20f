"""
Bosun terminal interaction helpers.

Thin wrappers over a shared rich console (stdout), for use inside command
handlers:

    from bosun import ui

    ui.say("done")
    ui.log("create", "path/to/file.rb")        # "         create  path/to/file.rb"
    name = ui.ask("Name")
    age = ui.ask("Age", type=int, default=30)
    secret = ui.password()
    ports = ui.ask_for_list("Ports")          # "80 443" → ["80", "443"]
    message = ui.ask_editor("# describe the change")
    with ui.paging():
        ui.say(long_text)
    for item in ui.progress(items, "Uploading"):
        ...
"""
import contextlib
import functools
import os
import shlex
import subprocess

from rich.console import Console
from rich.progress import track
from rich.prompt import Prompt
from rich.text import Text

from .utils import Unset

console = Console()


def say(*objects, **options):
    """
    Print objects on the console.

    Strings are printed verbatim (no markup, no highlighting) unless the caller
    passes markup=True / highlight=True.
    """
    console.print(*objects, **{"markup": False, "highlight": False} | options)


def log(action, /, *args):
    """Print an action log line: the action right-aligned in 15 columns, then args."""
    say("%15s  %s" % (action, " ".join(map(str, args))))


def ask(prompt, /, *, type=str, default=Unset, choices=None):
    """
    Prompt for a value and convert it with type, asking again until it converts.

    A default (returned as-is on empty input) and a list of accepted choices
    may be given.
    """
    options = {} if default is Unset else {"default": default}
    while True:
        answer = Prompt.ask(prompt, console=console, choices=choices, **options)
        if default is not Unset and answer is default:
            return answer
        try:
            return type(answer)
        except (ValueError, TypeError):
            console.print(Text("Please enter a valid value", style="prompt.invalid"))


def ask_for(type, prompt, /, **options):
    """
    ask() for a value of the given type.

    list answers are split on whitespace; any other type converts the answer.
    """
    return ask(prompt, type=str.split if type is list else type, **options)


ask_for_int = functools.partial(ask_for, int)
ask_for_float = functools.partial(ask_for, float)
ask_for_list = functools.partial(ask_for, list)


def ask_editor(input=None, /, editor=None):
    """
    Pipe input through an editor command and return what it writes back.

    The editor defaults to $EDITOR, then "vi". It may carry its own
    arguments ("code --wait"). A non-zero exit raises
    subprocess.CalledProcessError.
    """
    editor = editor or os.environ.get("EDITOR") or "vi"
    process = subprocess.run(
        shlex.split(editor),
        input="" if input is None else "%s\n" % input,
        stdout=subprocess.PIPE,
        text=True,
        check=True,
    )
    return process.stdout


def password(prompt="Password", /):
    """Prompt for a secret without echoing it, asking again until it is non-empty."""
    while not (secret := Prompt.ask(prompt, console=console, password=True)):
        pass
    return secret


@contextlib.contextmanager
def paging():
    """
    Page everything printed on the console inside the block through the system pager.

    Paging only happens when stdout is a terminal; otherwise output goes
    straight through. LESS defaults to "FSRX" so short output does not page.
    """
    if not console.is_terminal:
        yield
        return
    os.environ.setdefault("LESS", "FSRX")
    with console.pager(styles=True):
        yield


def progress(iterable, title="Progress", /, *, total=None):
    """Iterate over iterable while showing a progress bar labelled title."""
    return track(iterable, description=title, total=total, console=console)


__all__ = (
    "console",
    "say",
    "log",
    "ask",
    "ask_for",
    "ask_for_int",
    "ask_for_float",
    "ask_for_list",
    "ask_editor",
    "password",
    "paging",
    "progress",
)
