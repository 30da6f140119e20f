r"""
Bosun switch descriptors.

A switch descriptor is the heterogeneous argument list handed to
Command.option(...) / Runner.global_option(...):

    option("-f", "--file FILE", str, "Read input from FILE")
    option("--code CODE", ["utf8", "binary"], {"bin": "binary"}, "Select encoding")
    option("-v", "--[no-]verbose", "Run verbosely")

This module splits such a list into its parts and reads the switch literals:
- separate_switches_from_description(*args) → (switches, description)
- separate_value_type(*args) → coercion (callable or enumeration) or None
- parse_switch(literal) → Switch(names, metavar, argument)
- switch_to_identifier(literal) → accessor identifier ("--some-switch" → "some_switch")

Switch literal grammar
- "-x" / "--name"                  presence-only
- "--[no-]name"                    negatable: "--name" → True, "--no-name" → False
- "--name VALUE" / "--name=VALUE"  required value
- "--name [VALUE]"                 optional value
- "-x VALUE" / "-x [VALUE]"        the same for short switches
"""
import re
from collections import namedtuple
from collections.abc import Mapping, Set
from types import MappingProxyType

_SWITCH = re.compile(
    r"(?P<prefix>--?)(?P<negatable>\[no-\])?(?P<name>[^\W_][\w-]*)"
    r"(?:(?:\s+|=)(?P<metavar>\S.*?))?\s*"
)

Switch = namedtuple("Switch", ("names", "metavar", "argument"))
Switch.__doc__ = """
Parsed switch literal.

- names: tuple of the bare switch names the literal accepts (e.g. ("--x", "--no-x")).
- metavar: the value placeholder without brackets (e.g. "FILE"), or None.
- argument: "required", "optional" or None (presence-only).
"""


def is_switch(token, /):
    """Return True when token is textual and looks like a switch (leading '-')."""
    return isinstance(token, str) and token.startswith("-")


def delete_switches(args, /):
    """Return a new list holding only the tokens of args that do not look like switches."""
    return [arg for arg in args if not is_switch(arg)]


def separate_switches_from_description(*args):
    """
    Split a descriptor into its switch literals and its description.

    switches are every textual argument beginning with '-', in order.
    the description is the last argument, only when it is textual and does not
    itself look like a switch; otherwise it is None.

    >>> separate_switches_from_description("-f", "--file FILE", str, "Input file")
    (['-f', '--file FILE'], 'Input file')
    """
    switches = [arg for arg in args if is_switch(arg)]
    description = args[-1] if args and isinstance(args[-1], str) and not is_switch(args[-1]) else None
    return switches, description


def separate_value_type(*args):
    """
    Pick the value coercion out of a descriptor.

    - list/tuple/set arguments contribute allowed words (each maps to itself).
    - mapping arguments contribute alias words (word → value).
    - when any word was contributed, the merged enumeration is returned as a
      read-only mapping; otherwise the first non-string callable (int, float,
      list, a converter function, ...) is returned; otherwise None.
    """
    coercion = None
    words = {}
    for arg in args:
        if isinstance(arg, str):
            continue
        if isinstance(arg, Mapping):
            words.update((str(word), value) for word, value in arg.items())
        elif isinstance(arg, list | tuple | Set):
            words.update((str(word), word) for word in arg)
        elif callable(arg) and coercion is None:
            coercion = arg
        else:
            raise TypeError("switch descriptor argument %r is not a switch, description or coercion" % (arg,))
    if words:
        return MappingProxyType(words)
    return coercion


def parse_switch(literal, /):
    """
    Read one switch literal into a Switch record.

    Raises
    - TypeError: when literal is not a string.
    - ValueError: when literal does not follow the switch grammar.
    """
    if not isinstance(literal, str):
        raise TypeError("switch literal must be a string")
    match = _SWITCH.fullmatch(literal.strip())
    if not match:
        raise ValueError("bad switch literal %r" % literal)

    name = match["prefix"] + match["name"]
    names = (name,)
    if match["negatable"]:
        if match["prefix"] != "--":
            raise ValueError("only long switches can be negatable: %r" % literal)
        names += ("--no-" + match["name"],)

    metavar = match["metavar"]
    if metavar is None:
        return Switch(names, None, None)
    if metavar.startswith("[") and metavar.endswith("]"):
        return Switch(names, metavar[1:-1].strip() or None, "optional")
    return Switch(names, metavar, "required")


def switch_to_identifier(literal, /):
    """
    Derive the accessor identifier of a switch literal.

    Every word-character run immediately following a '-' or ']' is taken,
    runs are joined with '_' and the result is lower-cased.

    - "-h"              → "h"
    - "--trace"         → "trace"
    - "--some-switch"   → "some_switch"
    - "--[no-]feature"  → "feature"
    - "--file FILE"     → "file"
    - "--list WORDS"    → "list"

    Returns None when the literal holds no such run.
    """
    return "_".join(re.findall(r"[-\]](\w+)", literal)).lower() or None


__all__ = (
    "Switch",
    "is_switch",
    "delete_switches",
    "separate_switches_from_description",
    "separate_value_type",
    "parse_switch",
    "switch_to_identifier",
)
