r"""
Bosun option specifications and the options accessor.

Overview
- OptionSpec
  • Immutable record of one switch family: switch literals, description,
    value coercion and an optional value handler.
  • Built straight from a switch descriptor with OptionSpec.parse(*args).
  • Derives the accessor identifier from its LAST switch literal, and reads the
    literals to know its bare names and whether it takes a value.

- Options
  • Order-preserving, dynamically keyed read/write bag handed to command handlers.
  • Materialized from (identifier, value) pairs by sequential insertion; later
    pairs overwrite earlier ones.
  • Identifiers that were never set read as Unset, never as an error.

Quick example:
    >>> spec = OptionSpec.parse("-f", "--file FILE", "Read input from FILE")
    >>> spec.identifier, spec.names, spec.argument
    ('file', ('-f', '--file'), 'required')
    >>> options = Options([("file", "a.txt"), ("file", "b.txt")])
    >>> options.get("file"), options.get("verbose")
    ('b.txt', Unset)

Public API
- Classes: OptionSpec, Options
"""
import functools
import itertools
import operator
from collections.abc import Mapping, MutableMapping

from .switches import *
from .utils import *


class OptionSpec:
    """
    Immutable description of one registered switch family.

    Fields
    - switches: tuple[str]
      The literal switch tokens as registered ("-f", "--file FILE", "--[no-]x").
    - description: str | None
      Free text shown in help.
    - value_type: Callable | Mapping | None
      Coercion applied to the raw value (callable converter, list/tuple for
      comma-separated values, or a word → value enumeration).
    - handler: Callable[[Any], Any] | None
      Called with the parsed value. When None, the owner proxies the value
      into the options accessor instead.

    Derived (read-only)
    - identifier: accessor name derived from the last switch literal.
    - names: every bare switch name the spec accepts, in registration order.
    - argument: "required" | "optional" | None, the strongest value requirement
      declared by any of the literals.
    - metavar: first value placeholder declared by the literals, or None.
    """

    __introspectable__ = (
        "switches",
        "description",
        "value_type",
        "handler",
    )

    switches = mirror("switches")
    description = mirror("description")
    value_type = mirror("value_type")
    handler = mirror("handler")

    def __init__(self, switches, /, description=None, value_type=None, handler=None):
        """
        Construct an OptionSpec from already separated parts.

        Raises
        - TypeError: no switches given, non-string switches/description, or a
          non-callable handler.
        - ValueError: a malformed switch literal, or a bare name accepted twice.
        """
        switches = tuple(switches)
        if not switches:
            raise TypeError("option must specify at least one switch")
        if not isinstance(description, str | None):
            raise TypeError("option 'description' must be a string")
        if handler is not None and not callable(handler):
            raise TypeError("option 'handler' must be callable")
        if value_type is not None and not isinstance(value_type, Mapping) and not callable(value_type):
            raise TypeError("option 'value_type' must be callable or a mapping")

        # parse_switch raises on malformed literals and non-strings
        parsed = tuple(map(parse_switch, switches))
        names = tuple(itertools.chain.from_iterable(switch.names for switch in parsed))
        if len(set(names)) != len(names):
            raise ValueError("option switches cannot contain duplicates")

        arguments = {switch.argument for switch in parsed}
        self._switches = switches
        self._description = description
        self._value_type = value_type
        self._handler = handler
        self._names = names
        self._negatable = frozenset(name for switch in parsed for name in switch.names[1:])
        self._argument = "required" if "required" in arguments else "optional" if "optional" in arguments else None
        self._metavar = next((switch.metavar for switch in parsed if switch.metavar), None)
        self._identifier = switch_to_identifier(switches[-1])

    @classmethod
    def parse(cls, *args, handler=None):
        """
        Build an OptionSpec from a heterogeneous switch descriptor.

        >>> OptionSpec.parse("--delay N", float, "Delay N seconds").value_type
        <class 'float'>
        """
        switches, description = separate_switches_from_description(*args)
        return cls(switches, description, separate_value_type(*args), handler)

    names = mirror("names")

    @property
    def identifier(self):
        return self._identifier

    @property
    def argument(self):
        return self._argument

    @property
    def metavar(self):
        return self._metavar

    def negates(self, name, /):
        """Return True when the bare name is the "--no-" form of a negatable switch."""
        return name in self._negatable

    def __setattr__(self, name, value):
        if not name.startswith("_"):
            raise AttributeError("option spec is read-only")
        super().__setattr__(name, value)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "option-spec(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))


class Options(MutableMapping):
    """
    Options accessor delivered to command handlers.

    A plain mapping from identifier to the last value set for it. Any identifier
    is legal: unset identifiers read as Unset (falsy), so handlers can write

        if options["verbose"]:
            ...
        path = coalesce(options.get("file"), "default.txt")
    """

    def __init__(self, values=(), /):
        self._table = {}
        if isinstance(values, Mapping):
            values = values.items()
        for identifier, value in values:
            self.set(identifier, value)

    def get(self, identifier, default=Unset, /):
        return self._table.get(identifier, default)

    def set(self, identifier, value, /):
        """Store value under identifier (overwriting) and return it."""
        self._table[identifier] = value
        return value

    def default(self, defaults=(), /, **options):
        """
        Fill in defaults for identifiers that were not set; parsed values win.

        Returns self for chaining.
        """
        for identifier, value in dict(defaults, **options).items():
            self._table.setdefault(identifier, value)
        return self

    def pop(self, identifier, /, *default):
        return self._table.pop(identifier, *default)

    def setdefault(self, identifier, default=None, /):
        return self._table.setdefault(identifier, default)

    def __getitem__(self, identifier):
        return self._table.get(identifier, Unset)

    def __setitem__(self, identifier, value):
        self._table[identifier] = value

    def __delitem__(self, identifier):
        del self._table[identifier]

    def __contains__(self, identifier):
        return identifier in self._table

    def __iter__(self):
        return iter(self._table)

    def __len__(self):
        return len(self._table)

    def __rich_repr__(self):
        yield from self._table.items()

    def __repr__(self):
        return "options(%s)" % ", ".join(map(functools.partial(operator.mod, "%s=%r"), self._table.items()))


__all__ = (
    "OptionSpec",
    "Options",
)
