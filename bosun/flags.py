r"""
Bosun flag parser.

A small, synchronous switch parser with a two-call contract:

    parser = FlagParser()
    parser.on(spec, callback)          # register one OptionSpec + value callback
    parser.parse(args)                 # parse the list in place

parse() walks the list once. Every recognized switch (and the value it
consumes) is removed from the list, and the callback of its spec is invoked
right away with the parsed value. Everything else stays in the list, in order.

Accepted forms
- long:  --name | --name=value | --name value | --no-name (for --[no-]name specs)
         long names may be abbreviated to a unique prefix (strict mode only).
- short: -x | -x value | -xvalue | -abc (clustered presence-only switches)
- "--" ends switch parsing; a lone "-" is an ordinary token.

Values handed to callbacks
- presence-only switch → True (False for the "--no-" form)
- switch with a value  → the coerced value (see OptionSpec.value_type)
- optional value absent → None

Lenient mode (parse(args, lenient=True))
- unknown switches are left untouched instead of raising UnknownSwitchError,
  abbreviations are not expanded, and "--" plus everything after it is kept.
- failures on switches the parser does recognize (missing/needless/invalid
  argument) still raise.
"""
from collections import deque
from collections.abc import Mapping

from .arguments import OptionSpec
from .faults import *
from .switches import is_switch
from .utils import Unset


class FlagParser:
    """
    One-shot switch parser over a set of registered OptionSpecs.

    Later registrations of the same bare switch name replace earlier ones.
    """

    def __init__(self):
        self._switches = {}

    @property
    def switches(self):
        """Registered bare switch names, in registration order."""
        return tuple(self._switches)

    def on(self, spec, callback, /):
        """
        Register spec; callback(value) fires each time one of its switches is parsed.

        Returns self for chaining.
        """
        if not isinstance(spec, OptionSpec):
            raise TypeError("on() first argument must be an option spec")
        if not callable(callback):
            raise TypeError("on() second argument must be callable")
        for name in spec.names:
            self._switches[name] = (spec, callback)
        return self

    def parse(self, args, /, *, lenient=False):
        """
        Parse args in place and return it.

        Raises
        - UnknownSwitchError (strict mode only), AmbiguousSwitchError,
          MissingArgumentError, NeedlessArgumentError, InvalidArgumentError.
        """
        remaining = []
        tokens = deque(args)

        while tokens:
            token = tokens.popleft()

            if token == "--":
                # terminator: everything after it is positional
                if lenient:
                    remaining.append(token)
                remaining.extend(tokens)
                break

            if not is_switch(token) or token == "-":
                remaining.append(token)
                continue

            if token.startswith("--"):
                matched = self._parse_long(token, tokens, lenient)
            else:
                matched = self._parse_short(token, tokens, lenient)

            if not matched:
                remaining.append(token)

        args[:] = remaining
        return args

    def _lookup(self, name, lenient):
        """resolve a long name exactly, or (strict mode) by unique prefix."""
        if name in self._switches:
            return name
        if lenient:
            return None

        candidates = [switch for switch in self._switches if switch.startswith("--") and switch.startswith(name)]
        # aliases of one spec are not ambiguous between themselves
        if len({id(self._switches[switch][0]) for switch in candidates}) > 1:
            raise AmbiguousSwitchError.of(name)
        return candidates[0] if candidates else None

    def _parse_long(self, token, tokens, lenient):
        name, separator, inline = token.partition("=")
        if not (resolved := self._lookup(name, lenient)):
            if lenient:
                return False
            raise UnknownSwitchError.of(name)

        spec, callback = self._switches[resolved]
        callback(self._value(spec, resolved, inline if separator else Unset, tokens))
        return True

    def _parse_short(self, token, tokens, lenient):
        # whole-token match first: "-x" and single-dash long names like "-long"
        if token in self._switches:
            spec, callback = self._switches[token]
            callback(self._value(spec, token, Unset, tokens))
            return True

        # "-xVALUE" / "-abc": plan the whole cluster before firing anything,
        # so an unknown letter in lenient mode leaves the token untouched
        plan = []
        for index in range(1, len(token)):
            name = "-" + token[index]
            if name not in self._switches:
                if lenient:
                    return False
                raise UnknownSwitchError.of(name)
            spec, callback = self._switches[name]
            if spec.argument is not None:
                rest = token[index + 1:].removeprefix("=")
                plan.append((spec, callback, name, rest or Unset))
                break
            plan.append((spec, callback, name, Unset))

        for spec, callback, name, inline in plan:
            callback(self._value(spec, name, inline, tokens))
        return True

    def _value(self, spec, name, inline, tokens):
        """compute the callback value of a matched switch, consuming a value token when needed."""
        if spec.argument is None or spec.negates(name):
            if inline is not Unset:
                raise NeedlessArgumentError.of(name, inline)
            return not spec.negates(name)

        if inline is Unset:
            if tokens and (not is_switch(tokens[0]) or tokens[0] == "-"):
                inline = tokens.popleft()
            elif spec.argument == "required":
                raise MissingArgumentError.of(name)
            else:
                return None

        return self._coerce(spec, name, inline)

    @staticmethod
    def _coerce(spec, name, raw):
        """apply the spec's coercion to a raw value string."""
        value_type = spec.value_type

        if value_type is None:
            return raw

        if isinstance(value_type, Mapping):
            if raw in value_type:
                return value_type[raw]
            candidates = [word for word in value_type if word.startswith(raw)]
            # distinct words completing to one value are fine ("sjis"/"shift_jis")
            if candidates and len({repr(value_type[word]) for word in candidates}) == 1:
                return value_type[candidates[0]]
            raise InvalidArgumentError.of(name, raw)

        if value_type is list or value_type is tuple:
            return value_type(raw.split(","))

        try:
            return value_type(raw)
        except (ValueError, TypeError, ArithmeticError):
            raise InvalidArgumentError.of(name, raw) from None


__all__ = (
    "FlagParser",
)
