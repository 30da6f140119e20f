"""
Bosun utilities shared by the arguments, commands and runner layers.

- Unset: "no value given" marker, distinct from None. Options accessors
  return it for identifiers that were never set.
- coalesce(value, default): Unset → default, anything else unchanged.
- rename(callable, name): give generated callbacks a readable name.
- mirror("attr"): read-only property exposing self._attr as a frozen snapshot.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset marker: one falsy instance per process, printed as "Unset".

    Copies return the instance itself and the type cannot be subclassed.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """Return default when object is Unset; None, 0 and "" are kept as given."""
    return default if object is Unset else object


def rename(callable, name, /):
    """Set __name__ and __qualname__ of callable to name and return it."""
    if not builtins.callable(callable):
        raise TypeError("rename() first argument must be callable")
    if not isinstance(name, str):
        raise TypeError("rename() second argument must be a string")
    callable.__name__ = callable.__qualname__ = name
    return callable


def _freeze(object):
    """
    Shallow-freeze a container for public exposure.

    - Sequence (non-string) → tuple
    - Mapping → read-only MappingProxyType over a snapshot
    - Set → frozenset
    - anything else → returned as-is
    """
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    elif isinstance(object, Mapping):
        return MappingProxyType(dict(object))
    elif isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The generated property reads "_{name}" on the instance and returns a frozen
    snapshot for container types.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(rename(getter, name))


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
