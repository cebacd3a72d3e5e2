"""
Argot utilities: the Unset sentinel and property helpers.

- Unset marks "not provided" where None is a legitimate value (a declared
  default of None, a converter result). bool(Unset) is False.
- coalesce(value, default) resolves Unset and keeps every other value, falsy
  ones included.
- rename("name") gives generated callables a readable __name__/__qualname__.
- mirror("attr") publishes self._attr as a read-only property; lists and
  mappings come out as tuples and mapping proxies so the registries cannot be
  mutated from the outside.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(0, "fallback")
    0
"""
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Type of the Unset singleton.

    Supports `str | Unset` in isinstance checks, survives copy/pickle as the
    same object and refuses subclasses.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' cannot be subclassed")


def coalesce(object, default=None, /):
    """
    Return `object`, or `default` when it is Unset.
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of the decorated callable.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(callable):
        callable.__name__ = callable.__qualname__ = name
        return callable

    return decorator


def _freeze(object):
    # shallow: the entities inside stay the live registry objects
    if isinstance(object, Sequence) and not isinstance(object, (str, bytes, bytearray)):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Read-only property returning a frozen view of `self._{name}`.

    Example
    - class Interface: arguments = mirror("arguments")  # reads self._arguments
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


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
