"""
Argot value containers: the state shared by arguments and commands.

Overview
- Variant: closed set of container shapes, picked once at construction time.
  • PLAIN  presence-only, never consumes a token.
  • TYPED  one value converted by a callable (int, float, bool, str, custom).
  • ENUM   one value matched against the members of an Enum.
  • PATH   one File/Folder location, optionally checked on disk.
  • MULTI  any number of converted values, appended on every parse.

- EntityType: metaclass that publishes the names listed in __introspectable__
  as read-only properties and gives every entity a stable __repr__ and a
  __rich_repr__ for rich's pretty printer.

- Container: the base of Argument and Command. It owns the converted value,
  the default, the custom validation closure, the per-pass selection state
  and the single parse() operation dispatched on the variant.

One-shot rule
- A non-MULTI container accepts exactly one value per parse pass: a second
  parse() in the same pass fails with "already contains a value". The
  interface clears that state (reset) at the start of every pass.
"""
import builtins
import enum
import re

from .converters import Location, isenum, convert, typename
from .results import ValidationResult
from .utils import *


class Variant(enum.Enum):
    """
    Shape of a container, used for exhaustive dispatch instead of type tests.
    """
    PLAIN = "plain"
    TYPED = "typed"
    ENUM = "enum"
    PATH = "path"
    MULTI = "multi"


class EntityType(type):
    """
    Metaclass for arguments and commands.

    Responsibilities
    - __typename__ is derived from the class name ("argument", "command") and
      used in messages and the manual.
    - every name in __introspectable__ becomes a read-only property mirroring
      the private "_{name}" field.
    - __repr__/__rich_repr__ list the fields named by __displayable__
      (falling back to __introspectable__).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join("%s=%r" % pair for pair in self.__rich_repr__()),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _resolve_variant(cls, type, multiple, /):
    """
    Pick the Variant for a (type, multiple) declaration, rejecting bad shapes.
    """
    if type is Unset:
        if multiple:
            raise TypeError(f"multi-value {cls.__typename__} must specify a 'type'")
        return Variant.PLAIN
    if not (isinstance(type, Location) or isenum(type) or callable(type)):
        raise TypeError(f"{cls.__typename__} 'type' must be callable, an enum or a location")
    if multiple:
        return Variant.MULTI
    if isinstance(type, Location):
        return Variant.PATH
    if isenum(type):
        return Variant.ENUM
    return Variant.TYPED


def _sanitize_descr(cls, descr, /):
    if not isinstance(descr, str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    return coalesce(descr)


class Container(metaclass=EntityType):
    """
    Shared state and parsing of value-carrying entities.

    Subclasses provide `label` (the flag or name quoted in messages) and call
    _setup() from their constructor.

    State
    - _value: converted value of this pass, or Unset.
    - _values: list of converted values (MULTI only).
    - _selected: whether the interface matched this entity in this pass.
    - _interface: owning interface once registered, else Unset.
    """

    def _setup(self, type, default, multiple, descr, validation, /):
        cls = builtins.type(self)
        self._variant = _resolve_variant(cls, type, multiple)
        self._type = coalesce(type)
        if self._variant is Variant.PLAIN and default is not Unset:
            raise TypeError(f"{cls.__typename__} without a 'type' cannot have a 'default'")
        self._default = default
        self._descr = _sanitize_descr(cls, descr)
        if validation is not Unset and not callable(validation):
            raise TypeError(f"{cls.__typename__} 'validation' must be callable")
        self._validation = validation
        self._interface = Unset
        self._selected = False
        self._value = Unset
        self._values = []

    @property
    def label(self):
        raise NotImplementedError

    @property
    def variant(self):
        return self._variant

    @property
    def type(self):
        return self._type

    @property
    def carries_value(self):
        """
        True for every variant that consumes tokens (everything but PLAIN).
        """
        return self._variant is not Variant.PLAIN

    @property
    def multiple(self):
        return self._variant is Variant.MULTI

    @property
    def has_default(self):
        return self._default is not Unset

    @property
    def default(self):
        """
        Declared default value, or None when there is none.
        """
        return coalesce(self._default)

    @property
    def value(self):
        """
        Effective value: the parsed value of this pass, else the default.

        - PLAIN containers have no value (None); read `selected` instead.
        - MULTI containers return the tuple of parsed values, else the default.
        """
        match self._variant:
            case Variant.PLAIN:
                return None
            case Variant.MULTI:
                return tuple(self._values) if self._values else self.default
            case _:
                return coalesce(self._value, self.default)

    @property
    def values(self):
        """
        Every value parsed in this pass (MULTI), or the single one as a 1-tuple.
        """
        if self._variant is Variant.MULTI:
            return tuple(self._values)
        return () if self._value is Unset else (self._value,)

    @property
    def valuetype(self):
        """
        Value-type descriptor for the manual (None for PLAIN containers).
        """
        if self._variant is Variant.PLAIN:
            return None
        return typename(self._type, multiple=self._variant is Variant.MULTI)

    @property
    def selected(self):
        return self._selected

    @property
    def validation(self):
        return coalesce(self._validation)

    @property
    def interface(self):
        return coalesce(self._interface)

    def validator(self, validation, /):
        """
        Install the custom validation closure (decorator friendly).

        The closure takes no arguments and observes the already-converted value
        through the entity it closes over. It may return a ValidationResult, a
        bool, a failure message or None (see ValidationResult.coerce).

        Rules
        - Must be callable.
        - Can be set only once per entity.
        """
        if not callable(validation):
            raise TypeError(f"{type(self).__typename__} validation must be callable")
        if self._validation is not Unset:
            raise TypeError(f"{type(self).__typename__} validation cannot be overridden")
        self._validation = validation
        return validation

    def validate(self):
        """
        Run the custom validation closure, if any, and normalize its outcome.
        """
        if self._validation is Unset:
            return ValidationResult.success
        return ValidationResult.coerce(self._validation())

    def reset(self):
        """
        Forget the selection and every value parsed in the previous pass.
        """
        self._selected = False
        self._value = Unset
        self._values.clear()

    def parse(self, raw, /):
        """
        Convert one raw token and store it, reporting the outcome.

        behavior per variant
        - PLAIN: always fails (presence-only entities take no value).
        - TYPED/ENUM/PATH: fails when a value was already stored in this pass,
          otherwise converts, checks and stores.
        - MULTI: converts, checks and appends; never reports "already set".
        """
        if not isinstance(raw, str):
            raise TypeError(f"{type(self).__typename__} parse() argument must be a string")

        kind = type(self).__typename__

        match self._variant:
            case Variant.PLAIN:
                return ValidationResult.fail("%s %r does not take a value" % (kind, self.label))
            case Variant.TYPED | Variant.ENUM | Variant.PATH:
                if self._value is not Unset:
                    return ValidationResult.fail(
                        "single value %s %r already contains a value %r" % (kind, self.label, self._value)
                    )
                value, result = self._convert(raw)
                if result:
                    self._value = value
                return result
            case Variant.MULTI:
                value, result = self._convert(raw)
                if result:
                    self._values.append(value)
                return result

    def _convert(self, raw, /):
        kind = type(self).__typename__
        value = convert(self._type, raw)

        if value is Unset:
            if isenum(self._type):
                return value, ValidationResult.fail(
                    "case %r doesn't exist in %s for %s %r" % (raw, self._type.__name__, kind, self.label)
                )
            return value, ValidationResult.fail(
                "can't parse raw value %r for %s %r" % (raw, kind, self.label)
            )

        if isinstance(self._type, Location):
            return value, self._type.check(value)
        return value, ValidationResult.success


__all__ = (
    "Variant",
    "Container",
)
