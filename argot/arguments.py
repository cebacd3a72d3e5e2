r"""
Argot argument specification.

Overview
- Argument: a flag-style parameter with a mandatory long flag ("--count"), an
  optional short flag ("-c"), an optional help text, a required marker, an
  optional custom validation closure and, depending on its declared type,
  zero, one or many typed values.

Flag normalization
- longflag "count"  -> "--count"   ("--count" kept as-is)
- shortflag "c"     -> "-c"        ("-c" kept as-is, "n1" -> "-n1")
  Matching is always exact string equality against these normalized forms.

Declaring values
- no type                  presence-only (read `selected`).
- type=int/float/bool/str  one converted value, optional default.
- type=SomeEnum            one enum member, matched on str(member.value).
- type=File()/Folder()     one pathlib.Path, optionally checked on disk.
- multiple=True            every following token is converted and appended.

Construction has no side effects: an Argument joins an interface only through
Interface.argument(...), Interface.add(...) or `interface + argument`.

Quick example:
    >>> from argot import Interface
    >>> cli = Interface("tool")
    >>> count = cli.argument("--count", "-c", type=int, default=5)
    >>> cli.parse(["tool"])
    >>> count.value
    5
"""
import builtins

from .containers import Container
from .utils import *


def _sanitize_flags(cls, longflag, shortflag, /):
    """
    Validate and normalize the long/short flags of an argument.

    Raises
    - TypeError: flags that are not strings.
    - ValueError: flags that are empty, contain blanks, or reduce to a bare prefix.
    """
    if not isinstance(longflag, str):
        raise TypeError(f"{cls.__typename__} 'longflag' must be a string")
    if not isinstance(shortflag, str | Unset):
        raise TypeError(f"{cls.__typename__} 'shortflag' must be a string")

    if not (longflag := longflag.strip()):
        raise ValueError(f"{cls.__typename__} 'longflag' cannot be empty")
    if not longflag.startswith("--"):
        longflag = "--" + longflag
    if longflag == "--" or any(char.isspace() for char in longflag):
        raise ValueError(f"{cls.__typename__} 'longflag' must be a valid flag name")

    if isinstance(shortflag, str):
        if not (shortflag := shortflag.strip()):
            raise ValueError(f"{cls.__typename__} 'shortflag' cannot be empty")
        if not shortflag.startswith("-"):
            shortflag = "-" + shortflag
        if shortflag == "-" or shortflag.startswith("--") or any(char.isspace() for char in shortflag):
            raise ValueError(f"{cls.__typename__} 'shortflag' must be a valid flag name")

    return longflag, coalesce(shortflag)


class Argument(Container):
    """
    Flag-style parameter (e.g., -c/--count).

    Properties
    - longflag, shortflag, descr, required: read-only declaration fields.
    - selected: whether this pass matched the flag.
    - value / values / default / valuetype: see Container.

    Equality
    - Arguments compare by identity. Two arguments with the same flags are
      allowed in one interface; lookups resolve to the first registered one.
    """

    __introspectable__ = (
        "longflag",
        "shortflag",
        "descr",
        "required",
    )

    __displayable__ = (
        "longflag",
        "shortflag",
        "variant",
        "value",
        "default",
        "required",
        "selected",
    )

    def __init__(
            self,
            longflag,
            shortflag=Unset,
            /,
            *,
            descr=Unset,
            required=False,
            type=Unset,
            default=Unset,
            multiple=False,
            validation=Unset
    ):
        """
        Construct an Argument.

        Parameters
        - longflag: str
          Long flag, with or without the "--" prefix.
        - shortflag: Unset | str
          Short flag, with or without the "-" prefix.
        - descr: Unset | str
          Help text shown in the manual.
        - required: bool
          When True, every parse pass must select this argument.
        - type: Unset | Callable | Enum subclass | File | Folder
          Converter for the value(s); Unset makes a presence-only argument.
        - default: Any
          Fallback for `value` when no value was parsed (not validated).
        - multiple: bool
          Accept any number of values (requires a type).
        - validation: Unset | Callable[[], ValidationResult | bool | str | None]
          Custom check run after a successful tokenization pass.
        """
        self._longflag, self._shortflag = _sanitize_flags(builtins.type(self), longflag, shortflag)
        self._required = bool(required)
        self._setup(type, default, multiple, descr, validation)

    @property
    def label(self):
        return self._longflag

    @property
    def flags(self):
        """
        Every normalized flag of this argument (short first, when present).
        """
        if self._shortflag is None:
            return (self._longflag,)
        return self._shortflag, self._longflag

    def matches(self, token, /):
        """
        Return True when `token` is exactly one of this argument's flags.
        """
        return token == self._longflag or token == self._shortflag

    def __rich__(self):
        return " | ".join(self.flags)


__all__ = (
    "Argument",
)
