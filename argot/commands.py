"""
Argot command specification.

Overview
- Command: the primary selector of an invocation. Its unprefixed name is
  matched by exact equality against the first token after the program name;
  at most one command is selected per parse pass.
- A command may carry one typed value (the token right after its name), may
  declare companion arguments it requires, and may run a custom validation
  closure once tokenization succeeded.
- Option is the same type under its older name.

Requirements
- `requires` lists Argument objects. After tokenization, each of them must have
  been selected or have a default, otherwise the pass fails with a
  MissingRequiredArgumentError naming the command and the argument.

Quick example:
    >>> from argot import Interface
    >>> cli = Interface("tool")
    >>> output = cli.argument("--output", "-o", type=str)
    >>> build = cli.command("build", requires=[output], descr="build the project")
    >>> cli.parse(["tool", "build", "-o", "dist"])
    >>> cli.selected is build, output.value
    (True, 'dist')
"""
import builtins

from .arguments import Argument
from .containers import Container
from .utils import *


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    elif any(char.isspace() for char in name):
        raise ValueError(f"{cls.__typename__} 'name' cannot contain whitespace")
    elif name.startswith("-"):
        raise ValueError(f"{cls.__typename__} 'name' cannot start with a dash, use an argument instead")
    return name


def _sanitize_requires(cls, requires, /):
    if requires is Unset:
        return []
    if isinstance(requires, Argument):
        requires = [requires]
    try:
        requires = list(requires)
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'requires' must be an iterable of arguments") from None
    for argument in requires:
        if not isinstance(argument, Argument):
            raise TypeError(f"{cls.__typename__} 'requires' must only contain arguments")
    return requires


class Command(Container):
    """
    Primary selector token (e.g., "build", "clean").

    Properties
    - name, descr, requires: read-only declaration fields.
    - selected: whether this pass chose the command.
    - value / default / valuetype: see Container (single value only).
    """

    __introspectable__ = (
        "name",
        "descr",
        "requires",
    )

    __displayable__ = (
        "name",
        "variant",
        "value",
        "default",
        "requires",
        "selected",
    )

    def __init__(
            self,
            name,
            /,
            *,
            descr=Unset,
            requires=Unset,
            type=Unset,
            default=Unset,
            validation=Unset
    ):
        """
        Construct a Command.

        Parameters
        - name: str
          Unprefixed selector token.
        - descr: Unset | str
          Help text shown in the manual.
        - requires: Unset | Argument | Iterable[Argument]
          Companion arguments that must be selected (or defaulted) with it.
        - type: Unset | Callable | Enum subclass | File | Folder
          Converter for the command's single value.
        - default: Any
          Fallback used when the value token is missing.
        - validation: Unset | Callable
          Custom check run after a successful tokenization pass.
        """
        cls = builtins.type(self)
        self._name = _sanitize_name(cls, name)
        self._requires = _sanitize_requires(cls, requires)
        self._setup(type, default, False, descr, validation)

    @property
    def label(self):
        return self._name

    def __rich__(self):
        return self._name


Option = Command


__all__ = (
    "Command",
    "Option",
)
