"""
Argot value converters.

Overview
- convert(type, raw): turn one raw command-line token into a typed value, or
  return Unset when the token cannot be represented as that type. The caller
  (a value container) turns Unset into a ValidationResult failure naming the
  raw token and the owning argument/command.
- File / Folder: path "locations". Their conversion normalizes relative
  tokens against the current working directory and, when existence is
  requested, checks the entry on disk and its kind.
- typename(type, multiple=False): the value-type descriptor shown in the
  manual (INT, FLOAT, FILE_PATH, 'a', 'b', ...).

Supported types
- int    optional sign followed by ASCII digits ("12", "-3"); no blanks or underscores.
- float  whatever float() accepts, without surrounding blanks or digit
         separators ("1.5", "-2e3", "nan").
- bool   exactly "true" or "false".
- str    the token unchanged.
- Enum   the member whose str(value) equals the token.
- File/Folder (instances) see Location.
- Any other callable: type(raw); ValueError/TypeError or a None result mean absence.
"""
import builtins
import enum
import os
import pathlib
import re
from typing import final

from .results import ValidationResult
from .utils import Unset


class Location:
    """
    Base of path-valued types (File and Folder).

    Parameters
    - existence: bool
      When True, the converted path must exist on disk and be of the expected
      kind; otherwise any syntactically usable path is accepted.

    Conversion
    - "./x" and "x" are resolved against os.getcwd(); absolute tokens are kept.
    - The converted value is a pathlib.Path. Its percent-encoded form is
      available through Path.as_uri().
    """
    __slots__ = ("_existence",)

    kind = Unset
    typename = Unset

    def __init__(self, *, existence=False):
        if type(self) is Location:
            raise TypeError("type 'Location' cannot be instantiated directly, use File or Folder")
        self._existence = bool(existence)

    @property
    def existence(self):
        return self._existence

    def normalize(self, raw, /):
        """
        Return the absolute pathlib.Path for a raw token (no filesystem access).
        """
        if raw.startswith("./"):
            raw = raw[2:]
        if not os.path.isabs(raw):
            raw = os.path.join(os.getcwd(), raw)
        return pathlib.Path(raw)

    def check(self, path, /):
        """
        Validate the converted path against the existence/kind policy.
        """
        if not self._existence:
            return ValidationResult.success
        if not path.exists():
            return ValidationResult.fail("required %s doesn't exist (%s)" % (self.kind, path))
        if self._matches(path):
            return ValidationResult.success
        found = "folder" if path.is_dir() else "file"
        return ValidationResult.fail("expected a %s but found a %s (%s)" % (self.kind, found, path))

    def _matches(self, path, /):
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, Location):
            return NotImplemented
        return type(self) is type(other) and self._existence == other._existence

    def __hash__(self):
        return hash((type(self), self._existence))

    def __repr__(self):
        return "%s(existence=%r)" % (type(self).__name__, self._existence)


@final
class File(Location):
    """
    Path to a regular file (value type descriptor FILE_PATH).
    """
    __slots__ = ()

    kind = "file"
    typename = "FILE_PATH"

    def _matches(self, path, /):
        return path.is_file()


@final
class Folder(Location):
    """
    Path to a directory (value type descriptor FOLDER_PATH).
    """
    __slots__ = ()

    kind = "folder"
    typename = "FOLDER_PATH"

    def _matches(self, path, /):
        return path.is_dir()


def isenum(type, /):
    """
    Return True when `type` is an Enum subclass (the closed-choice converter).
    """
    return isinstance(type, builtins.type) and issubclass(type, enum.Enum)


def convert(type, raw, /):
    """
    Convert a raw token to `type`, returning Unset when it cannot be done.

    Location types only normalize here; existence/kind checks belong to
    Location.check() so their messages stay specific.
    """
    if not isinstance(raw, str):
        raise TypeError("convert() raw value must be a string")

    match type:
        case builtins.bool:
            return {"true": True, "false": False}.get(raw, Unset)
        case builtins.int:
            return int(raw) if re.fullmatch(r"[+-]?[0-9]+", raw) else Unset
        case builtins.float:
            if raw != raw.strip() or "_" in raw:
                return Unset
            try:
                return float(raw)
            except ValueError:
                return Unset
        case builtins.str:
            return raw
        case Location():
            return type.normalize(raw) if raw else Unset
        case _ if isenum(type):
            for member in type:
                if str(member.value) == raw:
                    return member
            return Unset
        case _ if callable(type):
            try:
                value = type(raw)
            except (ValueError, TypeError):
                return Unset
            return Unset if value is None else value
        case _:
            raise TypeError("convert() type must be callable, an enum or a location")


def typename(type, /, multiple=False):
    """
    Value-type descriptor used by the manual.

    Examples
    - typename(int) -> "INT"
    - typename(str, multiple=True) -> "STRING_1 STRING_2 ..."
    - typename(Color) -> "'red', 'green'"
    """
    match type:
        case builtins.int:
            name = "INT"
        case builtins.float:
            name = "FLOAT"
        case builtins.bool:
            name = "BOOL"
        case builtins.str:
            name = "STRING"
        case Location():
            name = type.typename
        case _ if isenum(type):
            name = ", ".join("'%s'" % member.value for member in type)
        case _:
            name = getattr(type, "__name__", builtins.type(type).__name__).upper()

    if multiple:
        return "%s_1 %s_2 ..." % (name, name)
    return name


__all__ = (
    "Location",
    "File",
    "Folder",
    "isenum",
    "convert",
    "typename",
)
