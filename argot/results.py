"""
Validation outcomes shared by converters, containers and custom validators.

A ValidationResult is either the `success` singleton or a failure carrying a
message. Converters and containers return them from parse(); custom
validation closures may return one directly or any of the plain shorthands
accepted by ValidationResult.coerce().
"""
import functools
from typing import final

from .utils import Unset


@final
class ValidationResult:
    """
    Outcome of a conversion or of a custom validation.

    Semantics
    - truthy on success, falsy on failure (so `if not result:` reads naturally).
    - message is None on success and a non-empty string on failure.
    - ValidationResult.success is a process-wide singleton; failures are
      created through ValidationResult.fail(message).
    """
    __slots__ = ("_message",)

    def __new__(cls, message=Unset, /):
        if message is Unset:
            return cls._success()
        if not isinstance(message, str):
            raise TypeError("validation message must be a string")
        elif not (message := message.strip()):
            raise ValueError("validation message cannot be empty")
        self = super().__new__(cls)
        self._message = message
        return self

    @classmethod
    @functools.cache
    def _success(cls):
        self = super().__new__(cls)
        self._message = None
        return self

    @classmethod
    def fail(cls, message, /):
        """
        Build a failed result with the given (non-empty) message.
        """
        return cls(message)

    @classmethod
    def coerce(cls, object, /):
        """
        Normalize what a custom validator returned into a ValidationResult.

        accepted shapes
        - ValidationResult: returned unchanged.
        - True or None: success.
        - False: failure with a generic message.
        - str: failure carrying the string as message.
        """
        if isinstance(object, ValidationResult):
            return object
        if object is None or object is True:
            return cls.success
        if object is False:
            return cls.fail("validation invalid")
        if isinstance(object, str):
            return cls.fail(object)
        raise TypeError(
            "validation must return a ValidationResult, a bool, a string or None, not %r" % type(object).__name__
        )

    @property
    def message(self):
        return self._message

    @property
    def succeeded(self):
        return self._message is None

    def __bool__(self):
        return self._message is None

    def __eq__(self, other):
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self._message == other._message

    def __hash__(self):
        return hash(self._message)

    def __repr__(self):
        if self._message is None:
            return "ValidationResult.success"
        return "ValidationResult.fail(%r)" % self._message

    def __rich_repr__(self):
        yield "succeeded", self.succeeded
        if self._message is not None:
            yield "message", self._message


ValidationResult.success = ValidationResult._success()


__all__ = (
    "ValidationResult",
)
