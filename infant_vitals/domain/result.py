"""
Result type for failures that are ordinary input, such as a malformed
telemetry pair, rather than exceptional conditions.
"""

from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """Either a value or the error explaining why there is none."""

    __slots__ = ("_value", "_error")

    def __init__(self, value: ValueT | None, error: ErrorT | None) -> None:
        self._value = value
        self._error = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value, None)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(None, error)

    def is_ok(self) -> bool:
        return self._error is None

    def unwrap(self) -> ValueT:
        """The value; raises the stored error on an err result."""
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore[return-value]

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("unwrap_err() called on an ok result")
        return self._error
