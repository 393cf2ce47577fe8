"""
Error type raised by the option registry and the argument parser.

All parse-time failures are reported through a single exception class,
ArgumentParserError, tagged with an ErrorKind. Callers branch on
``error.kind`` instead of catching a hierarchy of exception classes.
"""

import enum
from typing import Optional


class ErrorKind(enum.Enum):
    """The kinds of failure an ArgumentParserError can carry."""

    UNKNOWN_OPTION = "unknown"
    AMBIGUOUS_OPTION = "ambiguous"
    MISSING_ARGUMENT = "missing_argument"
    DOES_NOT_TAKE_ARGUMENT = "does_not_take_argument"
    VALUE_EMPTY = "value_empty"
    DUPLICATE_OPTION = "duplicate"


_SHORT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNKNOWN_OPTION: "Unknown short option",
    ErrorKind.MISSING_ARGUMENT: "Missing argument of short option",
    ErrorKind.VALUE_EMPTY: "Short option value is empty",
    ErrorKind.DUPLICATE_OPTION: "Short option is already registered",
}

_LONG_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.UNKNOWN_OPTION: "Unknown long option",
    ErrorKind.AMBIGUOUS_OPTION: "Ambiguous long option",
    ErrorKind.MISSING_ARGUMENT: "Missing argument of long option",
    ErrorKind.DOES_NOT_TAKE_ARGUMENT: "An argument is given to non-argument required long option",
    ErrorKind.VALUE_EMPTY: "Long option value is empty",
    ErrorKind.DUPLICATE_OPTION: "Long option is already registered",
}


class ArgumentParserError(Exception):
    """
    Raised when registering, parsing or querying options fails.

    Attributes:
        kind: What went wrong.
        name: The offending option name, without leading dashes.
        is_short: Whether ``name`` refers to a short option. Set by the
            raiser, since a long option may be abbreviated to one character.
        value: The rejected inline value, for DOES_NOT_TAKE_ARGUMENT.
    """

    def __init__(
        self,
        kind: ErrorKind,
        name: str,
        value: Optional[str] = None,
        *,
        is_short: bool = False,
    ) -> None:
        messages = _SHORT_MESSAGES if is_short else _LONG_MESSAGES
        if kind not in messages:
            raise ValueError(
                f"{kind.name} is not reported for {'short' if is_short else 'long'} options"
            )
        self.kind = kind
        self.name = name
        self.value = value
        self.is_short = is_short
        super().__init__(self._format_message(messages[kind]))

    def _format_message(self, message: str) -> str:
        if self.is_short:
            return f"{message}: -{self.name}"
        option = f"--{self.name}"
        if self.value is not None:
            option = f"{option}={self.value}"
        return f"{message}: {option}"

    def __repr__(self) -> str:
        prefix = "-" if self.is_short else "--"
        return f"ArgumentParserError({self.kind.name}, {prefix}{self.name!s})"
