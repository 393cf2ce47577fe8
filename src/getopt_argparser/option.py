"""
Option declarations and the registry that indexes them.

The registry keeps every Option in registration order and maintains two
name indexes (short name and long name) that map onto positions in that
list, so each Option object is owned in exactly one place.
"""

import dataclasses
import enum
import logging
from typing import Any, Iterator, Optional

from .errors import ArgumentParserError, ErrorKind

logger = logging.getLogger(__name__)

STRING_TRUE = str(True)
STRING_FALSE = str(False)


class OptionKind(enum.Enum):
    """Whether an option takes an argument."""

    NO_ARGUMENT = "no_argument"
    REQUIRED_ARGUMENT = "required_argument"
    # Equivalent to REQUIRED_ARGUMENT for short options; a long option may
    # be given as --name or --name=value.
    OPTIONAL_ARGUMENT = "optional_argument"


@dataclasses.dataclass
class Option:
    """A declared command-line switch and its current value."""

    short_name: Optional[str]
    long_name: Optional[str]
    kind: OptionKind
    description: Optional[str] = None
    metavar: Optional[str] = None
    default: Optional[str] = None
    index: int = -1
    value: Optional[str] = dataclasses.field(default=None, init=False)

    def __post_init__(self) -> None:
        self.value = self.default

    @property
    def takes_argument(self) -> bool:
        return self.kind is not OptionKind.NO_ARGUMENT

    @property
    def display_name(self) -> str:
        """The option as a user would type it, preferring the long form."""
        if self.long_name is not None:
            return f"--{self.long_name}"
        return f"-{self.short_name}"


def _stringify_default(default: Any) -> Optional[str]:
    if default is None or isinstance(default, str):
        return default
    return str(default)


def _validate_names(short_name: Optional[str], long_name: Optional[str]) -> None:
    """
    Reject option names the parser could never match.

    Raises:
        ValueError: If neither name is given or a name is malformed.
    """
    if short_name is None and long_name is None:
        raise ValueError("An option needs a short name, a long name, or both")
    if short_name is not None:
        if len(short_name) != 1 or short_name == "-":
            raise ValueError(
                f"Invalid short option name: {short_name!r}. "
                "Must be a single character other than '-'"
            )
    if long_name is not None:
        if len(long_name) < 2 or long_name.startswith("-") or "=" in long_name:
            raise ValueError(
                f"Invalid long option name: {long_name!r}. Must be at least two "
                "characters, must not start with '-' and must not contain '='"
            )


class OptionRegistry:
    """
    Ordered collection of declared options with short and long name indexes.

    Example:
        registry = OptionRegistry()
        registry.register("v", "verbose", description="Verbose output")
        registry.lookup_by_long_prefix("verb")  # (Option(... 'verbose' ...),)
    """

    def __init__(self) -> None:
        self._options: list[Option] = []
        self._short_index: dict[str, int] = {}
        self._long_index: dict[str, int] = {}

    def register(
        self,
        short_name: Optional[str] = None,
        long_name: Optional[str] = None,
        kind: OptionKind = OptionKind.NO_ARGUMENT,
        description: Optional[str] = None,
        metavar: Optional[str] = None,
        default: Any = None,
    ) -> Option:
        """
        Declare a new option.

        Args:
            short_name: Single character used as ``-x``, or None.
            long_name: Name used as ``--name``, or None.
            kind: Whether the option takes an argument.
            description: Help text shown in the usage output.
            metavar: Display name of the option's argument in the usage output.
            default: Initial value. Non-string values are stored as ``str(default)``.

        Returns:
            Option: The registered option.

        Raises:
            ValueError: If the names are malformed or both are missing.
            ArgumentParserError: DUPLICATE_OPTION if a name is already registered.
        """
        _validate_names(short_name, long_name)
        if short_name is not None and short_name in self._short_index:
            raise ArgumentParserError(
                ErrorKind.DUPLICATE_OPTION, short_name, is_short=True
            )
        if long_name is not None and long_name in self._long_index:
            raise ArgumentParserError(ErrorKind.DUPLICATE_OPTION, long_name)

        option = Option(
            short_name=short_name,
            long_name=long_name,
            kind=kind,
            description=description,
            metavar=metavar,
            default=_stringify_default(default),
            index=len(self._options),
        )
        self._options.append(option)
        if short_name is not None:
            self._short_index[short_name] = option.index
        if long_name is not None:
            self._long_index[long_name] = option.index
        logger.debug(
            "Registered option %s (%s), default=%r",
            option.display_name,
            kind.name,
            option.default,
        )
        return option

    def register_help(self) -> Option:
        """Register the conventional ``-h, --help`` switch."""
        return self.register(
            "h",
            "help",
            OptionKind.NO_ARGUMENT,
            description="Show help and exit this program",
            metavar="",
            default=STRING_FALSE,
        )

    def lookup_by_short(self, short_name: str) -> Option:
        try:
            return self._options[self._short_index[short_name]]
        except KeyError:
            raise ArgumentParserError(
                ErrorKind.UNKNOWN_OPTION, short_name, is_short=True
            ) from None

    def lookup_by_long(self, long_name: str) -> Option:
        try:
            return self._options[self._long_index[long_name]]
        except KeyError:
            raise ArgumentParserError(ErrorKind.UNKNOWN_OPTION, long_name) from None

    def lookup_by_long_prefix(self, prefix: str) -> tuple[Option, ...]:
        """
        Find every long option whose name starts with ``prefix``.

        An exact name is not preferred over longer names sharing it as a
        prefix; resolving ambiguity is left to the caller.

        Returns:
            tuple[Option, ...]: Matching options in registration order.

        Raises:
            ArgumentParserError: UNKNOWN_OPTION if nothing matches.
        """
        matches = tuple(
            option
            for option in self._options
            if option.long_name is not None and option.long_name.startswith(prefix)
        )
        if not matches:
            raise ArgumentParserError(ErrorKind.UNKNOWN_OPTION, prefix)
        return matches

    def lookup(self, name: str) -> Option:
        """Look up by short name if ``name`` is one character, else by long name."""
        if len(name) == 1:
            return self.lookup_by_short(name)
        return self.lookup_by_long(name)

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[Option]:
        return iter(self._options)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        if len(name) == 1:
            return name in self._short_index
        return name in self._long_index
