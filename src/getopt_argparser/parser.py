"""
ArgumentParser - GNU getopt style parsing of short and long command-line options.

This module provides a parser that recognises clustered short options
(``-abc``, ``-ofile``), long options with inline values (``--output=file``),
unambiguous abbreviations of long options (``--verb`` for ``--verbose``)
and the ``--`` terminator. Parsed values are kept as strings on the
registered options and can be retrieved as typed values afterwards.
"""

import logging
import os
import sys
from typing import Any, Callable, Optional, TextIO, Union

from result import Err, Ok, Result

from .converters import ScalarType, get_converter
from .errors import ArgumentParserError, ErrorKind
from .option import STRING_FALSE, STRING_TRUE, Option, OptionKind, OptionRegistry

logger = logging.getLogger(__name__)


def _split_option_strings(
    names: Union[str, list[str], tuple[str, ...]],
) -> tuple[Optional[str], Optional[str]]:
    """
    Turn option strings such as ("-v", "--verbose") into (short_name, long_name).

    Raises:
        ValueError: If a string is not a short or long option, or a kind
            of name is given twice.
    """
    if isinstance(names, str):
        names = (names,)

    short_name: Optional[str] = None
    long_name: Optional[str] = None
    for name in names:
        if name.startswith("--") and long_name is None:
            long_name = name[2:]
        elif name.startswith("-") and not name.startswith("--") and short_name is None:
            short_name = name[1:]
        else:
            raise ValueError(
                f"Invalid option string {name!r} in {tuple(names)!r}. "
                "Expected at most one '-x' and one '--name'"
            )
    return short_name, long_name


class ArgumentParser:
    """
    A GNU getopt style command-line option parser.

    Options are declared up front, then ``parse`` is called once with the
    argument list. Afterwards option values are queried by short or long
    name and the positional arguments are available in ``arguments``.

    Example:
        parser = ArgumentParser(prog="cat")
        parser.add_flag("n", "number", "Number all output lines")
        parser.add_option(
            "o", "output", OptionKind.REQUIRED_ARGUMENT,
            description="Write to FILE", metavar="FILE",
        )
        files = parser.parse(["-n", "--out=result.txt", "a.txt"])
        parser.get_typed("number", bool)  # True
        parser.get_value("o")  # "result.txt"
    """

    def __init__(
        self,
        prog: Optional[str] = None,
        description: Optional[str] = None,
        indent: str = "  ",
        options: Optional[list] = None,
    ) -> None:
        """
        Initialize the parser.

        Args:
            prog: Program name shown in the usage text. Defaults to the
                basename of ``sys.argv[0]``.
            description: Text printed above the usage text.
            indent: Indentation unit for the option list in the usage text.
            options: Options to declare right away. Each item may be one of:
                - (names, kwargs), where names is an option string or a
                  tuple of option strings such as ("-o", "--output") and
                  kwargs are keyword arguments for ``add_option``
                - {'names': names, 'kwargs': {...}}
        """
        self.prog: str = prog if prog is not None else os.path.basename(sys.argv[0])
        self.description: Optional[str] = description
        self.indent: str = indent
        self.registry: OptionRegistry = OptionRegistry()
        self.arguments: list[str] = []

        if options:
            for item in options:
                if isinstance(item, dict) and "names" in item:
                    names = item["names"]
                    kwargs = item.get("kwargs", {})
                elif isinstance(item, (list, tuple)) and len(item) == 2:
                    names, kwargs = item
                else:
                    raise ValueError(
                        "Each option must be (names, kwargs) tuple or {'names': ..., 'kwargs': ...} dict"
                    )

                short_name, long_name = _split_option_strings(names)
                self.add_option(short_name, long_name, **(kwargs or {}))

    def add_option(
        self,
        short_name: Optional[str] = None,
        long_name: Optional[str] = None,
        kind: OptionKind = OptionKind.NO_ARGUMENT,
        description: Optional[str] = None,
        metavar: Optional[str] = None,
        default: Any = None,
    ) -> Option:
        """
        Declare an option. See ``OptionRegistry.register`` for the arguments.

        Example:
            parser.add_option("j", "jobs", OptionKind.REQUIRED_ARGUMENT, metavar="N", default=1)
        """
        return self.registry.register(
            short_name, long_name, kind, description, metavar, default
        )

    def add_flag(
        self,
        short_name: Optional[str] = None,
        long_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Option:
        """Declare a switch without argument whose value defaults to "False"."""
        return self.registry.register(
            short_name,
            long_name,
            OptionKind.NO_ARGUMENT,
            description,
            None,
            STRING_FALSE,
        )

    def add_help(self) -> Option:
        return self.registry.register_help()

    def parse(self, args: Optional[list[str]] = None) -> list[str]:
        """
        Parse command-line arguments into option values and positional arguments.

        Positional arguments are appended to ``self.arguments``, so calling
        ``parse`` again accumulates them. The first error stops parsing;
        values stored before the error are kept.

        Args:
            args (Optional[list[str]]): Arguments to parse. If None, uses sys.argv[1:].

        Returns:
            list[str]: The positional arguments collected so far.

        Raises:
            ArgumentParserError: UNKNOWN_OPTION, AMBIGUOUS_OPTION,
                MISSING_ARGUMENT or DOES_NOT_TAKE_ARGUMENT.
        """
        if args is None:
            args = sys.argv[1:]

        i = 0
        while i < len(args):
            arg = args[i]
            if arg == "--":
                logger.debug("Option terminator at position %d", i)
                self.arguments.extend(args[i + 1 :])
                break
            if arg.startswith("--"):
                i = self._parse_long_option(args, i)
            elif arg.startswith("-") and len(arg) > 1:
                i = self._parse_short_option(args, i)
            else:
                self.arguments.append(arg)
            i += 1
        return self.arguments

    def safe_parse(
        self, args: Optional[list[str]] = None
    ) -> Result[list[str], ArgumentParserError]:
        """
        Parse command-line arguments without raising on invalid input.

        Args:
            args (Optional[list[str]]): Arguments to parse. If None, uses sys.argv[1:].
        Returns:
            Result[list[str], ArgumentParserError]:
                - Ok with the positional arguments,
                - Err with the error that stopped parsing.
        """
        try:
            return Ok(self.parse(args))
        except ArgumentParserError as e:
            return Err(e)

    def _parse_short_option(self, args: list[str], idx: int) -> int:
        """
        Handle a cluster of short options such as ``-abc`` or ``-ofile``.

        Returns:
            int: Index of the last argument consumed.
        """
        arg = args[idx]
        for pos in range(1, len(arg)):
            short_name = arg[pos]
            option = self.registry.lookup_by_short(short_name)
            if option.kind is OptionKind.NO_ARGUMENT:
                option.value = STRING_TRUE
            elif pos == len(arg) - 1:
                if idx + 1 >= len(args):
                    raise ArgumentParserError(
                        ErrorKind.MISSING_ARGUMENT, short_name, is_short=True
                    )
                option.value = args[idx + 1]
                logger.debug("-%s = %r", short_name, option.value)
                return idx + 1
            else:
                # The rest of the token is the argument, e.g. -ofile.
                option.value = arg[pos + 1 :]
                logger.debug("-%s = %r", short_name, option.value)
                return idx
            logger.debug("-%s set", short_name)
        return idx

    def _parse_long_option(self, args: list[str], idx: int) -> int:
        """
        Handle ``--name``, ``--name=value`` and ``--name value``.

        Returns:
            int: Index of the last argument consumed.
        """
        name, sep, inline_value = args[idx][2:].partition("=")
        value = inline_value if sep else None

        matches = self.registry.lookup_by_long_prefix(name)
        if len(matches) > 1:
            logger.debug(
                "--%s matches %s", name, ", ".join(m.display_name for m in matches)
            )
            raise ArgumentParserError(ErrorKind.AMBIGUOUS_OPTION, name)
        option = matches[0]

        if option.kind is OptionKind.NO_ARGUMENT:
            if value is not None:
                raise ArgumentParserError(
                    ErrorKind.DOES_NOT_TAKE_ARGUMENT, name, value
                )
            option.value = STRING_TRUE
        elif option.kind is OptionKind.OPTIONAL_ARGUMENT:
            option.value = value if value is not None else STRING_TRUE
        elif value is not None:
            option.value = value
        else:
            if idx + 1 >= len(args):
                raise ArgumentParserError(ErrorKind.MISSING_ARGUMENT, name)
            idx += 1
            option.value = args[idx]
        logger.debug("--%s = %r", option.long_name, option.value)
        return idx

    def get_option(self, name: str) -> Option:
        """
        Return the option registered under ``name``.

        A one-character name is a short name, anything longer is a long name.

        Raises:
            ArgumentParserError: UNKNOWN_OPTION if nothing is registered under ``name``.
        """
        return self.registry.lookup(name)

    def has_value(self, name: str) -> bool:
        return self.get_option(name).value is not None

    def get_value(self, name: str) -> Optional[str]:
        return self.get_option(name).value

    def get_typed(
        self,
        name: str,
        type_: Union[ScalarType, type] = str,
        converter: Optional[Callable[[Optional[str]], Any]] = None,
    ) -> Any:
        """
        Return an option's value converted to a scalar type.

        Args:
            name: Short or long option name.
            type_: ScalarType tag or one of bool, int, float, str. Ignored
                when ``converter`` is given.
            converter: Custom conversion function. It receives the raw
                value, which may be None, and must handle that itself.

        Returns:
            Any: The converted value.

        Raises:
            ArgumentParserError: UNKNOWN_OPTION, or VALUE_EMPTY if the option
                has no value and no converter was given.
            TypeError: If ``type_`` has no default converter.
            ValueError: If the value cannot be converted.
        """
        value = self.get_value(name)
        if converter is not None:
            return converter(value)
        if value is None:
            # get_option resolved a one-character name through the short index.
            raise ArgumentParserError(
                ErrorKind.VALUE_EMPTY, name, is_short=len(name) == 1
            )
        return get_converter(type_)(value)

    def format_usage(self) -> str:
        """Render the usage text: program line followed by every option."""
        lines = []
        if self.description is not None:
            lines.append(self.description)
            lines.append("")
        lines.append("[Usage]")
        lines.append(f"{self.prog} [Options ...] [Arguments ...]")
        lines.append("")
        lines.append("[Options]")

        indent = self.indent or ""
        for option in self.registry:
            if option.long_name is None:
                forms = self._format_short(option)
            elif option.short_name is None:
                forms = self._format_long(option)
            else:
                forms = f"{self._format_short(option)}, {self._format_long(option)}"
            lines.append(f"{indent}{forms}")
            lines.append(f"{indent}{indent}{option.description or ''}")
        return "\n".join(lines) + "\n"

    def print_usage(self, file: Optional[TextIO] = None) -> None:
        if file is None:
            file = sys.stdout
        file.write(self.format_usage())

    @staticmethod
    def _format_short(option: Option) -> str:
        text = f"-{option.short_name}"
        if option.takes_argument:
            text += f" {option.metavar or ''}"
        return text

    @staticmethod
    def _format_long(option: Option) -> str:
        text = f"--{option.long_name}"
        if option.kind is OptionKind.OPTIONAL_ARGUMENT:
            text += f"[={option.metavar or ''}]"
        elif option.kind is OptionKind.REQUIRED_ARGUMENT:
            text += f"={option.metavar or ''}"
        return text
