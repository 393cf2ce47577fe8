"""
getopt_argparser - GNU getopt style command-line option parsing.

This package provides a small option parser supporting clustered short
options, long options with inline values and unambiguous abbreviations,
the ``--`` terminator, usage text rendering and typed value retrieval.
"""

from .converters import DEFAULT_CONVERTERS, ScalarType, convert, get_converter
from .errors import ArgumentParserError, ErrorKind
from .option import Option, OptionKind, OptionRegistry
from .parser import ArgumentParser

__version__ = "1.0.0"
__all__ = [
    "ArgumentParser",
    "ArgumentParserError",
    "DEFAULT_CONVERTERS",
    "ErrorKind",
    "Option",
    "OptionKind",
    "OptionRegistry",
    "ScalarType",
    "convert",
    "get_converter",
]
