#!/usr/bin/env python3
"""
Example script demonstrating the usage of getopt_argparser.

This script declares a few options of each kind, parses the command line
and prints the resulting values. Try for instance:

    python basic_example.py -vn 3 --out=result.txt --col data1 data2
    python basic_example.py --help
"""

import sys

from getopt_argparser import ArgumentParser, ArgumentParserError, OptionKind, ScalarType


def main() -> None:
    """Main function demonstrating the parser."""
    parser = ArgumentParser(description="Run a number of simulations.")
    parser.add_help()
    parser.add_flag("v", "verbose", "Enable verbose output")
    parser.add_option(
        "n",
        "num-simulations",
        OptionKind.REQUIRED_ARGUMENT,
        description="Number of simulations to run",
        metavar="COUNT",
        default=100,
    )
    parser.add_option(
        "o",
        "output",
        OptionKind.REQUIRED_ARGUMENT,
        description="Output file path",
        metavar="FILE",
        default="/tmp/output.txt",
    )
    parser.add_option(
        long_name="color",
        kind=OptionKind.OPTIONAL_ARGUMENT,
        description="Colorize the report (always, never, auto)",
        metavar="WHEN",
        default="auto",
    )

    try:
        inputs = parser.parse()
    except ArgumentParserError as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        sys.exit(2)

    if parser.get_typed("help", bool):
        parser.print_usage()
        return

    print("Parsed Configuration:")
    print("-" * 30)
    print(f"Verbose: {parser.get_typed('verbose', bool)}")
    print(f"Number of Simulations: {parser.get_typed('n', ScalarType.UINT32)}")
    print(f"Output File: {parser.get_value('output')}")
    print(f"Color: {parser.get_value('color')}")
    print(f"Inputs: {inputs}")


if __name__ == "__main__":
    main()
