from io import StringIO
from unittest.mock import patch

from getopt_argparser import ArgumentParser, OptionKind


def make_parser(**kwargs) -> ArgumentParser:
    parser = ArgumentParser(prog="tool", **kwargs)
    parser.add_help()
    parser.add_option(
        "o", "output", OptionKind.REQUIRED_ARGUMENT, "Output file", "FILE"
    )
    parser.add_option(
        long_name="color",
        kind=OptionKind.OPTIONAL_ARGUMENT,
        description="Colorize output",
        metavar="WHEN",
    )
    parser.add_option("j", kind=OptionKind.REQUIRED_ARGUMENT, description="Jobs", metavar="N")
    parser.add_flag(long_name="dry-run", description="Only show what would be done")
    parser.add_flag("q")
    return parser


EXPECTED_OPTIONS = (
    "[Options]\n"
    "  -h, --help\n"
    "    Show help and exit this program\n"
    "  -o FILE, --output=FILE\n"
    "    Output file\n"
    "  --color[=WHEN]\n"
    "    Colorize output\n"
    "  -j N\n"
    "    Jobs\n"
    "  --dry-run\n"
    "    Only show what would be done\n"
    "  -q\n"
    "    \n"
)


def test_format_usage():
    """Test the full usage text for every option form."""
    parser = make_parser()
    assert parser.format_usage() == (
        "[Usage]\ntool [Options ...] [Arguments ...]\n\n" + EXPECTED_OPTIONS
    )


def test_description_is_printed_first():
    parser = make_parser(description="Copy files around.")
    assert parser.format_usage().startswith(
        "Copy files around.\n\n[Usage]\ntool [Options ...] [Arguments ...]\n"
    )


def test_custom_indent():
    parser = ArgumentParser(prog="tool", indent="\t")
    parser.add_flag("v", "verbose", "Verbose output")
    assert parser.format_usage().endswith(
        "[Options]\n\t-v, --verbose\n\t\tVerbose output\n"
    )


def test_print_usage_to_stdout():
    """Test that print_usage writes to sys.stdout by default."""
    parser = make_parser()
    with patch("sys.stdout", new_callable=StringIO) as mock_stdout:
        parser.print_usage()
        help_output = mock_stdout.getvalue()

    assert help_output == parser.format_usage()
    assert "--output=FILE" in help_output


def test_print_usage_to_sink():
    parser = make_parser()
    sink = StringIO()
    parser.print_usage(sink)
    assert sink.getvalue().endswith(EXPECTED_OPTIONS)


def test_prog_defaults_to_script_name():
    with patch("sys.argv", ["/usr/local/bin/mytool", "-x"]):
        parser = ArgumentParser()
    assert parser.prog == "mytool"
    assert "mytool [Options ...] [Arguments ...]" in parser.format_usage()
