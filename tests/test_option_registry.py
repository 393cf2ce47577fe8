#!/usr/bin/env python3
"""
Tests for OptionRegistry.

This module tests option registration, name validation, duplicate
detection and the short, long and prefix lookups.
"""

import pytest

from getopt_argparser import ArgumentParserError, ErrorKind, OptionKind, OptionRegistry


@pytest.fixture
def registry() -> OptionRegistry:
    registry = OptionRegistry()
    registry.register("v", "verbose", description="Verbose output")
    registry.register(
        "o", "output", OptionKind.REQUIRED_ARGUMENT, "Output file", "FILE", "a.out"
    )
    registry.register(long_name="version")
    registry.register("q")
    return registry


class TestRegister:
    """Test suite for OptionRegistry.register."""

    def test_option_fields(self, registry):
        """Test that registration stores every field and sets value to the default."""
        option = registry.lookup_by_long("output")
        assert option.short_name == "o"
        assert option.long_name == "output"
        assert option.kind is OptionKind.REQUIRED_ARGUMENT
        assert option.description == "Output file"
        assert option.metavar == "FILE"
        assert option.default == "a.out"
        assert option.value == "a.out"
        assert option.takes_argument

    def test_registration_order(self, registry):
        names = [option.display_name for option in registry]
        assert names == ["--verbose", "--output", "--version", "-q"]
        assert [option.index for option in registry.options] == [0, 1, 2, 3]
        assert len(registry) == 4

    def test_non_string_default_is_stringified(self):
        registry = OptionRegistry()
        assert registry.register("j", default=8).default == "8"
        assert registry.register("b", default=True).default == "True"
        assert registry.register("x", default=None).default is None

    def test_short_only_and_long_only_indexes(self, registry):
        """Test that an option is indexed only under the names it declares."""
        assert "q" in registry
        assert "version" in registry
        assert registry.lookup_by_short("q").long_name is None
        assert registry.lookup_by_long("version").short_name is None

    def test_contains(self, registry):
        assert "v" in registry
        assert "verbose" in registry
        assert "verb" not in registry
        assert "z" not in registry
        assert 1 not in registry

    def test_duplicate_short_name(self, registry):
        with pytest.raises(ArgumentParserError) as exc_info:
            registry.register("v", "vivid")
        assert exc_info.value.kind is ErrorKind.DUPLICATE_OPTION
        assert str(exc_info.value) == "Short option is already registered: -v"
        # Registry is unchanged
        assert len(registry) == 4
        assert "vivid" not in registry

    def test_duplicate_long_name(self, registry):
        with pytest.raises(ArgumentParserError) as exc_info:
            registry.register("w", "output")
        assert exc_info.value.kind is ErrorKind.DUPLICATE_OPTION
        assert "w" not in registry

    @pytest.mark.parametrize(
        "short_name,long_name",
        [
            (None, None),
            ("ab", None),
            ("", None),
            ("-", None),
            (None, "x"),
            (None, "--name"),
            (None, "name=value"),
        ],
    )
    def test_invalid_names(self, short_name, long_name):
        registry = OptionRegistry()
        with pytest.raises(ValueError):
            registry.register(short_name, long_name)

    def test_register_help(self):
        registry = OptionRegistry()
        option = registry.register_help()
        assert option.short_name == "h"
        assert option.long_name == "help"
        assert option.kind is OptionKind.NO_ARGUMENT
        assert option.description == "Show help and exit this program"
        assert option.value == "False"


class TestLookup:
    """Test suite for the registry lookups."""

    def test_lookup_by_short(self, registry):
        assert registry.lookup_by_short("v").long_name == "verbose"

    def test_lookup_by_short_unknown(self, registry):
        with pytest.raises(ArgumentParserError) as exc_info:
            registry.lookup_by_short("z")
        assert exc_info.value.kind is ErrorKind.UNKNOWN_OPTION
        assert exc_info.value.is_short

    def test_lookup_by_long_is_exact(self, registry):
        with pytest.raises(ArgumentParserError) as exc_info:
            registry.lookup_by_long("verb")
        assert exc_info.value.kind is ErrorKind.UNKNOWN_OPTION
        assert not exc_info.value.is_short

    def test_lookup_by_long_prefix(self, registry):
        matches = registry.lookup_by_long_prefix("ver")
        assert [m.long_name for m in matches] == ["verbose", "version"]
        assert registry.lookup_by_long_prefix("verbose") == (
            registry.lookup_by_long("verbose"),
        )

    def test_lookup_by_long_prefix_unknown(self, registry):
        with pytest.raises(ArgumentParserError) as exc_info:
            registry.lookup_by_long_prefix("quiet")
        assert exc_info.value.kind is ErrorKind.UNKNOWN_OPTION

    def test_lookup_shares_option_objects(self, registry):
        """Test that both indexes return the same Option object."""
        option = registry.lookup_by_short("o")
        option.value = "changed"
        assert registry.lookup_by_long("output").value == "changed"
        assert registry.lookup("output") is option


class TestErrorForms:
    """Test suite for short and long forms of registry errors."""

    def test_short_flag_is_explicit(self):
        error = ArgumentParserError(ErrorKind.UNKNOWN_OPTION, "x", is_short=True)
        assert error.is_short
        assert str(error) == "Unknown short option: -x"

        error = ArgumentParserError(ErrorKind.UNKNOWN_OPTION, "x")
        assert not error.is_short
        assert str(error) == "Unknown long option: --x"

    def test_ambiguity_only_applies_to_long_options(self):
        with pytest.raises(ValueError):
            ArgumentParserError(ErrorKind.AMBIGUOUS_OPTION, "v", is_short=True)
