"""
Tests for the ``Type::Member`` accessor parser.
"""

import pytest

from settingvalues.accessor import StaticMemberAccessor, parse_static_member_accessor


class TestParseStaticMemberAccessor:
    """Grammar boundary and field extraction."""

    def test_simple_accessor(self):
        accessor = parse_static_member_accessor("myapp.themes.ThemeCatalog::Literate")

        assert accessor == StaticMemberAccessor("myapp.themes.ThemeCatalog", "Literate")

    def test_qualifiers_reattach_to_type_name(self):
        """Trailing qualifiers belong to the type, not the member."""
        accessor = parse_static_member_accessor("Namespace.Type::StaticProp, AssemblyQualifiers")

        assert accessor.type_name == "Namespace.Type, AssemblyQualifiers"
        assert accessor.member_name == "StaticProp"

    def test_full_qualifier_list(self):
        accessor = parse_static_member_accessor(
            "ThemeCatalog::Code, myapp.themes, Version=1.0.0, Culture=neutral  "
        )

        assert accessor.type_name == "ThemeCatalog, myapp.themes, Version=1.0.0, Culture=neutral"
        assert accessor.member_name == "Code"

    def test_surrounding_whitespace_is_trimmed(self):
        accessor = parse_static_member_accessor("  sample_types.ThemeCatalog ::Grayscale")

        assert accessor.type_name == "sample_types.ThemeCatalog"
        assert accessor.member_name == "Grayscale"

    def test_member_name_allows_digits_after_first_letter(self):
        accessor = parse_static_member_accessor("Palette::Color256")

        assert accessor.member_name == "Color256"

    @pytest.mark.parametrize("text", [
        "sample_types.ConsoleSink",
        "ConsoleSink, sample_types",
        "",
        "4.5.6.7",
    ])
    def test_no_separator_does_not_match(self, text):
        assert parse_static_member_accessor(text) is None

    @pytest.mark.parametrize("text", [
        "a::b::c",
        "4.5.6.7::Value::Other",
        "Type::Member, qualifier::extra",
    ])
    def test_two_separators_do_not_match(self, text):
        assert parse_static_member_accessor(text) is None

    @pytest.mark.parametrize("text", [
        "Type::1Member",
        "Type::_member",
        "::Member",
        "Type:Member",
        "Type::",
    ])
    def test_malformed_member_does_not_match(self, text):
        assert parse_static_member_accessor(text) is None

    def test_none_input(self):
        assert parse_static_member_accessor(None) is None
