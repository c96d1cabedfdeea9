"""
Unit tests for single mogrifier entries.
"""

import re

import pytest

from mogrifier import (
    EntrySpec,
    Mogrified,
    MogrifierEntry,
    PatternCompileError,
    TemplateIndexError,
)


class TestFromSpec:
    """Test MogrifierEntry.from_spec()"""

    def test_compiles_pattern_and_templates(self):
        entry = MogrifierEntry.from_spec(
            EntrySpec(r"^foo\.(\d+)\.bar$", "foo.bar", {"id": "$1"}, key="FOO")
        )

        assert entry.key == "FOO"
        assert entry.matcher.pattern == r"^foo\.(\d+)\.bar$"
        assert entry.name_template.text == "foo.bar"
        assert [(k, t.text) for k, t in entry.tag_templates] == [("id", "$1")]

    def test_key_defaults_to_position(self):
        entry = MogrifierEntry.from_spec(EntrySpec("^baz$", "baz"), position=3)

        assert entry.key == "#3"

    def test_invalid_pattern(self):
        with pytest.raises(PatternCompileError) as exc_info:
            MogrifierEntry.from_spec(EntrySpec("foo(", "foo", key="BROKEN"))

        error = exc_info.value
        assert error.key == "BROKEN"
        assert error.pattern == "foo("
        assert isinstance(error.__cause__, re.error)
        assert "BROKEN" in str(error)

    def test_name_template_beyond_groups(self):
        with pytest.raises(TemplateIndexError) as exc_info:
            MogrifierEntry.from_spec(EntrySpec(r"^foo\.(\d+)$", "foo.$2", key="FOO"))

        error = exc_info.value
        assert error.key == "FOO"
        assert error.template == "foo.$2"
        assert error.index == 2
        assert error.available == 2

    def test_tag_template_beyond_groups(self):
        with pytest.raises(TemplateIndexError) as exc_info:
            MogrifierEntry.from_spec(EntrySpec("^baz$", "baz", {"id": "$1"}))

        assert exc_info.value.template == "$1"
        assert exc_info.value.key == "#0"

    def test_group_zero_always_valid(self):
        entry = MogrifierEntry.from_spec(EntrySpec("^baz$", "renamed.$0"))

        assert entry.apply("baz") == Mogrified("renamed.baz")


class TestApply:
    """Test MogrifierEntry.apply()"""

    def setup_method(self):
        """Set up test fixtures."""
        self.entry = MogrifierEntry.from_spec(
            EntrySpec(r"^foo\.(\d+)\.bar$", "foo.bar", {"id": "$1"})
        )

    def test_match_rewrites_name_and_tags(self):
        result = self.entry.apply("foo.42.bar")

        assert result.name == "foo.bar"
        assert set(result.tags) == {"id:42"}

    def test_no_match_returns_none(self):
        assert self.entry.apply("foo.bar") is None

    def test_zero_tags(self):
        entry = MogrifierEntry.from_spec(EntrySpec("^baz$", "qux"))

        result = entry.apply("baz")

        assert result == Mogrified("qux", ())

    def test_multiple_tags(self):
        entry = MogrifierEntry.from_spec(
            EntrySpec(
                r"^api\.(\w+)\.(\d{3})$",
                "api.responses",
                {"endpoint": "$1", "status": "$2", "source": "api"},
            )
        )

        result = entry.apply("api.login.404")

        assert result.name == "api.responses"
        assert set(result.tags) == {"endpoint:login", "status:404", "source:api"}

    def test_search_is_unanchored(self):
        """Test that patterns match anywhere unless anchored"""
        entry = MogrifierEntry.from_spec(EntrySpec(r"(\d+)", "num", {"n": "$1"}))

        assert entry.apply("a.17.b") == Mogrified("num", ("n:17",))

    def test_optional_group_not_matched_expands_empty(self):
        entry = MogrifierEntry.from_spec(
            EntrySpec(r"^jobs(?:\.(\w+))?$", "jobs", {"queue": "$1"})
        )

        assert entry.apply("jobs") == Mogrified("jobs", ("queue:",))

    def test_repeated_calls_are_independent(self):
        first = self.entry.apply("foo.1.bar")
        second = self.entry.apply("foo.2.bar")

        assert first.tags == ("id:1",)
        assert second.tags == ("id:2",)

    def test_entry_is_immutable(self):
        with pytest.raises(AttributeError):
            self.entry.key = "other"
