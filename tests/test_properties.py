"""Tests for the flat property file helpers."""

import pytest

from forageconfig.exceptions import ConfigFileError
from forageconfig.properties import (
    is_comment_or_blank,
    parse_properties,
    read_lines,
    split_line,
    write_lines,
)


class TestSplitLine:
    """Tests for split_line."""

    def test_assignment(self):
        assert split_line("forage.jdbc.url=jdbc:h2:mem:test") == (
            "forage.jdbc.url", "jdbc:h2:mem:test"
        )

    def test_colon_separator(self):
        assert split_line("forage.jdbc.url: jdbc:h2:mem:test") == (
            "forage.jdbc.url", "jdbc:h2:mem:test"
        )

    def test_first_separator_wins(self):
        assert split_line("a=b:c") == ("a", "b:c")
        assert split_line("a:b=c") == ("a", "b=c")

    def test_value_may_contain_equals(self):
        assert split_line("a=b=c") == ("a", "b=c")

    def test_whitespace_trimmed(self):
        assert split_line("  key  =  value  ") == ("key", "value")

    @pytest.mark.parametrize("line", ["", "   ", "# a=b", "! a=b", "  # a=b", "=value", "no separator"])
    def test_not_an_assignment(self, line):
        assert split_line(line) is None

    def test_comment_detection(self):
        assert is_comment_or_blank("# note")
        assert is_comment_or_blank("")
        assert not is_comment_or_blank("key=value")


class TestParseProperties:
    """Tests for parse_properties."""

    def test_separators_and_comments(self):
        text = "# header\na=1\nb : 2\n! bang comment\n\nflag\n"

        assert parse_properties(text) == {"a": "1", "b": "2", "flag": ""}

    def test_continuation_lines(self):
        text = "list=one,\\\n    two,\\\n    three\nnext=x\n"

        assert parse_properties(text) == {"list": "one,two,three", "next": "x"}

    def test_later_duplicates_win(self):
        assert parse_properties("a=1\na=2\n") == {"a": "2"}

    def test_order_kept(self):
        assert list(parse_properties("z=1\na=2\nm=3\n")) == ["z", "a", "m"]


class TestFiles:
    """Whole-file reads and writes."""

    def test_write_then_read_lines(self, tmp_path):
        path = tmp_path / "a.properties"

        write_lines(path, ["# c", "", "a=1"])

        assert path.read_text() == "# c\n\na=1\n"
        assert read_lines(path) == ["# c", "", "a=1"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigFileError) as excinfo:
            read_lines(tmp_path / "missing.properties")
        assert excinfo.value.path.endswith("missing.properties")
