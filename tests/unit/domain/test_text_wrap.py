"""Unit tests for character-budget wrapping"""

import pytest

from src.domain.text_wrap import iter_wrapped, truncate, wrap_text


class TestWrapText:

    def test_short_line_is_kept(self):
        assert wrap_text("12 rue de la Paix", 45) == ["12 rue de la Paix"]

    def test_breaks_at_last_space(self):
        assert wrap_text("hello world foo", 8) == ["hello", "world", "foo"]

    def test_breaks_after_hyphen(self):
        assert wrap_text("Saint-Germain-des-Prés", 10) == ["Saint-", "Germain-", "des-Prés"]

    def test_hard_break_without_separator(self):
        assert wrap_text("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_logical_lines_are_wrapped_independently(self):
        assert wrap_text("12 rue de la Paix\n75002 Paris", 45) == ["12 rue de la Paix", "75002 Paris"]

    def test_blank_lines_are_kept(self):
        assert wrap_text("a\n\nb", 10) == ["a", "", "b"]

    def test_empty_text(self):
        assert wrap_text("", 10) == [""]
        assert wrap_text(None, 10) == [""]

    def test_every_chunk_respects_the_budget(self):
        text = "Bâtiment C, 4e étage, zone industrielle des Grands-Champs-Élysées-Prolongés"
        assert all(len(chunk) <= 20 for chunk in wrap_text(text, 20))

    def test_long_input_does_not_recurse(self):
        chunks = list(iter_wrapped("x" * 100000, 45))
        assert len(chunks) == 2223

    def test_invalid_budget(self):
        with pytest.raises(ValueError):
            list(iter_wrapped("abc", 0))


class TestTruncate:

    def test_truncate(self):
        assert truncate("abcdef", 4) == "abcd"
        assert truncate("abc", 4) == "abc"
