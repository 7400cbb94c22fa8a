"""Tests for text normalization helpers."""

import pytest

from duet.knowledge import collapse_whitespace, has_alphanumeric, normalize


class TestNormalize:
    """Tests for normalize()."""

    def test_case_and_punctuation_insensitive(self) -> None:
        assert normalize("Hello, World!") == normalize("hello world")

    def test_collapses_runs_to_single_space(self) -> None:
        assert normalize("a -- b\t\n c") == "a b c"

    def test_trims(self) -> None:
        assert normalize("  ...what?  ") == "what"

    def test_underscore_is_a_separator(self) -> None:
        assert normalize("snake_case_name") == "snake case name"

    def test_unicode_letters_kept(self) -> None:
        assert normalize("Ça va, Zoë?") == "ça va zoë"

    def test_digits_kept(self) -> None:
        assert normalize("Route 66!") == "route 66"

    def test_only_punctuation_is_empty(self) -> None:
        assert normalize("?!...") == ""

    @pytest.mark.parametrize(
        "text",
        ["Hello, World!", "  MiXeD -- case  ", "Ça va?", "", "a_b_c", "İstanbul"],
    )
    def test_idempotent(self, text: str) -> None:
        once = normalize(text)
        assert normalize(once) == once


class TestHelpers:
    """Tests for whitespace collapsing and alphanumeric detection."""

    def test_collapse_whitespace(self) -> None:
        assert collapse_whitespace("  new \t  fact\n") == "new fact"

    def test_collapse_whitespace_keeps_case_and_punctuation(self) -> None:
        assert collapse_whitespace("Hi,  There!") == "Hi, There!"

    def test_has_alphanumeric(self) -> None:
        assert has_alphanumeric("...a")
        assert has_alphanumeric("42")
        assert not has_alphanumeric("?!… --")
