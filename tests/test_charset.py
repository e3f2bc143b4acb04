"""Tests for CharsetBuilder."""

from __future__ import annotations

import string

import pytest

from keysmith.core.errors import ConfigError, EmptyAlphabetError
from keysmith.core.models import CharClass, GenerationOptions
from keysmith.generators.charset import AMBIGUOUS_CHARACTERS, SIMILAR_CHARACTERS


class TestDefaultAlphabet:
    def test_default_size_is_94(self, builder):
        alphabet = builder.build(GenerationOptions())
        assert alphabet.size == 94

    def test_canonical_order(self, builder):
        alphabet = builder.build(GenerationOptions())
        expected = (
            string.ascii_lowercase
            + string.ascii_uppercase
            + string.digits
            + string.punctuation
        )
        assert alphabet.symbols == expected

    def test_symbols_are_unique(self, builder):
        alphabet = builder.build(GenerationOptions())
        assert len(set(alphabet.symbols)) == alphabet.size

    def test_class_counts(self, builder):
        alphabet = builder.build(GenerationOptions())
        assert alphabet.class_counts == {
            CharClass.LOWER: 26,
            CharClass.UPPER: 26,
            CharClass.DIGIT: 10,
            CharClass.SYMBOL: 32,
        }
        assert alphabet.classes == tuple(CharClass)

    def test_deterministic(self, builder):
        options = GenerationOptions(exclude_similar=True, exclude_ambiguous=True)
        assert builder.build(options) == builder.build(options)


class TestSelection:
    def test_single_class(self, builder):
        alphabet = builder.build(
            GenerationOptions(include_upper=False, include_lower=False, include_symbols=False)
        )
        assert alphabet.symbols == string.digits
        assert alphabet.classes == (CharClass.DIGIT,)

    def test_no_symbols(self, builder):
        alphabet = builder.build(GenerationOptions(include_symbols=False))
        assert alphabet.size == 62
        assert not any(c in alphabet for c in string.punctuation)


class TestExclusions:
    def test_exclude_similar(self, builder):
        alphabet = builder.build(GenerationOptions(exclude_similar=True))
        assert alphabet.size == 94 - len(SIMILAR_CHARACTERS)
        assert not SIMILAR_CHARACTERS & set(alphabet.symbols)

    def test_exclude_ambiguous(self, builder):
        alphabet = builder.build(GenerationOptions(exclude_ambiguous=True))
        assert alphabet.size == 94 - len(AMBIGUOUS_CHARACTERS)
        assert alphabet.class_counts[CharClass.SYMBOL] == 32 - len(AMBIGUOUS_CHARACTERS)

    def test_exclusions_only_count_against_included_classes(self, builder):
        # Digits alone lose only 1 and 0 to the similar set.
        alphabet = builder.build(
            GenerationOptions(
                include_upper=False,
                include_lower=False,
                include_symbols=False,
                exclude_similar=True,
                exclude_ambiguous=True,
            )
        )
        assert alphabet.size == 8
        assert alphabet.symbols == "23456789"

    def test_lowercase_similar(self, builder):
        alphabet = builder.build(
            GenerationOptions(
                include_upper=False,
                include_digits=False,
                include_symbols=False,
                exclude_similar=True,
            )
        )
        assert alphabet.size == 23
        assert "i" not in alphabet and "l" not in alphabet and "o" not in alphabet

    def test_membership_rejects_non_characters(self, builder):
        alphabet = builder.build(GenerationOptions())
        assert "ab" not in alphabet
        assert 1 not in alphabet


class TestEmptyAlphabet:
    def test_all_flags_false(self, builder):
        options = GenerationOptions(
            length=10,
            include_upper=False,
            include_lower=False,
            include_digits=False,
            include_symbols=False,
        )
        with pytest.raises(EmptyAlphabetError, match="at least one character type"):
            builder.build(options)

    def test_is_a_config_error(self, builder):
        options = GenerationOptions(
            include_upper=False,
            include_lower=False,
            include_digits=False,
            include_symbols=False,
        )
        with pytest.raises(ConfigError):
            builder.build(options)

    def test_exclusions_empty_the_only_class(self, builder, monkeypatch):
        from keysmith.generators import charset

        monkeypatch.setattr(charset, "SIMILAR_CHARACTERS", frozenset(string.digits))
        options = GenerationOptions(
            include_upper=False,
            include_lower=False,
            include_symbols=False,
            exclude_similar=True,
        )
        with pytest.raises(EmptyAlphabetError, match="Exclusions removed"):
            builder.build(options)
