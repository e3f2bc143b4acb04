"""Tests for StrengthAnalyzer."""

from __future__ import annotations

import math

import pytest

from shared.config import AnalyzerConfig

from keysmith.analyzers.strength import StrengthAnalyzer
from keysmith.core.models import CrackTimeBucket, PatternKind, StrengthTier


class TestScenarios:
    def test_empty_password(self, analyzer):
        result = analyzer.analyze("")
        assert result.score == 0
        assert result.strength_tier is StrengthTier.VERY_WEAK
        assert result.detected_patterns == ()
        assert result.alphabet_size == 1
        assert result.entropy_bits == 0.0
        assert result.estimated_crack_time.bucket is CrackTimeBucket.INSTANT
        assert result.feedback == ("Password is empty. Use a strong passphrase.",)

    def test_single_repeated_character(self, analyzer):
        result = analyzer.analyze("aaaaaaaa")
        assert result.pattern_kinds == [PatternKind.REPEATED_RUN]
        assert result.alphabet_size == 1
        assert result.entropy_bits == pytest.approx(0.0)
        assert result.strength_tier is StrengthTier.VERY_WEAK
        # 5 (lower) + 15 (length 8) + 1.5 (unique) - 15 (pattern)
        assert result.score == 6

    def test_tr0ub4dor(self, analyzer):
        result = analyzer.analyze("Tr0ub4dor&3")
        assert result.has_lower and result.has_upper
        assert result.has_digits and result.has_symbols
        assert result.detected_patterns == ()
        assert result.alphabet_size == 94
        assert result.entropy_bits == pytest.approx(72.1, abs=0.01)
        assert result.score == 55
        assert result.strength_tier.rank >= StrengthTier.STRONG.rank

    def test_qwerty123(self, analyzer):
        result = analyzer.analyze("qwerty123")
        kinds = result.pattern_kinds
        assert PatternKind.KEYBOARD_OR_DICTIONARY_WORD in kinds
        assert PatternKind.SEQUENTIAL_DIGITS in kinds
        # 10 (classes) + 15 (length) + 13.5 (unique) - 30 (two patterns)
        assert result.score == 8
        assert result.strength_tier is StrengthTier.VERY_WEAK

    def test_admin_counts_in_both_word_categories(self, analyzer):
        result = analyzer.analyze("xAdmin!Zebra9")
        assert result.pattern_kinds == [
            PatternKind.KEYBOARD_OR_DICTIONARY_WORD,
            PatternKind.SYSTEM_WORD,
        ]


class TestPatterns:
    def test_repeated_run_position(self, analyzer):
        [finding] = analyzer.detect_patterns("Xy111Zq")
        assert finding.kind is PatternKind.REPEATED_RUN
        assert finding.match == "111"
        assert finding.position == 2

    def test_two_repeats_are_not_a_run(self, analyzer):
        assert analyzer.detect_patterns("aabbcc") == []

    def test_sequential_digits_wrap(self, analyzer):
        [finding] = analyzer.detect_patterns("Qz890")
        assert finding.kind is PatternKind.SEQUENTIAL_DIGITS
        assert finding.match == "890"

    def test_sequential_digits_maximal_run(self, analyzer):
        [finding] = analyzer.detect_patterns("x45678y")
        assert finding.match == "45678"
        assert finding.position == 1

    def test_descending_digits_ignored(self, analyzer):
        assert analyzer.detect_patterns("x321y") == []

    def test_sequential_letters_case_insensitive(self, analyzer):
        [finding] = analyzer.detect_patterns("9dEf!")
        assert finding.kind is PatternKind.SEQUENTIAL_LETTERS
        assert finding.match == "dEf"
        assert finding.position == 1

    def test_system_word(self, analyzer):
        [finding] = analyzer.detect_patterns("Zx#ROOT7q")
        assert finding.kind is PatternKind.SYSTEM_WORD
        assert finding.match == "ROOT"

    def test_match_excluded_from_serialisation(self, analyzer):
        result = analyzer.analyze("hunterqwerty")
        dumped = result.model_dump_json()
        assert "qwerty" not in dumped
        assert "qwerty" not in repr(result)

    def test_feedback_names_categories_not_matches(self, analyzer):
        result = analyzer.analyze("Dragon!997")
        assert PatternKind.KEYBOARD_OR_DICTIONARY_WORD.label in result.feedback
        joined = " ".join(result.feedback + result.improvements).lower()
        assert "dragon" not in joined


class TestEntropyAndAlphabet:
    def test_alphabet_reflects_present_classes(self, analyzer):
        assert analyzer.analyze("k7m2q9x4").alphabet_size == 36

    def test_characters_outside_classes_contribute_nothing(self, analyzer):
        result = analyzer.analyze("é€ü")
        assert result.alphabet_size == 1
        assert result.entropy_bits == 0.0
        assert not (result.has_lower or result.has_upper or result.has_digits)

    def test_non_printable_input(self, analyzer):
        result = analyzer.analyze("\x00\x01\x02ab\n")
        assert result.length == 6
        assert result.alphabet_size == 26
        assert 0 <= result.score <= 100

    def test_entropy_formula(self, analyzer):
        result = analyzer.analyze("Zk8#")
        assert result.entropy_bits == pytest.approx(round(4 * math.log2(94), 2))


class TestCrackTime:
    @pytest.mark.parametrize(
        "size, length, bucket, display",
        [
            (10, 4, CrackTimeBucket.INSTANT, "Instantly"),
            (26, 7, CrackTimeBucket.SECONDS, "Seconds"),
            (62, 8, CrackTimeBucket.DAYS, "2 days"),
            (94, 16, CrackTimeBucket.CENTURIES, "Centuries+"),
        ],
    )
    def test_buckets(self, analyzer, size, length, bucket, display):
        estimate = analyzer.estimate_crack_time(size, length)
        assert estimate.bucket is bucket
        assert estimate.display == display

    def test_minutes_bucket(self, analyzer):
        # 36**8 / 2e9 ~= 1410 s
        estimate = analyzer.estimate_crack_time(36, 8)
        assert estimate.bucket is CrackTimeBucket.MINUTES
        assert estimate.display == "24 minutes"

    def test_huge_keyspace_stays_finite_in_log_space(self, analyzer):
        estimate = analyzer.estimate_crack_time(94, 10_000)
        assert math.isinf(estimate.seconds)
        assert math.isfinite(estimate.log10_seconds)
        assert estimate.bucket is CrackTimeBucket.CENTURIES

    def test_attack_rate_is_configurable(self):
        slow = StrengthAnalyzer(AnalyzerConfig(attack_rate=1.0))
        estimate = slow.estimate_crack_time(10, 3)
        assert estimate.guesses_per_second == 1.0
        assert estimate.bucket is CrackTimeBucket.MINUTES


class TestScoring:
    def test_idempotent(self, analyzer):
        first = analyzer.analyze("C0rrect-Horse!")
        second = analyzer.analyze("C0rrect-Horse!")
        assert first.model_dump_json() == second.model_dump_json()
        assert first == second

    def test_longer_extension_scores_at_least_as_high(self, analyzer):
        base = "Kx9!mP2@"
        longer = base + "vQ7#wT"
        assert analyzer.analyze(longer).score >= analyzer.analyze(base).score

    def test_score_bounds(self, analyzer):
        strong = analyzer.analyze("Kx9!mP2@vQ7#wT4$hN6&")
        assert strong.score <= 100
        assert strong.strength_tier is StrengthTier.EXCELLENT

    def test_pattern_penalty_configurable(self):
        lenient = StrengthAnalyzer(AnalyzerConfig(pattern_penalty=0))
        assert lenient.analyze("qwerty123").score == 38

    @pytest.mark.parametrize(
        "score, tier",
        [
            (0, StrengthTier.VERY_WEAK),
            (24, StrengthTier.VERY_WEAK),
            (25, StrengthTier.WEAK),
            (39, StrengthTier.WEAK),
            (40, StrengthTier.MEDIUM),
            (54, StrengthTier.MEDIUM),
            (55, StrengthTier.STRONG),
            (69, StrengthTier.STRONG),
            (70, StrengthTier.VERY_STRONG),
            (84, StrengthTier.VERY_STRONG),
            (85, StrengthTier.EXCELLENT),
            (100, StrengthTier.EXCELLENT),
        ],
    )
    def test_tier_ladder(self, score, tier):
        assert StrengthTier.from_score(score) is tier

    def test_tier_ladder_is_monotonic(self):
        ranks = [StrengthTier.from_score(s).rank for s in range(101)]
        assert ranks == sorted(ranks)


class TestFeedback:
    def test_short_password(self, analyzer):
        result = analyzer.analyze("Ab1!")
        assert result.feedback[0] == "Use at least 8 characters"
        assert "Increase length to at least 12 characters" in result.improvements

    def test_medium_length(self, analyzer):
        result = analyzer.analyze("Ab1!Cd2@Ef")
        assert result.feedback[0] == "Consider using 12+ characters for better security"

    def test_missing_classes(self, analyzer):
        result = analyzer.analyze("kmpqxzwv")
        assert "Add uppercase letters (A-Z)" in result.feedback
        assert "Add numbers (0-9)" in result.feedback
        assert "Add special characters (!@#$%^&*)" in result.feedback
        assert "Add lowercase letters (a-z)" not in result.feedback
        assert "Use more diverse special characters" in result.improvements

    def test_low_diversity(self, analyzer):
        result = analyzer.analyze("AbAbAbAb1!")
        assert "Increase character diversity" in result.feedback
        assert "Increase character variety" in result.improvements

    def test_always_present_improvements(self, analyzer):
        result = analyzer.analyze("Kx9!mP2@vQ7#wT4$hN6&")
        assert result.improvements == (
            "Consider using a passphrase with random words",
            "Use a password manager for unique passwords",
        )
        assert result.feedback == ()
