"""
Password Strength Analyzer
===========================

Evidence-based password strength assessment: composition scan, pattern
detection, entropy over the character classes actually present, an
average-case brute-force crack-time estimate, a 0-100 score with a
six-step tier ladder, and remediation text.

Scoring breakdown:
    - Character classes: lower 5, upper 5, digit 5, symbol 10
    - Length milestones: 8 -> +15, 12 -> +15, 16 -> +10, 20 -> +5
    - Uniqueness: 1.5 per distinct character, capped at 15
    - Patterns: -15 per finding
    - Clamped to [0, 100] and truncated to an integer

Crack time assumes 10^9 guesses/second (one modern GPU against a fast
hash) and half the keyspace on average. Both the rate and the weights
are policy constants read from :class:`shared.config.AnalyzerConfig`.

The analyzer is a pure function of its input. Feedback names pattern
categories, never the matched text.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Bonneau, J. (2012). The Science of Guessing: Analyzing an
      Anonymized Corpus of 70 Million Passwords. IEEE S&P.
"""

from __future__ import annotations

import math
import re
import string
from typing import Optional

from shared.config import AnalyzerConfig

from keysmith.core.models import (
    CharClass,
    CrackTimeBucket,
    CrackTimeEstimate,
    PasswordAnalysis,
    PatternFinding,
    PatternKind,
    StrengthTier,
)


# ===================================================================== #
#  Pattern Databases
# ===================================================================== #

_KEYBOARD_AND_DICTIONARY_TOKENS: tuple[str, ...] = (
    "qwerty", "asdf", "zxcv", "1234", "password", "admin", "login",
    "welcome", "letmein", "monkey", "dragon", "princess", "master",
)

_SYSTEM_WORDS: tuple[str, ...] = (
    "password", "admin", "login", "user", "guest", "test", "demo",
    "root", "administrator",
)

# Ascending digit order including the top-row wrap 8-9-0.
_DIGIT_SEQUENCE = "01234567890"
_LETTER_SEQUENCE = "abcdefghijklmnopqrstuvwxyz"
_MIN_RUN = 3

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

_REPEATED_RUN_RE = re.compile(r"(.)\1{2,}", re.DOTALL)

_CLASS_POINTS: dict[CharClass, int] = {
    CharClass.LOWER: 5,
    CharClass.UPPER: 5,
    CharClass.DIGIT: 5,
    CharClass.SYMBOL: 10,
}

# (minimum length, bonus) pairs; every reached milestone adds its bonus.
_LENGTH_MILESTONES: tuple[tuple[int, int], ...] = ((8, 15), (12, 15), (16, 10), (20, 5))

_SECONDS_PER_YEAR = 31_536_000
# (exclusive upper bound in seconds, bucket)
_CRACK_TIME_BUCKETS: tuple[tuple[float, CrackTimeBucket], ...] = (
    (1, CrackTimeBucket.INSTANT),
    (60, CrackTimeBucket.SECONDS),
    (3_600, CrackTimeBucket.MINUTES),
    (86_400, CrackTimeBucket.HOURS),
    (_SECONDS_PER_YEAR, CrackTimeBucket.DAYS),
    (_SECONDS_PER_YEAR * 1_000, CrackTimeBucket.YEARS),
)

_MISSING_CLASS_FEEDBACK: dict[CharClass, str] = {
    CharClass.LOWER: "Add lowercase letters (a-z)",
    CharClass.UPPER: "Add uppercase letters (A-Z)",
    CharClass.DIGIT: "Add numbers (0-9)",
    CharClass.SYMBOL: "Add special characters (!@#$%^&*)",
}

_ALWAYS_IMPROVE: tuple[str, ...] = (
    "Consider using a passphrase with random words",
    "Use a password manager for unique passwords",
)


class StrengthAnalyzer:
    """Analyses password strength.

    Usage::

        analyzer = StrengthAnalyzer()
        result = analyzer.analyze("Tr0ub4dor&3")
        result.strength_tier      # StrengthTier.STRONG
        result.entropy_bits       # 72.1

    Args:
        config: Scoring policy; defaults to :class:`AnalyzerConfig` values.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        self.config = config or AnalyzerConfig()

    def analyze(self, password: str) -> PasswordAnalysis:
        """Assess *password*. Total over all strings; never raises."""
        if not password:
            return PasswordAnalysis(
                estimated_crack_time=self.estimate_crack_time(1, 0),
                feedback=("Password is empty. Use a strong passphrase.",),
                improvements=_ALWAYS_IMPROVE,
            )

        length = len(password)
        present = self.classes_present(password)
        unique = len(set(password))

        patterns = self.detect_patterns(password)

        alphabet_size = self.effective_alphabet_size(present, unique)
        entropy = length * math.log2(alphabet_size)
        crack_time = self.estimate_crack_time(alphabet_size, length)

        score = self._calculate_score(present, length, unique, patterns)
        diversity = unique / length

        return PasswordAnalysis(
            length=length,
            has_upper=CharClass.UPPER in present,
            has_lower=CharClass.LOWER in present,
            has_digits=CharClass.DIGIT in present,
            has_symbols=CharClass.SYMBOL in present,
            unique_character_count=unique,
            alphabet_size=alphabet_size,
            entropy_bits=round(entropy, 2),
            estimated_crack_time=crack_time,
            detected_patterns=tuple(patterns),
            score=score,
            strength_tier=StrengthTier.from_score(score),
            feedback=tuple(self._generate_feedback(present, length, diversity, patterns)),
            improvements=tuple(
                self._generate_improvements(present, length, diversity, patterns)
            ),
        )

    # ------------------------------------------------------------------ #
    #  Composition and Entropy
    # ------------------------------------------------------------------ #

    @staticmethod
    def classes_present(password: str) -> frozenset[CharClass]:
        """Character classes with at least one member in *password*."""
        chars = set(password)
        return frozenset(c for c in CharClass if chars.intersection(c.symbols))

    @staticmethod
    def effective_alphabet_size(present: frozenset[CharClass], unique: int) -> int:
        """Sum of class sizes for the classes present.

        A password made of one distinct character has alphabet size 1.
        Characters outside the four classes contribute nothing, and the
        size never drops below 1.
        """
        if unique <= 1:
            return 1
        return max(1, sum(c.size for c in present))

    def estimate_crack_time(self, alphabet_size: int, length: int) -> CrackTimeEstimate:
        """Average-case brute force: ``alphabet_size**length / (2 * rate)``.

        Computed in log space so arbitrarily long inputs stay finite.
        """
        rate = self.config.attack_rate
        log10_seconds = length * math.log10(max(alphabet_size, 1)) - math.log10(2 * rate)
        seconds = 10 ** log10_seconds if log10_seconds < 300 else math.inf

        bucket = CrackTimeBucket.CENTURIES
        for upper, candidate in _CRACK_TIME_BUCKETS:
            if seconds < upper:
                bucket = candidate
                break

        return CrackTimeEstimate(
            bucket=bucket,
            seconds=seconds,
            log10_seconds=log10_seconds,
            guesses_per_second=rate,
            display=self._format_duration(bucket, seconds),
        )

    @staticmethod
    def _format_duration(bucket: CrackTimeBucket, seconds: float) -> str:
        if bucket is CrackTimeBucket.INSTANT:
            return "Instantly"
        if bucket is CrackTimeBucket.SECONDS:
            return "Seconds"
        if bucket is CrackTimeBucket.MINUTES:
            return f"{math.ceil(seconds / 60)} minutes"
        if bucket is CrackTimeBucket.HOURS:
            return f"{math.ceil(seconds / 3_600)} hours"
        if bucket is CrackTimeBucket.DAYS:
            return f"{math.ceil(seconds / 86_400)} days"
        if bucket is CrackTimeBucket.YEARS:
            return f"{math.ceil(seconds / _SECONDS_PER_YEAR)} years"
        return "Centuries+"

    # ------------------------------------------------------------------ #
    #  Pattern Detection
    # ------------------------------------------------------------------ #

    def detect_patterns(self, password: str) -> list[PatternFinding]:
        """Run every detector; at most one finding per category, in a fixed order."""
        detectors = (
            self._detect_repeated_run,
            self._detect_sequential_digits,
            self._detect_sequential_letters,
            self._detect_keyboard_or_dictionary,
            self._detect_system_word,
        )
        findings: list[PatternFinding] = []
        for detector in detectors:
            finding = detector(password)
            if finding is not None:
                findings.append(finding)
        return findings

    @staticmethod
    def _detect_repeated_run(password: str) -> Optional[PatternFinding]:
        """Same character three or more times in a row (aaa, 111)."""
        match = _REPEATED_RUN_RE.search(password)
        if match is None:
            return None
        return PatternFinding(
            kind=PatternKind.REPEATED_RUN,
            match=match.group(),
            position=match.start(),
        )

    @staticmethod
    def _find_ascending_run(text: str, sequence: str) -> Optional[tuple[int, int]]:
        """First maximal run of 3+ characters that is a substring of *sequence*.

        Returns ``(start, end)`` or ``None``.
        """
        for start in range(len(text) - _MIN_RUN + 1):
            if text[start : start + _MIN_RUN] not in sequence:
                continue
            end = start + _MIN_RUN
            while end < len(text) and text[start : end + 1] in sequence:
                end += 1
            return start, end
        return None

    def _detect_sequential_digits(self, password: str) -> Optional[PatternFinding]:
        """Ascending digit runs (123, 4567, 890)."""
        run = self._find_ascending_run(password, _DIGIT_SEQUENCE)
        if run is None:
            return None
        start, end = run
        return PatternFinding(
            kind=PatternKind.SEQUENTIAL_DIGITS,
            match=password[start:end],
            position=start,
        )

    def _detect_sequential_letters(self, password: str) -> Optional[PatternFinding]:
        """Ascending letter runs, case-insensitive (abc, XYZ, dEf)."""
        run = self._find_ascending_run(password.translate(_ASCII_LOWER), _LETTER_SEQUENCE)
        if run is None:
            return None
        start, end = run
        return PatternFinding(
            kind=PatternKind.SEQUENTIAL_LETTERS,
            match=password[start:end],
            position=start,
        )

    @staticmethod
    def _find_token(password: str, tokens: tuple[str, ...]) -> Optional[tuple[int, str]]:
        lowered = password.translate(_ASCII_LOWER)
        for token in tokens:
            idx = lowered.find(token)
            if idx >= 0:
                return idx, password[idx : idx + len(token)]
        return None

    def _detect_keyboard_or_dictionary(self, password: str) -> Optional[PatternFinding]:
        """Keyboard walks and high-frequency weak words."""
        hit = self._find_token(password, _KEYBOARD_AND_DICTIONARY_TOKENS)
        if hit is None:
            return None
        return PatternFinding(
            kind=PatternKind.KEYBOARD_OR_DICTIONARY_WORD,
            match=hit[1],
            position=hit[0],
        )

    def _detect_system_word(self, password: str) -> Optional[PatternFinding]:
        """Account and role words (admin, root, guest)."""
        hit = self._find_token(password, _SYSTEM_WORDS)
        if hit is None:
            return None
        return PatternFinding(
            kind=PatternKind.SYSTEM_WORD,
            match=hit[1],
            position=hit[0],
        )

    # ------------------------------------------------------------------ #
    #  Scoring
    # ------------------------------------------------------------------ #

    def _calculate_score(
        self,
        present: frozenset[CharClass],
        length: int,
        unique: int,
        patterns: list[PatternFinding],
    ) -> int:
        score: float = sum(_CLASS_POINTS[c] for c in present)
        score += sum(bonus for threshold, bonus in _LENGTH_MILESTONES if length >= threshold)
        score += min(
            unique * self.config.uniqueness_bonus_per_char,
            self.config.uniqueness_bonus_cap,
        )
        score -= len(patterns) * self.config.pattern_penalty
        return int(max(0.0, min(100.0, score)))

    # ------------------------------------------------------------------ #
    #  Feedback
    # ------------------------------------------------------------------ #

    def _generate_feedback(
        self,
        present: frozenset[CharClass],
        length: int,
        diversity: float,
        patterns: list[PatternFinding],
    ) -> list[str]:
        feedback: list[str] = []

        if length < self.config.minimum_length:
            feedback.append(f"Use at least {self.config.minimum_length} characters")
        elif length < self.config.good_length:
            feedback.append(
                f"Consider using {self.config.good_length}+ characters for better security"
            )

        for char_class in CharClass:
            if char_class not in present:
                feedback.append(_MISSING_CLASS_FEEDBACK[char_class])

        if diversity < self.config.diversity_ratio:
            feedback.append("Increase character diversity")

        feedback.extend(p.label for p in patterns)
        return feedback

    def _generate_improvements(
        self,
        present: frozenset[CharClass],
        length: int,
        diversity: float,
        patterns: list[PatternFinding],
    ) -> list[str]:
        improvements: list[str] = []

        if length < self.config.good_length:
            improvements.append(
                f"Increase length to at least {self.config.good_length} characters"
            )
        if patterns:
            improvements.append("Avoid predictable patterns and common words")
        if CharClass.SYMBOL not in present:
            improvements.append("Use more diverse special characters")
        if diversity < self.config.diversity_ratio:
            improvements.append("Increase character variety")

        improvements.extend(_ALWAYS_IMPROVE)
        return improvements
