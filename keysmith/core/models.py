"""
Keysmith Core Data Models
==========================

Pydantic models shared by the generator, the strength analyzer and the
output layer. Every model is frozen: options, alphabets, generated
passwords and analyses are values that never change once built.

Secret material (generated passwords, matched substrings) is kept out
of ``repr`` output, and matched substrings are excluded from
serialisation so reports and logs cannot echo them back.

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines --
      Authentication and Lifecycle Management.
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
"""

from __future__ import annotations

import enum
import math
import string

from pydantic import BaseModel, ConfigDict, Field, field_validator

from keysmith.core.errors import EmptyAlphabetError


# ===================================================================== #
#  Enumerations
# ===================================================================== #


class CharClass(str, enum.Enum):
    """Character classes, declared in canonical concatenation order."""

    LOWER = "lower"
    UPPER = "upper"
    DIGIT = "digit"
    SYMBOL = "symbol"

    @property
    def symbols(self) -> str:
        """Members of the class in a fixed order.

        The symbol class is the 32 printable ASCII punctuation characters.
        """
        return _CLASS_SYMBOLS[self]

    @property
    def size(self) -> int:
        return len(_CLASS_SYMBOLS[self])


_CLASS_SYMBOLS: dict[CharClass, str] = {
    CharClass.LOWER: string.ascii_lowercase,
    CharClass.UPPER: string.ascii_uppercase,
    CharClass.DIGIT: string.digits,
    CharClass.SYMBOL: string.punctuation,
}


class PatternKind(str, enum.Enum):
    """Weak structural properties detected in a password."""

    REPEATED_RUN = "repeated_run"
    SEQUENTIAL_DIGITS = "sequential_digits"
    SEQUENTIAL_LETTERS = "sequential_letters"
    KEYBOARD_OR_DICTIONARY_WORD = "keyboard_or_dictionary_word"
    SYSTEM_WORD = "system_word"

    @property
    def label(self) -> str:
        """Category text used in feedback; never contains the match."""
        return _PATTERN_LABELS[self]


_PATTERN_LABELS: dict[PatternKind, str] = {
    PatternKind.REPEATED_RUN: "Repeated characters detected",
    PatternKind.SEQUENTIAL_DIGITS: "Sequential numbers found",
    PatternKind.SEQUENTIAL_LETTERS: "Sequential letters found",
    PatternKind.KEYBOARD_OR_DICTIONARY_WORD: "Common keyboard patterns or dictionary words",
    PatternKind.SYSTEM_WORD: "Common system words detected",
}


class CrackTimeBucket(str, enum.Enum):
    """Coarse human-scale brute-force duration buckets."""

    INSTANT = "instant"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    YEARS = "years"
    CENTURIES = "centuries"


class StrengthTier(str, enum.Enum):
    """Ordered qualitative strength rating derived from the score.

    Score ladder (inclusive lower bounds, partitions [0, 100]):
      - 85-100 : EXCELLENT
      - 70-84  : VERY_STRONG
      - 55-69  : STRONG
      - 40-54  : MEDIUM
      - 25-39  : WEAK
      - 0-24   : VERY_WEAK
    """

    VERY_WEAK = "very_weak"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very_strong"
    EXCELLENT = "excellent"

    @property
    def rank(self) -> int:
        """Position in the ordering, VERY_WEAK == 0."""
        return list(StrengthTier).index(self)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def from_score(cls, score: float) -> StrengthTier:
        """Map a 0-100 score onto the tier ladder."""
        if score >= 85:
            return cls.EXCELLENT
        if score >= 70:
            return cls.VERY_STRONG
        if score >= 55:
            return cls.STRONG
        if score >= 40:
            return cls.MEDIUM
        if score >= 25:
            return cls.WEAK
        return cls.VERY_WEAK


# ===================================================================== #
#  Generation Models
# ===================================================================== #


class GenerationOptions(BaseModel):
    """Composition rules for password generation.

    Length bounds are enforced by the generator against the configured
    limits, so a bad length surfaces as
    :class:`~keysmith.core.errors.InvalidLengthError`.

    Attributes:
        length: Number of symbols to draw.
        include_upper: Include ``A-Z``.
        include_lower: Include ``a-z``.
        include_digits: Include ``0-9``.
        include_symbols: Include ASCII punctuation.
        exclude_similar: Drop visually confusable ``i l 1 L o 0 O``.
        exclude_ambiguous: Drop brackets, quotes and punctuation that are
            awkward to transcribe.
    """

    model_config = ConfigDict(frozen=True)

    length: int = 16
    include_upper: bool = True
    include_lower: bool = True
    include_digits: bool = True
    include_symbols: bool = True
    exclude_similar: bool = False
    exclude_ambiguous: bool = False


class Alphabet(BaseModel):
    """Ordered set of unique symbols eligible for generation.

    Attributes:
        symbols: The symbols, in canonical class order.
        classes: Character classes that contributed at least one symbol.
        class_counts: Symbols contributed per class after exclusions.
    """

    model_config = ConfigDict(frozen=True)

    symbols: str
    classes: tuple[CharClass, ...] = ()
    class_counts: dict[CharClass, int] = Field(default_factory=dict)

    @field_validator("symbols")
    @classmethod
    def _check_symbols(cls, v: str) -> str:
        """Reject empty alphabets and repeated symbols.

        A repeated symbol would be drawn more often than the others.
        """
        if not v:
            raise EmptyAlphabetError()
        if len(set(v)) != len(v):
            raise ValueError("alphabet symbols must be unique")
        return v

    @property
    def size(self) -> int:
        return len(self.symbols)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and len(symbol) == 1 and symbol in self.symbols

    def entropy_bits(self, length: int) -> float:
        """Entropy of a uniform draw of *length* symbols: length * log2(|Σ|)."""
        if length <= 0 or self.size <= 1:
            return 0.0
        return length * math.log2(self.size)


class GeneratedPassword(BaseModel):
    """A freshly generated password and its entropy.

    Attributes:
        value: The password itself (hidden from ``repr``).
        length: Number of symbols.
        alphabet_size: Size of the alphabet it was drawn from.
        entropy_bits: ``length * log2(alphabet_size)``.
    """

    model_config = ConfigDict(frozen=True)

    value: str = Field(repr=False)
    length: int
    alphabet_size: int
    entropy_bits: float

    def __str__(self) -> str:
        return self.value


# ===================================================================== #
#  Analysis Models
# ===================================================================== #


class PatternFinding(BaseModel):
    """A detected weakening pattern.

    Attributes:
        kind: Pattern category.
        match: The matched substring; hidden from ``repr`` and serialisation.
        position: Start index of the match within the password.
    """

    model_config = ConfigDict(frozen=True)

    kind: PatternKind
    match: str = Field(default="", repr=False, exclude=True)
    position: int = 0

    @property
    def label(self) -> str:
        return self.kind.label


class CrackTimeEstimate(BaseModel):
    """Average-case brute-force duration at a fixed attack rate.

    Attributes:
        bucket: Coarse duration bucket.
        seconds: Estimated seconds; ``inf`` when beyond float range.
        log10_seconds: ``log10`` of the estimate, always finite.
        guesses_per_second: Assumed attack rate.
        display: Human-readable duration.
    """

    model_config = ConfigDict(frozen=True)

    bucket: CrackTimeBucket
    seconds: float
    log10_seconds: float
    guesses_per_second: float
    display: str


class PasswordAnalysis(BaseModel):
    """Complete strength assessment of one password.

    Attributes:
        length: Character length.
        has_upper / has_lower / has_digits / has_symbols: Composition flags.
        unique_character_count: Distinct characters.
        alphabet_size: Evidence-based effective alphabet size.
        entropy_bits: ``length * log2(alphabet_size)``, rounded to 2 places.
        estimated_crack_time: Brute-force duration estimate.
        detected_patterns: Findings in detection order.
        score: Integer score in [0, 100].
        strength_tier: Tier derived from ``score``.
        feedback: Deficiencies found.
        improvements: Recommendations.
    """

    model_config = ConfigDict(frozen=True)

    length: int = 0
    has_upper: bool = False
    has_lower: bool = False
    has_digits: bool = False
    has_symbols: bool = False
    unique_character_count: int = 0
    alphabet_size: int = 1
    entropy_bits: float = 0.0
    estimated_crack_time: CrackTimeEstimate
    detected_patterns: tuple[PatternFinding, ...] = ()
    score: int = Field(default=0, ge=0, le=100)
    strength_tier: StrengthTier = StrengthTier.VERY_WEAK
    feedback: tuple[str, ...] = ()
    improvements: tuple[str, ...] = ()

    @property
    def pattern_kinds(self) -> list[PatternKind]:
        return [p.kind for p in self.detected_patterns]
