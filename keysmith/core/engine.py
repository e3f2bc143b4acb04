"""
Keysmith Engine
================

Facade over the charset builder, the password generator and the
strength analyzer. The CLI and any other caller talk to
:class:`KeysmithEngine` only.

The engine logs operation boundaries, counts, alphabet sizes and tiers.
It never logs, stores or reports a password.

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
"""

from __future__ import annotations

from typing import Optional

from shared.config import KeysmithConfig
from shared.logger import KeysmithLogger
from shared.models import Finding, ScanResult, Severity

from keysmith.analyzers.strength import StrengthAnalyzer
from keysmith.core.errors import ConfigError, InvalidCountError
from keysmith.core.models import (
    Alphabet,
    GeneratedPassword,
    GenerationOptions,
    PasswordAnalysis,
    StrengthTier,
)
from keysmith.generators.charset import CharsetBuilder
from keysmith.generators.password import PasswordGenerator, RandomSource

_TIER_SEVERITY: dict[StrengthTier, Severity] = {
    StrengthTier.VERY_WEAK: Severity.CRITICAL,
    StrengthTier.WEAK: Severity.HIGH,
    StrengthTier.MEDIUM: Severity.MEDIUM,
    StrengthTier.STRONG: Severity.LOW,
    StrengthTier.VERY_STRONG: Severity.INFO,
    StrengthTier.EXCELLENT: Severity.INFO,
}


class KeysmithEngine:
    """Orchestrates password generation and strength analysis.

    Usage::

        engine = KeysmithEngine()
        password = engine.generate(GenerationOptions(length=20))
        batch = engine.generate_many(GenerationOptions(), count=5)
        analysis = engine.analyze("Tr0ub4dor&3")
        report = engine.assess("Tr0ub4dor&3")

    Args:
        config: Configuration; defaults to built-in values.
        random_source: Byte source for the generator; defaults to the
            operating-system CSPRNG.
        logger: Logger; one bound to ``keysmith.engine`` is created if omitted.
    """

    def __init__(
        self,
        config: Optional[KeysmithConfig] = None,
        random_source: Optional[RandomSource] = None,
        logger: Optional[KeysmithLogger] = None,
    ) -> None:
        self.config = config or KeysmithConfig()
        settings = self.config.global_settings
        self.logger = logger or KeysmithLogger(
            "engine",
            log_level=settings.effective_log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
        )

        self._charset_builder = CharsetBuilder()
        self._generator = PasswordGenerator(
            random_source,
            min_length=self.config.generator.min_length,
            max_length=self.config.generator.max_length,
        )
        self._analyzer = StrengthAnalyzer(self.config.analyzer)

    # ------------------------------------------------------------------ #
    #  Generation
    # ------------------------------------------------------------------ #

    def build_alphabet(self, options: GenerationOptions) -> Alphabet:
        """Alphabet for *options*; raises :class:`EmptyAlphabetError`."""
        return self._charset_builder.build(options)

    def generate(self, options: GenerationOptions) -> GeneratedPassword:
        """Generate one password.

        Raises:
            EmptyAlphabetError: The options select no symbols.
            InvalidLengthError: ``options.length`` is out of bounds.
        """
        return self.generate_many(options, 1)[0]

    def generate_many(
        self, options: GenerationOptions, count: Optional[int] = None
    ) -> list[GeneratedPassword]:
        """Generate *count* independent passwords.

        *count* defaults to ``generator.default_bulk_count``.

        Raises:
            EmptyAlphabetError: The options select no symbols.
            InvalidLengthError: ``options.length`` is out of bounds.
            InvalidCountError: *count* is outside ``1..max_bulk_count``.
        """
        if count is None:
            count = self.config.generator.default_bulk_count
        max_count = self.config.generator.max_bulk_count
        with self.logger.operation("generate"):
            try:
                if not 1 <= count <= max_count:
                    raise InvalidCountError(count, max_count)
                alphabet = self.build_alphabet(options)
                with self.logger.timed("password generation"):
                    passwords = self._generator.generate_many(
                        alphabet, options.length, count
                    )
            except ConfigError as exc:
                self.logger.warning("Rejected generation request: %s", exc)
                raise

            self.logger.info(
                "Generated %d password(s)",
                count,
                length=options.length,
                alphabet_size=alphabet.size,
                entropy_bits=round(alphabet.entropy_bits(options.length), 2),
            )
        return passwords

    @staticmethod
    def entropy_rating(entropy_bits: float) -> str:
        """Label for a generated password's entropy.

        Ladder: ``>=80`` Very Strong, ``>=60`` Strong, ``>=40`` Medium,
        otherwise Weak.
        """
        if entropy_bits >= 80:
            return "Very Strong"
        if entropy_bits >= 60:
            return "Strong"
        if entropy_bits >= 40:
            return "Medium"
        return "Weak"

    # ------------------------------------------------------------------ #
    #  Analysis
    # ------------------------------------------------------------------ #

    def analyze(self, password: str) -> PasswordAnalysis:
        """Analyse any password string. Never raises."""
        with self.logger.operation("analyze"):
            analysis = self._analyzer.analyze(password)
            self.logger.debug(
                "Analysis complete",
                score=analysis.score,
                tier=analysis.strength_tier.value,
                patterns=len(analysis.detected_patterns),
            )
        return analysis

    def assess(self, password: str) -> ScanResult:
        """Analyse *password* and package the outcome as a :class:`ScanResult`.

        The result's target is the literal ``"[password]"`` and findings
        name pattern categories only.
        """
        return self.build_report(self.analyze(password))

    def build_report(self, analysis: PasswordAnalysis) -> ScanResult:
        """Package an existing analysis as a :class:`ScanResult`."""
        result = ScanResult(tool_name="keysmith", target="[password]")
        result.metadata = analysis.model_dump(mode="json")

        tier = analysis.strength_tier
        result.add_finding(Finding(
            severity=_TIER_SEVERITY[tier],
            title=f"Password Strength: {tier.label}",
            description=(
                f"Score {analysis.score}/100. "
                f"Entropy {analysis.entropy_bits:.1f} bits over an alphabet of "
                f"{analysis.alphabet_size} symbols. "
                f"Estimated crack time: {analysis.estimated_crack_time.display}."
            ),
            evidence={
                "length": analysis.length,
                "unique_characters": analysis.unique_character_count,
                "alphabet_size": analysis.alphabet_size,
                "entropy_bits": analysis.entropy_bits,
                "crack_time_bucket": analysis.estimated_crack_time.bucket.value,
            },
        ))

        for pattern in analysis.detected_patterns:
            result.add_finding(Finding(
                severity=Severity.LOW,
                title=f"Pattern Detected: {pattern.kind.value}",
                description=(
                    f"{pattern.label}. Each pattern costs "
                    f"{self.config.analyzer.pattern_penalty} points."
                ),
                recommendation="Avoid predictable patterns and common words",
            ))

        for improvement in analysis.improvements:
            result.add_finding(Finding(
                severity=Severity.INFO,
                title="Password Improvement Suggestion",
                description=improvement,
            ))

        return result.finalize(
            f"Password analysis: {tier.label}, "
            f"entropy={analysis.entropy_bits:.1f} bits, score={analysis.score}/100"
        )
