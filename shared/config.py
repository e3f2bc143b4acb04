"""
Keysmith Configuration Management
==================================

Centralized configuration for the Keysmith password engine using
Python dataclasses and TOML-based persistence.

The analyzer constants (attack rate, score weights) are product policy,
not benchmarks. They live here so they can be reviewed, documented and
overridden without touching the scoring code.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"

# Hard length limits; configured bounds may narrow them, never widen them.
LENGTH_FLOOR = 4
LENGTH_CEILING = 128

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class InvalidConfigError(ValueError):
    """A configuration file is unreadable or holds an out-of-range value."""


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class GeneratorConfig:
    """Bounds and defaults for password generation.

    Lengths run 4..128 and bulk requests are capped at 50 passwords.
    """

    default_length: int = 16
    min_length: int = 4
    max_length: int = 128
    default_bulk_count: int = 5
    max_bulk_count: int = 50

    def __post_init__(self) -> None:
        if not LENGTH_FLOOR <= self.min_length <= self.max_length <= LENGTH_CEILING:
            raise InvalidConfigError(
                f"generator lengths must satisfy {LENGTH_FLOOR} <= min_length "
                f"<= max_length <= {LENGTH_CEILING}, got "
                f"{self.min_length}..{self.max_length}"
            )
        if not self.min_length <= self.default_length <= self.max_length:
            raise InvalidConfigError(
                f"generator.default_length {self.default_length} is outside "
                f"{self.min_length}..{self.max_length}"
            )
        if not 1 <= self.default_bulk_count <= self.max_bulk_count:
            raise InvalidConfigError(
                "generator bulk counts must satisfy 1 <= default_bulk_count "
                f"<= max_bulk_count, got {self.default_bulk_count} and "
                f"{self.max_bulk_count}"
            )


@dataclass(frozen=False, slots=True)
class AnalyzerConfig:
    """Scoring and crack-time policy for the strength analyzer.

    ``attack_rate`` assumes a single modern GPU against a fast hash
    (10^9 guesses/second). Length milestones and class weights are
    fixed in :mod:`keysmith.analyzers.strength`; only the tunable
    penalties and bonuses are exposed here.
    """

    attack_rate: float = 1e9
    pattern_penalty: int = 15
    uniqueness_bonus_per_char: float = 1.5
    uniqueness_bonus_cap: float = 15.0
    minimum_length: int = 8
    good_length: int = 12
    diversity_ratio: float = 0.7

    def __post_init__(self) -> None:
        if not 0 < self.attack_rate < math.inf:
            raise InvalidConfigError(
                f"analyzer.attack_rate must be a positive finite rate, got {self.attack_rate}"
            )
        for name in ("pattern_penalty", "uniqueness_bonus_per_char", "uniqueness_bonus_cap"):
            if getattr(self, name) < 0:
                raise InvalidConfigError(f"analyzer.{name} must not be negative")
        if not 0 <= self.minimum_length <= self.good_length:
            raise InvalidConfigError(
                "analyzer lengths must satisfy 0 <= minimum_length <= good_length"
            )
        if not 0.0 <= self.diversity_ratio <= 1.0:
            raise InvalidConfigError("analyzer.diversity_ratio must be within 0..1")


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and destination, debug flag.

    ``debug`` forces DEBUG logging regardless of ``log_level``.
    """

    log_level: str = "INFO"
    log_file: str | None = None
    log_json: bool = False
    debug: bool = False

    def __post_init__(self) -> None:
        if self.log_level.upper() not in _LOG_LEVELS:
            raise InvalidConfigError(f"unknown log level: {self.log_level!r}")

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class KeysmithConfig:
    """Master configuration aggregating all sections.

    Usage:
        >>> config = KeysmithConfig.load()                  # from default path
        >>> config = KeysmithConfig.load("custom.toml")     # from custom path
        >>> config.generator.max_length
        128
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)

    @classmethod
    def load(cls, path: str | Path | None = None) -> KeysmithConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root. Missing keys fall back to dataclass defaults.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does
                not exist.
            InvalidConfigError: The file is not valid TOML or a value is
                out of range.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            try:
                raw: dict[str, Any] = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise InvalidConfigError(f"{config_path}: {exc}") from exc

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            generator=cls._build_section(GeneratorConfig, raw.get("generator", {})),
            analyzer=cls._build_section(AnalyzerConfig, raw.get("analyzer", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored so that newer config
        files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        try:
            return cls(**filtered)
        except TypeError as exc:
            raise InvalidConfigError(f"{cls.__name__}: {exc}") from exc


# ========================= Module-level convenience ========================

def get_config(path: str | Path | None = None) -> KeysmithConfig:
    """Module-level convenience wrapper around :meth:`KeysmithConfig.load`.

    Caches the result so that repeated imports share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = KeysmithConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
