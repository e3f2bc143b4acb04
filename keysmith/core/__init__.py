"""
Keysmith Core Module
=====================

Data models and configuration errors. The engine facade lives in
:mod:`keysmith.core.engine`, which imports the generators and analyzers
that depend on this package.
"""

from keysmith.core.errors import (
    ConfigError,
    EmptyAlphabetError,
    InvalidCountError,
    InvalidLengthError,
)
from keysmith.core.models import (
    Alphabet,
    CharClass,
    CrackTimeBucket,
    CrackTimeEstimate,
    GeneratedPassword,
    GenerationOptions,
    PasswordAnalysis,
    PatternFinding,
    PatternKind,
    StrengthTier,
)

__all__ = [
    "Alphabet",
    "CharClass",
    "ConfigError",
    "CrackTimeBucket",
    "CrackTimeEstimate",
    "EmptyAlphabetError",
    "GeneratedPassword",
    "GenerationOptions",
    "InvalidCountError",
    "InvalidLengthError",
    "PasswordAnalysis",
    "PatternFinding",
    "PatternKind",
    "StrengthTier",
]
