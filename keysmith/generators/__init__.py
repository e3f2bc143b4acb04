"""
Keysmith Generators
====================

Alphabet construction and unbiased password generation.
"""

from keysmith.generators.charset import CharsetBuilder
from keysmith.generators.password import (
    PasswordGenerator,
    RandomSource,
    SystemRandomSource,
)

__all__ = [
    "CharsetBuilder",
    "PasswordGenerator",
    "RandomSource",
    "SystemRandomSource",
]
