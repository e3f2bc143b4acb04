"""
Keysmith Analyzers
===================

Password strength analysis.
"""

from keysmith.analyzers.strength import StrengthAnalyzer

__all__ = ["StrengthAnalyzer"]
