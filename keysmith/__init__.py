"""
Keysmith -- Password Generation and Strength Analysis
======================================================

Generates unbiased passwords from a cryptographically secure source
under configurable composition rules, and assesses any password's
strength: entropy, crack time, weak patterns, score and remediation.

Modules:
    - keysmith.core.engine: Facade used by the CLI and other callers
    - keysmith.core.models: Pydantic data models
    - keysmith.core.errors: Configuration errors
    - keysmith.generators: Charset builder and password generator
    - keysmith.analyzers: Strength analyzer
    - keysmith.output: Console and JSON report output
    - keysmith.cli: Click-based command-line interface

References:
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
    - NIST SP 800-90A Rev. 1 (2015). Recommendation for Random Number
      Generation Using Deterministic Random Bit Generators.
"""

__version__ = "1.0.0"
__tool_name__ = "keysmith"
