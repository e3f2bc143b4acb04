"""
Password Generator
===================

Draws passwords from an :class:`~keysmith.core.models.Alphabet` using a
cryptographically secure byte source.

Index selection uses rejection sampling. A random value ``v`` drawn
uniformly from ``[0, 256**k)`` is accepted only when it is below the
largest multiple of ``|Σ|`` that fits that range, and is then reduced
modulo ``|Σ|``. Reducing every byte modulo ``|Σ|`` would favour the
first ``256 % |Σ|`` symbols whenever ``|Σ|`` does not divide 256.

The byte source is injected. Production code uses
:class:`SystemRandomSource` (backed by :mod:`secrets`); tests may pass
any object with a ``token_bytes(n)`` method.

References:
    - NIST SP 800-90A Rev. 1 (2015). Recommendation for Random Number
      Generation Using Deterministic Random Bit Generators, Appendix A.5.
    - Knuth, D. E. (1997). The Art of Computer Programming, Volume 2:
      Seminumerical Algorithms (3rd ed.). Addison-Wesley.
"""

from __future__ import annotations

import secrets
from typing import Optional, Protocol

from keysmith.core.errors import InvalidCountError, InvalidLengthError
from keysmith.core.models import Alphabet, GeneratedPassword


class RandomSource(Protocol):
    """Anything that can produce *n* random bytes."""

    def token_bytes(self, n: int) -> bytes: ...


class SystemRandomSource:
    """Operating-system CSPRNG. Has no seed and no observable state."""

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class PasswordGenerator:
    """Generates unbiased random passwords.

    Usage::

        generator = PasswordGenerator()
        password = generator.generate(alphabet, 16)
        batch = generator.generate_many(alphabet, 16, count=5)

    Args:
        random_source: Byte source; defaults to :class:`SystemRandomSource`.
        min_length: Smallest accepted password length.
        max_length: Largest accepted password length.
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        *,
        min_length: int = 4,
        max_length: int = 128,
    ) -> None:
        self._source: RandomSource = random_source or SystemRandomSource()
        self.min_length = min_length
        self.max_length = max_length

    def generate(self, alphabet: Alphabet, length: int) -> GeneratedPassword:
        """Draw one password of *length* symbols from *alphabet*.

        Raises:
            InvalidLengthError: *length* is outside the configured bounds.
        """
        self._check_length(length)
        size = alphabet.size
        value = "".join(alphabet.symbols[self._random_index(size)] for _ in range(length))
        return GeneratedPassword(
            value=value,
            length=length,
            alphabet_size=size,
            entropy_bits=alphabet.entropy_bits(length),
        )

    def generate_many(
        self, alphabet: Alphabet, length: int, count: int
    ) -> list[GeneratedPassword]:
        """Draw *count* independent passwords.

        Each password consumes its own fresh bytes from the source; no
        draw is reused or derived from another.

        Raises:
            InvalidLengthError: *length* is outside the configured bounds.
            InvalidCountError: *count* is less than 1.
        """
        if count < 1:
            raise InvalidCountError(count)
        self._check_length(length)
        return [self.generate(alphabet, length) for _ in range(count)]

    # ------------------------------------------------------------------ #
    #  Internals
    # ------------------------------------------------------------------ #

    def _check_length(self, length: int) -> None:
        if not self.min_length <= length <= self.max_length:
            raise InvalidLengthError(length, self.min_length, self.max_length)

    def _random_index(self, size: int) -> int:
        """Uniform integer in ``[0, size)`` by rejection sampling."""
        if size < 1:
            raise ValueError("alphabet size must be positive")
        if size == 1:
            return 0

        width = max(1, ((size - 1).bit_length() + 7) // 8)
        space = 256 ** width
        limit = space - (space % size)
        while True:
            value = int.from_bytes(self._source.token_bytes(width), "big")
            if value < limit:
                return value % size
