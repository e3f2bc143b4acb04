"""
Charset Builder
================

Turns :class:`~keysmith.core.models.GenerationOptions` into a concrete
:class:`~keysmith.core.models.Alphabet`.

Classes are concatenated in the canonical order lower, upper, digit,
symbol, and exclusions are applied by set subtraction against the
enabled classes only. The class sizes before exclusion are 26, 26, 10
and 32, so the default alphabet has 94 symbols.

Construction is deterministic: equal options always produce an
identical alphabet.
"""

from __future__ import annotations

from keysmith.core.errors import EmptyAlphabetError
from keysmith.core.models import Alphabet, CharClass, GenerationOptions

# Visually confusable glyphs.
SIMILAR_CHARACTERS: frozenset[str] = frozenset("il1LoO0")

# Brackets, quotes and separators that are awkward to read aloud or type.
AMBIGUOUS_CHARACTERS: frozenset[str] = frozenset("{}[]()/\\'\"~,;<>.")


class CharsetBuilder:
    """Builds alphabets from composition options.

    Usage::

        builder = CharsetBuilder()
        alphabet = builder.build(GenerationOptions(include_symbols=False))
        alphabet.size   # 62
    """

    _CANONICAL_ORDER: tuple[CharClass, ...] = (
        CharClass.LOWER,
        CharClass.UPPER,
        CharClass.DIGIT,
        CharClass.SYMBOL,
    )

    def build(self, options: GenerationOptions) -> Alphabet:
        """Build the alphabet described by *options*.

        Raises:
            EmptyAlphabetError: No class is enabled, or the exclusions
                removed every member of the enabled classes.
        """
        requested = self.selected_classes(options)
        if not requested:
            raise EmptyAlphabetError("Please select at least one character type")

        excluded = self.excluded_symbols(options)

        symbols: list[str] = []
        classes: list[CharClass] = []
        class_counts: dict[CharClass, int] = {}
        for char_class in requested:
            remaining = set(char_class.symbols) - excluded
            members = [c for c in char_class.symbols if c in remaining]
            if not members:
                continue
            symbols.extend(members)
            classes.append(char_class)
            class_counts[char_class] = len(members)

        if not symbols:
            raise EmptyAlphabetError(
                "Exclusions removed every character from the selected types"
            )

        return Alphabet(
            symbols="".join(symbols),
            classes=tuple(classes),
            class_counts=class_counts,
        )

    def selected_classes(self, options: GenerationOptions) -> tuple[CharClass, ...]:
        """Enabled classes in canonical order."""
        flags = {
            CharClass.LOWER: options.include_lower,
            CharClass.UPPER: options.include_upper,
            CharClass.DIGIT: options.include_digits,
            CharClass.SYMBOL: options.include_symbols,
        }
        return tuple(c for c in self._CANONICAL_ORDER if flags[c])

    @staticmethod
    def excluded_symbols(options: GenerationOptions) -> frozenset[str]:
        """Union of the exclusion sets switched on in *options*."""
        excluded: frozenset[str] = frozenset()
        if options.exclude_similar:
            excluded |= SIMILAR_CHARACTERS
        if options.exclude_ambiguous:
            excluded |= AMBIGUOUS_CHARACTERS
        return excluded
