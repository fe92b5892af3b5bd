"""
Exceptions raised by hybrid spell indexing.
"""
from __future__ import annotations


class SyllableAlignmentError(ValueError):
    """The transcription variants of one text split into different syllable counts.

    Transposing misaligned variants by syllable position would silently corrupt
    the index, so index generation fails instead.
    """

    def __init__(self, text: str, variant: str, expected: int, actual: int):
        self.text = text
        self.variant = variant
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"variant '{variant}' of '{text}' splits into {actual} syllables, expected {expected}",
        )

    def __reduce__(self):
        return self.__class__, (self.text, self.variant, self.expected, self.actual)
