"""
String helpers for capitalised transcriptions.
"""
from __future__ import annotations


class StringManipulationUtils:
    """Stateless helpers for splitting and capitalising transcriptions."""

    @staticmethod
    def split_syllables(spell: str) -> list[str]:
        """Split a capitalised transcription on uppercase letters.

        "BeiJing" -> ["Bei", "Jing"], "BJ" -> ["B", "J"]. Characters that are
        neither upper- nor lowercase letters are ignored.
        """
        if not spell or not spell.strip():
            return []

        syllables: list[str] = []
        current: list[str] = []
        for ch in spell:
            if ch.isupper():
                if current:
                    syllables.append("".join(current))
                current = [ch]
            elif ch.islower():
                # Degenerate input: a lowercase run before any uppercase is its own token
                current.append(ch)
        if current:
            syllables.append("".join(current))
        return syllables

    @staticmethod
    def capitalize_syllable(reading: str) -> str:
        """Uppercase the first letter, lowercase the rest: "bei" -> "Bei"."""
        if not reading:
            return reading
        return reading[0].upper() + reading[1:].lower()

    @staticmethod
    def initial_letter(reading: str) -> str:
        """Uppercase first letter of a reading: "bei" -> "B"."""
        return reading[:1].upper()

    @staticmethod
    def abbreviations(syllables: list[str]) -> list[list[str]]:
        """Per-position choices of keeping a syllable whole or cutting it to its initial."""
        return [list(dict.fromkeys((syllable, syllable[:1]))) for syllable in syllables]
