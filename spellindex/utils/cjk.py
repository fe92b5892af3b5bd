"""
CJK character detection utilities.

Centralises the character-range test so transcription and matching agree on
which characters take part in indexing.
"""

import re


class CJKCharacterMatcher:
    """CJK character detection over a configured single-character pattern."""

    def __init__(self, cjk_pattern: re.Pattern[str]):
        self._cjk_pattern = cjk_pattern

    def is_cjk_char(self, ch: str) -> bool:
        return self._cjk_pattern.fullmatch(ch) is not None

    def cjk_characters(self, text: str) -> list[str]:
        """CJK characters of text in order, everything else dropped."""
        return self._cjk_pattern.findall(text)

    def is_all_cjk(self, text: str) -> bool:
        """True for non-blank text made only of CJK characters."""
        if not text or not text.strip():
            return False
        return all(self.is_cjk_char(ch) for ch in text)
