"""
Transcription service for hybrid spell indexing.

Turns Chinese text into its short form ("BJ") and full form ("BeiJing"),
honouring the configured override table for names whose per-character
reading disagrees with common usage.
"""
from __future__ import annotations

from enum import Enum

from spellindex.log import logger
from spellindex.services.cache import ReadingSource
from spellindex.types import SpellIndexConfig, TranscriptionPair
from spellindex.utils.cjk import CJKCharacterMatcher
from spellindex.utils.string_manipulation import StringManipulationUtils


class SpellForm(Enum):
    SHORT = "short"
    FULL = "full"


class TranscriptionService:
    """Character-by-character transcription over a reading source."""

    def __init__(self, config: SpellIndexConfig, reading_source: ReadingSource):
        self._config = config
        self._reading_source = reading_source
        self._cjk = CJKCharacterMatcher(config.cjk_pattern)

    def transcribe(self, text: str, form: SpellForm = SpellForm.FULL) -> str:
        """
        Transcribe text in the requested form.

        Blank text gives "". Non-CJK characters, and CJK characters the reading
        source has no reading for, contribute nothing.
        """
        pair = self.transcribe_pair(text)
        return pair.short if form is SpellForm.SHORT else pair.full

    def transcribe_pair(self, text: str) -> TranscriptionPair:
        """Both forms plus the number of characters they were built from."""
        if not text or not text.strip():
            return TranscriptionPair.empty()

        override = self._config.overrides.get(text)
        if override is not None:
            return TranscriptionPair(override.short, override.full, len(self._cjk.cjk_characters(text)))

        short_parts = []
        full_parts = []
        for ch in self._cjk.cjk_characters(text):
            readings = self._reading_source.get_readings(ch)
            if not readings:
                logger.debug(f"no reading for '{ch}' in '{text}', skipped")
                continue
            reading = readings[0]
            short_parts.append(StringManipulationUtils.initial_letter(reading))
            full_parts.append(StringManipulationUtils.capitalize_syllable(reading))

        return TranscriptionPair("".join(short_parts), "".join(full_parts), len(full_parts))

    def is_chinese(self, text: str) -> bool:
        """True when every character of non-blank text is a CJK character."""
        return self._cjk.is_all_cjk(text)
