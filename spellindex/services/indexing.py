"""
Hybrid index service.

Builds the set of every fuzzy-equivalent transcription of a text, mixing short
and full syllables per position. For 北京:

    BJ;BJing;BJin;BeiJ;BeiJing;BeiJin

Nine rule variants of the transcription are split into syllables, grouped by
syllable position, and the positions are folded together with a deduplicated
cross product.
"""
from __future__ import annotations

from collections.abc import Sequence

from spellindex.log import logger
from spellindex.services.fuzzy_rules import FuzzyRuleService
from spellindex.services.transcription import TranscriptionService
from spellindex.types import HybridIndex, SpellIndexConfig, SyllableAlignmentError, TranscriptionPair
from spellindex.utils.string_manipulation import StringManipulationUtils


def combine_positions(position_sets: Sequence[Sequence[str]]) -> list[str]:
    """Concatenate one candidate per position, in every combination.

    Duplicates are dropped after each position so the intermediate lists stay
    small; first occurrences keep their order.
    """
    if not position_sets:
        return []
    combined = list(dict.fromkeys(position_sets[0]))
    for candidates in position_sets[1:]:
        combined = list(dict.fromkeys(prefix + syllable for prefix in combined for syllable in candidates))
    return combined


class HybridIndexService:
    """Service for generating hybrid spell indexes."""

    def __init__(self, config: SpellIndexConfig, transcriber: TranscriptionService, rules: FuzzyRuleService):
        self._config = config
        self._transcriber = transcriber
        self._rules = rules

    def build(self, text: str) -> HybridIndex:
        """
        Build the hybrid index of text.

        Returns an empty index for text without CJK characters. Raises
        SyllableAlignmentError when the rule variants disagree on the number of
        syllables.
        """
        pair = self._transcriber.transcribe_pair(text)
        if pair.syllable_count == 0:
            return HybridIndex.empty(text, self._config.separator)

        position_sets = self._position_sets(text, pair)
        variants = combine_positions(position_sets)
        logger.debug(f"'{text}': {len(variants)} index variants over {pair.syllable_count} syllables")
        return HybridIndex(text, tuple(variants), self._config.separator)

    def build_hybrid_index(self, text: str) -> str:
        return self.build(text).to_string()

    def candidate_variants(self, pair: TranscriptionPair) -> tuple[str, ...]:
        """The nine transcriptions every index is combined from, in fixed order."""
        rules = self._rules
        short, full = pair.short, pair.full
        return (
            short,                          # short form as is
            rules.append_initials(short),   # short form, broad initials
            full,                           # full form as is
            rules.append_initials(full),    # broad initials
            rules.append_all(full),         # broad initials and finals
            rules.append_finals(full),      # broad finals
            rules.remove_initials(full),    # narrow initials
            rules.remove_finals(full),      # narrow finals
            rules.remove_all(full),         # narrow initials and finals
        )

    def _position_sets(self, text: str, pair: TranscriptionPair) -> list[list[str]]:
        """Split each variant and transpose: one candidate list per syllable position."""
        split_variants = []
        for variant in self.candidate_variants(pair):
            syllables = StringManipulationUtils.split_syllables(variant)
            if len(syllables) != pair.syllable_count:
                error = SyllableAlignmentError(text, variant, pair.syllable_count, len(syllables))
                logger.error(str(error))
                raise error
            split_variants.append(syllables)

        return [list(position) for position in zip(*split_variants)]
