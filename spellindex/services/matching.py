"""
Matching service for hybrid spell indexes.

A query matches when it is a case-insensitive prefix of a stored spelling,
either directly or after both sides are fuzzy-normalised, so "zan" finds
"Zhang" and "beijin" finds "BeiJing".
"""
from __future__ import annotations

from spellindex.services.fuzzy_rules import FuzzyRuleService
from spellindex.services.indexing import combine_positions
from spellindex.types import SpellIndexConfig
from spellindex.utils.string_manipulation import StringManipulationUtils


def _is_prefix_contains(value: str, query: str) -> bool:
    """Like sql `value LIKE 'query%'`, ignoring case."""
    if len(query) > len(value):
        return False
    return query.lower() in value[: len(query)].lower()


class SpellMatchService:
    """Prefix matching of typed queries against stored index values."""

    def __init__(self, config: SpellIndexConfig, rules: FuzzyRuleService):
        self._config = config
        self._rules = rules

    def is_spell_match(self, value: str, query: str) -> bool:
        """
        Match a romanized query against a stored value.

        The value is one transcription or a serialized hybrid index; the query
        matches if it matches any member. A lone transcription is also tried
        in its abbreviated forms, which a built index already lists as members.
        """
        if not value or not value.strip() or not query or not query.strip():
            return False

        members = value.split(self._config.separator)
        expand = self._config.expand_abbreviations and len(members) == 1
        for member in members:
            if not member:
                continue
            for candidate in self._candidates(member) if expand else (member,):
                if self._is_spell_contains(candidate, query) or self._is_spell_append_contains(candidate, query):
                    return True
        return False

    def is_chinese_match(self, value: str, query: str) -> bool:
        """Prefix match on raw text, no romanization involved."""
        if not value or not value.strip() or not query or not query.strip():
            return False
        return _is_prefix_contains(value, query)

    def _candidates(self, member: str) -> list[str]:
        """The member plus every mix of whole syllables and syllable initials."""
        syllables = StringManipulationUtils.split_syllables(member)
        if len(syllables) < 2 or "".join(syllables) != member:
            return [member]
        return combine_positions(StringManipulationUtils.abbreviations(syllables))

    def _is_spell_contains(self, value: str, query: str) -> bool:
        return _is_prefix_contains(value, query)

    def _is_spell_append_contains(self, value: str, query: str) -> bool:
        query_append = self._rules.append_lower(query)
        value_append = self._rules.append_lower(value)
        return _is_prefix_contains(value_append, query_append)
