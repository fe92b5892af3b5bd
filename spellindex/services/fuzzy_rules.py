"""
Fuzzy rule service for hybrid spell indexing.

Expands a transcription to the broad spelling of every ambiguous initial and
final (BeiJin -> BeiJing) or contracts it to the narrow one (BeiJing -> BeiJin).
Each rule rewrites the output of the previous rule, so the table order decides
the result.
"""
from __future__ import annotations

from spellindex.types import SpellIndexConfig


def _rewrite(spell: str, rules: tuple[tuple[str, str], ...], *, reverse: bool = False, lower: bool = False) -> str:
    for narrow, broad in rules:
        old, new = (broad, narrow) if reverse else (narrow, broad)
        if lower:
            old, new = old.lower(), new.lower()
        spell = spell.replace(old, new)
    return spell


class FuzzyRuleService:
    """Pure string rewriting over the configured rule tables."""

    def __init__(self, config: SpellIndexConfig):
        self._config = config

    def append_all(self, spell: str) -> str:
        """Append every fuzzy increment (BeiJin -> BeiJing)."""
        if not spell:
            return ""
        spell = _rewrite(spell, self._config.spell_rules)
        return self._collapse(spell, self._config.initials_collapse, self._config.finals_collapse)

    def append_lower(self, spell: str) -> str:
        """Append every fuzzy increment on the lowercased text (BeiJin -> beijing)."""
        if not spell:
            return ""
        spell = _rewrite(spell.lower(), self._config.spell_rules, lower=True)
        return self._collapse(spell, self._config.initials_collapse, self._config.finals_collapse)

    def append_initials(self, spell: str) -> str:
        if not spell:
            return ""
        spell = _rewrite(spell, self._config.initials_rules)
        return self._collapse(spell, self._config.initials_collapse)

    def append_finals(self, spell: str) -> str:
        if not spell:
            return ""
        spell = _rewrite(spell, self._config.finals_rules)
        return self._collapse(spell, self._config.finals_collapse)

    def remove_all(self, spell: str) -> str:
        """Strip every fuzzy increment (BeiJing -> BeiJin)."""
        if not spell:
            return ""
        return _rewrite(spell, self._config.spell_rules, reverse=True)

    def remove_initials(self, spell: str) -> str:
        if not spell:
            return ""
        return _rewrite(spell, self._config.initials_rules, reverse=True)

    def remove_finals(self, spell: str) -> str:
        if not spell:
            return ""
        return _rewrite(spell, self._config.finals_rules, reverse=True)

    @staticmethod
    def _collapse(spell: str, *pairs: tuple[str, str]) -> str:
        for doubled, single in pairs:
            spell = spell.replace(doubled, single)
        return spell
