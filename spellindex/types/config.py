"""
Immutable configuration for hybrid spell indexing.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from spellindex.spell_index_data import (
    FINALS_COLLAPSE,
    FINALS_RULES,
    INITIALS_COLLAPSE,
    INITIALS_RULES,
    SPELL_OVERRIDES,
)


@dataclass(frozen=True)
class SpellOverride:
    """Fixed transcriptions for one text whose computed reading is wrong."""

    full: str
    short: str


@dataclass(frozen=True)
class SpellIndexConfig:
    """Immutable configuration containing all static tables and patterns."""

    # Characters that take part in transcription (CJK Unified Ideographs)
    cjk_pattern: re.Pattern[str]

    # Serialized hybrid index separator
    separator: str

    # Fuzzy rule tables, (narrow, broad) pairs in application order
    initials_rules: tuple[tuple[str, str], ...]
    finals_rules: tuple[tuple[str, str], ...]
    initials_collapse: tuple[str, str]
    finals_collapse: tuple[str, str]

    # Exact text -> fixed transcriptions, stored as a read-only view
    overrides: Mapping[str, SpellOverride] = field(default_factory=dict)

    # Let matching treat "BeiJing" as also spelling "BJ", "BeiJ" and "BJing"
    expand_abbreviations: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    # mappingproxy does not pickle; ship a plain dict and re-wrap on load
    def __getstate__(self) -> dict:
        state = dict(self.__dict__)
        state["overrides"] = dict(self.overrides)
        return state

    def __setstate__(self, state: dict) -> None:
        for name, value in state.items():
            object.__setattr__(self, name, value)
        self.__post_init__()

    @classmethod
    def create_default(cls) -> SpellIndexConfig:
        """Factory method for the default configuration."""
        return cls(
            cjk_pattern=re.compile(r"[\u4e00-\u9fbb]"),
            separator=";",
            initials_rules=INITIALS_RULES,
            finals_rules=FINALS_RULES,
            initials_collapse=INITIALS_COLLAPSE,
            finals_collapse=FINALS_COLLAPSE,
            overrides={text: SpellOverride(full, short) for text, (full, short) in SPELL_OVERRIDES.items()},
        )

    @property
    def spell_rules(self) -> tuple[tuple[str, str], ...]:
        """Initials followed by finals."""
        return self.initials_rules + self.finals_rules

    def with_overrides(self, extra: Mapping[str, SpellOverride | tuple[str, str]]) -> SpellIndexConfig:
        """Immutable update: add or replace override entries."""
        merged = dict(self.overrides)
        for text, value in extra.items():
            merged[text] = value if isinstance(value, SpellOverride) else SpellOverride(*value)
        return replace(self, overrides=merged)

    def with_rules(
        self,
        initials_rules: tuple[tuple[str, str], ...] | None = None,
        finals_rules: tuple[tuple[str, str], ...] | None = None,
    ) -> SpellIndexConfig:
        """Immutable update of the fuzzy rule tables."""
        return replace(
            self,
            initials_rules=tuple(initials_rules) if initials_rules is not None else self.initials_rules,
            finals_rules=tuple(finals_rules) if finals_rules is not None else self.finals_rules,
        )

    def with_abbreviation_matching(self, enabled: bool) -> SpellIndexConfig:
        """Immutable update of abbreviation expansion during matching."""
        return replace(self, expand_abbreviations=enabled)
