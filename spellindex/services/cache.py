"""
Reading cache service for hybrid spell indexing.

This module provides fast Han character to Pinyin reading lookup with caching.
Any object with a ``get_readings(char)`` method can stand in for the default
pypinyin-backed service.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from functools import cache
from typing import Protocol

import pypinyin

from spellindex.log import logger
from spellindex.types import CacheInfo, SpellIndexConfig
from spellindex.utils.cjk import CJKCharacterMatcher


class ReadingSource(Protocol):
    """Character -> ordered readings, canonical reading first."""

    def get_readings(self, char: str) -> Sequence[str]: ...


class StaticReadingSource:
    """Readings from a fixed character table. Picklable, so it can be sent to indexing workers."""

    def __init__(self, readings: Mapping[str, Sequence[str]]):
        self._readings = {char: tuple(values) for char, values in readings.items()}

    def get_readings(self, char: str) -> tuple[str, ...]:
        return self._readings.get(char, ())


@cache  # one entry per unique Han character
def _char_readings(ch: str) -> tuple[str, ...]:
    raw = pypinyin.pinyin(ch, style=pypinyin.Style.NORMAL, heteronym=True)[0]
    # pypinyin echoes characters it has no data for; keep real readings only
    readings = tuple(dict.fromkeys(r.lower() for r in raw if r.isascii() and r.isalpha()))
    if len(readings) > 1:
        logger.debug(f"'{ch}' has {len(readings)} readings {readings}; using '{readings[0]}'")
    return readings


class PinyinCacheService:
    """
    * deterministic, thread‑safe, O(1) repeated look‑ups
    """

    def __init__(self, config: SpellIndexConfig):
        self._config = config
        self._cjk = CJKCharacterMatcher(config.cjk_pattern)

    # ---------- public API ----------
    def get_readings(self, char: str) -> tuple[str, ...]:
        """Return every reading of one character, memoising on first sight."""
        return _char_readings(char)

    def warm(self, texts: Iterable[str]) -> int:
        """Seed the cache with every CJK character of texts; returns characters seen."""
        seen = 0
        for text in texts:
            for ch in self._cjk.cjk_characters(text or ""):
                _char_readings(ch)
                seen += 1
        return seen

    def get_cache_info(self) -> CacheInfo:
        info = _char_readings.cache_info()
        return CacheInfo(
            cache_built=info.currsize > 0,
            cache_size=info.currsize,
            hits=info.hits,
            misses=info.misses,
        )

    def clear_cache(self) -> None:
        _char_readings.cache_clear()
