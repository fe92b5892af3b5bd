"""
Hybrid Spell Index Module

This module builds fuzzy, tone-agnostic phonetic search indexes for Chinese
text and matches typed romanized queries against them, so users can find a
name such as 北京 by typing "bj", "beij" or "beijin".

## Overview

The `SpellIndexer` class runs a short pipeline:

1. **Transcription**: 北京 → short form "BJ" and full form "BeiJing", with a
   fixed override table for names whose reading disagrees with common usage
2. **Fuzzy Rules**: expand or contract ambiguous initials (z/zh, c/ch, s/sh)
   and finals (an/ang, en/eng, in/ing)
3. **Syllable Splitting**: "BeiJing" → ["Bei", "Jing"] on uppercase letters
4. **Combination**: nine rule variants, grouped by syllable position and
   cross-joined into the deduplicated hybrid index
5. **Matching**: direct, then fuzzy-normalised, case-insensitive prefix match

## Usage Examples

```python
from spellindex import SpellIndexer

indexer = SpellIndexer()
indexer.build_hybrid_index("北京")
# Returns: "BJ;BJing;BJin;BeiJ;BeiJing;BeiJin"

indexer.is_spell_match("BJ;BJing;BJin;BeiJ;BeiJing;BeiJin", "beijin")
# Returns: True

indexer.is_spell_match("Zhang", "zan")
# Returns: True (zh/z and ang/an are interchangeable)

# Module-level shortcuts bound to a default indexer
from spellindex import build_hybrid_index, is_spell_match
```

## Error Handling

Blank input and text without CJK characters produce an empty index. The only
failure is `SyllableAlignmentError`, raised when rule variants split into
different syllable counts (typically a misconfigured override or custom rule
table). `index_batch` turns it into a failed `IndexResult` per text.

## Thread Safety

All operations are pure over immutable configuration. The per-character
reading cache is thread-safe, so one indexer can be shared between threads;
use `create_persistent_multiprocess_pool` for CPU-bound bulk indexing.
"""
from __future__ import annotations

from functools import cache

from spellindex.log import logger
from spellindex.services import (
    CacheInfo,
    FuzzyRuleService,
    HybridIndex,
    HybridIndexService,
    IndexResult,
    PinyinCacheService,
    ReadingSource,
    SpellForm,
    SpellIndexConfig,
    SpellMatchService,
    SyllableAlignmentError,
    TranscriptionPair,
    TranscriptionService,
)
from spellindex.services.worker_pool import PersistentMultiprocessIndexer, index_texts_multiprocess

# ════════════════════════════════════════════════════════════════════════════════
# MAIN SPELL INDEXER CLASS
# ════════════════════════════════════════════════════════════════════════════════


class SpellIndexer:
    """Main hybrid spell index and matching service."""

    def __init__(self, config: SpellIndexConfig | None = None, reading_source: ReadingSource | None = None):
        self._config = config or SpellIndexConfig.create_default()
        self._cache_service = PinyinCacheService(self._config)
        # None means the pypinyin cache, which worker processes rebuild for themselves
        self._custom_reading_source = reading_source
        self._reading_source = reading_source or self._cache_service
        self._rules = FuzzyRuleService(self._config)
        self._transcriber = TranscriptionService(self._config, self._reading_source)
        self._index_service = HybridIndexService(self._config, self._transcriber, self._rules)
        self._match_service = SpellMatchService(self._config, self._rules)

    @property
    def config(self) -> SpellIndexConfig:
        return self._config

    @property
    def rules(self) -> FuzzyRuleService:
        """Fuzzy rule functions (append_all, remove_all, ...)."""
        return self._rules

    # Transcription
    def transcribe(self, text: str, form: SpellForm = SpellForm.FULL) -> str:
        return self._transcriber.transcribe(text, form)

    def transcribe_pair(self, text: str) -> TranscriptionPair:
        return self._transcriber.transcribe_pair(text)

    # Index generation
    def build(self, text: str) -> HybridIndex:
        return self._index_service.build(text)

    def build_hybrid_index(self, text: str) -> str:
        """
        Main API method: build the serialized hybrid index of text.

        Returns "" for blank or non-Chinese text; raises SyllableAlignmentError
        when the transcription variants cannot be aligned.
        """
        return self._index_service.build_hybrid_index(text)

    def index_batch(self, texts: list[str]) -> list[IndexResult]:
        """Index many texts; alignment failures are reported per text."""
        results = []
        for text in texts:
            try:
                results.append(IndexResult.success_with_index(self._index_service.build(text)))
            except SyllableAlignmentError as e:
                results.append(IndexResult.failure(str(e)))
        return results

    def index_batch_multiprocess(
        self,
        texts: list[str],
        *,
        max_workers: int | None = None,
        chunk_size: int = 64,
        mp_start_method: str = "spawn",
    ) -> list[IndexResult]:
        """Index many texts across worker processes using this indexer's config and reading source."""
        return index_texts_multiprocess(
            texts,
            max_workers=max_workers,
            chunk_size=chunk_size,
            mp_start_method=mp_start_method,
            indexer_config=self._config,
            reading_source=self._custom_reading_source,
        )

    def create_persistent_multiprocess_pool(
        self,
        *,
        max_workers: int | None = None,
        chunk_size: int = 64,
        mp_start_method: str = "spawn",
    ) -> PersistentMultiprocessIndexer:
        return PersistentMultiprocessIndexer(
            max_workers=max_workers,
            chunk_size=chunk_size,
            mp_start_method=mp_start_method,
            indexer_config=self._config,
            reading_source=self._custom_reading_source,
        )

    # Matching
    def is_spell_match(self, value: str, query: str) -> bool:
        return self._match_service.is_spell_match(value, query)

    def is_chinese_match(self, value: str, query: str) -> bool:
        return self._match_service.is_chinese_match(value, query)

    def matches(self, name: str, index_value: str, query: str) -> bool:
        """Match a Chinese query against the name, anything else against its index."""
        if self._transcriber.is_chinese(query):
            return self._match_service.is_chinese_match(name, query)
        return self._match_service.is_spell_match(index_value, query)

    # Reading cache
    def warm_cache(self, texts: list[str]) -> int:
        try:
            return self._cache_service.warm(texts)
        except Exception as e:
            logger.warning(f"Failed to warm reading cache: {e}. Readings will load lazily.")
            return 0

    def get_cache_info(self) -> CacheInfo:
        return self._cache_service.get_cache_info()

    def clear_reading_cache(self) -> None:
        self._cache_service.clear_cache()


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL API
# ════════════════════════════════════════════════════════════════════════════════


@cache
def default_indexer() -> SpellIndexer:
    """Shared indexer with the default configuration."""
    return SpellIndexer()


def build_hybrid_index(text: str) -> str:
    return default_indexer().build_hybrid_index(text)


def is_spell_match(value: str, query: str) -> bool:
    return default_indexer().is_spell_match(value, query)


def is_chinese_match(value: str, query: str) -> bool:
    return default_indexer().is_chinese_match(value, query)
