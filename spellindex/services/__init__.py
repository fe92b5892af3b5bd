"""
Services package for hybrid spell indexing.

This package contains all service classes used by the spell index system,
organized by domain responsibility.
"""

from spellindex.services.cache import PinyinCacheService, ReadingSource, StaticReadingSource
from spellindex.services.fuzzy_rules import FuzzyRuleService
from spellindex.services.indexing import HybridIndexService, combine_positions
from spellindex.services.initialization import load_override_table
from spellindex.services.matching import SpellMatchService
from spellindex.services.transcription import SpellForm, TranscriptionService
from spellindex.types import (
    CacheInfo,
    HybridIndex,
    IndexResult,
    SpellIndexConfig,
    SpellOverride,
    SyllableAlignmentError,
    TranscriptionPair,
)

__all__ = [
    # Types (re-exported for compatibility)
    "CacheInfo",
    "HybridIndex",
    "IndexResult",
    "SpellIndexConfig",
    "SpellOverride",
    "SyllableAlignmentError",
    "TranscriptionPair",
    # Services
    "FuzzyRuleService",
    "HybridIndexService",
    "PinyinCacheService",
    "ReadingSource",
    "SpellForm",
    "SpellMatchService",
    "StaticReadingSource",
    "TranscriptionService",
    # Helpers
    "combine_positions",
    "load_override_table",
]
