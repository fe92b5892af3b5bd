"""
Types package for hybrid spell indexing.

This package contains result types, configuration classes, and exceptions
used throughout the spell index system.
"""

from spellindex.types.config import SpellIndexConfig, SpellOverride
from spellindex.types.errors import SyllableAlignmentError
from spellindex.types.results import CacheInfo, HybridIndex, IndexResult, TranscriptionPair

__all__ = [
    "CacheInfo",
    "HybridIndex",
    "IndexResult",
    "SpellIndexConfig",
    "SpellOverride",
    "SyllableAlignmentError",
    "TranscriptionPair",
]
