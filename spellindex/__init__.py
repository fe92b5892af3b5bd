"""
spellindex: Hybrid Phonetic Index Generator & Fuzzy Matcher for Chinese text

Builds fuzzy, tone-agnostic pinyin search indexes for Chinese names and
matches partial or ambiguous romanized queries against them.
"""

__version__ = "0.1.0"

__all__ = [
    "SpellIndexer",
    "SyllableAlignmentError",
    "build_hybrid_index",
    "is_chinese_match",
    "is_spell_match",
]

_INDEXER_EXPORTS = ("SpellIndexer", "build_hybrid_index", "is_chinese_match", "is_spell_match")


def __getattr__(name):
    """Lazy import to avoid loading pypinyin on package import."""
    if name in _INDEXER_EXPORTS:
        from . import indexer

        return getattr(indexer, name)
    if name == "SyllableAlignmentError":
        from .types import SyllableAlignmentError

        return SyllableAlignmentError
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
