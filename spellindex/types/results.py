"""
Result types for hybrid spell indexing.

This module contains immutable result classes: the transcriptions computed for
one text, the hybrid index itself, and an Either-like batch result.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class TranscriptionPair:
    """Short and full transcriptions of one text."""

    short: str  # "BJ"
    full: str  # "BeiJing"
    syllable_count: int  # CJK characters consumed

    @classmethod
    def empty(cls) -> TranscriptionPair:
        return cls("", "", 0)


@dataclass(frozen=True)
class HybridIndex:
    """Deduplicated set of fuzzy-equivalent transcriptions of one text."""

    source: str
    variants: tuple[str, ...]
    separator: str = ";"

    @classmethod
    def empty(cls, source: str = "", separator: str = ";") -> HybridIndex:
        return cls(source, (), separator)

    @classmethod
    def from_string(cls, serialized: str, source: str = "", separator: str = ";") -> HybridIndex:
        """Parse a stored index value, dropping empty and duplicate members."""
        members = (member for member in serialized.split(separator) if member)
        return cls(source, tuple(dict.fromkeys(members)), separator)

    def to_string(self) -> str:
        return self.separator.join(self.variants)

    def __str__(self) -> str:
        return self.to_string()

    def __contains__(self, variant: str) -> bool:
        return variant in self.variants

    def __iter__(self) -> Iterator[str]:
        return iter(self.variants)

    def __len__(self) -> int:
        return len(self.variants)

    def __bool__(self) -> bool:
        return bool(self.variants)


@dataclass(frozen=True)
class IndexResult:
    """Result of indexing one text - Either-like structure."""

    success: bool
    result: HybridIndex | None
    error_message: str | None = None

    @classmethod
    def success_with_index(cls, index: HybridIndex) -> IndexResult:
        return cls(success=True, result=index, error_message=None)

    @classmethod
    def failure(cls, error_message: str) -> IndexResult:
        return cls(success=False, result=None, error_message=error_message)

    def map(self, f) -> IndexResult:
        """Functor map operation"""
        if self.success:
            try:
                return IndexResult.success_with_index(f(self.result))
            except Exception as e:
                return IndexResult.failure(str(e))
        return self

    def flat_map(self, f) -> IndexResult:
        """Monadic flatMap operation"""
        if self.success:
            try:
                return f(self.result)
            except Exception as e:
                return IndexResult.failure(str(e))
        return self


@dataclass(frozen=True)
class CacheInfo:
    """Immutable reading cache information structure."""

    cache_built: bool
    cache_size: int
    hits: int = 0
    misses: int = 0
