"""
Worker processes for bulk hybrid index generation.

Each worker builds one `SpellIndexer` from the caller's configuration and
reading source when it starts, then serves chunks of texts until the pool is
closed. Workers send back serialized index strings instead of result objects;
the parent rebuilds `IndexResult` values in input order.
"""
from __future__ import annotations

import pickle
from concurrent.futures import Future, ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from multiprocessing import get_all_start_methods, get_context
from typing import TYPE_CHECKING

from spellindex.log import logger
from spellindex.types import HybridIndex, IndexResult, SpellIndexConfig, SyllableAlignmentError

if TYPE_CHECKING:
    from spellindex.indexer import SpellIndexer
    from spellindex.services.cache import ReadingSource

# (serialized index, None) on success, (None, error message) on alignment failure
WireResult = tuple[str | None, str | None]

_worker_indexer: SpellIndexer | None = None


def _start_worker(config: SpellIndexConfig, reading_source: ReadingSource | None) -> None:
    from spellindex.indexer import SpellIndexer

    global _worker_indexer
    _worker_indexer = SpellIndexer(config=config, reading_source=reading_source)


def _index_to_wire(texts: list[str]) -> list[WireResult]:
    if _worker_indexer is None:
        raise RuntimeError("indexing worker started without an indexer")
    wire: list[WireResult] = []
    for text in texts:
        try:
            wire.append((_worker_indexer.build_hybrid_index(text), None))
        except SyllableAlignmentError as e:
            wire.append((None, str(e)))
    return wire


def _from_wire(text: str, item: WireResult, separator: str) -> IndexResult:
    serialized, error = item
    if serialized is None:
        return IndexResult.failure(error or f"indexing '{text}' failed")
    return IndexResult.success_with_index(HybridIndex.from_string(serialized, text, separator))


def _ensure_picklable(label: str, value: object) -> None:
    try:
        pickle.dumps(value)
    except (pickle.PicklingError, AttributeError, TypeError) as exc:
        raise ValueError(f"{label} cannot be sent to indexing workers: {exc}") from exc


class PersistentMultiprocessIndexer:
    """
    Long-lived pool of indexing worker processes.

    The configuration and reading source are shipped to every worker once, at
    start-up, so both must pickle. A reading source of None means each worker
    uses its own pypinyin cache. Workers are started with `spawn` unless told
    otherwise, which requires callers on Windows and macOS to guard their
    entry point with `if __name__ == '__main__':`.
    """

    def __init__(
        self,
        *,
        max_workers: int | None = None,
        chunk_size: int = 64,
        mp_start_method: str = "spawn",
        indexer_config: SpellIndexConfig | None = None,
        reading_source: ReadingSource | None = None,
    ) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        if mp_start_method not in get_all_start_methods():
            available = ", ".join(get_all_start_methods())
            raise ValueError(f"unsupported multiprocessing start method '{mp_start_method}' (available: {available})")

        config = indexer_config or SpellIndexConfig.create_default()
        _ensure_picklable("indexer config", config)
        if reading_source is not None:
            _ensure_picklable(f"reading source {type(reading_source).__name__}", reading_source)

        self._separator = config.separator
        self._chunk_size = chunk_size
        self._closed = False
        self._executor = ProcessPoolExecutor(
            max_workers=max_workers,
            mp_context=get_context(mp_start_method),
            initializer=_start_worker,
            initargs=(config, reading_source),
        )
        logger.debug(
            f"Started indexing pool: max_workers={max_workers or 'auto'}, chunk_size={chunk_size}, "
            f"start method '{mp_start_method}', "
            f"reading source {type(reading_source).__name__ if reading_source is not None else 'pypinyin'}",
        )

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def closed(self) -> bool:
        return self._closed

    def index_texts(self, texts: list[str]) -> list[IndexResult]:
        """Build the hybrid index of every text; results follow input order."""
        if self._closed:
            raise RuntimeError("process pool is closed")
        if not texts:
            return []

        step = self._chunk_size
        chunks = [texts[start : start + step] for start in range(0, len(texts), step)]
        futures: list[Future[list[WireResult]]] = [self._executor.submit(_index_to_wire, chunk) for chunk in chunks]

        results: list[IndexResult] = []
        try:
            for chunk, future in zip(chunks, futures):
                results.extend(_from_wire(text, item, self._separator) for text, item in zip(chunk, future.result()))
        except BrokenProcessPool as exc:
            raise RuntimeError(
                "indexing workers exited unexpectedly; with the 'spawn' start method the calling "
                "script must guard its entry point with `if __name__ == '__main__':`",
            ) from exc
        logger.debug(f"Indexed {len(texts)} texts in {len(chunks)} chunks")
        return results

    def close(self) -> None:
        """Wait for running chunks, then stop the workers. Safe to call twice."""
        if not self._closed:
            self._executor.shutdown(wait=True)
            self._closed = True

    def __enter__(self) -> PersistentMultiprocessIndexer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def index_texts_multiprocess(
    texts: list[str],
    *,
    max_workers: int | None = None,
    chunk_size: int = 64,
    mp_start_method: str = "spawn",
    indexer_config: SpellIndexConfig | None = None,
    reading_source: ReadingSource | None = None,
) -> list[IndexResult]:
    """One-shot pool: start workers, index texts, stop workers."""
    with PersistentMultiprocessIndexer(
        max_workers=max_workers,
        chunk_size=chunk_size,
        mp_start_method=mp_start_method,
        indexer_config=indexer_config,
        reading_source=reading_source,
    ) as pool:
        return pool.index_texts(texts)
