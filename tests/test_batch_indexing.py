"""
Tests for batch indexing, the reading cache, and persistent multi-process indexing.
"""

import pytest

from spellindex.indexer import SpellIndexer
from spellindex.services import HybridIndex, IndexResult, SpellIndexConfig, StaticReadingSource

TEST_TEXTS = [
    "北京",
    "上海",
    "重庆",
    "石家庄",
    "",
    "Beijing",
    "乌鲁木齐",
    "哈尔滨",
    "长沙",
    "广州",
]


def _index_signature(result):
    members = frozenset(result.result) if result.success else frozenset()
    return result.success, members


def test_index_batch_matches_single_calls(indexer):
    results = indexer.index_batch(TEST_TEXTS)

    assert len(results) == len(TEST_TEXTS)
    for text, result in zip(TEST_TEXTS, results):
        assert result.success
        assert result.result.source == text
        assert result.result.to_string() == indexer.build_hybrid_index(text)


def test_index_batch_reports_alignment_failures_per_text(fake_source):
    config = SpellIndexConfig.create_default().with_overrides({"重庆": ("ChongQing", "C")})
    indexer = SpellIndexer(config=config, reading_source=fake_source)

    beijing, chongqing = indexer.index_batch(["北京", "重庆"])

    assert beijing.success
    assert "BeiJing" in beijing.result
    assert not chongqing.success
    assert chongqing.result is None
    assert "重庆" in chongqing.error_message


def test_index_result_combinators():
    ok = IndexResult.success_with_index(HybridIndex("北京", ("BJ", "BeiJing")))
    failed = IndexResult.failure("boom")

    mapped = ok.map(lambda index: HybridIndex(index.source, index.variants[:1]))
    assert mapped.success
    assert mapped.result.variants == ("BJ",)
    assert failed.map(lambda index: index) is failed
    assert ok.flat_map(lambda index: IndexResult.failure("nope")).error_message == "nope"
    assert ok.map(lambda index: 1 / 0).error_message == "division by zero"


def test_warm_cache_and_cache_info(indexer):
    indexer.clear_reading_cache()
    assert indexer.get_cache_info().cache_size == 0

    seen = indexer.warm_cache(["北京", "Beijing", "上海"])

    assert seen == 4
    info = indexer.get_cache_info()
    assert info.cache_built
    assert info.cache_size == 4

    indexer.build_hybrid_index("北京")
    assert indexer.get_cache_info().hits > info.hits


def test_index_batch_multiprocess_matches_single_process(indexer):
    """Multi-process convenience path should match single-process output exactly."""
    expected = indexer.index_batch(TEST_TEXTS)
    actual = indexer.index_batch_multiprocess(TEST_TEXTS, max_workers=2, chunk_size=4)

    assert [_index_signature(result) for result in actual] == [_index_signature(result) for result in expected]


def test_persistent_multiprocess_pool_can_be_reused(indexer):
    """Persistent pool should support repeated batch calls without changing outputs."""
    texts_a = TEST_TEXTS[:5]
    texts_b = TEST_TEXTS[5:]

    expected_a = indexer.index_batch(texts_a)
    expected_b = indexer.index_batch(texts_b)

    with indexer.create_persistent_multiprocess_pool(max_workers=2, chunk_size=3) as pool:
        actual_a = pool.index_texts(texts_a)
        actual_b = pool.index_texts(texts_b)
        assert pool.index_texts([]) == []

    assert pool.closed
    assert [_index_signature(result) for result in actual_a] == [_index_signature(result) for result in expected_a]
    assert [_index_signature(result) for result in actual_b] == [_index_signature(result) for result in expected_b]


def test_persistent_multiprocess_pool_rejects_calls_after_close(indexer):
    """Closed pool should raise a clear error on subsequent use."""
    pool = indexer.create_persistent_multiprocess_pool(max_workers=2, chunk_size=2)
    pool.close()

    with pytest.raises(RuntimeError, match="closed"):
        pool.index_texts(["北京"])


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"max_workers": 0}, "max_workers"),
        ({"chunk_size": 0}, "chunk_size"),
        ({"mp_start_method": "teleport"}, "unsupported multiprocessing start method"),
    ],
)
def test_persistent_multiprocess_pool_rejects_bad_arguments(indexer, kwargs, message):
    with pytest.raises(ValueError, match=message):
        indexer.create_persistent_multiprocess_pool(**kwargs)


def test_multiprocess_indexing_uses_injected_reading_source():
    """Workers must read characters the same way as the indexer that started them."""
    indexer = SpellIndexer(reading_source=StaticReadingSource({"北": ["pei"], "京": ["king"]}))

    expected = indexer.index_batch(["北京"])
    actual = indexer.index_batch_multiprocess(["北京"], max_workers=1)

    assert "PeiKing" in expected[0].result
    assert [_index_signature(result) for result in actual] == [_index_signature(result) for result in expected]
    assert "BeiJing" not in actual[0].result


def test_multiprocess_indexing_reports_alignment_failures_per_text(fake_source):
    config = SpellIndexConfig.create_default().with_overrides({"重庆": ("ChongQing", "C")})
    indexer = SpellIndexer(config=config, reading_source=fake_source)

    with indexer.create_persistent_multiprocess_pool(max_workers=1, chunk_size=1) as pool:
        beijing, chongqing = pool.index_texts(["北京", "重庆"])

    assert beijing.success
    assert beijing.result.source == "北京"
    assert beijing.result.to_string() == indexer.build_hybrid_index("北京")
    assert not chongqing.success
    assert "重庆" in chongqing.error_message


def test_unpicklable_reading_source_is_rejected():
    class LocalReadingSource:
        def get_readings(self, char):
            return ()

    indexer = SpellIndexer(reading_source=LocalReadingSource())

    with pytest.raises(ValueError, match="reading source LocalReadingSource cannot be sent"):
        indexer.create_persistent_multiprocess_pool(max_workers=1)
