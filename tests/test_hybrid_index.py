"""
Hybrid Index Test Suite

Tests for combining short, full and fuzzy variants of each syllable into the
deduplicated semicolon-separated index, and for the syllable alignment guard.
"""

import pytest

from spellindex import SyllableAlignmentError, build_hybrid_index
from spellindex.services import SpellIndexConfig
from spellindex.indexer import SpellIndexer


def _members(serialized: str) -> set[str]:
    return set(serialized.split(";")) if serialized else set()


def test_beijing_index(fake_indexer):
    result = fake_indexer.build_hybrid_index("北京")
    assert _members(result) == {"BJ", "BJing", "BJin", "BeiJ", "BeiJing", "BeiJin"}
    assert not result.endswith(";")
    assert len(result.split(";")) == 6


def test_zhangsan_index(fake_indexer):
    index = fake_indexer.build("张三")
    # 6 candidates per position: Z Zh Zhang Zang Zhan Zan / S Sh San Shan Shang Sang
    assert len(index) == 36
    for variant in ("ZhangSan", "ZS", "ZhSh", "ZanShang", "ZhangS", "ZSang"):
        assert variant in index


def test_override_index(indexer):
    """重庆 is indexed from the fixed ChongQing / CQ pair, not from its first reading."""
    members = _members(indexer.build_hybrid_index("重庆"))
    assert members == {
        "CQ", "CQing", "CQin",
        "ChQ", "ChQing", "ChQin",
        "ChongQ", "ChongQing", "ChongQin",
        "CongQ", "CongQing", "CongQin",
    }
    assert not any(member.startswith("Zh") for member in members)


def test_index_contains_full_and_short_forms(indexer):
    for text in ("北京", "上海", "广州", "深圳", "张三", "石家庄", "乌鲁木齐"):
        pair = indexer.transcribe_pair(text)
        members = _members(indexer.build_hybrid_index(text))
        assert pair.full in members, text
        assert pair.short in members, text


def test_single_character_index(fake_indexer):
    assert _members(fake_indexer.build_hybrid_index("京")) == {"J", "Jing", "Jin"}


def test_empty_inputs_give_empty_index(indexer):
    assert build_hybrid_index("") == ""
    assert build_hybrid_index(" ") == ""
    assert indexer.build_hybrid_index("Beijing") == ""
    assert not indexer.build("   ")


def test_mixed_text_ignores_non_chinese(fake_indexer):
    assert _members(fake_indexer.build_hybrid_index("北京 Beijing")) == _members(
        fake_indexer.build_hybrid_index("北京"),
    )


def test_index_is_deterministic(indexer):
    for text in ("北京", "重庆", "张三丰", "哈尔滨"):
        assert _members(indexer.build_hybrid_index(text)) == _members(indexer.build_hybrid_index(text))
        assert _members(SpellIndexer().build_hybrid_index(text)) == _members(indexer.build_hybrid_index(text))


def test_candidate_variants_order(fake_indexer):
    pair = fake_indexer.transcribe_pair("张三")
    assert fake_indexer._index_service.candidate_variants(pair) == (
        "ZS",
        "ZhSh",
        "ZhangSan",
        "ZhangShan",
        "ZhangShang",
        "ZhangSang",
        "ZangSan",
        "ZhanSan",
        "ZanSan",
    )


def test_misaligned_override_raises(fake_source):
    config = SpellIndexConfig.create_default().with_overrides({"重庆": ("ChongQing", "C")})
    indexer = SpellIndexer(config=config, reading_source=fake_source)

    with pytest.raises(SyllableAlignmentError) as excinfo:
        indexer.build_hybrid_index("重庆")

    assert excinfo.value.variant == "C"
    assert excinfo.value.expected == 2
    assert excinfo.value.actual == 1
    assert isinstance(excinfo.value, ValueError)


def test_case_changing_rule_raises(fake_source):
    """A rule that adds an uppercase letter changes the syllable count of the expanded variant."""
    config = SpellIndexConfig.create_default().with_rules(initials_rules=(("Zh", "ZH"),))
    indexer = SpellIndexer(config=config, reading_source=fake_source)

    with pytest.raises(SyllableAlignmentError, match="ZHangSan"):
        indexer.build("张三")


def test_override_with_wrong_character_count_raises(fake_source):
    config = SpellIndexConfig.create_default().with_overrides({"北京": ("BeiJingShi", "BJS")})
    indexer = SpellIndexer(config=config, reading_source=fake_source)

    with pytest.raises(SyllableAlignmentError, match="expected 2"):
        indexer.build("北京")
