import sys
from pathlib import Path

import pytest

# Add the parent directory to path to import spellindex
sys.path.insert(0, str(Path(__file__).parent.parent))

from spellindex import SpellIndexer
from spellindex.services import StaticReadingSource


FAKE_READINGS = {
    "北": ["bei"],
    "京": ["jing"],
    "重": ["zhong", "chong"],
    "庆": ["qing"],
    "张": ["zhang"],
    "三": ["san"],
    "陈": ["chen"],
    "新": ["xin"],
    "安": ["an"],
    "徽": ["hui"],
}


@pytest.fixture(scope="session")
def indexer():
    return SpellIndexer()


@pytest.fixture
def fake_source():
    return StaticReadingSource(FAKE_READINGS)


@pytest.fixture
def fake_indexer(fake_source):
    return SpellIndexer(reading_source=fake_source)
