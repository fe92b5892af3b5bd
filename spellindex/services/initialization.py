"""
Override table loading for hybrid spell indexing.

Reads extra override entries from a CSV file with the columns
``text,full,short``:

    text,full,short
    重庆,ChongQing,CQ

Every row is validated before anything is returned, so a bad file never
produces a half-applied table.
"""
from __future__ import annotations

import csv
from pathlib import Path
from types import MappingProxyType

from spellindex.log import logger
from spellindex.types import SpellIndexConfig, SpellOverride
from spellindex.utils.cjk import CJKCharacterMatcher

REQUIRED_COLUMNS = ("text", "full", "short")


def _uppercase_count(spell: str) -> int:
    return sum(1 for ch in spell if ch.isupper())


def validate_override(text: str, override: SpellOverride, cjk: CJKCharacterMatcher) -> str | None:
    """Return an error message for an unusable override, None when it is valid."""
    if not text or not override.full or not override.short:
        return "text, full and short must all be non-empty"
    if not override.full.isalpha() or not override.short.isalpha():
        return "full and short must contain letters only"
    expected = len(cjk.cjk_characters(text))
    if expected == 0:
        return f"'{text}' contains no CJK characters"
    if _uppercase_count(override.full) != expected:
        return f"full form '{override.full}' must have {expected} capitalised syllables"
    if len(override.short) != expected or _uppercase_count(override.short) != expected:
        return f"short form '{override.short}' must be {expected} uppercase letters"
    return None


def load_override_table(path: str | Path, config: SpellIndexConfig | None = None) -> MappingProxyType[str, SpellOverride]:
    """Load and validate override entries from a UTF-8 CSV file."""
    config = config or SpellIndexConfig.create_default()
    cjk = CJKCharacterMatcher(config.cjk_pattern)
    path = Path(path)

    overrides: dict[str, SpellOverride] = {}
    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        missing = [column for column in REQUIRED_COLUMNS if column not in (reader.fieldnames or ())]
        if missing:
            raise ValueError(f"{path}: missing columns {', '.join(missing)}")

        for row in reader:
            text = (row["text"] or "").strip()
            override = SpellOverride(full=(row["full"] or "").strip(), short=(row["short"] or "").strip())
            error = validate_override(text, override, cjk)
            if error:
                raise ValueError(f"{path}:{reader.line_num}: {error}")
            if text in overrides:
                logger.warning(f"{path}:{reader.line_num}: duplicate override for '{text}', keeping the last one")
            overrides[text] = override

    logger.debug(f"loaded {len(overrides)} overrides from {path}")
    return MappingProxyType(overrides)
