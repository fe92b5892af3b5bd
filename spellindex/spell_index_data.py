"""
Static data tables for hybrid spell indexing.

The fuzzy rule tables pair a *narrow* spelling with the *broad* spelling it is
commonly confused with. Rules are applied one after another in declaration
order, so the order of these tuples is part of the output contract.
"""

from types import MappingProxyType

# ════════════════════════════════════════════════════════════════════════════════
# FUZZY RULES (narrow, broad)
# ════════════════════════════════════════════════════════════════════════════════

INITIALS_RULES: tuple[tuple[str, str], ...] = (
    ("Z", "Zh"),
    ("C", "Ch"),
    ("S", "Sh"),
)

FINALS_RULES: tuple[tuple[str, str], ...] = (
    ("an", "ang"),
    ("en", "eng"),
    ("in", "ing"),
    ("An", "Ang"),
    ("En", "Eng"),
)

# Doubled letters left behind when a broad form is appended to text that already
# carried it, e.g. "Zh" -> "Zhh".
INITIALS_COLLAPSE: tuple[str, str] = ("hh", "h")
FINALS_COLLAPSE: tuple[str, str] = ("gg", "g")

# ════════════════════════════════════════════════════════════════════════════════
# OVERRIDES: text -> (full form, short form)
# ════════════════════════════════════════════════════════════════════════════════

# Cities whose canonical per-character reading disagrees with common usage.
SPELL_OVERRIDES: MappingProxyType[str, tuple[str, str]] = MappingProxyType(
    {
        "重庆": ("ChongQing", "CQ"),
        "长春": ("ChangChun", "CC"),
        "长沙": ("ChangSha", "CS"),
        "石家庄": ("ShiJiaZhuang", "SJZ"),
    },
)
