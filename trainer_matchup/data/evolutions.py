"""Evolution method kinds and the non-level override table."""

from __future__ import annotations

from typing import Dict

LEVEL = "level"
ITEM = "item"
TRADE = "trade"
FRIENDSHIP = "friendship"
OTHER = "other"

# Raw method tokens from the data source -> edge kind. Level-like methods carry
# their threshold in ``EvolutionEdge.param``.
METHOD_KINDS: Dict[str, str] = {
    "EVO_LEVEL": LEVEL,
    "EVO_LEVEL_ATK_GT_DEF": LEVEL,
    "EVO_LEVEL_ATK_EQ_DEF": LEVEL,
    "EVO_LEVEL_ATK_LT_DEF": LEVEL,
    "EVO_LEVEL_SILCOON": LEVEL,
    "EVO_LEVEL_CASCOON": LEVEL,
    "EVO_LEVEL_NINJASK": LEVEL,
    "EVO_LEVEL_SHEDINJA": LEVEL,
    "LEVEL_UP": LEVEL,
    "EVO_ITEM": ITEM,
    "USE_ITEM": ITEM,
    "EVO_TRADE": TRADE,
    "EVO_TRADE_ITEM": TRADE,
    "TRADE": TRADE,
    "EVO_FRIENDSHIP": FRIENDSHIP,
    "EVO_FRIENDSHIP_DAY": FRIENDSHIP,
    "EVO_FRIENDSHIP_NIGHT": FRIENDSHIP,
    "FRIENDSHIP": FRIENDSHIP,
    "EVO_BEAUTY": OTHER,
}

# Minimum level at which a species reached through a non-level edge is
# considered legal. Targets not listed inherit their predecessor's minimum.
NON_LEVEL_MIN_LEVELS: Dict[str, int] = {}


def method_kind(method: str) -> str:
    key = (method or "").strip().upper().replace("-", "_")
    return METHOD_KINDS.get(key, OTHER)
