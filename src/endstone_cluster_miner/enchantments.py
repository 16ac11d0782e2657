"""
Enchantment lookup for Cluster Miner
Reads Silk Touch and Fortune from the tool a player is holding.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

SILK_TOUCH = "silk_touch"
FORTUNE = "fortune"
TRACKED_ENCHANTS = (SILK_TOUCH, FORTUNE)


@dataclass(frozen=True)
class EnchantProfile:
    """Drop-relevant enchantments of the held tool"""

    silk_touch: bool = False
    fortune_level: int = 0


NO_ENCHANTS = EnchantProfile()


def enchant_ids(name: str) -> Tuple[str, str]:
    """Short and namespaced forms of an enchantment id."""
    short = name.lower().replace(" ", "_").split(":", 1)[-1]
    return short, f"minecraft:{short}"


def enchant_level(enchants: Dict[str, int], name: str) -> int:
    """Level of an enchantment in a lowercase id -> level map; ids match exactly."""
    return max((enchants.get(key, 0) for key in enchant_ids(name)), default=0)


def _positive_level(value) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return 0
    return level if level > 0 else 0


def tool_enchants(tool) -> Dict[str, int]:
    """
    Read a tool's enchantments as a lowercase id -> level map.

    Uses the item meta's enchant map when it can be read. Otherwise the tracked
    enchantments are looked up one id at a time. Malformed levels are dropped.
    """
    try:
        meta = tool.item_meta
    except Exception:
        return {}
    if meta is None:
        return {}

    try:
        raw = dict(meta.enchants)
    except Exception:
        raw = None

    enchants = {}
    if raw is not None:
        for key, value in raw.items():
            level = _positive_level(value)
            if level:
                enchants[str(key).lower()] = level
        return enchants

    for name in TRACKED_ENCHANTS:
        for key in enchant_ids(name):
            try:
                level = _positive_level(meta.get_enchant_level(key))
            except Exception:
                continue
            if level:
                enchants[key] = level
    return enchants


def read_enchant_profile(tool) -> EnchantProfile:
    """Build the EnchantProfile for a tool; missing or malformed data reads as none."""
    if not tool:
        return NO_ENCHANTS

    enchants = tool_enchants(tool)
    return EnchantProfile(
        silk_touch=enchant_level(enchants, SILK_TOUCH) > 0,
        fortune_level=enchant_level(enchants, FORTUNE),
    )
