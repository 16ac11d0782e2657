"""
Drop resolution for Cluster Miner
Decides how each block in a cluster is removed and what the player is given.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import random

from endstone_cluster_miner.blocks import BlockCategory
from endstone_cluster_miner.enchantments import EnchantProfile


class RemovalMode(Enum):
    """How a block is cleared from the world"""

    SILENT = "replace"  # no drops, no break particles
    DESTRUCTIVE = "destroy"  # host drops and effects, like a normal break


@dataclass(frozen=True)
class DropDecision:
    """Removal mode plus items granted directly to the player"""

    removal: RemovalMode
    grants: List[Tuple[str, int]] = field(default_factory=list)


FLINT_ITEM = "minecraft:flint"
GRAVEL_ITEM = "minecraft:gravel"
BASE_FLINT_CHANCE = 0.1
FLINT_CHANCE_PER_FORTUNE = 0.1
ORE_SUFFIX = "_ore"


def strip_ore_suffix(block_id: str) -> str:
    """Approximate the raw drop of an ore by dropping a trailing "_ore"."""
    if block_id.endswith(ORE_SUFFIX):
        return block_id[: -len(ORE_SUFFIX)]
    return block_id


def flint_chance(fortune_level: int) -> float:
    """Probability that a gravel block yields flint."""
    if fortune_level > 0:
        return min(BASE_FLINT_CHANCE + FLINT_CHANCE_PER_FORTUNE * fortune_level, 1.0)
    return BASE_FLINT_CHANCE


class DropResolver:
    """Per-category drop policy with an injectable random source"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def resolve(self, category: BlockCategory, block_id: str, profile: EnchantProfile) -> DropDecision:
        if category is BlockCategory.ORE:
            return self.resolve_ore(block_id, profile)
        if category is BlockCategory.GRAVEL:
            return self.resolve_gravel(profile)
        # Logs (and anything else) rely on the host's own break drops.
        return DropDecision(RemovalMode.DESTRUCTIVE)

    def resolve_ore(self, block_id: str, profile: EnchantProfile) -> DropDecision:
        if profile.silk_touch:
            return DropDecision(RemovalMode.SILENT, [(block_id, 1)])

        grants: List[Tuple[str, int]] = []
        fortune_level = max(0, profile.fortune_level)
        if fortune_level > 0:
            bonus = self.rng.randint(0, fortune_level)
            if bonus > 0:
                grants.append((strip_ore_suffix(block_id), bonus))

        return DropDecision(RemovalMode.DESTRUCTIVE, grants)

    def resolve_gravel(self, profile: EnchantProfile) -> DropDecision:
        chance = flint_chance(max(0, profile.fortune_level))
        drop = FLINT_ITEM if self.rng.random() < chance else GRAVEL_ITEM
        return DropDecision(RemovalMode.DESTRUCTIVE, [(drop, 1)])
