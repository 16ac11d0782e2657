"""
Block groups for Cluster Miner
Maps block identifiers to the categories the miner understands.
"""

from enum import Enum
from typing import Dict, FrozenSet, Optional
import os
import yaml


BLOCK_GROUPS_FILE = os.path.join(os.path.dirname(__file__), "block_groups.yml")


def block_type_id(block) -> str:
    """Best-effort namespaced id of a block handle ("" when unreadable)."""
    if block is None:
        return ""
    try:
        block_type = block.type
        if hasattr(block_type, "id"):
            block_type = block_type.id
        return str(block_type).lower() if block_type else ""
    except Exception:
        return ""


class BlockCategory(Enum):
    """Category a block identifier belongs to"""

    ORE = "ores"
    LOG = "logs"
    LEAF = "leaves"
    GRAVEL = "gravel"
    NONE = "none"


# Categories that start a cluster when broken, in precedence order.
TRIGGER_CATEGORIES = (BlockCategory.ORE, BlockCategory.LOG, BlockCategory.GRAVEL)


class BlockGroups:
    """Immutable membership tables for ores, logs, leaves and gravel"""

    def __init__(self, groups: Dict[BlockCategory, FrozenSet[str]]):
        self._groups = dict(groups)

    @classmethod
    def load(cls, path: str = BLOCK_GROUPS_FILE) -> "BlockGroups":
        """Load the block tables from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        groups: Dict[BlockCategory, FrozenSet[str]] = {}
        for category in BlockCategory:
            if category is BlockCategory.NONE:
                continue
            entries = data.get(category.value, []) or []
            groups[category] = frozenset(str(entry).lower() for entry in entries if entry)

        return cls(groups)

    def members(self, category: BlockCategory) -> FrozenSet[str]:
        return self._groups.get(category, frozenset())

    def category_of(self, block_id: Optional[str]) -> BlockCategory:
        """Return the single category holding block_id, or NONE."""
        if not block_id:
            return BlockCategory.NONE

        block_id = str(block_id).lower()
        matches = [category for category, ids in self._groups.items() if block_id in ids]
        if len(matches) != 1:
            return BlockCategory.NONE
        return matches[0]

    def classify(self, block) -> BlockCategory:
        """Classify a block handle; absent blocks are NONE."""
        if block is None:
            return BlockCategory.NONE
        return self.category_of(block_type_id(block))

    def trigger_category(self, block) -> BlockCategory:
        """Category that starts a cluster for this block, or NONE."""
        category = self.classify(block)
        if category in TRIGGER_CATEGORIES:
            return category
        return BlockCategory.NONE

    def matcher(self, category: BlockCategory):
        """Build a block predicate for one category."""
        def matches(block) -> bool:
            return self.classify(block) is category
        return matches

    def __len__(self) -> int:
        return sum(len(ids) for ids in self._groups.values())


_default_groups: Optional[BlockGroups] = None


def default_block_groups() -> BlockGroups:
    """Process-wide block tables, loaded on first use."""
    global _default_groups
    if _default_groups is None:
        _default_groups = BlockGroups.load()
    return _default_groups
