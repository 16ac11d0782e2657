import random

import pytest

from endstone_cluster_miner.blocks import BlockGroups
from endstone_cluster_miner.cluster import Coordinate
from endstone_cluster_miner.enchantments import EnchantProfile


class FakeBlock:
    def __init__(self, block_type, x, y, z):
        self.type = block_type
        self.x = x
        self.y = y
        self.z = z


class FakeHost:
    """In-memory voxel world that records every call the miner makes."""

    def __init__(self, blocks=None, profile=None, fail_removals=False, fail_grants=False):
        self.blocks = {}
        for pos, block_type in (blocks or {}).items():
            self.blocks[Coordinate(*pos)] = block_type
        self.profile = profile or EnchantProfile()
        self.fail_removals = fail_removals
        self.fail_grants = fail_grants
        self.lookups = 0
        self.removed = []
        self.items = []
        self.experience = []
        self.effects = []

    def place(self, pos, block_type):
        self.blocks[Coordinate(*pos)] = block_type

    def block(self, pos):
        pos = Coordinate(*pos)
        return FakeBlock(self.blocks[pos], *pos)

    def get_block_at(self, pos):
        self.lookups += 1
        block_type = self.blocks.get(Coordinate(*pos))
        if block_type is None:
            return None
        return FakeBlock(block_type, *pos)

    def remove_block(self, pos, mode):
        self.removed.append((Coordinate(*pos), mode))
        if self.fail_removals:
            return False
        self.blocks.pop(Coordinate(*pos), None)
        return True

    def grant_item(self, item_id, amount):
        self.items.append((item_id, amount))
        return not self.fail_grants

    def grant_experience(self, amount):
        self.experience.append(amount)
        return not self.fail_grants

    def trigger_effect(self, kind, name, pos):
        self.effects.append((kind, name, Coordinate(*pos)))
        return True

    def enchant_profile(self):
        return self.profile

    def removed_at(self, mode=None):
        return [pos for pos, m in self.removed if mode is None or m is mode]


class ScriptedRandom(random.Random):
    """Random source returning queued values for randint() and random()."""

    def __init__(self, ints=(), floats=()):
        super().__init__(0)
        self.ints = list(ints)
        self.floats = list(floats)
        self.randint_calls = []

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        return self.ints.pop(0)

    def random(self):
        return self.floats.pop(0)


@pytest.fixture
def groups():
    return BlockGroups.load()
