import logging

from endstone_cluster_miner.blocks import BlockCategory
from endstone_cluster_miner.cluster import Coordinate
from endstone_cluster_miner.drops import RemovalMode
from endstone_cluster_miner.enchantments import EnchantProfile
from endstone_cluster_miner.settings import VeinSettings
from endstone_cluster_miner.vein_miner import VeinMiner

from conftest import FakeHost, ScriptedRandom

ORE = "minecraft:redstone_ore"
LOG = "minecraft:spruce_log"
LEAF = "minecraft:spruce_leaves"


def _miner(groups, settings=None, rng=None):
    return VeinMiner(settings or VeinSettings(), groups, rng=rng or ScriptedRandom(),
                     logger=logging.getLogger("cluster-miner-test"), debug_logging=True)


def test_ore_line_end_to_end(groups):
    host = FakeHost({(x, 12, 3): ORE for x in range(5)})
    origin = host.block((0, 12, 3))

    result = _miner(groups).handle_break(host, origin, True)

    assert result.category is BlockCategory.ORE
    assert result.cluster_size == 5
    assert result.blocks_broken == 4
    assert result.xp_granted == 1
    assert result.failed_calls == 0
    assert host.removed_at(RemovalMode.DESTRUCTIVE) == [Coordinate(x, 12, 3) for x in range(1, 5)]
    assert Coordinate(0, 12, 3) in host.blocks
    assert host.items == []
    assert host.experience == [1]
    assert [effect[2] for effect in host.effects] == [Coordinate(0, 12, 3)] * 2


def test_not_sneaking_does_nothing(groups):
    host = FakeHost({(x, 0, 0): ORE for x in range(5)})
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), False)
    assert not result.activated
    assert host.lookups == 0
    assert host.removed == []


def test_unrecognized_block_does_nothing(groups):
    host = FakeHost({(x, 0, 0): "minecraft:stone" for x in range(5)})
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.category is BlockCategory.NONE
    assert host.removed == []


def test_breaking_leaves_does_nothing(groups):
    host = FakeHost({(x, 0, 0): LEAF for x in range(5)})
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.category is BlockCategory.NONE
    assert host.removed == []


def test_single_block_does_nothing(groups):
    host = FakeHost({(0, 0, 0): ORE, (1, 0, 0): "minecraft:stone"})
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.cluster_size == 1
    assert not result.activated
    assert host.removed == []
    assert host.experience == []
    assert host.effects == []


def test_pair_breaks_without_reward(groups):
    host = FakeHost({(0, 0, 0): ORE, (0, 1, 0): ORE})
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.blocks_broken == 1
    assert host.experience == []
    assert host.effects == []


def test_silk_touch_profile_is_read_once(groups):
    class CountingHost(FakeHost):
        profile_reads = 0

        def enchant_profile(self):
            self.profile_reads += 1
            return super().enchant_profile()

    host = CountingHost({(x, 0, 0): ORE for x in range(4)}, profile=EnchantProfile(silk_touch=True))
    _miner(groups).handle_break(host, host.block((0, 0, 0)), True)

    assert host.profile_reads == 1
    assert host.removed_at(RemovalMode.SILENT) == [Coordinate(x, 0, 0) for x in range(1, 4)]
    assert host.items == [(ORE, 1)] * 3


def test_gravel_column(groups):
    host = FakeHost({(0, y, 0): "minecraft:gravel" for y in range(4)}, profile=EnchantProfile(fortune_level=3))
    rng = ScriptedRandom(floats=[0.39, 0.41, 0.0])
    result = _miner(groups, rng=rng).handle_break(host, host.block((0, 0, 0)), True)
    assert result.blocks_broken == 3
    assert host.items == [("minecraft:flint", 1), ("minecraft:gravel", 1), ("minecraft:flint", 1)]


def test_tree_clears_leaves_at_boundary(groups):
    settings = VeinSettings(leaf_radius=8)
    host = FakeHost({
        (0, 0, 0): LOG,
        (0, 1, 0): LOG,
        (8, 0, 0): LEAF,
        (0, 0, -9): LEAF,
    })

    result = _miner(groups, settings).handle_break(host, host.block((0, 0, 0)), True)

    assert result.category is BlockCategory.LOG
    assert result.blocks_broken == 1
    assert result.leaves_cleared == 1
    assert Coordinate(8, 0, 0) not in host.blocks
    assert Coordinate(0, 0, -9) in host.blocks


def test_leaf_just_outside_radius_survives(groups):
    host = FakeHost({
        (0, 0, 0): LOG,
        (1, 0, 0): LOG,
        (-9, 0, 0): LEAF,
    })
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.leaves_cleared == 0
    assert Coordinate(-9, 0, 0) in host.blocks


def test_ore_cluster_does_not_sweep_leaves(groups):
    host = FakeHost({(0, 0, 0): ORE, (1, 0, 0): ORE, (0, 2, 0): LEAF})
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.leaves_cleared == 0
    assert Coordinate(0, 2, 0) in host.blocks


def test_large_vein_is_capped(groups):
    settings = VeinSettings(max_cluster=16)
    host = FakeHost({(x, y, z): ORE for x in range(4) for y in range(4) for z in range(4)})
    result = _miner(groups, settings).handle_break(host, host.block((0, 0, 0)), True)
    assert result.cluster_size == 16
    assert result.blocks_broken == 15
    assert result.xp_granted == 4


def test_failures_are_counted_not_raised(groups):
    host = FakeHost({(x, 0, 0): ORE for x in range(6)}, fail_removals=True, fail_grants=True)
    result = _miner(groups).handle_break(host, host.block((0, 0, 0)), True)
    assert result.blocks_broken == 5
    # five removals plus the experience grant
    assert result.failed_calls == 6
