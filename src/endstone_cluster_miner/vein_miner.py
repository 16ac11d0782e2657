"""
Cluster Miner core
Runs one break event through search, execution, leaf sweep and rewards.
"""

from dataclasses import dataclass
from typing import Optional
import random
import time

from endstone_cluster_miner.blocks import BlockCategory, BlockGroups, default_block_groups
from endstone_cluster_miner.cluster import Coordinate, find_cluster
from endstone_cluster_miner.drops import DropResolver
from endstone_cluster_miner.executor import ClusterExecutor
from endstone_cluster_miner.rewards import RewardEmitter
from endstone_cluster_miner.settings import VeinSettings, DEFAULT_SETTINGS

MIN_CLUSTER_SIZE = 2


@dataclass
class VeinResult:
    """Summary of one handled break event"""

    category: BlockCategory = BlockCategory.NONE
    cluster_size: int = 0
    blocks_broken: int = 0
    leaves_cleared: int = 0
    xp_granted: int = 0
    failed_calls: int = 0

    @property
    def activated(self) -> bool:
        return self.cluster_size >= MIN_CLUSTER_SIZE


class VeinMiner:
    """Stateless per-event pipeline; safe to share between events"""

    def __init__(self, settings: VeinSettings = DEFAULT_SETTINGS, groups: Optional[BlockGroups] = None,
                 rng: Optional[random.Random] = None, logger=None,
                 debug_logging: bool = False, performance_logging: bool = False):
        self.settings = settings
        self.groups = groups if groups is not None else default_block_groups()
        self.logger = logger
        self.debug_logging = debug_logging
        self.performance_logging = performance_logging
        self.executor = ClusterExecutor(settings, self.groups, DropResolver(rng), logger, debug_logging)
        self.rewards = RewardEmitter(settings, logger, debug_logging)

    def handle_break(self, host, block, is_sneaking: bool) -> VeinResult:
        """Handle a block broken by a player; does nothing unless sneaking."""
        result = VeinResult()
        if block is None or not is_sneaking:
            return result

        category = self.groups.trigger_category(block)
        if category is BlockCategory.NONE:
            return result
        result.category = category

        origin = Coordinate.of(block)
        start_time = time.time() if self.performance_logging else 0
        cluster = find_cluster(origin, host, self.groups.matcher(category), self.settings)
        result.cluster_size = len(cluster)

        if self.performance_logging and self.logger is not None:
            elapsed = (time.time() - start_time) * 1000
            self.logger.info(f"[Performance] Cluster search took {elapsed:.2f}ms for {len(cluster)} blocks")

        if len(cluster) < MIN_CLUSTER_SIZE:
            if self.debug_logging and self.logger is not None:
                self.logger.info(f"[DEBUG] Cluster too small ({len(cluster)}) at {origin}")
            return result

        profile = host.enchant_profile()

        report = self.executor.execute(host, cluster, origin, category, profile)
        result.blocks_broken = report.processed
        result.failed_calls += report.failed_calls

        if category is BlockCategory.LOG:
            sweep = self.executor.sweep_foliage(host, cluster)
            result.leaves_cleared = sweep.processed
            result.failed_calls += sweep.failed_calls

        reward = self.rewards.emit(host, origin, len(cluster))
        result.xp_granted = reward.xp_granted
        result.failed_calls += reward.failed_calls

        return result
