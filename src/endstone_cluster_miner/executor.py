"""
Cluster execution for Cluster Miner
Breaks the discovered cluster block by block and sweeps leaves around chopped logs.
"""

from dataclasses import dataclass
from typing import List

from endstone_cluster_miner.blocks import BlockCategory, BlockGroups, block_type_id
from endstone_cluster_miner.cluster import Coordinate
from endstone_cluster_miner.drops import DropResolver, RemovalMode
from endstone_cluster_miner.enchantments import EnchantProfile
from endstone_cluster_miner.settings import VeinSettings


@dataclass
class ExecutionReport:
    """Counters from one pass over a cluster"""

    processed: int = 0
    failed_calls: int = 0


class ClusterExecutor:
    """Applies removals and drops to a cluster, one block at a time"""

    def __init__(self, settings: VeinSettings, groups: BlockGroups, resolver: DropResolver,
                 logger=None, debug_logging: bool = False):
        self.settings = settings
        self.groups = groups
        self.resolver = resolver
        self.logger = logger
        self.debug_logging = debug_logging

    def _debug(self, message: str) -> None:
        if self.debug_logging and self.logger is not None:
            self.logger.info(f"[DEBUG] {message}")

    def execute(self, host, cluster: List[Coordinate], origin: Coordinate,
                category: BlockCategory, profile: EnchantProfile) -> ExecutionReport:
        """Break every cluster block except the origin, which the server breaks itself."""
        report = ExecutionReport()
        origin = Coordinate(*origin)

        for pos in cluster:
            if pos == origin:
                continue
            if report.processed >= self.settings.max_cluster:
                break

            # The world may have changed since the search.
            current = host.get_block_at(pos)
            if current is None or self.groups.classify(current) is not category:
                continue

            block_id = block_type_id(current)
            decision = self.resolver.resolve(category, block_id, profile)

            if not host.remove_block(pos, decision.removal):
                report.failed_calls += 1
                self._debug(f"Failed to remove {block_id} at ({pos.x}, {pos.y}, {pos.z})")

            for item_id, amount in decision.grants:
                if not host.grant_item(item_id, amount):
                    report.failed_calls += 1
                    self._debug(f"Failed to give {item_id} x{amount}")

            report.processed += 1

        return report

    def sweep_foliage(self, host, logs: List[Coordinate]) -> ExecutionReport:
        """Clear leaves within leaf_radius of each log, up to leaf_limit in total."""
        report = ExecutionReport()
        radius = self.settings.leaf_radius
        radius_sq = self.settings.leaf_radius_sq
        limit = self.settings.leaf_limit
        span = range(-radius, radius + 1)

        for log in logs:
            log = Coordinate(*log)
            for dx in span:
                for dy in span:
                    for dz in span:
                        if report.processed >= limit:
                            return report
                        if dx * dx + dy * dy + dz * dz > radius_sq:
                            continue

                        pos = log.offset(dx, dy, dz)
                        if self.groups.classify(host.get_block_at(pos)) is not BlockCategory.LEAF:
                            continue

                        if not host.remove_block(pos, RemovalMode.DESTRUCTIVE):
                            report.failed_calls += 1
                            self._debug(f"Failed to clear leaves at ({pos.x}, {pos.y}, {pos.z})")
                        report.processed += 1

        return report
