"""
Rewards for Cluster Miner
Experience and completion effects scaled by cluster size.
"""

from dataclasses import dataclass
from enum import Enum

from endstone_cluster_miner.cluster import Coordinate
from endstone_cluster_miner.settings import VeinSettings

MIN_REWARD_CLUSTER = 3
BLOCKS_PER_XP = 4
MAX_XP = 30


class EffectKind(Enum):
    PARTICLE = "particle"
    SOUND = "sound"


@dataclass
class RewardReport:
    xp_granted: int = 0
    failed_calls: int = 0


def calculate_experience(cluster_size: int) -> int:
    """Experience for a cluster; 0 below the reward threshold."""
    if cluster_size < MIN_REWARD_CLUSTER:
        return 0
    return min(cluster_size // BLOCKS_PER_XP, MAX_XP)


class RewardEmitter:
    """Grants experience and plays completion effects at the origin"""

    def __init__(self, settings: VeinSettings, logger=None, debug_logging: bool = False):
        self.settings = settings
        self.logger = logger
        self.debug_logging = debug_logging

    def emit(self, host, origin: Coordinate, cluster_size: int) -> RewardReport:
        """Reward a cluster of cluster_size blocks (origin included)."""
        report = RewardReport()
        if cluster_size < MIN_REWARD_CLUSTER:
            return report

        origin = Coordinate(*origin)
        xp = calculate_experience(cluster_size)
        if xp > 0:
            if host.grant_experience(xp):
                report.xp_granted = xp
            else:
                self._failed(report, f"Failed to grant {xp} XP")

        particle = self.settings.reward_particle
        if particle and not host.trigger_effect(EffectKind.PARTICLE, particle, origin):
            self._failed(report, f"Failed to spawn particle '{particle}'")

        sound = self.settings.reward_sound
        if sound and not host.trigger_effect(EffectKind.SOUND, sound, origin):
            self._failed(report, f"Failed to play sound '{sound}'")

        return report

    def _failed(self, report: RewardReport, message: str) -> None:
        report.failed_calls += 1
        if self.debug_logging and self.logger is not None:
            self.logger.warning(f"[Effects] {message}")
