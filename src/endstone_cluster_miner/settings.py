"""
Settings for Cluster Miner
Limits and effect names, read from the plugin config and validated once.
"""

from dataclasses import dataclass

DEFAULT_SOUND_VOLUME = 1.0
DEFAULT_SOUND_PITCH = 1.0


@dataclass(frozen=True)
class VeinSettings:
    """Immutable limits passed into search, execution and sweep"""

    max_cluster: int = 128
    cluster_radius: int = 8
    leaf_radius: int = 8
    leaf_limit: int = 256
    reward_particle: str = "minecraft:experience_orb"
    reward_sound: str = "random.orb"
    sound_volume: float = DEFAULT_SOUND_VOLUME
    sound_pitch: float = DEFAULT_SOUND_PITCH

    @property
    def cluster_radius_sq(self) -> int:
        return self.cluster_radius * self.cluster_radius

    @property
    def leaf_radius_sq(self) -> int:
        return self.leaf_radius * self.leaf_radius


DEFAULT_SETTINGS = VeinSettings()

MAX_CLUSTER_CAP = 4096
MAX_CLUSTER_RADIUS = 32
MAX_LEAF_RADIUS = 16
MAX_LEAF_LIMIT = 4096


def _bounded_int(value, default: int, low: int, high: int, name: str, logger=None) -> int:
    """Return value as an int within [low, high], else default with a warning."""
    try:
        number = int(value)
        if isinstance(value, bool) or number < low or number > high:
            raise ValueError()
        return number
    except (TypeError, ValueError):
        if logger is not None:
            logger.warning(f"Invalid {name} value ({value}), using default: {default}")
        return default


def _clamped_float(value, default: float, low: float, high: float, name: str, logger=None) -> float:
    """Return value as a float clamped to [low, high]; unreadable values give default."""
    try:
        if isinstance(value, bool):
            raise ValueError()
        number = float(value)
    except (TypeError, ValueError):
        if logger is not None:
            logger.warning(f"Invalid {name} value ({value}), using default: {default}")
        return default
    return min(max(number, low), high)


def load_settings(config, logger=None) -> VeinSettings:
    """Build VeinSettings from the plugin config mapping."""
    config = config or {}
    limits = config.get("limits", {})
    if not isinstance(limits, dict):
        if logger is not None:
            logger.warning("Invalid limits config, using defaults")
        limits = {}

    effects = config.get("effects", {})
    if not isinstance(effects, dict):
        if logger is not None:
            logger.warning("Invalid effects config, using defaults")
        effects = {}

    defaults = DEFAULT_SETTINGS
    return VeinSettings(
        max_cluster=_bounded_int(
            limits.get("max-cluster", defaults.max_cluster),
            defaults.max_cluster, 1, MAX_CLUSTER_CAP, "max-cluster", logger,
        ),
        cluster_radius=_bounded_int(
            limits.get("cluster-radius", defaults.cluster_radius),
            defaults.cluster_radius, 1, MAX_CLUSTER_RADIUS, "cluster-radius", logger,
        ),
        leaf_radius=_bounded_int(
            limits.get("leaf-radius", defaults.leaf_radius),
            defaults.leaf_radius, 0, MAX_LEAF_RADIUS, "leaf-radius", logger,
        ),
        leaf_limit=_bounded_int(
            limits.get("leaf-limit", defaults.leaf_limit),
            defaults.leaf_limit, 0, MAX_LEAF_LIMIT, "leaf-limit", logger,
        ),
        reward_particle=str(effects.get("particle", defaults.reward_particle) or ""),
        reward_sound=str(effects.get("sound", defaults.reward_sound) or ""),
        sound_volume=_clamped_float(
            effects.get("volume", defaults.sound_volume),
            defaults.sound_volume, 0.0, 1.0, "volume", logger,
        ),
        sound_pitch=_clamped_float(
            effects.get("pitch", defaults.sound_pitch),
            defaults.sound_pitch, 0.5, 2.0, "pitch", logger,
        ),
    )
