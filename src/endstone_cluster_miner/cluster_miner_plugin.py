"""
Cluster Miner Plugin for Endstone
Sneak while breaking an ore, log or gravel block to mine the whole connected cluster.
"""

from endstone.plugin import Plugin
from endstone.event import event_handler, EventPriority, BlockBreakEvent
from endstone import ColorFormat

from endstone_cluster_miner.blocks import BlockGroups
from endstone_cluster_miner.host import EndstoneHost
from endstone_cluster_miner.settings import VeinSettings, load_settings
from endstone_cluster_miner.vein_miner import VeinMiner


class ClusterMinerPlugin(Plugin):
    """Main plugin class for Cluster Miner"""

    api_version = "0.10"
    version = "1.0.0"

    def __init__(self):
        super().__init__()
        self.settings = VeinSettings()
        self.block_groups = None
        self.vein_miner = None

        # Logging
        self.logging_enabled = True
        self.log_vein_mining = True
        self.log_config_loading = True
        self.debug_logging = False
        self.performance_logging = False

    def on_load(self) -> None:
        """Called when the plugin is loaded"""
        self.logger.info("Cluster Miner plugin loaded!")

    def on_enable(self) -> None:
        """Called when the plugin is enabled"""
        self.load_config()
        self.load_block_groups()

        self.vein_miner = VeinMiner(
            self.settings,
            self.block_groups,
            logger=self.logger,
            debug_logging=self.debug_logging,
            performance_logging=self.performance_logging,
        )

        self.register_events(self)

        self.logger.info(
            f"Plugin enabled (v{self.version}) - Max cluster: {self.settings.max_cluster}, "
            f"Block types: {len(self.block_groups)}"
        )

    def on_disable(self) -> None:
        """Called when the plugin is disabled"""
        self.logger.info(ColorFormat.RED + "Cluster Miner plugin disabled!")

    def load_config(self) -> None:
        """Load and validate configuration settings"""
        self.save_default_config()

        config = self.config

        logging_config = config.get("logging", {})
        if not isinstance(logging_config, dict):
            self.logger.warning("Invalid logging config, using defaults")
            logging_config = {}
        self.logging_enabled = bool(logging_config.get("enabled", True))
        self.log_vein_mining = bool(logging_config.get("log-vein-mining", True))
        self.log_config_loading = bool(logging_config.get("log-config-loading", True))
        self.debug_logging = bool(logging_config.get("debug-logging", False))
        self.performance_logging = bool(logging_config.get("performance-logging", False))

        self.settings = load_settings(config, self.logger)

        if self.logging_enabled and self.log_config_loading:
            self.logger.info(ColorFormat.GREEN + f"[Config] Max cluster: {self.settings.max_cluster}")
            self.logger.info(ColorFormat.GREEN + f"[Config] Cluster radius: {self.settings.cluster_radius}")
            self.logger.info(
                ColorFormat.GREEN
                + f"[Config] Leaf sweep: radius {self.settings.leaf_radius}, limit {self.settings.leaf_limit}"
            )

    def load_block_groups(self) -> None:
        """Load the ore/log/leaf/gravel tables"""
        self.block_groups = BlockGroups.load()

        if self.logging_enabled and self.log_config_loading:
            self.logger.info(ColorFormat.GREEN + f"[Config] Loaded {len(self.block_groups)} block types")

    @event_handler(priority=EventPriority.HIGH)
    def on_block_break(self, event: BlockBreakEvent) -> None:
        """Handle block break events for cluster mining"""
        if not event or event.is_cancelled:
            return

        if not event.player or not event.block or self.vein_miner is None:
            return

        player = event.player
        block = event.block

        if self.debug_logging:
            self.logger.info(f"[DEBUG] Block break: {block.type} by {player.name}, Sneaking: {player.is_sneaking}")

        if not player.is_sneaking:
            return

        try:
            dimension = block.dimension if getattr(block, "dimension", None) else player.dimension
            host = EndstoneHost(
                self.server,
                player,
                dimension,
                logger=self.logger,
                debug_logging=self.debug_logging,
                sound_volume=self.settings.sound_volume,
                sound_pitch=self.settings.sound_pitch,
            )
            result = self.vein_miner.handle_break(host, block, player.is_sneaking)

            if result.activated and self.logging_enabled and self.log_vein_mining:
                self.logger.info(
                    ColorFormat.YELLOW
                    + f"[VeinMine] Player: {player.name} | Block: {block.type} | Cluster: {result.cluster_size}"
                    + f" | Broken: {result.blocks_broken} | Leaves: {result.leaves_cleared}"
                    + f" | XP: {result.xp_granted}"
                )
            if result.failed_calls and self.debug_logging:
                self.logger.warning(f"[DEBUG] {result.failed_calls} host calls failed for {player.name}")

        except Exception as e:
            self.logger.error(f"Error during cluster mining: {str(e)}")
            if self.debug_logging:
                import traceback
                traceback.print_exc()
