"""
Endstone host bridge for Cluster Miner
Every world or player call made by the miner goes through here. Calls never
raise: failures are logged in debug mode and reported as False.
"""

from endstone_cluster_miner.cluster import Coordinate
from endstone_cluster_miner.drops import RemovalMode
from endstone_cluster_miner.enchantments import EnchantProfile, NO_ENCHANTS, read_enchant_profile
from endstone_cluster_miner.rewards import EffectKind
from endstone_cluster_miner.settings import DEFAULT_SOUND_PITCH, DEFAULT_SOUND_VOLUME

MAX_STACK_SIZE = 64

# Endstone dimension names -> /execute dimension ids
DIMENSION_IDS = {
    "overworld": "overworld",
    "nether": "nether",
    "theend": "the_end",
    "the_end": "the_end",
}


class EndstoneHost:
    """World access for one break event, bound to the breaking player"""

    LOG_TAG = "[ClusterMiner] "

    def __init__(self, server, player, dimension, logger=None, debug_logging: bool = False,
                 sound_volume: float = DEFAULT_SOUND_VOLUME, sound_pitch: float = DEFAULT_SOUND_PITCH):
        self.server = server
        self.player = player
        self.dimension = dimension
        self.logger = logger
        self.debug_logging = debug_logging
        self.sound_volume = sound_volume
        self.sound_pitch = sound_pitch

    def _debug_failure(self, message: str, error: Exception = None) -> None:
        if self.debug_logging and self.logger is not None:
            detail = f": {str(error)}" if error is not None else ""
            self.logger.warning(f"{self.LOG_TAG}{message}{detail}")

    def _dispatch(self, command: str) -> bool:
        return bool(self.server.dispatch_command(self.server.command_sender, command))

    def _in_dimension(self, command: str) -> str:
        """Scope a console command to this event's dimension."""
        try:
            name = str(self.dimension.name).lower().replace(" ", "")
        except Exception:
            return command
        dimension_id = DIMENSION_IDS.get(name)
        if not dimension_id:
            return command
        return f"execute in {dimension_id} run {command}"

    def get_block_at(self, pos: Coordinate):
        try:
            return self.dimension.get_block_at(pos.x, pos.y, pos.z)
        except Exception as e:
            self._debug_failure(f"Invalid block at ({pos.x}, {pos.y}, {pos.z})", e)
            return None

    def remove_block(self, pos: Coordinate, mode: RemovalMode) -> bool:
        """Clear a block; DESTRUCTIVE lets the server drop items like a normal break."""
        command = self._in_dimension(f"setblock {pos.x} {pos.y} {pos.z} air {mode.value}")

        if mode is RemovalMode.SILENT:
            try:
                block = self.dimension.get_block_at(pos.x, pos.y, pos.z)
                block.set_type("minecraft:air", apply_physics=False)
                return True
            except Exception:
                pass  # fall back to setblock below

        try:
            return self._dispatch(command)
        except Exception as e:
            self._debug_failure(f"Failed to remove block at ({pos.x}, {pos.y}, {pos.z})", e)
            return False

    def grant_item(self, item_id: str, amount: int) -> bool:
        """Put items into the player's inventory; overflow is given with /give so it spills."""
        if amount <= 0:
            return True

        success = True
        remaining = amount
        while remaining > 0:
            stack_amount = min(MAX_STACK_SIZE, remaining)
            try:
                from endstone.inventory import ItemStack
                overflow = self.player.inventory.add_item(ItemStack(item_id, stack_amount))
                if overflow:
                    for overflow_stack in overflow.values():
                        overflow_amount = int(getattr(overflow_stack, "amount", 0))
                        if overflow_amount > 0:
                            success = self._give_command(item_id, overflow_amount) and success
            except Exception as e:
                self._debug_failure(f"Failed to add {item_id} x{stack_amount} to inventory", e)
                success = self._give_command(item_id, stack_amount) and success
            remaining -= stack_amount

        return success

    def _give_command(self, item_id: str, amount: int) -> bool:
        try:
            return self._dispatch(f'give "{self.player.name}" {item_id} {amount}')
        except Exception as e:
            self._debug_failure(f"Failed to give {item_id} x{amount}", e)
            return False

    def grant_experience(self, amount: int) -> bool:
        try:
            self.player.give_exp(amount)
            return True
        except Exception as e:
            self._debug_failure(f"Failed to grant {amount} XP", e)
            return False

    def trigger_effect(self, kind: EffectKind, name: str, pos: Coordinate) -> bool:
        """Show an effect at a block to the breaking player."""
        try:
            if kind is EffectKind.PARTICLE:
                self.player.spawn_particle(name, pos.x + 0.5, pos.y + 0.5, pos.z + 0.5)
            else:
                location = self.dimension.get_block_at(pos.x, pos.y, pos.z).location
                self.player.play_sound(location, name, self.sound_volume, self.sound_pitch)
            return True
        except Exception as e:
            self._debug_failure(f"Failed to play {kind.value} '{name}'", e)
            return False

    def enchant_profile(self) -> EnchantProfile:
        try:
            tool = self.player.inventory.item_in_main_hand
        except Exception:
            return NO_ENCHANTS
        return read_enchant_profile(tool)
