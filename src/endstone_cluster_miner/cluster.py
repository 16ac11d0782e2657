"""
Cluster search for Cluster Miner
Finds the connected blocks around a broken block, bounded by radius and size.
"""

from typing import Callable, List, NamedTuple, Set

from endstone_cluster_miner.settings import VeinSettings, DEFAULT_SETTINGS


class Coordinate(NamedTuple):
    """Integer block position"""

    x: int
    y: int
    z: int

    @classmethod
    def of(cls, block) -> "Coordinate":
        return cls(int(block.x), int(block.y), int(block.z))

    def offset(self, dx: int, dy: int, dz: int) -> "Coordinate":
        return Coordinate(self.x + dx, self.y + dy, self.z + dz)

    def distance_sq(self, other: "Coordinate") -> int:
        dx, dy, dz = self.x - other.x, self.y - other.y, self.z - other.z
        return dx * dx + dy * dy + dz * dz


# +x, -x, +y, -y, +z, -z
FACE_OFFSETS = (
    (1, 0, 0), (-1, 0, 0),
    (0, 1, 0), (0, -1, 0),
    (0, 0, 1), (0, 0, -1),
)


def find_cluster(
    origin: Coordinate,
    host,
    matches: Callable[[object], bool],
    settings: VeinSettings = DEFAULT_SETTINGS,
) -> List[Coordinate]:
    """Depth-first search for blocks connected to origin that satisfy matches.

    Neighbours are only pushed while within cluster_radius of the origin, and
    the search stops as soon as max_cluster coordinates were found; whatever is
    left on the stack is dropped. The result keeps discovery order.
    """
    found: List[Coordinate] = []
    if settings.max_cluster <= 0:
        return found

    origin = Coordinate(*origin)
    stack = [origin]
    visited: Set[Coordinate] = {origin}
    radius_sq = settings.cluster_radius_sq

    while stack and len(found) < settings.max_cluster:
        current = stack.pop()
        if not matches(host.get_block_at(current)):
            continue
        found.append(current)

        for dx, dy, dz in FACE_OFFSETS:
            neighbor = current.offset(dx, dy, dz)
            if origin.distance_sq(neighbor) > radius_sq:
                continue
            if neighbor in visited:
                continue
            visited.add(neighbor)
            stack.append(neighbor)

    return found
