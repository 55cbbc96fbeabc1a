from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, List, Sequence

from pygame.math import Vector3

from errors import InsufficientBaseTiles
from geometry import FORWARD, HORIZONTAL_EPSILON, horizontal, normalized_or
from models import TILE_TAGS, SceneObject, WalkwayMeta


# tiles within this height of the lowest one belong to the walkway
GROUND_BAND = 1.0
# depths closer than this count as the same row and fall back to x ordering
DEPTH_TIE = 0.5
# projected steps at or below this are duplicates or backtracks
MIN_STEP = 0.1
DEFAULT_SPACING = 3.0


def _walkway_order(a: SceneObject, b: SceneObject) -> int:
    da, db = a.position, b.position
    if abs(da.z - db.z) > DEPTH_TIE:
        return -1 if da.z < db.z else 1
    if da.x == db.x:
        return 0
    return -1 if da.x < db.x else 1


def collect_ground_tiles(objects: Iterable[SceneObject]) -> List[SceneObject]:
    """Return the authored walkway: lowest band of colour tiles in walking order.

    Tiles are grouped to the lowest elevation band, then sorted by depth with
    a lateral tie-break. This assumes the walkway was authored roughly along
    the depth axis.
    """
    tiles = [o for o in objects if o.tag in TILE_TAGS]
    if not tiles:
        return []

    min_y = min(t.position.y for t in tiles)
    ground = [t for t in tiles if abs(t.position.y - min_y) < GROUND_BAND]
    ground.sort(key=lambda t: (t.position.x, t.position.z))
    ground.sort(key=cmp_to_key(_walkway_order))
    return ground


def analyse_walkway(positions: Sequence[Vector3]) -> WalkwayMeta:
    """Infer direction, spacing and length of an ordered walkway.

    Args:
        positions: Tile positions in walking order.

    Returns:
        WalkwayMeta anchored on the first tile.

    Raises:
        InsufficientBaseTiles: If positions is empty.
    """
    if not positions:
        raise InsufficientBaseTiles(0, 1)

    start = Vector3(positions[0])
    end = Vector3(positions[-1])
    direction = normalized_or(horizontal(end - start), FORWARD, HORIZONTAL_EPSILON)

    steps: List[float] = []
    for prev, cur in zip(positions, positions[1:]):
        projected = horizontal(cur - prev).dot(direction)
        if projected > MIN_STEP:
            steps.append(projected)

    spacing = sum(steps) / len(steps) if steps else DEFAULT_SPACING
    total_length = (end - start).dot(direction)
    return WalkwayMeta(start=start, direction=direction, spacing=spacing, total_length=total_length)
