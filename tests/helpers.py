from typing import List, Optional, Sequence

from pygame.math import Vector3

from models import TILE_TAGS, SceneObject


def scene_object(
    tag: str,
    position: Sequence[float],
    name: Optional[str] = None,
    forward: Sequence[float] = (0.0, 0.0, 1.0),
) -> SceneObject:
    return SceneObject(
        name=name or f"{tag}_{position[0]}_{position[1]}_{position[2]}",
        tag=tag,
        position=Vector3(*position),
        forward=Vector3(*forward),
    )


def walkway_objects(
    count: int, spacing: float = 3.0, tags: Sequence[str] = TILE_TAGS
) -> List[SceneObject]:
    """count ground tiles along +z, colours cycling through tags."""
    return [
        scene_object(tags[i % len(tags)], (0.0, 0.0, spacing * i), name=f"tile_{i}")
        for i in range(count)
    ]


def xyz(v: Vector3):
    return (v.x, v.y, v.z)
