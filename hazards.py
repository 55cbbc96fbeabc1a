from __future__ import annotations

import logging
from typing import List, Optional

from pygame.math import Vector3

from errors import LevelBuildError, MissingPrototype
from geometry import FORWARD, lateral_axis, normalized_or
from models import (
    BEAM,
    BEAM_OFF_DURATION,
    BEAM_ON_DURATION,
    SWINGING,
    HazardSpec,
    PathNode,
    SceneObject,
    WalkwayMeta,
)
from scene import PrototypeCatalog


logger = logging.getLogger(__name__)

BEAM_NAME = "LaserHazard_dynamic"


def _beam(
    origin: Vector3,
    direction: Vector3,
    length: float,
    on_duration: float,
    off_duration: float,
    delay: float,
) -> HazardSpec:
    return HazardSpec(
        kind=BEAM,
        name=BEAM_NAME,
        position=origin,
        forward=normalized_or(direction, FORWARD),
        length=length,
        on_duration=on_duration,
        off_duration=off_duration,
        start_delay=max(0.0, delay),
    )


class HazardPlacer:
    """Positions beam traps and swinging obstacles.

    Beams are fresh objects and always succeed. Swinging obstacles clone the
    scene's hammer; without one the placement is skipped.
    """

    def __init__(self, catalog: PrototypeCatalog, issues: List[LevelBuildError]) -> None:
        self.catalog = catalog
        self.issues = issues

    # ----------------------------
    # Beam traps
    # ----------------------------

    def beam_on_walkway(
        self,
        meta: WalkwayMeta,
        distance: float,
        sideways: float,
        height: float,
        length: float,
        on_duration: float = BEAM_ON_DURATION,
        off_duration: float = BEAM_OFF_DURATION,
        delay: float = 0.0,
    ) -> HazardSpec:
        """Beam running along the walkway, shifted sideways and lifted by height."""
        lateral = lateral_axis(meta.direction)
        origin = meta.point_at(distance) + lateral * sideways
        origin.y += height
        return _beam(origin, meta.direction, length, on_duration, off_duration, delay)

    def cross_beam(
        self,
        node: PathNode,
        length: float,
        height: float,
        on_duration: float,
        off_duration: float,
        delay: float = 0.0,
        invert: bool = False,
    ) -> HazardSpec:
        """Beam across the path, centred on node."""
        lateral = lateral_axis(node.forward)
        direction = -lateral if invert else lateral
        origin = node.position - direction * (length * 0.5)
        origin.y = node.position.y + height
        return _beam(origin, direction, length, on_duration, off_duration, delay)

    def along_beam(
        self,
        node: PathNode,
        length: float,
        back_offset: float,
        height: float,
        on_duration: float,
        off_duration: float,
        delay: float = 0.0,
    ) -> HazardSpec:
        """Beam following the path heading, starting back_offset behind node."""
        direction = normalized_or(node.forward, FORWARD)
        origin = node.position - direction * back_offset
        origin.y = node.position.y + height
        return _beam(origin, direction, length, on_duration, off_duration, delay)

    # ----------------------------
    # Swinging obstacles
    # ----------------------------

    def _hammer(self) -> Optional[SceneObject]:
        try:
            return self.catalog.hammer()
        except MissingPrototype as e:
            logger.warning("skipping swinging obstacle: %s", e)
            self.issues.append(e)
            return None

    def hammer_on_walkway(
        self, meta: WalkwayMeta, distance: float, height: float
    ) -> Optional[HazardSpec]:
        """Hammer on the walkway axis, height above the prototype's own elevation."""
        proto = self._hammer()
        if proto is None:
            return None

        pos = meta.point_at(distance)
        pos.y = proto.position.y + height
        return HazardSpec(
            kind=SWINGING,
            name=f"{proto.name}_dynamic",
            position=pos,
            forward=Vector3(proto.forward),
        )

    def hammer_near(
        self,
        node: PathNode,
        spacing: float,
        forward_units: float,
        lateral_units: float,
        height: float,
    ) -> Optional[HazardSpec]:
        """Hammer offset from a path node, height above the node."""
        proto = self._hammer()
        if proto is None:
            return None

        forward = normalized_or(node.forward, FORWARD)
        lateral = lateral_axis(forward)
        pos = node.position + forward * (spacing * forward_units) + lateral * (spacing * lateral_units)
        pos.y = node.position.y + height
        return HazardSpec(
            kind=SWINGING,
            name=f"{proto.name}_test",
            position=pos,
            forward=Vector3(proto.forward),
        )
