from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from errors import MissingPrototype
from models import (
    BEAM,
    GOAL_TAG,
    HAMMER_TAG,
    TILE_TAGS,
    GoalRelocation,
    Placement,
    PlacementPlan,
    SceneObject,
    TileAdjustment,
    TilePlacement,
)
from walkway import collect_ground_tiles


logger = logging.getLogger(__name__)

TILE_PARENT = "tiles"
HAZARD_PARENT = "hazards"

Instantiate = Callable[[Optional[SceneObject], Placement, str], Any]
Adjust = Callable[[TileAdjustment], Any]
Hide = Callable[[str], Any]
MoveGoal = Callable[[SceneObject, GoalRelocation], Any]


class PrototypeCatalog:
    """Read-only lookup of the scene objects that generation clones."""

    def __init__(
        self,
        tiles: Dict[str, SceneObject],
        hammer: Optional[SceneObject] = None,
        goal: Optional[SceneObject] = None,
    ) -> None:
        self._tiles = dict(tiles)
        self._hammer = hammer
        self._goal = goal

    @classmethod
    def from_objects(cls, objects: Iterable[SceneObject]) -> "PrototypeCatalog":
        """Pick prototypes the way the level was authored.

        Tile prototypes are the lowest tile of each colour, the hammer is the
        highest one in the scene and the goal is the first marker found.
        """
        objects = list(objects)
        tiles: Dict[str, SceneObject] = {}
        for tag in TILE_TAGS:
            candidates = [o for o in objects if o.tag == tag]
            if candidates:
                tiles[tag] = min(candidates, key=lambda o: o.position.y)
            else:
                logger.warning("unable to locate prototype for tag %s", tag)

        hammers = [o for o in objects if o.tag == HAMMER_TAG]
        hammer = max(hammers, key=lambda o: o.position.y) if hammers else None
        if hammer is None:
            logger.warning("unable to locate hammer prototype in scene")

        goals = [o for o in objects if o.tag == GOAL_TAG]
        goal = goals[0] if goals else None
        if goal is None:
            logger.warning("unable to locate goal marker in scene")

        return cls(tiles, hammer, goal)

    def tile(self, tag: str) -> SceneObject:
        proto = self._tiles.get(tag)
        if proto is None:
            raise MissingPrototype(tag)
        return proto

    def hammer(self) -> SceneObject:
        if self._hammer is None:
            raise MissingPrototype(HAMMER_TAG)
        return self._hammer

    def goal(self) -> SceneObject:
        if self._goal is None:
            raise MissingPrototype(GOAL_TAG)
        return self._goal


@dataclass
class SceneSnapshot:
    """Objects read from the host scene at level entry."""

    objects: List[SceneObject] = field(default_factory=list)

    def walkway(self) -> List[SceneObject]:
        return collect_ground_tiles(self.objects)

    def catalog(self) -> PrototypeCatalog:
        return PrototypeCatalog.from_objects(self.objects)


def materialize(
    plan: PlacementPlan,
    catalog: PrototypeCatalog,
    instantiate: Instantiate,
    adjust: Optional[Adjust] = None,
    hide: Optional[Hide] = None,
    move_goal: Optional[MoveGoal] = None,
) -> List[Any]:
    """Apply a whole plan to the host scene.

    Authored tiles are adjusted and hidden first, then every placement is
    handed over in plan order, and the goal marker is moved last.

    Args:
        plan: Plan produced by the level assembler.
        catalog: Prototypes the plan was generated from.
        instantiate: Host callback (prototype, placement, parent). The
            placement record carries timing and beam cycle parameters.
            Beams have no prototype and receive None.
        adjust: Host callback for each TileAdjustment of an authored tile.
        hide: Host callback taking the name of an authored tile to deactivate.
        move_goal: Host callback (goal marker, relocation).

    Returns:
        Whatever the host returned for each placement.
    """
    _apply(plan.adjustments, adjust, "tile adjustment")
    _apply(plan.hidden, hide, "hidden tile")

    created: List[Any] = []
    for placement in plan.placements:
        if isinstance(placement, TilePlacement):
            proto = catalog.tile(placement.tag)
            parent = TILE_PARENT
        elif placement.kind == BEAM:
            proto = None
            parent = HAZARD_PARENT
        else:
            proto = catalog.hammer()
            parent = HAZARD_PARENT
        created.append(instantiate(proto, placement, parent))

    if plan.goal is not None:
        if move_goal is None:
            logger.warning("plan moves the goal but the host takes no goal callback")
        else:
            move_goal(catalog.goal(), plan.goal)
    return created


def _apply(items: Sequence[Any], callback: Optional[Callable[[Any], Any]], what: str) -> None:
    if not items:
        return
    if callback is None:
        logger.warning("%d %s(s) not applied: no host callback", len(items), what)
        return
    for item in items:
        callback(item)
