from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from pygame.math import Vector3

from challenge_path import ChallengePathGenerator
from errors import InsufficientBaseTiles, LevelBuildError, MissingPrototype
from geometry import UP, facing
from hazards import HazardPlacer
from models import (
    BLUE,
    DENSE_TEST,
    PINK,
    TIER_A,
    TIER_B,
    TILE_TAGS,
    UNRECOGNIZED,
    YELLOW,
    BuilderConfig,
    GoalRelocation,
    Placement,
    PlacementPlan,
    SceneObject,
    TileAdjustment,
    TilePlacement,
    TimingDescriptor,
    WalkwayMeta,
)
from scene import PrototypeCatalog, SceneSnapshot
from tile_extender import TileExtender
from walkway import analyse_walkway


logger = logging.getLogger(__name__)

MIN_BASE_TILES: Dict[str, int] = {TIER_A: 2, TIER_B: 2, DENSE_TEST: 1}


class BuildContext:
    """Mutable state of one tier build: the plan and the authored walkway."""

    def __init__(
        self,
        plan: PlacementPlan,
        catalog: PrototypeCatalog,
        walkway: Sequence[SceneObject],
        meta: WalkwayMeta,
    ) -> None:
        self.plan = plan
        self.catalog = catalog
        self.walkway = list(walkway)
        # authored positions after decoration (elevation bumps)
        self.positions: List[Vector3] = [Vector3(t.position) for t in walkway]
        self.meta = meta
        self.tiles = TileExtender(catalog, plan.issues)
        self.hazards = HazardPlacer(catalog, plan.issues)

    def emit(self, placement: Optional[Placement]) -> None:
        if placement is not None:
            self.plan.placements.append(placement)

    def emit_all(self, placements: Sequence[Placement]) -> None:
        self.plan.placements.extend(placements)

    def elevate(self, index: int, dy: float) -> None:
        self.positions[index].y += dy
        self.plan.adjustments.append(
            TileAdjustment(index=index, name=self.walkway[index].name, elevation=dy)
        )

    def make_timed(self, index: int, visible: float, hidden: float) -> None:
        self.plan.adjustments.append(
            TileAdjustment(
                index=index,
                name=self.walkway[index].name,
                timing=TimingDescriptor(visible, hidden),
            )
        )

    def relocate_goal(self, position: Vector3, forward: Vector3, height: float) -> None:
        """Move the goal marker above position, facing forward on the ground plane."""
        try:
            self.catalog.goal()
        except MissingPrototype as e:
            logger.warning("goal not moved: %s", e)
            self.plan.issues.append(e)
            return
        self.plan.goal = GoalRelocation(position=position + UP * height, forward=facing(forward))


class LevelAssembler:
    """Builds the placement plan for a level entry."""

    def __init__(self, config: Optional[BuilderConfig] = None) -> None:
        self.config = config or BuilderConfig.from_dict({})
        self.path_generator = ChallengePathGenerator()

    def build(self, level_name: str, scene: SceneSnapshot) -> PlacementPlan:
        """Generate extra content for level_name.

        Unrecognised levels, or walkways that are too short for their tier,
        produce an empty plan so the authored level is used unchanged.

        Args:
            level_name: Scene name supplied by the host (case-insensitive).
            scene: Objects currently in the host scene.

        Returns:
            The plan; recovered faults are listed in plan.issues.
        """
        tier = self.config.tier_for(level_name)
        plan = PlacementPlan(level=level_name, tier=tier)
        if tier == UNRECOGNIZED:
            logger.info("level %s has no generator, using authored layout", level_name)
            return plan

        catalog = scene.catalog()
        walkway = scene.walkway()
        required = MIN_BASE_TILES[tier]
        if len(walkway) < required:
            err = InsufficientBaseTiles(len(walkway), required)
            logger.warning("%s generation skipped: %s", level_name, err)
            plan.issues.append(err)
            return plan

        meta = analyse_walkway([t.position for t in walkway])
        logger.debug(
            "walkway %s: %d tiles, spacing=%.3f length=%.3f",
            level_name,
            len(walkway),
            meta.spacing,
            meta.total_length,
        )
        ctx = BuildContext(plan, catalog, walkway, meta)

        if tier == TIER_A:
            self._build_tier_a(ctx)
        elif tier == TIER_B:
            self._build_tier_b(ctx)
        else:
            self._build_dense_test(ctx)

        logger.info(
            "%s (%s): %d tiles, %d hazards, %d adjustments, %d issue(s)",
            level_name,
            tier,
            len(plan.tiles),
            len(plan.hazards),
            len(plan.adjustments),
            len(plan.issues),
        )
        return plan

    # ----------------------------
    # Tier A
    # ----------------------------

    def _decorate_tier_a(self, ctx: BuildContext) -> None:
        meta = ctx.meta
        n = len(ctx.walkway)
        if n >= 2:
            ctx.elevate(1, 0.45)
        if n >= 3:
            ctx.make_timed(min(n - 2, 3), 2.2, 1.1)

        ctx.emit(ctx.hazards.beam_on_walkway(meta, meta.total_length * 0.45, 1.7, 1.1, 4.2, 1.5, 1.2))
        ctx.emit_all(
            ctx.tiles.side_row(
                meta, meta.total_length * 0.15, 4, -2.0, [PINK, YELLOW, BLUE, YELLOW], "lvl3_side"
            )
        )
        ctx.emit(ctx.hazards.hammer_on_walkway(meta, meta.total_length * 0.55, 0.9))

    def _build_tier_a(self, ctx: BuildContext) -> None:
        meta = ctx.meta
        self._decorate_tier_a(ctx)

        pattern = [YELLOW, PINK, BLUE, PINK, YELLOW, BLUE]
        appended = ctx.tiles.extend(meta, pattern, self.config.tier_a_extra_tiles)
        # the last two steps climb towards the goal
        for i in range(max(0, len(appended) - 2), len(appended)):
            appended[i] = appended[i].raised(0.65)
        ctx.emit_all(appended)

        if appended:
            ctx.emit_all(
                ctx.tiles.side_row(
                    meta,
                    meta.total_length + meta.spacing * 0.5,
                    min(len(appended), 4),
                    2.1,
                    [BLUE, PINK, YELLOW],
                    "lvl3_ext",
                )
            )
            extended = meta.total_length + len(appended) * meta.spacing
            ctx.emit(ctx.hazards.hammer_on_walkway(meta, extended - meta.spacing * 0.4, 1.25))
            ctx.emit(
                ctx.hazards.beam_on_walkway(
                    meta, extended - meta.spacing * 0.15, -1.6, 1.2, 4.8, 1.4, 1.1, 0.4
                )
            )

        ctx.relocate_goal(self._last_position(ctx, appended), meta.direction, 0.45)

    # ----------------------------
    # Tier B
    # ----------------------------

    def _decorate_tier_b(self, ctx: BuildContext) -> None:
        meta = ctx.meta
        n = len(ctx.walkway)
        if n >= 3:
            ctx.elevate(2, 0.65)
            ctx.make_timed(1, 1.9, 0.9)
        if n >= 5:
            ctx.make_timed(4, 2.5, 1.2)

        ctx.emit(ctx.hazards.beam_on_walkway(meta, meta.total_length * 0.3, 1.9, 1.2, 4.5, 1.1, 0.9))
        ctx.emit(ctx.hazards.beam_on_walkway(meta, meta.total_length * 0.6, -1.8, 1.4, 4.8, 0.9, 1.6, 0.4))
        ctx.emit(ctx.hazards.hammer_on_walkway(meta, meta.total_length * 0.45, 1.2))
        ctx.emit_all(
            ctx.tiles.side_row(
                meta, meta.total_length * 0.25, 5, 2.7, [BLUE, PINK, YELLOW, BLUE, PINK], "lvl4_side"
            )
        )

    def _build_tier_b(self, ctx: BuildContext) -> None:
        meta = ctx.meta
        self._decorate_tier_b(ctx)

        appended = ctx.tiles.extend(meta, TILE_TAGS, self.config.tier_b_extra_tiles)
        blinking = TimingDescriptor(2.5, 1.4)
        # rise and blink follow the order of the tiles actually placed
        for i, tile in enumerate(appended):
            tile = tile.raised(0.4 * (i + 1))
            appended[i] = tile.with_timing(blinking) if i % 2 == 1 else tile
        ctx.emit_all(appended)

        if appended:
            ctx.emit_all(
                ctx.tiles.side_row(
                    meta,
                    meta.total_length + meta.spacing * 0.4,
                    min(len(appended) + 1, 5),
                    -2.6,
                    [YELLOW, PINK, BLUE],
                    "lvl4_ext",
                )
            )
            extended = meta.total_length + len(appended) * meta.spacing
            ctx.emit(
                ctx.hazards.beam_on_walkway(
                    meta, extended - meta.spacing * 0.35, 2.2, 1.5, 5.5, 1.0, 0.9, 0.5
                )
            )
            ctx.emit(ctx.hazards.hammer_on_walkway(meta, extended - meta.spacing * 0.75, 1.8))
            ctx.emit(ctx.hazards.hammer_on_walkway(meta, extended - meta.spacing * 0.1, 2.2))

        ctx.relocate_goal(self._last_position(ctx, appended), meta.direction, 0.6)

    # ----------------------------
    # Dense test
    # ----------------------------

    def _build_dense_test(self, ctx: BuildContext) -> None:
        meta = ctx.meta
        spacing = meta.spacing
        nodes = self.path_generator.generate(ctx.positions[0], meta.direction, spacing)

        ctx.plan.hidden.extend(t.name for t in ctx.walkway)

        for i, node in enumerate(nodes):
            try:
                proto = ctx.catalog.tile(node.tag)
            except MissingPrototype as e:
                logger.warning("skipping test path node %d: %s", i, e)
                ctx.plan.issues.append(e)
                continue
            ctx.emit(
                TilePlacement(
                    name=f"{proto.name}_test_{len(ctx.plan.tiles)}",
                    tag=node.tag,
                    position=Vector3(node.position),
                    forward=Vector3(node.forward),
                    timing=node.timing,
                    slot=i,
                )
            )

        hz = ctx.hazards
        if len(nodes) > 6:
            ctx.emit(hz.cross_beam(nodes[6], spacing * 4.2, 1.3, 1.4, 1.0, 0.25))
        if len(nodes) > 12:
            ctx.emit(hz.cross_beam(nodes[12], spacing * 4.6, 1.6, 1.2, 0.8, 0.85, invert=True))
        if len(nodes) > 18:
            ctx.emit(hz.along_beam(nodes[18], spacing * 3.5, spacing * 0.6, 1.45, 0.9, 1.2, 0.4))
        if len(nodes) > 8:
            ctx.emit(hz.hammer_near(nodes[8], spacing, 0.3, 0.9, 1.4))
        if len(nodes) > 20:
            ctx.emit(hz.hammer_near(nodes[20], spacing, 0.0, -1.1, 1.8))

        tiles = ctx.tiles
        if len(nodes) > 4:
            ctx.emit(tiles.beside_node(nodes[4], spacing, 1.6, 0.0, BLUE))
            ctx.emit(tiles.beside_node(nodes[4], spacing, -1.6, 0.0, PINK))
        if len(nodes) > 10:
            ctx.emit(tiles.beside_node(nodes[10], spacing, 1.2, -0.25, YELLOW))
            ctx.emit(
                tiles.beside_node(nodes[10], spacing, -1.2, -0.25, BLUE, TimingDescriptor(2.2, 1.0))
            )
        if len(nodes) > 16:
            ctx.emit(
                tiles.beside_node(nodes[16], spacing, 1.8, 0.15, PINK, TimingDescriptor(1.9, 0.8))
            )
            ctx.emit(tiles.beside_node(nodes[16], spacing, -1.8, 0.15, YELLOW))
        if len(nodes) > 22:
            ctx.emit(tiles.beside_node(nodes[22], spacing, 0.0, 0.6, BLUE))
            ctx.emit(tiles.beside_node(nodes[22], spacing, 1.2, 0.35, PINK))
            ctx.emit(tiles.beside_node(nodes[22], spacing, -1.2, 0.35, YELLOW))

        last = nodes[-1]
        ctx.relocate_goal(last.position, last.forward, 0.75)

    @staticmethod
    def _last_position(ctx: BuildContext, appended: Sequence[TilePlacement]) -> Vector3:
        if appended:
            return appended[-1].position
        return ctx.positions[-1]


def issue_summary(issues: Sequence[LevelBuildError]) -> Dict[str, int]:
    """Count recovered faults by type name."""
    counts: Dict[str, int] = {}
    for e in issues:
        key = type(e).__name__
        counts[key] = counts.get(key, 0) + 1
    return counts
