from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from errors import LevelBuildError, MissingPrototype
from geometry import FORWARD, UP, lateral_axis, normalized_or
from models import TILE_TAGS, PathNode, TilePlacement, TimingDescriptor, WalkwayMeta
from patterns import sequence_tags
from scene import PrototypeCatalog


logger = logging.getLogger(__name__)


class TileExtender:
    """Clones colour tiles along and beside the walkway."""

    def __init__(self, catalog: PrototypeCatalog, issues: List[LevelBuildError]) -> None:
        self.catalog = catalog
        self.issues = issues

    def extend(
        self, meta: WalkwayMeta, pattern: Sequence[str], count: int
    ) -> List[TilePlacement]:
        """Append count tiles past the end of the walkway.

        Args:
            meta: Analysed walkway.
            pattern: Cyclic palette of tile tags.
            count: Number of slots to fill.

        Returns:
            The placed tiles at their prototype's elevation; slots without a
            prototype are left out.
        """
        created: List[TilePlacement] = []
        for i, tag in enumerate(sequence_tags(pattern, count)):
            try:
                proto = self.catalog.tile(tag)
            except MissingPrototype as e:
                logger.warning("skipping tile creation: %s", e)
                self.issues.append(e)
                continue

            pos = meta.point_at(meta.total_length + meta.spacing * (i + 1))
            pos.y = proto.position.y
            created.append(
                TilePlacement(
                    name=f"{proto.name}_dynamic_{i}",
                    tag=tag,
                    position=pos,
                    forward=proto.forward,
                    slot=i,
                )
            )
        return created

    def side_row(
        self,
        meta: WalkwayMeta,
        start_distance: float,
        count: int,
        lateral_offset: float,
        palette: Sequence[str],
        label: str = "side",
    ) -> List[TilePlacement]:
        """Scatter optional tiles in a row parallel to the walkway."""
        if count <= 0:
            return []
        palette = palette or TILE_TAGS
        lateral = lateral_axis(meta.direction)

        created: List[TilePlacement] = []
        for i, tag in enumerate(sequence_tags(palette, count)):
            try:
                proto = self.catalog.tile(tag)
            except MissingPrototype as e:
                logger.warning("skipping %s tile %d: %s", label, i, e)
                self.issues.append(e)
                continue

            distance = max(0.0, start_distance + meta.spacing * i)
            pos = meta.point_at(distance) + lateral * lateral_offset
            pos.y = proto.position.y
            created.append(
                TilePlacement(
                    name=f"{proto.name}_{label}_{i}",
                    tag=tag,
                    position=pos,
                    forward=proto.forward,
                    slot=i,
                )
            )
        return created

    def beside_node(
        self,
        node: PathNode,
        spacing: float,
        lateral_units: float,
        height: float,
        tag: str,
        timing: Optional[TimingDescriptor] = None,
    ) -> Optional[TilePlacement]:
        """Decoration tile next to a path node, facing along the path."""
        try:
            proto = self.catalog.tile(tag)
        except MissingPrototype as e:
            logger.warning("skipping decor tile: %s", e)
            self.issues.append(e)
            return None

        forward = normalized_or(node.forward, FORWARD)
        lateral = lateral_axis(forward)
        pos = node.position + lateral * (spacing * lateral_units) + UP * height
        return TilePlacement(
            name=f"{proto.name}_testDecor",
            tag=tag,
            position=pos,
            forward=forward,
            timing=timing,
        )
