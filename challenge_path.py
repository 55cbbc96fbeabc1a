from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from pygame.math import Vector3

from geometry import LATERAL_EPSILON, UP, lateral_axis, normalized_or
from models import BLUE, PINK, YELLOW, PathNode, TimingDescriptor


@dataclass(frozen=True)
class PathStep:
    forward: float  # in spacing units
    lateral: float  # in spacing units, positive to the right
    height: float  # absolute
    tag: str
    timing: Optional[TimingDescriptor] = None


def _timed(visible: float, hidden: float) -> TimingDescriptor:
    return TimingDescriptor(visible, hidden)


ANCHOR_TAG = PINK

# Hand-authored challenge layout; values are content, keep them as they are.
CHALLENGE_SCRIPT: Sequence[PathStep] = (
    # straight warm-up
    PathStep(1.0, 0.0, 0.0, YELLOW),
    PathStep(1.0, 0.0, 0.0, BLUE),
    PathStep(1.0, 0.0, 0.0, PINK),
    PathStep(1.0, 0.0, 0.0, YELLOW),
    # climb to the right
    PathStep(0.8, 0.6, 0.35, BLUE, _timed(2.6, 1.2)),
    PathStep(0.7, 0.6, 0.25, PINK),
    PathStep(0.7, 0.6, 0.2, YELLOW, _timed(2.2, 1.0)),
    # drift back left
    PathStep(0.9, 0.1, 0.2, BLUE),
    PathStep(0.8, -0.6, -0.05, PINK),
    PathStep(0.8, -0.6, -0.05, YELLOW),
    PathStep(0.8, -0.5, -0.05, BLUE, _timed(2.0, 0.9)),
    # zigzag
    PathStep(0.6, 0.9, 0.35, PINK),
    PathStep(0.6, 0.8, 0.0, YELLOW),
    PathStep(0.6, -1.4, -0.4, BLUE, _timed(1.8, 0.8)),
    # staircase
    PathStep(1.0, -0.2, 0.2, PINK),
    PathStep(1.0, 0.0, 0.45, YELLOW, _timed(2.3, 0.95)),
    PathStep(0.8, 0.4, 0.35, BLUE),
    PathStep(0.8, -0.6, -0.2, PINK),
    PathStep(0.8, -0.5, -0.2, YELLOW),
    # final approach
    PathStep(1.2, 0.2, 0.6, BLUE, _timed(2.1, 0.9)),
    PathStep(0.9, 0.6, 0.1, PINK),
    PathStep(0.9, 0.6, -0.15, YELLOW),
    PathStep(0.7, 0.0, 0.35, BLUE),
)


def orient_nodes(nodes: Sequence[PathNode], fallback: Vector3) -> List[PathNode]:
    """Point every node at its successor (the last one keeps the incoming heading).

    Needs the final positions of the neighbours, so it runs after the whole
    path is laid out.
    """
    oriented: List[PathNode] = []
    for i, node in enumerate(nodes):
        if i < len(nodes) - 1:
            delta = nodes[i + 1].position - node.position
        elif i > 0:
            delta = node.position - nodes[i - 1].position
        else:
            delta = Vector3(fallback)
        oriented.append(
            PathNode(
                tag=node.tag,
                position=node.position,
                forward=normalized_or(delta, fallback, LATERAL_EPSILON),
                timing=node.timing,
            )
        )
    return oriented


class ChallengePathGenerator:
    """Lays out the free-form waypoint path of the dense test tier."""

    def __init__(self, script: Sequence[PathStep] = CHALLENGE_SCRIPT) -> None:
        self.script = script

    def generate(self, start: Vector3, forward: Vector3, spacing: float) -> List[PathNode]:
        """Walk the script from start.

        Args:
            start: Position of the first authored tile (anchor node).
            forward: Walkway direction (horizontal, unit length).
            spacing: Walkway spacing; forward and lateral units scale with it.

        Returns:
            The anchor node followed by one node per script step.
        """
        right = lateral_axis(forward)
        current = Vector3(start)
        nodes = [PathNode(tag=ANCHOR_TAG, position=Vector3(current), forward=Vector3(forward))]

        for step in self.script:
            current = (
                current
                + forward * (spacing * step.forward)
                + right * (spacing * step.lateral)
                + UP * step.height
            )
            nodes.append(
                PathNode(
                    tag=step.tag,
                    position=Vector3(current),
                    forward=Vector3(forward),
                    timing=step.timing,
                )
            )

        return orient_nodes(nodes, forward)
