from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Union

from pygame.math import Vector3

from errors import LevelBuildError
from geometry import UP, as_list


PINK = "PlatformPink"
YELLOW = "PlatformYellow"
BLUE = "PlatformBlue"
TILE_TAGS = (PINK, YELLOW, BLUE)

HAMMER_TAG = "Hammer"
GOAL_TAG = "Win"

BEAM = "beam"
SWINGING = "swinging"

# LaserHazard defaults when a placement leaves the cycle untouched
BEAM_ON_DURATION = 1.5
BEAM_OFF_DURATION = 1.0


@dataclass(frozen=True)
class SceneObject:
    name: str
    tag: str
    position: Vector3
    forward: Vector3


@dataclass(frozen=True)
class TimingDescriptor:
    """Visible/hidden durations (seconds) of a duty-cycled platform."""

    visible: float
    hidden: float

    def __post_init__(self) -> None:
        if self.visible <= 0 or self.hidden <= 0:
            raise ValueError(
                f"durations must be positive (visible={self.visible}, hidden={self.hidden})"
            )


@dataclass(frozen=True)
class TilePlacement:
    name: str
    tag: str
    position: Vector3
    forward: Vector3
    timing: Optional[TimingDescriptor] = None
    slot: Optional[int] = None

    def raised(self, dy: float) -> "TilePlacement":
        return replace(self, position=self.position + UP * dy)

    def with_timing(self, timing: TimingDescriptor) -> "TilePlacement":
        return replace(self, timing=timing)


@dataclass(frozen=True)
class WalkwayMeta:
    start: Vector3
    direction: Vector3
    spacing: float
    total_length: float

    def point_at(self, distance: float) -> Vector3:
        """Point on the walkway axis at distance from the first tile."""
        return self.start + self.direction * distance


@dataclass(frozen=True)
class PathNode:
    tag: str
    position: Vector3
    forward: Vector3
    timing: Optional[TimingDescriptor] = None


@dataclass(frozen=True)
class HazardSpec:
    kind: str  # beam|swinging
    name: str
    position: Vector3
    forward: Vector3
    length: Optional[float] = None  # None for swinging obstacles
    on_duration: float = BEAM_ON_DURATION
    off_duration: float = BEAM_OFF_DURATION
    start_delay: float = 0.0


@dataclass(frozen=True)
class TileAdjustment:
    """In-place change to an authored walkway tile."""

    index: int
    name: str
    elevation: float = 0.0
    timing: Optional[TimingDescriptor] = None


@dataclass(frozen=True)
class GoalRelocation:
    position: Vector3
    forward: Vector3


Placement = Union[TilePlacement, HazardSpec]


@dataclass
class PlacementPlan:
    level: str
    tier: str
    placements: List[Placement] = field(default_factory=list)
    adjustments: List[TileAdjustment] = field(default_factory=list)
    hidden: List[str] = field(default_factory=list)
    goal: Optional[GoalRelocation] = None
    issues: List[LevelBuildError] = field(default_factory=list)

    @property
    def tiles(self) -> List[TilePlacement]:
        return [p for p in self.placements if isinstance(p, TilePlacement)]

    @property
    def hazards(self) -> List[HazardSpec]:
        return [p for p in self.placements if isinstance(p, HazardSpec)]

    @property
    def is_empty(self) -> bool:
        return not (self.placements or self.adjustments or self.hidden or self.goal)


def _timing_dict(timing: Optional[TimingDescriptor]) -> Optional[Dict[str, float]]:
    if timing is None:
        return None
    return {"visible": timing.visible, "hidden": timing.hidden}


def plan_to_dict(plan: PlacementPlan) -> Dict[str, Any]:
    """Convert a plan into JSON-serialisable primitives."""
    placements: List[Dict[str, Any]] = []
    for p in plan.placements:
        if isinstance(p, TilePlacement):
            placements.append(
                {
                    "type": "tile",
                    "name": p.name,
                    "tag": p.tag,
                    "position": as_list(p.position),
                    "forward": as_list(p.forward),
                    "timing": _timing_dict(p.timing),
                }
            )
        else:
            placements.append(
                {
                    "type": p.kind,
                    "name": p.name,
                    "position": as_list(p.position),
                    "forward": as_list(p.forward),
                    "length": p.length,
                    "on_duration": p.on_duration,
                    "off_duration": p.off_duration,
                    "start_delay": p.start_delay,
                }
            )

    goal = None
    if plan.goal is not None:
        goal = {"position": as_list(plan.goal.position), "forward": as_list(plan.goal.forward)}

    return {
        "level": plan.level,
        "tier": plan.tier,
        "placements": placements,
        "adjustments": [
            {
                "index": a.index,
                "name": a.name,
                "elevation": a.elevation,
                "timing": _timing_dict(a.timing),
            }
            for a in plan.adjustments
        ],
        "hidden": list(plan.hidden),
        "goal": goal,
        "issues": [f"{type(e).__name__}: {e}" for e in plan.issues],
    }


TIER_A = "tierA"
TIER_B = "tierB"
DENSE_TEST = "denseTest"
UNRECOGNIZED = "unrecognized"
TIERS = (TIER_A, TIER_B, DENSE_TEST)


@dataclass(frozen=True)
class BuilderConfig:
    levels: Dict[str, str]
    tier_a_extra_tiles: int = 6
    tier_b_extra_tiles: int = 9

    @staticmethod
    def from_dict(raw: Dict[str, Any]) -> "BuilderConfig":
        levels_raw = raw.get("levels") if isinstance(raw.get("levels"), dict) else {}
        levels = {tier.lower(): tier for tier in TIERS}
        levels.update({"lvl3": TIER_A, "lvl4": TIER_B, "test": DENSE_TEST})
        # entries naming an unknown tier are ignored
        levels.update({str(k).lower(): str(v) for k, v in levels_raw.items() if v in TIERS})
        return BuilderConfig(
            levels=levels,
            tier_a_extra_tiles=max(0, int(raw.get("tier_a_extra_tiles", 6))),
            tier_b_extra_tiles=max(0, int(raw.get("tier_b_extra_tiles", 9))),
        )

    def tier_for(self, level_name: str) -> str:
        tier = self.levels.get(level_name.lower(), UNRECOGNIZED)
        return tier if tier in TIERS else UNRECOGNIZED
