"""Tests for the prototype catalog and plan materialisation."""

import logging

import pytest

from errors import MissingPrototype
from helpers import scene_object
from level_builder import LevelAssembler
from models import BEAM, BLUE, GOAL_TAG, HAMMER_TAG, PINK, YELLOW, HazardSpec, TilePlacement
from scene import HAZARD_PARENT, TILE_PARENT, PrototypeCatalog, SceneSnapshot, materialize


class TestPrototypeCatalog:

    def test_lowest_tile_per_colour(self):
        catalog = PrototypeCatalog.from_objects(
            [
                scene_object(PINK, (0, 2, 0), name="high"),
                scene_object(PINK, (0, -1, 5), name="low"),
                scene_object(YELLOW, (0, 0, 3), name="yellow"),
            ]
        )
        assert catalog.tile(PINK).name == "low"
        assert catalog.tile(YELLOW).name == "yellow"

    def test_highest_hammer_and_first_goal(self):
        catalog = PrototypeCatalog.from_objects(
            [
                scene_object(HAMMER_TAG, (0, 1, 0), name="low_hammer"),
                scene_object(HAMMER_TAG, (0, 6, 0), name="high_hammer"),
                scene_object(GOAL_TAG, (0, 0, 9), name="goal_a"),
                scene_object(GOAL_TAG, (0, 0, 1), name="goal_b"),
            ]
        )
        assert catalog.hammer().name == "high_hammer"
        assert catalog.goal().name == "goal_a"

    def test_missing_prototypes_raise(self):
        catalog = PrototypeCatalog.from_objects([])
        with pytest.raises(MissingPrototype) as exc:
            catalog.tile(BLUE)
        assert exc.value.tag == BLUE
        with pytest.raises(MissingPrototype):
            catalog.hammer()
        with pytest.raises(MissingPrototype):
            catalog.goal()


class TestSceneSnapshot:

    def test_walkway_and_catalog(self, make_scene):
        scene = make_scene(count=3)
        assert [t.name for t in scene.walkway()] == ["tile_0", "tile_1", "tile_2"]
        assert scene.catalog().hammer().name == "Hammer"

    def test_empty_snapshot(self):
        assert SceneSnapshot().walkway() == []


class Host:
    """Records every call the adapter makes, in order."""

    def __init__(self):
        self.events = []

    def instantiate(self, proto, placement, parent):
        self.events.append(("create", proto, placement, parent))
        return len(self.events)

    def adjust(self, adjustment):
        self.events.append(("adjust", adjustment))

    def hide(self, name):
        self.events.append(("hide", name))

    def move_goal(self, goal, relocation):
        self.events.append(("goal", goal, relocation))

    def apply(self, plan, catalog):
        return materialize(
            plan,
            catalog,
            self.instantiate,
            adjust=self.adjust,
            hide=self.hide,
            move_goal=self.move_goal,
        )

    def of(self, kind):
        return [e[1:] for e in self.events if e[0] == kind]


class TestMaterialize:

    def test_hands_placements_over_in_order(self, make_scene):
        scene = make_scene(count=5)
        plan = LevelAssembler().build("lvl3", scene)
        host = Host()

        created = host.apply(plan, scene.catalog())

        creates = host.of("create")
        assert len(created) == len(plan.placements)
        assert [c[1] for c in creates] == plan.placements
        # decoration order: beam, side row (4 tiles), hammer
        assert creates[0][0] is None and creates[0][2] == HAZARD_PARENT
        assert creates[1][0].tag == PINK and creates[1][2] == TILE_PARENT
        assert creates[5][0].tag == HAMMER_TAG and creates[5][2] == HAZARD_PARENT

    def test_timing_and_beam_cycles_reach_host(self, make_scene):
        scene = make_scene(count=5)
        plan = LevelAssembler().build("lvl4", scene)
        host = Host()
        host.apply(plan, scene.catalog())

        placed = [c[1] for c in host.of("create")]
        timed = [p for p in placed if isinstance(p, TilePlacement) and p.timing is not None]
        assert len(timed) == 4
        assert (timed[0].timing.visible, timed[0].timing.hidden) == (2.5, 1.4)

        beams = [p for p in placed if isinstance(p, HazardSpec) and p.kind == BEAM]
        assert [(b.length, b.on_duration, b.off_duration, b.start_delay) for b in beams] == [
            (4.5, 1.1, 0.9, 0.0),
            (4.8, 0.9, 1.6, 0.4),
            (5.5, 1.0, 0.9, 0.5),
        ]

    def test_adjustments_and_goal_are_applied(self, make_scene):
        scene = make_scene(count=5)
        plan = LevelAssembler().build("lvl4", scene)
        host = Host()
        host.apply(plan, scene.catalog())

        assert [a for (a,) in host.of("adjust")] == plan.adjustments
        (goal, relocation), = host.of("goal")
        assert goal.name == "Win"
        assert relocation is plan.goal

        kinds = [e[0] for e in host.events]
        assert kinds[: len(plan.adjustments)] == ["adjust"] * len(plan.adjustments)
        assert kinds[-1] == "goal"

    def test_dense_tier_hides_authored_walkway(self, make_scene):
        scene = make_scene(count=4)
        plan = LevelAssembler().build("test", scene)
        host = Host()
        host.apply(plan, scene.catalog())

        assert [n for (n,) in host.of("hide")] == ["tile_0", "tile_1", "tile_2", "tile_3"]
        kinds = [e[0] for e in host.events]
        assert kinds.index("create") > max(i for i, k in enumerate(kinds) if k == "hide")

    def test_missing_callbacks_are_reported(self, make_scene, caplog):
        scene = make_scene(count=5)
        plan = LevelAssembler().build("lvl4", scene)
        with caplog.at_level(logging.WARNING, logger="scene"):
            created = materialize(plan, scene.catalog(), lambda proto, placement, parent: parent)
        assert len(created) == len(plan.placements)
        messages = " ".join(r.getMessage() for r in caplog.records)
        assert "tile adjustment" in messages
        assert "goal" in messages

    def test_unrecognized_level_creates_nothing(self, make_scene):
        scene = make_scene()
        plan = LevelAssembler().build("menu", scene)
        assert materialize(plan, scene.catalog(), lambda *args: pytest.fail("called")) == []
