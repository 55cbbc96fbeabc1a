import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from typing import Callable, Sequence

import pytest

from helpers import scene_object, walkway_objects
from models import GOAL_TAG, HAMMER_TAG, TILE_TAGS
from scene import SceneSnapshot


@pytest.fixture
def make_scene() -> Callable[..., SceneSnapshot]:
    def _make(
        count: int = 5,
        spacing: float = 3.0,
        tags: Sequence[str] = TILE_TAGS,
        hammer: bool = True,
        goal: bool = True,
    ) -> SceneSnapshot:
        objects = walkway_objects(count, spacing, tags)
        if hammer:
            objects.append(scene_object(HAMMER_TAG, (0.0, 4.0, 5.0), name="Hammer"))
        if goal:
            objects.append(scene_object(GOAL_TAG, (0.0, 0.5, 20.0), name="Win"))
        return SceneSnapshot(objects)

    return _make
