from __future__ import annotations

import logging
from typing import Any, Dict, List

from pygame.math import Vector3

from geometry import FORWARD
from models import TIERS, BuilderConfig, SceneObject
from scene import SceneSnapshot
from utils import as_vector3, deep_get


logger = logging.getLogger(__name__)


def _parse_levels(raw: Any) -> Dict[str, str]:
    """
    Level name -> tier overrides, e.g.
      "levels": { "lvl5": "tierB", "sandbox": "denseTest" }
    Unknown tiers are dropped.
    """
    if not isinstance(raw, dict):
        return {}

    levels: Dict[str, str] = {}
    for name, tier in raw.items():
        if tier not in TIERS:
            logger.warning("ignoring level %s: unknown tier %r", name, tier)
            continue
        levels[str(name)] = str(tier)
    return levels


def parse_builder_config(raw: Dict[str, Any]) -> BuilderConfig:
    """Parse builder settings from config data.

    Accepts the settings at the top level or under a "builder" key.

    Args:
        raw: Dict containing builder settings.

    Returns:
        BuilderConfig with defaults applied.
    """
    if not isinstance(raw, dict):
        raw = {}
    section = deep_get(raw, "builder", raw)
    if not isinstance(section, dict):
        section = {}

    cleaned = dict(section)
    cleaned["levels"] = _parse_levels(section.get("levels"))
    try:
        return BuilderConfig.from_dict(cleaned)
    except (TypeError, ValueError) as e:
        raise SystemExit(f"\nERROR: invalid builder config: {e}\n")


def parse_scene_object(raw: Dict[str, Any], index: int) -> SceneObject:
    """Parse one scene entry; missing names are derived from tag and index."""
    tag = str(raw.get("tag", "")).strip()
    name_raw = raw.get("name")
    name = str(name_raw).strip() if isinstance(name_raw, str) and name_raw.strip() else f"{tag}_{index}"
    return SceneObject(
        name=name,
        tag=tag,
        position=as_vector3(raw.get("position"), Vector3(0.0, 0.0, 0.0)),
        forward=as_vector3(raw.get("forward"), FORWARD),
    )


def parse_scene(raw: Dict[str, Any]) -> SceneSnapshot:
    """Parse a scene description ({"objects": [...]}) into a snapshot."""
    objects_raw = raw.get("objects", [])
    if not isinstance(objects_raw, list):
        objects_raw = []

    objects: List[SceneObject] = []
    for i, entry in enumerate(objects_raw):
        if not isinstance(entry, dict) or not entry.get("tag"):
            logger.debug("skipping scene entry %d: %r", i, entry)
            continue
        objects.append(parse_scene_object(entry, i))
    return SceneSnapshot(objects)
