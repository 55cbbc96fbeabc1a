"""Host-side gameplay rules for the records the builder emits.

The builder only attaches timing parameters; these helpers describe how the
host is expected to run them so a plan can be checked without a game loop.
"""

from __future__ import annotations

import math

from models import TILE_TAGS, HazardSpec, TimingDescriptor


def platform_visible(timing: TimingDescriptor, t: float) -> bool:
    """Return True if a duty-cycled platform is solid at time t.

    Platforms start visible, stay so for timing.visible seconds, then hide
    for timing.hidden seconds, and repeat.
    """
    if t < 0:
        return True
    period = timing.visible + timing.hidden
    return math.fmod(t, period) < timing.visible


def beam_active(hazard: HazardSpec, t: float) -> bool:
    """Return True if a beam trap is firing at time t.

    A beam starts switched off; it waits start_delay plus one off period,
    then alternates on_duration on and off_duration off.
    """
    first_on = hazard.start_delay + hazard.off_duration
    if t < first_on:
        return False
    period = hazard.on_duration + hazard.off_duration
    return math.fmod(t - first_on, period) < hazard.on_duration


def colour_matches(player_tag: str, platform_tag: str) -> bool:
    """Whether a player wearing player_tag may stand on platform_tag.

    Anything that is not a colour tile is neutral ground.
    """
    if platform_tag not in TILE_TAGS:
        return True
    return player_tag == platform_tag
