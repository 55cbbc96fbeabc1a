"""Tests for beam trap and swinging obstacle placement."""

import pytest
from pygame.math import Vector3

from errors import MissingPrototype
from hazards import HazardPlacer
from helpers import scene_object, xyz
from models import BEAM, BEAM_OFF_DURATION, BEAM_ON_DURATION, HAMMER_TAG, PINK, SWINGING, PathNode
from scene import PrototypeCatalog
from walkway import analyse_walkway


def hammer_catalog():
    hammer = scene_object(HAMMER_TAG, (9.0, 4.0, 9.0), name="Hammer", forward=(1.0, 0.0, 0.0))
    return PrototypeCatalog({}, hammer=hammer)


class TestBeams:

    def setup_method(self):
        self.issues = []
        self.placer = HazardPlacer(PrototypeCatalog({}), self.issues)
        self.meta = analyse_walkway([Vector3(0, 1, 0), Vector3(0, 1, 3), Vector3(0, 1, 6)])
        self.node = PathNode(PINK, Vector3(2, 1, 10), Vector3(0, 0, 1))

    def test_beam_on_walkway(self):
        beam = self.placer.beam_on_walkway(self.meta, 4.0, 1.7, 1.1, 4.2, 1.5, 1.2)
        assert beam.kind == BEAM
        assert xyz(beam.position) == pytest.approx((1.7, 2.1, 4.0))
        assert xyz(beam.forward) == pytest.approx((0.0, 0.0, 1.0))
        assert beam.length == pytest.approx(4.2)
        assert (beam.on_duration, beam.off_duration, beam.start_delay) == (1.5, 1.2, 0.0)

    def test_beam_defaults(self):
        beam = self.placer.beam_on_walkway(self.meta, 0.0, 0.0, 1.0, 3.0)
        assert beam.on_duration == BEAM_ON_DURATION
        assert beam.off_duration == BEAM_OFF_DURATION

    def test_negative_delay_is_clamped(self):
        beam = self.placer.cross_beam(self.node, 4.0, 1.0, 1.0, 1.0, delay=-2.0)
        assert beam.start_delay == 0.0

    def test_cross_beam_is_centred_on_node(self):
        beam = self.placer.cross_beam(self.node, 4.0, 1.3, 1.4, 1.0, 0.25)
        assert xyz(beam.forward) == pytest.approx((1.0, 0.0, 0.0))
        assert xyz(beam.position) == pytest.approx((0.0, 2.3, 10.0))
        far_end = beam.position + beam.forward * beam.length
        assert xyz(far_end) == pytest.approx((4.0, 2.3, 10.0))
        assert beam.start_delay == pytest.approx(0.25)

    def test_inverted_cross_beam(self):
        beam = self.placer.cross_beam(self.node, 4.0, 1.3, 1.4, 1.0, invert=True)
        assert xyz(beam.forward) == pytest.approx((-1.0, 0.0, 0.0))
        assert xyz(beam.position) == pytest.approx((4.0, 2.3, 10.0))

    def test_along_beam_starts_behind_node(self):
        beam = self.placer.along_beam(self.node, 6.0, 1.5, 1.45, 0.9, 1.2, 0.4)
        assert xyz(beam.position) == pytest.approx((2.0, 2.45, 8.5))
        assert xyz(beam.forward) == pytest.approx((0.0, 0.0, 1.0))
        assert beam.length == pytest.approx(6.0)

    def test_beams_need_no_prototype(self):
        self.placer.beam_on_walkway(self.meta, 1.0, 0.0, 1.0, 2.0)
        assert self.issues == []


class TestHammers:

    def setup_method(self):
        self.issues = []
        self.placer = HazardPlacer(hammer_catalog(), self.issues)
        self.meta = analyse_walkway([Vector3(0, 0, 0), Vector3(0, 0, 3)])

    def test_hammer_on_walkway(self):
        hammer = self.placer.hammer_on_walkway(self.meta, 2.0, 0.9)
        assert hammer.kind == SWINGING
        assert hammer.length is None
        assert xyz(hammer.position) == pytest.approx((0.0, 4.9, 2.0))
        assert xyz(hammer.forward) == pytest.approx((1.0, 0.0, 0.0))
        assert hammer.name == "Hammer_dynamic"

    def test_hammer_near_node(self):
        node = PathNode(PINK, Vector3(0, 2, 10), Vector3(0, 0, 1))
        hammer = self.placer.hammer_near(node, 2.0, 0.3, 0.9, 1.4)
        assert xyz(hammer.position) == pytest.approx((1.8, 3.4, 10.6))
        assert hammer.name == "Hammer_test"

    def test_missing_hammer_is_skipped(self):
        placer = HazardPlacer(PrototypeCatalog({}), self.issues)
        assert placer.hammer_on_walkway(self.meta, 1.0, 1.0) is None
        node = PathNode(PINK, Vector3(0, 0, 0), Vector3(0, 0, 1))
        assert placer.hammer_near(node, 3.0, 0.0, 0.0, 1.0) is None
        assert len(self.issues) == 2
        assert all(isinstance(e, MissingPrototype) for e in self.issues)
