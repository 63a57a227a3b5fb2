"""
Tests for motion updates and bounding-box collisions.
"""

import pytest

from packet_router.router_core.config_loader import load_config
from packet_router.router_core.entity_catalog import EntityCatalog, EntityKind
from packet_router.router_core.entities import EntityArena, Rect, Router
from packet_router.router_core.motion import MotionUpdater
from packet_router.router_core.collision import CollisionDetector, rects_overlap


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catalog(config):
    return EntityCatalog(config)


@pytest.fixture
def packets(catalog):
    return EntityArena(catalog.packet)


@pytest.fixture
def viruses(catalog):
    return EntityArena(catalog.virus)


@pytest.fixture
def motion():
    return MotionUpdater(playfield_height=600.0)


@pytest.fixture
def router():
    # 60x20 router centred in a 500-wide playfield, top at y=570
    r = Router(x=0.0, y=570.0, width=60, height=20, playfield_width=500.0)
    r.center()
    return r


class TestMotion:
    """Test per-frame vertical motion."""

    def test_moves_by_speed(self, motion, packets):
        """Each step adds speed to y."""
        p = packets.spawn(x=10.0, y=-40.0, speed=4)
        motion.step_arena(packets)
        assert p.y == -36.0
        motion.step_arena(packets)
        assert p.y == -32.0

    def test_exactly_at_bottom_survives(self, motion, packets):
        """An entity landing exactly on the playfield height is kept."""
        p = packets.spawn(x=10.0, y=596.0, speed=4)
        removed = motion.step_arena(packets)

        assert removed == []
        assert p.y == 600.0
        assert p.uid in packets

    def test_past_bottom_removed(self, motion, packets):
        """An entity past the playfield height is removed the same step."""
        p = packets.spawn(x=10.0, y=598.0, speed=4)
        removed = motion.step_arena(packets)

        assert removed == [p]
        assert len(packets) == 0

    def test_consecutive_removals_not_skipped(self, motion, packets):
        """Several adjacent entities leaving together are all removed and the rest all move."""
        leaving = [packets.spawn(x=float(i), y=599.0, speed=5) for i in range(3)]
        staying = packets.spawn(x=100.0, y=0.0, speed=5)
        also_leaving = packets.spawn(x=200.0, y=599.0, speed=5)

        removed = motion.step_arena(packets)

        assert removed == leaving + [also_leaving]
        assert list(packets) == [staying]
        assert staying.y == 5.0

    def test_step_all_arenas(self, motion, packets, viruses):
        """step() advances every arena."""
        p = packets.spawn(x=0.0, y=0.0, speed=3)
        v = viruses.spawn(x=0.0, y=0.0, speed=4)
        motion.step([packets, viruses])
        assert (p.y, v.y) == (3.0, 4.0)

    def test_never_below_floor(self, motion, packets):
        """No live entity is ever below the playfield height."""
        for i in range(5):
            packets.spawn(x=0.0, y=-40.0 + i * 7, speed=3 + i)
        for _ in range(300):
            motion.step_arena(packets)
            assert all(p.y <= motion.playfield_height for p in packets)
        assert len(packets) == 0


class TestRectOverlap:
    """Test the AABB predicate."""

    def test_separate(self):
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(20, 0, 30, 10))
        assert not rects_overlap(Rect(0, 0, 10, 10), Rect(0, 20, 10, 30))

    def test_overlapping(self):
        assert rects_overlap(Rect(0, 0, 10, 10), Rect(5, 5, 15, 15))

    def test_contained(self):
        assert rects_overlap(Rect(0, 0, 100, 100), Rect(40, 40, 60, 60))

    def test_touching_edges_overlap(self):
        """Shared edges count as a collision."""
        assert rects_overlap(Rect(0, 0, 10, 10), Rect(10, 0, 20, 10))
        assert rects_overlap(Rect(0, 0, 10, 10), Rect(0, 10, 10, 20))

    def test_symmetric(self):
        a, b = Rect(0, 0, 10, 10), Rect(9, 9, 30, 30)
        assert rects_overlap(a, b) == rects_overlap(b, a)

    def test_from_size(self):
        r = Rect.from_size(5, 6, 40, 20)
        assert (r.left, r.top, r.right, r.bottom) == (5, 6, 45, 26)
        assert (r.width, r.height) == (40, 20)


class TestCollisionDetector:
    """Test router vs entity collisions."""

    def test_caught_packets_removed(self, router, packets, viruses):
        """Overlapping packets are removed and reported in spawn order."""
        miss = packets.spawn(x=0.0, y=570.0, speed=3)
        hit1 = packets.spawn(x=router.x, y=router.y - 30, speed=3)
        hit2 = packets.spawn(x=router.x + 30, y=router.y, speed=3)

        report = CollisionDetector().check(router, packets, viruses)

        assert report.caught == [hit1, hit2]
        assert report.caught_count == 2
        assert list(packets) == [miss]
        assert not report.hit

    def test_virus_hit_reported_not_removed(self, router, packets, viruses):
        """A touching virus is reported and stays in its arena."""
        v = viruses.spawn(x=router.x - 40, y=router.y, speed=4)

        report = CollisionDetector().check(router, packets, viruses)

        assert report.hit
        assert report.hits == [v]
        assert v.uid in viruses

    def test_packet_and_virus_same_frame(self, router, packets, viruses):
        """Catching and dying in one pass are both reported."""
        packets.spawn(x=router.x, y=router.y, speed=3)
        viruses.spawn(x=router.x + 20, y=router.y, speed=4)

        report = CollisionDetector().check(router, packets, viruses)

        assert report.caught_count == 1
        assert report.hit

    def test_entity_above_router_misses(self, router, packets, viruses):
        """An entity ending one pixel above the router does not collide."""
        packets.spawn(x=router.x, y=router.y - 41, speed=3)
        viruses.spawn(x=router.x, y=router.y - 41, speed=4)

        report = CollisionDetector().check(router, packets, viruses)

        assert report.caught == []
        assert not report.hit
