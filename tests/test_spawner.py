"""
Tests for entity spawning and the entity arena.
"""

import pytest

from packet_router.router_core.config_loader import load_config
from packet_router.router_core.entity_catalog import EntityCatalog, EntityKind
from packet_router.router_core.entities import EntityArena
from packet_router.router_core.spawner import EntitySpawner


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


class TestEntitySpawner:
    """Test spawn placement, speed and caps."""

    def test_spawn_position(self, config, packets):
        """Entities appear just above the playfield inside its width."""
        spawner = EntitySpawner(config, seed=42)
        for _ in range(5):
            entity = spawner.spawn(packets, level=1)
            assert entity is not None
            assert entity.y == -40.0
            assert 0.0 <= entity.x <= config.playfield.width - 40

    def test_speed_is_base_plus_level(self, config, packets, viruses):
        """Initial speed is the kind's base speed plus the current level."""
        spawner = EntitySpawner(config, seed=1)
        assert spawner.spawn(packets, level=1).speed == 4
        assert spawner.spawn(viruses, level=1).speed == 5
        assert spawner.spawn(packets, level=3).speed == 6
        assert spawner.spawn(viruses, level=7).speed == 11

    def test_cap(self, config, packets):
        """No spawn once the arena holds max_live entities."""
        spawner = EntitySpawner(config, seed=42)
        for _ in range(5):
            assert spawner.spawn(packets, level=1) is not None

        assert spawner.spawn(packets, level=1) is None
        assert len(packets) == 5
        assert spawner.spawned == 5

    def test_spawn_resumes_below_cap(self, config, packets):
        """Freeing a slot allows the next spawn."""
        spawner = EntitySpawner(config, seed=42)
        entities = [spawner.spawn(packets, level=1) for _ in range(5)]
        packets.remove(entities[2].uid)

        assert spawner.spawn(packets, level=1) is not None
        assert len(packets) == 5

    def test_kinds_independent(self, config, packets, viruses):
        """A full packet arena does not block viruses."""
        spawner = EntitySpawner(config, seed=42)
        for _ in range(6):
            spawner.spawn(packets, level=1)

        assert spawner.spawn(viruses, level=1) is not None

    def test_deterministic_with_seed(self, config, catalog):
        """Same seed gives the same positions."""
        xs = []
        for _ in range(2):
            arena = EntityArena(catalog.packet)
            spawner = EntitySpawner(config, seed=7)
            xs.append([spawner.spawn(arena, 1).x for _ in range(5)])

        assert xs[0] == xs[1]

    def test_reset_restores_sequence(self, config, catalog):
        """Reset with the same seed replays positions."""
        spawner = EntitySpawner(config, seed=7)
        first = [spawner.random_x(40) for _ in range(5)]
        spawner.reset(seed=7)
        second = [spawner.random_x(40) for _ in range(5)]

        assert first == second
        assert spawner.spawned == 0


class TestEntityArena:
    """Test the insertion-ordered arena."""

    def test_insertion_order(self, packets):
        """Iteration follows spawn order, also after removals."""
        a = packets.spawn(0.0, 0.0, 3)
        b = packets.spawn(0.0, 0.0, 3)
        c = packets.spawn(0.0, 0.0, 3)
        packets.remove(b.uid)
        d = packets.spawn(0.0, 0.0, 3)

        assert list(packets) == [a, c, d]

    def test_unique_uids(self, packets):
        uids = [packets.spawn(0.0, 0.0, 3).uid for _ in range(4)]
        assert len(set(uids)) == 4

    def test_remove_missing(self, packets):
        """Removing an unknown uid is a no-op."""
        assert packets.remove(99) is None

    def test_bump_and_reset_speeds(self, packets):
        """Speed bumps apply to live entities, reset returns to base speed."""
        a = packets.spawn(0.0, 0.0, 4)
        b = packets.spawn(0.0, 0.0, 6)
        packets.bump_speeds()
        assert (a.speed, b.speed) == (5, 7)

        packets.reset_speeds()
        assert (a.speed, b.speed) == (3, 3)

    def test_clear(self, packets):
        packets.spawn(0.0, 0.0, 3)
        packets.clear()
        assert len(packets) == 0

    def test_kind(self, packets, viruses):
        assert packets.kind is EntityKind.PACKET
        assert viruses.kind is EntityKind.VIRUS
        assert packets.spawn(0.0, 0.0, 3).kind is EntityKind.PACKET
