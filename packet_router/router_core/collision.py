"""
Collision Detector
==================

Axis-aligned bounding-box tests between the router and falling entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from packet_router.router_core.entities import EntityArena, FallingEntity, Rect, Router


def rects_overlap(a: Rect, b: Rect) -> bool:
    """
    True if two rectangles overlap. Touching edges count as overlap.
    """
    return not (
        a.top > b.bottom or
        a.bottom < b.top or
        a.right < b.left or
        a.left > b.right
    )


@dataclass
class CollisionReport:
    """Result of one frame's collision pass."""
    caught: List[FallingEntity] = field(default_factory=list)
    hits: List[FallingEntity] = field(default_factory=list)

    @property
    def hit(self) -> bool:
        """True if any virus touched the router."""
        return len(self.hits) > 0

    @property
    def caught_count(self) -> int:
        return len(self.caught)


class CollisionDetector:
    """
    Tests the router against packets and viruses.

    Caught packets are removed from their arena here; viruses are left in
    place since touching one ends the game.
    """

    def check_packets(self, router: Router, packets: EntityArena) -> List[FallingEntity]:
        """
        Remove and return every packet overlapping the router.

        Args:
            router: The router.
            packets: Packet arena.

        Returns:
            Caught packets in spawn order.
        """
        router_rect = router.rect
        caught = []
        for packet in packets.snapshot():
            if rects_overlap(packet.rect, router_rect):
                packets.remove(packet.uid)
                caught.append(packet)
        return caught

    def check_viruses(self, router: Router, viruses: EntityArena) -> List[FallingEntity]:
        """Return every virus overlapping the router."""
        router_rect = router.rect
        return [v for v in viruses.snapshot() if rects_overlap(v.rect, router_rect)]

    def check(
        self,
        router: Router,
        packets: EntityArena,
        viruses: EntityArena
    ) -> CollisionReport:
        """Run both passes, packets first."""
        return CollisionReport(
            caught=self.check_packets(router, packets),
            hits=self.check_viruses(router, viruses)
        )
