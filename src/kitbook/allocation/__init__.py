"""
kitbook.allocation
~~~~~~~~~~~~~~~~~~

All-or-nothing reservation writes: reserve, release, transfer and their
compositions.  ``AllocationCoordinator`` serializes writers behind one lock
and re-validates availability at commit time.

Basic usage::

    from kitbook.allocation import AllocationCoordinator
    from kitbook.ledger import Origin, ReservationLedger

    coordinator = AllocationCoordinator(catalog, ReservationLedger())
    origin = Origin("T1", "Press conference", "morning")
    coordinator.reserve(["C1", "L1"], "alice", morning, origin)
    coordinator.transfer("alice", "carol", origin)
    coordinator.release("carol", origin)
"""

from kitbook.allocation.coordinator import AllocationCoordinator, IdFactory

__all__ = ["AllocationCoordinator", "IdFactory"]
