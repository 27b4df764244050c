"""
kitbook.ledger
~~~~~~~~~~~~~~

The reservation ledger: (item, holder, interval, origin) records owned by the
scheduler.  Reads go through immutable ``LedgerSnapshot`` objects; the only
writer is the AllocationCoordinator, which validates before it commits.

Basic usage::

    from kitbook.ledger import ReservationLedger

    ledger = ReservationLedger()
    snap = ledger.snapshot()
    snap.matching("alice", origin, now)
"""

from kitbook.ledger.ledger import LedgerSnapshot, ReservationLedger
from kitbook.ledger.records import Origin, Reservation

__all__ = [
    "LedgerSnapshot",
    "Origin",
    "Reservation",
    "ReservationLedger",
]
