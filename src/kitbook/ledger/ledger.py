from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from kitbook.errors import ConflictError, NotFoundError
from kitbook.ledger.records import Origin, Reservation


def _by_start(reservation: Reservation) -> tuple[datetime, str]:
    return (reservation.interval.start, reservation.id)


def _check_no_overlap(
    item_id: str,
    reservations: tuple[Reservation, ...],
    now: datetime | None,
) -> None:
    # Sweep in start order, tracking the live reservation that ends last.
    latest: Reservation | None = None
    for res in reservations:
        if now is not None and res.is_ended(now):
            continue
        if latest is not None and latest.interval.overlaps(res.interval):
            raise ConflictError(
                item_id,
                latest,
                f"Item {item_id!r}: reservation {res.id!r} overlaps {latest.id!r} "
                f"({latest.holder} {latest.interval.describe()}).",
            )
        if latest is None or res.interval.end > latest.interval.end:
            latest = res


class LedgerSnapshot:
    """
    Immutable view of the ledger at one commit.  Every read in the scheduler
    goes through a snapshot, so a reader never sees a batch half-applied.

    Construction refuses two overlapping reservations of the same item
    (ConflictError).  With ``now`` given, reservations ended by then are left
    out of that check; without it every pair is checked.
    """

    __slots__ = ("_by_id", "_by_item", "_version")

    def __init__(
        self,
        reservations: Iterable[Reservation] = (),
        version: int = 0,
        now: datetime | None = None,
    ) -> None:
        by_id: dict[str, Reservation] = {}
        by_item: dict[str, list[Reservation]] = {}
        for res in reservations:
            if res.id in by_id:
                raise ValueError(f"Duplicate reservation id {res.id!r}.")
            by_id[res.id] = res
            by_item.setdefault(res.item_id, []).append(res)
        self._by_id: Mapping[str, Reservation] = MappingProxyType(by_id)
        sorted_by_item = {item: tuple(sorted(rs, key=_by_start)) for item, rs in by_item.items()}
        for item, rs in sorted_by_item.items():
            _check_no_overlap(item, rs, now)
        self._by_item: Mapping[str, tuple[Reservation, ...]] = MappingProxyType(sorted_by_item)
        self._version = version

    @property
    def version(self) -> int:
        return self._version

    def get(self, reservation_id: str) -> Reservation:
        try:
            return self._by_id[reservation_id]
        except KeyError:
            raise NotFoundError(f"Reservation {reservation_id!r} not found.") from None

    def __contains__(self, reservation_id: object) -> bool:
        return reservation_id in self._by_id

    def __iter__(self) -> Iterator[Reservation]:
        return iter(sorted(self._by_id.values(), key=_by_start))

    def __len__(self) -> int:
        return len(self._by_id)

    def for_item(self, item_id: str) -> tuple[Reservation, ...]:
        """Every reservation of an item, ended ones included, by start time."""
        return self._by_item.get(item_id, ())

    def active(self, now: datetime) -> list[Reservation]:
        return [res for res in self if not res.is_ended(now)]

    def active_for_item(self, item_id: str, now: datetime) -> list[Reservation]:
        return [res for res in self.for_item(item_id) if not res.is_ended(now)]

    def matching(self, holder: str, origin: Origin, now: datetime) -> list[Reservation]:
        return [res for res in self.active(now) if res.held_by(holder, origin)]

    def for_task(self, task_id: str, now: datetime) -> list[Reservation]:
        return [res for res in self.active(now) if res.origin.task_id == task_id]

    def apply(
        self,
        add: Iterable[Reservation] = (),
        remove: Iterable[str] = (),
        now: datetime | None = None,
    ) -> LedgerSnapshot:
        """Return the snapshot that results from removing then adding; see ``__init__`` for ``now``."""
        doomed = set(remove)
        missing = doomed - set(self._by_id)
        if missing:
            raise NotFoundError(f"Reservation(s) not found: {', '.join(sorted(missing))}.")
        kept = [res for rid, res in self._by_id.items() if rid not in doomed]
        return LedgerSnapshot([*kept, *add], version=self._version + 1, now=now)

    def __repr__(self) -> str:
        return f"LedgerSnapshot(version={self._version}, reservations={len(self)})"


class ReservationLedger:
    """
    Authoritative store of reservations.

    The ledger is copy-on-write: ``commit`` builds a complete new snapshot
    and publishes it with a single reference assignment.  Readers call
    ``snapshot()`` without locking.  Writers must be serialized by the
    caller; the AllocationCoordinator is the only writer.

    A commit that would leave two live reservations of one item overlapping
    raises ConflictError and publishes nothing.  Loading history that
    contains ended overlaps needs ``now``.
    """

    def __init__(
        self,
        reservations: Iterable[Reservation] = (),
        now: datetime | None = None,
    ) -> None:
        self._snapshot = LedgerSnapshot(reservations, now=now)

    def snapshot(self) -> LedgerSnapshot:
        return self._snapshot

    def commit(
        self,
        add: Iterable[Reservation] = (),
        remove: Iterable[str] = (),
        now: datetime | None = None,
    ) -> LedgerSnapshot:
        snapshot = self._snapshot.apply(add=add, remove=remove, now=now)
        self._snapshot = snapshot
        return snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    def __repr__(self) -> str:
        return f"ReservationLedger({self._snapshot!r})"
