from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime
from typing import Any, Callable, Collection, Iterable, Sequence

from kitbook.availability import Clock, utc_now
from kitbook.catalog import CatalogSource, EquipmentItem
from kitbook.conflict import first_conflict
from kitbook.errors import ConflictError, InvalidInterval, NotFoundError, RetiredItemError
from kitbook.interval import Interval, coerce_instant
from kitbook.ledger import LedgerSnapshot, Origin, Reservation, ReservationLedger

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def _uuid_hex() -> str:
    return uuid.uuid4().hex


class AllocationCoordinator:
    """
    The single mutation surface of the reservation ledger.

    Every write runs as snapshot -> validate -> commit inside one re-entrant
    lock, and the commit is a single ledger swap: a call either applies its
    whole effect or raises and leaves the ledger untouched.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        ledger: ReservationLedger,
        *,
        clock: Clock = utc_now,
        id_factory: IdFactory = _uuid_hex,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._clock = clock
        self._new_id = id_factory
        self._lock = threading.RLock()

    # ── reserve ──────────────────────────────────────────────────────────

    def reserve(
        self,
        item_ids: Sequence[str],
        holder: str,
        interval: Interval | Any,
        origin: Origin,
        *,
        notes: str | None = None,
    ) -> list[Reservation]:
        """Reserve every item for ``interval``; any conflict rejects the whole batch."""
        return self.reserve_schedule(item_ids, holder, [interval], origin, notes=notes)

    def reserve_schedule(
        self,
        item_ids: Sequence[str],
        holder: str,
        intervals: Iterable[Interval | Any],
        origin: Origin,
        *,
        notes: str | None = None,
    ) -> list[Reservation]:
        """
        Reserve every item for every interval (a task spanning several days).
        One reservation per (interval, item); all or nothing.
        """
        windows = [Interval.coerce(iv) for iv in intervals]
        if not windows:
            raise ValueError("At least one interval is required.")
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            created = self._plan(snapshot, now, item_ids, holder, windows, origin, notes)
            self._ledger.commit(add=created, now=now)
        logger.info(
            "Reserved %d item(s) x %d window(s) for %s on %s/%s",
            len(created) // len(windows), len(windows), holder,
            origin.task_id, origin.shift.value,
        )
        return created

    def replace_kit(
        self,
        holder: str,
        origin: Origin,
        item_ids: Sequence[str],
        interval: Interval | Any,
        *,
        notes: str | None = None,
    ) -> list[Reservation]:
        """Swap what ``holder`` holds for ``origin`` during ``interval`` with a new set of items."""
        return self.replace_schedule(holder, origin, item_ids, [interval], notes=notes)

    def replace_schedule(
        self,
        holder: str,
        origin: Origin,
        item_ids: Sequence[str],
        intervals: Iterable[Interval | Any],
        *,
        notes: str | None = None,
    ) -> list[Reservation]:
        """
        Swap the kit ``holder`` holds for ``origin`` on every given window.

        Only the holder's reservations for ``origin`` that overlap one of the
        windows are released; other days of a multi-day task keep their kit.
        Release and reserve happen in the same critical section, the released
        kit does not block the new one, and on conflict nothing changes.
        """
        windows = [Interval.coerce(iv) for iv in intervals]
        if not windows:
            raise ValueError("At least one interval is required.")
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            current_ids = {
                res.id for res in snapshot.matching(holder, origin, now)
                if any(res.interval.overlaps(window) for window in windows)
            }
            created = self._plan(
                snapshot, now, item_ids, holder, windows, origin, notes, exclude=current_ids
            )
            self._ledger.commit(add=created, remove=current_ids, now=now)
        logger.info(
            "Replaced kit of %s on %s/%s: released %d, reserved %d",
            holder, origin.task_id, origin.shift.value, len(current_ids), len(created),
        )
        return created

    # ── release ──────────────────────────────────────────────────────────

    def release(self, holder: str, origin: Origin) -> int:
        """Remove everything ``holder`` holds for ``origin``.  Returns 0 when nothing matches."""
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            doomed = [res.id for res in snapshot.matching(holder, origin, now)]
            if doomed:
                self._ledger.commit(remove=doomed, now=now)
        if doomed:
            logger.info(
                "Released %d reservation(s) of %s on %s/%s",
                len(doomed), holder, origin.task_id, origin.shift.value,
            )
        return len(doomed)

    def release_task(self, task_id: str) -> int:
        """Remove every non-ended reservation of a task, all holders and shifts."""
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            doomed = [res.id for res in snapshot.for_task(task_id, now)]
            if doomed:
                self._ledger.commit(remove=doomed, now=now)
        if doomed:
            logger.info("Released %d reservation(s) of task %s", len(doomed), task_id)
        return len(doomed)

    def release_reservation(self, reservation_id: str) -> Reservation:
        with self._lock:
            res = self._ledger.snapshot().get(reservation_id)
            self._ledger.commit(remove=[res.id], now=self._clock())
        logger.info("Released reservation %s of %s", res.id, res.holder)
        return res

    def return_early(self, reservation_id: str, at: datetime | str | None = None) -> Reservation:
        """
        Equipment handed back before the window ends: the reservation's end
        moves to ``at`` (default now) and the rest of the window is freed.
        """
        with self._lock:
            now = self._clock()
            res = self._ledger.snapshot().get(reservation_id)
            if res.is_ended(now):
                raise NotFoundError(f"Reservation {reservation_id!r} has already ended.")
            at = now if at is None else coerce_instant(at)
            if not at < res.interval.end:
                raise InvalidInterval(
                    f"Return time {at.isoformat()} is not before the reservation end."
                )
            returned = res.with_interval(res.interval.truncate(at))
            self._ledger.commit(add=[returned], remove=[res.id], now=now)
        logger.info("Reservation %s returned early at %s", res.id, at.isoformat())
        return returned

    # ── transfer ─────────────────────────────────────────────────────────

    def transfer(self, from_holder: str, to_holder: str, origin: Origin) -> list[Reservation]:
        """
        Move everything ``from_holder`` holds for ``origin`` to ``to_holder``,
        keeping item, interval and origin.  Raises NotFoundError if there is
        nothing to move.
        """
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            moving = snapshot.matching(from_holder, origin, now)
            if not moving:
                raise NotFoundError(
                    f"{from_holder} holds nothing for {origin.task_id}/{origin.shift.value}."
                )
            return self._move(now, moving, to_holder)

    def transfer_item(self, reservation_id: str, to_holder: str) -> Reservation:
        """Hand a single reservation to another holder."""
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            res = snapshot.get(reservation_id)
            if res.is_ended(now):
                raise NotFoundError(f"Reservation {reservation_id!r} has already ended.")
            return self._move(now, [res], to_holder)[0]

    def replace_holder(self, task_id: str, from_holder: str, to_holder: str) -> list[Reservation]:
        """
        The task's assignee changed from ``from_holder`` to ``to_holder``:
        hand over their equipment for every shift of the task in one step.
        Call this after the task collaborator has committed the assignee swap.
        """
        with self._lock:
            snapshot = self._ledger.snapshot()
            now = self._clock()
            moving = [res for res in snapshot.for_task(task_id, now) if res.holder == from_holder]
            if not moving:
                raise NotFoundError(f"{from_holder} holds nothing for task {task_id}.")
            return self._move(now, moving, to_holder)

    # ── internals ────────────────────────────────────────────────────────

    def _resolve(self, item_ids: Sequence[str]) -> list[EquipmentItem]:
        unique = list(dict.fromkeys(item_ids))
        if not unique:
            raise ValueError("At least one equipment id is required.")
        items = [self._catalog.get(item_id) for item_id in unique]
        for item in items:
            if not item.active:
                raise RetiredItemError(item)
        return items

    def _plan(
        self,
        snapshot: LedgerSnapshot,
        now: datetime,
        item_ids: Sequence[str],
        holder: str,
        windows: Sequence[Interval],
        origin: Origin,
        notes: str | None,
        exclude: Collection[str] = (),
    ) -> list[Reservation]:
        items = self._resolve(item_ids)
        planned: list[Reservation] = []
        for window in windows:
            for item in items:
                for other in planned:
                    if other.item_id == item.id and other.interval.overlaps(window):
                        raise ConflictError(
                            item,
                            None,
                            f"{item.name!r} is requested twice in one batch: "
                            f"{window.describe()} overlaps {other.interval.describe()}.",
                        )
                clash = first_conflict(window, snapshot.for_item(item.id), now, exclude)
                if clash is not None:
                    logger.info("Rejected %s for %s: held by %s", item.id, holder, clash.holder)
                    raise ConflictError(item, clash)
                planned.append(
                    Reservation(
                        id=self._new_id(),
                        item_id=item.id,
                        holder=holder,
                        interval=window,
                        origin=origin,
                        notes=notes,
                    )
                )
        logger.debug("Validated %d reservation(s) against ledger v%d", len(planned), snapshot.version)
        return planned

    def _move(
        self,
        now: datetime,
        moving: Sequence[Reservation],
        to_holder: str,
    ) -> list[Reservation]:
        if not to_holder:
            raise ValueError("Reservation holder must not be empty.")
        if all(res.holder == to_holder for res in moving):
            return list(moving)
        # Item and interval are kept, so a ledger free of overlaps stays free of them.
        moved = [res.with_holder(to_holder) for res in moving]
        self._ledger.commit(add=moved, remove=[res.id for res in moving], now=now)
        logger.info(
            "Transferred %d reservation(s) from %s to %s",
            len(moved), moving[0].holder, to_holder,
        )
        return moved
