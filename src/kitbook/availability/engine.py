from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Collection

from kitbook.catalog import CatalogSource, EquipmentCategory, EquipmentItem
from kitbook.conflict import first_conflict
from kitbook.interval import Interval
from kitbook.ledger import LedgerSnapshot, ReservationLedger

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AvailabilityEngine:
    """
    Read-only answer to "which items of this category are free then?".

    Results follow catalog order.  An empty list means nothing is free; it
    is never signalled with an exception.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        ledger: ReservationLedger,
        clock: Clock = utc_now,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._clock = clock

    def available(
        self,
        category: EquipmentCategory | None,
        interval: Interval | Any,
        exclude_reservation_id: str | None = None,
    ) -> list[EquipmentItem]:
        interval = Interval.coerce(interval)
        snapshot = self._ledger.snapshot()
        now = self._clock()
        exclude = (exclude_reservation_id,) if exclude_reservation_id else ()
        return [
            item for item in self._catalog.list_active_items(category)
            if is_free(snapshot, item.id, interval, now, exclude)
        ]

    def is_available(
        self,
        item_id: str,
        interval: Interval | Any,
        exclude_reservation_id: str | None = None,
    ) -> bool:
        interval = Interval.coerce(interval)
        item = self._catalog.get(item_id)
        if not item.active:
            return False
        exclude = (exclude_reservation_id,) if exclude_reservation_id else ()
        return is_free(self._ledger.snapshot(), item.id, interval, self._clock(), exclude)


def is_free(
    snapshot: LedgerSnapshot,
    item_id: str,
    interval: Interval,
    now: datetime,
    exclude: Collection[str] = (),
) -> bool:
    return first_conflict(interval, snapshot.for_item(item_id), now, exclude) is None
