from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from kitbook.availability import Clock, utc_now
from kitbook.calendar import ShiftKind
from kitbook.catalog import CatalogSource, EquipmentCategory, EquipmentItem, kit_sort_key
from kitbook.ledger import Origin, Reservation, ReservationLedger


@dataclass
class HolderEquipmentView:
    """What one holder currently carries for a task, split by shift."""

    holder: str
    morning: list[EquipmentItem] = field(default_factory=list)
    afternoon: list[EquipmentItem] = field(default_factory=list)

    def for_shift(self, shift: ShiftKind) -> list[EquipmentItem]:
        return self.morning if ShiftKind(shift) is ShiftKind.MORNING else self.afternoon

    def names_by_category(self, shift: ShiftKind) -> dict[EquipmentCategory, list[str]]:
        grouped: dict[EquipmentCategory, list[str]] = {}
        for item in self.for_shift(shift):
            grouped.setdefault(item.category, []).append(item.name)
        return grouped


class TaskShiftProjection:
    """
    Groups a task's non-ended reservations by holder and shift.  Built fresh
    from a ledger snapshot on every call; callers that cache the result must
    drop it after any coordinator write.
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

    def by_holder_and_shift(self, task: str | Origin) -> dict[str, HolderEquipmentView]:
        task_id = task.task_id if isinstance(task, Origin) else task
        reservations = self._ledger.snapshot().for_task(task_id, self._clock())
        return _group(self._catalog, reservations)

    def export_rows(self, task: str | Origin) -> list[tuple[str, str, str, str]]:
        """Flatten the view into ``(holder, shift, category, name)`` rows."""
        rows: list[tuple[str, str, str, str]] = []
        for holder, view in self.by_holder_and_shift(task).items():
            for shift in ShiftKind:
                for item in view.for_shift(shift):
                    rows.append((holder, shift.value, item.category.value, item.name))
        return rows


def _group(
    catalog: CatalogSource,
    reservations: Iterable[Reservation],
) -> dict[str, HolderEquipmentView]:
    # A multi-day task holds the same item once per day; list it once.
    seen: dict[tuple[str, ShiftKind], dict[str, EquipmentItem]] = {}
    for res in reservations:
        bucket = seen.setdefault((res.holder, res.origin.shift), {})
        if res.item_id not in bucket:
            bucket[res.item_id] = catalog.get(res.item_id)

    views: dict[str, HolderEquipmentView] = {}
    for (holder, shift), items in sorted(seen.items(), key=lambda kv: kv[0][0]):
        view = views.setdefault(holder, HolderEquipmentView(holder))
        view.for_shift(shift).extend(sorted(items.values(), key=kit_sort_key))
    return views
