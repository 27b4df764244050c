from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Sequence

from kitbook.allocation import AllocationCoordinator, IdFactory
from kitbook.availability import AvailabilityEngine, Clock, utc_now
from kitbook.calendar import ShiftKind, ShiftSchedule, WorkCalendar
from kitbook.catalog import CatalogSource, EquipmentCategory, EquipmentItem
from kitbook.config import DEFAULT_CONFIG, SchedulerConfig
from kitbook.interval import Interval
from kitbook.ledger import Origin, Reservation, ReservationLedger
from kitbook.projection import HolderEquipmentView, TaskShiftProjection


class UsageStatus(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in_use"
    RETIRED = "retired"


class EquipmentScheduler:
    """
    Boundary object for the task-management collaborator.

    Wires one catalog and one ledger to the availability engine, the
    allocation coordinator and the projection, and adds the shift calendar
    used to expand multi-day tasks.  All writes go through the coordinator.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        *,
        ledger: ReservationLedger | None = None,
        config: SchedulerConfig = DEFAULT_CONFIG,
        clock: Clock = utc_now,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger if ledger is not None else ReservationLedger()
        self._config = config
        self._clock = clock

        coordinator_kwargs: dict[str, Any] = {"clock": clock}
        if id_factory is not None:
            coordinator_kwargs["id_factory"] = id_factory

        self.availability = AvailabilityEngine(catalog, self._ledger, clock)
        self.coordinator = AllocationCoordinator(catalog, self._ledger, **coordinator_kwargs)
        self.projection = TaskShiftProjection(catalog, self._ledger, clock)
        self.calendar = WorkCalendar(
            config.calendar.pattern,
            epoch=config.calendar.epoch,
            horizon=config.calendar.buffer_days,
        )
        self.shifts = ShiftSchedule(config.shifts, config.tzinfo)

    # ── queries ──────────────────────────────────────────────────────────

    def get_availability(
        self,
        category: EquipmentCategory | None,
        interval: Interval | Any,
    ) -> list[EquipmentItem]:
        return self.availability.available(category, interval)

    def get_holder_view(self, task_id: str) -> dict[str, HolderEquipmentView]:
        return self.projection.by_holder_and_shift(task_id)

    def reservations(
        self,
        *,
        item_id: str | None = None,
        holder: str | None = None,
        task_id: str | None = None,
        active: bool | None = None,
        at: datetime | None = None,
    ) -> list[Reservation]:
        """
        Filtered listing by start time.  ``active=True`` keeps reservations
        covering ``at`` (default now), ``active=False`` those already ended.
        """
        at = self._clock() if at is None else at
        out = []
        for res in self._ledger.snapshot():
            if item_id is not None and res.item_id != item_id:
                continue
            if holder is not None and res.holder != holder:
                continue
            if task_id is not None and res.origin.task_id != task_id:
                continue
            if active is True and not res.interval.contains(at):
                continue
            if active is False and not res.is_ended(at):
                continue
            out.append(res)
        return out

    def usage_status(self, item_id: str, at: datetime | None = None) -> UsageStatus:
        item = self._catalog.get(item_id)
        if not item.active:
            return UsageStatus.RETIRED
        at = self._clock() if at is None else at
        if any(res.interval.contains(at) for res in self._ledger.snapshot().for_item(item_id)):
            return UsageStatus.IN_USE
        return UsageStatus.AVAILABLE

    def shift_intervals(self, first_day: date, last_day: date, shift: ShiftKind) -> list[Interval]:
        """One interval per working day of ``[first_day, last_day]`` for ``shift``."""
        days = self.calendar.working_days(first_day, last_day)
        return [window.interval for window in self.shifts.windows(days, [ShiftKind(shift)])]

    # ── commands ─────────────────────────────────────────────────────────

    def reserve(
        self,
        item_ids: Sequence[str],
        holder: str,
        interval: Interval | Any,
        origin: Origin,
        *,
        notes: str | None = None,
    ) -> list[Reservation]:
        return self.coordinator.reserve(item_ids, holder, interval, origin, notes=notes)

    def reserve_task_shift(
        self,
        item_ids: Sequence[str],
        holder: str,
        origin: Origin,
        first_day: date,
        last_day: date,
        *,
        notes: str | None = None,
    ) -> list[Reservation]:
        """Reserve a kit for ``origin.shift`` on every working day of the task."""
        intervals = self.shift_intervals(first_day, last_day, origin.shift)
        if not intervals:
            raise ValueError(
                f"No working days between {first_day.isoformat()} and {last_day.isoformat()}."
            )
        return self.coordinator.reserve_schedule(item_ids, holder, intervals, origin, notes=notes)

    def release(self, holder: str, origin: Origin) -> int:
        return self.coordinator.release(holder, origin)

    def release_task(self, task_id: str) -> int:
        return self.coordinator.release_task(task_id)

    def release_reservation(self, reservation_id: str) -> Reservation:
        return self.coordinator.release_reservation(reservation_id)

    def return_early(self, reservation_id: str, at: datetime | str | None = None) -> Reservation:
        return self.coordinator.return_early(reservation_id, at)

    def replace_kit(
        self,
        holder: str,
        origin: Origin,
        item_ids: Sequence[str],
        interval: Interval | Any,
    ) -> list[Reservation]:
        return self.coordinator.replace_kit(holder, origin, item_ids, interval)

    def replace_task_kit(
        self,
        item_ids: Sequence[str],
        holder: str,
        origin: Origin,
        first_day: date,
        last_day: date,
    ) -> list[Reservation]:
        """Swap the kit for ``origin.shift`` on every working day of ``[first_day, last_day]``."""
        intervals = self.shift_intervals(first_day, last_day, origin.shift)
        if not intervals:
            raise ValueError(
                f"No working days between {first_day.isoformat()} and {last_day.isoformat()}."
            )
        return self.coordinator.replace_schedule(holder, origin, item_ids, intervals)

    def transfer(self, from_holder: str, to_holder: str, origin: Origin) -> list[Reservation]:
        return self.coordinator.transfer(from_holder, to_holder, origin)

    def transfer_item(self, reservation_id: str, to_holder: str) -> Reservation:
        return self.coordinator.transfer_item(reservation_id, to_holder)

    def replace_holder(self, task_id: str, from_holder: str, to_holder: str) -> list[Reservation]:
        return self.coordinator.replace_holder(task_id, from_holder, to_holder)

    @property
    def config(self) -> SchedulerConfig:
        return self._config

    def __repr__(self) -> str:
        return (
            f"EquipmentScheduler(catalog={self._catalog!r}, "
            f"ledger={self._ledger!r}, timezone={self._config.timezone!r})"
        )
