"""
kitbook.scheduler
~~~~~~~~~~~~~~~~~

Equipment reservation scheduler facade: availability queries, all-or-nothing
reservation commands and per-task holder views behind one object.

Basic usage::

    from datetime import date
    from kitbook.catalog import Catalog, EquipmentItem
    from kitbook.ledger import Origin
    from kitbook.scheduler import EquipmentScheduler

    scheduler = EquipmentScheduler(Catalog([EquipmentItem("C1", "Canon R6", "camera")]))
    origin = Origin("T1", "Graduation", "morning")
    scheduler.reserve_task_shift(["C1"], "alice", origin, date(2025, 3, 3), date(2025, 3, 5))
    scheduler.get_holder_view("T1")["alice"].morning

Public API
----------
EquipmentScheduler  The facade.
UsageStatus         Derived available / in_use / retired status of an item.
"""

from kitbook.scheduler.service import EquipmentScheduler, UsageStatus

__all__ = ["EquipmentScheduler", "UsageStatus"]
