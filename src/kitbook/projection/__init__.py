"""
kitbook.projection
~~~~~~~~~~~~~~~~~~

Per-task, per-holder, per-shift view of held equipment, derived from the
ledger on demand and never stored.

Basic usage::

    from kitbook.projection import TaskShiftProjection

    view = TaskShiftProjection(catalog, ledger).by_holder_and_shift("T1")
    view["alice"].morning        # [EquipmentItem(...), ...]
"""

from kitbook.projection.shifts import HolderEquipmentView, TaskShiftProjection

__all__ = ["HolderEquipmentView", "TaskShiftProjection"]
