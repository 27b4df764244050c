"""
kitbook.availability
~~~~~~~~~~~~~~~~~~~~

Free-equipment queries over the catalog and a ledger snapshot.

Basic usage::

    from kitbook.availability import AvailabilityEngine
    from kitbook.catalog import EquipmentCategory

    engine = AvailabilityEngine(catalog, ledger)
    cameras = engine.available(EquipmentCategory.CAMERA, morning)
"""

from kitbook.availability.engine import AvailabilityEngine, Clock, is_free, utc_now

__all__ = ["AvailabilityEngine", "Clock", "is_free", "utc_now"]
