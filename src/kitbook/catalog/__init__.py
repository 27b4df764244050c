"""
kitbook.catalog
~~~~~~~~~~~~~~~

Equipment reference data.  The inventory collaborator owns the items; the
scheduler only reads them through the ``CatalogSource`` protocol.  ``Catalog``
is the in-memory implementation used by the facade and the tests.
"""

from kitbook.catalog.catalog import (
    CATEGORY_ORDER,
    Catalog,
    CatalogSource,
    EquipmentCategory,
    EquipmentItem,
    kit_sort_key,
)

__all__ = [
    "CATEGORY_ORDER",
    "Catalog",
    "CatalogSource",
    "EquipmentCategory",
    "EquipmentItem",
    "kit_sort_key",
]
