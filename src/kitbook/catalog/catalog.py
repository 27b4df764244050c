from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Protocol

from kitbook.errors import NotFoundError


class EquipmentCategory(str, Enum):
    CAMERA = "camera"
    LENS = "lens"
    ADAPTER = "adapter"
    SD_CARD = "sd_card"


# Display order for kits: body first, then optics, then accessories.
CATEGORY_ORDER: tuple[EquipmentCategory, ...] = tuple(EquipmentCategory)


@dataclass(frozen=True, slots=True)
class EquipmentItem:
    id: str
    name: str
    category: EquipmentCategory
    active: bool = True
    serial_number: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Equipment id must not be empty.")
        object.__setattr__(self, "category", EquipmentCategory(self.category))


class CatalogSource(Protocol):
    """What the scheduler needs from the inventory collaborator."""

    def get(self, item_id: str) -> EquipmentItem: ...

    def list_active_items(
        self, category: EquipmentCategory | None = None
    ) -> list[EquipmentItem]: ...


class Catalog:
    """
    In-memory catalog keyed by item id.  Iteration and listings follow
    insertion order, which is the ordering availability results use.
    """

    def __init__(self, items: Iterable[EquipmentItem] = ()) -> None:
        self._items: dict[str, EquipmentItem] = {}
        for item in items:
            self.add(item)

    def add(self, item: EquipmentItem) -> None:
        if item.id in self._items:
            raise ValueError(f"Duplicate equipment id {item.id!r}.")
        self._items[item.id] = item

    def update(self, item: EquipmentItem) -> None:
        """Replace an item's reference data in place, keeping its position."""
        if item.id not in self._items:
            raise NotFoundError(f"Equipment {item.id!r} not found.")
        self._items[item.id] = item

    def retire(self, item_id: str) -> EquipmentItem:
        item = replace(self.get(item_id), active=False)
        self._items[item_id] = item
        return item

    def get(self, item_id: str) -> EquipmentItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise NotFoundError(f"Equipment {item_id!r} not found.") from None

    def list_active_items(
        self, category: EquipmentCategory | None = None
    ) -> list[EquipmentItem]:
        wanted = EquipmentCategory(category) if category is not None else None
        return [
            item for item in self._items.values()
            if item.active and (wanted is None or item.category is wanted)
        ]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[EquipmentItem]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        active = sum(1 for item in self._items.values() if item.active)
        return f"Catalog(items={len(self._items)}, active={active})"


def kit_sort_key(item: EquipmentItem) -> tuple[int, str, str]:
    return (CATEGORY_ORDER.index(item.category), item.name, item.id)
