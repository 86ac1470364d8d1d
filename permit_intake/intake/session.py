from dataclasses import replace

from permit_intake.intake.exceptions import ItemNotFoundError
from permit_intake.intake.models import UploadedItem


class IntakeSession:
    """Ordered list of the items a user is working on.

    The list is an immutable tuple replaced wholesale on every change, and
    each update targets exactly one item by id, so interleaved updates of
    different items cannot clobber each other.
    """

    def __init__(self) -> None:
        self._items: tuple[UploadedItem, ...] = ()

    @property
    def items(self) -> tuple[UploadedItem, ...]:
        return self._items

    def add(self, item: UploadedItem) -> None:
        if self.find(item.id) is not None:
            raise ValueError(f"Item {item.id} is already in the session")
        self._items = (*self._items, item)

    def find(self, item_id: str) -> UploadedItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def get(self, item_id: str) -> UploadedItem:
        item = self.find(item_id)
        if item is None:
            raise ItemNotFoundError(f"Item {item_id} not found")
        return item

    def update(self, item_id: str, **changes: object) -> UploadedItem | None:
        """Replace the item with a copy carrying ``changes``.

        Returns the new snapshot, or None when the item was removed in the
        meantime; callers use that to discard stale results.
        """
        current = self.find(item_id)
        if current is None:
            return None
        updated = replace(current, **changes)  # type: ignore[arg-type]
        self._items = tuple(updated if item.id == item_id else item for item in self._items)
        return updated

    def remove(self, item_id: str) -> UploadedItem | None:
        removed = self.find(item_id)
        if removed is not None:
            self._items = tuple(item for item in self._items if item.id != item_id)
        return removed
