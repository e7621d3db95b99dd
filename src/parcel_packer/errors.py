"""Errors raised while distributing items into parcels."""

from __future__ import annotations

from parcel_packer.units import Weight


class PackingError(ValueError):
    """Base class for packing failures the caller can act on."""


class ItemExceedsCapacity(PackingError):
    """A single unit of an item is heavier than the parcel capacity, so it can never be packed."""

    def __init__(self, item_name: str, unit_weight: Weight, capacity: Weight):
        self.item_name = item_name
        self.unit_weight = unit_weight
        self.capacity = capacity
        super().__init__(
            f'item "{item_name}" (weight {unit_weight}) is heavier than the maximum '
            f"configured parcel capacity of {capacity}"
        )

    def to_dict(self) -> dict:
        return {
            "error": "ITEM_EXCEEDS_CAPACITY",
            "item": self.item_name,
            "unit_weight": self.unit_weight.to_dict(),
            "capacity": self.capacity.to_dict(),
            "message": str(self),
        }
