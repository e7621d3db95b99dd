from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from parcel_packer.units import Weight, to_decimal

# Item capacities are rounded down to this step so filler + items never exceed the limit.
CAPACITY_STEP_G = Decimal("0.001")


class PackableItem(BaseModel):
    """One distinct article (or a fragment of it) to be distributed into parcels."""

    name: str = Field(description="Display label, used in error messages only")
    unit_weight: Weight = Field(description="Weight of a single unit")
    quantity: int = Field(gt=0, description="Number of units")
    product_number: Optional[str] = Field(default=None, description="Product number of the article")

    @field_validator("unit_weight")
    @classmethod
    def _unit_weight_not_negative(cls, value: Weight) -> Weight:
        if value < Weight.zero():
            raise ValueError(f"unit_weight must not be negative, got {value}")
        return value

    def total_weight(self) -> Weight:
        return self.unit_weight * self.quantity

    def with_quantity(self, quantity: int) -> PackableItem:
        """Fragment of this item: same article, `quantity` units."""
        return self.model_copy(update={"quantity": quantity}, deep=True)


class Parcel(BaseModel):
    """A physical shipping parcel with its contents and packaging weight."""

    items: list[PackableItem] = Field(default_factory=list)
    filler_weight: Weight = Field(default_factory=Weight.zero, description="Packaging and filling material")
    weight_overwrite: Optional[Weight] = Field(
        default=None,
        description="Replaces the computed total weight when set")
    customer_reference: Optional[str] = None

    def item_weight(self) -> Weight:
        return Weight.sum(*(item.total_weight() for item in self.items))

    def total_weight(self) -> Weight:
        if self.weight_overwrite is not None:
            return self.weight_overwrite
        return self.filler_weight + self.item_weight()

    def description(self) -> str:
        """Human-readable description of this parcel."""
        return "Parcel with items " + ", ".join(item.name for item in self.items)

    def add_item(self, item: PackableItem) -> None:
        self.items.append(item)

    def copy_without_items(self) -> Parcel:
        return self.model_copy(update={"items": []}, deep=True)

    def recalculate_filler_weight(self, absolute_surcharge: Weight, relative_surcharge: float) -> None:
        self.filler_weight = absolute_surcharge + self.item_weight() * relative_surcharge


class ParcelPackingConfiguration(BaseModel):
    """How a carrier wants parcels packed: weight limit and packaging surcharges."""

    max_parcel_weight: Optional[Weight] = Field(
        default=None,
        description="Maximum total weight per parcel, None means unlimited")
    filler_weight_per_parcel: Weight = Field(
        default_factory=Weight.zero,
        description="Absolute packaging weight added to every parcel")
    filler_weight_relative: float = Field(
        default=0.0,
        ge=0,
        description="Packaging weight as a fraction of the item weight")

    @model_validator(mode="after")
    def _check_limits(self) -> ParcelPackingConfiguration:
        if self.filler_weight_per_parcel < Weight.zero():
            raise ValueError("filler_weight_per_parcel must not be negative")
        if self.max_parcel_weight is None:
            return self
        if self.max_parcel_weight <= Weight.zero():
            raise ValueError(f"max_parcel_weight must be positive, got {self.max_parcel_weight}")
        if self.filler_weight_per_parcel >= self.max_parcel_weight:
            raise ValueError(
                f"filler_weight_per_parcel ({self.filler_weight_per_parcel}) leaves no room for items "
                f"in a parcel of at most {self.max_parcel_weight}"
            )
        return self

    def item_capacity(self) -> Optional[Weight]:
        """Weight available for items in one parcel, or None when parcels are unlimited."""
        if self.max_parcel_weight is None:
            return None
        room = self.max_parcel_weight - self.filler_weight_per_parcel
        grams = room.grams / (1 + to_decimal(self.filler_weight_relative))
        return Weight(grams=grams.quantize(CAPACITY_STEP_G, rounding=ROUND_FLOOR))

    def create_copy(self) -> ParcelPackingConfiguration:
        return self.model_copy(deep=True)
