"""Data schemas for input/output operations."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from parcel_packer.carriers import get_max_parcel_weight
from parcel_packer.config import Settings
from parcel_packer.metrics import compute_metrics
from parcel_packer.models import PackableItem, Parcel, ParcelPackingConfiguration
from parcel_packer.units import Weight, get_unit_factor


class WeightSchema(BaseModel):
    """Schema for a weight."""
    value: float = Field(ge=0, description="Numeric weight value")
    unit: str = Field(default="kg", description="Weight unit (mg, g, kg, t, oz, lb)")

    @field_validator("unit")
    @classmethod
    def _known_unit(cls, value: str) -> str:
        get_unit_factor(value)
        return value.strip().lower()

    def to_weight(self) -> Weight:
        return Weight.of(self.value, self.unit)

    @classmethod
    def from_weight(cls, weight: Weight) -> WeightSchema:
        return cls(**weight.to_dict())


class ItemSchema(BaseModel):
    """Schema for an item (or a packed fragment of it)."""
    name: str = Field(min_length=1, description="Display name of the item")
    weight: WeightSchema = Field(description="Weight of one unit")
    quantity: int = Field(gt=0, description="Number of units")
    product_number: Optional[str] = None

    def to_item(self) -> PackableItem:
        return PackableItem(
            name=self.name,
            unit_weight=self.weight.to_weight(),
            quantity=self.quantity,
            product_number=self.product_number,
        )

    @classmethod
    def from_item(cls, item: PackableItem) -> ItemSchema:
        return cls(
            name=item.name,
            weight=WeightSchema.from_weight(item.unit_weight),
            quantity=item.quantity,
            product_number=item.product_number,
        )


class PackingRequestSchema(BaseModel):
    """Schema for a packing request."""
    items: List[ItemSchema] = Field(min_length=1, description="List of items to pack")
    max_parcel_weight: Optional[WeightSchema] = Field(None, description="Maximum weight per parcel")
    carrier: Optional[str] = Field(None, description="Carrier preset used when max_parcel_weight is missing")
    filler_weight: Optional[WeightSchema] = Field(None, description="Packaging weight added to every parcel")
    filler_weight_relative: Optional[float] = Field(None, ge=0, description="Packaging weight relative to items")
    customer_reference: Optional[str] = None


class ParcelSchema(BaseModel):
    """Schema for one packed parcel."""
    reference: Optional[str] = None
    items: List[ItemSchema]
    item_weight_kg: float = Field(ge=0)
    filler_weight_kg: float = Field(ge=0)
    total_weight_kg: float = Field(ge=0)


class PackingResultSchema(BaseModel):
    """Schema for a packing result."""
    parcels: List[ParcelSchema] = Field(description="Parcels in the order they were opened")
    num_parcels: int = Field(ge=0, description="Number of parcels used")
    fill_rate: float = Field(ge=0, le=1, description="Item weight relative to the usable parcel capacity")


def build_configuration(request: PackingRequestSchema, settings: Settings) -> ParcelPackingConfiguration:
    """
    Resolve the packing configuration of a request.

    The weight limit comes from `max_parcel_weight`, then `carrier`, then the
    settings; surcharges fall back to the settings when not given.
    """
    defaults = settings.packing_configuration()

    if request.max_parcel_weight is not None:
        max_parcel_weight = request.max_parcel_weight.to_weight()
    elif request.carrier is not None:
        max_parcel_weight = get_max_parcel_weight(request.carrier)
    else:
        max_parcel_weight = defaults.max_parcel_weight

    filler_weight = (
        request.filler_weight.to_weight() if request.filler_weight is not None
        else defaults.filler_weight_per_parcel
    )
    filler_weight_relative = (
        request.filler_weight_relative if request.filler_weight_relative is not None
        else defaults.filler_weight_relative
    )

    return ParcelPackingConfiguration(
        max_parcel_weight=max_parcel_weight,
        filler_weight_per_parcel=filler_weight,
        filler_weight_relative=filler_weight_relative,
    )


def build_parcel(request: PackingRequestSchema) -> Parcel:
    return Parcel(
        items=[item.to_item() for item in request.items],
        customer_reference=request.customer_reference,
    )


def format_result(parcels: list[Parcel], configuration: ParcelPackingConfiguration) -> PackingResultSchema:
    capacity = configuration.item_capacity()
    fill_rate = 0.0
    if capacity is not None:
        _, _, fill_rate = compute_metrics(capacity, [parcel.items for parcel in parcels])

    return PackingResultSchema(
        parcels=[
            ParcelSchema(
                reference=parcel.customer_reference,
                items=[ItemSchema.from_item(item) for item in parcel.items],
                item_weight_kg=float(parcel.item_weight().to_unit("kg")),
                filler_weight_kg=float(parcel.filler_weight.to_unit("kg")),
                total_weight_kg=float(parcel.total_weight().to_unit("kg")),
            )
            for parcel in parcels
        ],
        num_parcels=len(parcels),
        fill_rate=min(fill_rate, 1.0),
    )
