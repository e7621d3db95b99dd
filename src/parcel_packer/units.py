"""Unit-aware weight value type."""

from __future__ import annotations

from decimal import Decimal
from functools import total_ordering
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Grams per unit.
WEIGHT_UNITS_G: dict[str, Decimal] = {
    "mg": Decimal("0.001"),
    "g": Decimal("1"),
    "kg": Decimal("1000"),
    "t": Decimal("1000000"),
    "oz": Decimal("28.349523125"),
    "lb": Decimal("453.59237"),
}

Number = Union[int, float, str, Decimal]


def get_unit_factor(unit: str) -> Decimal:
    key = unit.strip().lower()
    if key not in WEIGHT_UNITS_G:
        raise ValueError(f"Unknown weight unit '{unit}'. Valid: {sorted(WEIGHT_UNITS_G.keys())}")
    return WEIGHT_UNITS_G[key]


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal; floats go through their shortest repr so 0.1 stays 0.1."""
    if isinstance(value, bool):
        raise TypeError("Weight values must be numbers, not booleans")
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


@total_ordering
class Weight(BaseModel):
    """
    Immutable weight stored as a fixed-point number of grams.

    Arithmetic is done on Decimal so sums of many item weights compare
    exactly against a parcel limit.
    """

    model_config = ConfigDict(frozen=True)

    grams: Decimal = Field(description="Weight in grams")

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        # Accept {"value": 5, "unit": "kg"} and bare numbers (kg) besides {"grams": ...}
        if isinstance(data, Weight):
            return {"grams": data.grams}
        if isinstance(data, (int, float, str, Decimal)) and not isinstance(data, bool):
            return {"grams": to_decimal(data) * WEIGHT_UNITS_G["kg"]}
        if isinstance(data, Mapping) and "value" in data:
            unit = data.get("unit", "kg")
            return {"grams": to_decimal(data["value"]) * get_unit_factor(unit)}
        return data

    @classmethod
    def of(cls, value: Number, unit: str = "kg") -> Weight:
        return cls(grams=to_decimal(value) * get_unit_factor(unit))

    @classmethod
    def zero(cls) -> Weight:
        return cls(grams=Decimal(0))

    @classmethod
    def sum(cls, *weights: Weight) -> Weight:
        total = Decimal(0)
        for weight in weights:
            total += weight.grams
        return cls(grams=total)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Weight:
        return cls.model_validate(dict(data))

    def to_dict(self) -> dict[str, Any]:
        return {"value": float(self.to_unit("kg")), "unit": "kg"}

    def to_unit(self, unit: str) -> Decimal:
        return self.grams / get_unit_factor(unit)

    def is_zero(self) -> bool:
        return self.grams == 0

    def __add__(self, other: Weight) -> Weight:
        if not isinstance(other, Weight):
            return NotImplemented
        return Weight(grams=self.grams + other.grams)

    def __sub__(self, other: Weight) -> Weight:
        if not isinstance(other, Weight):
            return NotImplemented
        return Weight(grams=self.grams - other.grams)

    def __mul__(self, scalar: Number) -> Weight:
        if isinstance(scalar, Weight):
            return NotImplemented
        return Weight(grams=self.grams * to_decimal(scalar))

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Weight, Number]) -> Union[Decimal, Weight]:
        """Weight / Weight is a dimensionless ratio, Weight / number is a Weight."""
        if isinstance(other, Weight):
            if other.is_zero():
                raise ZeroDivisionError("division by a zero weight")
            return self.grams / other.grams
        divisor = to_decimal(other)
        if divisor == 0:
            raise ZeroDivisionError("division of a weight by zero")
        return Weight(grams=self.grams / divisor)

    def __floordiv__(self, other: Weight) -> int:
        """Number of whole `other` units that fit into this weight."""
        if not isinstance(other, Weight):
            return NotImplemented
        if other.is_zero():
            raise ZeroDivisionError("division by a zero weight")
        return int(self.grams // other.grams)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Weight):
            return NotImplemented
        return self.grams == other.grams

    def __lt__(self, other: Weight) -> bool:
        if not isinstance(other, Weight):
            return NotImplemented
        return self.grams < other.grams

    def __hash__(self) -> int:
        return hash(self.grams)

    def __str__(self) -> str:
        kg = self.to_unit("kg").normalize()
        return f"{kg:f} kg"

    def __repr__(self) -> str:
        return f"Weight({str(self)!r})"
