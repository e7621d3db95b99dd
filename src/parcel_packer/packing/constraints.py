"""Constraints for parcel packing."""

from typing import List

from parcel_packer.models import PackableItem
from parcel_packer.units import Weight


class Constraint:
    """Base class for packing constraints."""

    def check(self, items: List[PackableItem]) -> bool:
        """
        Check if items satisfy the constraint when packed together.

        Args:
            items: Items (fragments) sharing one parcel

        Returns:
            True if constraint is satisfied, False otherwise
        """
        raise NotImplementedError


class WeightConstraint(Constraint):
    """Constraint that checks total weight doesn't exceed maximum weight."""

    def __init__(self, max_weight: Weight):
        self.max_weight = max_weight

    def check(self, items: List[PackableItem]) -> bool:
        total_weight = Weight.sum(*(item.total_weight() for item in items))
        return total_weight <= self.max_weight

    def admits_unit(self, unit_weight: Weight) -> bool:
        """Whether a single unit could ever be packed under this constraint."""
        return unit_weight <= self.max_weight

    def fitting_units(self, current_weight: Weight, unit_weight: Weight, quantity: int) -> int:
        """
        How many of `quantity` units of `unit_weight` can be added on top of `current_weight`.

        Weightless units always fit completely.
        """
        if unit_weight.is_zero():
            return quantity
        headroom = self.max_weight - current_weight
        if headroom < unit_weight:
            return 0
        return min(quantity, headroom // unit_weight)
