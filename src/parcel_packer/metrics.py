from __future__ import annotations

from typing import Sequence

from parcel_packer.models import PackableItem
from parcel_packer.units import Weight


def parcel_weight(items: Sequence[PackableItem]) -> Weight:
    return Weight.sum(*(item.total_weight() for item in items))


def compute_metrics(capacity: Weight, parcels: Sequence[Sequence[PackableItem]]) -> tuple[Weight, Weight, float]:
    used_weight = Weight.sum(*(parcel_weight(items) for items in parcels))
    available_weight = capacity * len(parcels)
    fill_rate = 0.0 if available_weight.is_zero() else float(used_weight / available_weight)
    return used_weight, available_weight, fill_rate
