# src/parcel_packer/packing/first_fit.py

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable

from parcel_packer.errors import ItemExceedsCapacity
from parcel_packer.models import PackableItem
from parcel_packer.packing.constraints import WeightConstraint
from parcel_packer.units import Weight

logger = logging.getLogger(__name__)


@dataclass
class Bin:
    """One parcel being filled: fragments in insertion order plus their running weight."""

    items: list[PackableItem] = field(default_factory=list)
    total_weight: Weight = field(default_factory=Weight.zero)

    def add(self, item: PackableItem, quantity: int) -> None:
        self.items.append(item.with_quantity(quantity))
        self.total_weight = self.total_weight + item.unit_weight * quantity


@dataclass
class PendingItem:
    """Work-queue entry: an article and how many of its units still need a parcel."""

    item: PackableItem
    remaining: int


def sort_heaviest_first(items: list[PackableItem]) -> list[PackableItem]:
    # sorted() is stable with reverse=True, equal weights keep their input order
    return sorted(items, key=lambda item: item.unit_weight.grams, reverse=True)


def pack_into_bins(
    items_to_distribute: Iterable[PackableItem],
    bin_capacity: Weight,
) -> list[list[PackableItem]]:
    """
    First-fit decreasing packer that splits item quantities across parcels.
    - Items are cloned on entry; the caller's objects are never modified
    - Heaviest unit weight first, ties keep input order (deterministic)
    - Each item is offered to every open parcel in opening order
    - Leftover units open a new parcel and the same item is retried before the next one
    - Weightless items go completely into the first parcel
    - Raises ItemExceedsCapacity (and returns nothing) if one unit is heavier than bin_capacity
    """
    if bin_capacity <= Weight.zero():
        raise ValueError(f"bin_capacity must be positive, got {bin_capacity}")

    working = [item.model_copy(deep=True) for item in items_to_distribute]
    if not working:
        return []

    constraint = WeightConstraint(bin_capacity)
    queue: deque[PendingItem] = deque(
        PendingItem(item=item, remaining=item.quantity) for item in sort_heaviest_first(working)
    )
    bins: list[Bin] = [Bin()]

    while queue:
        pending = queue.popleft()
        item = pending.item

        if not constraint.admits_unit(item.unit_weight):
            raise ItemExceedsCapacity(item.name, item.unit_weight, bin_capacity)

        for bin_ in bins:
            if pending.remaining == 0:
                break
            fitting = constraint.fitting_units(bin_.total_weight, item.unit_weight, pending.remaining)
            if fitting == 0:
                continue
            bin_.add(item, fitting)
            pending.remaining -= fitting

        if pending.remaining > 0:
            # Retry this item against the fresh parcel before moving to lighter ones
            bins.append(Bin())
            queue.appendleft(pending)
            logger.debug(
                f"opened parcel {len(bins)} for {pending.remaining} remaining unit(s) of {item.name!r}"
            )

    logger.info(
        f"packed {len(working)} item(s) into {len(bins)} parcel(s) of at most {bin_capacity}"
    )
    return [bin_.items for bin_ in bins]
