from __future__ import annotations

import logging

from parcel_packer.models import Parcel, ParcelPackingConfiguration
from parcel_packer.packing.first_fit import pack_into_bins

logger = logging.getLogger(__name__)


class ParcelPacker:
    """Splits one parcel into as many parcels as the packing configuration requires."""

    def repack_parcel(self, parcel: Parcel, configuration: ParcelPackingConfiguration) -> list[Parcel]:
        """
        Repack the items of `parcel` into parcels that respect `configuration`.

        Returns:
          - one parcel per group found by the first-fit decreasing packer,
            each a copy of `parcel` (reference, overwrite, filler) with its own items
          - a single parcel with all items when the configuration has no weight limit
            or the parcel is empty

        Every returned parcel gets its filler weight recalculated from the
        configuration's surcharges. Raises ItemExceedsCapacity when an item
        cannot fit into any parcel.
        """
        capacity = configuration.item_capacity()
        if capacity is None or not parcel.items:
            groups = [[item.model_copy(deep=True) for item in parcel.items]]
        else:
            groups = pack_into_bins(parcel.items, capacity)

        parcels: list[Parcel] = []
        for group in groups:
            repacked = parcel.copy_without_items()
            for item in group:
                repacked.add_item(item)
            repacked.recalculate_filler_weight(
                configuration.filler_weight_per_parcel,
                configuration.filler_weight_relative,
            )
            parcels.append(repacked)

        if len(parcels) > 1:
            for i, repacked in enumerate(parcels):
                # The overwrite described the whole shipment, not a part of it
                repacked.weight_overwrite = None
                if repacked.customer_reference is not None:
                    repacked.customer_reference = f"{repacked.customer_reference}-{i + 1}"
            logger.info(f"split {parcel.description()} into {len(parcels)} parcels")

        return parcels
