# src/parcel_packer/carriers.py
from __future__ import annotations

from parcel_packer.units import Weight

# Maximum weight of a single parcel per carrier product (kg).
CARRIER_MAX_PARCEL_WEIGHT_KG: dict[str, float] = {
    "DHL":           31.5,
    "DHL_EXPRESS":   70.0,
    "DPD":           31.5,
    "GLS":           40.0,
    "UPS":           70.0,
    "AUSTRIAN_POST": 31.5,
}


def get_max_parcel_weight(carrier: str) -> Weight:
    key = carrier.strip().upper().replace("-", "_").replace(" ", "_")
    if key not in CARRIER_MAX_PARCEL_WEIGHT_KG:
        raise ValueError(f"Unknown carrier '{carrier}'. Valid: {sorted(CARRIER_MAX_PARCEL_WEIGHT_KG.keys())}")
    return Weight.of(CARRIER_MAX_PARCEL_WEIGHT_KG[key], "kg")
