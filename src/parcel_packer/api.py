"""FastAPI endpoint for the parcel packer."""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Response

from parcel_packer.carriers import CARRIER_MAX_PARCEL_WEIGHT_KG
from parcel_packer.config import Settings, configure_logging, load_settings
from parcel_packer.errors import ItemExceedsCapacity
from parcel_packer.io.schemas import (
    PackingRequestSchema,
    PackingResultSchema,
    build_configuration,
    build_parcel,
    format_result,
)
from parcel_packer.packing.multi_parcel import ParcelPacker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(load_settings())
    yield


# FastAPI app instance (exactly one)
app = FastAPI(
    title="Parcel Packer API",
    description="Splits shipment items into weight-limited parcels",
    lifespan=lifespan,
)


def get_settings() -> Settings:
    return load_settings()


def get_packer() -> ParcelPacker:
    return ParcelPacker()


@app.post("/pack", response_model=PackingResultSchema)
async def pack(
    request: PackingRequestSchema,
    settings: Settings = Depends(get_settings),
    packer: ParcelPacker = Depends(get_packer),
) -> Any:
    """
    Distribute the requested items into parcels.

    Input (request body):
        {
            "items": [
                { "name": "Cast iron pan", "weight": { "value": 2.4, "unit": "kg" }, "quantity": 3 }
            ],
            "carrier": "DHL"
        }

    Returns:
        Parcels in the order they were opened, with their contents and weights
    """
    try:
        configuration = build_configuration(request, settings)
        parcels = packer.repack_parcel(build_parcel(request), configuration)
        result = format_result(parcels, configuration)

        logger.info(
            f"items={len(request.items)}, parcels={result.num_parcels}, "
            f"max_parcel_weight={configuration.max_parcel_weight}"
        )
        return result

    except ItemExceedsCapacity as e:
        logger.info(f"rejected packing request: {e}")
        return Response(
            content=json.dumps(e.to_dict()),
            status_code=422,
            media_type="application/json",
        )
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"ERROR in /pack endpoint: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/carriers")
async def carriers() -> dict[str, Any]:
    """Maximum parcel weight per carrier preset, in kg."""
    return {"max_parcel_weight_kg": dict(CARRIER_MAX_PARCEL_WEIGHT_KG)}


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"ok": True}
