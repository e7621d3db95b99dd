from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from parcel_packer.config import configure_logging, load_settings
from parcel_packer.io.schemas import (
    PackingRequestSchema,
    WeightSchema,
    build_configuration,
    build_parcel,
    format_result,
)
from parcel_packer.packing.multi_parcel import ParcelPacker

logger = logging.getLogger(__name__)


def load_input(path: Path) -> PackingRequestSchema:
    data = json.loads(path.read_text(encoding="utf-8"))
    return PackingRequestSchema.model_validate(data)


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"writing plan to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Split shipment items into weight-limited parcels")
    parser.add_argument("--input", required=True, help="Input shipment JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--carrier",
        help="Carrier preset for the maximum parcel weight (overrides the input file)",
    )
    parser.add_argument(
        "--max-weight",
        type=float,
        help="Maximum parcel weight in kg (overrides --carrier and the input file)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings()
    configure_logging(settings)

    try:
        request = load_input(Path(args.input))
        if args.max_weight is not None:
            request = request.model_copy(update={"max_parcel_weight": WeightSchema(value=args.max_weight)})
        elif args.carrier:
            request = request.model_copy(update={"max_parcel_weight": None, "carrier": args.carrier})

        configuration = build_configuration(request, settings)
        parcels = ParcelPacker().repack_parcel(build_parcel(request), configuration)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = format_result(parcels, configuration)
    write_plan(result.model_dump(), args.output)

    print(f"Packed {sum(item.quantity for item in request.items)} unit(s) into {result.num_parcels} parcel(s)")
    for i, parcel in enumerate(result.parcels, start=1):
        contents = ", ".join(f"{item.quantity}x {item.name}" for item in parcel.items)
        print(f"  #{i}: {parcel.total_weight_kg:.3f} kg - {contents}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
