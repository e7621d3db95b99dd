from __future__ import annotations

import json
from pathlib import Path

import pytest

from parcel_packer.cli import main
from parcel_packer.config import ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in Settings.model_fields:
        monkeypatch.delenv(ENV_PREFIX + name.upper(), raising=False)


def write_shipment(tmp_path: Path, shipment: dict) -> Path:
    path = tmp_path / "shipment.json"
    path.write_text(json.dumps(shipment), encoding="utf-8")
    return path


SHIPMENT = {
    "items": [
        {"name": "Weight plate", "weight": {"value": 5}, "quantity": 3},
        {"name": "Bar", "weight": {"value": 8}, "quantity": 1},
        {"name": "Collar", "weight": {"value": 3}, "quantity": 2},
    ],
    "max_parcel_weight": {"value": 10},
}


def test_writes_plan(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = write_shipment(tmp_path, SHIPMENT)
    output_path = tmp_path / "out" / "plan.json"

    exit_code = main(["--input", str(input_path), "--output", str(output_path)])

    assert exit_code == 0
    plan = json.loads(output_path.read_text(encoding="utf-8"))
    assert plan["num_parcels"] == 4
    assert [p["total_weight_kg"] for p in plan["parcels"]] == [8.0, 10.0, 8.0, 3.0]
    assert "into 4 parcel(s)" in capsys.readouterr().out


def test_max_weight_option_overrides_input(tmp_path: Path) -> None:
    input_path = write_shipment(tmp_path, SHIPMENT)
    output_path = tmp_path / "plan.json"

    exit_code = main(["--input", str(input_path), "--output", str(output_path), "--max-weight", "40"])

    assert exit_code == 0
    assert json.loads(output_path.read_text(encoding="utf-8"))["num_parcels"] == 1


def test_carrier_option(tmp_path: Path) -> None:
    input_path = write_shipment(tmp_path, SHIPMENT)
    output_path = tmp_path / "plan.json"

    exit_code = main(["--input", str(input_path), "--output", str(output_path), "--carrier", "GLS"])

    assert exit_code == 0
    assert json.loads(output_path.read_text(encoding="utf-8"))["num_parcels"] == 1


def test_too_heavy_item_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = write_shipment(tmp_path, SHIPMENT)
    output_path = tmp_path / "plan.json"

    exit_code = main(["--input", str(input_path), "--output", str(output_path), "--max-weight", "7"])

    assert exit_code == 2
    assert not output_path.exists()
    assert '"Bar" (weight 8 kg)' in capsys.readouterr().err


def test_invalid_input_exits_with_error(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    input_path = write_shipment(tmp_path, {"items": []})

    exit_code = main(["--input", str(input_path), "--output", str(tmp_path / "plan.json")])

    assert exit_code == 2
    assert "error:" in capsys.readouterr().err
