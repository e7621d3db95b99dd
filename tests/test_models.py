from __future__ import annotations

import pytest
from pydantic import ValidationError

from parcel_packer.models import PackableItem, Parcel, ParcelPackingConfiguration
from parcel_packer.units import Weight


def build_parcel() -> Parcel:
    return Parcel(
        items=[
            PackableItem(name="Pan", unit_weight=Weight.of("1.5"), quantity=2),
            PackableItem(name="Lid", unit_weight=Weight.of("0.4"), quantity=1),
        ],
        filler_weight=Weight.of("0.2"),
        customer_reference="ORDER-1001",
    )


def test_item_quantity_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        PackableItem(name="Pan", unit_weight=Weight.of(1), quantity=0)


def test_item_weight_must_not_be_negative() -> None:
    with pytest.raises(ValidationError):
        PackableItem(name="Pan", unit_weight=Weight.of(-1), quantity=1)


def test_item_accepts_weight_mapping() -> None:
    pan = PackableItem.model_validate({"name": "Pan", "unit_weight": {"value": 1500, "unit": "g"}, "quantity": 2})

    assert pan.unit_weight == Weight.of("1.5")
    assert pan.total_weight() == Weight.of(3)


def test_with_quantity_creates_independent_fragment() -> None:
    pan = PackableItem(name="Pan", unit_weight=Weight.of(1), quantity=5, product_number="P-1")

    fragment = pan.with_quantity(2)
    fragment.quantity = 1

    assert pan.quantity == 5
    assert fragment.name == "Pan"
    assert fragment.product_number == "P-1"


def test_parcel_weights() -> None:
    parcel = build_parcel()

    assert parcel.item_weight() == Weight.of("3.4")
    assert parcel.total_weight() == Weight.of("3.6")


def test_weight_overwrite_replaces_total_weight() -> None:
    parcel = build_parcel()
    parcel.weight_overwrite = Weight.of(5)

    assert parcel.total_weight() == Weight.of(5)


def test_parcel_description_lists_item_names() -> None:
    assert build_parcel().description() == "Parcel with items Pan, Lid"


def test_copy_without_items_keeps_parcel_settings() -> None:
    parcel = build_parcel()

    copy = parcel.copy_without_items()

    assert copy.items == []
    assert copy.filler_weight == Weight.of("0.2")
    assert copy.customer_reference == "ORDER-1001"
    assert len(parcel.items) == 2


def test_recalculate_filler_weight() -> None:
    parcel = build_parcel()

    parcel.recalculate_filler_weight(Weight.of("0.5"), 0.1)

    assert parcel.filler_weight == Weight.of("0.84")
    assert parcel.total_weight() == Weight.of("4.24")


def test_unlimited_configuration_has_no_item_capacity() -> None:
    assert ParcelPackingConfiguration().item_capacity() is None


def test_item_capacity_leaves_room_for_filler() -> None:
    configuration = ParcelPackingConfiguration(
        max_parcel_weight=Weight.of(10),
        filler_weight_per_parcel=Weight.of("0.5"),
        filler_weight_relative=0.1,
    )

    capacity = configuration.item_capacity()

    # 9.5 kg / 1.1, rounded down to the milligram
    assert capacity == Weight.of("8636.363", "g")
    assert capacity + Weight.of("0.5") + capacity * 0.1 <= Weight.of(10)


def test_item_capacity_without_surcharges_is_the_limit() -> None:
    configuration = ParcelPackingConfiguration(max_parcel_weight=Weight.of("31.5"))

    assert configuration.item_capacity() == Weight.of("31.5")


def test_filler_must_be_lighter_than_limit() -> None:
    with pytest.raises(ValidationError, match="leaves no room"):
        ParcelPackingConfiguration(max_parcel_weight=Weight.of(1), filler_weight_per_parcel=Weight.of(1))


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ParcelPackingConfiguration(max_parcel_weight=Weight.zero())


def test_create_copy_is_independent() -> None:
    configuration = ParcelPackingConfiguration(max_parcel_weight=Weight.of(10))

    copy = configuration.create_copy()
    copy.max_parcel_weight = None

    assert configuration.max_parcel_weight == Weight.of(10)
