"""Tests for line item edits and the markup synchronizer."""

import pytest

from freightquote.models.pricing import LineItem
from freightquote.pricing.line_items import LineItemField, apply_field_edit
from freightquote.pricing.markup import (
    apply_base_cost,
    apply_markup_amount,
    apply_markup_percentage,
    markup_amount,
    markup_percentage,
)


def _selling(**kwargs) -> LineItem:
    fields = {"base_cost": 100, "percentage_added": 10, "quantity": 1, "forex_rate": 1}
    fields.update(kwargs)
    return LineItem(**fields)


def _assert_consistent(item: LineItem) -> None:
    assert item.amount == pytest.approx(item.unit_price * item.quantity * item.forex_rate)
    if item.is_selling:
        assert item.final_price == pytest.approx(item.base_cost + item.amount_added)
        assert item.price == pytest.approx(item.final_price)
        if item.base_cost == 0:
            assert item.percentage_added == 0
        else:
            assert item.amount_added == pytest.approx(item.base_cost * item.percentage_added / 100)


class TestMarkupFormulas:
    def test_amount_from_percentage(self) -> None:
        assert markup_amount(250, 20) == pytest.approx(50)

    def test_percentage_from_amount(self) -> None:
        assert markup_percentage(250, 50) == pytest.approx(20)

    def test_percentage_divide_by_zero(self) -> None:
        assert markup_percentage(0, 50) == 0.0


class TestMarkupSynchronizer:
    def test_percentage_edit(self) -> None:
        """base 100 at 10% gives 10 markup and 110 final."""
        item = apply_markup_percentage(_selling(percentage_added=0), 10)
        assert item.amount_added == pytest.approx(10)
        assert item.final_price == pytest.approx(110)
        _assert_consistent(item)

    def test_base_cost_edit_keeps_percentage(self) -> None:
        item = apply_base_cost(_selling(), 200)
        assert item.percentage_added == pytest.approx(10)
        assert item.amount_added == pytest.approx(20)
        assert item.final_price == pytest.approx(220)
        _assert_consistent(item)

    def test_amount_edit(self) -> None:
        item = apply_markup_amount(_selling(), 25)
        assert item.percentage_added == pytest.approx(25)
        assert item.final_price == pytest.approx(125)
        _assert_consistent(item)

    def test_amount_edit_with_zero_base_cost(self) -> None:
        item = apply_markup_amount(_selling(base_cost=0), 40)
        assert item.percentage_added == 0.0
        assert item.final_price == pytest.approx(40)
        _assert_consistent(item)

    def test_negative_markup_is_a_discount(self) -> None:
        item = apply_markup_percentage(_selling(), -5)
        assert item.percentage_added == pytest.approx(-5)
        assert item.amount_added == pytest.approx(-5)
        assert item.final_price == pytest.approx(95)

    def test_cascades_into_amount(self) -> None:
        item = apply_markup_percentage(_selling(quantity=3, forex_rate=56), 20)
        assert item.amount == pytest.approx(120 * 3 * 56)

    def test_round_trip(self) -> None:
        for pct in (0, 7.5, 12, 33.3, 150):
            item = apply_markup_percentage(_selling(base_cost=1234.5), pct)
            assert item.amount_added == 1234.5 * pct / 100
            assert item.final_price == 1234.5 + 1234.5 * pct / 100

    def test_original_is_not_mutated(self) -> None:
        original = _selling()
        apply_base_cost(original, 500)
        assert original.base_cost == 100
        assert original.final_price == pytest.approx(110)


class TestApplyFieldEdit:
    def test_quantity_recomputes_amount(self) -> None:
        item = apply_field_edit(LineItem(price=50), "quantity", 4)
        assert item.amount == pytest.approx(200)

    def test_forex_recomputes_amount(self) -> None:
        item = apply_field_edit(LineItem(price=50, quantity=2), LineItemField.FOREX_RATE, "56.5")
        assert item.amount == pytest.approx(50 * 2 * 56.5)

    def test_non_numeric_quantity_is_zero(self) -> None:
        item = apply_field_edit(LineItem(price=50, quantity=2), "quantity", "abc")
        assert item.quantity == 0.0
        assert item.amount == 0.0

    def test_negative_cost_clamps(self) -> None:
        item = apply_field_edit(_selling(), "base_cost", -40)
        assert item.base_cost == 0.0
        assert item.percentage_added == 0.0
        assert item.final_price == 0.0

    def test_buying_price_edit(self) -> None:
        item = apply_field_edit(LineItem(price=10, quantity=3), "price", 12)
        assert item.price == 12
        assert item.amount == pytest.approx(36)

    def test_buying_final_price_edit(self) -> None:
        item = apply_field_edit(LineItem(price=10, quantity=3), "final_price", 20)
        assert item.unit_price == 20
        assert item.price == 20
        assert item.amount == pytest.approx(60)

    def test_markup_edit_on_buying_item_is_ignored(self) -> None:
        item = LineItem(price=10)
        assert apply_field_edit(item, "percentage_added", 15) is item

    def test_price_edit_on_selling_item_is_ignored(self) -> None:
        item = _selling()
        assert apply_field_edit(item, "final_price", 500) is item

    def test_derived_and_unknown_fields_are_ignored(self) -> None:
        item = LineItem(price=10)
        assert apply_field_edit(item, "amount", 999) is item
        assert apply_field_edit(item, "colour", "red") is item

    def test_is_taxed_does_not_change_amount(self) -> None:
        item = LineItem(price=100, quantity=2)
        taxed = apply_field_edit(item, "is_taxed", True)
        assert taxed.is_taxed is True
        assert taxed.amount == item.amount

    def test_text_and_metadata_fields(self) -> None:
        item = LineItem(price=10)
        item = apply_field_edit(item, "description", "CFS")
        item = apply_field_edit(item, "remarks", "PER W/M")
        item = apply_field_edit(item, "service_tag", "Forwarding")
        item = apply_field_edit(item, "vendor_id", "V-7")
        item = apply_field_edit(item, "currency", "usd")
        assert item.description == "CFS"
        assert item.remarks == "PER W/M"
        assert item.service == "Forwarding"
        assert item.vendor_id == "V-7"
        assert item.currency == "USD"
        assert apply_field_edit(item, "vendor_id", "").vendor_id is None

    def test_every_edit_keeps_item_consistent(self) -> None:
        item = _selling(quantity=2, forex_rate=55)
        edits = [
            ("base_cost", 80),
            ("amount_added", 16),
            ("quantity", "3"),
            ("percentage_added", 12.5),
            ("forex_rate", 57.25),
            ("base_cost", 0),
            ("amount_added", 5),
        ]
        for field, value in edits:
            item = apply_field_edit(item, field, value)
            _assert_consistent(item)
