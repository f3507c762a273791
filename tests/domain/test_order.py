"""Unit tests for the Order aggregate."""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from omsdash.domain.exceptions import ValidationError
from omsdash.domain.model.order import parse_timestamp
from omsdash.domain.model.status import OrderStatus
from omsdash.domain.model.value_objects import Money
from tests.builders import ADDRESS, make_item, make_order


class TestOrderCreation:

    def test_happy_path(self):
        order = make_order("ORD-1", items=(make_item(qty=2, price="10.00"),))
        assert order.id == "ORD-1"
        assert order.status == OrderStatus.PENDING
        assert len(order.items) == 1

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError, match="id is required"):
            make_order("  ")

    def test_raw_status_string_rejected(self):
        with pytest.raises(ValidationError, match="Invalid order status"):
            make_order(status="pending")  # type: ignore[arg-type]

    def test_naive_date_is_treated_as_utc(self):
        order = make_order(order_date=datetime(2025, 1, 1, 9, 30))
        assert order.order_date == datetime(2025, 1, 1, 9, 30, tzinfo=timezone.utc)

    def test_items_list_is_frozen_into_tuple(self):
        order = make_order(items=[make_item()])  # type: ignore[arg-type]
        assert isinstance(order.items, tuple)


class TestOrderTotal:

    def test_total_is_independent_of_items(self):
        order = make_order(total="250.00", items=(make_item(qty=1, price="10.00"),))
        assert order.total == Money.of("250.00")
        assert order.items_subtotal == Money.of("10.00")

    def test_positive_total_without_items(self):
        order = make_order(total="75.25")
        assert order.items == ()
        assert order.items_subtotal == Money.of("0")
        assert order.item_count == 0

    def test_item_count_sums_quantities(self):
        order = make_order(items=(make_item("A", qty=2), make_item("B", qty=3)))
        assert order.item_count == 5

    def test_line_total(self):
        assert make_item(qty=3, price="15.00").line_total == Money.of("45.00")


class TestOrderImmutability:

    def test_with_status_returns_new_order(self):
        order = make_order(status=OrderStatus.PENDING)
        shipped = order.with_status(OrderStatus.SHIPPED)
        assert shipped.status == OrderStatus.SHIPPED
        assert order.status == OrderStatus.PENDING
        assert shipped.id == order.id

    def test_fields_cannot_be_assigned(self):
        order = make_order()
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.status = OrderStatus.SHIPPED  # type: ignore[misc]

    def test_search_text(self):
        assert make_order("ORD-7", customer_name="Grace Kim").search_text == "Grace Kim ORD-7"


class TestShippingAddress:

    def test_one_line(self):
        assert ADDRESS.one_line() == "1 Main St, Springfield, IL 62704, USA"


class TestParseTimestamp:

    def test_zulu_suffix(self):
        assert parse_timestamp("2025-09-01T10:15:00Z") == datetime(
            2025, 9, 1, 10, 15, tzinfo=timezone.utc
        )

    def test_offset_is_normalised_to_utc(self):
        parsed = parse_timestamp("2025-09-01T12:15:00+02:00")
        assert parsed == datetime(2025, 9, 1, 10, 15, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    def test_invalid_rejected(self):
        with pytest.raises(ValidationError, match="Invalid ISO-8601"):
            parse_timestamp("yesterday")
