"""Reads the static seed document into Order aggregates.

The seed is a JSON object ``{"orders": [...]}`` (a bare list is accepted
too) whose records use the dashboard's camelCase field names. Any shape
problem is reported as a MalformedSeedError naming the offending record.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from omsdash.domain.exceptions import DomainException, MalformedSeedError
from omsdash.domain.model.order import Order, OrderItem, ShippingAddress, parse_timestamp
from omsdash.domain.model.status import parse_status
from omsdash.domain.model.value_objects import Money, Quantity


class JsonSeedLoader:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> list[Order]:
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MalformedSeedError(f"Cannot read seed file {self._file_path}: {exc}") from exc
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedSeedError(f"Seed file {self._file_path} is not valid JSON: {exc}") from exc
        return parse_seed(document)


def parse_seed(document: Any) -> list[Order]:
    """Turn a decoded seed document into orders."""
    records = document.get("orders") if isinstance(document, dict) else document
    if not isinstance(records, list):
        raise MalformedSeedError("Seed must contain a list of orders")
    return [_parse_record(position, raw) for position, raw in enumerate(records)]


def _parse_record(position: int, raw: Any) -> Order:
    if not isinstance(raw, dict):
        raise MalformedSeedError(f"Order #{position} is not an object")
    try:
        return _to_domain(raw)
    except KeyError as exc:
        raise MalformedSeedError(
            f"Order #{position} ({raw.get('id', '?')}) is missing field {exc}"
        ) from exc
    except (TypeError, AttributeError, DomainException) as exc:
        raise MalformedSeedError(
            f"Order #{position} ({raw.get('id', '?')}) is malformed: {exc}"
        ) from exc


# --- Serialization ------------------------------------------------------------


def _to_domain(raw: dict) -> Order:
    address = raw["shippingAddress"]
    return Order(
        id=_text(raw["id"]),
        customer_name=_text(raw["customerName"]),
        customer_email=_text(raw["customerEmail"]),
        customer_phone=_text(raw["customerPhone"]),
        order_date=parse_timestamp(_text(raw["orderDate"])),
        status=parse_status(_text(raw["status"])),
        total=Money.of(_number(raw["total"])),
        items=tuple(
            OrderItem(
                id=_text(i["id"]),
                name=_text(i["name"]),
                quantity=Quantity(i["quantity"]),
                unit_price=Money.of(_number(i["price"])),
                sku=_text(i["sku"]),
            )
            for i in raw.get("items", [])
        ),
        shipping_address=ShippingAddress(
            street=_text(address["street"]),
            city=_text(address["city"]),
            state=_text(address["state"]),
            zip_code=_text(address["zipCode"]),
            country=_text(address["country"]),
        ),
    )


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _number(value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return value
