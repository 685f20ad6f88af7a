"""Validates the parsed AI payload against the receipt schema.

Any field may be absent or null, but a present field must have the right
type. A wrong type rejects the whole payload: a half-trusted receipt is worse
than none, and the caller decides whether to go on without it.
"""

import datetime
from decimal import Decimal
from typing import Any

from app.extraction.exceptions import MalformedResponseError
from app.extraction.models import LineItem, StructuredReceipt

_MAX_ITEMS = 500


def validate_and_build(data: dict[str, Any]) -> StructuredReceipt:
    """Validate the parsed JSON object and build a StructuredReceipt.

    Raises:
        MalformedResponseError: on any type or format violation.
    """
    return StructuredReceipt(
        vendor_name=_optional_str(data, "vendorName"),
        invoice_number=_optional_str(data, "invoiceNumber"),
        date=_optional_date(data, "date"),
        total_amount=_optional_decimal(data, "totalAmount"),
        items=_build_items(data.get("items")),
        tax_amount=_optional_decimal(data, "taxAmount"),
        subtotal=_optional_decimal(data, "subtotal"),
        currency=_optional_str(data, "currency"),
    )


def _optional_str(data: dict[str, Any], key: str, where: str = "") -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedResponseError(f"'{where}{key}' must be a string or null")
    return value


def _optional_decimal(data: dict[str, Any], key: str, where: str = "") -> Decimal | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise MalformedResponseError(f"'{where}{key}' must be a number or null")
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise MalformedResponseError(f"'{where}{key}' must be a finite number")
    return amount


def _optional_date(data: dict[str, Any], key: str) -> datetime.date | None:
    value = _optional_str(data, key)
    if value is None:
        return None
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as exc:
        raise MalformedResponseError(
            f"'{key}' must be an ISO 8601 date (YYYY-MM-DD), got {value!r}"
        ) from exc


def _build_items(raw: Any) -> list[LineItem]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedResponseError("'items' must be a list or null")
    if len(raw) > _MAX_ITEMS:
        raise MalformedResponseError(f"Too many items: {len(raw)} (max {_MAX_ITEMS})")
    return [_build_item(item, i) for i, item in enumerate(raw)]


def _build_item(raw: Any, index: int) -> LineItem:
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"Item at index {index} must be an object")
    where = f"items[{index}]."
    name = raw.get("name")
    if not name or not isinstance(name, str):
        raise MalformedResponseError(f"'{where}name' must be a non-empty string")
    return LineItem(
        name=name,
        quantity=_optional_decimal(raw, "quantity", where),
        price=_optional_decimal(raw, "price", where),
    )
