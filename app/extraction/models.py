from dataclasses import dataclass, field
import datetime
from decimal import Decimal


@dataclass(frozen=True)
class LineItem:
    """A single purchased item on a receipt."""

    name: str
    quantity: Decimal | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class StructuredReceipt:
    """Fields extracted from receipt text. Every field may be missing."""

    vendor_name: str | None = None
    invoice_number: str | None = None
    date: datetime.date | None = None
    total_amount: Decimal | None = None
    items: list[LineItem] = field(default_factory=list)
    tax_amount: Decimal | None = None
    subtotal: Decimal | None = None
    currency: str | None = None

    def to_dict(self) -> dict[str, object]:
        """JSON-ready form using the camelCase keys of the AI payload."""
        return {
            "vendorName": self.vendor_name,
            "invoiceNumber": self.invoice_number,
            "date": self.date.isoformat() if self.date else None,
            "totalAmount": _decimal_str(self.total_amount),
            "items": [
                {
                    "name": item.name,
                    "quantity": _decimal_str(item.quantity),
                    "price": _decimal_str(item.price),
                }
                for item in self.items
            ],
            "taxAmount": _decimal_str(self.tax_amount),
            "subtotal": _decimal_str(self.subtotal),
            "currency": self.currency,
        }


def _decimal_str(value: Decimal | None) -> str | None:
    return None if value is None else str(value)
