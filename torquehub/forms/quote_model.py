"""
Quote record: the read-only input of the quote PDF renderer.

The order-lookup service hands us a fully joined order (items, vehicle,
customer, workshop, media). Nothing here fetches more data: the only
outbound I/O of a render is the photo bytes (see image_fetcher).

Money is always integer cents.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple, Union


class QuoteDataError(ValueError):
    """Raised when the collaborator hands over a malformed quote."""


class OrderStatus(str, Enum):
    DRAFT = "DRAFT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, raw) -> Union["OrderStatus", str]:
        """Known statuses become enum members; anything else stays a raw string."""
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip()
        try:
            return cls(text.upper())
        except ValueError:
            return text


class MediaType(str, Enum):
    PHOTO = "PHOTO"
    VIDEO = "VIDEO"


def is_remote_url(url: str) -> bool:
    """http(s) URLs are fetched over the network; anything else is a MEDIA_ROOT path."""
    return str(url or "").lower().startswith(("http://", "https://"))


@dataclass(frozen=True)
class Workshop:
    name: str
    document: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Customer:
    name: str


@dataclass(frozen=True)
class Vehicle:
    plate: str
    brand: str
    model: str
    year: Optional[int] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: int
    unit_price: int  # cents

    @property
    def line_total(self) -> int:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class MediaItem:
    type: MediaType
    url: str
    caption: Optional[str] = None

    @property
    def is_photo(self) -> bool:
        return self.type == MediaType.PHOTO

    @property
    def is_remote(self) -> bool:
        return is_remote_url(self.url)


@dataclass(frozen=True)
class QuoteRecord:
    id: str
    public_token: str
    description: str
    status: Union[OrderStatus, str]
    total_amount: int  # cents, computed upstream
    items: Tuple[LineItem, ...]
    created_at: datetime
    workshop: Workshop
    customer: Customer
    vehicle: Vehicle
    media: Tuple[MediaItem, ...] = field(default_factory=tuple)
    observations: Optional[str] = None
    quote_expires_at: Optional[datetime] = None

    @property
    def photos(self) -> Tuple[MediaItem, ...]:
        return tuple(m for m in self.media if m.is_photo)

    def items_total(self) -> int:
        """Sum of line totals. Only for reconciliation checks, never displayed."""
        return sum(item.line_total for item in self.items)

    @classmethod
    def from_dict(cls, data: dict) -> "QuoteRecord":
        """Build a record from the order-lookup dict (camelCase or snake_case keys)."""
        if not isinstance(data, dict):
            raise QuoteDataError(f"quote must be a dict, got {type(data).__name__}")

        workshop = _get(data, "workshop") or {}
        customer = _get(data, "customer") or {}
        vehicle = _get(data, "vehicle") or {}

        try:
            return cls(
                id=str(_require(data, "id")),
                public_token=str(_get(data, "public_token", "publicToken") or ""),
                description=str(_get(data, "description") or ""),
                status=OrderStatus.parse(_get(data, "status")),
                total_amount=_cents(_require(data, "total_amount", "totalAmount"), "totalAmount"),
                items=tuple(_line_item(it) for it in (_get(data, "items") or [])),
                created_at=_parse_datetime(_require(data, "created_at", "createdAt"), "createdAt"),
                workshop=Workshop(
                    name=str(_require(workshop, "name")),
                    document=_opt_str(_get(workshop, "document")),
                    phone=_opt_str(_get(workshop, "phone")),
                    email=_opt_str(_get(workshop, "email")),
                    address=_opt_str(_get(workshop, "address")),
                ),
                customer=Customer(name=str(_require(customer, "name"))),
                vehicle=Vehicle(
                    plate=str(_require(vehicle, "plate")),
                    brand=str(_get(vehicle, "brand") or ""),
                    model=str(_get(vehicle, "model") or ""),
                    year=_opt_int(_get(vehicle, "year")),
                    color=_opt_str(_get(vehicle, "color")),
                ),
                media=tuple(_media_item(m) for m in (_get(data, "media") or [])),
                observations=_opt_str(_get(data, "observations")),
                quote_expires_at=_parse_optional_datetime(
                    _get(data, "quote_expires_at", "quoteExpiresAt"), "quoteExpiresAt"),
            )
        except (TypeError, AttributeError) as e:
            raise QuoteDataError(f"malformed quote: {e}") from e


# ═══════════════════════════════════════════════════════════════════════════════
# dict helpers
# ═══════════════════════════════════════════════════════════════════════════════

def _get(d: dict, *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


def _require(d: dict, *keys: str) -> Any:
    value = _get(d, *keys)
    if value is None or value == "":
        raise QuoteDataError(f"missing required field: {keys[-1]}")
    return value


def _opt_str(value) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _opt_int(value) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise QuoteDataError(f"not an integer: {value!r}")


def _cents(value, name: str) -> int:
    # bool is an int subclass; floats would smuggle rounding into money
    if isinstance(value, bool) or not isinstance(value, int):
        raise QuoteDataError(f"{name} must be integer cents, got {value!r}")
    return value


def _parse_datetime(value, name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            pass
    raise QuoteDataError(f"{name} is not an ISO datetime: {value!r}")


def _parse_optional_datetime(value, name: str) -> Optional[datetime]:
    if value in (None, ""):
        return None
    return _parse_datetime(value, name)


def _line_item(raw: dict) -> LineItem:
    quantity = _cents(_require(raw, "quantity", "qty"), "quantity")
    if quantity <= 0:
        raise QuoteDataError(f"quantity must be positive, got {quantity}")
    return LineItem(
        description=str(_get(raw, "description") or ""),
        quantity=quantity,
        unit_price=_cents(_require(raw, "unit_price", "unitPrice"), "unitPrice"),
    )


def _media_item(raw: dict) -> MediaItem:
    kind = str(_require(raw, "type")).upper()
    try:
        media_type = MediaType(kind)
    except ValueError:
        raise QuoteDataError(f"unknown media type: {kind!r}")
    return MediaItem(
        type=media_type,
        url=str(_require(raw, "url")),
        caption=_opt_str(_get(raw, "caption")),
    )
