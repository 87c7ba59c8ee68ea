"""
Field decoder for WhatsApp catalog products.

Remote products are loosely typed JSON objects. Each record is deserialized
once into a :class:`ProductRecord`, where every field that is absent or holds a
value of the wrong JSON type becomes ``None``. Columns are then projected from
the typed record through a closed mapping of :class:`CatalogColumn` members to
extractor functions, so a column name outside the enumeration is rejected
before any record is inspected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..errors import UnsupportedColumnError
from .cells import I64_MAX, I64_MIN, Cell, CellKind, cell_from_optional

IMAGE_URL_SEPARATOR = ", "


class CatalogColumn(str, Enum):
    """Columns exposed by the catalog foreign table."""

    ID = "id"
    RETAILER_ID = "retailer_id"
    NAME = "name"
    DESCRIPTION = "description"
    URL = "url"
    CURRENCY = "currency"
    PRICE = "price"
    IS_HIDDEN = "is_hidden"
    MAX_AVAILABLE = "max_available"
    AVAILABILITY = "availability"
    CHECKMARK = "checkmark"
    WHATSAPP_PRODUCT_CAN_APPEAL = "whatsapp_product_can_appeal"
    IS_APPROVED = "is_approved"
    APPROVAL_STATUS = "approval_status"
    SIGNED_SHIMMED_URL = "signedShimmedUrl"
    IMAGES = "images"

    @classmethod
    def parse(cls, name: str) -> "CatalogColumn":
        """Resolve a host column name, raising :class:`UnsupportedColumnError` when unknown."""

        try:
            return cls(name)
        except ValueError:
            raise UnsupportedColumnError(name) from None


def _as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def _as_i64(value: Any) -> Optional[int]:
    # bool is an int subclass but not a JSON integer
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if not I64_MIN <= value <= I64_MAX:
        return None
    return value


def _image_urls(value: Any) -> Tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    urls = []
    for image in value:
        if isinstance(image, Mapping):
            url = image.get("url")
            if isinstance(url, str):
                urls.append(url)
    return tuple(urls)


@dataclass(frozen=True, slots=True)
class ProductRecord:
    """Typed view over a single catalog product."""

    id: Optional[str] = None
    retailer_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    currency: Optional[str] = None
    price: Optional[str] = None
    is_hidden: Optional[bool] = None
    max_available: Optional[int] = None
    availability: Optional[str] = None
    checkmark: Optional[bool] = None
    whatsapp_product_can_appeal: Optional[bool] = None
    is_approved: Optional[bool] = None
    approval_status: Optional[str] = None
    signed_shimmed_url: Optional[str] = None
    image_urls: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Any) -> "ProductRecord":
        """
        Build a record from one element of the ``products`` array.

        Non-object payloads yield a record with every field absent.
        """

        if not isinstance(payload, Mapping):
            return cls()
        return cls(
            id=_as_str(payload.get("id")),
            retailer_id=_as_str(payload.get("retailer_id")),
            name=_as_str(payload.get("name")),
            description=_as_str(payload.get("description")),
            url=_as_str(payload.get("url")),
            currency=_as_str(payload.get("currency")),
            price=_as_str(payload.get("price")),
            is_hidden=_as_bool(payload.get("is_hidden")),
            max_available=_as_i64(payload.get("max_available")),
            availability=_as_str(payload.get("availability")),
            checkmark=_as_bool(payload.get("checkmark")),
            whatsapp_product_can_appeal=_as_bool(payload.get("whatsapp_product_can_appeal")),
            is_approved=_as_bool(payload.get("is_approved")),
            approval_status=_as_str(payload.get("approval_status")),
            signed_shimmed_url=_as_str(payload.get("signedShimmedUrl")),
            image_urls=_image_urls(payload.get("images")),
        )


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """Cell kind and extractor for one supported column."""

    column: CatalogColumn
    kind: CellKind
    extract: Callable[[ProductRecord], Cell]


def _field(kind: CellKind, attribute: str) -> Callable[[ProductRecord], Cell]:
    def extract(record: ProductRecord) -> Cell:
        return cell_from_optional(kind, getattr(record, attribute))

    return extract


def _images(record: ProductRecord) -> Cell:
    return Cell.string(IMAGE_URL_SEPARATOR.join(record.image_urls))


_S, _B, _I = CellKind.STRING, CellKind.BOOL, CellKind.I64

COLUMN_SPECS: Dict[CatalogColumn, ColumnSpec] = {
    entry.column: entry
    for entry in (
        ColumnSpec(CatalogColumn.ID, _S, _field(_S, "id")),
        ColumnSpec(CatalogColumn.RETAILER_ID, _S, _field(_S, "retailer_id")),
        ColumnSpec(CatalogColumn.NAME, _S, _field(_S, "name")),
        ColumnSpec(CatalogColumn.DESCRIPTION, _S, _field(_S, "description")),
        ColumnSpec(CatalogColumn.URL, _S, _field(_S, "url")),
        ColumnSpec(CatalogColumn.CURRENCY, _S, _field(_S, "currency")),
        ColumnSpec(CatalogColumn.PRICE, _S, _field(_S, "price")),
        ColumnSpec(CatalogColumn.IS_HIDDEN, _B, _field(_B, "is_hidden")),
        ColumnSpec(CatalogColumn.MAX_AVAILABLE, _I, _field(_I, "max_available")),
        ColumnSpec(CatalogColumn.AVAILABILITY, _S, _field(_S, "availability")),
        ColumnSpec(CatalogColumn.CHECKMARK, _B, _field(_B, "checkmark")),
        ColumnSpec(CatalogColumn.WHATSAPP_PRODUCT_CAN_APPEAL, _B, _field(_B, "whatsapp_product_can_appeal")),
        ColumnSpec(CatalogColumn.IS_APPROVED, _B, _field(_B, "is_approved")),
        ColumnSpec(CatalogColumn.APPROVAL_STATUS, _S, _field(_S, "approval_status")),
        ColumnSpec(CatalogColumn.SIGNED_SHIMMED_URL, _S, _field(_S, "signed_shimmed_url")),
        ColumnSpec(CatalogColumn.IMAGES, _S, _images),
    )
}


def decode_column(record: ProductRecord, column: str | CatalogColumn) -> Cell:
    """Project ``record`` onto ``column``; unknown names raise :class:`UnsupportedColumnError`."""

    resolved = column if isinstance(column, CatalogColumn) else CatalogColumn.parse(column)
    return COLUMN_SPECS[resolved].extract(record)


def decode_field(payload: Any, column: str) -> Cell:
    """Decode ``column`` straight from a raw JSON product."""

    resolved = CatalogColumn.parse(column)
    return decode_column(ProductRecord.from_payload(payload), resolved)
