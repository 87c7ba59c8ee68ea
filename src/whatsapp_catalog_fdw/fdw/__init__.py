"""
Scan lifecycle, row buffer and field decoder of the catalog foreign data wrapper.
"""

from .buffer import RowBuffer
from .cells import Cell, CellKind
from .columns import COLUMN_SPECS, CatalogColumn, ProductRecord, decode_column, decode_field
from .controller import ScanState, WhatsAppCatalogFdw
from .host import (
    HOST_VERSION_REQUIREMENT,
    HostContext,
    HostResult,
    MappingOptions,
    OptionsType,
    Row,
    call,
    host_version_satisfied,
    iter_rows,
)

__all__ = [
    "COLUMN_SPECS",
    "HOST_VERSION_REQUIREMENT",
    "CatalogColumn",
    "Cell",
    "CellKind",
    "HostContext",
    "HostResult",
    "MappingOptions",
    "OptionsType",
    "ProductRecord",
    "Row",
    "RowBuffer",
    "ScanState",
    "WhatsAppCatalogFdw",
    "call",
    "decode_column",
    "decode_field",
    "host_version_satisfied",
    "iter_rows",
]
