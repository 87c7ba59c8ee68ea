"""
Read-only foreign data wrapper exposing a WhatsApp business catalog as rows.

The :class:`~whatsapp_catalog_fdw.fdw.controller.WhatsAppCatalogFdw` drives the
scan lifecycle; :mod:`whatsapp_catalog_fdw.fdw.host` describes what a query
engine has to provide to it.
"""

from .errors import ErrorKind, FdwError
from .fdw import CatalogColumn, Cell, CellKind, HostContext, Row, ScanState, WhatsAppCatalogFdw, decode_field

__version__ = "0.1.0"

__all__ = [
    "CatalogColumn",
    "Cell",
    "CellKind",
    "ErrorKind",
    "FdwError",
    "HostContext",
    "Row",
    "ScanState",
    "WhatsAppCatalogFdw",
    "decode_field",
    "__version__",
]
