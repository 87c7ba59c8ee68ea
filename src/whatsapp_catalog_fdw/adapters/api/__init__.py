"""
HTTP API clients.

* ``Client`` classes wrap the HTTP call and envelope validation.
* ``Adapter`` classes provide :class:`~whatsapp_catalog_fdw.adapters.base.DataSourceAdapter`
  verification on top of a client.
"""

from .base import BaseAPIClient
from .catalog import CatalogAdapter, WhatsAppCatalogClient

__all__ = [
    "BaseAPIClient",
    "CatalogAdapter",
    "WhatsAppCatalogClient",
]
