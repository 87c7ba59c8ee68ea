"""
Scan lifecycle of the WhatsApp catalog foreign data wrapper.

The host instantiates :class:`WhatsAppCatalogFdw` once and calls its lifecycle
methods in order::

    initialize -> begin_scan -> iter_scan ... -> end_scan

All mutable state (settings, row buffer, cursor, lifecycle state) lives on the
instance. Calls are synchronous and the instance is not safe for concurrent
scans.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional

from ..adapters.api.catalog import WhatsAppCatalogClient
from ..config import REQUIRED_OPTIONS, CatalogSettings
from ..core.logging import get_logger, log_progress
from ..errors import MissingOptionError, NotInitializedError, UnsupportedOperationError
from .buffer import RowBuffer
from .cells import Cell
from .columns import COLUMN_SPECS, CatalogColumn, ProductRecord
from .host import HOST_VERSION_REQUIREMENT, Context, OptionsType, RowSink

ClientFactory = Callable[[CatalogSettings], WhatsAppCatalogClient]


class ScanState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    SCANNING = "scanning"
    EXHAUSTED = "exhausted"


class WhatsAppCatalogFdw:
    """Read-only foreign data wrapper over a WhatsApp business catalog."""

    def __init__(self, client_factory: Optional[ClientFactory] = None) -> None:
        self._client_factory: ClientFactory = client_factory or WhatsAppCatalogClient
        self._settings: Optional[CatalogSettings] = None
        self._buffer = RowBuffer()
        self._state = ScanState.UNINITIALIZED
        self._logger = get_logger(__name__)

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def settings(self) -> Optional[CatalogSettings]:
        return self._settings

    @property
    def buffer(self) -> RowBuffer:
        return self._buffer

    @staticmethod
    def host_version_requirement() -> str:
        return HOST_VERSION_REQUIREMENT

    def initialize(self, ctx: Context) -> None:
        self._settings = None
        self._buffer = RowBuffer()
        self._state = ScanState.UNINITIALIZED

        opts = ctx.get_options(OptionsType.SERVER)
        values = {key: opts.require_or(key, "") for key in REQUIRED_OPTIONS}
        for key in REQUIRED_OPTIONS:
            if not values[key]:
                raise MissingOptionError(key)

        self._settings = CatalogSettings(**values)
        self._state = ScanState.INITIALIZED
        log_progress(self._logger, "Adapter initialized", phase="init", status="ok", level=logging.DEBUG, extra={"url": self._settings.endpoint_base})

    def begin_scan(self, ctx: Context) -> None:
        settings = self._require_settings()
        self._buffer.clear()
        self._state = ScanState.INITIALIZED

        products = self._client_factory(settings).list_products()
        self._buffer.load(ProductRecord.from_payload(item) for item in products)
        self._state = ScanState.SCANNING
        log_progress(
            self._logger,
            f"Retrieved {len(self._buffer)} products from WhatsApp Catalog API",
            phase="begin_scan",
            status="ok",
            extra={"rows": len(self._buffer)},
        )

    def iter_scan(self, ctx: Context, row: RowSink) -> Optional[int]:
        """
        Emit the record under the cursor into ``row``.

        Returns ``0`` when a row was produced and ``None`` once the buffer is
        exhausted. Unknown columns fail the call before anything is pushed.
        """

        self._require_settings()
        record = self._buffer.current()
        if record is None:
            if self._state is ScanState.SCANNING:
                self._state = ScanState.EXHAUSTED
                log_progress(self._logger, "Scan exhausted", phase="iter_scan", status="exhausted", level=logging.DEBUG, extra={"cursor": self._buffer.cursor})
            return None

        columns = [CatalogColumn.parse(column.name()) for column in ctx.get_columns()]
        cells: List[Cell] = [COLUMN_SPECS[column].extract(record) for column in columns]
        for cell in cells:
            row.push(cell)

        self._buffer.advance()
        return 0

    def re_scan(self, ctx: Context) -> None:
        raise UnsupportedOperationError("Re-scan on foreign table is not supported")

    def end_scan(self, ctx: Context) -> None:
        self._buffer.clear()
        if self._state in (ScanState.SCANNING, ScanState.EXHAUSTED):
            self._state = ScanState.INITIALIZED
        log_progress(self._logger, "Scan ended", phase="end_scan", status="ok", level=logging.DEBUG)

    def begin_modify(self, ctx: Context) -> None:
        raise UnsupportedOperationError("Modify operations on foreign table are not supported")

    def insert(self, ctx: Context, row: Any) -> None:
        return None

    def update(self, ctx: Context, rowid: Cell, row: Any) -> None:
        return None

    def delete(self, ctx: Context, rowid: Cell) -> None:
        return None

    def end_modify(self, ctx: Context) -> None:
        return None

    def _require_settings(self) -> CatalogSettings:
        if self._settings is None:
            raise NotInitializedError("Foreign data wrapper has not been initialized")
        return self._settings
