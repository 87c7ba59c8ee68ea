"""Row buffer holding the products fetched for the current scan."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .columns import ProductRecord


@dataclass(slots=True)
class RowBuffer:
    """Ordered records plus the index of the next record to emit."""

    records: List[ProductRecord] = field(default_factory=list)
    cursor: int = 0

    def load(self, records: Iterable[ProductRecord]) -> None:
        self.records = list(records)
        self.cursor = 0

    def current(self) -> Optional[ProductRecord]:
        if self.exhausted:
            return None
        return self.records[self.cursor]

    def advance(self) -> None:
        if self.exhausted:
            raise IndexError("Row buffer cursor is already at the end of the records.")
        self.cursor += 1

    def clear(self) -> None:
        self.records.clear()
        self.cursor = 0

    @property
    def exhausted(self) -> bool:
        return self.cursor >= len(self.records)

    def __len__(self) -> int:
        return len(self.records)
