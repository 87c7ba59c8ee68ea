"""
Typed cell values exchanged with the query-engine host.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

CellValue = Union[str, bool, int, None]

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1


class CellKind(str, Enum):
    """Primitive kinds a cell can hold."""

    STRING = "string"
    BOOL = "bool"
    I64 = "i64"
    NULL = "null"


@dataclass(frozen=True, slots=True)
class Cell:
    """A single column value for one row."""

    kind: CellKind
    value: CellValue = None

    @classmethod
    def string(cls, value: str) -> "Cell":
        return cls(CellKind.STRING, value)

    @classmethod
    def boolean(cls, value: bool) -> "Cell":
        return cls(CellKind.BOOL, value)

    @classmethod
    def i64(cls, value: int) -> "Cell":
        if not I64_MIN <= value <= I64_MAX:
            raise ValueError(f"{value} does not fit in a signed 64-bit integer")
        return cls(CellKind.I64, value)

    @classmethod
    def null(cls) -> "Cell":
        return _NULL

    @property
    def is_null(self) -> bool:
        return self.kind is CellKind.NULL

    def to_python(self) -> CellValue:
        return self.value


_NULL = Cell(CellKind.NULL)

_CONSTRUCTORS = {CellKind.STRING: Cell.string, CellKind.BOOL: Cell.boolean, CellKind.I64: Cell.i64}


def cell_from_optional(kind: CellKind, value: Optional[Any]) -> Cell:
    """Wrap ``value`` in a cell of ``kind``, or return the null cell for ``None``."""

    if value is None:
        return Cell.null()
    return _CONSTRUCTORS[kind](value)
