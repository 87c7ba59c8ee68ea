"""
Host-side contract of the foreign data wrapper.

A query-engine host supplies three capabilities to every lifecycle call:
option lookup, the list of requested columns and a row to fill. They are
modelled as protocols so a real engine binding can be plugged in; the
in-memory implementations below back the CLI and the test-suite.

Structured :class:`~whatsapp_catalog_fdw.errors.FdwError` values are only
rendered to text here, when a call crosses the host boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Generic, Iterator, List, Mapping, Optional, Protocol, Sequence, TypeVar

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from ..errors import ErrorKind, FdwError, render_error
from .cells import Cell, CellValue

HOST_VERSION_REQUIREMENT = "^0.1.0"

T = TypeVar("T")


class OptionsType(str, Enum):
    """Scope an option set is read from."""

    SERVER = "server"
    TABLE = "table"
    IMPORT_SCHEMA = "import_schema"
    OTHER = "other"


class Options(Protocol):
    def require(self, key: str) -> Optional[str]:
        ...

    def require_or(self, key: str, default: str) -> str:
        ...


class Column(Protocol):
    def name(self) -> str:
        ...


class Context(Protocol):
    def get_options(self, options_type: OptionsType) -> Options:
        ...

    def get_columns(self) -> Sequence[Column]:
        ...


class RowSink(Protocol):
    def push(self, cell: Optional[Cell]) -> None:
        ...


@dataclass(slots=True)
class MappingOptions:
    """Options backed by a plain mapping."""

    values: Mapping[str, str] = field(default_factory=dict)

    def require(self, key: str) -> Optional[str]:
        value = self.values.get(key)
        return value if value else None

    def require_or(self, key: str, default: str) -> str:
        return self.require(key) or default


@dataclass(frozen=True, slots=True)
class NamedColumn:
    column_name: str

    def name(self) -> str:
        return self.column_name


@dataclass(slots=True)
class HostContext:
    """In-memory :class:`Context` holding option sets and the requested columns."""

    options: Dict[OptionsType, Mapping[str, str]] = field(default_factory=dict)
    columns: List[NamedColumn] = field(default_factory=list)

    @classmethod
    def build(cls, server_options: Mapping[str, str], columns: Sequence[str] = ()) -> "HostContext":
        return cls(
            options={OptionsType.SERVER: dict(server_options)},
            columns=[NamedColumn(name) for name in columns],
        )

    def get_options(self, options_type: OptionsType) -> MappingOptions:
        return MappingOptions(self.options.get(options_type, {}))

    def get_columns(self) -> List[NamedColumn]:
        return list(self.columns)


@dataclass(slots=True)
class Row:
    """Row under construction; ``None`` pushes are kept as null cells."""

    cells: List[Cell] = field(default_factory=list)

    def push(self, cell: Optional[Cell]) -> None:
        self.cells.append(cell if cell is not None else Cell.null())

    def clear(self) -> None:
        self.cells.clear()

    def values(self) -> List[CellValue]:
        return [cell.to_python() for cell in self.cells]


@dataclass(frozen=True)
class HostResult(Generic[T]):
    """Outcome of a lifecycle call as seen by the host."""

    value: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def call(operation: Callable[..., T], *args: object) -> HostResult[T]:
    """Invoke a lifecycle operation, converting adapter errors to rendered messages."""

    try:
        return HostResult(value=operation(*args))
    except FdwError as exc:
        return HostResult(error=render_error(exc), kind=exc.kind)


def caret_specifier(requirement: str) -> SpecifierSet:
    """Translate a cargo-style caret requirement (``^0.1.0``) into a PEP 440 specifier set."""

    raw = requirement.strip()
    if not raw.startswith("^"):
        raise ValueError(f"Not a caret requirement: {requirement!r}")
    lower = Version(raw[1:])
    major, minor, micro = (list(lower.release) + [0, 0, 0])[:3]
    if major > 0:
        upper = f"{major + 1}.0.0"
    elif minor > 0:
        upper = f"0.{minor + 1}.0"
    else:
        upper = f"0.0.{micro + 1}"
    return SpecifierSet(f">={lower},<{upper}")


def host_version_satisfied(host_version: str, requirement: str = HOST_VERSION_REQUIREMENT) -> bool:
    """Return ``True`` when ``host_version`` meets the adapter's requirement."""

    try:
        version = Version(host_version)
    except InvalidVersion:
        return False
    return caret_specifier(requirement).contains(version, prereleases=True)


class ScanTarget(Protocol):
    def iter_scan(self, ctx: Context, row: RowSink) -> Optional[int]:
        ...


def iter_rows(fdw: ScanTarget, ctx: Context) -> Iterator[List[CellValue]]:
    """Drive ``iter_scan`` until exhaustion, yielding plain Python values per row."""

    row = Row()
    while True:
        row.clear()
        if fdw.iter_scan(ctx, row) is None:
            return
        yield row.values()
