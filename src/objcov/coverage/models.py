"""Object-wise coverage data model.

Every record belongs to one compilation object: the C file handed to gcov.
A header compiled into several objects appears once per object. Tables
keep those rows apart on purpose; summing them over-counts shared code,
dropping headers under-counts it, and no attempt is made to deduplicate.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from objcov.core.errors import ObjcovError


class RecordKind(Enum):
    FILE = "file"
    FUNCTION = "function"


def covered_lines_from_percent(percent: float, lines_of_code: int) -> int:
    """Back-derive the executed line count from gcov's percentage and LOC.

    gcov prints a percentage rounded to two decimals, so the count is
    rounded to the nearest integer.
    """
    return round(percent / 100.0 * lines_of_code)


@dataclass(frozen=True, slots=True)
class CoverageRecord:
    """One row of a coverage table: a file or function within one object."""

    kind: RecordKind
    name: str
    object: str
    lines_of_code: int
    covered_percent: float

    @classmethod
    def from_tool(
        cls, kind: RecordKind, name: str, covered_percent: float, lines_of_code: int
    ) -> CoverageRecord:
        """Record as read from gcov output, before it is tagged with an object."""
        return cls(
            kind=kind,
            name=name,
            object="",
            lines_of_code=lines_of_code,
            covered_percent=covered_percent,
        )

    @property
    def covered_lines(self) -> int:
        return covered_lines_from_percent(self.covered_percent, self.lines_of_code)

    @property
    def is_covered(self) -> bool:
        """True when at least one line was executed."""
        return self.covered_lines > 0

    def with_object(self, object_name: str) -> CoverageRecord:
        return CoverageRecord(
            kind=self.kind,
            name=self.name,
            object=object_name,
            lines_of_code=self.lines_of_code,
            covered_percent=self.covered_percent,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "object": self.object,
            "name": self.name,
            "covered_lines": self.covered_lines,
            "lines_of_code": self.lines_of_code,
            "covered_percent": self.covered_percent,
        }


@dataclass(slots=True)
class CoverageTable:
    """Unkeyed collection of records of a single kind.

    Rows may repeat ``name`` across different objects.
    """

    kind: RecordKind
    rows: list[CoverageRecord] = field(default_factory=list)

    def __post_init__(self) -> None:
        for row in self.rows:
            self._check_kind(row)

    def _check_kind(self, row: CoverageRecord) -> None:
        if row.kind is not self.kind:
            raise ValueError(f"Cannot add {row.kind.value} record to {self.kind.value} table")

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[CoverageRecord]:
        return iter(self.rows)

    def extend(self, rows: Iterable[CoverageRecord]) -> None:
        for row in rows:
            self._check_kind(row)
            self.rows.append(row)

    def where(self, predicate: Callable[[CoverageRecord], bool]) -> CoverageTable:
        """New table holding the rows for which ``predicate(row)`` is true."""
        return CoverageTable(kind=self.kind, rows=[r for r in self.rows if predicate(r)])

    @property
    def total_lines(self) -> int:
        return sum(r.lines_of_code for r in self.rows)

    @property
    def covered_lines(self) -> int:
        return sum(r.covered_lines for r in self.rows)

    @property
    def covered_rows(self) -> int:
        """Number of rows with at least one executed line."""
        return sum(1 for r in self.rows if r.is_covered)

    def names(self) -> list[str]:
        return [r.name for r in self.rows]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.rows]


@dataclass(frozen=True, slots=True)
class ObjectRecords:
    """Records parsed from one gcov invocation, tagged with their object."""

    object: str
    files: tuple[CoverageRecord, ...] = ()
    functions: tuple[CoverageRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class Ratio:
    """``covered`` out of ``total`` as a percentage rounded to 2 places.

    ``percent`` is None when ``total`` is zero: the ratio is undefined and
    must not be shown as 0% or 100%.
    """

    covered: int
    total: int
    percent: float | None

    @classmethod
    def of(cls, covered: int, total: int) -> Ratio:
        percent = round(covered / total * 100.0, 2) if total > 0 else None
        return cls(covered=covered, total=total, percent=percent)

    @property
    def is_defined(self) -> bool:
        return self.percent is not None

    def to_dict(self) -> dict[str, Any]:
        return {"covered": self.covered, "total": self.total, "percent": self.percent}


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """The four report ratios, computed after filtering."""

    line_by_file: Ratio
    line_by_func: Ratio
    files: Ratio
    functions: Ratio

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_coverage_by_file": self.line_by_file.to_dict(),
            "line_coverage_by_func": self.line_by_func.to_dict(),
            "file_coverage": self.files.to_dict(),
            "func_coverage": self.functions.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class ObjectFailure:
    """An object that contributed no rows because gcov or parsing failed."""

    object: str
    error: ObjcovError

    def to_dict(self) -> dict[str, Any]:
        return {"object": self.object, **self.error.to_dict()}


@dataclass(slots=True)
class ReportResult:
    """Programmatic result of a report run."""

    files: CoverageTable
    functions: CoverageTable
    summary: CoverageSummary
    failures: list[ObjectFailure] = field(default_factory=list)
    text: str = ""
