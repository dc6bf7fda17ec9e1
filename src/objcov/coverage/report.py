"""Summary computation and report rendering.

Text layout::

    ========-------- Coverage Report --------========

    >>> Configuration:

    - src root:         /path/to/src
    - file keyword:     add
    - func keyword:     ad
    - ignore case:      True
    - exclude header:   True

    >>> Coverage:

    * Line (file): 5 out of 5 (100.00%)
    * Line (func): 7 out of 7 (100.00%)
    * File:        1 out of 1 (100.00%)
    * Func:        2 out of 2 (100.00%)

    ----------------   File Detail   ----------------

    Obj   File      CovLn LOC CovLn%
    add.c src/add.c     5   5 100.00

    =================================================

Detail tables are optional and keep the column order Obj, name, CovLn, LOC,
CovLn%. A ratio with a zero denominator prints ``(undefined)``.
"""

import io
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from objcov.config.constants import REPORT_WIDTH, UNDEFINED
from objcov.coverage.filters import FilterOptions
from objcov.coverage.models import (
    CoverageSummary,
    CoverageTable,
    ObjectFailure,
    Ratio,
    RecordKind,
    ReportResult,
)

_TITLE = "========-------- Coverage Report --------========"
_FILE_DETAIL = "----------------   File Detail   ----------------"
_FUNC_DETAIL = "----------------   Func Detail   ----------------"
_FOOTER = "=" * REPORT_WIDTH

_NAME_HEADER = {RecordKind.FILE: "File", RecordKind.FUNCTION: "Func"}


def compute_summary(files: CoverageTable, functions: CoverageTable) -> CoverageSummary:
    """Compute the four report ratios over already-filtered tables."""
    return CoverageSummary(
        line_by_file=Ratio.of(files.covered_lines, files.total_lines),
        line_by_func=Ratio.of(functions.covered_lines, functions.total_lines),
        files=Ratio.of(files.covered_rows, len(files)),
        functions=Ratio.of(functions.covered_rows, len(functions)),
    )


def format_percent(percent: float | None) -> str:
    if percent is None:
        return UNDEFINED
    return f"{percent:.2f}%"


def format_ratio(ratio: Ratio) -> str:
    return f"{ratio.covered} out of {ratio.total} ({format_percent(ratio.percent)})"


def make_detail_table(table: CoverageTable) -> Table:
    """Create a borderless Rich Table: Obj, File|Func, CovLn, LOC, CovLn%."""
    detail = Table(box=None, padding=(0, 1), pad_edge=False, show_edge=False)
    detail.add_column("Obj", justify="right")
    detail.add_column(_NAME_HEADER[table.kind], justify="right")
    detail.add_column("CovLn", justify="right")
    detail.add_column("LOC", justify="right")
    detail.add_column("CovLn%", justify="right")

    for row in table:
        detail.add_row(
            Text(row.object),
            Text(row.name),
            str(row.covered_lines),
            str(row.lines_of_code),
            f"{row.covered_percent:.2f}",
        )
    return detail


def _render(*renderables: Any) -> str:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=1000,
        color_system=None,
        force_terminal=False,
        highlight=False,
        emoji=False,
    )
    for renderable in renderables:
        if isinstance(renderable, str):
            console.print(renderable, markup=False)
        else:
            console.print(renderable)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines()) + "\n"


def build_text_report(
    root: str,
    options: FilterOptions,
    files: CoverageTable,
    functions: CoverageTable,
    summary: CoverageSummary,
    *,
    file_detail: bool = False,
    func_detail: bool = False,
    failures: list[ObjectFailure] | None = None,
) -> str:
    """Render the fixed-layout text report."""
    parts: list[Any] = [
        _TITLE,
        "",
        ">>> Configuration:",
        "",
        f"- src root:         {root}",
        f"- file keyword:     {options.file_keyword}",
        f"- func keyword:     {options.func_keyword}",
        f"- ignore case:      {options.ignore_case}",
        f"- exclude header:   {options.exclude_header}",
        "",
        ">>> Coverage:",
        "",
        f"* Line (file): {format_ratio(summary.line_by_file)}",
        f"* Line (func): {format_ratio(summary.line_by_func)}",
        f"* File:        {format_ratio(summary.files)}",
        f"* Func:        {format_ratio(summary.functions)}",
    ]

    if file_detail:
        parts += ["", _FILE_DETAIL, "", make_detail_table(files)]
    if func_detail:
        parts += ["", _FUNC_DETAIL, "", make_detail_table(functions)]

    if failures:
        parts += ["", ">>> Failed objects:", ""]
        parts += [f"- {f.object}: {f.error.message}" for f in failures]

    parts += ["", _FOOTER]
    return _render(*parts)


def build_json_report(root: str, options: FilterOptions, result: ReportResult) -> dict[str, Any]:
    """Build a structured report suitable for JSON serialization.

    Undefined ratios serialize as ``"percent": null``.
    """
    return {
        "root": root,
        "config": options.model_dump(),
        "summary": result.summary.to_dict(),
        "files": result.files.to_dicts(),
        "functions": result.functions.to_dicts(),
        "failures": [f.to_dict() for f in result.failures],
    }
