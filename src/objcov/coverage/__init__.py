"""Object-wise gcov coverage parsing, aggregation and reporting.

Usage:
    from objcov.coverage import generate_report

    result = generate_report("vm/src", file_detail=True, func_keyword="gc")
    print(result.text)
    result.summary.line_by_file.percent  # None when nothing matched

Pieces, leaf first:
    parse_gcov_output  one object's gcov stdout -> tagged records
    aggregate          per-object records -> file table, function table
    apply_filters      keyword / header filters
    compute_summary    four ratios over the filtered tables
    build_text_report  fixed-layout text
"""

from objcov.coverage.aggregate import aggregate
from objcov.coverage.filters import FilterOptions, apply_filters
from objcov.coverage.models import (
    CoverageRecord,
    CoverageSummary,
    CoverageTable,
    ObjectFailure,
    ObjectRecords,
    Ratio,
    RecordKind,
    ReportResult,
)
from objcov.coverage.ops import generate_report
from objcov.coverage.parser import parse_gcov_output, tag_records
from objcov.coverage.report import build_json_report, build_text_report, compute_summary
from objcov.coverage.tool import GcovRunner, discover_sources, reset_accumulated_coverage

__all__ = [
    # Models
    "CoverageRecord",
    "CoverageSummary",
    "CoverageTable",
    "ObjectFailure",
    "ObjectRecords",
    "Ratio",
    "RecordKind",
    "ReportResult",
    # Parsing
    "parse_gcov_output",
    "tag_records",
    # Aggregation / filtering
    "aggregate",
    "FilterOptions",
    "apply_filters",
    # Report
    "build_json_report",
    "build_text_report",
    "compute_summary",
    "generate_report",
    # Tool
    "GcovRunner",
    "discover_sources",
    "reset_accumulated_coverage",
]
