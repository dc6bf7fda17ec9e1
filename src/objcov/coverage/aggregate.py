"""Cross-object aggregation.

Concatenates per-object records into one file table and one function
table. A header included by two objects yields two rows, each attributed
to its own object.
"""

from collections.abc import Iterable

from objcov.coverage.models import CoverageTable, ObjectRecords, RecordKind


def aggregate(
    results: Iterable[ObjectRecords | None],
) -> tuple[CoverageTable, CoverageTable]:
    """Concatenate per-object records in the given (discovery) order.

    Args:
        results: Parsed objects; None entries (objects without data) are skipped.

    Returns:
        (file_table, function_table)
    """
    files = CoverageTable(kind=RecordKind.FILE)
    functions = CoverageTable(kind=RecordKind.FUNCTION)
    for result in results:
        if result is None:
            continue
        files.extend(result.files)
        functions.extend(result.functions)
    return files, functions
