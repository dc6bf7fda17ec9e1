"""Keyword and header filters applied to aggregated tables.

Filters never mutate their input; each step returns a new table, so the
unfiltered tables stay available to the caller.
"""

from pydantic import BaseModel, Field

from objcov.config.constants import SOURCE_SUFFIX
from objcov.coverage.models import CoverageTable


class FilterOptions(BaseModel):
    """Parameters of the filter pipeline."""

    file_keyword: str = Field(
        default="",
        description="Keep rows whose object contains this substring. Empty keeps all.",
    )
    func_keyword: str = Field(
        default="",
        description="Keep functions whose name contains this substring. Empty keeps all.",
    )
    ignore_case: bool = True
    exclude_header: bool = True


def contains(text: str, keyword: str, *, ignore_case: bool) -> bool:
    """Substring test; the empty keyword is contained in every string."""
    if ignore_case:
        return keyword.casefold() in text.casefold()
    return keyword in text


def is_compiled_source(name: str, *, ignore_case: bool) -> bool:
    """True for compiled sources (``.c``), False for headers and anything else."""
    if ignore_case:
        return name.casefold().endswith(SOURCE_SUFFIX.casefold())
    return name.endswith(SOURCE_SUFFIX)


def filter_by_object(table: CoverageTable, keyword: str, *, ignore_case: bool) -> CoverageTable:
    return table.where(lambda r: contains(r.object, keyword, ignore_case=ignore_case))


def filter_by_name(table: CoverageTable, keyword: str, *, ignore_case: bool) -> CoverageTable:
    return table.where(lambda r: contains(r.name, keyword, ignore_case=ignore_case))


def exclude_headers(table: CoverageTable, *, ignore_case: bool) -> CoverageTable:
    return table.where(lambda r: is_compiled_source(r.name, ignore_case=ignore_case))


def apply_filters(
    files: CoverageTable,
    functions: CoverageTable,
    options: FilterOptions,
) -> tuple[CoverageTable, CoverageTable]:
    """Narrow both tables.

    1. Both tables: object contains ``file_keyword``.
    2. Function table: name contains ``func_keyword``.
    3. File table, if ``exclude_header``: name is a compiled source.
       Function rows are never dropped by this step.

    Returns:
        (filtered_files, filtered_functions)
    """
    ic = options.ignore_case
    files = filter_by_object(files, options.file_keyword, ignore_case=ic)
    functions = filter_by_object(functions, options.file_keyword, ignore_case=ic)
    functions = filter_by_name(functions, options.func_keyword, ignore_case=ic)
    if options.exclude_header:
        files = exclude_headers(files, ignore_case=ic)
    return files, functions
