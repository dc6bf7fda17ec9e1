"""gcov summary output parser.

``gcov -f -n`` prints one block per function and one per file, each a
declaration followed by a data line::

    Function 'my_add'
    Lines executed:100.00% of 5

    File 'src/add.c'
    Lines executed:100.00% of 5

Functions come first, then files (the compiled source and every header it
pulls in). gcov >= 4.7 additionally prints ``No executable lines`` after a
spurious declaration for entities without code; both lines are dropped.
"""

from collections.abc import Iterable, Sequence

from objcov.config.constants import (
    DATA_PREFIX,
    DATA_SEPARATOR,
    FILE_PREFIX,
    FUNCTION_PREFIX,
    NAME_QUOTE,
    NO_EXECUTABLE_LINES,
)
from objcov.core.errors import ParseFormatError
from objcov.coverage.models import CoverageRecord, ObjectRecords, RecordKind


def drop_no_executable_lines(lines: Sequence[str]) -> list[str]:
    """Remove each "No executable lines" marker and the line before it."""
    dropped: set[int] = set()
    for i, line in enumerate(lines):
        if line.strip() == NO_EXECUTABLE_LINES:
            dropped.add(i)
            if i > 0:
                dropped.add(i - 1)
    return [line for i, line in enumerate(lines) if i not in dropped]


def parse_declared_name(line: str, object_name: str) -> str:
    """Extract the quoted name from ``File '...'`` or ``Function '...'``."""
    start = line.find(NAME_QUOTE)
    end = line.rfind(NAME_QUOTE)
    if start < 0 or end <= start:
        raise ParseFormatError.bad_quoting(object_name, line)
    return line[start + 1 : end]


def parse_data_line(line: str, object_name: str) -> tuple[float, int]:
    """Extract ``(covered_percent, lines_of_code)`` from a data line."""
    _, _, rest = line.partition(DATA_PREFIX)
    percent_text, sep, loc_text = rest.partition(DATA_SEPARATOR)
    if not sep:
        raise ParseFormatError.bad_data(object_name, line)
    try:
        percent = float(percent_text)
        loc = int(loc_text.strip())
    except ValueError as e:
        raise ParseFormatError.bad_data(object_name, line) from e
    if not 0.0 <= percent <= 100.0 or loc < 0:
        raise ParseFormatError.bad_data(object_name, line)
    return percent, loc


def parse_gcov_output(lines: Iterable[str], object_name: str) -> ObjectRecords | None:
    """Parse one object's gcov output into file and function records.

    Args:
        lines: Captured stdout of one gcov invocation.
        object_name: Compilation object the output belongs to.

    Returns:
        Tagged records, or None when gcov reported no file data for the
        object (nothing was compiled with coverage, or it never ran).

    Raises:
        ParseFormatError: The declaration and data line counts disagree,
            or a name or data field cannot be read.
    """
    cleaned = drop_no_executable_lines([line.rstrip("\r\n") for line in lines])

    # (kind, declaration line) in order of appearance
    declarations: list[tuple[RecordKind, str]] = []
    data_lines: list[str] = []
    for line in cleaned:
        if line.startswith(FILE_PREFIX):
            declarations.append((RecordKind.FILE, line))
        elif line.startswith(FUNCTION_PREFIX):
            declarations.append((RecordKind.FUNCTION, line))
        elif line.startswith(DATA_PREFIX):
            data_lines.append(line)

    n_files = sum(1 for kind, _ in declarations if kind is RecordKind.FILE)
    if n_files == 0:
        return None

    n_funcs = len(declarations) - n_files
    if len(declarations) != len(data_lines):
        raise ParseFormatError.count_mismatch(object_name, n_files, n_funcs, len(data_lines))

    files: list[CoverageRecord] = []
    functions: list[CoverageRecord] = []
    for (kind, decl), data in zip(declarations, data_lines, strict=True):
        percent, loc = parse_data_line(data, object_name)
        name = parse_declared_name(decl, object_name)
        record = CoverageRecord.from_tool(kind, name, percent, loc)
        (files if kind is RecordKind.FILE else functions).append(record)

    return tag_records(files, functions, object_name)


def tag_records(
    files: Iterable[CoverageRecord],
    functions: Iterable[CoverageRecord],
    object_name: str,
) -> ObjectRecords:
    """Stamp every record with the object it was produced under."""
    return ObjectRecords(
        object=object_name,
        files=tuple(r.with_object(object_name) for r in files),
        functions=tuple(r.with_object(object_name) for r in functions),
    )
