"""Configuration constants.

Values here are properties of gcov's output format and of the C build
layout. They are not user-configurable; see models.py for tunables.
"""

# =============================================================================
# gcov text output markers
# =============================================================================

FILE_PREFIX = "File '"
"""Prefix of a file declaration line, e.g. ``File 'src/add.c'``."""

FUNCTION_PREFIX = "Function '"
"""Prefix of a function declaration line, e.g. ``Function 'my_add'``."""

DATA_PREFIX = "Lines executed:"
"""Prefix of a data line, e.g. ``Lines executed:80.00% of 5``."""

DATA_SEPARATOR = "% of "
"""Separator between the percentage and the line count on a data line."""

NAME_QUOTE = "'"
"""Quoting character around declared names."""

NO_EXECUTABLE_LINES = "No executable lines"
"""Marker gcov >= 4.7 prints for entities without executable code.

The line before each marker is a spurious declaration and is dropped with it.
"""

# =============================================================================
# Source tree conventions
# =============================================================================

SOURCE_SUFFIX = ".c"
"""Suffix of compiled sources (compilation objects)."""

DATA_SUFFIX = ".gcda"
"""Suffix of gcov's accumulated per-run counter files."""

# =============================================================================
# gcov invocation
# =============================================================================

GCOV_FLAGS = ("-p", "-n", "-f")
"""Preserve paths, no .gcov output files, function summaries."""

GCOV_OBJECT_DIR_FLAG = "-o"
"""Flag selecting the directory holding .gcno/.gcda files."""

# =============================================================================
# Report layout
# =============================================================================

REPORT_WIDTH = 49
"""Width of the report banner lines."""

UNDEFINED = "undefined"
"""Rendering of a ratio whose denominator is zero."""
