"""Shared gcov output fixtures.

The tree mirrors a small C project: add.c and minus.c both include
static.h, main.c includes regular.h and include.c (C in C), and include.c
is also compiled on its own.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

GCOV_OUTPUT: dict[str, str] = {
    "add.c": """\
Function 'static_add'
Lines executed:100.00% of 2

Function 'static_minus'
Lines executed:0.00% of 2

Function 'my_add'
Lines executed:100.00% of 5

File 'src/static.h'
Lines executed:50.00% of 4

File 'src/add.c'
Lines executed:100.00% of 5

""",
    "include.c": """\
Function 'one'
Lines executed:0.00% of 1

File 'src/include.c'
Lines executed:0.00% of 1

""",
    "main.c": """\
Function 'reg_add'
Lines executed:0.00% of 2

Function 'reg_minus'
Lines executed:100.00% of 2

Function 'one'
Lines executed:100.00% of 1

Function 'main'
Lines executed:100.00% of 6

File 'src/regular.h'
Lines executed:50.00% of 4

File 'src/include.c'
Lines executed:100.00% of 1

File 'src/main.c'
Lines executed:100.00% of 6

""",
    "minus.c": """\
Function 'static_add'
Lines executed:0.00% of 2

Function 'static_minus'
Lines executed:100.00% of 2

Function 'my_minus'
Lines executed:80.00% of 5

File 'src/static.h'
Lines executed:50.00% of 4

File 'src/minus.c'
Lines executed:80.00% of 5

""",
}


def lines_for(object_name: str) -> list[str]:
    return GCOV_OUTPUT[object_name].splitlines()


@pytest.fixture
def gcov_output() -> dict[str, str]:
    return GCOV_OUTPUT


@pytest.fixture
def fake_runner() -> Callable[[Path, str], list[str]]:
    """Runner returning canned gcov output keyed by object path."""

    def run(base: Path, object_path: str) -> list[str]:  # noqa: ARG001
        return lines_for(object_path)

    return run


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Directory with the four compiled sources and two headers."""
    root = tmp_path / "src"
    root.mkdir()
    for name in GCOV_OUTPUT:
        (root / name).write_text("/* c */\n")
    (root / "static.h").write_text("/* h */\n")
    (root / "regular.h").write_text("/* h */\n")
    return root
