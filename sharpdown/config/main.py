from __future__ import annotations

import os

from .. import t

packageDir = os.path.dirname(os.path.dirname(os.path.realpath(__file__)))


def englishFromList(items: t.Iterable[str], conjunction: str = "or") -> str:
    "'a', 'a or b', 'a, b, or c'."
    items = list(items)
    assert items
    if len(items) <= 2:
        return f" {conjunction} ".join(items)
    return ", ".join(items[:-1]) + f", {conjunction} " + items[-1]


def scriptPath(*pathSegs: str) -> str:
    "Resolves a path relative to the installed sharpdown package."
    return os.path.join(packageDir, *pathSegs)
