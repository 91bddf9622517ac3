from __future__ import annotations

import dataclasses
import difflib
import glob
import io
import os
import random

from alive_progress import alive_it

from . import config, t
from . import messages as m
from .markdown import Markdown

if t.TYPE_CHECKING:
    import argparse

# Each foo.md here has its expected output beside it, as foo.html.
TEST_DIR = os.path.abspath(config.scriptPath("..", "tests", "snapshots"))


@dataclasses.dataclass
class TestFilter:
    files: list[str] | None = None

    @staticmethod
    def fromOptions(options: argparse.Namespace) -> TestFilter:
        return TestFilter(files=options.files)

    def allows(self, path: str) -> bool:
        if not self.files:
            return True
        name = os.path.basename(path)
        return any(fragment in name for fragment in self.files)


def testPaths(filters: TestFilter) -> list[str]:
    return sorted(path for path in glob.glob(os.path.join(TEST_DIR, "*.md")) if filters.allows(path))


def testNameForPath(path: str) -> str:
    return os.path.relpath(path, TEST_DIR)


def iterTests(filters: TestFilter) -> t.Generator[str, None, None]:
    paths = testPaths(filters)
    if not paths:
        m.p("No tests were found.")
        return
    progress = alive_it(paths, dual_line=True, length=20)
    for path in progress:
        progress.text(testNameForPath(path))
        yield path


def run(filters: TestFilter) -> bool:
    fails = []
    total = 0
    for path in iterTests(filters):
        total += 1
        with m.withMessageState(fh=io.StringIO(), printMode="plain") as _:
            output = processTest(path)
        with open(replaceExtension(path, ".html"), encoding="utf-8") as fh:
            golden = fh.read()
        if not compare(output, golden, path=path):
            fails.append(testNameForPath(path))
    if not fails:
        if total:
            m.p(m.printColor(f"✔ All {total} tests passed.", color="green"))
        return True
    m.p(m.printColor(f"✘ {total - len(fails)}/{total} tests passed. Failures:", color="red"))
    for fail in fails:
        m.p("* " + fail)
    return False


def rebase(filters: TestFilter) -> bool:
    for path in iterTests(filters):
        with m.messagesSilent() as _:
            output = processTest(path)
        with open(replaceExtension(path, ".html"), "w", encoding="utf-8", newline="\n") as fh:
            fh.write(output)
    return True


def processTest(path: str) -> str:
    with open(path, encoding="utf-8", newline="") as fh:
        source = fh.read()
    # Fixed seed, so obfuscated emails come out the same every run.
    return Markdown(random=random.Random(0)).transform(source)


def compare(suspect: str, golden: str, path: str) -> bool:
    if suspect == golden:
        return True
    m.p(f"FILE: {path}")
    colors = {"-": "red", "+": "green"}
    for line in difflib.unified_diff(golden.split("\n"), suspect.split("\n"), fromfile="golden", tofile="suspect"):
        color = colors.get(line[:1])
        m.p(m.printColor(line, color=color) if color else line)
    m.p("")
    return False


def replaceExtension(path: str, newExt: str) -> str:
    assert newExt.startswith(".")
    return os.path.splitext(path)[0] + newExt
