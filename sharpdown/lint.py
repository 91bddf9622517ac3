from __future__ import annotations

import lxml.html

from . import constants, t
from . import messages as m


def lintFragment(html: str) -> int:
    """
    Looks over converted output for things that shouldn't be there:
    leftover placeholders, links that go nowhere, images with no source.
    Every problem is reported as a lint message;
    returns how many were found.
    """
    if not html.strip():
        return 0
    problems = 0
    if constants.placeholderChar in html:
        count = html.count(constants.placeholderChar)
        m.lint(f"Output still contains {count} internal placeholder character(s).")
        problems += count
    for el in parseFragment(html):
        for a in el.iter("a"):
            if a.get("href") is None:
                m.lint("Link is missing an href.", el=a)
                problems += 1
        for img in el.iter("img"):
            if not img.get("src"):
                m.lint("Image is missing a src.", el=img)
                problems += 1
    return problems


def parseFragment(html: str) -> list[t.ElementT]:
    # Placeholders are control characters, which lxml refuses outright.
    html = html.replace(constants.placeholderChar, "")
    return [el for el in lxml.html.fragments_fromstring(html) if not isinstance(el, str)]
