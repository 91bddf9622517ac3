from __future__ import annotations

import dataclasses

from .. import t
from .main import englishFromList

EMPTY_ELEMENT_SUFFIXES = ("/>", " />", ">")


@dataclasses.dataclass(frozen=True)
class Options:
    """
    Rendering switches consulted by the converter.

    autoHyperlink: bare http/https/ftp URLs become links.
    autoNewlines: every newline inside a paragraph becomes a <br>,
        not just lines ending in two spaces.
    emptyElementSuffix: how void elements (<br>, <hr>, <img>) are closed.
    encodeProblemUrlChars: %-encode characters in URLs that tend to confuse
        URL detection in mail clients and the like.
    linkEmails: <foo@example.com> becomes an (obfuscated) mailto: link.
    strictBoldItalic: * and _ only count as emphasis markers
        when they sit on a word boundary.
    """

    autoHyperlink: bool = True
    autoNewlines: bool = False
    emptyElementSuffix: str = "/>"
    encodeProblemUrlChars: bool = True
    linkEmails: bool = True
    strictBoldItalic: bool = True

    def __post_init__(self) -> None:
        if self.emptyElementSuffix not in EMPTY_ELEMENT_SUFFIXES:
            quoted = [f"'{x}'" for x in EMPTY_ELEMENT_SUFFIXES]
            msg = f"emptyElementSuffix must be {englishFromList(quoted)}, got '{self.emptyElementSuffix}'."
            raise ValueError(msg)

    def replace(self, **kwargs: t.Any) -> t.Self:
        return dataclasses.replace(self, **kwargs)
