from __future__ import annotations

import dataclasses
import random as _random

from .. import config
from .patterns import linkIdWhitespaceRe


@dataclasses.dataclass
class LinkDefinition:
    id: str
    url: str
    title: str | None = None


def foldLinkId(text: str) -> str:
    """
    Link ids match case-insensitively and ignore how whitespace is wrapped.
    str.lower() doesn't consult the locale, so this is the same everywhere.
    """
    return linkIdWhitespaceRe.sub(" ", text.lower())


@dataclasses.dataclass
class TransformSession:
    """
    Everything one transform call mutates.

    A session belongs to exactly one call and is handed down the pipeline explicitly,
    so a single converter can run any number of transforms,
    one after another or in parallel, without them seeing each other's links or blocks.
    """

    options: config.Options
    random: _random.Random
    links: dict[str, LinkDefinition] = dataclasses.field(default_factory=dict)
    htmlBlocks: dict[str, str] = dataclasses.field(default_factory=dict)
    listLevel: int = 0

    def addLink(self, id: str, url: str, title: str | None = None) -> LinkDefinition:
        link = LinkDefinition(foldLinkId(id), url, title)
        # Later definitions win.
        self.links[link.id] = link
        return link

    def getLink(self, id: str) -> LinkDefinition | None:
        return self.links.get(foldLinkId(id))

    def clear(self) -> None:
        self.links.clear()
        self.htmlBlocks.clear()
        self.listLevel = 0
