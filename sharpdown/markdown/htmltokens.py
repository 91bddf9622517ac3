from __future__ import annotations

import dataclasses
import enum

from .. import t
from .patterns import htmlTokensRe


class TokenType(enum.Enum):
    TEXT = "text"
    TAG = "tag"


@dataclasses.dataclass(frozen=True)
class HtmlToken:
    type: TokenType
    value: str


def tokenizeHtml(text: str) -> list[HtmlToken]:
    """
    Splits text into tags and the runs of text between them.

    A tag is a whole <!-- comment -->, <?processing instruction?>,
    or <tag ...>/</tag>, where attribute values may contain further tags.
    Joining the values of the returned tokens gives back the input exactly.
    """
    return list(iterTokens(text))


def iterTokens(text: str) -> t.Generator[HtmlToken, None, None]:
    pos = 0
    for match in htmlTokensRe.finditer(text):
        tagStart = match.start()
        if pos < tagStart:
            yield HtmlToken(TokenType.TEXT, text[pos:tagStart])
        yield HtmlToken(TokenType.TAG, match.group(0))
        pos = match.end()
    if pos < len(text):
        yield HtmlToken(TokenType.TEXT, text[pos:])
