from __future__ import annotations

import random as _random

from .. import config, constants
from . import blocks, escapes
from .normalize import normalize
from .session import TransformSession

version = constants.markdownVersion


class Markdown:
    """
    Converts Markdown text into an HTML fragment.

    A converter holds nothing but its Options and its random source,
    so one instance can be reused for any number of documents,
    including from several threads at once.
    Pass a seeded random.Random to get repeatable email obfuscation.
    """

    version = constants.markdownVersion

    def __init__(self, options: config.Options | None = None, random: _random.Random | None = None) -> None:
        self.options = options if options is not None else config.Options()
        self.random = random if random is not None else _random.Random()

    def newSession(self) -> TransformSession:
        return TransformSession(options=self.options, random=self.random)

    def transform(self, text: str | None) -> str:
        if text is None:
            return ""
        if not isinstance(text, str):
            msg = f"Markdown.transform() expects a str, got {type(text).__name__}."
            raise TypeError(msg)
        if not text.strip():
            return ""
        session = self.newSession()
        try:
            return runPipeline(text, session)
        finally:
            session.clear()


def runPipeline(text: str, session: TransformSession) -> str:
    text = normalize(text)
    text = blocks.hashHtmlBlocks(text, session)
    text = blocks.stripLinkDefinitions(text, session)
    text = blocks.runBlockGamut(text, session)
    return escapes.unescape(text, session.htmlBlocks)


def transform(
    text: str | None,
    options: config.Options | None = None,
    random: _random.Random | None = None,
) -> str:
    return Markdown(options, random).transform(text)


