from __future__ import annotations

from . import config, t
from .markdown import Markdown

if t.TYPE_CHECKING:
    from .t import ContentListenerT


def defaultStyle() -> str:
    with open(config.scriptPath("styles", "default.css"), encoding="utf-8") as fh:
        return fh.read()


def composeDocument(fragment: str, style: str) -> str:
    return f"<html><style>{style}</style><body>{fragment}</body></html>"


class Renderer:
    """
    Wraps converted Markdown into a standalone page with a stylesheet,
    and tells anyone who asked whenever the page changes.
    """

    def __init__(self, converter: Markdown | None = None, style: str | None = None) -> None:
        self.converter = converter if converter is not None else Markdown()
        self.style = style if style is not None else defaultStyle()
        self.document: str | None = None
        self.text: str | None = None
        self._listeners: list[ContentListenerT] = []

    def onContentChanged(self, callback: ContentListenerT) -> t.Callable[[], None]:
        self._listeners.append(callback)

        def unregister() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unregister

    def render(self, text: str | None) -> str:
        # Nothing to show, so leave whatever was there before.
        if not text:
            return ""
        self.text = text
        return self.refresh()

    def setStyle(self, style: str) -> str | None:
        "Swaps the stylesheet, re-rendering the last text if there is one."
        self.style = style
        if self.text is None:
            return None
        return self.refresh()

    def refresh(self) -> str:
        assert self.text is not None
        fragment = self.converter.transform(self.text)
        self.document = composeDocument(fragment, self.style)
        for listener in list(self._listeners):
            listener(self.document)
        return self.document
