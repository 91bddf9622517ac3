from __future__ import annotations

import contextlib
import dataclasses
import json
import os
import sys
from collections import Counter

import lxml.html

from . import t

# Ordered least to most severe; a threshold includes everything above it.
MESSAGE_LEVELS = {
    "everything": 0,
    "message": 1,
    "lint": 2,
    "warning": 3,
    "fatal": 4,
    "nothing": 5,
}

DEATH_TIMING = [
    "early",  # stop at the first disallowed message
    "late",  # finish the conversion, then stop
]

PRINT_MODES = [
    "plain",
    "console",
    "markup",
    "json",
]

HEADINGS = {
    "fatal": ("FATAL ERROR", "red"),
    "lint": ("LINT", "yellow"),
    "warning": ("WARNING", "light cyan"),
}

COLORS = {
    "red": 31,
    "green": 32,
    "yellow": 33,
    "light cyan": 96,
    "white": 97,
}

STYLES = {
    "normal": 0,
    "bold": 1,
    "invert": 7,
}


@dataclasses.dataclass()
class MessagesState:
    # Lowest category that stops the run
    dieOn: str = "fatal"
    # Whether a disallowed message stops the run immediately or at the end
    dieWhen: str = "late"
    # Lowest category that gets printed
    printOn: str = "everything"
    # Suppresses everything, including the final success/failure line
    silent: bool = False
    printMode: str = "console"
    asciiOnly: bool = False
    fh: t.TextIO = t.cast("t.TextIO", sys.stdout)  # noqa: RUF009
    seenMessages: set[str | tuple[str, str]] = dataclasses.field(default_factory=set)
    categoryCounts: Counter[str] = dataclasses.field(default_factory=Counter)

    def record(self, category: str, message: str | tuple[str, str]) -> None:
        self.categoryCounts[category] += 1
        self.seenMessages.add(message)

    def replace(self, **kwargs: t.Any) -> MessagesState:
        return dataclasses.replace(self, seenMessages=set(), categoryCounts=Counter(), **kwargs)

    def shouldDie(self, category: str, timing: str = "early") -> bool:
        if self.dieWhen == "late" and timing == "early":
            return False
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.dieOn]

    def shouldPrint(self, category: str) -> bool:
        if self.silent:
            return False
        if category in ("success", "failure"):
            return True
        return MESSAGE_LEVELS[category] >= MESSAGE_LEVELS[self.printOn]

    @staticmethod
    def categoryName(categoryNum: int) -> str:
        assert categoryNum >= 0
        names = list(MESSAGE_LEVELS)
        return names[min(categoryNum, len(names) - 1)]


state = MessagesState()


def p(msg: str | tuple[str, str], sep: str | None = None, end: str | None = None) -> None:
    "Prints to the message stream; a tuple carries its own ASCII fallback."
    if isinstance(msg, tuple):
        msg, ascii = msg
    else:
        ascii = msg.encode("ascii", "replace").decode()
    if state.asciiOnly:
        msg = ascii
    try:
        print(msg, sep=sep, end=end, file=state.fh)
    except UnicodeEncodeError:
        print(ascii, sep=sep, end=end, file=state.fh)


def report(category: str, msg: str) -> None:
    # Identical messages are only counted and shown once per run.
    formattedMsg = formatMessage(category, msg)
    if formattedMsg not in state.seenMessages:
        state.record(category, formattedMsg)
        if state.shouldPrint(category):
            p(formattedMsg)
    if state.shouldDie(category):
        errorAndExit()


def die(msg: str) -> None:
    report("fatal", msg)


def lint(msg: str, el: t.ElementT | None = None) -> None:
    if el is not None:
        msg += "\n" + lxml.html.tostring(el, with_tail=False, encoding="unicode")
    report("lint", msg)


def warn(msg: str) -> None:
    report("warning", msg)


def say(msg: str) -> None:
    if state.shouldPrint("message"):
        p(formatMessage("message", msg))


def success(msg: str) -> None:
    if state.shouldPrint("success"):
        p(formatMessage("success", msg))


def failure(msg: str) -> None:
    if state.shouldPrint("failure"):
        p(formatMessage("failure", msg))


def retroactivelyCheckErrorLevel(timing: str = "early") -> bool:
    for category, count in state.categoryCounts.items():
        if count > 0 and state.shouldDie(category, timing):
            errorAndExit()
    return True


def printColor(text: str, color: str = "white", *styles: str) -> str:
    if state.printMode != "console":
        return text
    codes = [STYLES[style.lower()] for style in styles] + [COLORS[color.lower()]]
    return f"\033[{';'.join(map(str, codes))}m{text}\033[0m"


def formatMessage(category: str, text: str) -> str | tuple[str, str]:
    if state.printMode == "markup":
        tagName = {"success": "final-success", "failure": "final-failure"}.get(category, category)
        text = text.replace("<", "&lt;")
        return f"<{tagName}>{text}</{tagName}>"
    if state.printMode == "json":
        # One JSON array, streamed: opened by the first message, closed by the last.
        jsonText = "[\n" if not state.seenMessages else ""
        jsonText += "  " + json.dumps({"messageType": category, "text": text})
        jsonText += "\n]" if category in ("success", "failure") else ", "
        return jsonText

    if category == "message":
        return text
    if category == "success":
        return (
            printColor(" ✔ ", "green", "invert") + " " + text,
            printColor("YAY", "green", "invert") + " " + text,
        )
    if category == "failure":
        return (
            printColor(" ✘ ", "red", "invert") + " " + text,
            printColor("ERR", "red", "invert") + " " + text,
        )
    heading, color = HEADINGS[category]
    return printColor(heading + ":", color, "bold") + " " + text


def errorAndExit() -> None:
    failure("Did not convert, due to errors exceeding the allowed error level.")
    sys.exit(2)


@contextlib.contextmanager
def withMessageState(fh: str | t.TextIO, **kwargs: t.Any) -> t.Generator[t.TextIO, None, None]:
    """
    Swaps in a fresh message state (new counts, new de-duplication)
    writing to fh, which is either a stream or a filename to create.
    The previous state comes back afterwards.
    """
    global state
    ownsFile = isinstance(fh, str)
    if isinstance(fh, str):
        fh = open(fh, "w", encoding="utf-8")  # noqa: SIM115
    oldState = state
    state = oldState.replace(fh=fh, **kwargs)
    try:
        yield fh
    finally:
        state = oldState
        if ownsFile:
            fh.close()


@contextlib.contextmanager
def messagesSilent() -> t.Generator[t.TextIO, None, None]:
    with open(os.devnull, "w", encoding="utf-8") as fh, withMessageState(fh) as _:
        yield fh
