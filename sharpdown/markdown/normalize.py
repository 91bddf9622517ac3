from __future__ import annotations

from .. import constants


def normalize(text: str, tabWidth: int = constants.tabWidth) -> str:
    """
    Canonicalizes whitespace in a single pass:
    CRLF and lone CR become LF,
    tabs expand to the next tab stop of the current line,
    lines holding only spaces become empty,
    and the placeholder control character is dropped.
    The result always ends with blank lines,
    so every pattern can rely on a trailing "\\n\\n".
    """
    output: list[str] = []
    line: list[str] = []
    lineLen = 0
    hasContent = False

    def endLine() -> None:
        nonlocal lineLen, hasContent
        if hasContent:
            output.append("".join(line))
        output.append("\n")
        line.clear()
        lineLen = 0
        hasContent = False

    i = 0
    end = len(text)
    while i < end:
        char = text[i]
        if char == "\n":
            endLine()
        elif char == "\r":
            if i + 1 < end and text[i + 1] == "\n":
                # The \n will end the line.
                pass
            else:
                endLine()
        elif char == "\t":
            width = tabWidth - lineLen % tabWidth
            line.append(" " * width)
            lineLen += width
        elif char == constants.placeholderChar:
            pass
        else:
            if char != " ":
                hasContent = True
            line.append(char)
            lineLen += 1
        i += 1

    endLine()
    output.append("\n\n")
    return "".join(output)
