from __future__ import annotations

import hashlib
import random as _random
import re

from .. import constants, t
from .patterns import escapePlaceholderRe, htmlBlockHashRe

# Characters that mean something to markdown, and so need hiding
# once they've been decided to be literal.
ESCAPABLE_CHARS = "\\`*_{}[]()>#+-.!/"


def hashKey(text: str, kind: str) -> str:
    """
    Placeholder for a protected chunk of text.
    Derived only from the content, so the same text always gets the same key,
    both within a run and across runs.
    """
    digest = hashlib.blake2b(text.encode("utf-8", "surrogatepass"), digest_size=8).digest()
    return f"{constants.placeholderChar}{kind}{int.from_bytes(digest, 'big')}{kind}"


def _buildEscapeTables() -> tuple[dict[str, str], dict[str, str], dict[str, str]]:
    escapeTable = {}
    invertedTable = {}
    backslashTable = {}
    for char in ESCAPABLE_CHARS:
        key = hashKey(char, constants.escapeKind)
        escapeTable[char] = key
        invertedTable[key] = char
        backslashTable["\\" + char] = key
    assert len(invertedTable) == len(ESCAPABLE_CHARS)
    return escapeTable, invertedTable, backslashTable


# Built once, shared by every converter in the process, never mutated.
ESCAPE_TABLE, INVERTED_ESCAPE_TABLE, BACKSLASH_ESCAPE_TABLE = _buildEscapeTables()

backslashEscapesRe = re.compile("|".join(re.escape(x) for x in BACKSLASH_ESCAPE_TABLE))
codeEncoderRe = re.compile(r"&|<|>|\\|\*|_|\{|\}|\[|\]")
ampsRe = re.compile(r"&(?!(?:#[0-9]+|#[xX][a-fA-F0-9]+|[a-zA-Z][a-zA-Z0-9]*);)")
anglesRe = re.compile(r"<(?![A-Za-z/?\$!])")
altTextCharsRe = re.compile(r"[\[\]()]")

PROBLEM_URL_CHARS = "\"'*()[]$:"


def escapeBackslashes(text: str) -> str:
    "Hides \\`, \\*, \\[, etc behind their placeholders."
    return backslashEscapesRe.sub(lambda match: BACKSLASH_ESCAPE_TABLE[match.group(0)], text)


def escapeBoldItalic(text: str) -> str:
    return text.replace("*", ESCAPE_TABLE["*"]).replace("_", ESCAPE_TABLE["_"])


def escapeImageAltText(text: str) -> str:
    text = escapeBoldItalic(text)
    return altTextCharsRe.sub(lambda match: ESCAPE_TABLE[match.group(0)], text)


def attributeEncode(text: str) -> str:
    return text.replace(">", "&gt;").replace("<", "&lt;").replace('"', "&quot;")


def encodeAmpsAndAngles(text: str) -> str:
    """
    Encodes ampersands that don't start an entity,
    and < that doesn't start a tag.
    """
    text = ampsRe.sub("&amp;", text)
    return anglesRe.sub("&lt;", text)


def encodeCode(code: str) -> str:
    """
    Everything inside code is literal:
    entities aren't entities, and markdown characters are hidden
    so later passes leave them alone.
    """

    def replacer(match: re.Match[str]) -> str:
        char = match.group(0)
        if char == "&":
            return "&amp;"
        if char == "<":
            return "&lt;"
        if char == ">":
            return "&gt;"
        return ESCAPE_TABLE[char]

    return codeEncoderRe.sub(replacer, code)


def encodeProblemUrlChars(url: str) -> str:
    "Hex-encodes the characters that trip up naive URL detection."
    chars = []
    for i, char in enumerate(url):
        encode = char in PROBLEM_URL_CHARS
        if encode and char == ":" and i < len(url) - 1:
            # Leave "http://" and "host:8080" alone.
            nextChar = url[i + 1]
            encode = nextChar != "/" and not ("0" <= nextChar <= "9")
        if encode:
            chars.append(f"%{ord(char):x}")
        else:
            chars.append(char)
    return "".join(chars)


def encodeEmailAddress(addr: str, random: _random.Random) -> str:
    """
    Roughly 10% raw, 45% hex, 45% decimal entities,
    to slow down address harvesters.
    @ is always encoded, : never is.
    """
    chars = []
    for char in addr:
        r = random.randint(1, 99)
        if (r > 90 or char == ":") and char != "@":
            chars.append(char)
        elif r < 45:
            chars.append(f"&#x{ord(char):x};")
        else:
            chars.append(f"&#{ord(char)};")
    return "".join(chars)


def saveFromAutoLinking(text: str) -> str:
    return text.replace("://", constants.autoLinkPreventionMarker)


def restoreAutoLinking(text: str) -> str:
    return text.replace(constants.autoLinkPreventionMarker, "://")


def unescapeChars(text: str) -> str:
    "Swaps every escaped-character placeholder back to its character."
    return escapePlaceholderRe.sub(lambda match: INVERTED_ESCAPE_TABLE.get(match.group(0), match.group(0)), text)


def unescape(text: str, htmlBlocks: t.Mapping[str, str] | None = None) -> str:
    """
    Final pass of a transform.
    Any block placeholder still sitting in the text gets one lookup
    (paragraph formation normally has already expanded them all),
    then every escaped character is restored.
    """
    if htmlBlocks:
        text = htmlBlockHashRe.sub(lambda match: htmlBlocks.get(match.group(0), match.group(0)), text)
    return unescapeChars(text)
