from __future__ import annotations

import re

from .. import constants, t
from .. import messages as m
from . import escapes
from .patterns import (
    blockquoteMarkerRe,
    blockquoteRe,
    blocksHtmlRe,
    codeBlockRe,
    headerAtxRe,
    headerSetextRe,
    horizontalRuleRe,
    htmlBlockHashRe,
    leadingSpacesRe,
    lineStartRe,
    linkDefRe,
    listItemOlRe,
    listItemUlRe,
    listMarkerUlRe,
    listNestedRe,
    listTopLevelRe,
    newlinesLeadingTrailingRe,
    newlinesMultipleRe,
    outdentRe,
    quotedPreIndentRe,
    quotedPreRe,
    spacesOnlyLineRe,
    trailingBlankLinesRe,
)
from .spans import runSpanGamut

if t.TYPE_CHECKING:
    from .session import TransformSession


def hashBlock(block: str, session: TransformSession) -> str:
    key = escapes.hashKey(block, constants.htmlBlockKind)
    session.htmlBlocks[key] = block
    return "\n\n" + key + "\n\n"


def hashHtmlBlocks(text: str, session: TransformSession) -> str:
    """
    Pulls block-level HTML out of the text and swaps it for placeholders,
    so that nothing we do to the rest of the document can reach inside it.
    """
    return blocksHtmlRe.sub(lambda match: hashBlock(match.group(1), session), text)


def stripLinkDefinitions(text: str, session: TransformSession) -> str:
    """
    Records every [id]: url "title" definition in the session,
    and removes the definitions from the text.
    """

    def replacer(match: re.Match[str]) -> str:
        url = escapes.encodeAmpsAndAngles(match.group(2))
        title = match.group(3)
        if title:
            title = title.replace('"', "&quot;")
        session.addLink(match.group(1), url, title or None)
        return ""

    return linkDefRe.sub(replacer, text)


def runBlockGamut(text: str, session: TransformSession, unhash: bool = True) -> str:
    """
    Everything that forms a block: headers, rules, lists, code, quotes,
    and finally paragraphs out of whatever is left.
    Called recursively for the insides of list items and blockquotes.
    """
    text = doHeaders(text, session)
    text = doHorizontalRules(text, session)
    text = doLists(text, session)
    text = doCodeBlocks(text)
    text = doBlockQuotes(text, session)

    # Whatever we just generated is block-level HTML too,
    # and mustn't be wrapped in <p>s.
    text = hashHtmlBlocks(text, session)

    return formParagraphs(text, session, unhash=unhash)


def doHeaders(text: str, session: TransformSession) -> str:
    """
    Header 1
    ========

    Header 2
    --------

    # Header 1
    ## Header 2 ##
    ###### Header 6
    """

    def setextReplacer(match: re.Match[str]) -> str:
        level = 1 if match.group(2).startswith("=") else 2
        return f"<h{level}>{runSpanGamut(match.group(1), session)}</h{level}>\n\n"

    def atxReplacer(match: re.Match[str]) -> str:
        level = len(match.group(1))
        return f"<h{level}>{runSpanGamut(match.group(2), session)}</h{level}>\n\n"

    text = headerSetextRe.sub(setextReplacer, text)
    text = headerAtxRe.sub(atxReplacer, text)
    return text


def doHorizontalRules(text: str, session: TransformSession) -> str:
    hr = f"<hr{session.options.emptyElementSuffix}\n"
    return horizontalRuleRe.sub(lambda _: hr, text)


def doLists(text: str, session: TransformSession, insideParagraphlessItem: bool = False) -> str:
    # A list nested inside another list can start on any line;
    # a top-level one needs a blank line before it.
    if session.listLevel > 0:
        pattern = listNestedRe
    else:
        pattern = listTopLevelRe

    def replacer(match: re.Match[str]) -> str:
        if listMarkerUlRe.search(match.group(3)):
            listType = "ul"
            itemRe = listItemUlRe
        else:
            listType = "ol"
            itemRe = listItemOlRe
        items = processListItems(match.group(1), itemRe, session, insideParagraphlessItem)
        return f"<{listType}>\n{items}</{listType}>\n"

    return pattern.sub(replacer, text)


def processListItems(
    listText: str,
    itemRe: re.Pattern[str],
    session: TransformSession,
    insideParagraphlessItem: bool = False,
) -> str:
    """
    Turns the items of one list into <li>s.

    An item is "loose" (its content gets wrapped in <p>s) if it contains
    a blank line, or if the item before it ended with one.
    Otherwise it's "tight", and only gets span-level processing.
    """
    session.listLevel += 1
    try:
        # Trailing blank lines would make the last item look loose.
        listText = trailingBlankLinesRe.sub("\n", listText)

        chunks = []
        pos = 0
        lastItemHadDoubleNewline = False
        for match in itemRe.finditer(listText):
            chunks.append(listText[pos : match.start()])
            pos = match.end()

            item = match.group(3)
            endsWithDoubleNewline = item.endswith("\n\n")
            if endsWithDoubleNewline or "\n\n" in item or lastItemHadDoubleNewline:
                item = runBlockGamut(outdent(item) + "\n", session, unhash=False)
            else:
                item = doLists(outdent(item), session, insideParagraphlessItem=True)
                item = item.rstrip("\n")
                if not insideParagraphlessItem:
                    # The nested list's items have already had their spans run.
                    item = runSpanGamut(item, session)
            lastItemHadDoubleNewline = endsWithDoubleNewline
            chunks.append(f"<li>{item}</li>\n")
        chunks.append(listText[pos:])
        return "".join(chunks)
    finally:
        session.listLevel -= 1


def doCodeBlocks(text: str) -> str:
    "Lines indented a full tab width are code, and come out exactly as written."

    def replacer(match: re.Match[str]) -> str:
        code = escapes.encodeCode(outdent(match.group(1)))
        code = newlinesLeadingTrailingRe.sub("", code)
        return f"\n\n<pre><code>{code}\n</code></pre>\n\n"

    return codeBlockRe.sub(replacer, text)


def doBlockQuotes(text: str, session: TransformSession) -> str:
    return blockquoteRe.sub(lambda match: blockQuoteReplacer(match, session), text)


def blockQuoteReplacer(match: re.Match[str], session: TransformSession) -> str:
    bq = match.group(1)
    # Strip one level of quoting, and blank out lines that were just "> ".
    bq = blockquoteMarkerRe.sub("", bq)
    bq = spacesOnlyLineRe.sub("", bq)

    bq = runBlockGamut(bq, session)
    bq = lineStartRe.sub("  ", bq)

    # Leading spaces inside a <pre> are content, so take the indent back out.
    bq = quotedPreRe.sub(lambda pre: quotedPreIndentRe.sub("", pre.group(1)), bq)

    return hashBlock(f"<blockquote>\n{bq}\n</blockquote>", session)


def formParagraphs(text: str, session: TransformSession, unhash: bool = True) -> str:
    """
    Splits what's left on blank lines.
    Chunks that are block placeholders get their HTML back (if unhash is set);
    everything else becomes a <p>.
    """
    text = newlinesLeadingTrailingRe.sub("", text)
    if not text:
        return ""

    blockPrefix = constants.placeholderChar + constants.htmlBlockKind
    grafs = newlinesMultipleRe.split(text)
    for i, graf in enumerate(grafs):
        if graf.startswith(blockPrefix):
            if unhash:
                grafs[i] = unhashBlocks(graf, session)
        else:
            graf = runSpanGamut(graf, session)
            grafs[i] = leadingSpacesRe.sub("<p>", graf, count=1) + "</p>"
    return "\n\n".join(grafs)


def unhashBlocks(text: str, session: TransformSession) -> str:
    """
    Swaps block placeholders for their HTML.
    Blocks can contain further placeholders (a list inside a blockquote, say),
    so this repeats until nothing is left to swap, up to a fixed number of rounds.
    """

    def lookup(match: re.Match[str]) -> str:
        return session.htmlBlocks.get(match.group(0), match.group(0))

    for _ in range(constants.maxUnhashRounds):
        if not hasKnownBlocks(text, session):
            return text
        text = htmlBlockHashRe.sub(lookup, text)
    leftover = countKnownBlocks(text, session)
    if leftover:
        m.warn(
            f"Gave up expanding nested HTML blocks after {constants.maxUnhashRounds} rounds; "
            + f"{leftover} placeholder(s) are left in the output."
        )
    return text


def hasKnownBlocks(text: str, session: TransformSession) -> bool:
    return countKnownBlocks(text, session) > 0


def countKnownBlocks(text: str, session: TransformSession) -> int:
    return sum(1 for key in htmlBlockHashRe.findall(text) if key in session.htmlBlocks)


def outdent(block: str) -> str:
    "Removes one level of indentation from every line."
    return outdentRe.sub("", block)
