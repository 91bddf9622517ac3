from __future__ import annotations

import re

from .. import t
from . import escapes
from .escapes import ESCAPE_TABLE
from .htmltokens import TokenType, iterTokens
from .patterns import (
    anchorInlineRe,
    anchorRefRe,
    anchorRefShortcutRe,
    autolinkBareRe,
    boldRe,
    codeSpanEdgeSpacesRe,
    codeSpanRe,
    codeTagInsideTagRe,
    emailRe,
    endCharRe,
    hardBreakRe,
    hyperlinkRe,
    imagesInlineRe,
    imagesRefRe,
    italicRe,
    mailtoTextRe,
    newlineRe,
    strictBoldRe,
    strictItalicRe,
    urlParensRe,
)

if t.TYPE_CHECKING:
    from .. import config
    from .session import TransformSession


def runSpanGamut(text: str, session: TransformSession) -> str:
    """
    Inline markup: everything that can happen *within* a paragraph,
    header, or list item.
    The order matters; see the comments below.
    """
    options = session.options
    text = doCodeSpans(text)
    text = escapeSpecialCharsWithinTagAttributes(text, options)
    text = escapes.escapeBackslashes(text)

    # Images must come first, because ![foo][f] looks like a link.
    text = doImages(text, session)
    text = doAnchors(text, session)

    # Must come after doAnchors(), because you can use < and >
    # delimiters in inline links like [this](<url>).
    text = doAutoLinks(text, session)

    text = escapes.restoreAutoLinking(text)
    text = escapes.encodeAmpsAndAngles(text)
    text = doItalicsAndBold(text, options)
    text = doHardBreaks(text, options)
    return text


def doCodeSpans(text: str) -> str:
    """
    `code` spans.
    Backtick runs of any length can delimit a span,
    so ``a `literal` backtick`` works,
    and edge spaces are trimmed so `` `ticks` `` works too.
    """

    def replacer(match: re.Match[str]) -> str:
        span = codeSpanEdgeSpacesRe.sub("", match.group(2))
        span = escapes.encodeCode(span)
        # Code *blocks* never reach the autolinker, but spans would.
        span = escapes.saveFromAutoLinking(span)
        return f"<code>{span}</code>"

    return codeSpanRe.sub(replacer, text)


def escapeSpecialCharsWithinTagAttributes(text: str, options: config.Options) -> str:
    """
    Inside tags, hide the characters markdown would otherwise act on
    (\\ * _, and stray `code` tags inside attribute values).
    """
    chunks = []
    for token in iterTokens(text):
        value = token.value
        if token.type is TokenType.TAG:
            value = value.replace("\\", ESCAPE_TABLE["\\"])
            if options.autoHyperlink and value.startswith("<!"):
                # A URL in a comment must not become a link.
                value = value.replace("/", ESCAPE_TABLE["/"])
            value = codeTagInsideTagRe.sub(lambda _: ESCAPE_TABLE["`"], value)
            value = escapes.escapeBoldItalic(value)
        chunks.append(value)
    return "".join(chunks)


def encodeUrl(url: str, options: config.Options) -> str:
    if options.encodeProblemUrlChars:
        url = escapes.encodeProblemUrlChars(url)
    return escapes.escapeBoldItalic(url)


def linkTag(url: str, text: str, title: str | None, options: config.Options) -> str:
    result = f'<a href="{encodeUrl(url, options)}"'
    if title:
        title = escapes.attributeEncode(escapes.escapeBoldItalic(title))
        result += f' title="{title}"'
    return result + f">{text}</a>"


def imageTag(url: str, altText: str, title: str | None, options: config.Options) -> str:
    altText = escapes.escapeImageAltText(escapes.attributeEncode(altText))
    result = f'<img src="{encodeUrl(url, options)}" alt="{altText}"'
    if title:
        title = escapes.attributeEncode(escapes.escapeBoldItalic(title))
        result += f' title="{title}"'
    return result + options.emptyElementSuffix


def stripAngles(url: str) -> str:
    if url.startswith("<") and url.endswith(">"):
        return url[1:-1]
    return url


def doImages(text: str, session: TransformSession) -> str:
    """
    ![alt text][id]
    ![alt text](url "optional title")
    """
    options = session.options

    def refReplacer(match: re.Match[str]) -> str:
        altText = match.group(2)
        # ![this][] uses the alt text as the id
        linkId = match.group(3) or altText
        link = session.getLink(linkId)
        if link is None:
            # Unknown ids are left exactly as written.
            return match.group(1)
        return imageTag(link.url, altText, link.title, options)

    def inlineReplacer(match: re.Match[str]) -> str:
        url = stripAngles(match.group(3))
        return imageTag(url, match.group(2), match.group(6), options)

    text = imagesRefRe.sub(refReplacer, text)
    text = imagesInlineRe.sub(inlineReplacer, text)
    return text


def doAnchors(text: str, session: TransformSession) -> str:
    """
    [link text][id]
    [link text](url "optional title")
    [id]

    Shortcuts go last, so they never eat the first half of
    [link text][id] or [link text](url).
    """
    options = session.options

    def refReplacer(match: re.Match[str]) -> str:
        # [this][] uses the link text as the id
        linkId = match.group(3) or match.group(2)
        link = session.getLink(linkId)
        if link is None:
            return match.group(1)
        linkText = escapes.saveFromAutoLinking(match.group(2))
        return linkTag(link.url, linkText, link.title, options)

    def inlineReplacer(match: re.Match[str]) -> str:
        linkText = escapes.saveFromAutoLinking(match.group(2))
        url = encodeUrl(match.group(3), options)
        url = stripAngles(url)
        result = f'<a href="{url}"'
        title = match.group(6)
        if title:
            title = escapes.escapeBoldItalic(escapes.attributeEncode(title))
            result += f' title="{title}"'
        return result + f">{linkText}</a>"

    def shortcutReplacer(match: re.Match[str]) -> str:
        link = session.getLink(match.group(2))
        if link is None:
            return match.group(1)
        linkText = escapes.saveFromAutoLinking(match.group(2))
        return linkTag(link.url, linkText, link.title, options)

    text = anchorRefRe.sub(refReplacer, text)
    text = anchorInlineRe.sub(inlineReplacer, text)
    text = anchorRefShortcutRe.sub(shortcutReplacer, text)
    return text


def doAutoLinks(text: str, session: TransformSession) -> str:
    """
    <http://www.example.com>
    <address@example.com>
    and, if autoHyperlink is on, bare http://www.example.com
    """
    options = session.options
    if options.autoHyperlink:
        # Wrap bare URLs in <>, so the next step links them too.
        # Every other URL in the text is already inside an <a href="">,
        # which the pattern skips over.
        text = autolinkBareRe.sub(handleTrailingParens, text)

    def hyperlinkReplacer(match: re.Match[str]) -> str:
        link = match.group(1)
        return f'<a href="{encodeUrl(link, options)}">{link}</a>'

    text = hyperlinkRe.sub(hyperlinkReplacer, text)

    if not options.linkEmails:
        return text

    def emailReplacer(match: re.Match[str]) -> str:
        address = escapes.encodeEmailAddress("mailto:" + escapes.unescapeChars(match.group(1)), session.random)
        link = f'<a href="{address}">{address}</a>'
        # The visible text doesn't need the mailto:
        return mailtoTextRe.sub('">', link)

    return emailRe.sub(emailReplacer, text)


def handleTrailingParens(match: re.Match[str]) -> str:
    """
    Wraps a bare URL in <>,
    leaving any unbalanced closing parens after it outside of the link:
    "(see http://example.com/foo)" shouldn't swallow the ")",
    but "http://en.wikipedia.org/wiki/Foo_(bar)" should keep its own.
    """
    if match.group(1):
        # Already inside a tag or an attribute.
        return match.group(0)
    protocol = match.group(2)
    link = match.group(3)
    if not link.endswith(")"):
        return f"<{protocol}{link}>"

    level = 0
    for paren in urlParensRe.findall(link):
        if paren == "(":
            level = 1 if level <= 0 else level + 1
        else:
            level -= 1

    tail = ""
    if level < 0:
        excess = re.search(r"\){1,%d}\Z" % -level, link)
        if excess:
            tail = excess.group(0)
            link = link[: excess.start()]
    if tail:
        lastChar = link[-1]
        if not endCharRe.match(lastChar):
            tail = lastChar + tail
            link = link[:-1]
    return f"<{protocol}{link}>{tail}"


def doItalicsAndBold(text: str, options: config.Options) -> str:
    # <strong> must go first, so ** isn't read as two *s.
    if options.strictBoldItalic:
        text = strictBoldRe.sub(r"\1<strong>\3</strong>", text)
        text = strictItalicRe.sub(r"\1<em>\3</em>", text)
    else:
        text = boldRe.sub(r"<strong>\2</strong>", text)
        text = italicRe.sub(r"<em>\2</em>", text)
    return text


def doHardBreaks(text: str, options: config.Options) -> str:
    br = f"<br{options.emptyElementSuffix}\n"
    pattern = newlineRe if options.autoNewlines else hardBreakRe
    return pattern.sub(lambda _: br, text)
