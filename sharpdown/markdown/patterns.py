from __future__ import annotations

import re

from .. import constants

# The nesting patterns below lean on atomic groups (?>...),
# which keep the unbounded alternations from backtracking catastrophically.
# Nesting is followed only nestDepth levels deep;
# anything deeper simply fails to match and is left as plain text.

NEST = constants.nestDepth
TAB = constants.tabWidth
LESS_THAN_TAB = TAB - 1

PH = re.escape(constants.placeholderChar)

MARKER_UL = r"[*+-]"
MARKER_OL = r"\d+[.]"
MARKER_ANY = rf"(?:{MARKER_UL}|{MARKER_OL})"

CHAR_INSIDE_URL = r"[-A-Z0-9+&@#/%?=~_|\[\]\(\)!:,\.;" + PH + "]"
CHAR_ENDING_URL = r"[-A-Z0-9+&@#/%=~_|\[\])]"


def nestedBracketsPattern(depth: int = NEST) -> str:
    "[this] and [this[also]] and [this[also[too]]], up to depth."
    return r"(?>[^\[\]]+|\[" * depth + r"\])*" * depth


def nestedParensPattern(depth: int = NEST) -> str:
    "(this) and (this(also)) and (this(also(too))), up to depth; no whitespace outside parens."
    return r"(?>[^()\s]+|\(" * depth + r"\))*" * depth


def nestedTagPattern(depth: int = NEST) -> str:
    "A <tag>, whose attribute values may themselves contain <tags>, up to depth."
    return r"(?:<[A-Za-z/!$](?:[^<>]|" * depth + r")*>)" * depth


# Placeholders
htmlBlockHashRe = re.compile(PH + constants.htmlBlockKind + r"\d+" + constants.htmlBlockKind)
escapePlaceholderRe = re.compile(PH + constants.escapeKind + r"\d+" + constants.escapeKind)

# Whitespace plumbing
newlinesLeadingTrailingRe = re.compile(r"^\n+|\n+\Z")
newlinesMultipleRe = re.compile(r"\n{2,}")
leadingSpacesRe = re.compile(r"^[ ]*")
outdentRe = re.compile(rf"^[ ]{{1,{TAB}}}", re.M)
trailingBlankLinesRe = re.compile(r"\n{2,}\Z")


# [id]: url "optional title"
linkDefRe = re.compile(
    rf"""
    ^[ ]{{0,{LESS_THAN_TAB}}}\[([^\[\]]+)\]:  # id = $1
      [ ]*
      \n?                   # maybe *one* newline
      [ ]*
    <?(\S+?)>?              # url = $2
      [ ]*
      \n?                   # maybe one newline
      [ ]*
    (?:
        (?<=\s)             # lookbehind for whitespace
        ["(]
        (.+?)               # title = $3
        [")]
        [ ]*
    )?                      # title is optional
    (?:\n+|\Z)
    """,
    re.M | re.X,
)


def _blockHtmlPattern() -> str:
    # Two families of block tags:
    # * "a" tags can be inline or block-level,
    #   so they only count when the start tag sits alone on its line.
    # * "b" tags are always block-level.
    blockTagsA = "ins|del"
    blockTagsB = "p|div|h[1-6]|blockquote|pre|table|dl|ol|ul|address|script|noscript|form|fieldset|iframe|math"

    attr = r"""
        (?>                 # optional tag attributes
          \s                # starts with whitespace
          (?>
            [^>"/]+         # text outside quotes
          |
            /+(?!>)         # slash not followed by >
          |
            "[^"]*"         # text inside double quotes (tolerate >)
          |
            '[^']*'         # text inside single quotes (tolerate >)
          )*
        )?
    """

    # Content of a block: text, other tags, and nested copies of the *same* tag.
    contentOpen = (
        r"""
        (?>
          [^<]+             # content without tag
        |
          <\2               # nested opening tag
        """
        + attr
        + r"""
          (?>
              />
          |
              >"""
    )
    contentClose = r"""
              </\2\s*>      # closing nested tag
          )
        |
          <(?!/\2\s*>       # other tags with a different name
          )
        )*"""
    content = contentOpen * NEST + ".*?" + contentClose * NEST
    content2 = content.replace(r"\2", r"\3")

    pattern = rf"""
    (?>
          (?>
            (?<=\n)         # Starting at the beginning of a line
            |               # or
            \A\n?           # the beginning of the doc
          )
          (                 # save in $1

              # <tag> at the left margin to </tag> followed by a newline,
              # handling nested copies of the same tag in between.
                <({blockTagsB})         # start tag = $2
                {attr}>
                {content}
                </\2>
                [ ]*
                (?=\n+|\Z)

          |   # Tags of group a, whose start tag must be alone on its line.
                <({blockTagsA})         # start tag = $3
                {attr}>[ ]*\n
                {content2}
                </\3>
                [ ]*
                (?=\n+|\Z)

          |   # <hr>, which has no content to nest
                [ ]{{0,{LESS_THAN_TAB}}}
                <hr
                {attr}
                /?>
                [ ]*
                (?=\n{{2,}}|\Z)

          |   # Standalone HTML comments, preceded by a blank line or start of document
                (?:(?<=\n\n)|\A)
                [ ]{{0,{LESS_THAN_TAB}}}
                (?s:
                  <!--(?:|(?:[^>-]|-[^>])(?:[^-]|-[^-])*)-->
                )
                [ ]*
                (?=\n{{2,}}|\Z)

          |   # PHP- and ASP-style processor instructions (<? and <%)
                [ ]{{0,{LESS_THAN_TAB}}}
                (?s:
                  <([?%])       # $4
                  .*?
                  \4>
                )
                [ ]*
                (?=\n{{2,}}|\Z)
          )
    )
    """
    return pattern


blocksHtmlRe = re.compile(_blockHtmlPattern(), re.M | re.X)

htmlTokensRe = re.compile(
    r"<!--(?:|(?:[^>-]|-[^>])(?:[^-]|-[^-])*)-->"  # <!-- foo -->
    + r"|<\?.*?\?>"  # <?foo?>
    + "|"
    + nestedTagPattern(),  # <tag> and </tag>
    re.S,
)

# Block gamut

headerSetextRe = re.compile(
    r"""
    ^(.+?)
    [ ]*
    \n
    (=+|-+)     # $2 = string of ='s or -'s
    [ ]*
    \n+
    """,
    re.M | re.X,
)

headerAtxRe = re.compile(
    r"""
    ^(\#{1,6})  # $1 = string of #'s
    [ ]*
    (.+?)       # $2 = Header text
    [ ]*
    \#*         # optional closing #'s (not counted)
    \n+
    """,
    re.M | re.X,
)

horizontalRuleRe = re.compile(
    r"""
    ^[ ]{0,3}         # Leading space
        ([-*_])       # $1: First marker
        (?>           # Repeated marker group
            [ ]{0,2}  # Zero, one, or two spaces.
            \1        # Marker character
        ){2,}         # Group repeated at least twice
        [ ]*          # Trailing spaces
        $             # End of line.
    """,
    re.M | re.X,
)

WHOLE_LIST = rf"""
    (                               # $1 = whole list
      (                             # $2
        [ ]{{0,{LESS_THAN_TAB}}}
        ({MARKER_ANY})              # $3 = first list item marker
        [ ]+
      )
      (?s:.+?)
      (                             # $4
          \Z
        |
          \n{{2,}}
          (?=\S)
          (?!                       # Negative lookahead for another list item marker
            [ ]*
            {MARKER_ANY}[ ]+
          )
      )
    )
"""

# Inside a list, any line can start a sub-list.
listNestedRe = re.compile(r"^" + WHOLE_LIST, re.M | re.X)

# Outside one, a list needs a blank line (or the start of the document) before it,
# so that "version\n8. Oops" stays a paragraph.
listTopLevelRe = re.compile(r"(?:(?<=\n\n)|\A\n?)" + WHOLE_LIST, re.M | re.X)

listMarkerUlRe = re.compile(MARKER_UL)


def listItemPattern(marker: str) -> re.Pattern[str]:
    return re.compile(
        rf"""
        (^[ ]*)                     # leading whitespace = $1
        ({marker}) [ ]+             # list marker = $2
        ((?s:.+?)                   # list item text = $3
        (\n+))
        (?= (\Z | \1 ({marker}) [ ]+))
        """,
        re.M | re.X,
    )


listItemUlRe = listItemPattern(MARKER_UL)
listItemOlRe = listItemPattern(MARKER_OL)

codeBlockRe = re.compile(
    rf"""
    (?:\n\n|\A\n?)
    (                        # $1 = the code block -- one or more lines, starting with a space
    (?:
        (?:[ ]{{{TAB}}})     # Lines must start with a tab-width of spaces
        .*\n+
    )+
    )
    ((?=^[ ]{{0,{TAB}}}[^ \t\n])|\Z) # Lookahead for non-space at line-start, or end of doc
    """,
    re.M | re.X,
)

blockquoteRe = re.compile(
    r"""
    (                           # Wrap whole match in $1
        (
        ^[ ]*>[ ]?              # '>' at the start of a line
            .+\n                # rest of the first line
        (.+\n)*                 # subsequent consecutive lines
        \n*                     # blanks
        )+
    )
    """,
    re.M | re.X,
)
blockquoteMarkerRe = re.compile(r"^[ ]*>[ ]?", re.M)
spacesOnlyLineRe = re.compile(r"^[ ]+$", re.M)
lineStartRe = re.compile(r"^", re.M)
quotedPreRe = re.compile(r"(\s*<pre>.+?</pre>)", re.S)
quotedPreIndentRe = re.compile(r"^  ", re.M)

# Span gamut

codeSpanRe = re.compile(
    r"""
    (?<![\\`])   # Character before opening ` can't be a backslash or backtick
    (`+)         # $1 = Opening run of `
    (?!`)        # and no more backticks -- match the full run
    (.+?)        # $2 = The code block
    (?<!`)
    \1
    (?!`)
    """,
    re.S | re.X,
)
codeSpanEdgeSpacesRe = re.compile(r"^[ ]*|[ ]*$")

codeTagInsideTagRe = re.compile(r"(?<=.)</?code>(?=.)")

anchorRefRe = re.compile(
    rf"""
    (                               # wrap whole match in $1
        \[
            ({nestedBracketsPattern()})  # link text = $2
        \]

        [ ]?                        # one optional space
        (?:\n[ ]*)?                 # one optional newline followed by spaces

        \[
            (.*?)                   # id = $3
        \]
    )
    """,
    re.S | re.X,
)

anchorInlineRe = re.compile(
    rf"""
    (                           # wrap whole match in $1
        \[
            ({nestedBracketsPattern()})  # link text = $2
        \]
        \(                      # literal paren
            [ ]*
            ({nestedParensPattern()})    # href = $3
            [ ]*
            (                   # $4
            (['"])              # quote char = $5
            (.*?)               # title = $6
            \5                  # matching quote
            [ ]*                # ignore any spaces between closing quote and )
            )?                  # title is optional
        \)
    )
    """,
    re.S | re.X,
)

anchorRefShortcutRe = re.compile(
    r"""
    (                               # wrap whole match in $1
      \[
         ([^\[\]]+)                 # link text = $2; can't contain [ or ]
      \]
    )
    """,
    re.S | re.X,
)

imagesRefRe = re.compile(
    r"""
    (               # wrap whole match in $1
    !\[
        (.*?)       # alt text = $2
    \]

    [ ]?            # one optional space
    (?:\n[ ]*)?     # one optional newline followed by spaces

    \[
        (.*?)       # id = $3
    \]
    )
    """,
    re.S | re.X,
)

imagesInlineRe = re.compile(
    rf"""
    (                     # wrap whole match in $1
      !\[
          (.*?)           # alt text = $2
      \]
      \s?                 # one optional whitespace character
      \(                  # literal paren
          [ ]*
          ({nestedParensPattern()})  # href = $3
          [ ]*
          (               # $4
          (['"])          # quote char = $5
          (.*?)           # title = $6
          \5              # matching quote
          [ ]*
          )?              # title is optional
      \)
    )
    """,
    re.S | re.X,
)

linkIdWhitespaceRe = re.compile(r"\s+")

# A leading < or =" means the URL is already inside a tag or attribute;
# consuming it (rather than a lookbehind) keeps the URL from matching again.
autolinkBareRe = re.compile(
    r"(<|=\")?\b(https?|ftp)(://" + CHAR_INSIDE_URL + "*" + CHAR_ENDING_URL + r")(?=$|\W)",
    re.I,
)
endCharRe = re.compile(CHAR_ENDING_URL, re.I)
urlParensRe = re.compile(r"[()]")

hyperlinkRe = re.compile(r"<((https?|ftp):[^'\">\s]+)>")

emailRe = re.compile(
    r"""
    <
    (?:mailto:)?
    (
      [-.\w]+
      \@
      [-a-z0-9]+(\.[-a-z0-9]+)*\.[a-z]+
    )
    >
    """,
    re.I | re.X,
)
mailtoTextRe = re.compile(r"\">.+?:")

boldRe = re.compile(r"(\*\*|__) (?=\S) (.+?[*_]*) (?<=\S) \1", re.S | re.X)
strictBoldRe = re.compile(r"(^|[\W_])(?:(?!\1)|(?=^))(\*|_)\2(?=\S)(.*?\S)\2\2(?!\2)(?=[\W_]|$)", re.S)
italicRe = re.compile(r"(\*|_) (?=\S) (.+?) (?<=\S) \1", re.S | re.X)
strictItalicRe = re.compile(r"(^|[\W_])(?:(?!\1)|(?=^))(\*|_)(?=\S)((?:(?!\2).)*?\S)\2(?!\2)(?=[\W_]|$)", re.S)

hardBreakRe = re.compile(r" {2,}\n")
newlineRe = re.compile(r"\n")
