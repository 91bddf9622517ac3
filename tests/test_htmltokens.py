from sharpdown.markdown import HtmlToken, TokenType, tokenizeHtml


def test_splits_tags_from_text():
    tokens = tokenizeHtml("a <b>c</b> d")
    assert tokens == [
        HtmlToken(TokenType.TEXT, "a "),
        HtmlToken(TokenType.TAG, "<b>"),
        HtmlToken(TokenType.TEXT, "c"),
        HtmlToken(TokenType.TAG, "</b>"),
        HtmlToken(TokenType.TEXT, " d"),
    ]


def test_comments_and_processing_instructions_are_single_tags():
    tokens = tokenizeHtml("x<!-- a <b> -->y<?php echo 1; ?>")
    assert [token.type for token in tokens] == [TokenType.TEXT, TokenType.TAG, TokenType.TEXT, TokenType.TAG]
    assert tokens[1].value == "<!-- a <b> -->"
    assert tokens[3].value == "<?php echo 1; ?>"


def test_tags_inside_attribute_values():
    tokens = tokenizeHtml('<a title="<b>">x</a>')
    assert tokens[0] == HtmlToken(TokenType.TAG, '<a title="<b>">')


def test_tokens_rebuild_the_input():
    text = 'plain <em class="x">emph</em> & <br/> more < text'
    assert "".join(token.value for token in tokenizeHtml(text)) == text


def test_empty_input():
    assert tokenizeHtml("") == []


def titledTag(depth):
    tag = "<i>"
    for _ in range(depth - 1):
        tag = f'<a title="{tag}">'
    return tag


def test_tags_nested_in_attributes_up_to_six_deep():
    tag = titledTag(6)
    tokens = tokenizeHtml(tag + "x</a>")
    assert tokens == [
        HtmlToken(TokenType.TAG, tag),
        HtmlToken(TokenType.TEXT, "x"),
        HtmlToken(TokenType.TAG, "</a>"),
    ]


def test_tags_nested_deeper_are_not_one_tag():
    tag = titledTag(7)
    tokens = tokenizeHtml(tag)
    assert tokens[0].type == TokenType.TEXT
    assert "".join(token.value for token in tokens) == tag
