import random
from concurrent.futures import ThreadPoolExecutor

import lxml.html
import pytest

import sharpdown
from sharpdown import config
from sharpdown.markdown import Markdown, TransformSession, foldLinkId, transform, version

SAMPLES = [
    "# Title\n\nSome *text* with `code` and a [link](http://example.com/).\n",
    "> quote\n> > nested\n\n- a\n- b\n\n    code\n",
    "<div>\n**raw**\n</div>\n\n<foo@example.com> and http://example.com/x_y_z\n",
    "1. one\n\n2. two\n\n    more\n\n* * *\n",
    '[ref][r]\n\n[r]: http://r.com/ "Title"\n',
    "a\\_b \\*c\\* \\\\ \\` \\{\\} \\[\\] \\(\\) \\# \\+ \\- \\. \\! \\/\n",
]


def test_version():
    assert version == "1.13"
    assert Markdown.version == "1.13"
    assert Markdown().version == "1.13"


def test_empty_inputs_give_empty_output(converter):
    assert converter.transform(None) == ""
    assert converter.transform("") == ""
    assert converter.transform("  \n\t\n\r\n") == ""
    assert converter.transform("[x]: http://example.com/\n") == ""


def test_non_text_input_is_rejected(converter):
    with pytest.raises(TypeError):
        converter.transform(b"bytes")
    with pytest.raises(TypeError):
        converter.transform(42)


def test_module_level_transform():
    assert transform("# Title\n") == "<h1>Title</h1>"
    assert sharpdown.transform("Title\n===\n") == "<h1>Title</h1>"
    assert transform("a\nb", sharpdown.Options(autoNewlines=True)) == "<p>a<br/>\nb</p>"


def test_headers_and_rules(converter):
    assert converter.transform("Title\n---\n") == "<h2>Title</h2>"
    assert converter.transform("***\n") == "<hr/>"


def test_code_blocks(converter):
    assert converter.transform("    code\n") == "<pre><code>code\n</code></pre>"
    assert converter.transform("\tif (a < b) { *x* }\n") == "<pre><code>if (a &lt; b) { *x* }\n</code></pre>"


@pytest.mark.parametrize("depth", [1, 2, 3, 6, 8])
def test_nested_blockquotes(converter, depth):
    source = "> " * depth + "deep\n"
    root = lxml.html.fragment_fromstring(converter.transform(source))
    quotes = [root] + list(root.iterdescendants("blockquote"))
    assert len(quotes) == depth
    assert all(el.tag == "blockquote" for el in quotes)
    assert quotes[-1].find("p").text == "deep"


@pytest.mark.parametrize("source", SAMPLES)
def test_no_placeholders_leak(converter, source):
    assert "\x1a" not in converter.transform(source)


def test_backslash_escapes_come_out_literal(converter):
    assert converter.transform(SAMPLES[-1]) == "<p>a_b *c* \\ ` {} [] () # + - . ! /</p>"


def test_output_is_deterministic():
    for source in SAMPLES:
        first = Markdown(random=random.Random(3)).transform(source)
        second = Markdown(random=random.Random(3)).transform(source)
        assert first == second


def test_link_definitions_do_not_leak_between_calls(converter):
    assert converter.transform("[x]: http://a.com/\n\n[x]\n") == '<p><a href="http://a.com/">x</a></p>'
    assert converter.transform("[x]\n") == "<p>[x]</p>"


def test_concurrent_transforms_are_isolated(converter):
    def render(i):
        return converter.transform(f"[x]: http://example.com/{i}\n\n[link][x]\n")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(render, range(64)))
    for i, result in enumerate(results):
        assert result == f'<p><a href="http://example.com/{i}">link</a></p>'


def test_session_is_cleared_after_each_transform(monkeypatch, converter):
    sessions = []
    original = Markdown.newSession

    def recordingSession(self):
        session = original(self)
        sessions.append(session)
        return session

    monkeypatch.setattr(Markdown, "newSession", recordingSession)
    converter.transform("<div>\nx\n</div>\n\n[a]: http://a.com/\n\n[a]\n")
    assert len(sessions) == 1
    assert sessions[0].links == {}
    assert sessions[0].htmlBlocks == {}
    assert sessions[0].listLevel == 0


def test_link_ids_fold_case_and_whitespace():
    assert foldLinkId("Some  Link\nText") == "some link text"
    session = TransformSession(config.Options(), random.Random())
    session.addLink("Foo Bar", "/u")
    assert session.getLink("foo\n  bar").url == "/u"


def test_options_validation():
    with pytest.raises(ValueError):
        config.Options(emptyElementSuffix="br")
    options = config.Options().replace(autoNewlines=True)
    assert options.autoNewlines
    assert not config.Options().autoNewlines
    assert config.Options(emptyElementSuffix=">").emptyElementSuffix == ">"
