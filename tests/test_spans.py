import lxml.html
import pytest

from sharpdown import config
from sharpdown.markdown import Markdown


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("*foo*", "<p><em>foo</em></p>"),
        ("_foo_", "<p><em>foo</em></p>"),
        ("**foo**", "<p><strong>foo</strong></p>"),
        ("__foo__", "<p><strong>foo</strong></p>"),
        ("*a* and **b**", "<p><em>a</em> and <strong>b</strong></p>"),
        (r"\*foo\*", "<p>*foo*</p>"),
        ("snake_case_name", "<p>snake_case_name</p>"),
    ],
)
def test_emphasis(converter, source, expected):
    assert converter.transform(source) == expected


def test_loose_emphasis_works_inside_words():
    converter = Markdown(config.Options(strictBoldItalic=False))
    assert converter.transform("snake_case_name") == "<p>snake<em>case</em>name</p>"


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("`a<b`", "<p><code>a&lt;b</code></p>"),
        ("``a `b` c``", "<p><code>a `b` c</code></p>"),
        ("`` `ticks` ``", "<p><code>`ticks`</code></p>"),
        ("`*not em*`", "<p><code>*not em*</code></p>"),
        ("`http://example.com`", "<p><code>http://example.com</code></p>"),
    ],
)
def test_code_spans(converter, source, expected):
    assert converter.transform(source) == expected


def test_amps_and_angles(converter):
    assert converter.transform("AT&T <3") == "<p>AT&amp;T &lt;3</p>"
    assert converter.transform("&copy; &#169;") == "<p>&copy; &#169;</p>"


def test_inline_links(converter):
    assert converter.transform('[text](http://example.com "t")') == '<p><a href="http://example.com" title="t">text</a></p>'
    assert converter.transform("[a](<http://x.com/>)") == '<p><a href="http://x.com/">a</a></p>'
    assert converter.transform("[x](http://e.com/a_b_c)") == '<p><a href="http://e.com/a_b_c">x</a></p>'


def test_problem_url_characters(converter):
    assert converter.transform("[x](http://e.com/?q='a')") == '<p><a href="http://e.com/?q=%27a%27">x</a></p>'
    plain = Markdown(config.Options(encodeProblemUrlChars=False))
    assert plain.transform("[x](http://e.com/?q='a')") == "<p><a href=\"http://e.com/?q='a'\">x</a></p>"


def test_reference_links(converter):
    source = '[text][id]\n\n[id]: http://example.com/  "Title"\n'
    assert converter.transform(source) == '<p><a href="http://example.com/" title="Title">text</a></p>'


def test_implicit_and_shortcut_references(converter):
    definition = "\n\n[example]: http://e.com/\n"
    expected = '<p><a href="http://e.com/">Example</a></p>'
    assert converter.transform("[Example][]" + definition) == expected
    assert converter.transform("[Example]" + definition) == expected
    assert converter.transform("[Example]\n[]" + definition) == expected


def test_unknown_references_stay_literal(converter):
    assert converter.transform("[text][missing]") == "<p>[text][missing]</p>"
    assert converter.transform("[missing]") == "<p>[missing]</p>"


def test_images(converter):
    assert converter.transform('![alt](/img.png "Title")') == '<p><img src="/img.png" alt="alt" title="Title"/></p>'
    assert converter.transform("![logo][l]\n\n[l]: /logo.png\n") == '<p><img src="/logo.png" alt="logo"/></p>'
    assert converter.transform("![a*b*](/i.png)") == '<p><img src="/i.png" alt="a*b*"/></p>'


def test_empty_element_suffix():
    converter = Markdown(config.Options(emptyElementSuffix=" />"))
    assert converter.transform("![alt](/i.png)") == '<p><img src="/i.png" alt="alt" /></p>'
    assert converter.transform("***\n") == "<hr />"


def test_bare_urls(converter):
    assert converter.transform("see http://example.com now") == '<p>see <a href="http://example.com">http://example.com</a> now</p>'
    assert converter.transform("(see http://example.com/foo)") == '<p>(see <a href="http://example.com/foo">http://example.com/foo</a>)</p>'


def test_bare_urls_keep_balanced_parens(converter):
    assert converter.transform("http://en.wikipedia.org/wiki/Foo_(bar)") == (
        '<p><a href="http://en.wikipedia.org/wiki/Foo_%28bar%29">http://en.wikipedia.org/wiki/Foo_(bar)</a></p>'
    )


def test_autolinking_can_be_turned_off():
    converter = Markdown(config.Options(autoHyperlink=False))
    assert converter.transform("see http://example.com now") == "<p>see http://example.com now</p>"
    assert converter.transform("<http://e.com>") == '<p><a href="http://e.com">http://e.com</a></p>'


def test_urls_inside_links_are_not_linked_again(converter):
    result = converter.transform("[http://a.com](http://b.com)")
    assert result == '<p><a href="http://b.com">http://a.com</a></p>'


def test_email_links(converter):
    p = lxml.html.fragment_fromstring(converter.transform("<foo@example.com>"))
    a = p.find("a")
    assert a.get("href") == "mailto:foo@example.com"
    assert a.text_content() == "foo@example.com"


def test_email_links_can_be_turned_off():
    converter = Markdown(config.Options(linkEmails=False))
    assert converter.transform("<foo@example.com>") == "<p><foo@example.com></p>"


def test_tag_attributes_are_left_alone(converter):
    assert converter.transform('<span class="a_b">x</span>') == '<p><span class="a_b">x</span></p>'
    assert converter.transform('<a href="http://e.com/*x*">y</a>') == '<p><a href="http://e.com/*x*">y</a></p>'


def test_hard_breaks(converter):
    assert converter.transform("a  \nb") == "<p>a<br/>\nb</p>"
    assert converter.transform("a\nb") == "<p>a\nb</p>"
    newlines = Markdown(config.Options(autoNewlines=True, emptyElementSuffix=">"))
    assert newlines.transform("a\nb") == "<p>a<br>\nb</p>"


def test_nested_brackets_in_link_text(converter):
    assert converter.transform("[a [b [c]]](/u)") == '<p><a href="/u">a [b [c]]</a></p>'
    assert converter.transform("[a [b]][id]\n\n[id]: /u\n") == '<p><a href="/u">a [b]</a></p>'
