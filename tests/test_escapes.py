import html
import random
import re

from sharpdown.markdown import escapes


def test_hash_keys_are_stable_and_content_derived():
    assert escapes.hashKey("abc", "H") == escapes.hashKey("abc", "H")
    assert escapes.hashKey("abc", "H") != escapes.hashKey("abd", "H")
    assert re.fullmatch(r"\x1aH\d+H", escapes.hashKey("<div></div>", "H"))
    assert re.fullmatch(r"\x1aE\d+E", escapes.ESCAPE_TABLE["*"])


def test_every_escapable_character_has_its_own_placeholder():
    assert len(set(escapes.ESCAPE_TABLE.values())) == len(escapes.ESCAPABLE_CHARS)
    for char, key in escapes.ESCAPE_TABLE.items():
        assert escapes.INVERTED_ESCAPE_TABLE[key] == char
        assert escapes.BACKSLASH_ESCAPE_TABLE["\\" + char] == key


def test_backslash_escapes_hide_and_restore():
    hidden = escapes.escapeBackslashes(r"\*not emphasis\* and \\")
    assert "*" not in hidden
    assert escapes.unescape(hidden) == "*not emphasis* and \\"


def test_amps_and_angles():
    text = "AT&T &amp; &#38; &#x26; <3 <b>"
    assert escapes.encodeAmpsAndAngles(text) == "AT&amp;T &amp; &#38; &#x26; &lt;3 <b>"


def test_code_is_fully_literal():
    assert escapes.encodeCode("<&>") == "&lt;&amp;&gt;"
    encoded = escapes.encodeCode("*a_b* [x]{y} \\")
    for char in "*_[]{}\\":
        assert char not in encoded
    assert escapes.unescape(encoded) == "*a_b* [x]{y} \\"


def test_problem_url_chars():
    assert escapes.encodeProblemUrlChars("http://x.com:8080/a(b)") == "http://x.com:8080/a%28b%29"
    assert escapes.encodeProblemUrlChars("a'b\"c*d$e") == "a%27b%22c%2ad%24e"
    assert escapes.encodeProblemUrlChars("mailto:x") == "mailto%3ax"
    assert escapes.encodeProblemUrlChars("trailing:") == "trailing%3a"


def test_attribute_encode():
    assert escapes.attributeEncode('<"a">') == "&lt;&quot;a&quot;&gt;"


def test_email_obfuscation_is_reversible_and_hides_the_at():
    address = "mailto:someone@example.com"
    encoded = escapes.encodeEmailAddress(address, random.Random(42))
    assert "@" not in encoded
    assert ":" in encoded
    assert html.unescape(encoded) == address


def test_email_obfuscation_is_repeatable_with_a_seed():
    address = "mailto:someone@example.com"
    first = escapes.encodeEmailAddress(address, random.Random(7))
    second = escapes.encodeEmailAddress(address, random.Random(7))
    assert first == second


def test_autolink_prevention_round_trip():
    saved = escapes.saveFromAutoLinking("see http://example.com")
    assert "://" not in saved
    assert escapes.restoreAutoLinking(saved) == "see http://example.com"


def test_final_unescape_resolves_leftover_blocks_once():
    inner = escapes.hashKey("inner", "H")
    outer = escapes.hashKey("outer", "H")
    blocks = {outer: f"<div>{inner}</div>", inner: "<p>x</p>"}
    text = outer + escapes.ESCAPE_TABLE["*"]
    assert escapes.unescape(text, blocks) == f"<div>{inner}</div>*"
    assert escapes.unescape(text) == outer + "*"
