from sharpdown.markdown import normalize


def test_line_endings_are_unified():
    assert normalize("a\r\nb") == "a\nb\n\n\n"
    assert normalize("a\rb") == "a\nb\n\n\n"
    assert normalize("a\r") == normalize("a\n")


def test_tabs_expand_to_next_stop():
    assert normalize("\tx") == "    x\n\n\n"
    assert normalize("ab\tc") == "ab  c\n\n\n"
    assert normalize("abcd\te") == "abcd    e\n\n\n"


def test_tab_width_is_configurable():
    assert normalize("a\tb", tabWidth=8) == "a       b\n\n\n"


def test_whitespace_only_lines_become_empty():
    assert normalize("a\n   \nb") == "a\n\nb\n\n\n"
    assert normalize("a\n\t\nb") == "a\n\nb\n\n\n"


def test_placeholder_character_is_dropped():
    assert normalize("a\x1ab") == "ab\n\n\n"


def test_output_always_ends_with_blank_lines():
    assert normalize("").endswith("\n\n")
    assert normalize("text").endswith("\n\n")
