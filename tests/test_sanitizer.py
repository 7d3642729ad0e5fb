"""Tests for the HTML escaping sanitizer."""

import pytest


def test_script_tag_is_escaped(sanitizer):
    assert sanitizer.sanitize("<script>") == "&lt;script&gt;"


def test_all_significant_characters_are_escaped(sanitizer):
    assert sanitizer.sanitize("""<a href="x">'&'</a>""") == (
        "&lt;a href=&quot;x&quot;&gt;&#x27;&amp;&#x27;&lt;/a&gt;"
    )


def test_ampersand_is_escaped_in_the_same_pass(sanitizer):
    # "<" becomes "&lt;" once; its ampersand is not escaped again
    assert sanitizer.sanitize("a < b & c") == "a &lt; b &amp; c"


def test_foreign_entities_are_escaped(sanitizer):
    assert sanitizer.sanitize("&copy; 2026") == "&amp;copy; 2026"


def test_whitespace_is_trimmed_after_escaping(sanitizer):
    assert sanitizer.sanitize("  \t Jean <b>\n ") == "Jean &lt;b&gt;"


def test_byte_order_mark_is_trimmed(sanitizer):
    assert sanitizer.sanitize("\ufeff Jean \ufeff") == "Jean"
    assert sanitizer.sanitize("\ufeff") == ""


@pytest.mark.parametrize("value", [
    "",
    "plain text",
    "<script>alert('x')</script>",
    "Tom & Jerry",
    "&amp;&lt;&gt;&quot;&#x27;",
    "&&&",
    "  padded  ",
    "\ufeff Jean \ufeff",
    "5 > 3 && 2 < 4",
])
def test_sanitize_is_idempotent(sanitizer, value):
    once = sanitizer.sanitize(value)
    assert sanitizer.sanitize(once) == once


@pytest.mark.parametrize("value", [None, 42, 3.5, ["<b>"], {"a": 1}, b"<b>", object()])
def test_non_string_input_yields_empty_string(sanitizer, value):
    assert sanitizer.sanitize(value) == ""


def test_non_string_input_is_logged(sanitizer, caplog):
    caplog.set_level("DEBUG", logger="formguard")
    sanitizer.sanitize(12, form_id="contact")
    assert "input_type_rejected" in caplog.text


def test_internal_failure_degrades_to_empty_string(sanitizer, monkeypatch, caplog):
    def broken(value):
        raise RuntimeError("boom")

    monkeypatch.setattr(sanitizer, "_escape", broken)
    assert sanitizer.sanitize("<b>") == ""
    assert "internal_fault" in caplog.text


def test_is_clean(sanitizer):
    assert sanitizer.is_clean("&lt;b&gt;")
    assert not sanitizer.is_clean("<b>")
    assert not sanitizer.is_clean(" x ")
    assert not sanitizer.is_clean(None)
