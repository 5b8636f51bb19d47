"""Tests for the shared markdown renderer."""
from quizdeck.core.markdown_math_renderer import MarkdownMathRenderer, renderer


def test_fragment_renders_markdown():
    html = renderer.render_fragment("Some **bold** text")
    assert "<strong>bold</strong>" in html


def test_empty_fragment_has_placeholder():
    assert "No content provided" in renderer.render_fragment("   ")


def test_inline_has_no_paragraph():
    html = renderer.render_inline("`tuple`")
    assert html == "<code>tuple</code>"


def test_math_is_left_for_mathjax():
    html = renderer.render_full_document("What is $x^2$?", font_size=18)
    assert "$x^2$" in html
    assert "font-size: 18pt" in html
    assert "mathjax" in html


def test_raw_html_is_escaped_by_default():
    assert "<script>" not in MarkdownMathRenderer().render_fragment("<script>alert(1)</script>")
