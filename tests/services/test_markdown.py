# tests/services/test_markdown.py
"""Tests for the markdown rendering pipeline."""

import pytest

from beam_stage.services.markdown import render_markdown


def test_renders_commonmark() -> None:
    html = render_markdown("# Title\n\nSome **bold** and *italic* text.")
    assert "<h1>Title</h1>" in html
    assert "<strong>bold</strong>" in html
    assert "<em>italic</em>" in html


def test_single_newline_becomes_line_break() -> None:
    html = render_markdown("one\ntwo")
    assert html.startswith("<p>one<br")
    assert "two</p>" in html


def test_empty_input_renders_empty() -> None:
    assert render_markdown("") == ""


def test_rendering_is_deterministic() -> None:
    text = "- a\n- b\n\n```python\nprint('x')\n```\n"
    assert render_markdown(text) == render_markdown(text)


@pytest.mark.parametrize(
    "payload",
    [
        "<script>alert('x')</script>",
        "<img src=x onerror=alert(1)>",
        '<a href="#" onclick="steal()">click</a>',
        "<iframe src='https://evil.example'></iframe>",
        "<div onmouseover='x()'>hover</div>",
    ],
)
def test_strips_script_capable_markup(payload: str) -> None:
    html = render_markdown(payload).lower()
    assert "<script" not in html
    assert "<iframe" not in html
    assert "onerror" not in html
    assert "onclick" not in html
    assert "onmouseover" not in html
    assert "alert('x')" not in html


def test_drops_javascript_links() -> None:
    html = render_markdown("[click](javascript:alert(1))")
    assert "href=\"javascript" not in html
    assert "<a" not in html


def test_links_get_safe_rel() -> None:
    html = render_markdown("see https://example.com")
    assert 'href="https://example.com"' in html
    assert 'rel="noopener noreferrer nofollow"' in html


def test_keeps_editor_image_tags() -> None:
    html = render_markdown('<img width="320" alt="cat.png" src="https://cdn.example/cat.png">')
    assert 'width="320"' in html
    assert 'alt="cat.png"' in html
    assert 'src="https://cdn.example/cat.png"' in html


def test_renders_tables_and_strikethrough() -> None:
    html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~")
    assert "<table>" in html
    assert "<td>1</td>" in html
    assert "<s>gone</s>" in html


def test_malformed_markdown_does_not_raise() -> None:
    html = render_markdown("**unclosed [link](")
    assert "unclosed" in html
