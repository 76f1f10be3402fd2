"""Markdown rendering pipeline.

Converts user-supplied markdown into HTML that is safe to store and later
render verbatim. Posts and comments both go through ``render_markdown`` on
every write so ``content_html`` never drifts from ``content``.
"""

from __future__ import annotations

import nh3
from markdown_it import MarkdownIt

# CommonMark-compliant markdown parser.
# - breaks: single newlines become <br>
# - html: raw HTML is parsed (the editor inserts <img width=...> tags) and left
#   for nh3 to filter
# - linkify: bare URLs become links
_md = MarkdownIt("commonmark", {"breaks": True, "html": True, "linkify": True}).enable(
    ["linkify", "table", "strikethrough"]
)

# Allowed HTML tags for markdown rendering
ALLOWED_TAGS = {
    "p",
    "br",
    "strong",
    "em",
    "s",
    "del",
    "ul",
    "ol",
    "li",
    "code",
    "pre",
    "blockquote",
    "a",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "img",
    "hr",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
}

# Allowed attributes per tag
ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "img": {"src", "alt", "title", "width", "height"},
    "code": {"class"},
    "pre": {"class"},
    "ol": {"start"},
    "th": {"align"},
    "td": {"align"},
}

ALLOWED_URL_SCHEMES = {"http", "https", "mailto"}

# Elements whose text content is dropped along with the tag.
CLEAN_CONTENT_TAGS = {"script", "style", "iframe", "object", "embed", "noscript", "template"}

LINK_REL = "noopener noreferrer nofollow"


def render_markdown(markdown_text: str) -> str:
    """Convert markdown text to sanitized HTML.

    Args:
        markdown_text: Raw markdown as submitted by the author.

    Returns:
        HTML with every script-capable construct removed. Malformed markdown
        degrades to literal text; this function does not raise for any string.
    """
    if not markdown_text:
        return ""
    html = _md.render(markdown_text)
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        clean_content_tags=CLEAN_CONTENT_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        url_schemes=ALLOWED_URL_SCHEMES,
        link_rel=LINK_REL,
        strip_comments=True,
    )
