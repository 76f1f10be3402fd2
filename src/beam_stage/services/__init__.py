# src/beam_stage/services/__init__.py
"""Business logic services for the Beam application."""

from .comment_service import CommentService
from .markdown import render_markdown
from .post_service import PostService
from .slack import SlackNotifier

__all__ = [
    "CommentService",
    "PostService",
    "SlackNotifier",
    "render_markdown",
]
