"""Beam Stage: posts, comments, likes and moderation behind a FastAPI surface."""

__version__ = "0.1.0"
