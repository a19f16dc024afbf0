"""
Core utilities for the highlight backend.
"""
from .text_utils import strip_html_tags

__all__ = [
    "strip_html_tags",
]
