"""
Services package for business logic.

Service classes orchestrate Agent calls and implement business logic
that doesn't belong in API endpoints.
"""
from .highlight_service import HighlightService

__all__ = [
    "HighlightService",
]
