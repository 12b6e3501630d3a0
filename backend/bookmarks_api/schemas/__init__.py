"""Pydantic Schemas"""
from .bookmark import (
    BookmarkCreate,
    BookmarkUpdate,
    BookmarkResponse,
    BookmarkCreated,
    BookmarkCreatedResponse,
    BookmarkListResponse,
    MessageResponse,
)

__all__ = [
    "BookmarkCreate", "BookmarkUpdate", "BookmarkResponse",
    "BookmarkCreated", "BookmarkCreatedResponse", "BookmarkListResponse",
    "MessageResponse",
]
