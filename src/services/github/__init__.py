"""GitHub service."""

from src.services.github.service import (
    get_changed_files,
    get_comments,
    get_pull_request,
    publish_comment,
)

__all__ = [
    "get_changed_files",
    "get_comments",
    "get_pull_request",
    "publish_comment",
]
