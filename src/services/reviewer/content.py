"""Resolve the full text of a changed file."""

import base64
import binascii
from collections.abc import Mapping
from typing import Any

from src.core.exceptions import NotAFile, ResolutionError, UnreadableContent
from src.core.logging import get_logger
from src.services.github.client import PlatformClient

logger = get_logger("reviewer.content")


def _field(payload: Any, name: str) -> Any:
    if isinstance(payload, Mapping):
        return payload.get(name)
    return getattr(payload, name, None)


def decode_content(path: str, payload: Any) -> str:
    """Turn a contents API response into UTF-8 text.

    Accepts already decoded text, raw bytes, or a file object/mapping whose
    `content` is base64 encoded. A list means the path is a directory.
    """
    if isinstance(payload, str):
        return payload

    if isinstance(payload, (bytes, bytearray)):
        try:
            return bytes(payload).decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnreadableContent(path, f"not valid UTF-8: {e}") from e

    if isinstance(payload, (list, tuple)):
        raise NotAFile(path)

    content = _field(payload, "content")
    if _field(payload, "type") != "file" or not content:
        raise UnreadableContent(path)
    if not isinstance(content, (str, bytes)):
        raise UnreadableContent(path, f"unexpected content of type {type(content).__name__}")

    encoding = _field(payload, "encoding") or "base64"
    if encoding != "base64":
        raise UnreadableContent(path, f"unsupported encoding {encoding!r}")

    try:
        if not isinstance(payload, Mapping) and hasattr(payload, "decoded_content"):
            # PyGithub ContentFile
            raw = payload.decoded_content
        else:
            raw = base64.b64decode(content)
        return raw.decode("utf-8")
    except (binascii.Error, TypeError, ValueError) as e:
        raise UnreadableContent(path, f"cannot decode body: {e}") from e


def resolve_file_content(
    platform: PlatformClient,
    owner: str,
    repo: str,
    path: str,
    ref: str | None = None,
) -> str:
    """Fetch and decode one file. No retries; the caller decides what to skip."""
    try:
        payload = platform.get_file_content(owner, repo, path, ref)
    except ResolutionError:
        raise
    except Exception as e:
        raise ResolutionError(path, str(e)) from e

    text = decode_content(path, payload)
    logger.debug(f"Resolved {path} ({len(text)} chars)")
    return text
