"""Format a PR's discussion thread for follow-up prompts."""

from src.services.github.schemas import CommentRecord

BOT_PREFIX = "[BOT RESPONSE]"
USER_PREFIX = "[USER]"
TRUNCATION_MARKER = "..."


def format_comment(comment: CommentRecord, bot_login: str, max_chars: int = 500) -> str:
    """Render one comment as a role-tagged transcript line."""
    author = comment.author or "unknown"
    prefix = BOT_PREFIX if comment.author == bot_login else USER_PREFIX
    body = comment.body or ""
    marker = TRUNCATION_MARKER if len(body) > max_chars else ""
    return f"{prefix} {author}: {body[:max_chars]}{marker}"


def build_conversation_context(
    comments: list[CommentRecord],
    bot_login: str,
    max_comments: int = 30,
    max_chars: int = 500,
) -> str:
    """Build a transcript of the most recent comments, oldest first.

    Comments are expected in the platform's chronological order.
    """
    recent = comments[-max_comments:] if max_comments > 0 else []
    return "\n\n".join(format_comment(c, bot_login, max_chars) for c in recent)
