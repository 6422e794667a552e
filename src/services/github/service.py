"""GitHub service - business logic layer."""

from src.core.exceptions import PublishError
from src.core.logging import get_logger
from src.services.github.client import PlatformClient
from src.services.github.schemas import ChangedFileRecord, CommentRecord, PullRequestMetadata

logger = get_logger("github.service")


def get_changed_files(
    platform: PlatformClient,
    owner: str,
    repo: str,
    pr_number: int,
    page_size: int = 100,
    max_files: int = 300,
) -> list[ChangedFileRecord]:
    """Get changed files from a PR, following pages up to max_files.

    Stops at the first page shorter than page_size, which is how the
    platform signals there is nothing left.
    """
    files: list[ChangedFileRecord] = []
    page = 0
    while len(files) < max_files:
        batch = platform.list_changed_files(owner, repo, pr_number, page=page, per_page=page_size)
        files.extend(batch)
        if len(batch) < page_size:
            break
        page += 1

    if len(files) > max_files:
        logger.warning(f"Limiting {owner}/{repo}#{pr_number} to {max_files} changed files")
        files = files[:max_files]

    logger.info(f"Found {len(files)} files in PR {owner}/{repo}#{pr_number}")
    return files


def get_pull_request(platform: PlatformClient, owner: str, repo: str, pr_number: int) -> PullRequestMetadata:
    """Get a pull request by owner/repo and number."""
    logger.info(f"Fetching PR: {owner}/{repo}#{pr_number}")
    return platform.get_pull_request(owner, repo, pr_number)


def get_comments(platform: PlatformClient, owner: str, repo: str, issue_number: int) -> list[CommentRecord]:
    """Get the discussion thread of an issue or PR."""
    comments = platform.list_comments(owner, repo, issue_number)
    logger.info(f"Fetched {len(comments)} comments on {owner}/{repo}#{issue_number}")
    return comments


def publish_comment(platform: PlatformClient, owner: str, repo: str, issue_number: int, body: str) -> None:
    """Post body as a new comment. Every call creates a new comment."""
    target = f"{owner}/{repo}#{issue_number}"
    try:
        platform.create_comment(owner, repo, issue_number, body)
    except Exception as e:
        logger.error(f"Failed to post comment on {target}: {e}")
        raise PublishError(target, str(e)) from e
    logger.info(f"Posted comment on {target}")
