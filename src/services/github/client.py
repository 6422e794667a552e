"""GitHub API client - data layer."""

from typing import Any, Protocol

from github import Github, GithubIntegration
from github.Repository import Repository
from loguru import logger

from src.config import settings
from src.services.github.schemas import ChangedFileRecord, CommentRecord, PullRequestMetadata


class PlatformClient(Protocol):
    """Operations the pipeline needs from the code hosting platform."""

    def list_changed_files(
        self, owner: str, repo: str, pr_number: int, page: int = 0, per_page: int = 100
    ) -> list[ChangedFileRecord]: ...

    def get_file_content(self, owner: str, repo: str, path: str, ref: str | None = None) -> Any: ...

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> PullRequestMetadata: ...

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[CommentRecord]: ...

    def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> None: ...


class GitHubPlatform:
    """PlatformClient backed by PyGithub.

    One instance is created per event so nothing is shared between events.
    """

    def __init__(self, client: Github, bot_login: str) -> None:
        self._client = client
        self._bot_login = bot_login
        self._repos: dict[str, Repository] = {}

    def _repo(self, owner: str, repo: str) -> Repository:
        full_name = f"{owner}/{repo}"
        if full_name not in self._repos:
            self._repos[full_name] = self._client.get_repo(full_name)
        return self._repos[full_name]

    def list_changed_files(
        self, owner: str, repo: str, pr_number: int, page: int = 0, per_page: int = 100
    ) -> list[ChangedFileRecord]:
        """Fetch one page of changed files."""
        if self._client.per_page != per_page:
            self._client.per_page = per_page
        pr = self._repo(owner, repo).get_pull(pr_number)
        files = pr.get_files().get_page(page)
        return [
            ChangedFileRecord(
                filename=f.filename,
                status=f.status,
                additions=f.additions,
                deletions=f.deletions,
                changes=f.changes,
                patch=f.patch,
            )
            for f in files
        ]

    def get_file_content(self, owner: str, repo: str, path: str, ref: str | None = None) -> Any:
        """Return the raw contents response: a ContentFile, or a list for directories."""
        kwargs = {"ref": ref} if ref else {}
        return self._repo(owner, repo).get_contents(path, **kwargs)

    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> PullRequestMetadata:
        pr = self._repo(owner, repo).get_pull(pr_number)
        return PullRequestMetadata(
            number=pr.number,
            title=pr.title,
            body=pr.body,
            author=pr.user.login if pr.user else None,
            state=pr.state,
            base_ref=pr.base.ref,
            head_ref=pr.head.ref,
            head_sha=pr.head.sha,
            html_url=pr.html_url,
        )

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[CommentRecord]:
        """List every comment on the issue thread, oldest first."""
        issue = self._repo(owner, repo).get_issue(issue_number)
        comments = []
        for c in issue.get_comments():
            author = c.user.login if c.user else None
            comments.append(
                CommentRecord(
                    author=author,
                    body=c.body,
                    is_from_review_bot=author == self._bot_login,
                )
            )
        return comments

    def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> None:
        issue = self._repo(owner, repo).get_issue(issue_number)
        issue.create_comment(body)
        logger.info(f"Created comment on {owner}/{repo}#{issue_number}")


def get_installation_platform(installation_id: int) -> GitHubPlatform:
    """Get a GitHub client scoped to one app installation."""
    if not all([settings.github_app_id, settings.github_private_key]):
        raise ValueError("GitHub App credentials not configured")

    private_key = settings.github_private_key.replace("\\n", "\n")

    integration = GithubIntegration(
        integration_id=int(settings.github_app_id),
        private_key=private_key,
    )

    access_token = integration.get_access_token(installation_id).token
    client = Github(access_token, per_page=settings.changed_files_page_size)

    logger.info(f"GitHub client initialized for installation {installation_id}")
    return GitHubPlatform(client, bot_login=settings.bot_login)
