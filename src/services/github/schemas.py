"""Pydantic schemas for GitHub service."""

from pydantic import BaseModel, ConfigDict, Field


class ChangedFileRecord(BaseModel):
    """One file touched by a pull request."""

    model_config = ConfigDict(frozen=True)

    filename: str
    status: str = "modified"
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    changes: int = Field(default=0, ge=0)
    patch: str | None = None  # None for binary files


class CommentRecord(BaseModel):
    """A comment from the pull request's discussion thread."""

    model_config = ConfigDict(frozen=True)

    author: str | None = None
    body: str | None = None
    is_from_review_bot: bool = False


class PullRequestMetadata(BaseModel):
    """Pull request details handed to the feedback generator."""

    number: int
    title: str
    body: str | None = None
    author: str | None = None
    state: str = "open"
    base_ref: str | None = None
    head_ref: str | None = None
    head_sha: str | None = None
    html_url: str | None = None


# Webhook payloads. Only the fields the pipeline reads are declared.


class Account(BaseModel):
    login: str = Field(min_length=1)


class Installation(BaseModel):
    id: int


class Repository(BaseModel):
    name: str = Field(min_length=1)
    owner: Account


class GitRef(BaseModel):
    ref: str | None = None
    sha: str | None = None


class PullRequestRef(BaseModel):
    number: int = Field(gt=0)
    head: GitRef | None = None


class IssueRef(BaseModel):
    number: int = Field(gt=0)
    pull_request: dict | None = None


class Comment(BaseModel):
    body: str = Field(min_length=1)
    user: Account | None = None


class PullRequestEvent(BaseModel):
    """`pull_request` webhook payload."""

    action: str | None = None
    installation: Installation
    repository: Repository
    pull_request: PullRequestRef


class PullRequestCommentEvent(BaseModel):
    """`issue_comment` webhook payload on a pull request."""

    action: str | None = None
    installation: Installation
    repository: Repository
    issue: IssueRef
    comment: Comment


class WebhookResponse(BaseModel):
    """Response schema for webhook events."""

    message: str
    pr: str | None = None
    action: str | None = None


class PingResponse(BaseModel):
    """Response schema for GitHub ping event."""

    message: str = "pong"
    zen: str = ""
