"""State schema for the feedback pipeline."""

from enum import Enum
from typing import Literal, TypedDict

from src.core.logging import get_logger
from src.services.github.schemas import ChangedFileRecord, CommentRecord, PullRequestMetadata
from src.services.reviewer.schemas import AggregatedReport

logger = get_logger("reviewer.state")

EventKind = Literal["pull_request", "pull_request_comment"]


class ReviewStage(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    AGGREGATING = "aggregating"
    CONTEXT_BUILDING = "context_building"
    GENERATING = "generating"
    PUBLISHING = "publishing"
    DONE = "done"
    FAILED = "failed"


class StageTracker:
    """Remembers how far one event got, for failure reports."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.stage = ReviewStage.IDLE

    def enter(self, stage: ReviewStage) -> None:
        logger.debug(f"{self.label}: {self.stage.value} -> {stage.value}")
        self.stage = stage


class ReviewState(TypedDict, total=False):
    """State for one event's run through the pipeline."""

    # Event context (immutable)
    event: EventKind
    owner: str
    repo: str
    pr_number: int
    head_sha: str | None
    user_comment: str | None

    # Fetched from the platform
    pull_request: PullRequestMetadata | None
    comments: list[CommentRecord]
    changed_files: list[ChangedFileRecord]

    # Built during the run
    report: AggregatedReport
    conversation_context: str
    feedback: str
