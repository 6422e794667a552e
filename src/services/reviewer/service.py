"""Reviewer service - orchestration layer."""

from typing import Callable, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.core.exceptions import PayloadError
from src.core.logging import get_logger
from src.services.github.client import PlatformClient, get_installation_platform
from src.services.github.schemas import PullRequestCommentEvent, PullRequestEvent
from src.services.reviewer.generator import FeedbackGenerator, LLMFeedbackGenerator
from src.services.reviewer.graph import create_feedback_graph
from src.services.reviewer.parser import StructuralParser, TreeSitterParser
from src.services.reviewer.schemas import ReviewResult
from src.services.reviewer.state import EventKind, ReviewStage, ReviewState, StageTracker

logger = get_logger("reviewer.service")

E = TypeVar("E", bound=BaseModel)

PlatformFactory = Callable[[int], PlatformClient]


def parse_event(model: type[E], payload: dict) -> E:
    """Validate a webhook payload, raising PayloadError before any network call."""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        missing = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        logger.warning(f"Rejecting {model.__name__} payload, invalid fields: {missing}")
        raise PayloadError(f"Invalid {model.__name__} payload: {', '.join(missing)}", missing) from e


async def _run(
    initial: ReviewState,
    installation_id: int,
    platform_factory: PlatformFactory,
    parser: StructuralParser | None,
    generator: FeedbackGenerator | None,
) -> ReviewResult:
    event: EventKind = initial["event"]
    label = f"{event} {initial['owner']}/{initial['repo']}#{initial['pr_number']}"
    tracker = StageTracker(label)
    logger.info(f"Handling {label}")

    try:
        platform = platform_factory(installation_id)
        graph = create_feedback_graph(
            platform,
            parser or TreeSitterParser(),
            generator or LLMFeedbackGenerator(),
            tracker,
        )
        final = await graph.ainvoke(initial)
    except Exception as e:
        failed_in = tracker.stage
        tracker.enter(ReviewStage.FAILED)
        logger.error(f"Error handling {label} during {failed_in.value}: {e}")
        raise

    tracker.enter(ReviewStage.DONE)
    report = final["report"]
    logger.info(f"Posted feedback comment on {label}")
    return ReviewResult(
        event=event,
        pr=f"{initial['owner']}/{initial['repo']}#{initial['pr_number']}",
        files_listed=len(final["changed_files"]),
        files_aggregated=len(report.files_included),
        failures=len(report.failures),
    )


async def handle_pull_request_event(
    payload: dict,
    platform_factory: PlatformFactory = get_installation_platform,
    parser: StructuralParser | None = None,
    generator: FeedbackGenerator | None = None,
) -> ReviewResult:
    """Review an opened or updated pull request and post the feedback."""
    event = parse_event(PullRequestEvent, payload)
    head = event.pull_request.head
    initial: ReviewState = {
        "event": "pull_request",
        "owner": event.repository.owner.login,
        "repo": event.repository.name,
        "pr_number": event.pull_request.number,
        "head_sha": head.sha if head else None,
    }
    return await _run(initial, event.installation.id, platform_factory, parser, generator)


async def handle_pull_request_comment_event(
    payload: dict,
    platform_factory: PlatformFactory = get_installation_platform,
    parser: StructuralParser | None = None,
    generator: FeedbackGenerator | None = None,
) -> ReviewResult:
    """Answer a comment on a pull request, using the prior thread as context."""
    event = parse_event(PullRequestCommentEvent, payload)
    initial: ReviewState = {
        "event": "pull_request_comment",
        "owner": event.repository.owner.login,
        "repo": event.repository.name,
        "pr_number": event.issue.number,
        "head_sha": None,
        "user_comment": event.comment.body,
    }
    return await _run(initial, event.installation.id, platform_factory, parser, generator)
