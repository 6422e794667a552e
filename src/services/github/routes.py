"""GitHub webhook routes."""

from typing import Awaitable, Callable

from fastapi import APIRouter, BackgroundTasks, Request
from loguru import logger

from src.config import settings
from src.core.security import require_github_signature
from src.services.github.schemas import (
    PingResponse,
    PullRequestCommentEvent,
    PullRequestEvent,
    WebhookResponse,
)
from src.services.reviewer.service import (
    handle_pull_request_comment_event,
    handle_pull_request_event,
    parse_event,
)

router = APIRouter()

REVIEWED_PR_ACTIONS = ("opened", "synchronize", "reopened")


@router.post("/webhook/github")
async def github_webhook(request: Request, background_tasks: BackgroundTasks):
    """Handle GitHub webhook events."""
    event = request.headers.get("X-GitHub-Event")
    signature = request.headers.get("X-Hub-Signature-256", "")
    delivery_id = request.headers.get("X-GitHub-Delivery")

    logger.info(f"Webhook received: event={event}, delivery={delivery_id}")

    body = await request.body()
    require_github_signature(body, signature)

    payload = await request.json()

    if event == "pull_request":
        return handle_pull_request(payload, background_tasks)
    elif event == "issue_comment":
        return handle_issue_comment(payload, background_tasks)
    elif event == "ping":
        return PingResponse(zen=payload.get("zen", ""))
    else:
        logger.info(f"Unhandled event type: {event}")
        return WebhookResponse(message=f"Event {event} not handled")


def handle_pull_request(payload: dict, background_tasks: BackgroundTasks) -> WebhookResponse:
    """Handle pull_request events."""
    action = payload.get("action")
    if action not in REVIEWED_PR_ACTIONS:
        return WebhookResponse(message=f"Action {action} not reviewed", action=action)

    event = parse_event(PullRequestEvent, payload)
    pr = f"{event.repository.owner.login}/{event.repository.name}#{event.pull_request.number}"
    logger.info(f"PR event: {action} on {pr}")

    background_tasks.add_task(run_handler, handle_pull_request_event, payload, pr)
    return WebhookResponse(message="Review started", pr=pr, action=action)


def handle_issue_comment(payload: dict, background_tasks: BackgroundTasks) -> WebhookResponse:
    """Handle issue_comment events on pull requests."""
    action = payload.get("action")
    if action != "created":
        return WebhookResponse(message=f"Action {action} not handled", action=action)

    if not (payload.get("issue") or {}).get("pull_request"):
        return WebhookResponse(message="Comment is not on a pull request", action=action)

    author = ((payload.get("comment") or {}).get("user") or {}).get("login")
    if author == settings.bot_login:
        return WebhookResponse(message="Ignoring own comment", action=action)

    event = parse_event(PullRequestCommentEvent, payload)
    pr = f"{event.repository.owner.login}/{event.repository.name}#{event.issue.number}"
    logger.info(f"PR comment by {author} on {pr}")

    background_tasks.add_task(run_handler, handle_pull_request_comment_event, payload, pr)
    return WebhookResponse(message="Follow-up started", pr=pr, action=action)


async def run_handler(handler: Callable[[dict], Awaitable], payload: dict, pr: str) -> None:
    """Run an event handler in background."""
    try:
        result = await handler(payload)
        logger.info(f"Feedback completed for {pr}: {result}")
    except Exception as e:
        logger.error(f"Feedback failed for {pr}: {e}")
