"""LangGraph state machine turning a PR event into a posted comment."""

from typing import Literal

from langgraph.graph import END, StateGraph

from src.config import settings
from src.core.logging import get_logger
from src.services.github.client import PlatformClient
from src.services.github.service import get_changed_files, get_comments, get_pull_request, publish_comment
from src.services.reviewer.aggregator import aggregate
from src.services.reviewer.context import build_conversation_context
from src.services.reviewer.generator import FeedbackGenerator
from src.services.reviewer.parser import StructuralParser
from src.services.reviewer.schemas import FeedbackRequest
from src.services.reviewer.state import ReviewStage, ReviewState, StageTracker

logger = get_logger("reviewer.graph")


def create_feedback_graph(
    platform: PlatformClient,
    parser: StructuralParser,
    generator: FeedbackGenerator,
    tracker: StageTracker,
):
    """Create the feedback graph for one event.

    Nodes run strictly in sequence. An exception raised by any node stops
    the run and propagates out of ainvoke unchanged.
    """

    def fetch_node(state: ReviewState) -> dict:
        """Fetch PR metadata and comments (follow-ups only), then changed files."""
        tracker.enter(ReviewStage.FETCHING)
        owner, repo, pr_number = state["owner"], state["repo"], state["pr_number"]
        update: dict = {}

        head_sha = state.get("head_sha")
        if state["event"] == "pull_request_comment":
            pull_request = get_pull_request(platform, owner, repo, pr_number)
            update["pull_request"] = pull_request
            update["comments"] = get_comments(platform, owner, repo, pr_number)
            head_sha = pull_request.head_sha or head_sha
            update["head_sha"] = head_sha

        update["changed_files"] = get_changed_files(
            platform,
            owner,
            repo,
            pr_number,
            page_size=settings.changed_files_page_size,
            max_files=settings.max_changed_files,
        )
        return update

    def aggregate_node(state: ReviewState) -> dict:
        tracker.enter(ReviewStage.AGGREGATING)
        report = aggregate(
            platform,
            parser,
            state["owner"],
            state["repo"],
            state["changed_files"],
            ref=state.get("head_sha"),
            max_workers=settings.aggregation_max_workers,
        )
        return {"report": report}

    def route_after_aggregate(state: ReviewState) -> Literal["build_context", "generate"]:
        if state["event"] == "pull_request_comment":
            return "build_context"
        return "generate"

    def build_context_node(state: ReviewState) -> dict:
        tracker.enter(ReviewStage.CONTEXT_BUILDING)
        context = build_conversation_context(
            state.get("comments", []),
            bot_login=settings.bot_login,
            max_comments=settings.max_context_comments,
            max_chars=settings.max_comment_chars,
        )
        return {"conversation_context": context}

    async def generate_node(state: ReviewState) -> dict:
        tracker.enter(ReviewStage.GENERATING)
        report = state["report"]
        request = FeedbackRequest(
            changed_files=state["changed_files"],
            raw_code=report.raw_code,
            structure_report=report.structure_report,
            pull_request=state.get("pull_request"),
            user_comment=state.get("user_comment"),
            conversation_context=state.get("conversation_context"),
        )
        if state["event"] == "pull_request_comment":
            feedback = await generator.generate_follow_up(
                request.pull_request,
                request.user_comment or "",
                request.conversation_context or "",
                request.changed_files,
                request.raw_code,
                request.structure_report,
            )
        else:
            feedback = await generator.generate_feedback(
                request.changed_files,
                request.raw_code,
                request.structure_report,
            )
        logger.info(f"Generated {len(feedback)} chars of feedback")
        return {"feedback": feedback}

    def publish_node(state: ReviewState) -> dict:
        tracker.enter(ReviewStage.PUBLISHING)
        publish_comment(platform, state["owner"], state["repo"], state["pr_number"], state["feedback"])
        return {}

    graph = StateGraph(ReviewState)

    graph.add_node("fetch", fetch_node)
    graph.add_node("aggregate", aggregate_node)
    graph.add_node("build_context", build_context_node)
    graph.add_node("generate", generate_node)
    graph.add_node("publish", publish_node)

    graph.set_entry_point("fetch")

    graph.add_edge("fetch", "aggregate")
    graph.add_conditional_edges(
        "aggregate",
        route_after_aggregate,
        {
            "build_context": "build_context",
            "generate": "generate",
        },
    )
    graph.add_edge("build_context", "generate")
    graph.add_edge("generate", "publish")
    graph.add_edge("publish", END)

    return graph.compile()
