"""LLM-backed feedback generation."""

from typing import Protocol

from langchain_core.messages import HumanMessage, SystemMessage

from src.config import settings
from src.core.exceptions import GenerationError
from src.core.llm import get_chat_llm
from src.core.logging import get_logger
from src.core.prompts import render_code_feedback_prompt, render_follow_up_prompt
from src.services.github.schemas import ChangedFileRecord, PullRequestMetadata

logger = get_logger("reviewer.generator")

REVIEW_SYSTEM_PROMPT = """You are an expert code reviewer commenting on a GitHub pull request.
You receive the list of changed files with their diffs, the full contents of each file,
and a syntax tree dump of each file. Use the syntax trees to reason about structure
(functions, classes, control flow) and the full contents to check the changes in context.
Only raise real issues. Do not nitpick formatting."""

FOLLOW_UP_SYSTEM_PROMPT = """You are an expert code reviewer continuing a conversation on a GitHub
pull request. Lines tagged [BOT RESPONSE] are your earlier replies, lines tagged [USER]
come from people on the PR. Answer the latest user comment directly and concisely."""


class FeedbackGenerator(Protocol):
    """Turns code and conversation into review text."""

    async def generate_feedback(
        self,
        changed_files: list[ChangedFileRecord],
        raw_code: str,
        structure_report: str,
    ) -> str: ...

    async def generate_follow_up(
        self,
        pull_request: PullRequestMetadata,
        user_comment: str,
        conversation_context: str,
        changed_files: list[ChangedFileRecord],
        raw_code: str,
        structure_report: str,
    ) -> str: ...


class LLMFeedbackGenerator:
    """FeedbackGenerator using a chat model through OpenRouter."""

    def __init__(self, model: str | None = None, llm=None) -> None:
        self._model = model or settings.review_model
        self._llm = llm

    def _get_llm(self):
        if self._llm is None:
            self._llm = get_chat_llm(model=self._model)
        return self._llm

    async def _complete(self, system_prompt: str, prompt: str) -> str:
        try:
            response = await self._get_llm().ainvoke(
                [SystemMessage(content=system_prompt), HumanMessage(content=prompt)]
            )
        except Exception as e:
            raise GenerationError(f"Feedback generation failed: {e}") from e

        content = response.content if isinstance(response.content, str) else str(response.content)
        if not content.strip():
            raise GenerationError("Feedback generator returned an empty reply")
        return content

    async def generate_feedback(
        self,
        changed_files: list[ChangedFileRecord],
        raw_code: str,
        structure_report: str,
    ) -> str:
        prompt = render_code_feedback_prompt(
            changed_files=[f.model_dump() for f in changed_files],
            raw_code=raw_code,
            structure_report=structure_report,
        )
        logger.info(f"Requesting feedback for {len(changed_files)} files ({len(prompt)} prompt chars)")
        return await self._complete(REVIEW_SYSTEM_PROMPT, prompt)

    async def generate_follow_up(
        self,
        pull_request: PullRequestMetadata,
        user_comment: str,
        conversation_context: str,
        changed_files: list[ChangedFileRecord],
        raw_code: str,
        structure_report: str,
    ) -> str:
        prompt = render_follow_up_prompt(
            pull_request=pull_request.model_dump(),
            user_comment=user_comment,
            conversation_context=conversation_context,
            changed_files=[f.model_dump() for f in changed_files],
            raw_code=raw_code,
            structure_report=structure_report,
        )
        logger.info(f"Requesting follow-up on PR #{pull_request.number} ({len(prompt)} prompt chars)")
        return await self._complete(FOLLOW_UP_SYSTEM_PROMPT, prompt)
