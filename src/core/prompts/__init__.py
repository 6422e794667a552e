"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

PROMPTS_DIR = Path(__file__).parent
_env = Environment(loader=FileSystemLoader(PROMPTS_DIR), keep_trailing_newline=True)


def render_code_feedback_prompt(
    changed_files: list[dict],
    raw_code: str,
    structure_report: str,
) -> str:
    """Render the prompt for reviewing a newly opened or updated PR."""
    template = _env.get_template("code_feedback.jinja2")
    return template.render(
        changed_files=changed_files,
        raw_code=raw_code,
        structure_report=structure_report,
    )


def render_follow_up_prompt(
    pull_request: dict,
    user_comment: str,
    conversation_context: str,
    changed_files: list[dict],
    raw_code: str,
    structure_report: str,
) -> str:
    """Render the prompt for answering a comment on the PR."""
    template = _env.get_template("follow_up.jinja2")
    return template.render(
        pull_request=pull_request,
        user_comment=user_comment,
        conversation_context=conversation_context,
        changed_files=changed_files,
        raw_code=raw_code,
        structure_report=structure_report,
    )
