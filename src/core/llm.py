"""LLM client using OpenRouter."""

from langchain_openai import ChatOpenAI
from src.config import settings
from src.core.logging import get_logger

logger = get_logger("llm")

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

SUPPORTED_MODELS = {
    "claude-sonnet-4": "anthropic/claude-sonnet-4",
    "claude-opus-4": "anthropic/claude-opus-4",
    "gpt-4o": "openai/gpt-4o",
    "gpt-4o-mini": "openai/gpt-4o-mini",
    "deepseek-r1": "deepseek/deepseek-r1",
}

DEFAULT_MODEL = "claude-sonnet-4"


def resolve_model_id(model: str) -> str:
    """Map a short model name to its OpenRouter id, falling back to the default."""
    if "/" in model:
        return model
    return SUPPORTED_MODELS.get(model, SUPPORTED_MODELS[DEFAULT_MODEL])


def get_chat_llm(
    model: str = DEFAULT_MODEL,
    temperature: float = 0.0,
    top_p: float = 0.95,
) -> ChatOpenAI:
    """Get a chat LLM instance via OpenRouter."""
    api_key = settings.openrouter_api_key
    if not api_key:
        raise ValueError("OPENROUTER_API_KEY not configured")

    model_id = resolve_model_id(model)

    logger.info(f"[LLM] Using OpenRouter: {model} -> {model_id}")

    return ChatOpenAI(
        model=model_id,
        api_key=api_key,
        base_url=OPENROUTER_BASE_URL,
        temperature=temperature,
        top_p=top_p,
    )
