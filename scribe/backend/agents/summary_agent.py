"""
Summary Agent.

PydanticAI agent that condenses a blog post into a short summary.
The model and generation parameters come from config/agents/summary_agent.yaml;
the API key comes from config/.env (OPENAI_API_KEY) or the process environment.

Usage:
    from scribe.backend.agents.summary_agent import run_summary_agent
    summary = await run_summary_agent("Plain text of the post...")
"""

import os

from pydantic_ai import Agent

from scribe.backend.core.config import get_app_config, get_settings
from scribe.backend.core.logging import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that generates concise summaries of blog posts. "
    "Keep summaries under {max_chars} characters."
)

USER_PROMPT = "Generate a brief summary of this blog post: {content}"

_agent: Agent[None, str] | None = None


def is_summary_model_configured() -> bool:
    """Return True when an API key for the summary model is available."""
    return bool(get_settings().openai_api_key or os.environ.get("OPENAI_API_KEY"))


def _get_agent() -> Agent[None, str]:
    """Lazy initialization: only creates the agent when first called."""
    global _agent
    if _agent is not None:
        return _agent

    config = get_app_config().summary_agent
    api_key = get_settings().openai_api_key
    if api_key:
        os.environ.setdefault("OPENAI_API_KEY", api_key)

    _agent = Agent(
        config.model,
        output_type=str,
        instructions=SYSTEM_PROMPT.format(max_chars=config.max_summary_chars),
        model_settings={
            "max_tokens": config.max_tokens,
            "temperature": config.temperature,
        },
    )

    logger.info(
        "Summary agent created",
        extra={"agent_name": config.agent_name, "model": config.model},
    )
    return _agent


async def run_summary_agent(content: str) -> str:
    """
    Ask the model for a summary of the given text.

    Args:
        content: Plain text of the post

    Returns:
        The model's summary text (may be empty)
    """
    agent = _get_agent()
    result = await agent.run(USER_PROMPT.format(content=content))
    return result.output
