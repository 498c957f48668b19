"""Gemini chat model construction and reply handling."""

import logging

from langchain_google_genai import ChatGoogleGenerativeAI

from biowhatif.config import Settings
from biowhatif.errors import ConfigurationError

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "API key missing. Set API_KEY, GEMINI_API_KEY, or GOOGLE_GENERATIVE_AI_API_KEY in .env"
)


def build_llm(settings: Settings, *, sampling: bool = True) -> ChatGoogleGenerativeAI:
    """Build the Gemini client. `sampling=False` keeps the model's own generation defaults."""
    if not settings.has_api_key:
        raise ConfigurationError(MISSING_KEY_MESSAGE)

    kwargs = {}
    if sampling:
        kwargs = {
            "temperature": settings.temperature,
            "top_p": settings.top_p,
            "max_output_tokens": settings.max_output_tokens,
        }
    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        google_api_key=settings.api_key,
        max_retries=0,
        **kwargs,
    )


def reply_text(message) -> str:
    """Flatten a chat model reply into plain text.

    Gemini replies come back either as a string or as a list of content parts.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content.strip()
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts).strip()
