"""Free-form chat with Gemini, carrying the client's conversation history."""

import logging
from typing import Callable

from langchain_core.messages import HumanMessage

from biowhatif.config import Settings
from biowhatif.errors import UpstreamError, ValidationError
from biowhatif.history import reduce_history, to_langchain_messages
from biowhatif.llm import build_llm, reply_text
from biowhatif.models import ChatMessage

logger = logging.getLogger(__name__)

EMPTY_REPLY = "(No response generated)"


class ChatService:
    def __init__(self, settings: Settings, llm_factory: Callable = build_llm):
        self.settings = settings
        self.llm_factory = llm_factory

    async def reply(self, message: str, history: list[ChatMessage] | None = None) -> str:
        if not message or not message.strip():
            raise ValidationError("Message is required")

        llm = self.llm_factory(self.settings, sampling=False)
        context = reduce_history(history or [])
        messages = to_langchain_messages(context) + [HumanMessage(content=message)]
        logger.info("Chat turn with %d history messages", len(context))

        try:
            response = await llm.ainvoke(messages)
        except Exception as e:
            logger.error("Gemini chat call failed: %s", e)
            raise UpstreamError(f"Failed to get response from AI: {e}") from e

        return reply_text(response) or EMPTY_REPLY
