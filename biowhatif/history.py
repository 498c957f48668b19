"""Chat history trimming for the Gemini conversation API."""

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from biowhatif.models import ChatMessage


def reduce_history(history: list[ChatMessage]) -> list[ChatMessage]:
    """Drop blank messages, map non-user roles to assistant, and trim to the first user turn.

    Gemini requires the conversation context to open with a user message. The
    surviving messages keep their order; only a prefix is removed.
    """
    mapped = [
        ChatMessage(role="user" if m.role == "user" else "assistant", content=m.content)
        for m in history
        if m.content.strip()
    ]
    for i, message in enumerate(mapped):
        if message.role == "user":
            return mapped[i:]
    return []


def to_langchain_messages(history: list[ChatMessage]) -> list[BaseMessage]:
    return [
        HumanMessage(content=m.content) if m.role == "user" else AIMessage(content=m.content)
        for m in history
    ]
