"""OpenAI-style adapter base shared by the ``openai`` and ``custom`` vendors."""

from .adapter import BaseOpenAIStyleAdapter
from .extraction import first_choice, stream_delta_content, message_content

__all__ = ["BaseOpenAIStyleAdapter", "first_choice", "stream_delta_content", "message_content"]
