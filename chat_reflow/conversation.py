"""
Chat assistant that turns Claude replies into reflowed chat text.

This module handles:
- Multi-turn conversations with Claude (message history)
- Running the reflow engine exactly once on each raw reply
- Appending an optional confirmation prompt after the reflowed text

History always stores the raw model text. The reflowed version is only for
display or speech, and it is never fed back to the model or reflowed again.

The flow for each turn:
1. Add the user's message to history
2. Send the full history to Claude
3. Store Claude's raw reply in history
4. Reflow the raw reply once, then append the confirmation
"""

import logging

from anthropic import Anthropic

from .config import Settings, get_settings
from .models import ChatReply, ConversationMessage, ReflowPolicy
from .prompts import get_system_prompt
from .reflow import append_confirmation, chat_style_format

logger = logging.getLogger(__name__)


class ConversationError(Exception):
    """Raised when the chat flow cannot produce a reply."""
    pass


class ChatAssistant:
    """
    Manages a conversation with Claude and reflows every reply.

    Example usage:
        assistant = ChatAssistant()
        reply = assistant.send("What should I do first today?")
        print(reply.text)

        reply = assistant.send(
            "Add 'buy milk' to my list",
            confirmation="Should I set a reminder too?",
        )
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: Anthropic | None = None,
        policy: ReflowPolicy | None = None,
    ) -> None:
        """
        Initialize the assistant.

        Settings are read here so configuration errors fail early. A client
        can be injected (tests pass a mock). Otherwise one is built from the
        configured API key.

        Raises:
            ConversationError: If no client is given and no API key is set
        """
        self.settings = settings or get_settings()
        self.policy = policy or self.settings.to_policy()

        if client is None:
            if self.settings.anthropic_api_key is None:
                raise ConversationError(
                    "No Anthropic API key configured. "
                    "Set CHAT_REFLOW_ANTHROPIC_API_KEY in your environment or .env file."
                )
            client = Anthropic(
                api_key=self.settings.anthropic_api_key.get_secret_value()
            )
        self.client = client

        self.messages: list[ConversationMessage] = []

    def reset(self) -> None:
        """Forget the conversation history."""
        self.messages = []

    def send(self, message: str, confirmation: str | None = None) -> ChatReply:
        """
        Send a user message and return the reflowed reply.

        Args:
            message: What the user said
            confirmation: Optional prompt appended after the reply,
                e.g. "Want me to save this?"

        Returns:
            ChatReply with both the raw and the display text

        Raises:
            ConversationError: If the message is empty or Claude returns no text
            anthropic.APIError: If the API call itself fails
        """
        if not message.strip():
            raise ConversationError("Message cannot be empty.")

        self.messages.append(ConversationMessage(role="user", content=message))

        try:
            raw = self._get_claude_response()
        except Exception:
            # Drop the unanswered user turn so history stays alternating
            self.messages.pop()
            raise

        self.messages.append(ConversationMessage(role="assistant", content=raw))

        text = append_confirmation(chat_style_format(raw, self.policy), confirmation)
        logger.info("Reply reflowed: %d raw chars -> %d display chars", len(raw), len(text))

        return ChatReply(
            raw=raw,
            text=text,
            confirmation=confirmation or None,
            model=self.settings.model_name,
        )

    def _get_claude_response(self) -> str:
        """
        Send the conversation to Claude and return the raw reply text.

        Raises:
            ConversationError: If the response has no text content
        """
        api_messages = [
            {"role": m.role, "content": m.content}
            for m in self.messages
        ]

        response = self.client.messages.create(
            model=self.settings.model_name,
            max_tokens=self.settings.max_tokens,
            system=get_system_prompt(),
            messages=api_messages
        )

        # response.content is a list of content blocks; join the text ones
        texts = [
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ]
        if not texts:
            raise ConversationError("Claude returned a response with no text content.")

        return "".join(texts)
