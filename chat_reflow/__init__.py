"""
Chat Reflow - reshape raw AI replies into short, readable chat text.

This package provides a deterministic reflow engine that turns a raw model
reply into line-wrapped sentences, paragraph-split blocks and
question-isolated lines, ready for a chat bubble or a voice layer.

CLI Usage:
    $ reflow-cli format "Sure, here is what I found..."
    $ cat reply.txt | reflow-cli format --format speech

Programmatic Usage:
    from chat_reflow import append_confirmation, chat_style_format

    text = chat_style_format(raw_reply)
    text = append_confirmation(text, "Should I add this to your list?")
"""

__version__ = "0.1.0"

# Re-export the public API
from .conversation import ChatAssistant, ConversationError
from .formatters import format_as_json, format_as_text, format_for_speech
from .models import ChatReply, ConversationMessage, PassTrace, ReflowPolicy
from .reflow import (
    DEFAULT_POLICY,
    PIPELINE,
    append_confirmation,
    chat_style_format,
    trace_passes,
)

__all__ = [
    "__version__",
    # Core
    "chat_style_format",
    "append_confirmation",
    "trace_passes",
    "PIPELINE",
    "DEFAULT_POLICY",
    # Models
    "ReflowPolicy",
    "ChatReply",
    "ConversationMessage",
    "PassTrace",
    # Chat layer
    "ChatAssistant",
    "ConversationError",
    # Formatters
    "format_as_text",
    "format_as_json",
    "format_for_speech",
]
