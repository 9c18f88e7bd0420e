"""
Output formatting for chat replies.

The models know what a reply IS; formatters know how to hand it to a
consumer:
- Text: the display string, exactly as reflowed
- JSON: machine-readable, good for piping to other tools
- Speech: one utterance per non-blank line, for a voice layer
"""

from .models import ChatReply


def format_as_text(reply: ChatReply) -> str:
    """Return the reflowed display text."""
    return reply.text


def format_as_json(reply: ChatReply, indent: int = 2) -> str:
    """
    Format the reply as pretty-printed JSON.

    Args:
        reply: The ChatReply to format
        indent: Number of spaces for indentation

    Returns:
        JSON string with raw text, display text, confirmation and model
    """
    return reply.model_dump_json(indent=indent)


def format_for_speech(reply: ChatReply) -> list[str]:
    """
    Split the reply into utterances for a text-to-speech layer.

    Each non-blank line is read as one utterance. Blank lines mark paragraph
    pauses and are not emitted.
    """
    return [line.strip() for line in reply.lines if line.strip()]
