"""Unit tests for reply formatters."""

import json

from chat_reflow.formatters import format_as_json, format_as_text, format_for_speech
from chat_reflow.models import ChatReply


def make_reply():
    return ChatReply(
        raw="Are you free? Can we meet? Great.",
        text="Are you free?\nCan we meet?\n\nGreat.\n\nShall I book it?",
        confirmation="Shall I book it?",
        model="claude-test",
    )


class TestFormatters:

    def test_text_is_the_reflowed_text(self):
        reply = make_reply()
        assert format_as_text(reply) == reply.text

    def test_json_round_trips_fields(self):
        data = json.loads(format_as_json(make_reply()))

        assert data["raw"] == "Are you free? Can we meet? Great."
        assert data["confirmation"] == "Shall I book it?"
        assert data["model"] == "claude-test"
        assert data["text"].endswith("Shall I book it?")

    def test_json_indent(self):
        assert format_as_json(make_reply(), indent=4).startswith('{\n    "raw"')

    def test_speech_drops_blank_lines(self):
        assert format_for_speech(make_reply()) == [
            "Are you free?",
            "Can we meet?",
            "Great.",
            "Shall I book it?",
        ]

    def test_speech_trims_utterances(self):
        reply = ChatReply(raw="x", text="  Hello there. \n\t\nBye.")
        assert format_for_speech(reply) == ["Hello there.", "Bye."]

    def test_speech_of_empty_reply(self):
        assert format_for_speech(ChatReply(raw="", text="")) == []
