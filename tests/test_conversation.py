"""Unit tests for the Claude-backed chat assistant."""

from unittest.mock import MagicMock

import pytest

from chat_reflow.conversation import ChatAssistant, ConversationError
from chat_reflow.models import ReflowPolicy
from chat_reflow.prompts import get_system_prompt


class TestChatAssistant:

    def test_requires_api_key_without_client(self, settings):
        with pytest.raises(ConversationError, match="API key"):
            ChatAssistant(settings=settings)

    def test_reply_is_reflowed(self, settings, client_factory):
        client = client_factory("Sure! Are you free? Can we meet? Great.")
        assistant = ChatAssistant(settings=settings, client=client)

        reply = assistant.send("Plan a meeting")

        assert reply.raw == "Sure! Are you free? Can we meet? Great."
        assert reply.text == "Are you free?\nCan we meet?\n\nGreat."
        assert reply.model == settings.model_name
        assert reply.confirmation is None

    def test_confirmation_is_appended_after_reflow(self, settings, client_factory):
        client = client_factory("Added milk to your list.")
        assistant = ChatAssistant(settings=settings, client=client)

        reply = assistant.send("Add milk", confirmation="Anything else, or shall I stop?")

        assert reply.text == "Added milk to your list.\n\nAnything else, or shall I stop?"
        assert reply.confirmation == "Anything else, or shall I stop?"

    def test_history_keeps_raw_text(self, settings, client_factory):
        raw = "Of course! One. Two. Three."
        assistant = ChatAssistant(settings=settings, client=client_factory(raw))

        assistant.send("Count to three")

        assert [(m.role, m.content) for m in assistant.messages] == [
            ("user", "Count to three"),
            ("assistant", raw),
        ]

    def test_api_call_carries_full_history(self, settings, client_factory):
        client = client_factory("First answer.", "Second answer.")
        assistant = ChatAssistant(settings=settings, client=client)

        assistant.send("Hello")
        assistant.send("And then?")

        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == settings.model_name
        assert kwargs["max_tokens"] == settings.max_tokens
        assert kwargs["system"] == get_system_prompt()
        assert kwargs["messages"] == [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "First answer."},
            {"role": "user", "content": "And then?"},
        ]

    def test_custom_policy_is_used(self, settings, client_factory):
        client = client_factory("Okay, done.")
        policy = ReflowPolicy(greeting_phrases=("okay",))
        assistant = ChatAssistant(settings=settings, client=client, policy=policy)

        assert assistant.send("Do it").text == "done."

    def test_empty_message_is_rejected(self, settings, client_factory):
        client = client_factory()
        assistant = ChatAssistant(settings=settings, client=client)

        with pytest.raises(ConversationError):
            assistant.send("   ")
        client.messages.create.assert_not_called()

    def test_response_without_text_raises(self, settings):
        client = MagicMock()
        client.messages.create.return_value = MagicMock(
            content=[MagicMock(type="tool_use")]
        )
        assistant = ChatAssistant(settings=settings, client=client)

        with pytest.raises(ConversationError, match="no text"):
            assistant.send("Hello")
        assert assistant.messages == []

    def test_api_failure_rolls_back_user_turn(self, settings):
        client = MagicMock()
        client.messages.create.side_effect = RuntimeError("boom")
        assistant = ChatAssistant(settings=settings, client=client)

        with pytest.raises(RuntimeError, match="boom"):
            assistant.send("Hello")
        assert assistant.messages == []

    def test_multiple_text_blocks_are_joined(self, settings):
        client = MagicMock()
        client.messages.create.return_value = MagicMock(content=[
            MagicMock(type="text", text="Part one. "),
            MagicMock(type="text", text="Part two."),
        ])
        assistant = ChatAssistant(settings=settings, client=client)

        assert assistant.send("Hi").raw == "Part one. Part two."

    def test_reset_clears_history(self, settings, client_factory):
        assistant = ChatAssistant(settings=settings, client=client_factory("Hi."))
        assistant.send("Hello")

        assistant.reset()

        assert assistant.messages == []
