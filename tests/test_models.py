"""Unit tests for the pydantic models."""

import pytest
from pydantic import ValidationError

from chat_reflow.models import ChatReply, PassTrace, ReflowPolicy


class TestReflowPolicy:

    def test_greeting_phrases_are_lowercased(self):
        policy = ReflowPolicy(greeting_phrases=["  Okay ", "Got It"])
        assert policy.greeting_phrases == ("okay", "got it")

    def test_blank_greeting_phrase_is_rejected(self):
        with pytest.raises(ValidationError):
            ReflowPolicy(greeting_phrases=("sure", "   "))

    def test_empty_greeting_list_is_allowed(self):
        assert ReflowPolicy(greeting_phrases=()).greeting_phrases == ()

    def test_split_bounds_must_be_ordered(self):
        with pytest.raises(ValidationError, match="wrap_min_split"):
            ReflowPolicy(wrap_min_split=30, wrap_max_split=24)

    def test_negative_threshold_is_rejected(self):
        with pytest.raises(ValidationError):
            ReflowPolicy(comma_min_line_length=-1)

    def test_zero_word_limit_is_rejected(self):
        with pytest.raises(ValidationError):
            ReflowPolicy(wrap_max_words=0)

    def test_policy_is_frozen(self):
        policy = ReflowPolicy()
        with pytest.raises(ValidationError):
            policy.wrap_max_words = 40


class TestChatReply:

    def test_lines_include_blank_separators(self):
        reply = ChatReply(raw="x", text="One.\nTwo.\n\nThree.")
        assert reply.lines == ["One.", "Two.", "", "Three."]

    def test_empty_text_has_no_lines(self):
        reply = ChatReply(raw="", text="")
        assert reply.lines == []
        assert reply.chunks == []

    def test_chunks_split_on_blank_lines(self):
        reply = ChatReply(raw="x", text="One.\nTwo.\n\nThree.\n\nOk?")
        assert reply.chunks == ["One.\nTwo.", "Three.", "Ok?"]

    def test_optional_fields_default_to_none(self):
        reply = ChatReply(raw="a", text="a")
        assert reply.confirmation is None
        assert reply.model is None


class TestPassTrace:

    def test_fields(self):
        trace = PassTrace(name="normalize", text="hi")
        assert trace.name == "normalize"
        assert trace.text == "hi"
