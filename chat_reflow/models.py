"""
Pydantic models for the reflow engine and the chat layer around it.

These models define:
- The policy thresholds used by the reflow passes
- A single turn of conversation history
- A finished chat reply (raw model text + reflowed text)
- A per-pass trace entry used for debugging the pipeline

The reflow engine itself only ever reads a ReflowPolicy. Everything else
here belongs to the chat/voice layer that calls it.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ReflowPolicy(BaseModel):
    """
    Numeric and lexical thresholds for the reflow passes.

    The defaults are the behaviour-compatible values. The model is frozen so
    a single instance can be shared freely between calls.

    Example:
        policy = ReflowPolicy(comma_min_line_length=80)
        text = chat_style_format(raw, policy)
    """

    model_config = ConfigDict(frozen=True)

    greeting_phrases: tuple[str, ...] = Field(
        default=("sure", "absolutely", "of course", "no problem"),
        description="Filler acknowledgements stripped from the start of a reply"
    )

    comma_min_count: int = Field(
        default=2,
        ge=0,
        description="Minimum commas on a line before it is split into clauses"
    )

    comma_min_line_length: int = Field(
        default=60,
        ge=0,
        description="A line must be longer than this to be comma-chunked"
    )

    wrap_max_words: int = Field(
        default=22,
        ge=1,
        description="Lines with more words than this get wrapped"
    )

    wrap_min_split: int = Field(
        default=18,
        ge=1,
        description="Lower bound of the word index used for a single split"
    )

    wrap_max_split: int = Field(
        default=24,
        ge=1,
        description="Upper bound of the word index used for a single split"
    )

    paragraph_lead_sentences: int = Field(
        default=2,
        ge=1,
        description="Sentences kept in the first block of a long paragraph"
    )

    question_isolation_min: int = Field(
        default=2,
        ge=1,
        description="Question marks needed before questions get their own lines"
    )

    @field_validator("greeting_phrases")
    @classmethod
    def _normalize_phrases(cls, phrases: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(p.strip().lower() for p in phrases)
        if any(not p for p in cleaned):
            raise ValueError("greeting phrases must not be blank")
        return cleaned

    @model_validator(mode="after")
    def _check_split_bounds(self) -> "ReflowPolicy":
        if self.wrap_min_split > self.wrap_max_split:
            raise ValueError(
                f"wrap_min_split ({self.wrap_min_split}) must not exceed "
                f"wrap_max_split ({self.wrap_max_split})"
            )
        return self


class ConversationMessage(BaseModel):
    """
    A single message in the conversation history.

    The role is either "user" or "assistant". Assistant content is always the
    raw model text, never the reflowed version.
    """

    role: str = Field(
        description="Either 'user' or 'assistant'"
    )

    content: str = Field(
        description="The message content"
    )


class ChatReply(BaseModel):
    """
    A finished assistant reply, ready for a chat bubble or a voice layer.

    `text` already has the confirmation block appended (when there is one),
    so callers display it as-is.
    """

    raw: str = Field(
        description="The unmodified model output"
    )

    text: str = Field(
        description="Reflowed text, with the confirmation appended if given"
    )

    confirmation: str | None = Field(
        default=None,
        description="Trailing confirmation prompt, if any"
    )

    model: str | None = Field(
        default=None,
        description="Model that produced the raw text"
    )

    @property
    def lines(self) -> list[str]:
        """All lines of the reflowed text, blank separators included."""
        return self.text.split("\n") if self.text else []

    @property
    def chunks(self) -> list[str]:
        """Blocks separated by blank lines."""
        return [block for block in self.text.split("\n\n") if block.strip()]


class PassTrace(BaseModel):
    """Text as it stood after one named pass of the pipeline."""

    name: str
    text: str
