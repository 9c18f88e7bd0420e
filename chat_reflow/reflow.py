"""
Conversational text reflow engine.

Takes a raw AI-generated reply and reshapes it into short, readable (and
speakable) chunks: comma lists become one clause per line, overlong lines are
wrapped, wall-of-text paragraphs are split, and multi-question replies get one
question per line. Only whitespace and line/paragraph boundaries change, plus
a terminal period on lines the engine itself cut.

The pipeline is a sequence of passes, each one consuming the previous one's
output. Order matters: later passes work on the line and paragraph structure
left behind by earlier ones, so PIPELINE is the single source of truth for it.

Callers must run chat_style_format() exactly once on raw model output. The
pipeline is not idempotent; feeding it its own output can split text further.

Usage:
    from chat_reflow.reflow import append_confirmation, chat_style_format

    text = chat_style_format(raw_reply)
    text = append_confirmation(text, "Want me to add it to your list?")
"""

import logging
import re
from collections.abc import Callable
from functools import lru_cache

from .models import PassTrace, ReflowPolicy

logger = logging.getLogger(__name__)


# ============================================================================
# Policy Constants
# ============================================================================
# Behaviour-compatible defaults. Override them per call with a ReflowPolicy.

GREETING_PHRASES = ("sure", "absolutely", "of course", "no problem")
COMMA_MIN_COUNT = 2
COMMA_MIN_LINE_LENGTH = 60
WRAP_MAX_WORDS = 22
WRAP_MIN_SPLIT = 18
WRAP_MAX_SPLIT = 24
PARAGRAPH_LEAD_SENTENCES = 2
QUESTION_ISOLATION_MIN = 2

DEFAULT_POLICY = ReflowPolicy(
    greeting_phrases=GREETING_PHRASES,
    comma_min_count=COMMA_MIN_COUNT,
    comma_min_line_length=COMMA_MIN_LINE_LENGTH,
    wrap_max_words=WRAP_MAX_WORDS,
    wrap_min_split=WRAP_MIN_SPLIT,
    wrap_max_split=WRAP_MAX_SPLIT,
    paragraph_lead_sentences=PARAGRAPH_LEAD_SENTENCES,
    question_isolation_min=QUESTION_ISOLATION_MIN,
)

TERMINAL_PUNCTUATION = (".", "!", "?")

_LINE_ENDINGS = re.compile(r"\r\n?")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")
_HORIZONTAL_RUN = re.compile(r"[ \t]{2,}")
_PERIOD_SPACE = re.compile(r"\. +")
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
# The capture group keeps the separators so line breaks can be carried over
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])(\s+)")
_QUESTION_SPACE = re.compile(r"\? +")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


@lru_cache(maxsize=16)
def _greeting_pattern(phrases: tuple[str, ...]) -> re.Pattern[str]:
    # Longest first so "sure thing" wins over "sure" when both are configured
    ordered = sorted(phrases, key=len, reverse=True)
    alternation = "|".join(re.escape(phrase) for phrase in ordered)
    return re.compile(rf"^(?:{alternation})[,!\s]+", re.IGNORECASE)


def _with_terminal(part: str) -> str:
    return part if part.endswith(TERMINAL_PUNCTUATION) else part + "."


# ============================================================================
# Passes
# ============================================================================

def normalize_text(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """
    Pass 1: unify line endings and trim whitespace.

    CRLF and lone CR both become LF, trailing spaces/tabs before a newline
    are dropped, and the whole text is trimmed.
    """
    text = _LINE_ENDINGS.sub("\n", text)
    text = _TRAILING_SPACE.sub("\n", text)
    return text.strip()


def strip_greeting(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """
    Pass 2: drop a leading filler acknowledgement ("Sure, ...").

    Only the very start of the text is considered, and the phrase must be
    followed by at least one comma, exclamation mark or whitespace.
    """
    if not policy.greeting_phrases:
        return text
    return _greeting_pattern(policy.greeting_phrases).sub("", text, count=1)


def collapse_horizontal_whitespace(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """Pass 3: squeeze runs of spaces/tabs to one space. Newlines are untouched."""
    return _HORIZONTAL_RUN.sub(" ", text)


def chunk_commas(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """
    Pass 4: put each clause of a long comma list on its own line.

    A line qualifies when it has at least `comma_min_count` commas and is
    longer than `comma_min_line_length` characters. Its clauses are trimmed,
    empty ones dropped, and each gets a period unless it already ends in
    terminal punctuation.
    """
    output: list[str] = []

    for line in text.split("\n"):
        if (
            line.count(",") >= policy.comma_min_count
            and len(line) > policy.comma_min_line_length
        ):
            parts = [part.strip() for part in line.split(",")]
            parts = [part for part in parts if part]
            if len(parts) >= 2:
                output.extend(_with_terminal(part) for part in parts)
                continue
        output.append(line)

    return "\n".join(output)


def wrap_long_lines(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """
    Pass 5: break lines with more than `wrap_max_words` words.

    If the line has period-space sequences it is broken after every one of
    them. Otherwise it is split once, at a word index clamped between
    `wrap_min_split` and `wrap_max_split`, and the first half gets a period.
    """
    output: list[str] = []

    for line in text.split("\n"):
        words = line.split()
        if len(words) <= policy.wrap_max_words:
            output.append(line)
            continue

        if ". " in line:
            output.append(_PERIOD_SPACE.sub(".\n", line))
            continue

        split_at = min(
            max(policy.wrap_min_split, len(words) // 2),
            policy.wrap_max_split,
        )
        if split_at >= len(words):
            # Only reachable with a custom policy; nothing would be left over
            output.append(line)
            continue

        left = " ".join(words[:split_at])
        right = " ".join(words[split_at:])
        output.append(_with_terminal(left))
        output.append(right)

    return "\n".join(output)


def _segment_sentences(paragraph: str) -> list[tuple[str, str]]:
    """
    Split a paragraph into (separator, sentence) pairs.

    The separator is what joined the sentence to the previous one: "\\n" if
    the original whitespace held a line break, " " otherwise, "" for the
    first sentence.
    """
    segments: list[tuple[str, str]] = []
    joiner = ""

    for index, piece in enumerate(_SENTENCE_BOUNDARY.split(paragraph)):
        if index % 2:
            joiner = "\n" if "\n" in piece or joiner == "\n" else " "
            continue
        sentence = piece.strip()
        if sentence:
            segments.append((joiner if segments else "", sentence))
            joiner = ""

    return segments


def _join_segments(segments: list[tuple[str, str]]) -> str:
    first = segments[0][1]
    return first + "".join(sep + sentence for sep, sentence in segments[1:])


def chunk_paragraphs(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """
    Pass 6: split wall-of-text paragraphs into two blocks.

    Paragraphs are separated by two or more newlines. A paragraph with more
    than `paragraph_lead_sentences` sentences becomes a lead block and a
    remainder block, separated by one blank line. Sentences inside a block
    keep an existing line break between them and are otherwise joined by a
    single space.
    """
    lead = policy.paragraph_lead_sentences
    blocks: list[str] = []

    for paragraph in _PARAGRAPH_BREAK.split(text):
        segments = _segment_sentences(paragraph)
        if len(segments) <= lead:
            blocks.append(paragraph.strip())
            continue

        first = _join_segments(segments[:lead])
        rest = _join_segments(segments[lead:])
        blocks.append(first + "\n\n" + rest)

    return "\n\n".join(blocks)


def isolate_questions(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """Pass 7: with enough question marks, start a new line after each "? "."""
    if text.count("?") < policy.question_isolation_min:
        return text
    return _QUESTION_SPACE.sub("?\n", text)


def final_cleanup(text: str, policy: ReflowPolicy = DEFAULT_POLICY) -> str:
    """Pass 8: at most one blank line anywhere, and trimmed ends."""
    return _EXCESS_NEWLINES.sub("\n\n", text).strip()


ReflowPass = Callable[[str, ReflowPolicy], str]

PIPELINE: tuple[tuple[str, ReflowPass], ...] = (
    ("normalize", normalize_text),
    ("strip_greeting", strip_greeting),
    ("collapse_whitespace", collapse_horizontal_whitespace),
    ("chunk_commas", chunk_commas),
    ("wrap_long_lines", wrap_long_lines),
    ("chunk_paragraphs", chunk_paragraphs),
    ("isolate_questions", isolate_questions),
    ("final_cleanup", final_cleanup),
)


# ============================================================================
# Public API
# ============================================================================

def trace_passes(raw: str | None, policy: ReflowPolicy | None = None) -> list[PassTrace]:
    """
    Run the pipeline and record the text after every pass.

    Returns an empty list for empty input, since no pass runs in that case.
    The last entry's text is what chat_style_format() returns.
    """
    if not raw:
        return []

    policy = policy or DEFAULT_POLICY
    traces: list[PassTrace] = []
    text = raw

    for name, reflow_pass in PIPELINE:
        text = reflow_pass(text, policy)
        traces.append(PassTrace(name=name, text=text))

    return traces


def chat_style_format(raw: str | None, policy: ReflowPolicy | None = None) -> str:
    """
    Reflow a raw model reply into short, readable lines and blocks.

    Args:
        raw: The unmodified model output. None or "" gives "".
        policy: Thresholds to use. Defaults to DEFAULT_POLICY.

    Returns:
        The reflowed text. Word content is unchanged apart from periods
        added to lines the engine cut.
    """
    if not raw:
        return ""

    policy = policy or DEFAULT_POLICY
    text = raw

    for _, reflow_pass in PIPELINE:
        text = reflow_pass(text, policy)

    logger.debug(
        "Reflowed %d chars into %d lines", len(raw), text.count("\n") + 1 if text else 0
    )
    return text


def append_confirmation(text: str, confirmation: str | None = None) -> str:
    """
    Append a confirmation block after one blank line.

    With no confirmation the text comes back untouched. Otherwise the text is
    trimmed and the confirmation is appended as given. It is not reflowed.
    """
    if not confirmation:
        return text
    return f"{text.strip()}\n\n{confirmation}"
