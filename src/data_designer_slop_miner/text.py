"""Text normalization: markup stripping, sentence segmentation, tokenization, lemmas.

Every function here is total. Empty or non-``str`` input produces empty output.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Literal

from data_designer_slop_miner.lexicon import LEMMAS

ChunkType = Literal["dialogue", "narration"]

DIALOGUE: ChunkType = "dialogue"
NARRATION: ChunkType = "narration"

# ---------------------------------------------------------------------------
# Compiled patterns
# ---------------------------------------------------------------------------

_FENCED_CODE_BLOCK_RE = re.compile(r"(?:```|~~~)\w*\s*.*?(?:```|~~~)", re.DOTALL)
_BLOCK_TAG_RE = re.compile(
    r"<(info_panel|memo|code|pre|script|style)[^>]*>.*?</\1>",
    re.IGNORECASE | re.DOTALL,
)
_ANY_TAG_RE = re.compile(r"<[^>]*>")
_EMPHASIS_RE = re.compile(r"(?:\*|_|~|`)+(.+?)(?:\*|_|~|`)+", re.DOTALL)
_QUOTED_RE = re.compile(r'"(.*?)"', re.DOTALL)
_PARENTHETICAL_RE = re.compile(r"\((.*?)\)", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+[\"”]?")
_DIALOGUE_MARK_RE = re.compile(r"[\"'“”‘’]")
_DIALOGUE_WINDOW = 10
_PUNCT_STRIP_RE = re.compile(r"^[^\w]+|[^\w]+$")


# ---------------------------------------------------------------------------
# Markup
# ---------------------------------------------------------------------------


def _strip_once(text: str) -> str:
    text = _FENCED_CODE_BLOCK_RE.sub(" ", text)
    text = _BLOCK_TAG_RE.sub(" ", text)
    text = _ANY_TAG_RE.sub(" ", text)
    text = _EMPHASIS_RE.sub(r"\1", text)
    text = _QUOTED_RE.sub(r" \1 ", text)
    text = _PARENTHETICAL_RE.sub(r" \1 ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_markup(text: str) -> str:
    """Remove code, markup tags and emphasis, flatten quotes and parentheses.

    The individual substitutions can expose new matches (a stray ``*`` next to
    a collapsed newline, for example), so the pass is repeated until the text
    stops changing. Every pass either shortens the text or removes markup
    characters, so this terminates, and the result is a fixed point.
    """
    if not isinstance(text, str) or not text:
        return ""
    current = text
    while True:
        cleaned = _strip_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


# ---------------------------------------------------------------------------
# Sentences and tokens
# ---------------------------------------------------------------------------


def segment_sentences(text: str) -> list[str]:
    """Split on terminal punctuation, keeping an optional closing quote.

    Trailing text after the last terminal punctuation is dropped, since it is
    usually a truncated generation. Text with no terminal punctuation at all
    is returned as one sentence.
    """
    if not isinstance(text, str) or not text.strip():
        return []
    sentences = [m.group(0).strip() for m in _SENTENCE_RE.finditer(text)]
    sentences = [s for s in sentences if s]
    return sentences or [text.strip()]


def classify_sentence(sentence: str) -> ChunkType:
    if not isinstance(sentence, str):
        return NARRATION
    if _DIALOGUE_MARK_RE.search(sentence.strip()[:_DIALOGUE_WINDOW]):
        return DIALOGUE
    return NARRATION


def tokenize(sentence: str) -> list[str]:
    if not isinstance(sentence, str):
        return []
    tokens = [_PUNCT_STRIP_RE.sub("", t).lower() for t in sentence.split()]
    return [t for t in tokens if t]


def lemmatize(token: str, lemmas: Mapping[str, str] | None = None) -> str:
    table = LEMMAS if lemmas is None else lemmas
    return table.get(token, token)


def lemmatize_tokens(tokens: Sequence[str], lemmas: Mapping[str, str] | None = None) -> list[str]:
    """Map each token to its lemma. The result is position-aligned with ``tokens``."""
    return [lemmatize(t, lemmas) for t in tokens]


def sliding_ngrams(tokens: Sequence[str], n: int) -> list[str]:
    if n <= 0 or len(tokens) < n:
        return []
    return [" ".join(tokens[i : i + n]) for i in range(len(tokens) - n + 1)]
