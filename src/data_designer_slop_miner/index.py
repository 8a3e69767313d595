from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import asdict, dataclass

from data_designer_slop_miner.quality import DEFAULT_POLICY, QualityFilter, QualityPolicy
from data_designer_slop_miner.text import (
    NARRATION,
    classify_sentence,
    lemmatize_tokens,
    segment_sentences,
    sliding_ngrams,
    strip_markup,
    tokenize,
)

logger = logging.getLogger(__name__)

LENGTH_BONUS = 0.2
UNCOMMON_WORD_BONUS = 0.5
NARRATION_MULTIPLIER = 1.25


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass
class NgramRecord:
    """Frequency and score of one lemmatized n-gram."""

    key: str
    original: str
    count: int = 0
    score: float = 0.0
    last_seen_message_index: int = 0
    context_sentence: str = ""

    def to_payload(self) -> dict[str, object]:
        return asdict(self)

    @classmethod
    def from_payload(cls, payload: dict) -> NgramRecord:
        return cls(
            key=payload["key"],
            original=payload["original"],
            count=int(payload.get("count", 0)),
            score=float(payload.get("score", 0.0)),
            last_seen_message_index=int(payload.get("last_seen_message_index", 0)),
            context_sentence=payload.get("context_sentence", ""),
        )


def contains_tokens(haystack: str, needle: str) -> bool:
    """True if ``needle`` appears in ``haystack`` on token boundaries."""
    return f" {needle} " in f" {haystack} "


class SlopCandidateSet:
    """Promoted n-gram keys where no member is a token-substring of another.

    Adding a phrase that an existing member already contains is a no-op. Adding
    a phrase that contains existing members replaces them, so the set keeps the
    maximal repeated phrases rather than one entry per n-gram length.
    """

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._members: set[str] = set()
        for key in keys:
            self.add(key)

    def add(self, key: str) -> bool:
        superseded = []
        for member in self._members:
            if contains_tokens(member, key):
                return False
            if contains_tokens(key, member):
                superseded.append(member)
        self._members.difference_update(superseded)
        self._members.add(key)
        return True

    def discard(self, key: str) -> None:
        self._members.discard(key)

    def clear(self) -> None:
        self._members.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._members))

    def __len__(self) -> int:
        return len(self._members)


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------


class NgramIndex:
    """Streaming frequency/score table keyed by lemmatized n-gram.

    One instance belongs to one conversation. ``messages_processed`` is the
    ordinal of the next message to be tracked; it is what staleness is measured
    against.
    """

    def __init__(self, policy: QualityPolicy = DEFAULT_POLICY, quality: QualityFilter | None = None) -> None:
        self.policy = policy
        self.quality = quality or QualityFilter(policy)
        self.records: dict[str, NgramRecord] = {}
        self.candidates = SlopCandidateSet()
        self.messages_processed = 0

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, key: object) -> bool:
        return key in self.records

    def get(self, key: str) -> NgramRecord | None:
        return self.records.get(key)

    def track_occurrence(self, text: str) -> list[str]:
        """Index one message and advance the message ordinal.

        Returns the keys whose score crossed the slop threshold during this
        call, in the order they crossed.
        """
        crossed: list[str] = []
        ordinal = self.messages_processed
        self.messages_processed += 1

        clean = strip_markup(text)
        if not clean:
            return crossed

        policy = self.policy
        for sentence in segment_sentences(clean):
            narration = classify_sentence(sentence) == NARRATION
            original_tokens = tokenize(sentence)
            lemma_tokens = lemmatize_tokens(original_tokens)
            for n in range(policy.min_ngram_length, policy.max_ngram_length + 1):
                if len(original_tokens) < n:
                    break
                originals = sliding_ngrams(original_tokens, n)
                lemmas = sliding_ngrams(lemma_tokens, n)
                for i, (original, key) in enumerate(zip(originals, lemmas)):
                    tokens = original_tokens[i : i + n]
                    if self.quality.is_already_covered(original) or self.quality.is_low_quality(tokens):
                        continue
                    increment = self._increment(n, tokens, original, narration)
                    if self._update(key, original, sentence, increment, ordinal):
                        crossed.append(key)
        return crossed

    def _increment(self, n: int, tokens: list[str], original: str, narration: bool) -> float:
        increment = 1.0
        increment += (n - self.policy.min_ngram_length) * LENGTH_BONUS
        increment += UNCOMMON_WORD_BONUS * self.quality.uncommon_word_count(tokens)
        increment += self.quality.blacklist_weight(original)
        if narration:
            increment *= NARRATION_MULTIPLIER
        return increment

    def _update(self, key: str, original: str, sentence: str, increment: float, ordinal: int) -> bool:
        record = self.records.get(key)
        if record is None:
            record = NgramRecord(key=key, original=original)
            self.records[key] = record
        previous = record.score
        record.count += 1
        record.score = previous + increment
        record.last_seen_message_index = ordinal
        record.original = original
        record.context_sentence = sentence

        threshold = self.policy.score_threshold
        if previous < threshold <= record.score:
            added = self.candidates.add(key)
            logger.debug(f"Threshold crossed for {key!r} (score {record.score:.2f}, candidate added: {added})")
            return True
        return False

    def remove(self, key: str) -> None:
        self.records.pop(key, None)
        self.candidates.discard(key)

    def consume(self, phrases: Iterable[str]) -> list[str]:
        """Soft-reset the records whose original surface form was consumed.

        The record keeps its count and history but its score drops to zero and
        it leaves the candidate set. Returns the keys that were reset.
        """
        by_original: dict[str, str] = {}
        for key, record in self.records.items():
            by_original.setdefault(record.original, key)
        reset = []
        for phrase in phrases:
            key = by_original.get(phrase)
            if key is None:
                continue
            self.records[key].score = 0.0
            self.candidates.discard(key)
            reset.append(key)
        return reset

    def clear(self) -> None:
        self.records.clear()
        self.candidates.clear()
        self.messages_processed = 0

    def to_payload(self) -> dict[str, object]:
        return {
            "records": {key: record.to_payload() for key, record in self.records.items()},
            "candidates": list(self.candidates),
            "messages_processed": self.messages_processed,
        }

    @classmethod
    def from_payload(
        cls, payload: dict, policy: QualityPolicy = DEFAULT_POLICY, quality: QualityFilter | None = None
    ) -> NgramIndex:
        index = cls(policy, quality)
        for key, raw in (payload.get("records") or {}).items():
            index.records[key] = NgramRecord.from_payload({**raw, "key": key})
        index.candidates = SlopCandidateSet(payload.get("candidates") or ())
        index.messages_processed = int(payload.get("messages_processed", 0))
        return index
