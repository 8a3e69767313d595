from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class MergedPattern:
    """Phrases sharing a word prefix, generalized as ``prefix alt1/alt2/...``."""

    prefix_tokens: tuple[str, ...]
    alternatives: tuple[str, ...]
    score: float

    @property
    def text(self) -> str:
        prefix = " ".join(self.prefix_tokens)
        if not self.alternatives:
            return prefix
        return f"{prefix} {'/'.join(self.alternatives)}"


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Recomputed leaderboard view. Never authoritative."""

    merged: dict[str, float]
    remaining: dict[str, float]

    @classmethod
    def empty(cls) -> AnalysisSnapshot:
        return cls(merged={}, remaining={})

    def to_payload(self) -> dict[str, dict[str, float]]:
        return {"merged": dict(self.merged), "remaining": dict(self.remaining)}

    @classmethod
    def from_payload(cls, payload: Mapping) -> AnalysisSnapshot:
        return cls(merged=dict(payload.get("merged") or {}), remaining=dict(payload.get("remaining") or {}))

    def __len__(self) -> int:
        return len(self.merged) + len(self.remaining)


def cull_substrings(scores: Mapping[str, float]) -> dict[str, float]:
    """Keep only phrases that are not a literal substring of a longer survivor.

    The score of a culled phrase is dropped, not folded into the longer one.
    """
    ordered = sorted(scores, key=len, reverse=True)
    removed: set[str] = set()
    for i, longer in enumerate(ordered):
        if longer in removed:
            continue
        for shorter in ordered[i + 1 :]:
            if shorter not in removed and shorter in longer:
                removed.add(shorter)
    return {phrase: score for phrase, score in scores.items() if phrase not in removed}


def _common_prefix_length(a: list[str], b: list[str], limit: int | None = None) -> int:
    limit = min(len(a), len(b)) if limit is None else min(limit, len(a), len(b))
    k = 0
    while k < limit and a[k] == b[k]:
        k += 1
    return k


def cluster_by_prefix(phrases: Mapping[str, float], min_common_words: int) -> tuple[list[MergedPattern], set[str]]:
    """Greedily group phrases that share a word prefix.

    Anchors are visited in lexicographic order; each unconsumed phrase after
    the anchor that shares at least ``min_common_words`` leading words with it
    joins the group. The group prefix is then shrunk to what all members share,
    and the group is only kept when that prefix is still long enough.

    Returns the patterns and the set of phrases they absorbed. Alternatives are
    listed in the order the phrases appear in ``phrases``.
    """
    rank = {phrase: i for i, phrase in enumerate(phrases)}
    candidates = sorted(phrases)
    words = [c.split(" ") for c in candidates]
    consumed: set[int] = set()
    patterns: list[MergedPattern] = []

    for i in range(len(candidates)):
        if i in consumed:
            continue
        group = [i]
        for j in range(i + 1, len(candidates)):
            if j not in consumed and _common_prefix_length(words[i], words[j]) >= min_common_words:
                group.append(j)
        if len(group) < 2:
            continue

        prefix_length = len(words[i])
        for j in group[1:]:
            prefix_length = _common_prefix_length(words[i], words[j], prefix_length)
        prefix = tuple(w for w in words[i][:prefix_length] if w)
        if len(prefix) < min_common_words:
            continue

        consumed.update(group)
        members = sorted(group, key=lambda k: rank[candidates[k]])
        alternatives: list[str] = []
        for k in members:
            rest = " ".join(words[k][prefix_length:]).strip()
            if rest and rest not in alternatives:
                alternatives.append(rest)
        total = sum(phrases[candidates[k]] for k in group)
        patterns.append(MergedPattern(prefix_tokens=prefix, alternatives=tuple(alternatives), score=total))

    return patterns, {candidates[k] for k in consumed}


def merge_patterns(scores: Mapping[str, float], min_common_words: int = 3) -> AnalysisSnapshot:
    """Cull substrings, then generalize shared prefixes into merged patterns.

    ``remaining`` holds the surviving phrases that were neither absorbed into a
    pattern nor equal to (or a word prefix of) a pattern's text.
    """
    culled = cull_substrings(scores)
    patterns, absorbed = cluster_by_prefix(culled, min_common_words)

    merged: dict[str, float] = {}
    for pattern in patterns:
        merged[pattern.text] = merged.get(pattern.text, 0) + pattern.score

    remaining: dict[str, float] = {}
    for phrase in sorted(culled):
        if phrase in absorbed:
            continue
        if any(text == phrase or text.startswith(phrase + " ") for text in merged):
            continue
        remaining[phrase] = remaining.get(phrase, 0) + culled[phrase]
    return AnalysisSnapshot(merged=merged, remaining=remaining)
