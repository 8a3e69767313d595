from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from data_designer_slop_miner.index import NgramIndex
from data_designer_slop_miner.merge import AnalysisSnapshot, merge_patterns
from data_designer_slop_miner.quality import QualityPolicy

logger = logging.getLogger(__name__)

CANDIDATE_LIMIT = 2000
MIN_LEADERBOARD_SCORE = 1.0
PRESCREEN_BATCH_SIZE = 50
GENERATION_BATCH_SIZE = 15


@dataclass(frozen=True)
class RuleCandidate:
    """A phrase or pattern handed to the external rule generator."""

    candidate: str
    enhanced_context: str
    score: float

    def to_payload(self) -> dict[str, object]:
        return {"candidate": self.candidate, "enhanced_context": self.enhanced_context, "score": self.score}


Triage = Callable[[list[str]], Sequence[RuleCandidate]]


def ranked_snapshot(index: NgramIndex, limit: int = CANDIDATE_LIMIT) -> dict[str, float]:
    """Top records by score, keyed by original surface form.

    Records at or below :data:`MIN_LEADERBOARD_SCORE` are left out. Scores of
    records sharing a surface form are summed.
    """
    eligible = [r for r in index.records.values() if r.score > MIN_LEADERBOARD_SCORE]
    eligible.sort(key=lambda r: r.score, reverse=True)
    if len(eligible) > limit:
        logger.debug(f"Limited leaderboard candidates from {len(eligible)} to {limit}")
        eligible = eligible[:limit]
    scores: dict[str, float] = {}
    for record in eligible:
        scores[record.original] = scores.get(record.original, 0) + record.score
    return scores


def _by_score(scores: dict[str, float]) -> dict[str, float]:
    return dict(sorted(scores.items(), key=lambda item: item[1], reverse=True))


def build_leaderboard(index: NgramIndex, limit: int = CANDIDATE_LIMIT) -> AnalysisSnapshot:
    snapshot = merge_patterns(ranked_snapshot(index, limit), index.policy.pattern_min_common_words)
    return AnalysisSnapshot(merged=_by_score(snapshot.merged), remaining=_by_score(snapshot.remaining))


def gather_rule_candidates(index: NgramIndex, snapshot: AnalysisSnapshot) -> list[RuleCandidate]:
    """Merged patterns and remaining phrases as one score-ordered list.

    A merged pattern is its own context. A remaining phrase carries the last
    sentence it was seen in.
    """
    contexts = {record.original: record.context_sentence for record in index.records.values()}
    candidates = [RuleCandidate(pattern, pattern, score) for pattern, score in snapshot.merged.items()]
    candidates.extend(
        RuleCandidate(phrase, contexts.get(phrase) or phrase, score) for phrase, score in snapshot.remaining.items()
    )
    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates


def select_for_generation(
    candidates: Sequence[RuleCandidate],
    policy: QualityPolicy,
    triage: Triage | None = None,
) -> list[RuleCandidate]:
    """Pre-screen the top candidates and cap the batch for rule generation.

    ``triage`` receives the candidate strings and returns the ones worth a rule.
    It is skipped when the policy says so or when none is supplied.
    """
    prescreen = list(candidates[:PRESCREEN_BATCH_SIZE])
    if policy.skip_triage or triage is None:
        selected = prescreen
    else:
        selected = list(triage([c.candidate for c in prescreen]))
        rejected = len(prescreen) - len(selected)
        if rejected > 0:
            logger.info(f"Triage rejected {rejected} slop candidates")
    return selected[:GENERATION_BATCH_SIZE]
