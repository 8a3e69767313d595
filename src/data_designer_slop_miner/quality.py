from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from data_designer_slop_miner.lexicon import COMMON_WORDS, DEFAULT_NAMES

logger = logging.getLogger(__name__)

MIN_NGRAM_LENGTH = 3

CoveragePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class QualityPolicy:
    """Tunable thresholds and word lists used by the slop index.

    ``min_ngram_length`` is the structural floor of the algorithm and is not
    exposed through :class:`~data_designer_slop_miner.settings.AnalyzerSettings`.
    """

    min_ngram_length: int = MIN_NGRAM_LENGTH
    max_ngram_length: int = 10
    score_threshold: float = 3.0
    prune_after_messages: int = 20
    pattern_min_common_words: int = 3
    whitelist: frozenset[str] = field(default_factory=frozenset)
    blacklist: Mapping[str, int] = field(default_factory=dict)
    skip_triage: bool = False


DEFAULT_POLICY = QualityPolicy()


# ---------------------------------------------------------------------------
# Active fix rules
# ---------------------------------------------------------------------------


def compile_fix_patterns(sources: Iterable[str]) -> list[re.Pattern[str]]:
    """Compile externally supplied regex sources, skipping the invalid ones."""
    compiled: list[re.Pattern[str]] = []
    for source in sources or ():
        if not isinstance(source, str) or not source:
            continue
        try:
            compiled.append(re.compile(source, re.IGNORECASE))
        except re.error as exc:
            logger.warning(f"Skipping invalid fix pattern {source!r}: {exc}")
    return compiled


class FixPatternMatcher:
    """Active-rule predicate backed by a list of compiled fix patterns."""

    def __init__(self, sources: Iterable[str] = ()) -> None:
        self.sources = [s for s in sources or () if isinstance(s, str)]
        self.patterns = compile_fix_patterns(self.sources)

    def __call__(self, phrase: str) -> bool:
        lowered = phrase.lower()
        return any(p.search(lowered) for p in self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


# ---------------------------------------------------------------------------
# Quality filter
# ---------------------------------------------------------------------------


class QualityFilter:
    """Whitelist/blacklist policy and low-quality phrase rejection.

    The effective whitelist is the union of the built-in names, the built-in
    common words and the user whitelist. A phrase made only of whitelisted
    words carries no stylistic signal and is rejected. Blacklist weights are an
    additive score boost, never a hard filter.
    """

    def __init__(
        self,
        policy: QualityPolicy = DEFAULT_POLICY,
        is_covered: CoveragePredicate | None = None,
        *,
        names: Iterable[str] = DEFAULT_NAMES,
        common_words: Iterable[str] = COMMON_WORDS,
    ) -> None:
        self.policy = policy
        self.is_covered = is_covered
        user_whitelist = {w.lower() for w in policy.whitelist}
        self.effective_whitelist: frozenset[str] = frozenset(names) | frozenset(common_words) | user_whitelist
        self._blacklist = {term.lower(): weight for term, weight in policy.blacklist.items() if term}

    def is_low_quality(self, tokens: Sequence[str]) -> bool:
        if len(tokens) < self.policy.min_ngram_length:
            return True
        return all(t.lower() in self.effective_whitelist for t in tokens)

    def uncommon_word_count(self, tokens: Sequence[str]) -> int:
        return sum(1 for t in tokens if t.lower() not in self.effective_whitelist)

    def blacklist_weight(self, phrase: str) -> float:
        if not self._blacklist:
            return 0
        lowered = phrase.lower()
        return max((w for term, w in self._blacklist.items() if term in lowered), default=0)

    def is_already_covered(self, phrase: str) -> bool:
        if self.is_covered is None:
            return False
        return bool(self.is_covered(phrase))
