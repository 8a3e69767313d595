"""Live and batch execution of the slop index.

:class:`SlopSession` is the live context: one per conversation, fed one
message at a time. :func:`replay` rebuilds an index by feeding a whole history
through a fresh session, so batch output is by construction a serial replay of
live mode. :class:`BatchAnalysis` runs :func:`replay` in a separate process and
talks to it only through a queue of protocol events.
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from multiprocessing import get_context

from data_designer_slop_miner.index import NgramIndex
from data_designer_slop_miner.leaderboard import RuleCandidate, build_leaderboard, gather_rule_candidates
from data_designer_slop_miner.merge import AnalysisSnapshot
from data_designer_slop_miner.protocol import (
    BatchRequest,
    ChatMessage,
    CompleteEvent,
    ErrorEvent,
    ProgressEvent,
    parse_event,
)
from data_designer_slop_miner.pruning import is_prune_due, prune_sparse, prune_stale
from data_designer_slop_miner.quality import (
    DEFAULT_POLICY,
    CoveragePredicate,
    FixPatternMatcher,
    QualityFilter,
    QualityPolicy,
)
from data_designer_slop_miner.settings import AnalyzerSettings

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 5


class BatchAnalysisError(RuntimeError):
    """The batch worker failed or exited without completing."""


@dataclass
class BatchResult:
    index: NgramIndex
    leaderboard: AnalysisSnapshot
    messages_analyzed: int

    @classmethod
    def from_event(cls, event: CompleteEvent, request: BatchRequest) -> BatchResult:
        policy = request.config.to_policy()
        quality = QualityFilter(policy, FixPatternMatcher(request.covered_patterns))
        return cls(
            index=NgramIndex.from_payload(event.final_index, policy, quality),
            leaderboard=AnalysisSnapshot.from_payload(event.leaderboard),
            messages_analyzed=event.messages_analyzed,
        )


# ---------------------------------------------------------------------------
# Live mode
# ---------------------------------------------------------------------------


class SlopSession:
    """Live slop tracking for one conversation."""

    def __init__(self, policy: QualityPolicy = DEFAULT_POLICY, is_covered: CoveragePredicate | None = None) -> None:
        self.policy = policy
        self.is_covered = is_covered
        self.index = NgramIndex(policy, QualityFilter(policy, is_covered))
        self.leaderboard = AnalysisSnapshot.empty()
        self.messages_analyzed = 0

    @classmethod
    def from_settings(cls, settings: AnalyzerSettings | dict, covered_patterns: Iterable[str] = ()) -> SlopSession:
        if not isinstance(settings, AnalyzerSettings):
            settings = AnalyzerSettings.model_validate(settings or {})
        return cls(settings.to_policy(), FixPatternMatcher(covered_patterns))

    def observe(self, message: ChatMessage | dict | str) -> list[str]:
        """Track one message. Returns the keys promoted to slop candidates."""
        message = ChatMessage.coerce(message)
        if not message.is_analyzable:
            return []
        crossed = self.index.track_occurrence(message.text)
        self.messages_analyzed += 1
        if is_prune_due(self.index):
            prune_stale(self.index)
        return crossed

    def refresh_leaderboard(self) -> AnalysisSnapshot:
        self.leaderboard = build_leaderboard(self.index)
        return self.leaderboard

    def rule_candidates(self) -> list[RuleCandidate]:
        return gather_rule_candidates(self.index, self.refresh_leaderboard())

    def consume(self, phrases: Iterable[str]) -> list[str]:
        """Soft-reset phrases that the rule generator has turned into rules."""
        reset = self.index.consume(phrases)
        self.refresh_leaderboard()
        return reset

    def batch_request(
        self, messages: Sequence[ChatMessage | dict | str], *, aggressive_prune: bool = True
    ) -> BatchRequest:
        """Build a request that rebuilds this session's index under the same settings."""
        covered = self.is_covered.sources if isinstance(self.is_covered, FixPatternMatcher) else []
        return BatchRequest(
            messages=messages,
            config=AnalyzerSettings.from_policy(self.policy),
            covered_patterns=covered,
            aggressive_prune=aggressive_prune,
        )

    def adopt(self, result: BatchResult) -> None:
        """Replace the live state with a completed batch result."""
        self.index = result.index
        self.policy = result.index.policy
        self.is_covered = result.index.quality.is_covered
        self.leaderboard = result.leaderboard
        self.messages_analyzed = result.messages_analyzed

    def clear(self) -> None:
        self.index.clear()
        self.leaderboard = AnalysisSnapshot.empty()
        self.messages_analyzed = 0


# ---------------------------------------------------------------------------
# Batch mode
# ---------------------------------------------------------------------------


def replay(
    messages: Sequence[ChatMessage | dict | str],
    policy: QualityPolicy = DEFAULT_POLICY,
    is_covered: CoveragePredicate | None = None,
    *,
    aggressive_prune: bool = True,
    progress_every: int = PROGRESS_EVERY,
    on_progress: Callable[[ProgressEvent], None] | None = None,
) -> BatchResult:
    """Rebuild an index from scratch by feeding ``messages`` through a fresh session.

    With ``aggressive_prune`` the sparse sweep runs at every progress tick on
    top of the live decay, which trades exact equivalence with live mode for a
    lower peak memory on long histories.
    """
    session = SlopSession(policy, is_covered)
    total = len(messages)
    for processed, raw in enumerate(messages, start=1):
        message = ChatMessage.coerce(raw)
        if not message.is_analyzable:
            continue
        session.observe(message)
        if progress_every and processed % progress_every == 0:
            if aggressive_prune:
                prune_sparse(session.index)
            if on_progress is not None:
                on_progress(ProgressEvent(processed=processed, total=total, ai_analyzed=session.messages_analyzed))
    leaderboard = session.refresh_leaderboard()
    return BatchResult(index=session.index, leaderboard=leaderboard, messages_analyzed=session.messages_analyzed)


def _worker_main(payload: dict, events: queue.Queue) -> None:
    try:
        request = BatchRequest.model_validate(payload)
        policy = request.config.to_policy()
        matcher = FixPatternMatcher(request.covered_patterns)
        logger.info(f"Batch analysis started over {len(request.messages)} messages")
        result = replay(
            request.messages,
            policy,
            matcher,
            aggressive_prune=request.aggressive_prune,
            progress_every=request.progress_every,
            on_progress=lambda event: events.put(event.to_payload()),
        )
        complete = CompleteEvent(
            final_index=result.index.to_payload(),
            leaderboard=result.leaderboard.to_payload(),
            slop_candidates=list(result.index.candidates),
            messages_analyzed=result.messages_analyzed,
        )
        logger.info(f"Batch analysis complete: {result.messages_analyzed} AI messages analyzed")
        events.put(complete.to_payload())
    except Exception as exc:
        logger.exception("Batch analysis failed")
        events.put(ErrorEvent(message=str(exc) or type(exc).__name__).to_payload())


class BatchAnalysis:
    """Runs a :class:`BatchRequest` in a separate process.

    Iterate :meth:`events` to receive progress and the single terminal event.
    A worker that dies without a terminal event is reported as an
    :class:`ErrorEvent`. :meth:`cancel` terminates the worker; nothing is
    committed anywhere until the caller adopts a completed result.
    """

    def __init__(self, request: BatchRequest, *, start_method: str = "spawn", poll_interval: float = 0.1) -> None:
        self.request = request
        self.poll_interval = poll_interval
        self._context = get_context(start_method)
        self._events = self._context.Queue()
        self._process = None

    def start(self) -> None:
        if self._process is not None:
            raise BatchAnalysisError("batch analysis already started")
        self._process = self._context.Process(
            target=_worker_main,
            args=(self.request.to_payload(), self._events),
            daemon=True,
        )
        self._process.start()

    @property
    def is_running(self) -> bool:
        return self._process is not None and self._process.is_alive()

    def _next_payload(self) -> dict | None:
        while True:
            try:
                return self._events.get(timeout=self.poll_interval)
            except queue.Empty:
                if self._process.is_alive():
                    continue
            try:
                return self._events.get(timeout=self.poll_interval)
            except queue.Empty:
                return None

    def events(self) -> Iterator[ProgressEvent | CompleteEvent | ErrorEvent]:
        if self._process is None:
            self.start()
        while True:
            payload = self._next_payload()
            if payload is None:
                yield ErrorEvent(message=f"batch worker exited with code {self._process.exitcode} before completing")
                return
            event = parse_event(payload)
            yield event
            if not isinstance(event, ProgressEvent):
                self._process.join(timeout=5)
                return

    def cancel(self) -> None:
        if self._process is not None and self._process.is_alive():
            self._process.terminate()
            self._process.join(timeout=5)

    def __enter__(self) -> BatchAnalysis:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.cancel()


def run_batch(
    request: BatchRequest,
    on_progress: Callable[[ProgressEvent], None] | None = None,
    *,
    start_method: str = "spawn",
) -> BatchResult:
    """Run a batch analysis to completion and return its result.

    ``request.aggressive_prune`` defaults to on, in which case counts and
    scores can be lower than live mode would give for the same history, even
    for records that survive. Turn it off for a result identical to live mode.

    Raises:
        BatchAnalysisError: The worker reported an error or died early.
    """
    with BatchAnalysis(request, start_method=start_method) as batch:
        for event in batch.events():
            if isinstance(event, ProgressEvent):
                if on_progress is not None:
                    on_progress(event)
            elif isinstance(event, CompleteEvent):
                return BatchResult.from_event(event, request)
            else:
                raise BatchAnalysisError(event.message)
    raise BatchAnalysisError("batch worker produced no terminal event")
