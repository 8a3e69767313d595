# SPDX-License-Identifier: Apache-2.0
"""Slop Miner: online detection of over-used phrasing in AI-generated prose.

Tracks lemmatized n-grams across a conversation, promotes the ones that keep
coming back, and generalizes them into ``prefix alt1/alt2`` patterns for later
rewriting. Also ships a ``slop-miner`` column type for NeMo Data Designer.

Usage::

    from data_designer_slop_miner import SlopSession

    session = SlopSession.from_settings({"slopThreshold": 3.0})
    for message in chat:
        session.observe(message)
    leaderboard = session.refresh_leaderboard()
"""

from data_designer_slop_miner.index import NgramIndex, NgramRecord, SlopCandidateSet
from data_designer_slop_miner.leaderboard import RuleCandidate, build_leaderboard
from data_designer_slop_miner.merge import AnalysisSnapshot, MergedPattern, merge_patterns
from data_designer_slop_miner.protocol import BatchRequest, ChatMessage
from data_designer_slop_miner.quality import QualityFilter, QualityPolicy
from data_designer_slop_miner.runner import BatchAnalysis, BatchAnalysisError, BatchResult, SlopSession, replay, run_batch
from data_designer_slop_miner.settings import AnalyzerSettings

__all__ = [
    "AnalysisSnapshot",
    "AnalyzerSettings",
    "BatchAnalysis",
    "BatchAnalysisError",
    "BatchRequest",
    "BatchResult",
    "ChatMessage",
    "MergedPattern",
    "NgramIndex",
    "NgramRecord",
    "QualityFilter",
    "QualityPolicy",
    "RuleCandidate",
    "SlopCandidateSet",
    "SlopSession",
    "build_leaderboard",
    "merge_patterns",
    "replay",
    "run_batch",
]
