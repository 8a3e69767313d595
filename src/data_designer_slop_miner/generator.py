from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from data_designer.engine.column_generators.generators.base import ColumnGeneratorFullColumn

from data_designer_slop_miner.config import SlopMinerColumnConfig
from data_designer_slop_miner.runner import SlopSession

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


def _is_user_row(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "user"
    return bool(value == True)  # noqa: E712


class SlopMinerColumnGenerator(ColumnGeneratorFullColumn[SlopMinerColumnConfig]):
    """Column generator that replays a text column through one slop index."""

    def generate(self, data: pd.DataFrame) -> pd.DataFrame:
        logger.info(f"⛏️ Mining column {self.config.target_column!r} for repeated phrasing")
        logger.info(f"   slop_threshold: {self.config.slop_threshold}")
        logger.info(f"   ngram_max: {self.config.ngram_max}")

        session = SlopSession.from_settings(self.config.analyzer_settings(), self.config.covered_patterns)
        results = []
        for _, row in data.iterrows():
            text = row[self.config.target_column]
            is_user = bool(self.config.role_column) and _is_user_row(row[self.config.role_column])
            crossed = session.observe({"mes": text, "is_user": is_user})
            promoted = [session.index.records[key].original for key in crossed if key in session.index.records]
            results.append({
                "is_valid": not promoted,
                "promoted_phrases": promoted,
                "candidate_count": len(session.index.candidates),
            })

        leaderboard = session.refresh_leaderboard()
        logger.info(f"   leaderboard: {len(leaderboard.merged)} merged patterns, {len(leaderboard.remaining)} phrases")

        data = data.copy()
        data[self.config.name] = results
        return data
