from __future__ import annotations

from typing import Literal

from pydantic import Field

from data_designer.config.column_configs import SingleColumnConfig

from data_designer_slop_miner.settings import AnalyzerSettings


class SlopMinerColumnConfig(SingleColumnConfig):
    """Track over-used phrasing across the rows of a text column.

    Rows are fed in order through one slop index, as if each row were the next
    AI message of a conversation. Each output cell lists the phrases that
    crossed the slop threshold on that row.

    Attributes:
        target_column: Column holding the generated text.
        role_column: Optional column marking user-authored rows, which are skipped.
            A row is user-authored when its value is ``"user"`` or ``True``.
        ngram_max: Longest n-gram tracked.
        slop_threshold: Score at which a phrase is promoted.
        pruning_cycle: Rows between decay sweeps.
        pattern_min_common: Shared leading words required to merge phrases.
        whitelist: Extra words that carry no stylistic signal.
        blacklist: Terms that boost the score of phrases containing them (weights 1-10).
        covered_patterns: Regex sources of fix rules already in place; matching phrases are ignored.
    """

    target_column: str
    role_column: str | None = None
    ngram_max: int = Field(default=10, ge=3, description="Longest n-gram tracked")
    slop_threshold: float = Field(default=3.0, gt=0, description="Score at which a phrase is promoted")
    pruning_cycle: int = Field(default=20, ge=1, description="Rows between decay sweeps")
    pattern_min_common: int = Field(default=3, ge=1, description="Shared leading words required to merge phrases")
    whitelist: list[str] = Field(default_factory=list)
    blacklist: dict[str, int] = Field(default_factory=dict)
    covered_patterns: list[str] = Field(default_factory=list)
    column_type: Literal["slop-miner"] = "slop-miner"

    @staticmethod
    def get_column_emoji() -> str:
        return "⛏️"

    @property
    def required_columns(self) -> list[str]:
        if self.role_column:
            return [self.target_column, self.role_column]
        return [self.target_column]

    @property
    def side_effect_columns(self) -> list[str]:
        return []

    def analyzer_settings(self) -> AnalyzerSettings:
        return AnalyzerSettings(
            ngram_max=self.ngram_max,
            slop_threshold=self.slop_threshold,
            pruning_cycle=self.pruning_cycle,
            pattern_min_common=self.pattern_min_common,
            whitelist=self.whitelist,
            blacklist=self.blacklist,
        )
