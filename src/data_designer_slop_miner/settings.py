from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from data_designer_slop_miner.quality import MIN_NGRAM_LENGTH, QualityPolicy


class AnalyzerSettings(BaseModel):
    """Host-facing analyzer options.

    Accepts the host's camelCase option names as well as snake_case field
    names. Missing or ``null`` values fall back to the defaults.

    Attributes:
        ngram_max: Longest n-gram tracked. The shortest is fixed at 3.
        slop_threshold: Score at which an n-gram becomes a slop candidate.
        pruning_cycle: Messages between decay sweeps, and the staleness horizon.
        pattern_min_common: Shared leading words required to merge phrases.
        whitelist: Extra words that carry no stylistic signal.
        blacklist: Terms boosting the score of any n-gram containing them.
        skip_triage_check: Send candidates to rule generation without triage.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ngram_max: int = Field(default=10, ge=MIN_NGRAM_LENGTH, alias="ngramMax")
    slop_threshold: float = Field(default=3.0, gt=0, alias="slopThreshold")
    pruning_cycle: int = Field(default=20, ge=1, alias="pruningCycle")
    pattern_min_common: int = Field(default=3, ge=1, alias="patternMinCommon")
    whitelist: list[str] = Field(default_factory=list)
    blacklist: dict[str, int] = Field(default_factory=dict)
    skip_triage_check: bool = Field(default=False, alias="skipTriageCheck")

    @field_validator("*", mode="before")
    @classmethod
    def _none_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            field = cls.model_fields[info.field_name]
            return field.get_default(call_default_factory=True)
        return value

    @field_validator("whitelist")
    @classmethod
    def _lower_whitelist(cls, value: list[str]) -> list[str]:
        return [w.strip().lower() for w in value if w and w.strip()]

    @field_validator("blacklist")
    @classmethod
    def _check_blacklist(cls, value: dict[str, int]) -> dict[str, int]:
        cleaned: dict[str, int] = {}
        for term, weight in value.items():
            if not 1 <= weight <= 10:
                raise ValueError(f"blacklist weight for {term!r} must be between 1 and 10, got {weight}")
            if term.strip():
                cleaned[term.strip().lower()] = weight
        return cleaned

    def to_policy(self) -> QualityPolicy:
        return QualityPolicy(
            max_ngram_length=self.ngram_max,
            score_threshold=self.slop_threshold,
            prune_after_messages=self.pruning_cycle,
            pattern_min_common_words=self.pattern_min_common,
            whitelist=frozenset(self.whitelist),
            blacklist=dict(self.blacklist),
            skip_triage=self.skip_triage_check,
        )

    @classmethod
    def from_policy(cls, policy: QualityPolicy) -> AnalyzerSettings:
        return cls(
            ngram_max=policy.max_ngram_length,
            slop_threshold=policy.score_threshold,
            pruning_cycle=policy.prune_after_messages,
            pattern_min_common=policy.pattern_min_common_words,
            whitelist=sorted(policy.whitelist),
            blacklist=dict(policy.blacklist),
            skip_triage_check=policy.skip_triage,
        )
