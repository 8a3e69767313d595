"""Message shapes exchanged with the batch analysis worker.

The host sends one :class:`BatchRequest`. The worker answers with zero or more
:class:`ProgressEvent` and then exactly one :class:`CompleteEvent` or
:class:`ErrorEvent`. Everything crosses the process boundary as plain dicts
dumped with camelCase aliases.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from data_designer_slop_miner.settings import AnalyzerSettings


class _Message(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ChatMessage(_Message):
    """One chat turn. Only assistant-authored text is analyzed."""

    text: str | None = Field(default=None, alias="mes")
    is_user: bool = False

    @field_validator("text", mode="before")
    @classmethod
    def _text_only(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @property
    def is_analyzable(self) -> bool:
        return not self.is_user and bool(self.text)

    @classmethod
    def coerce(cls, message: ChatMessage | dict | str) -> ChatMessage:
        if isinstance(message, ChatMessage):
            return message
        if isinstance(message, str):
            return cls(text=message)
        return cls.model_validate(message)


class BatchRequest(_Message):
    command: Literal["start"] = "start"
    messages: list[ChatMessage] = Field(default_factory=list)
    config: AnalyzerSettings = Field(default_factory=AnalyzerSettings)
    covered_patterns: list[str] = Field(default_factory=list, alias="coveredPatterns")
    aggressive_prune: bool = Field(default=True, alias="aggressivePrune")
    progress_every: int = Field(default=5, ge=1, alias="progressEvery")

    @field_validator("messages", mode="before")
    @classmethod
    def _coerce_messages(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [{"mes": m} if isinstance(m, str) else m for m in value]
        return value


class ProgressEvent(_Message):
    type: Literal["progress"] = "progress"
    processed: int
    total: int
    ai_analyzed: int = Field(default=0, alias="aiAnalyzed")


class CompleteEvent(_Message):
    type: Literal["complete"] = "complete"
    final_index: dict[str, Any] = Field(alias="finalIndex")
    leaderboard: dict[str, dict[str, float]]
    slop_candidates: list[str] = Field(default_factory=list, alias="slopCandidates")
    messages_analyzed: int = Field(alias="messagesAnalyzed")


class ErrorEvent(_Message):
    type: Literal["error"] = "error"
    message: str


BatchEvent = Annotated[Union[ProgressEvent, CompleteEvent, ErrorEvent], Field(discriminator="type")]

_EVENT_ADAPTER: TypeAdapter[BatchEvent] = TypeAdapter(BatchEvent)


def parse_event(payload: dict[str, Any]) -> ProgressEvent | CompleteEvent | ErrorEvent:
    return _EVENT_ADAPTER.validate_python(payload)
