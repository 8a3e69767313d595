from unittest.mock import Mock

import pytest

pytest.importorskip("data_designer")

import pandas as pd  # noqa: E402

from data_designer_slop_miner.config import SlopMinerColumnConfig  # noqa: E402
from data_designer_slop_miner.generator import SlopMinerColumnGenerator, _is_user_row  # noqa: E402

SKIES = "Crimson skies bleed."


class TestSlopMinerColumnConfig:
    def test_defaults(self):
        config = SlopMinerColumnConfig(name="slop_phrases", target_column="reply")
        assert config.column_type == "slop-miner"
        assert config.required_columns == ["reply"]
        assert config.side_effect_columns == []

    def test_role_column_is_required_when_set(self):
        config = SlopMinerColumnConfig(name="slop_phrases", target_column="reply", role_column="role")
        assert config.required_columns == ["reply", "role"]

    def test_analyzer_settings(self):
        config = SlopMinerColumnConfig(
            name="slop_phrases",
            target_column="reply",
            slop_threshold=5.0,
            whitelist=["Elara"],
            blacklist={"spine": 3},
        )
        policy = config.analyzer_settings().to_policy()
        assert policy.score_threshold == 5.0
        assert policy.whitelist == frozenset({"elara"})
        assert policy.blacklist == {"spine": 3}


class TestUserRows:
    def test_role_values(self):
        assert _is_user_row("user")
        assert _is_user_row(" User ")
        assert _is_user_row(True)
        assert not _is_user_row("assistant")
        assert not _is_user_row(False)
        assert not _is_user_row(None)


class TestSlopMinerColumnGenerator:
    def _generate(self, data: pd.DataFrame, **overrides) -> pd.DataFrame:
        config = SlopMinerColumnConfig(
            name="slop_phrases",
            target_column="reply",
            role_column="role",
            ngram_max=3,
            slop_threshold=10.0,
            **overrides,
        )
        generator = SlopMinerColumnGenerator(config=config, resource_provider=Mock())
        return generator.generate(data)

    def test_rows_replay_in_order_and_skip_user_rows(self):
        # each assistant row adds 3.125, so the fourth one crosses 10.0
        roles = ["assistant", "user", "assistant", "assistant", "user", "assistant", "assistant"]
        data = pd.DataFrame({"reply": [SKIES] * len(roles), "role": roles})

        result = self._generate(data)
        cells = result["slop_phrases"].tolist()

        assert [cell["promoted_phrases"] for cell in cells] == [[], [], [], [], [], ["crimson skies bleed"], []]
        assert [cell["is_valid"] for cell in cells] == [True, True, True, True, True, False, True]
        assert [cell["candidate_count"] for cell in cells] == [0, 0, 0, 0, 0, 1, 1]
        assert list(result["reply"]) == list(data["reply"])
        assert "slop_phrases" not in data.columns

    def test_covered_patterns_are_never_promoted(self):
        data = pd.DataFrame({"reply": [SKIES] * 6, "role": ["assistant"] * 6})
        result = self._generate(data, covered_patterns=["skies bleed"])
        assert all(cell["promoted_phrases"] == [] for cell in result["slop_phrases"])
        assert all(cell["candidate_count"] == 0 for cell in result["slop_phrases"])
