from data_designer_slop_miner.merge import AnalysisSnapshot, MergedPattern, cluster_by_prefix, cull_substrings, merge_patterns


class TestCullSubstrings:
    def test_shorter_substring_is_dropped(self):
        assert cull_substrings({"the quick fox": 5, "quick fox": 3}) == {"the quick fox": 5}

    def test_score_is_not_folded_in(self):
        result = cull_substrings({"quick fox": 30, "the quick fox": 1})
        assert result == {"the quick fox": 1}

    def test_unrelated_phrases_survive(self):
        scores = {"the quick fox": 5, "a lazy dog": 2}
        assert cull_substrings(scores) == scores


class TestMergePatterns:
    def test_shared_prefix_becomes_pattern(self):
        snapshot = merge_patterns(
            {"she walked into the room": 2, "she walked into the kitchen": 2, "she walked into the garden": 2},
            min_common_words=3,
        )
        assert snapshot.merged == {"she walked into the room/kitchen/garden": 6}
        assert snapshot.remaining == {}

    def test_alternatives_follow_input_order(self):
        snapshot = merge_patterns({"he said with a grin": 5, "he said with a smirk": 3}, min_common_words=3)
        assert snapshot.merged == {"he said with a grin/smirk": 8}

    def test_short_prefix_stays_remaining(self):
        snapshot = merge_patterns({"he said with a grin": 5, "he smiled with a grin": 3}, min_common_words=3)
        assert snapshot.merged == {}
        assert snapshot.remaining == {"he said with a grin": 5, "he smiled with a grin": 3}

    def test_prefix_is_refined_to_all_members(self):
        snapshot = merge_patterns(
            {"a shiver ran down her spine": 2, "a shiver ran down his back": 3, "a shiver ran through her": 4},
            min_common_words=3,
        )
        assert snapshot.merged == {"a shiver ran down her spine/down his back/through her": 9}

    def test_mixed_merged_and_remaining(self):
        snapshot = merge_patterns(
            {
                "she walked into the room": 2,
                "she walked into the kitchen": 3,
                "the obsidian tower loomed": 4,
                "walked into the room": 1,
            },
            min_common_words=3,
        )
        assert snapshot.merged == {"she walked into the room/kitchen": 5}
        assert snapshot.remaining == {"the obsidian tower loomed": 4}

    def test_min_common_words_is_respected(self):
        phrases = {"she walked into the room": 2, "she walked into the kitchen": 2}
        assert merge_patterns(phrases, min_common_words=5).merged == {}
        assert merge_patterns(phrases, min_common_words=4).merged == {"she walked into the room/kitchen": 4}

    def test_empty(self):
        assert merge_patterns({}) == AnalysisSnapshot.empty()


class TestClusterByPrefix:
    def test_reports_absorbed_phrases(self):
        patterns, absorbed = cluster_by_prefix({"x y z a": 1, "x y z b": 2, "p q r": 3}, 3)
        assert absorbed == {"x y z a", "x y z b"}
        assert patterns == [MergedPattern(prefix_tokens=("x", "y", "z"), alternatives=("a", "b"), score=3)]


class TestMergedPattern:
    def test_text_with_alternatives(self):
        assert MergedPattern(("a", "b", "c"), ("d", "e"), 2).text == "a b c d/e"

    def test_degenerates_to_prefix(self):
        assert MergedPattern(("a", "b", "c"), (), 4).text == "a b c"
