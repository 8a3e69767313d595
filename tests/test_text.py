from data_designer_slop_miner.text import (
    DIALOGUE,
    NARRATION,
    classify_sentence,
    lemmatize,
    lemmatize_tokens,
    segment_sentences,
    sliding_ngrams,
    strip_markup,
    tokenize,
)

MARKUP_SAMPLES = [
    "Plain prose with nothing special.",
    "Before ```python\nx = 1\n``` after",
    "<memo>hidden notes</memo>Hello <b>world</b>",
    "She *really* smiled and __meant__ it.",
    'He said "stop now" loudly (very loudly).',
    "*a\n*b",
    '"unbalanced quote and (paren',
    "_one_two_three_",
    "<info_panel>\nHP: 10\n</info_panel>  The   end.",
    "~~~\ncode\n~~~ *`mixed`* markers_",
    "",
]


class TestStripMarkup:
    def test_removes_fenced_code(self):
        assert strip_markup("Before ```python\nx = 1\n``` after") == "Before after"

    def test_removes_block_tags_with_content(self):
        assert strip_markup("<memo>hidden notes</memo>Hello <b>world</b>") == "Hello world"

    def test_keeps_emphasized_text(self):
        assert strip_markup("She *really* smiled.") == "She really smiled."

    def test_flattens_quotes_and_parentheses(self):
        assert strip_markup('He said "stop now" loudly (very loudly).') == "He said stop now loudly very loudly ."

    def test_collapses_whitespace(self):
        assert strip_markup("  a \n\n b\t c  ") == "a b c"

    def test_is_idempotent(self):
        for sample in MARKUP_SAMPLES:
            once = strip_markup(sample)
            assert strip_markup(once) == once

    def test_total_on_bad_input(self):
        assert strip_markup("") == ""
        assert strip_markup(None) == ""
        assert strip_markup(42) == ""


class TestSegmentSentences:
    def test_splits_on_terminal_punctuation(self):
        assert segment_sentences("It was late. She left! Did he?") == ["It was late.", "She left!", "Did he?"]

    def test_no_terminal_punctuation_is_one_sentence(self):
        assert segment_sentences("no punctuation here") == ["no punctuation here"]

    def test_drops_trailing_fragment(self):
        assert segment_sentences("Hello. World") == ["Hello."]
        assert segment_sentences("The tower loomed. Obsidian spires pierce clouds") == ["The tower loomed."]

    def test_keeps_closing_quote(self):
        assert segment_sentences('He left." Then silence.') == ['He left."', "Then silence."]

    def test_empty(self):
        assert segment_sentences("") == []
        assert segment_sentences("   ") == []
        assert segment_sentences(None) == []


class TestClassifySentence:
    def test_dialogue_when_quote_opens_sentence(self):
        assert classify_sentence("'Come here,' she said.") == DIALOGUE

    def test_narration_otherwise(self):
        assert classify_sentence("The wind howled through the broken shutters.") == NARRATION

    def test_quote_late_in_sentence_is_narration(self):
        assert classify_sentence("The old keeper muttered something like 'go'.") == NARRATION


class TestTokenize:
    def test_lowercases_and_strips_punctuation(self):
        assert tokenize("Hello, World! It's fine.") == ["hello", "world", "it's", "fine"]

    def test_drops_empty_tokens(self):
        assert tokenize("-- ... wait !") == ["wait"]

    def test_total_on_bad_input(self):
        assert tokenize("") == []
        assert tokenize(None) == []


class TestLemmatize:
    def test_dictionary_lookup(self):
        assert lemmatize("walked") == "walk"
        assert lemmatize("eyes") == "eye"

    def test_identity_fallback(self):
        assert lemmatize("obsidian") == "obsidian"

    def test_custom_table(self):
        assert lemmatize("glowered", {"glowered": "glower"}) == "glower"

    def test_tokens_stay_position_aligned(self):
        tokens = ["she", "walked", "into", "the", "rooms"]
        lemmas = lemmatize_tokens(tokens)
        assert len(lemmas) == len(tokens)
        assert lemmas == ["she", "walk", "into", "the", "room"]


class TestSlidingNgrams:
    def test_windows(self):
        assert sliding_ngrams(["a", "b", "c", "d"], 3) == ["a b c", "b c d"]

    def test_too_short(self):
        assert sliding_ngrams(["a", "b"], 3) == []
        assert sliding_ngrams(["a", "b"], 0) == []
