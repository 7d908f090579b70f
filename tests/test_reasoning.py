"""
Tests for match explanations.
"""
from scentmatch.config import REASONING_FALLBACK
from scentmatch.mapping import to_match_score
from scentmatch.reasoning import build_reasoning, matched_terms


class TestReasoning:

    def test_single_shared_term(self, item_factory):
        item = item_factory("s", family="Woody", top=("Cedar",), middle=("Leather",), base=("Violet",))
        assert build_reasoning(item, ["dark incense leather tobacco smoky"]) == "Matches your love for leather"

    def test_capped_at_three_in_keyword_order(self, item_factory):
        item = item_factory(
            "d",
            family="Leather",
            top=("Smoky Incense",),
            base=("Tobacco",),
            tags=("dark",),
        )
        reasoning = build_reasoning(item, ["dark incense leather tobacco smoky"])
        assert reasoning == "Matches your love for dark, incense, leather"

    def test_duplicates_collapsed(self, item_factory):
        item = item_factory("v", family="Gourmand", top=("Vanilla",))
        keywords = ["warm amber vanilla spicy cozy", "vanilla sugar chocolate sweet gourmand"]
        assert matched_terms(item, keywords) == ["vanilla", "gourmand"]

    def test_stopwords_and_short_tokens_dropped(self, item_factory):
        item = item_factory("n", family="Amber Accord", top=("Woody Notes",), tags=("oz",))
        assert matched_terms(item, ["notes accord amber oz"]) == ["amber"]

    def test_comma_separated_tags_split(self, item_factory):
        item = item_factory("c", family="Floral", tags=("rose,jasmine",))
        assert matched_terms(item, ["rose jasmine floral bouquet romantic"]) == ["rose", "jasmine", "floral"]

    def test_description_is_not_used(self, item_factory):
        item = item_factory("x", family="Citrus", description="leather and smoke")
        assert build_reasoning(item, ["dark incense leather tobacco smoky"]) == REASONING_FALLBACK

    def test_fallback_without_keywords(self, item_factory):
        assert build_reasoning(item_factory("e"), []) == "Matches your overall vibe"


class TestMatchScore:

    def test_rounding(self):
        assert to_match_score(0.5) == 50
        assert to_match_score(0.125) == 13
        assert to_match_score(0.994) == 99
        assert to_match_score(1.0) == 100
        assert to_match_score(0.0) == 0
