"""Unit tests for prompt composition."""

import pytest

from aetherlens.core.catalog import get_style
from aetherlens.core.models import StyleCore
from aetherlens.core.prompt_builder import (
    build_prompt,
    merge_negative_terms,
    split_terms,
    unique_terms,
)
from aetherlens.core.validation import ValidationError


def _style(keywords: str = "photorealistic, 8K", negative: str = "") -> StyleCore:
    return StyleCore(
        id="test",
        name="Test",
        description="Test style",
        keywords=keywords,
        negative_keywords=negative,
    )


class TestSplitTerms:
    """Tests for comma splitting."""

    def test_trims_and_drops_blanks(self):
        assert split_terms(" a, b ,, c ,") == ["a", "b", "c"]

    def test_empty_and_none(self):
        assert split_terms("") == []
        assert split_terms(None) == []


class TestUniqueTerms:
    def test_keeps_first_occurrence_order(self):
        assert unique_terms(["a", "b"], ["b", "c", "a"]) == ["a", "b", "c"]

    def test_case_sensitive(self):
        assert unique_terms(["Blur"], ["blur"]) == ["Blur", "blur"]


class TestBuildPrompt:
    """Tests for build_prompt."""

    @pytest.mark.parametrize(
        "prompt",
        ["a fox in snow", "A lighthouse at dusk, oil painting", "x"],
    )
    def test_plain_prompt_unchanged(self, prompt):
        """No style and no negatives leaves the prompt untouched."""
        assert build_prompt(prompt) == prompt

    def test_style_prefix(self):
        """Style keywords are prefixed with a comma separator."""
        result = build_prompt("a fox in snow", style=_style("photorealistic, 8K"))
        assert result == "photorealistic, 8K, a fox in snow"

    @pytest.mark.parametrize("prompt", ["  a fox in snow\n", "a fox in snow  ", "\ta cat"])
    def test_surrounding_whitespace_kept(self, prompt):
        """Whitespace only matters for the emptiness check."""
        assert build_prompt(prompt) == prompt

    def test_user_negative_prompt(self):
        result = build_prompt("a cat", negative_prompt="text, watermark")
        assert result == "a cat. Avoid the following: text, watermark."

    def test_style_and_user_negatives_deduplicated(self):
        """Style negatives 'a, b' and user negatives 'b, c' give 'a, b, c'."""
        result = build_prompt(
            "a cat",
            style=_style("", negative="a, b"),
            negative_prompt="b, c",
        )
        assert result.endswith(". Avoid the following: a, b, c.")
        assert result.count("b") == 1

    def test_style_with_keywords_and_negatives(self):
        result = build_prompt(
            "a knight",
            style=_style("epic, cinematic", negative="blurry"),
            negative_prompt="text",
        )
        assert result == "epic, cinematic, a knight. Avoid the following: blurry, text."

    def test_blank_negative_prompt_adds_no_clause(self):
        assert build_prompt("a cat", negative_prompt=" , ,") == "a cat"

    def test_catalog_style(self):
        style = get_style("hyperrealism")
        result = build_prompt("a fox", style=style)
        assert result.startswith(style.keywords + ", a fox")
        assert "Avoid the following: painting, cartoon" in result

    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    def test_empty_prompt_raises(self, prompt):
        with pytest.raises(ValidationError, match="Please enter a prompt to generate images."):
            build_prompt(prompt, style=_style(), negative_prompt="text")


class TestMergeNegativeTerms:
    """Tests for the '+ Avoid <preset>' behaviour."""

    def test_empty_existing_returns_addition(self):
        assert merge_negative_terms("", "text, watermark") == "text, watermark"

    def test_appends_new_terms_only(self):
        assert merge_negative_terms("blurry, text", "text, watermark") == "blurry, text, watermark"

    def test_applying_twice_is_stable(self):
        once = merge_negative_terms("blurry", "text, watermark")
        assert merge_negative_terms(once, "text, watermark") == once
