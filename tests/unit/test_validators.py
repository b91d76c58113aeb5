"""
Unit tests for keyword validation.
"""
import pytest

from storefinder.exceptions import ValidationError
from storefinder.utils.validators import (
    MAX_KEYWORD_LENGTH,
    validate_keywords,
    validate_single_keyword,
)


class TestValidateKeywords:
    """Tests for validate_keywords."""

    def test_accepts_valid_keywords(self):
        assert validate_keywords(["단백질 바", "vegan-snack"]) == ["단백질 바", "vegan-snack"]

    def test_collapses_whitespace(self):
        assert validate_keywords(["  protein   bar ", "vegan"]) == ["protein bar", "vegan"]

    def test_drops_empty_entries(self):
        assert validate_keywords(["protein", "   ", "", "vegan"]) == ["protein", "vegan"]

    def test_rejects_non_list(self):
        with pytest.raises(ValidationError, match="must be a list"):
            validate_keywords("protein, vegan")

    def test_rejects_single_keyword(self):
        with pytest.raises(ValidationError, match="At least 2"):
            validate_keywords(["protein"])

    def test_rejects_more_than_five(self):
        with pytest.raises(ValidationError, match="At most 5"):
            validate_keywords(["a", "b", "c", "d", "e", "f"])

    def test_accepts_five(self):
        assert len(validate_keywords(["a", "b", "c", "d", "e"])) == 5

    def test_rejects_long_keyword(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_keywords(["a" * (MAX_KEYWORD_LENGTH + 1), "vegan"])

        assert exc_info.value.status_code == 400

    def test_accepts_keyword_at_length_limit(self):
        assert validate_keywords(["a" * MAX_KEYWORD_LENGTH, "vegan"])[0] == "a" * MAX_KEYWORD_LENGTH

    @pytest.mark.parametrize("keyword", ["protein!", "bar<script>", "vegan@snack", "50%"])
    def test_rejects_special_characters(self, keyword):
        with pytest.raises(ValidationError, match="special characters"):
            validate_keywords([keyword, "vegan"])

    def test_case_insensitive_duplicates_are_removed(self):
        assert validate_keywords(["Protein", "vegan", "protein"]) == ["protein", "vegan"]

    def test_rejects_when_duplicates_leave_one_keyword(self):
        with pytest.raises(ValidationError, match="distinct"):
            validate_keywords(["Protein", "PROTEIN"])


class TestValidateSingleKeyword:

    def test_valid(self):
        assert validate_single_keyword("단백질 바") is None

    def test_empty_is_acceptable(self):
        assert validate_single_keyword("   ") is None

    def test_special_characters(self):
        assert validate_single_keyword("bar!") is not None

    def test_too_long(self):
        assert validate_single_keyword("a" * (MAX_KEYWORD_LENGTH + 1)) is not None
