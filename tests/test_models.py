"""Tests for domain values."""

import pytest

from watchcompass.models.movie import InvalidTimeBudgetError, Mood, MovieDetails, TimeBudget


class TestTimeBudget:
    """Tests for TimeBudget validation."""

    @pytest.mark.parametrize("minutes", [1, 90, 600])
    def test_valid_budgets(self, minutes):
        assert TimeBudget(minutes).minutes == minutes

    @pytest.mark.parametrize("minutes", [0, -10, 601])
    def test_out_of_range_rejected(self, minutes):
        """Test invalid budgets fail instead of clamping."""
        with pytest.raises(InvalidTimeBudgetError):
            TimeBudget(minutes)

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidTimeBudgetError):
            TimeBudget(True)


class TestMood:
    """Tests for Mood parsing and default queries."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("chill", Mood.CHILL),
            ("FeelGood", Mood.FEEL_GOOD),
            ("feelgood", Mood.FEEL_GOOD),
            ("feel_good", Mood.FEEL_GOOD),
            (" INTENSE ", Mood.INTENSE),
            ("Scary", Mood.SCARY),
        ],
    )
    def test_parse_is_case_insensitive(self, text, expected):
        assert Mood.parse(text) is expected

    def test_unknown_mood_rejected(self):
        with pytest.raises(ValueError):
            Mood.parse("Sleepy")

    def test_default_queries(self):
        assert Mood.CHILL.default_query == "drama"
        assert Mood.FEEL_GOOD.default_query == "comedy"
        assert Mood.INTENSE.default_query == "thriller"
        assert Mood.SCARY.default_query == "horror"


class TestMovieDetails:
    def test_zero_runtime_is_unknown(self):
        assert not MovieDetails(1, "Short").has_runtime
        assert MovieDetails(1, "Long", 150).has_runtime
