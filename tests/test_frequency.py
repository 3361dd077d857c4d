"""Tests for frequency and conditional tables."""

from grid_scout.services.frequency import (
    Availability,
    availability_rows,
    average,
    conditional_table,
    frequency_table,
    percentage,
)


class TestPercentage:
    def test_zero_denominator(self):
        """An empty denominator gives 0 instead of dividing by zero."""
        assert percentage(3, 0) == 0.0
        assert percentage(1, 4) == 25.0

    def test_average_of_nothing(self):
        assert average([]) == 0.0
        assert average([100, 300]) == 200


class TestFrequencyTable:
    def test_counts_and_percentages(self):
        """Percentages use the stated denominator, not the value count."""
        rows = frequency_table(["Azir", "Rell", "Azir"], 4)
        assert [(r.champion, r.count, r.percentage) for r in rows] == [
            ("Azir", 2, 50.0),
            ("Rell", 1, 25.0),
        ]

    def test_ties_keep_first_seen_order(self):
        """Equal counts keep the order values were first seen."""
        rows = frequency_table(["Vi", "Ahri", "Ahri", "Vi", "Gnar"], 5)
        assert [r.champion for r in rows] == ["Vi", "Ahri", "Gnar"]

    def test_limit(self):
        """Only the top N rows are kept."""
        values = [f"champ{i}" for i in range(15)]
        assert len(frequency_table(values, 15)) == 10
        assert len(frequency_table(values, 15, limit=None)) == 15


class TestConditionalTable:
    def test_drops_triggers_below_min_samples(self):
        """A trigger seen once produces no row."""
        rows = conditional_table({"Azir": ["Rell"], "Orianna": ["Vi", "Vi", "Sejuani"]})
        assert [row.trigger for row in rows] == ["Orianna"]

    def test_response_percentages_over_sample_size(self):
        """Responses are a percentage of the trigger's sample size."""
        row = conditional_table({"Orianna": ["Vi", "Vi", "Sejuani", "Vi"]})[0]
        assert row.sample_size == 4
        assert [(r.champion, r.percentage) for r in row.responses] == [("Vi", 75.0), ("Sejuani", 25.0)]

    def test_sorted_by_sample_size(self):
        """Triggers with more samples come first."""
        rows = conditional_table({"A": ["x", "y"], "B": ["x", "y", "z"]})
        assert [row.trigger for row in rows] == ["B", "A"]


class TestAvailability:
    def test_unavailable_games_are_not_counted(self):
        """Games where the value could not be chosen leave both counts alone."""
        stats = Availability()
        stats.observe(True, True)
        stats.observe(False, True)
        stats.observe(True, False)
        assert (stats.available, stats.chosen, stats.rate) == (2, 1, 50.0)

    def test_rows_skip_never_available(self):
        """Values never available are dropped; the rest sort by rate."""
        rows = availability_rows(
            {"Azir": Availability(4, 1), "Rell": Availability(0, 0), "Vi": Availability(2, 2)}
        )
        assert [value for value, _ in rows] == ["Vi", "Azir"]
