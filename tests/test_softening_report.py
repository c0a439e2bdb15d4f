"""
Tests for LSI status labels, interpretation bands and chart series.
"""

import pytest

from tools.schemas import ChartPoint, RawWaterSample
from tools.softening_calculation import compute
from tools.softening_report import build_chart_series, classify_lsi, interpret_lsi


class TestClassifyLsi:

    @pytest.mark.parametrize("lsi,expected", [
        (1.47, "Scaling"),
        (0.51, "Scaling"),
        (0.5, "Stable"),
        (0.0, "Stable"),
        (-0.5, "Stable"),
        (-0.51, "Corrosive"),
        (-3.0, "Corrosive"),
    ])
    def test_bands(self, lsi, expected):
        assert classify_lsi(lsi) == expected


class TestInterpretLsi:

    @pytest.mark.parametrize("lsi,expected", [
        (2.5, "Severe scaling tendency"),
        (1.0, "Moderate scaling tendency"),
        (0.2, "Mild scaling tendency"),
        (0.0, "Near equilibrium (balanced)"),
        (-1.0, "Corrosive tendency"),
        (-2.5, "Severely corrosive"),
    ])
    def test_interpretation(self, lsi, expected):
        result = interpret_lsi(lsi)
        assert result["interpretation"] == expected
        assert result["action_required"]


class TestChartSeries:

    def test_series_order_and_values(self, reference_sample):
        outcome = compute(reference_sample)
        series = build_chart_series(reference_sample, outcome)

        assert [point.parameter for point in series] == ["Calcium", "Magnesium", "Hardness", "Alkalinity"]
        assert all(isinstance(point, ChartPoint) for point in series)

        calcium, magnesium, hardness, alkalinity = series
        assert calcium.raw == pytest.approx(199.76, abs=0.01)
        assert calcium.softened == 40
        assert magnesium.raw == pytest.approx(102.95, abs=0.01)
        assert magnesium.softened == 10
        assert hardness.raw == pytest.approx(outcome.initial_hardness_mg_l)
        assert hardness.softened == 50
        assert alkalinity.raw == 220
        assert alkalinity.softened == 20

    def test_hardness_bar_is_sum_of_calcium_and_magnesium(self, high_sulfate_water):
        sample = RawWaterSample(**high_sulfate_water)
        series = build_chart_series(sample, compute(sample))
        calcium, magnesium, hardness, _ = series
        assert hardness.raw == pytest.approx(calcium.raw + magnesium.raw)
        assert hardness.softened == pytest.approx(calcium.softened + magnesium.softened)
