import pytest

from forecast_client.evaluation import bin_values, clamp_bins, error_values, sturges
from forecast_client.schemas import MetricsByPeriodRow


def test_residual_bins_are_symmetric_around_zero():
    hist = bin_values([-5, -1, 0, 1, 5], 2, "residual", min_bins=1)
    assert [b.count for b in hist] == [2, 3]
    assert (hist[0].x0, hist[0].x1, hist[1].x1) == (-5.0, 0.0, 5.0)
    assert hist[0].center == -2.5


def test_residual_domain_uses_largest_magnitude():
    hist = bin_values([-1, 4], 8, "residual")
    assert hist[0].x0 == -4.0
    assert hist[-1].x1 == 4.0


def test_bin_count_is_clamped():
    assert len(bin_values([1, 2, 3], 2)) == 5
    assert len(bin_values([1, 2, 3], 500)) == 60
    assert len(bin_values([1, 2, 3], 7.5)) == 8


def test_absolute_domain_is_non_negative():
    hist = bin_values([2, 4, 12], 5, "absolute")
    assert hist[0].x0 == 2.0
    assert hist[-1].x1 == 12.0
    assert [b.count for b in hist] == [1, 1, 0, 0, 1]

    hist = bin_values([-3, 10], 5, "absolute")
    assert hist[0].x0 == 0.0
    assert sum(b.count for b in hist) == 1  # -3 lies outside the domain


def test_maximum_goes_to_last_bin():
    hist = bin_values([0, 10], 5, "absolute")
    assert hist[-1].count == 1
    assert hist[0].count == 1


def test_zero_span_falls_back_to_unit_width():
    hist = bin_values([3, 3, 3], 5, "absolute")
    assert hist[0].x0 == 3.0
    assert hist[0].x1 == 4.0
    assert hist[0].count == 3


def test_all_zero_residuals():
    hist = bin_values([0, 0], 5, "residual")
    assert sum(b.count for b in hist) == 2


def test_non_finite_values_are_ignored():
    hist = bin_values([1, float("nan"), None, float("inf"), -1], 5)
    assert sum(b.count for b in hist) == 2
    assert bin_values([float("nan")], 5) == []
    assert bin_values([], 5) == []


def test_bins_are_contiguous_and_count_bounded():
    values = [-7.5, -3.2, -0.1, 0.0, 0.4, 2.2, 6.9, 7.1]
    hist = bin_values(values, 6)
    for left, right in zip(hist, hist[1:]):
        assert left.x1 == pytest.approx(right.x0)
    assert sum(b.count for b in hist) <= len(values)


def test_unknown_mode_raises():
    with pytest.raises(ValueError, match="Unknown histogram mode"):
        bin_values([1], 5, "relative")


@pytest.mark.parametrize("n, expected", [(0, 20), (-1, 20), (1, 5), (16, 5), (100, 8), (10**15, 40)])
def test_sturges(n, expected):
    assert sturges(n) == expected


def test_clamp_bins_rounds_half_up():
    assert clamp_bins(10.5) == 11
    assert clamp_bins(10.49) == 10
    assert clamp_bins(1, lo=1) == 1


def test_error_values_from_rows():
    rows = [
        MetricsByPeriodRow(ds="2025-01-01", y=10, yhat=8),
        MetricsByPeriodRow(ds="2025-01-02", y=5, yhat=7, abs_err=2.5),
        {"ds": "2025-01-03", "y": None, "yhat": 3},
        {"ds": "2025-01-04", "y": 4, "yhat": 1, "abs_err": -1},
    ]
    assert error_values(rows, "residual") == [2.0, -2.0, -3.0, 3.0]
    assert error_values(rows, "absolute") == [2.0, 2.5, 3.0, 0.0]


@pytest.mark.parametrize("bins, expected", [(float("inf"), 60), (float("-inf"), 5), (float("nan"), 5), (10**400, 60)])
def test_non_finite_bin_counts_are_clamped(bins, expected):
    assert clamp_bins(bins) == expected
    hist = bin_values([1.0, 2.0], bins)
    assert len(hist) == expected
    assert sum(b.count for b in hist) == 2


def test_out_of_range_integers_are_ignored():
    hist = bin_values([1.0, 10**400, 2.0], 5, "absolute")
    assert sum(b.count for b in hist) == 2
