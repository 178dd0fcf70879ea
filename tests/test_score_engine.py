from datetime import date
from types import SimpleNamespace

import pytest

from api.dashboard.score_engine import compute_dashboard, eco_score, round_half_up
from config.score_config import ScoreWeights
from utils.errors import InvalidQuantity, ValidationError


def bill(units, month=date(2024, 1, 1)):
    return SimpleNamespace(units=units, billing_month=month)


def bags(plastic=0, paper=0, food=0):
    return SimpleNamespace(plastic_bags=plastic, paper_bags=paper, food_waste_bags=food)


def test_empty_input_scores_full_baseline():
    result = compute_dashboard([], [], [])

    assert result["eco_score"] == 100
    assert [m["value"] for m in result["key_metrics"]] == [0, 0, 0]
    assert result["chart_data"]["labels"] == []
    assert result["chart_data"]["datasets"][0]["data"] == []


def test_worked_example_rounds_to_73():
    result = compute_dashboard([bill(100)], [bill(50)], [bags(2, 1, 3)])

    # 100 - 20 - 5 - 1.8 = 73.2
    assert result["eco_score"] == 73


def test_key_metrics_report_raw_totals_in_fixed_order():
    result = compute_dashboard(
        [bill(40, date(2024, 1, 1)), bill(60, date(2024, 2, 1))],
        [bill(12.5)],
        [bags(1, 1, 1), bags(2, 0, 0)],
    )

    titles = [m["title"] for m in result["key_metrics"]]
    values = [m["value"] for m in result["key_metrics"]]
    icons = [m["icon"] for m in result["key_metrics"]]
    assert titles == ["Total Electricity Usage", "Total Water Usage", "Total Waste Bags"]
    assert values == [100, 12.5, 5]
    assert icons == ["flash-outline", "water-outline", "trash-can-outline"]


def test_score_is_floored_at_zero():
    assert compute_dashboard([bill(10_000)], [], [])["eco_score"] == 0


@pytest.mark.parametrize("e,w,b", [
    (0, 0, 0),
    (10, 20, 3),
    (123.4, 56.7, 8),
    (500, 0, 0),
    (0, 999, 0),
    (0, 0, 1000),
])
def test_score_matches_formula_and_stays_in_range(e, w, b):
    score = eco_score(e, w, b)

    assert score == max(0, round_half_up(100 - 0.2 * e - 0.1 * w - 0.3 * b))
    assert 0 <= score <= 100


def test_score_is_independent_of_record_order():
    records = [bill(10, date(2024, m, 1)) for m in range(1, 8)]

    forward = compute_dashboard(records, [], [])
    backward = compute_dashboard(list(reversed(records)), [], [])

    assert forward == backward


def test_chart_keeps_last_six_months_ascending():
    records = [bill(m * 10, date(2023, m, 1)) for m in (9, 3, 12, 1, 7, 5, 11, 2)]

    chart = compute_dashboard(records, [], [])["chart_data"]

    assert chart["labels"] == ["Mar 23", "May 23", "Jul 23", "Sep 23", "Nov 23", "Dec 23"]
    assert chart["datasets"][0]["data"] == [30, 50, 70, 90, 110, 120]


def test_chart_ignores_water_and_waste():
    chart = compute_dashboard([], [bill(20)], [bags(1)])["chart_data"]

    assert chart["labels"] == []


def test_negative_quantity_is_a_data_integrity_fault():
    with pytest.raises(InvalidQuantity):
        compute_dashboard([bill(-5)], [], [])

    with pytest.raises(ValidationError):
        compute_dashboard([], [], [bags(paper=-1)])


def test_weights_are_injected():
    weights = ScoreWeights(baseline=100, electricity=0.5, water=0, waste=0, chart_months=2)
    records = [bill(10, date(2024, m, 1)) for m in (1, 2, 3)]

    result = compute_dashboard(records, [bill(1000)], [bags(50)], weights)

    assert result["eco_score"] == 85
    assert len(result["chart_data"]["labels"]) == 2


def test_half_points_round_up():
    assert round_half_up(72.5) == 73
    assert round_half_up(72.49) == 72
