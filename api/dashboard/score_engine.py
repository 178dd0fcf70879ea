"""
Eco score computation.

Reduces a user's consumption records to a single 0-100 score plus the
key-metric cards and the electricity chart shown on the dashboard. Works on
any objects exposing the record attributes (ORM rows or plain namespaces),
performs no I/O and does not depend on input order.
"""
import math
from typing import Any, Dict, Iterable, List, Sequence

from config.score_config import ScoreWeights
from utils.errors import InvalidQuantity

DEFAULT_WEIGHTS = ScoreWeights()


def _checked(value, field: str) -> float:
    value = value or 0
    if value < 0:
        raise InvalidQuantity(f"Negative {field} in consumption data: {value}")
    return value


def total_units(records: Iterable[Any]) -> float:
    return sum(_checked(r.units, "units") for r in records)


def total_waste_bags(records: Iterable[Any]) -> int:
    return sum(
        _checked(r.plastic_bags, "plastic_bags")
        + _checked(r.paper_bags, "paper_bags")
        + _checked(r.food_waste_bags, "food_waste_bags")
        for r in records
    )


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def eco_score(
    electricity_units: float,
    water_units: float,
    waste_bags: float,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> int:
    score = (
        weights.baseline
        - electricity_units * weights.electricity
        - water_units * weights.water
        - waste_bags * weights.waste
    )
    return max(0, round_half_up(score))


def key_metrics(electricity_units: float, water_units: float, waste_bags: float) -> List[Dict[str, Any]]:
    return [
        {"title": "Total Electricity Usage", "value": electricity_units, "icon": "flash-outline"},
        {"title": "Total Water Usage",       "value": water_units,       "icon": "water-outline"},
        {"title": "Total Waste Bags",        "value": waste_bags,        "icon": "trash-can-outline"},
    ]


def chart_data(electricity: Sequence[Any], months: int = DEFAULT_WEIGHTS.chart_months) -> Dict[str, Any]:
    recent = sorted(electricity, key=lambda r: r.billing_month)[-months:]
    return {
        "labels": [r.billing_month.strftime("%b %y") for r in recent],
        "datasets": [
            {
                "data": [r.units for r in recent],
                "legend": ["Electricity Usage (Units)"],
            }
        ],
    }


def compute_dashboard(
    electricity: Sequence[Any],
    water: Sequence[Any],
    waste: Sequence[Any],
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> Dict[str, Any]:
    """
    Build ``{eco_score, key_metrics, chart_data}`` from a user's records.

    Score starts at ``weights.baseline`` and loses a weighted share of each
    resource total; the result is rounded half-up and floored at zero.
    Empty input scores the full baseline. Negative quantities raise
    InvalidQuantity instead of inflating the score.
    """
    electricity = list(electricity)
    e = total_units(electricity)
    w = total_units(water)
    b = total_waste_bags(waste)

    return {
        "eco_score": eco_score(e, w, b, weights),
        "key_metrics": key_metrics(e, w, b),
        "chart_data": chart_data(electricity, weights.chart_months),
    }
