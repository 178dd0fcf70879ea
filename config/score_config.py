# config/score_config.py

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config.settings import settings


class ResourceType(str, Enum):
    electricity = "electricity"
    water       = "water"
    waste       = "waste"


# Challenge units are free text; these are the spellings we recognise
UNIT_RESOURCES = {
    "kwh":         ResourceType.electricity,
    "kw":          ResourceType.electricity,
    "unit":        ResourceType.electricity,
    "units":       ResourceType.electricity,
    "electricity": ResourceType.electricity,
    "m3":          ResourceType.water,
    "m³":          ResourceType.water,
    "l":           ResourceType.water,
    "liters":      ResourceType.water,
    "litres":      ResourceType.water,
    "gallons":     ResourceType.water,
    "water":       ResourceType.water,
    "bag":         ResourceType.waste,
    "bags":        ResourceType.waste,
    "kg":          ResourceType.waste,
    "waste":       ResourceType.waste,
}


def resource_for_unit(unit: Optional[str]) -> Optional[ResourceType]:
    if not unit:
        return None
    return UNIT_RESOURCES.get(unit.strip().lower())


@dataclass(frozen=True)
class ScoreWeights:
    baseline:    float = 100.0
    electricity: float = 0.2   # per unit
    water:       float = 0.1   # per unit
    waste:       float = 0.3   # per bag
    chart_months: int  = 6


def weights_from_settings() -> ScoreWeights:
    return ScoreWeights(
        baseline=settings.SCORE_BASELINE,
        electricity=settings.ELECTRICITY_WEIGHT,
        water=settings.WATER_WEIGHT,
        waste=settings.WASTE_WEIGHT,
        chart_months=settings.CHART_MONTHS,
    )
