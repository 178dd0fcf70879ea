from typing import List, Union
from pydantic import BaseModel


class KeyMetricOut(BaseModel):
    title: str
    value: Union[int, float]
    icon: str


class ChartDatasetOut(BaseModel):
    data: List[float]
    legend: List[str]


class ChartDataOut(BaseModel):
    labels: List[str]
    datasets: List[ChartDatasetOut]


class EntryCountsOut(BaseModel):
    electricity: int
    water: int
    waste: int


class DashboardResponse(BaseModel):
    eco_score: int
    key_metrics: List[KeyMetricOut]
    chart_data: ChartDataOut
    has_sustainability_profile: bool = False
    total_entries: EntryCountsOut
