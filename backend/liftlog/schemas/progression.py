from enum import Enum
from pydantic import BaseModel

class MetricType(str, Enum):
    max_weight = "max_weight"
    total_reps = "total_reps"
    total_volume = "total_volume"

class DateRange(str, Enum):
    week = "7d"
    month = "30d"
    quarter = "90d"
    year = "1y"
    all = "all"

class MetricPoint(BaseModel):
    date: str
    value: float
