from enum import Enum

LBS_TO_KG = 0.453592
KG_TO_LBS = 2.20462


class WeightUnit(str, Enum):
    lbs = "lbs"
    kg = "kg"


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between lbs and kg, rounded to one decimal. Same unit is a no-op."""
    from_unit, to_unit = WeightUnit(from_unit), WeightUnit(to_unit)
    if from_unit == to_unit:
        return value
    factor = LBS_TO_KG if from_unit == WeightUnit.lbs else KG_TO_LBS
    return round(value * factor, 1)
