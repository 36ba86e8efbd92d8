from typing import Dict
from pydantic import BaseModel, ConfigDict
from .crops import (
    CROP_PROFILES, Crop, Rainfall, SoilType, SuitabilityLevel,
    month_name, resolve_rainfall,
)

# Fixed tolerance band around a crop's ideal rainfall range
RAINFALL_TOLERANCE_LOW = 0.7
RAINFALL_TOLERANCE_HIGH = 1.3

LEVEL_SCORES: Dict[SuitabilityLevel, int] = {
    SuitabilityLevel.HIGH: 3,
    SuitabilityLevel.MEDIUM: 2,
    SuitabilityLevel.LOW: 1,
}
# lower bounds are inclusive: 8 -> high, 7 -> medium
HIGH_SCORE_MIN = 8
MEDIUM_SCORE_MIN = 5

# crop-agnostic threshold rule
THRESHOLD_MIN_RAINFALL = 50
THRESHOLD_MAX_RAINFALL = 300


class SuitabilityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: SuitabilityLevel
    message: str


class OverallVerdict(SuitabilityResult):
    score: int
    month: SuitabilityResult
    rainfall: SuitabilityResult
    soil: SuitabilityResult


class RainfallCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    suitable: bool
    message: str


def evaluate_month(crop: Crop, month: int) -> SuitabilityResult:
    """Rank ``month`` against the crop's planting calendar.

    ``month`` must already be validated to 1-12.
    """
    months = CROP_PROFILES[crop].months
    name = month_name(month)
    if month in months.high:
        return SuitabilityResult(level=SuitabilityLevel.HIGH,
                                 message=f"{name} is ideal for planting {crop}.")
    if month in months.medium:
        return SuitabilityResult(level=SuitabilityLevel.MEDIUM,
                                 message=f"{name} is acceptable for planting {crop}, but not ideal.")
    return SuitabilityResult(level=SuitabilityLevel.LOW,
                             message=f"{name} is not recommended for planting {crop}.")


def evaluate_rainfall(crop: Crop, rainfall: Rainfall) -> SuitabilityResult:
    p = CROP_PROFILES[crop]
    value = resolve_rainfall(rainfall)
    if p.min_rainfall <= value <= p.max_rainfall:
        return SuitabilityResult(level=SuitabilityLevel.HIGH,
                                 message=f"Current rainfall is ideal for {crop}.")
    if p.min_rainfall * RAINFALL_TOLERANCE_LOW <= value <= p.max_rainfall * RAINFALL_TOLERANCE_HIGH:
        return SuitabilityResult(level=SuitabilityLevel.MEDIUM,
                                 message=f"Rainfall conditions are acceptable but not ideal for {crop}.")
    return SuitabilityResult(level=SuitabilityLevel.LOW,
                             message=f"Current rainfall is not suitable for {crop}.")


def evaluate_soil(crop: Crop, soil: SoilType) -> SuitabilityResult:
    soils = CROP_PROFILES[crop].soils
    if soil in soils.high:
        return SuitabilityResult(level=SuitabilityLevel.HIGH,
                                 message=f"{soil} soil is ideal for {crop}.")
    if soil in soils.medium:
        return SuitabilityResult(level=SuitabilityLevel.MEDIUM,
                                 message=f"{soil} soil is acceptable for {crop}.")
    # listed as low, or not listed for this crop at all
    return SuitabilityResult(level=SuitabilityLevel.LOW,
                             message=f"{soil} soil is not recommended for {crop}.")


def combine(crop: Crop, month: SuitabilityResult, rainfall: SuitabilityResult,
            soil: SuitabilityResult) -> OverallVerdict:
    total = LEVEL_SCORES[month.level] + LEVEL_SCORES[rainfall.level] + LEVEL_SCORES[soil.level]
    if total >= HIGH_SCORE_MIN:
        level, message = SuitabilityLevel.HIGH, f"Highly Suitable for {crop}"
    elif total >= MEDIUM_SCORE_MIN:
        level, message = SuitabilityLevel.MEDIUM, f"Moderately Suitable for {crop}"
    else:
        level, message = SuitabilityLevel.LOW, f"Low Suitability for {crop}"
    return OverallVerdict(level=level, message=message, score=total,
                          month=month, rainfall=rainfall, soil=soil)


def evaluate_overall(crop: Crop, month: int, rainfall: Rainfall, soil: SoilType) -> OverallVerdict:
    return combine(
        crop,
        evaluate_month(crop, month),
        evaluate_rainfall(crop, rainfall),
        evaluate_soil(crop, soil),
    )


def check_rainfall_threshold(rainfall: Rainfall) -> RainfallCheck:
    """Single-value rainfall rule; ignores crop, soil and month."""
    value = resolve_rainfall(rainfall)
    if value < THRESHOLD_MIN_RAINFALL:
        return RainfallCheck(suitable=False, message="Rainfall is too low for optimal crop growth.")
    if value > THRESHOLD_MAX_RAINFALL:
        return RainfallCheck(suitable=False, message="Rainfall is too high, might cause waterlogging.")
    return RainfallCheck(suitable=True, message="Conditions look favorable for crop growth!")
