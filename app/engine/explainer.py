from typing import List
from .crops import CROP_PROFILES, Crop, SoilType, SuitabilityLevel
from .scorer import OverallVerdict

def seasonal_context(month: int) -> str:
    if month in (12, 1, 2):
        return "Winter"
    if month in (3, 4, 5):
        return "Spring"
    if month in (6, 7, 8):
        return "Monsoon"
    return "Autumn"

def months_until_planting(crop: Crop, month: int) -> int:
    # counts to the first listed ideal month, not the nearest one
    best = CROP_PROFILES[crop].months.high[0]
    return (best - month + 12) % 12

def recommendations(crop: Crop, month: int, soil: SoilType, verdict: OverallVerdict) -> List[str]:
    """Follow-up advice for the dimensions that scored low."""
    out: List[str] = []
    if verdict.month.level == SuitabilityLevel.LOW:
        out.append(
            f"Current season ({seasonal_context(month)}) is not suitable. "
            f"Wait approximately {months_until_planting(crop, month)} months for optimal planting time."
        )
    if verdict.soil.level == SuitabilityLevel.LOW:
        best = " or ".join(CROP_PROFILES[crop].soils.high)
        out.append(f"Consider soil amendments to make your {soil} soil more similar to {best} conditions.")
    return out
