"""Static reference data: crop profiles, soil taxonomy, rainfall categories, months.

Everything here is built once at import and is read-only afterwards.
"""
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, model_validator


class Crop(StrEnum):
    RICE = "Rice"
    WHEAT = "Wheat"
    CORN = "Corn"
    SUGARCANE = "Sugarcane"
    COTTON = "Cotton"
    SOYBEANS = "Soybeans"
    POTATOES = "Potatoes"
    TOMATOES = "Tomatoes"
    ONIONS = "Onions"
    PEANUTS = "Peanuts"


class SoilType(StrEnum):
    CLAY = "Clay"
    CLAY_LOAM = "Clay Loam"
    SILT_LOAM = "Silt Loam"
    LOAM = "Loam"
    SANDY_LOAM = "Sandy Loam"
    SANDY = "Sandy"
    # only referenced by individual crop tables
    BLACK_COTTON_SOIL = "Black Cotton Soil"
    SILT = "Silt"
    HEAVY_CLAY = "Heavy Clay"
    RED_SOIL = "Red Soil"


class RainfallCategory(StrEnum):
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class SuitabilityLevel(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


Rainfall = Union[RainfallCategory, float]

MONTH_NAMES: Tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_MONTH_LOOKUP = {name.lower(): i for i, name in enumerate(MONTH_NAMES, start=1)}
_MONTH_LOOKUP.update({name[:3].lower(): i for i, name in enumerate(MONTH_NAMES, start=1)})


class MonthSets(BaseModel):
    model_config = ConfigDict(frozen=True)

    high: Tuple[int, ...]
    medium: Tuple[int, ...]
    low: Tuple[int, ...]


class SoilSets(BaseModel):
    model_config = ConfigDict(frozen=True)

    high: Tuple[SoilType, ...]
    medium: Tuple[SoilType, ...]
    low: Tuple[SoilType, ...]


class CropProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    months: MonthSets
    soils: SoilSets
    min_rainfall: float
    max_rainfall: float

    @model_validator(mode="after")
    def check_tables(self):
        months = self.months.high + self.months.medium + self.months.low
        if sorted(months) != list(range(1, 13)):
            raise ValueError("month sets must partition 1..12")
        soils = self.soils.high + self.soils.medium + self.soils.low
        if len(set(soils)) != len(soils):
            raise ValueError("soil lists must be disjoint")
        if self.min_rainfall > self.max_rainfall:
            raise ValueError("min_rainfall exceeds max_rainfall")
        return self


class RainfallCategoryInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: float


def _profile(months, soils, rain) -> CropProfile:
    return CropProfile(
        months=dict(zip(("high", "medium", "low"), months)),
        soils=dict(zip(("high", "medium", "low"), soils)),
        min_rainfall=rain[0],
        max_rainfall=rain[1],
    )


# months: (high, medium, low); soils: (high, medium, low); rain: (min, max) mm
CROP_PROFILES: Mapping[Crop, CropProfile] = MappingProxyType({
    Crop.RICE:      _profile(((6, 7, 8), (5, 9), (1, 2, 3, 4, 10, 11, 12)),
                             (("Clay", "Clay Loam"), ("Silt Loam", "Loam"), ("Sandy", "Sandy Loam")), (100, 200)),
    Crop.WHEAT:     _profile(((10, 11), (9, 12), (1, 2, 3, 4, 5, 6, 7, 8)),
                             (("Loam", "Clay Loam"), ("Silt Loam", "Sandy Loam"), ("Clay", "Sandy")), (40, 110)),
    Crop.CORN:      _profile(((6, 7), (2, 3, 8), (1, 4, 5, 9, 10, 11, 12)),
                             (("Loam", "Silt Loam"), ("Clay Loam", "Sandy Loam"), ("Clay", "Sandy")), (50, 100)),
    Crop.SUGARCANE: _profile(((2, 3), (9, 10), (1, 4, 5, 6, 7, 8, 11, 12)),
                             (("Loam", "Sandy Loam"), ("Clay Loam", "Silt Loam"), ("Clay", "Sandy")), (75, 150)),
    Crop.COTTON:    _profile(((4, 5), (3, 6), (1, 2, 7, 8, 9, 10, 11, 12)),
                             (("Black Cotton Soil", "Clay Loam"), ("Loam", "Sandy Loam"), ("Sandy", "Silt")), (50, 100)),
    Crop.SOYBEANS:  _profile(((6, 7), (5, 8), (1, 2, 3, 4, 9, 10, 11, 12)),
                             (("Loam", "Clay Loam"), ("Silt Loam", "Sandy Loam"), ("Sandy", "Heavy Clay")), (45, 100)),
    Crop.POTATOES:  _profile(((10, 11), (9, 12), (1, 2, 3, 4, 5, 6, 7, 8)),
                             (("Sandy Loam", "Loam"), ("Silt Loam", "Clay Loam"), ("Clay", "Sandy")), (35, 75)),
    Crop.TOMATOES:  _profile(((7, 8), (6, 9, 2, 3), (1, 4, 5, 10, 11, 12)),
                             (("Loam", "Sandy Loam"), ("Silt Loam", "Clay Loam"), ("Clay", "Sandy")), (40, 80)),
    Crop.ONIONS:    _profile(((10, 11), (9, 12), (1, 2, 3, 4, 5, 6, 7, 8)),
                             (("Loam", "Sandy Loam"), ("Silt Loam", "Clay Loam"), ("Clay", "Sandy")), (35, 70)),
    Crop.PEANUTS:   _profile(((6, 7), (5, 8), (1, 2, 3, 4, 9, 10, 11, 12)),
                             (("Sandy Loam", "Loam"), ("Red Soil", "Clay Loam"), ("Heavy Clay", "Sandy")), (50, 90)),
})

RAINFALL_CATEGORIES: Mapping[RainfallCategory, RainfallCategoryInfo] = MappingProxyType({
    RainfallCategory.LIGHT:    RainfallCategoryInfo(label="Light Rainfall (0-50mm)", value=25),
    RainfallCategory.MODERATE: RainfallCategoryInfo(label="Moderate Rainfall (50-100mm)", value=75),
    RainfallCategory.HEAVY:    RainfallCategoryInfo(label="Heavy Rainfall (100-200mm)", value=150),
})


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def parse_month(value) -> int:
    """Accept 1-12 (int or numeric string) or a full / three-letter month name."""
    if isinstance(value, bool):
        raise ValueError(f"invalid month: {value!r}")
    if isinstance(value, int):
        month = value
    elif isinstance(value, float) and value.is_integer():
        month = int(value)
    elif isinstance(value, str) and value.strip().isdigit():
        month = int(value.strip())
    elif isinstance(value, str) and value.strip().lower() in _MONTH_LOOKUP:
        return _MONTH_LOOKUP[value.strip().lower()]
    else:
        raise ValueError(f"invalid month: {value!r}")
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")
    return month


def resolve_rainfall(rainfall: Rainfall) -> float:
    """Map a category to its representative millimeter value; numbers pass through."""
    if isinstance(rainfall, RainfallCategory):
        return RAINFALL_CATEGORIES[rainfall].value
    return float(rainfall)
