from enum import StrEnum
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Literal, Optional, Union
from app.engine.crops import Crop, RainfallCategory, SoilType, SuitabilityLevel, parse_month
from app.engine.scorer import OverallVerdict, SuitabilityResult

class MeasurementType(StrEnum):
    CATEGORY = "category"
    EXACT = "exact"

class RainfallInput(BaseModel):
    measurementType: MeasurementType = MeasurementType.CATEGORY
    rainfallCategory: RainfallCategory = RainfallCategory.MODERATE
    exactRainfall: Optional[float] = Field(default=None, ge=0, le=1000, allow_inf_nan=False)

    @field_validator("exactRainfall", mode="before")
    @classmethod
    def blank_rainfall(cls, v):
        # hidden/blank form inputs arrive as empty strings
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def exact_needs_value(self):
        if self.measurementType == MeasurementType.EXACT and self.exactRainfall is None:
            raise ValueError("exactRainfall is required when measurementType is 'exact'")
        return self

    @property
    def rainfall(self) -> Union[RainfallCategory, float]:
        if self.measurementType == MeasurementType.EXACT:
            return self.exactRainfall
        return self.rainfallCategory

class PredictRequest(RainfallInput):
    crop: Crop
    soilType: SoilType
    month: int = Field(ge=1, le=12)

    @field_validator("month", mode="before")
    @classmethod
    def normalize_month(cls, v):
        return parse_month(v)

class PredictResponse(BaseModel):
    crop: Crop
    level: SuitabilityLevel
    message: str
    score: int
    month: SuitabilityResult
    rainfall: SuitabilityResult
    soil: SuitabilityResult
    season: str
    recommendations: List[str]

    @classmethod
    def build(cls, crop: Crop, verdict: OverallVerdict, season: str, recs: List[str]) -> "PredictResponse":
        return cls(crop=crop, season=season, recommendations=recs, **verdict.model_dump())

class RainfallCheckResponse(BaseModel):
    suitable: bool
    message: str
    rainfall_mm: float

class RainfallOption(BaseModel):
    value: RainfallCategory
    label: str
    mm: float

class ReferenceResponse(BaseModel):
    crops: List[Crop]
    soils: List[SoilType]
    months: List[str]
    rainfall: List[RainfallOption]
    rule: Literal["multi_factor", "rainfall_threshold"]
