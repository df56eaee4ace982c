"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

NOAA_GEOMAG_FORECAST_URL = (
    "https://services.swpc.noaa.gov/text/3-day-geomag-forecast.txt"
)


class ErrorModel(StrEnum):
    MILSPEC = "milspec"
    WMM = "wmm"


class ThresholdTable(BaseModel):
    """Maximum allowable error per field component (nT, or degrees for D/I)."""

    model_config = {"extra": "forbid"}

    F: float = Field(gt=0.0)
    H: float = Field(gt=0.0)
    D: float = Field(gt=0.0)
    I: float = Field(gt=0.0)  # noqa: E741
    X: float = Field(gt=0.0)
    Y: float = Field(gt=0.0)
    Z: float = Field(gt=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    url: str = NOAA_GEOMAG_FORECAST_URL
    user_agent: str = "wmmview/0.1.0"
    timeout_seconds: float = Field(default=15.0, gt=0.0)
    cache_duration_hours: float = Field(default=3.0, gt=0.0)
    cache_key: str = "noaa_geomag_forecast"


class AnalysisConfig(BaseModel):
    model_config = {"extra": "forbid"}

    min_altitude_km: float = Field(default=10.0, ge=0.0)
    limit_step_km: int = Field(default=100, ge=1)
    default_error_model: ErrorModel = ErrorModel.MILSPEC


class DataConfig(BaseModel):
    model_config = {"extra": "forbid"}

    data_dir: str = "public/data"


class EngineConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast: ForecastConfig = ForecastConfig()
    analysis: AnalysisConfig = AnalysisConfig()
    data: DataConfig = DataConfig()
    thresholds: dict[ErrorModel, ThresholdTable] = {}
