# app/config.py
import os
from typing import List, Literal
from pydantic import BaseModel, ConfigDict
from dotenv import load_dotenv

load_dotenv()

def _split(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]

class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    app_name: str = os.getenv("APP_NAME", "CropSmart")
    # which rule the form renders; the API exposes both
    prediction_rule: Literal["multi_factor", "rainfall_threshold"] = os.getenv("PREDICTION_RULE", "multi_factor")

    # Auth provider (Supabase-style). Empty secret means auth is off (dev mode)
    auth_url: str = os.getenv("AUTH_URL", "")
    auth_anon_key: str = os.getenv("AUTH_ANON_KEY", "")
    auth_jwt_secret: str = os.getenv("AUTH_JWT_SECRET", "")
    auth_jwt_audience: str = os.getenv("AUTH_JWT_AUDIENCE", "authenticated")
    auth_timeout_seconds: float = float(os.getenv("AUTH_TIMEOUT_SECONDS", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info")
    log_format: Literal["json", "console"] = os.getenv("LOG_FORMAT", "console")

    cors_origins: List[str] = _split(os.getenv("CORS_ORIGINS", "*"))

    @property
    def auth_enabled(self) -> bool:
        return bool(self.auth_jwt_secret)

settings = Settings()
