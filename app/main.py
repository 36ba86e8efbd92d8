from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from app.auth import router as auth_router
from app.config import settings
from app.engine.crops import MONTH_NAMES, RAINFALL_CATEGORIES, Crop, SoilType, resolve_rainfall
from app.engine.explainer import recommendations, seasonal_context
from app.engine.scorer import check_rainfall_threshold, evaluate_overall
from app.logging_config import configure_logging
from app.schema import (
    PredictRequest, PredictResponse, RainfallCheckResponse, RainfallInput,
    RainfallOption, ReferenceResponse,
)
from app.security import current_user, form_user

log = structlog.get_logger("cropsmart")

FORM_ERROR = "Error making prediction. Please try again."

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    log.info("startup", rule=settings.prediction_rule, auth_enabled=settings.auth_enabled)
    yield

app = FastAPI(title=f"{settings.app_name} - Crop Suitability", version="0.1.0", lifespan=lifespan)
app.state.settings = settings

app.add_middleware(
    CORSMiddleware,
    # a wildcard origin never gets credentialed responses
    allow_origins=settings.cors_origins, allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"], allow_headers=["*"]
)

app.include_router(auth_router, prefix="/auth", tags=["Auth"])

@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    # submitted values are not echoed back; NaN or Infinity would not serialize
    detail = [{k: v for k, v in err.items() if k in ("type", "loc", "msg")} for err in exc.errors()]
    return JSONResponse({"detail": detail}, status_code=422)

def predict(body: PredictRequest) -> PredictResponse:
    verdict = evaluate_overall(body.crop, body.month, body.rainfall, body.soilType)
    recs = recommendations(body.crop, body.month, body.soilType, verdict)
    log.info("prediction", rule="multi_factor", crop=body.crop.value, soil=body.soilType.value,
             month=body.month, rainfall=resolve_rainfall(body.rainfall), level=verdict.level.value)
    return PredictResponse.build(body.crop, verdict, seasonal_context(body.month), recs)

def rainfall_check(body: RainfallInput) -> RainfallCheckResponse:
    check = check_rainfall_threshold(body.rainfall)
    mm = resolve_rainfall(body.rainfall)
    log.info("prediction", rule="rainfall_threshold", rainfall=mm, suitable=check.suitable)
    return RainfallCheckResponse(suitable=check.suitable, message=check.message, rainfall_mm=mm)

def reference() -> ReferenceResponse:
    return ReferenceResponse(
        crops=list(Crop),
        soils=list(SoilType),
        months=list(MONTH_NAMES),
        rainfall=[RainfallOption(value=k, label=v.label, mm=v.value) for k, v in RAINFALL_CATEGORIES.items()],
        rule=settings.prediction_rule,
    )

# ---------- Form page ----------
def _default_form() -> Dict[str, Any]:
    return {
        "crop": Crop.RICE.value,
        "soilType": SoilType.CLAY_LOAM.value,
        "measurementType": "category",
        "rainfallCategory": "moderate",
        "exactRainfall": "50",
        "month": str(datetime.now().month),
    }

def _render(request: Request, form: Dict[str, Any], *, result: Optional[PredictResponse] = None,
            check: Optional[RainfallCheckResponse] = None, error: Optional[str] = None,
            status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.app_name,
            "ref": reference(),
            "form": form,
            "result": result,
            "check": check,
            "error": error,
            "auth_enabled": settings.auth_enabled,
        },
        status_code=status_code,
    )

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/")
async def form_page(request: Request, user=Depends(form_user)):
    return _render(request, _default_form())

@app.post("/")
async def form_submit(request: Request, user=Depends(form_user)):
    form = {**_default_form(), **dict(await request.form())}
    try:
        if settings.prediction_rule == "rainfall_threshold":
            check = rainfall_check(RainfallInput.model_validate(form))
            return _render(request, form, check=check)
        result = predict(PredictRequest.model_validate(form))
        return _render(request, form, result=result)
    except (ValidationError, ValueError) as exc:
        log.warning("prediction_failed", error=str(exc))
        return _render(request, form, error=FORM_ERROR, status_code=422)

# ---------- JSON API ----------
@app.post("/api/predict", response_model=PredictResponse)
async def api_predict(body: PredictRequest, user=Depends(current_user)):
    return predict(body)

@app.post("/api/rainfall-check", response_model=RainfallCheckResponse)
async def api_rainfall_check(body: RainfallInput, user=Depends(current_user)):
    return rainfall_check(body)

@app.get("/api/reference", response_model=ReferenceResponse)
def api_reference():
    return reference()
