"""
Soil AI Router
==============

Endpoints for running and reading soil analyses.

ALL ENDPOINTS:
-------------
POST /api/save-sensor-readings                  - Analyze readings and save the result
GET  /api/get-soil-analysis-data                - All my saved analyses
GET  /api/get-soil-analysis-by-farm/{farm_name} - My saved analyses for one farm
POST /api/advice/normalize                      - Parse raw AI output (no auth, nothing saved)

Everything except /advice/normalize needs "Authorization: Bearer <token>".
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from app.models import (
    NormalizeAdviceRequest,
    ParsedAdvice,
    SensorReadingsWithInterpretation,
    SensorSessionParams,
    SuccessMessage,
)
from app.routers.auth import require_bearer_token
from app.services import (
    SoilAnalysisError,
    TokenError,
    parse_advice_to_object,
)
from app.utils import validate_farm_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["soil-ai"])


# =============================================================================
# DEPENDENCY INJECTION
# =============================================================================

_soil_analysis_service = None  # Set when the app starts


def set_soil_analysis_service(service):
    """Called when the app starts to give us the soil analysis service."""
    global _soil_analysis_service
    _soil_analysis_service = service


def get_soil_analysis_service():
    if _soil_analysis_service is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _soil_analysis_service


# =============================================================================
# SOIL ANALYSIS ENDPOINTS
# =============================================================================

@router.post("/save-sensor-readings", response_model=SuccessMessage)
async def save_sensor_readings(
    params: SensorSessionParams,
    token: str = Depends(require_bearer_token),
    service = Depends(get_soil_analysis_service)
):
    """
    Send soil readings to the AI team and save its interpretation.

    Send us:
    - sensorData.farmName: Which farm (like "North Field")
    - sensorData.fertility / moisture / ph / temperature / sunlight / humidity

    We'll give you back {"success": "Soil Analysis successful"}.
    """
    try:
        return await service.analyze_from_api(token, params)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except SoilAnalysisError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/get-soil-analysis-data", response_model=list[SensorReadingsWithInterpretation])
async def get_soil_analysis_data(
    token: str = Depends(require_bearer_token),
    service = Depends(get_soil_analysis_service)
):
    """Get every analysis you've saved, newest first."""
    try:
        return service.get_soil_analysis_data(token)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get(
    "/get-soil-analysis-by-farm/{farm_name}",
    response_model=list[SensorReadingsWithInterpretation]
)
async def get_soil_analysis_by_farm(
    farm_name: str,
    token: str = Depends(require_bearer_token),
    service = Depends(get_soil_analysis_service)
):
    """Get your saved analyses for one farm, newest first."""
    if not validate_farm_name(farm_name):
        raise HTTPException(status_code=400, detail="Farm name must be 1-100 characters")
    try:
        return service.get_soil_analysis_data_by_farm(token, farm_name)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))


# =============================================================================
# ADVICE PARSING
# =============================================================================

@router.post("/advice/normalize", response_model=ParsedAdvice)
async def normalize_advice(request: NormalizeAdviceRequest):
    """
    Parse raw AI team output into the seven advice fields.

    Handy for checking a prompt's output format. Never fails: anything
    we can't read comes back as an empty string.
    """
    return parse_advice_to_object(request.raw, strict=request.strict)
