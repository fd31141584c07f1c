"""
Weather Router
==============

GET /api/weather/current/{location} - Current weather (needs a bearer token)
"""

from fastapi import APIRouter, Depends, HTTPException

from app.routers.auth import require_bearer_token
from app.services import TokenError, WeatherServiceError

router = APIRouter(prefix="/api/weather", tags=["weather"])


_weather_service = None  # Set when the app starts


def set_weather_service(service):
    """Called when the app starts to give us the weather service."""
    global _weather_service
    _weather_service = service


def get_weather_service():
    if _weather_service is None:
        raise HTTPException(status_code=500, detail="Server not fully started yet")
    return _weather_service


@router.get("/current/{location}")
async def current_weather(
    location: str,
    token: str = Depends(require_bearer_token),
    service = Depends(get_weather_service)
):
    """
    Current weather for a place.

    location can be a city ("Davao"), a postcode, or "lat,lng".
    The token is checked before the location.
    """
    try:
        return await service.current_weather(token, location)
    except TokenError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except WeatherServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
