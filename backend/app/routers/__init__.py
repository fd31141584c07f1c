"""
Routers Package
===============

Routers are like the reception desk - they direct incoming requests
to the right place.
"""

from .soil_ai import router as soil_ai_router, set_soil_analysis_service
from .weather import router as weather_router, set_weather_service

__all__ = [
    "soil_ai_router",
    "weather_router",
    "set_soil_analysis_service",
    "set_weather_service",
]
