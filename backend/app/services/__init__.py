"""
Services Package
================

These are the "workers" that do the actual work.

- TokenService: Checks access tokens
- SoilSensorTeam: Talks to the soil sensor AI team
- SoilAnalysisStore: Keeps saved analyses on disk
- SoilAnalysisService: The boss that runs and serves soil analyses
- WeatherService: Talks to weatherapi.com
- parse_advice_to_object: Turns AI team output into seven fields
"""

from .advice_normalizer import parse_advice_to_object, parse_advice_lines
from .token_service import TokenService, TokenError
from .soil_ai_team_service import SoilSensorTeam
from .soil_analysis_store import SoilAnalysisStore
from .soil_analysis_service import SoilAnalysisService, SoilAnalysisError
from .weather_service import WeatherService, WeatherServiceError

__all__ = [
    "parse_advice_to_object",
    "parse_advice_lines",
    "TokenService",
    "TokenError",
    "SoilSensorTeam",
    "SoilAnalysisStore",
    "SoilAnalysisService",
    "SoilAnalysisError",
    "WeatherService",
    "WeatherServiceError",
]
