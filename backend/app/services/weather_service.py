"""
Weather Service
===============

Current weather for a farm's location, from weatherapi.com.

HOW WEATHERAPI WORKS:
--------------------
    GET http://api.weatherapi.com/v1/current.json?key=<KEY>&q=<location>

"q" can be a city name ("Davao"), a postcode, or "lat,lng". The answer is
JSON with a "location" block and a "current" block. We pass it through as is.
"""

import logging
from typing import Optional

import httpx

from app.services.token_service import TokenService
from app.utils import validate_location

logger = logging.getLogger(__name__)


class WeatherServiceError(Exception):
    """The weather provider could not give us current conditions."""


class WeatherService:
    """
    Client for the weather provider.

    HOW TO USE:
    ----------
    weather = WeatherService(api_key="...", token_service=tokens)
    data = await weather.current_weather(token, "Davao")
    print(data["current"]["temp_c"])
    """

    BASE_URL = "http://api.weatherapi.com/v1"

    def __init__(
        self,
        api_key: str,
        token_service: TokenService,
        base_url: Optional[str] = None,
        request_timeout: float = 30.0
    ):
        self.api_key = api_key
        self.token_service = token_service
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.http_client = httpx.AsyncClient(timeout=request_timeout)

    async def get_current_weather(self, query: str) -> dict:
        """
        Fetch current conditions for any weatherapi.com query.

        Raises:
            WeatherServiceError: If the provider can't be reached or says no
        """
        url = f"{self.base_url}/current.json"
        try:
            response = await self.http_client.get(url, params={"key": self.api_key, "q": query})
        except httpx.RequestError as e:
            logger.error(f"[Weather] Could not reach provider: {e}")
            raise WeatherServiceError(f"Failed to fetch weather: {e}") from e

        if response.is_error:
            logger.error(f"[Weather] Provider answered HTTP {response.status_code} for '{query}'")
            raise WeatherServiceError(f"Failed to fetch weather: {response.reason_phrase}")

        try:
            return response.json()
        except ValueError as e:
            raise WeatherServiceError("Failed to fetch weather: provider sent invalid JSON") from e

    async def get_current_weather_by_coordinates(self, lat: float, lng: float) -> dict:
        return await self.get_current_weather(f"{lat},{lng}")

    async def current_weather(self, token: str, location: str) -> dict:
        """
        Current weather for a location, for a signed-in user.

        Raises:
            TokenError: If the access token is not valid
            ValueError: If the location is blank
            WeatherServiceError: If the provider fails
        """
        self.token_service.verify_access_token(token)

        if not validate_location(location):
            raise ValueError("That doesn't look like a valid location")
        location = location.strip()

        return await self.get_current_weather(location)

    async def close(self):
        await self.http_client.aclose()
