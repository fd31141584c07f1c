import asyncio

import httpx
import pytest

from app.services import TokenError, WeatherService, WeatherServiceError


WEATHER = {
    "location": {"name": "Davao", "country": "Philippines"},
    "current": {"temp_c": 29.0, "humidity": 74},
}


def _weather_service(token_service, handler) -> WeatherService:
    service = WeatherService(api_key="k-123", token_service=token_service, base_url="http://weather.test/v1/")
    service.http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return service


@pytest.mark.unit
def test_current_weather_queries_provider(token_service, alice_token: str) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=WEATHER)

    service = _weather_service(token_service, handler)
    data = asyncio.run(service.current_weather(alice_token, " Davao "))

    assert data == WEATHER
    assert seen[0].url.path == "/v1/current.json"
    assert seen[0].url.params["key"] == "k-123"
    assert seen[0].url.params["q"] == "Davao"


@pytest.mark.unit
def test_coordinates_are_sent_as_lat_lng(token_service) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=WEATHER)

    service = _weather_service(token_service, handler)
    asyncio.run(service.get_current_weather_by_coordinates(7.07, 125.61))

    assert seen[0].url.params["q"] == "7.07,125.61"


@pytest.mark.unit
def test_provider_error_raises_weather_error(token_service, alice_token: str) -> None:
    service = _weather_service(token_service, lambda request: httpx.Response(403, json={}))

    with pytest.raises(WeatherServiceError, match="Failed to fetch weather: Forbidden"):
        asyncio.run(service.current_weather(alice_token, "Davao"))


@pytest.mark.unit
def test_unreachable_provider_raises_weather_error(token_service, alice_token: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("no route", request=request)

    service = _weather_service(token_service, handler)

    with pytest.raises(WeatherServiceError):
        asyncio.run(service.current_weather(alice_token, "Davao"))


@pytest.mark.unit
def test_blank_location_is_rejected(token_service, alice_token: str) -> None:
    service = _weather_service(token_service, lambda request: httpx.Response(200, json=WEATHER))

    with pytest.raises(ValueError):
        asyncio.run(service.current_weather(alice_token, "   "))


@pytest.mark.unit
def test_invalid_token_is_rejected(token_service) -> None:
    service = _weather_service(token_service, lambda request: httpx.Response(200, json=WEATHER))

    with pytest.raises(TokenError):
        asyncio.run(service.current_weather("bogus", "Davao"))
