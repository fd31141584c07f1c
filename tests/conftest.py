import os

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-key")
os.environ.setdefault("SOIL_AI_TEAM_URL", "http://team.test/soil-sensor-team")
os.environ.setdefault("WEATHER_API_KEY", "test-weather-key")

import httpx
import pytest

from app.services import SoilAnalysisService, SoilAnalysisStore, SoilSensorTeam, TokenService


SECRET = "test-jwt-key"

SENSOR_PAYLOAD = {
    "sensorData": {
        "farmName": "North Field",
        "cropType": "Tomato",
        "fertility": 420,
        "moisture": 38.5,
        "ph": 6.4,
        "temperature": 24.1,
        "sunlight": 780,
        "humidity": 61,
    }
}

JSON_ADVICE = {
    "Fertility": "High",
    "Moisture": "Moderate",
    "pH": "Slightly acidic",
    "Temperature": "Ideal",
    "Sunlight": "Full sun",
    "Humidity": "Comfortable",
    "Evaluation": "Good for tomatoes",
}


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret_key=SECRET)


@pytest.fixture
def alice_token(token_service: TokenService) -> str:
    return token_service.create_access_token("alice")


@pytest.fixture
def store(tmp_path) -> SoilAnalysisStore:
    return SoilAnalysisStore(tmp_path / "soil_analysis_db.json")


class TeamStub:
    """Answers POST /start with a canned workflow output and records requests."""

    def __init__(self, status: str = "FINISHED", result=None, http_status: int = 200):
        self.status = status
        self.result = JSON_ADVICE if result is None else result
        self.http_status = http_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.http_status != 200:
            return httpx.Response(self.http_status, json={"error": "boom"})
        return httpx.Response(200, json={"status": self.status, "result": self.result})


@pytest.fixture
def team_stub() -> TeamStub:
    return TeamStub()


@pytest.fixture
def soil_team(team_stub: TeamStub) -> SoilSensorTeam:
    team = SoilSensorTeam(base_url="http://team.test/soil-sensor-team", api_token="team-token")
    team.http_client = httpx.AsyncClient(transport=httpx.MockTransport(team_stub))
    return team


@pytest.fixture
def soil_analysis_service(token_service, soil_team, store) -> SoilAnalysisService:
    return SoilAnalysisService(token_service=token_service, soil_team=soil_team, store=store)
