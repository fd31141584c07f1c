import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers import set_soil_analysis_service, set_weather_service
from app.services import WeatherService

from conftest import SENSOR_PAYLOAD


@pytest.fixture
def client(soil_analysis_service, token_service):
    weather = WeatherService(api_key="k", token_service=token_service, base_url="http://weather.test/v1")
    weather.http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json={"location": {"name": request.url.params["q"]}})
        )
    )
    set_soil_analysis_service(soil_analysis_service)
    set_weather_service(weather)
    yield TestClient(app)
    set_soil_analysis_service(None)
    set_weather_service(None)


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.unit
def test_save_then_read_sensor_readings(client: TestClient, alice_token: str) -> None:
    response = client.post("/api/save-sensor-readings", json=SENSOR_PAYLOAD, headers=_auth(alice_token))
    assert response.status_code == 200
    assert response.json() == {"success": "Soil Analysis successful"}

    response = client.get("/api/get-soil-analysis-data", headers=_auth(alice_token))
    assert response.status_code == 200
    records = response.json()
    assert len(records) == 1
    assert records[0]["farmName"] == "North Field"
    assert records[0]["username"] == "alice"
    assert records[0]["interpretation"]["ph"] == "Slightly acidic"
    assert "submittedAt" in records[0]

    response = client.get("/api/get-soil-analysis-by-farm/North Field", headers=_auth(alice_token))
    assert len(response.json()) == 1
    response = client.get("/api/get-soil-analysis-by-farm/Elsewhere", headers=_auth(alice_token))
    assert response.json() == []


@pytest.mark.unit
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Token abc"}, {"Authorization": "bearer abc"}])
def test_missing_bearer_token_is_401(client: TestClient, headers: dict) -> None:
    response = client.get("/api/get-soil-analysis-data", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Bearer token not found in Authorization header"


@pytest.mark.unit
def test_invalid_token_is_401(client: TestClient) -> None:
    response = client.post("/api/save-sensor-readings", json=SENSOR_PAYLOAD, headers=_auth("bogus"))
    assert response.status_code == 401


@pytest.mark.unit
def test_blocked_workflow_is_500(client: TestClient, alice_token: str, team_stub) -> None:
    team_stub.status = "ERRORED"
    response = client.post("/api/save-sensor-readings", json=SENSOR_PAYLOAD, headers=_auth(alice_token))
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to process sensor analysis."


@pytest.mark.unit
def test_invalid_body_is_422(client: TestClient, alice_token: str) -> None:
    response = client.post("/api/save-sensor-readings", json={"sensorData": {}}, headers=_auth(alice_token))
    assert response.status_code == 422


@pytest.mark.unit
def test_current_weather_passes_provider_json_through(client: TestClient, alice_token: str) -> None:
    response = client.get("/api/weather/current/Davao", headers=_auth(alice_token))
    assert response.status_code == 200
    assert response.json() == {"location": {"name": "Davao"}}


@pytest.mark.unit
def test_weather_provider_failure_is_502(client: TestClient, alice_token: str) -> None:
    from app.routers.weather import get_weather_service

    get_weather_service().http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(500))
    )
    response = client.get("/api/weather/current/Davao", headers=_auth(alice_token))
    assert response.status_code == 502


@pytest.mark.unit
def test_normalize_endpoint_needs_no_token(client: TestClient) -> None:
    response = client.post("/api/advice/normalize", json={"raw": '{"Fertility":"High","pH":"6.5"}'})
    assert response.status_code == 200
    assert response.json() == {
        "fertility": "High",
        "moisture": "",
        "ph": "6.5",
        "temperature": "",
        "sunlight": "",
        "humidity": "",
        "evaluation": "",
    }


@pytest.mark.unit
def test_normalize_endpoint_strict_flag(client: TestClient) -> None:
    response = client.post("/api/advice/normalize", json={"raw": "42"})
    assert response.json()["fertility"] == ""

    response = client.post("/api/advice/normalize", json={"raw": "42", "strict": True})
    assert response.json()["fertility"] == "42"


@pytest.mark.unit
def test_services_not_started_is_500(alice_token: str) -> None:
    response = TestClient(app).get("/api/get-soil-analysis-data", headers=_auth(alice_token))
    assert response.status_code == 500


@pytest.mark.unit
def test_root_and_health(client: TestClient) -> None:
    assert client.get("/").json()["name"] == "Soil Advisor API"
    assert client.get("/health").json()["status"] == "healthy"


@pytest.mark.unit
def test_weather_checks_token_before_location(client: TestClient, alice_token: str) -> None:
    response = client.get("/api/weather/current/%20", headers=_auth("bogus"))
    assert response.status_code == 401

    response = client.get("/api/weather/current/%20", headers=_auth(alice_token))
    assert response.status_code == 400
