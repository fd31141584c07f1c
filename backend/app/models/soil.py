"""
Soil Models
===========
Pydantic models for soil sensor readings and their AI interpretation.

This module defines all data structures used throughout the application:
- Request models: What the frontend sends to the backend
- Response models: What the backend returns to the frontend
- Internal models: The AI team output and the parsed advice record

NAMING:
    The frontend speaks camelCase ("farmName", "submittedAt"), Python speaks
    snake_case. Fields carry an alias for the wire name and accept either.
"""

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# PARSED ADVICE - The seven-field interpretation record
# =============================================================================

# Python field name -> key used by the AI team when it answers in JSON
ADVICE_KEYS = {
    "fertility": "Fertility",
    "moisture": "Moisture",
    "ph": "pH",
    "temperature": "Temperature",
    "sunlight": "Sunlight",
    "humidity": "Humidity",
    "evaluation": "Evaluation",
}


class ParsedAdvice(BaseModel):
    """
    Interpretation of one soil reading, one sentence per measurement plus
    an overall evaluation.

    Every field is always present. Anything that could not be recovered
    from the AI output is an empty string.
    """
    model_config = ConfigDict(frozen=True)

    fertility: str = Field(default="", description="Fertility interpretation")
    moisture: str = Field(default="", description="Moisture interpretation")
    ph: str = Field(default="", description="pH interpretation")
    temperature: str = Field(default="", description="Temperature interpretation")
    sunlight: str = Field(default="", description="Sunlight interpretation")
    humidity: str = Field(default="", description="Humidity interpretation")
    evaluation: str = Field(default="", description="Overall evaluation")

    def to_document(self) -> dict[str, str]:
        """Return the record keyed the way the AI team writes it."""
        return {key: getattr(self, name) for name, key in ADVICE_KEYS.items()}

    def to_document_json(self) -> str:
        return json.dumps(self.to_document())


def _advice_text(value: Any) -> Optional[str]:
    # Falsy values (null, false, 0, "") count as missing
    if not value:
        return None
    if isinstance(value, str):
        return value
    if value is True:
        return "true"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(value, separators=(",", ":"))


class AdviceDocument(BaseModel):
    """
    Partial advice record as decoded from JSON.

    Only the capitalized keys are recognized (lookup is case-sensitive).
    Unknown keys are ignored and every field is optional. Validating
    anything that is not a JSON object fails.
    """
    model_config = ConfigDict(extra="ignore")

    fertility: Optional[str] = Field(default=None, alias="Fertility")
    moisture: Optional[str] = Field(default=None, alias="Moisture")
    ph: Optional[str] = Field(default=None, alias="pH")
    temperature: Optional[str] = Field(default=None, alias="Temperature")
    sunlight: Optional[str] = Field(default=None, alias="Sunlight")
    humidity: Optional[str] = Field(default=None, alias="Humidity")
    evaluation: Optional[str] = Field(default=None, alias="Evaluation")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, value: Any) -> Optional[str]:
        return _advice_text(value)

    def to_advice(self) -> ParsedAdvice:
        return ParsedAdvice(**{name: getattr(self, name) or "" for name in ADVICE_KEYS})


# =============================================================================
# REQUEST MODELS - What frontend sends to backend
# =============================================================================

class SensorReadings(BaseModel):
    """
    One set of soil sensor readings for a farm.

    Example Request Body (inside "sensorData"):
        {
            "farmName": "North Field",
            "cropType": "Tomato",
            "fertility": 420,
            "moisture": 38.5,
            "ph": 6.4,
            "temperature": 24.1,
            "sunlight": 780,
            "humidity": 61
        }
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="Client generated id")
    farm_name: str = Field(
        ...,
        alias="farmName",
        description="Farm the readings belong to",
        min_length=1,
        max_length=100,
        examples=["North Field"]
    )
    crop_type: Optional[str] = Field(None, alias="cropType", description="Crop planted")
    username: Optional[str] = Field(
        None,
        description="Owner of the readings (always taken from the access token)"
    )
    fertility: float = Field(..., description="Soil fertility (µS/cm)")
    moisture: float = Field(..., description="Soil moisture (%)")
    ph: float = Field(..., description="Soil pH", ge=0, le=14)
    temperature: float = Field(..., description="Soil temperature (°C)")
    sunlight: float = Field(..., description="Light intensity (lux)")
    humidity: float = Field(..., description="Air humidity (%)")


class SensorSessionParams(BaseModel):
    """
    Request body for POST /api/save-sensor-readings.
    """
    model_config = ConfigDict(populate_by_name=True)

    sensor_data: SensorReadings = Field(..., alias="sensorData")


class NormalizeAdviceRequest(BaseModel):
    """Request body for POST /api/advice/normalize."""
    raw: str = Field(..., description="Raw AI output (JSON or numbered lines)")
    strict: bool = Field(
        default=False,
        description="Only trust JSON that decodes to an object"
    )


# =============================================================================
# RESPONSE / INTERNAL MODELS
# =============================================================================

class SensorReadingsWithInterpretation(SensorReadings):
    """
    A stored soil analysis: the readings, the parsed interpretation and
    when it was submitted.
    """
    interpretation: ParsedAdvice = Field(default_factory=ParsedAdvice)
    submitted_at: str = Field(..., alias="submittedAt", description="ISO-8601 UTC")
    created_at: str = Field(..., alias="createdAt", description="ISO-8601 UTC")


class WorkflowOutput(BaseModel):
    """What the soil sensor AI team returns when a workflow ends."""
    status: str = Field(..., description="Workflow status, FINISHED on success")
    result: Any = Field(None, description="Team answer, text or JSON")


class SuccessMessage(BaseModel):
    success: str
