"""
Soil Analysis Service
=====================

This is the BRAIN of the soil analysis flow!

WHAT IT DOES:
------------
1. Checks who is asking (access token -> username)
2. Sends the readings to the soil sensor AI team
3. Normalizes whatever the team answered into seven fields
4. Saves readings + interpretation for that user
5. Reads saved analyses back (all of them, or one farm)
"""

import json
import logging
from datetime import datetime, timezone

from app.models import (
    SensorSessionParams,
    SensorReadingsWithInterpretation,
    SuccessMessage,
)
from app.services.advice_normalizer import parse_advice_to_object
from app.services.soil_ai_team_service import SoilSensorTeam
from app.services.soil_analysis_store import SoilAnalysisStore
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


class SoilAnalysisError(Exception):
    """Running or saving a soil analysis failed."""


class SoilAnalysisService:
    """
    Runs soil analyses and serves the saved ones.
    """

    def __init__(
        self,
        token_service: TokenService,
        soil_team: SoilSensorTeam,
        store: SoilAnalysisStore,
        strict_advice_json: bool = False
    ):
        """
        Args:
            token_service: Verifies access tokens
            soil_team: Client for the soil sensor AI team
            store: Where analyses are saved
            strict_advice_json: Only trust AI output that is a JSON object
        """
        self.token_service = token_service
        self.soil_team = soil_team
        self.store = store
        self.strict_advice_json = strict_advice_json

    async def analyze_from_api(self, token: str, params: SensorSessionParams) -> SuccessMessage:
        """
        Analyze one set of readings and save the result.

        Raises:
            TokenError: If the access token is not valid
            SoilAnalysisError: If the team, the parsing or the save failed
        """
        username = self.token_service.verify_access_token(token)

        try:
            logger.info("🌱 API Request: Analyzing provided sensor data...")
            output = await self.soil_team.start(params)

            if output.status != SoilSensorTeam.FINISHED:
                logger.warning(f"⚠️ Workflow blocked (status {output.status})")
                raise SoilAnalysisError("Workflow blocked during processing.")

            if isinstance(output.result, str):
                result_text = output.result
            else:
                result_text = json.dumps(output.result)
            interpretation = parse_advice_to_object(result_text, strict=self.strict_advice_json)
            logger.info(f"Parsed interpretation: {interpretation.model_dump_json(indent=2)}")

            now = datetime.now(timezone.utc).isoformat()
            record = SensorReadingsWithInterpretation(
                **params.sensor_data.model_dump(),
                interpretation=interpretation,
                submitted_at=now,
                created_at=now
            )
            self.store.save(record, username)
        except Exception as e:
            logger.error(f"❌ Error analyzing sensor data: {e}", exc_info=True)
            raise SoilAnalysisError("Failed to process sensor analysis.") from e

        logger.info("✅ Analysis complete.")
        return SuccessMessage(success="Soil Analysis successful")

    def get_soil_analysis_data(self, token: str) -> list[SensorReadingsWithInterpretation]:
        """All saved analyses for the token's user."""
        username = self.token_service.verify_access_token(token)
        return self.store.get_all(username)

    def get_soil_analysis_data_by_farm(
        self,
        token: str,
        farm_name: str
    ) -> list[SensorReadingsWithInterpretation]:
        """Saved analyses for one of the user's farms."""
        username = self.token_service.verify_access_token(token)
        return self.store.get_by_farm(username, farm_name)

