"""
Soil Sensor AI Team Client
==========================

Talks to the soil sensor AI team, the agent workflow that reads a set of
soil readings and writes advice about them.

THE DATA FLOW:
-------------
    [Soil readings from the frontend]
            |
            | POST {SOIL_AI_TEAM_URL}/start
            v
    [AI team runs its workflow]
            |
            | {"status": "FINISHED", "result": ...}
            v
    [We hand the result to the advice normalizer]

The team answers with a status and a result. Only FINISHED means the
workflow got all the way through. "result" is either text or JSON.
"""

import logging
from typing import Optional

import httpx

from app.models import SensorSessionParams, WorkflowOutput

logger = logging.getLogger(__name__)


class SoilSensorTeam:
    """
    Client for the soil sensor AI team.

    HOW TO USE:
    ----------
    team = SoilSensorTeam(base_url="http://localhost:3001/soil-sensor-team")
    output = await team.start(params)
    if output.status == "FINISHED":
        print(output.result)
    """

    FINISHED = "FINISHED"

    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        request_timeout: float = 120.0
    ):
        """
        Set up the client.

        Args:
            base_url: Where the team workflow lives
            api_token: Optional bearer token for the team service
            request_timeout: Seconds to wait for the workflow to finish.
                            LLM workflows are slow, so this is generous.
        """
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.http_client = httpx.AsyncClient(timeout=request_timeout)

    async def start(self, params: SensorSessionParams) -> WorkflowOutput:
        """
        Run the team on one set of readings and wait for its answer.

        Raises:
            httpx.HTTPStatusError: If the team service answers with an error
            httpx.RequestError: If the team service can't be reached
        """
        readings = params.sensor_data.model_dump(
            by_alias=True,
            exclude_none=True,
            exclude={"id", "username"}
        )
        headers = {}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        logger.info(f"[SoilTeam] Starting workflow for farm '{params.sensor_data.farm_name}'")
        response = await self.http_client.post(
            f"{self.base_url}/start",
            json={"inputs": readings},
            headers=headers
        )
        response.raise_for_status()

        output = WorkflowOutput.model_validate(response.json())
        logger.info(f"[SoilTeam] Workflow ended with status {output.status}")
        return output

    async def close(self):
        await self.http_client.aclose()
