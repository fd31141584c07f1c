"""
Soil Advisor - Backend API
==========================
FastAPI application that turns soil sensor readings into AI advice.

ARCHITECTURE:

    [Frontend] --HTTPS + Bearer token--> [This Backend]
                                              |
                         +--------------------+--------------------+
                         v                    v                    v
               [Soil Sensor AI Team]   [weatherapi.com]   [soil_analysis_db.json]

HOW TO RUN:
    # Install dependencies
    pip install -e .

    # Copy environment config
    cp env.example.txt .env
    # Edit .env with your settings

    # Run the server
    uvicorn app.main:app --reload --port 8000 --app-dir backend

API DOCUMENTATION:
    After starting the server, visit:
    - Swagger UI: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.routers import (
    soil_ai_router,
    weather_router,
    set_soil_analysis_service,
    set_weather_service,
)
from app.services import (
    SoilAnalysisService,
    SoilAnalysisStore,
    SoilSensorTeam,
    TokenService,
    WeatherService,
)


# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='[%(asctime)s] %(message)s',
    datefmt='%H:%M:%S',
    handlers=[logging.StreamHandler(sys.stderr)]
)


# =============================================================================
# CONFIGURATION
# =============================================================================

class Config:
    """
    Application configuration loaded from environment variables.

    Environment Variables:
        JWT_SECRET_KEY: Secret the auth server signs access tokens with
        SOIL_AI_TEAM_URL: Where the soil sensor AI team workflow lives
        SOIL_AI_TEAM_TOKEN: Optional bearer token for the AI team
        WEATHER_API_KEY: weatherapi.com key
        WEATHER_API_URL: weatherapi.com base URL
        SOIL_DB_FILE: JSON file where analyses are saved
        ADVICE_STRICT_JSON: "true" to only trust AI output that is a JSON object
        REQUEST_TIMEOUT: Seconds to wait for the AI team (default: 120)
        FRONTEND_URL: URL of the frontend for CORS

    Defaults are set for local development.
    """

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret")

    SOIL_AI_TEAM_URL = os.getenv("SOIL_AI_TEAM_URL", "http://localhost:3001/soil-sensor-team")
    SOIL_AI_TEAM_TOKEN = os.getenv("SOIL_AI_TEAM_TOKEN") or None

    WEATHER_API_KEY = os.getenv("WEATHER_API_KEY", "")
    WEATHER_API_URL = os.getenv("WEATHER_API_URL", "http://api.weatherapi.com/v1")

    # Default: next to the backend/ folder
    SOIL_DB_FILE = os.getenv(
        "SOIL_DB_FILE",
        str(Path(__file__).parent.parent / "soil_analysis_db.json")
    )

    ADVICE_STRICT_JSON = os.getenv("ADVICE_STRICT_JSON", "false").lower() in ("1", "true", "yes")

    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "120"))

    FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Allowed CORS origins
    CORS_ORIGINS = [
        FRONTEND_URL,
        "http://localhost:5173",    # Vite dev server
        "http://localhost:3000",    # Create React App
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]


# =============================================================================
# APPLICATION LIFESPAN
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    STARTUP:
        1. Build the token, AI team, store and weather services
        2. Inject them into the routers
        3. Print startup information

    SHUTDOWN:
        1. Close HTTP clients
    """
    # ========== STARTUP ==========
    print("=" * 60)
    print("🌱 SOIL ADVISOR - Starting Backend")
    print("=" * 60)

    token_service = TokenService(secret_key=Config.JWT_SECRET_KEY)

    soil_team = SoilSensorTeam(
        base_url=Config.SOIL_AI_TEAM_URL,
        api_token=Config.SOIL_AI_TEAM_TOKEN,
        request_timeout=Config.REQUEST_TIMEOUT
    )

    soil_analysis_service = SoilAnalysisService(
        token_service=token_service,
        soil_team=soil_team,
        store=SoilAnalysisStore(Config.SOIL_DB_FILE),
        strict_advice_json=Config.ADVICE_STRICT_JSON
    )

    weather_service = WeatherService(
        api_key=Config.WEATHER_API_KEY,
        token_service=token_service,
        base_url=Config.WEATHER_API_URL
    )

    # Inject into routers
    set_soil_analysis_service(soil_analysis_service)
    set_weather_service(weather_service)

    print(f"✅ Services initialized")
    print(f"   AI team: {Config.SOIL_AI_TEAM_URL}")
    print(f"   Database: {Config.SOIL_DB_FILE}")
    print(f"   Strict advice JSON: {Config.ADVICE_STRICT_JSON}")
    print(f"   CORS origins: {len(Config.CORS_ORIGINS)} configured")
    print()
    print("📖 API Documentation: http://localhost:8000/docs")
    print("=" * 60)

    yield  # Application runs here

    # ========== SHUTDOWN ==========
    print()
    print("🛑 Shutting down...")
    await soil_team.close()
    await weather_service.close()
    print("✅ Shutdown complete")


# =============================================================================
# CREATE FASTAPI APPLICATION
# =============================================================================

app = FastAPI(
    title="Soil Advisor API",
    description="""
## Overview

Backend API that sends soil sensor readings to an AI team and keeps the
advice it writes.

## How It Works

1. **Send readings** - POST them to `/api/save-sensor-readings`
2. **AI team answers** - as JSON or as a numbered 7-line report
3. **We normalize** - into fertility, moisture, pH, temperature, sunlight,
   humidity and an overall evaluation
4. **Read them back** - all of them, or one farm at a time

## Authentication

All `/api` endpoints except `/api/advice/normalize` need
`Authorization: Bearer <access token>`.
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(soil_ai_router)
app.include_router(weather_router)


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

@app.get(
    "/",
    summary="API Information",
    description="Get basic API information and available endpoints."
)
async def root():
    """
    Root endpoint with API overview.

    Returns links to all available endpoints.
    """
    return {
        "name": "Soil Advisor API",
        "version": "1.0.0",
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        },
        "endpoints": {
            "soil_analysis": {
                "analyze": "POST /api/save-sensor-readings",
                "list": "GET /api/get-soil-analysis-data",
                "by_farm": "GET /api/get-soil-analysis-by-farm/{farm_name}"
            },
            "advice": {
                "normalize": "POST /api/advice/normalize"
            },
            "weather": {
                "current": "GET /api/weather/current/{location}"
            }
        }
    }


@app.get(
    "/health",
    summary="Health Check",
    description="Check if the backend is running."
)
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "ai_team": Config.SOIL_AI_TEAM_URL,
        "strict_advice_json": Config.ADVICE_STRICT_JSON
    }
