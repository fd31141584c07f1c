"""
Models Package
==============

This is where all our data models live.
Import from here instead of the individual files.

Example:
    from app.models import ParsedAdvice, SensorSessionParams
"""

from .soil import (
    # The interpretation record and its JSON form
    ADVICE_KEYS,
    ParsedAdvice,
    AdviceDocument,

    # What the frontend sends us
    SensorReadings,
    SensorSessionParams,
    NormalizeAdviceRequest,

    # What we store and send back
    SensorReadingsWithInterpretation,
    WorkflowOutput,
    SuccessMessage,
)

__all__ = [
    "ADVICE_KEYS",
    "ParsedAdvice",
    "AdviceDocument",
    "SensorReadings",
    "SensorSessionParams",
    "NormalizeAdviceRequest",
    "SensorReadingsWithInterpretation",
    "WorkflowOutput",
    "SuccessMessage",
]
