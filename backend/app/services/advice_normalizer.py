"""
Advice Normalizer
=================

Turns whatever the soil sensor AI team answered into a ParsedAdvice.

WHAT THE TEAM SENDS BACK:
------------------------
Usually a JSON object:

    {"Fertility": "High", "Moisture": "Moderate", "pH": "6.5", ...,
     "Evaluation": "Good for tomatoes"}

Sometimes (older prompts) a numbered report, one line per measurement:

    1. Rich
    2. Moderate
    3. 6.8
    4. 25C
    5. Full sun
    6. 60%
    7. Overall Evaluation: Good

HOW WE READ IT:
--------------
1. Try JSON first. If it decodes, take the seven capitalized keys and stop.
2. If it doesn't decode, read the lines by position.

Nothing here raises. Missing or broken input just gives empty strings.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from app.models import AdviceDocument, ParsedAdvice

logger = logging.getLogger(__name__)


# "1. ", "12.", "3.\t" at the start of a line (ASCII digits only)
ENUMERATION_PREFIX = re.compile(r"^[0-9]+\.\s*")

# Label in front of the last line of the numbered report
EVALUATION_LABEL = re.compile(r"^Overall Evaluation:\s*", re.IGNORECASE)

LINE_BREAK = re.compile(r"\r?\n")

# Field filled by each line of the numbered report, in order
LINE_FIELDS = ("fertility", "moisture", "ph", "temperature", "sunlight", "humidity")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant: {name}")


def strip_enumeration(line: str) -> str:
    """Remove a leading "<digits>." marker and surrounding whitespace."""
    return ENUMERATION_PREFIX.sub("", line, count=1).strip()


def parse_advice_lines(raw: str) -> ParsedAdvice:
    """
    Read the numbered 7-line report.

    Lines past the end of the input give empty strings.
    """
    lines = LINE_BREAK.split(raw.strip())

    def line_text(index: int) -> str:
        if index >= len(lines):
            return ""
        return strip_enumeration(lines[index])

    values = {name: line_text(index) for index, name in enumerate(LINE_FIELDS)}
    values["evaluation"] = EVALUATION_LABEL.sub("", line_text(len(LINE_FIELDS)), count=1).strip()
    return ParsedAdvice(**values)


def parse_advice_to_object(raw: str, strict: bool = False) -> ParsedAdvice:
    """
    Normalize raw AI team output into a ParsedAdvice.

    Args:
        raw: JSON text or the numbered line report
        strict: When False (default), any input that decodes as JSON is read
                as JSON, so an array or a bare number gives all-empty fields.
                When True, only a decoded JSON object is trusted and
                everything else goes to the line reader.

    Returns:
        A ParsedAdvice with all seven fields set (possibly empty)
    """
    try:
        decoded = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, TypeError, RecursionError):
        if not isinstance(raw, str):
            return ParsedAdvice()
        logger.debug("Advice is not JSON, reading numbered lines")
        return parse_advice_lines(raw)

    try:
        document = AdviceDocument.model_validate(decoded)
    except RecursionError:
        logger.debug("Advice JSON is nested too deeply, reading numbered lines")
        return parse_advice_lines(raw)
    except ValidationError:
        if strict:
            logger.debug("Advice JSON is %s, not an object; reading numbered lines", type(decoded).__name__)
            return parse_advice_lines(raw)
        return ParsedAdvice()

    return document.to_advice()
