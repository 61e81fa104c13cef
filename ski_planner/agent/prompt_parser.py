"""Best-effort extraction of trip parameters from a free-text prompt."""
import logging
import re
from typing import NamedTuple

logger = logging.getLogger("prompt-parser")

DEFAULT_LOCATION = "general area"
DEFAULT_SKILL_LEVEL = "intermediate"

# Tried in order, first match wins
LOCATION_PATTERNS = [
    re.compile(r"(?:at|in|to|near)\s+([a-zA-Z\s]+?)(?:\s|$|,|\.|for|with)"),
    re.compile(r"([a-zA-Z\s]+?)\s+(?:ski|resort|mountain)", re.IGNORECASE),
    re.compile(r"planning.*?(?:at|in|to|near)\s+([a-zA-Z\s]+)", re.IGNORECASE),
]

BEGINNER_KEYWORDS = ("beginner", "new", "first time")
EXPERT_KEYWORDS = ("expert", "advanced", "professional")


class TripRequest(NamedTuple):
    location: str
    skill_level: str


def extract_location(prompt: str) -> str:
    for pattern in LOCATION_PATTERNS:
        match = pattern.search(prompt)
        if match and match.group(1) and match.group(1).strip():
            return match.group(1).strip()
    return DEFAULT_LOCATION


def extract_skill_level(prompt: str) -> str:
    text_lower = prompt.lower()
    if any(word in text_lower for word in BEGINNER_KEYWORDS):
        return "beginner"
    if any(word in text_lower for word in EXPERT_KEYWORDS):
        return "expert"
    return DEFAULT_SKILL_LEVEL


def parse_prompt(prompt: str) -> TripRequest:
    """
    Extract location and skill level from a prompt such as
    "Plan a ski trip to Aspen for beginners".

    Unrecognised input falls back to DEFAULT_LOCATION and DEFAULT_SKILL_LEVEL;
    this never raises.
    """
    request = TripRequest(
        location=extract_location(prompt),
        skill_level=extract_skill_level(prompt),
    )
    logger.debug(f"Parsed prompt parameters: {request}")
    return request
