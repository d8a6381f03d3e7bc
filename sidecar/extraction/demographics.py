"""Extract patient demographics (age, gender, race) from clinical note text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


@dataclass
class Demographics:
    age: Optional[int] = None
    gender: Optional[str] = None
    race: Optional[str] = None


# Age patterns, tried in priority order; first hit wins.
_AGE_PATTERNS = [
    # "62-year-old" or "62 year old" or "62 years old"
    re.compile(r"\b(\d+)[\s-]?years?[\s-]?old\b", re.IGNORECASE),
    # "Age: 62" or "age 62"
    re.compile(r"\bage[:\s]*(\d+)", re.IGNORECASE),
    # "62 yo" or "62yo"
    re.compile(r"\b(\d+)\s*yo\b", re.IGNORECASE),
    # "62 y.o." or "62 y.o"
    re.compile(r"\b(\d+)\s*y\.o\.?", re.IGNORECASE),
]

# Male words are checked first; a match short-circuits the female check.
_MALE_PATTERN = re.compile(r"\b(?:male|man|gentleman|mr\.?|he|his|him)\b", re.IGNORECASE)
_FEMALE_PATTERN = re.compile(r"\b(?:female|woman|lady|ms\.?|mrs\.?|she|her|hers)\b", re.IGNORECASE)

# "Race: Hispanic" or "Ethnicity: African American"; at most three words and
# never the next "label:" on the same line
_RACE_PATTERN = re.compile(
    r"\b(?:race|ethnicity)\s*:\s*"
    r"([A-Za-z][A-Za-z\-]*(?:\s+(?![A-Za-z\-]+\s*:)[A-Za-z][A-Za-z\-]*){0,2})",
    re.IGNORECASE,
)


def _extract_age(text: str) -> Optional[int]:
    for pattern in _AGE_PATTERNS:
        match = pattern.search(text)
        if match:
            return int(match.group(1))
    return None


def _extract_gender(text: str) -> Optional[str]:
    if _MALE_PATTERN.search(text):
        return "male"
    if _FEMALE_PATTERN.search(text):
        return "female"
    return None


def _extract_race(text: str) -> Optional[str]:
    match = _RACE_PATTERN.search(text)
    if match:
        return match.group(1).strip().lower()
    return None


def extract_demographics(text: str) -> Demographics:
    """Extract age, gender and race from clinical note text."""
    if not text:
        return Demographics()

    return Demographics(
        age=_extract_age(text),
        gender=_extract_gender(text),
        race=_extract_race(text),
    )
