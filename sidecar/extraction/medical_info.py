"""Dictionary- and regex-driven extraction of a structured record from note text.

Each ``_extract_*`` function is independent: it reads only the text it is
given and never a field produced by another extractor. A miss always resolves
to the field's "not found" value (None, an empty list, or a placeholder).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from knowledge import DEFAULT_KNOWLEDGE_BASE, MedicalKnowledgeBase

from .demographics import Demographics, extract_demographics

DEFAULT_CHIEF_COMPLAINT = "General medical evaluation"
NKDA = "NKDA (No Known Drug Allergies)"
ON_MEDICATIONS = "on current medications"

# A labeled capture runs to the next period or line break.
_CAPTURE = r"[:\s]*([^.\n]*)"


def _labeled(label: str) -> re.Pattern[str]:
    return re.compile(label + _CAPTURE, re.IGNORECASE)


@dataclass
class AssessmentPlan:
    diagnostic: list[str] = field(default_factory=list)
    therapeutic: list[str] = field(default_factory=list)
    monitoring: list[str] = field(default_factory=list)
    follow_up: list[str] = field(default_factory=list)


@dataclass
class MedicalInfo:
    """Per-document record. Built by the extractor, then enriched by the reasoner."""

    demographics: Demographics = field(default_factory=Demographics)
    chief_complaint: str = DEFAULT_CHIEF_COMPLAINT
    symptoms: list[str] = field(default_factory=list)
    conditions: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    procedures: list[str] = field(default_factory=list)
    vitals: Optional[dict[str, str]] = None
    labs: Optional[dict[str, str]] = None
    imaging: Optional[list[str]] = None
    allergies: Optional[str] = None
    social_history: Optional[str] = None
    family_history: Optional[list[str]] = None
    review_of_systems: Optional[list[str]] = None
    physical_exam: Optional[list[str]] = None
    timeline: Optional[list[str]] = None

    # Enrichment
    clinical_context: str = ""
    differential_diagnosis: list[str] = field(default_factory=list)
    assessment_plan: AssessmentPlan = field(default_factory=AssessmentPlan)


# --- Chief complaint ---

_CHIEF_COMPLAINT_PATTERNS = [
    _labeled(r"\bchief\s+complaint"),
    _labeled(r"\bpresenting\s+complaint"),
    re.compile(r"\bcc\s*:\s*([^.\n]*)", re.IGNORECASE),
    # "Patient is a 50 yo who presents with ..." / "patient complains of ..."
    re.compile(
        r"\bpatient\b[^.\n]*?\b(?:presents|complains\s+of|reports)\b(?:\s+with\b)?" + _CAPTURE,
        re.IGNORECASE,
    ),
]

# --- Vitals ---

_VITAL_PATTERNS = {
    "heart_rate": re.compile(r"\b(?:heart\s+rate|hr|pulse)[:\s]*(\d+)", re.IGNORECASE),
    "temperature": re.compile(r"\b(?:temperature|temp)[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE),
    "respiratory_rate": re.compile(r"\b(?:respiratory\s+rate|resp|rr)[:\s]*(\d+)", re.IGNORECASE),
}
_BLOOD_PRESSURE = re.compile(r"\b(?:blood\s+pressure|bp)[:\s]*(\d+)\s*/\s*(\d+)", re.IGNORECASE)
_OXYGEN_SATURATION = re.compile(
    r"\b(?:oxygen\s+saturation|spo2|o2\s+sat|o2|oxygen|sat)[:\s]*(\d+)\s*%?", re.IGNORECASE,
)

# --- Labs (insertion order is the display order) ---

_LAB_PATTERNS = {
    "glucose": re.compile(r"\b(?:glucose|blood\s+sugar)[:\s]*(\d+)", re.IGNORECASE),
    "hemoglobin": re.compile(r"\b(?:hemoglobin|hgb|hb)[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE),
    "hematocrit": re.compile(r"\b(?:hematocrit|hct)[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE),
    "creatinine": re.compile(r"\bcreatinine[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE),
    "bun": re.compile(r"\bbun[:\s]*(\d+)", re.IGNORECASE),
    "sodium": re.compile(r"\b(?:sodium|na)[:\s]*(\d+)", re.IGNORECASE),
    "potassium": re.compile(r"\b(?:potassium|k)[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE),
    "chloride": re.compile(r"\b(?:chloride|cl)[:\s]*(\d+)", re.IGNORECASE),
    "co2": re.compile(r"\bco2[:\s]*(\d+)", re.IGNORECASE),
    "wbc": re.compile(r"\b(?:wbc|white\s+blood\s+cell)[:\s]*(\d+(?:\.\d+)?)", re.IGNORECASE),
    "platelets": re.compile(r"\bplatelets[:\s]*(\d+)", re.IGNORECASE),
}

# --- Imaging: chest x-ray, CT, MRI, ultrasound, echo, EKG/ECG ---

_IMAGING_PATTERNS = [
    _labeled(r"\b(?:chest\s+x-ray|cxr)\b"),
    _labeled(r"\b(?:ct\s+scan|computed\s+tomography)\b"),
    _labeled(r"\b(?:mri|magnetic\s+resonance(?:\s+imaging)?)\b"),
    _labeled(r"\b(?:ultrasound|us(?=\s*:))\b"),
    _labeled(r"\b(?:echocardiogram|echo)\b"),
    _labeled(r"\b(?:ekg|ecg|electrocardiogram)\b"),
]

# --- Allergies ---

_NKDA_PATTERN = re.compile(r"\bnkda\b|\bno\s+known\b", re.IGNORECASE)
_ALLERGY_PATTERNS = [
    _labeled(r"\ballergies\b"),
    _labeled(r"\ballergy\b"),
    _labeled(r"\ballergic\s+to\b"),
]

# --- Histories, ROS, exam ---

_SOCIAL_HISTORY_PATTERNS = [
    _labeled(r"\bsocial\s+history\b"),
    re.compile(r"\bsmoking\s*:\s*([^.\n]*)", re.IGNORECASE),
    re.compile(r"\balcohol\s*:\s*([^.\n]*)", re.IGNORECASE),
    re.compile(r"\btobacco\s*:\s*([^.\n]*)", re.IGNORECASE),
]
_FAMILY_HISTORY_PATTERNS = [
    _labeled(r"\bfamily\s+history\b"),
    re.compile(r"\bfh\s*:\s*([^.\n]*)", re.IGNORECASE),
]
_REVIEW_OF_SYSTEMS_PATTERNS = [
    _labeled(r"\breview\s+of\s+systems\b"),
    re.compile(r"\bros\s*:\s*([^.\n]*)", re.IGNORECASE),
    _labeled(r"\bpatient\s+(?:reports|denies|admits\s+to)\b"),
]
_PHYSICAL_EXAM_PATTERNS = [
    _labeled(r"\bphysical\s+exam(?:ination)?\b"),
    _labeled(r"(?<!physical )\bexamination\b"),
    _labeled(r"\bon\s+exam\b"),
    _labeled(r"\bappears\b"),
]

# --- Timeline ---

_UNITS = r"(?:days?|weeks?|months?|years?)"
_TIMELINE_PATTERNS = [
    re.compile(rf"\b\d+\s*{_UNITS}\s*(?:ago|prior)\b", re.IGNORECASE),
    re.compile(rf"\bsince\s*\d+\s*{_UNITS}\b", re.IGNORECASE),
    re.compile(rf"\bfor\s*\d+\s*{_UNITS}\b", re.IGNORECASE),
]

_DOSAGE = r"\s*(\d+(?:\.\d+)?\s*(?:mg|mcg|g|units?))\b"


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _first_capture(patterns: list[re.Pattern[str]], text: str) -> Optional[str]:
    """First non-empty capture across patterns, in pattern order."""
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1) and match.group(1).strip():
            return match.group(1).strip()
    return None


def _all_captures(patterns: list[re.Pattern[str]], text: str) -> list[str]:
    """First non-empty capture of every pattern, deduplicated in pattern order."""
    found = []
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1) and match.group(1).strip():
            found.append(match.group(1).strip())
    return _dedupe(found)


def _scan_terms(patterns, text: str) -> list[str]:
    """Dictionary terms found in text, in dictionary order."""
    return _dedupe([term for term, pattern in patterns if pattern.search(text)])


def _extract_chief_complaint(text: str, kb: MedicalKnowledgeBase) -> str:
    complaint = _first_capture(_CHIEF_COMPLAINT_PATTERNS, text)
    if complaint:
        return complaint

    # Fall back to the first dictionary symptom.
    symptoms = _scan_terms(kb.symptom_patterns, text.lower())
    if symptoms:
        return symptoms[0]

    return DEFAULT_CHIEF_COMPLAINT


def _extract_medications(lower_text: str, kb: MedicalKnowledgeBase) -> list[str]:
    found = []
    for term, pattern in kb.medication_patterns:
        match = pattern.search(lower_text)
        if not match:
            continue
        # Dosage is taken from the first "<name> <number><unit>" anywhere in
        # the text, which can mispair doses on dense medication lists.
        dosage = re.search(pattern.pattern + _DOSAGE, lower_text, re.IGNORECASE)
        if dosage:
            found.append(f"{term} {dosage.group(1)}")
        else:
            found.append(term)
    return _dedupe(found)


def _extract_vitals(text: str) -> Optional[dict[str, str]]:
    vitals: dict[str, str] = {}

    match = _BLOOD_PRESSURE.search(text)
    if match:
        vitals["blood_pressure"] = f"{match.group(1)}/{match.group(2)}"

    for name, pattern in _VITAL_PATTERNS.items():
        match = pattern.search(text)
        if match:
            vitals[name] = match.group(1)

    match = _OXYGEN_SATURATION.search(text)
    if match:
        vitals["oxygen_saturation"] = f"{match.group(1)}%"

    return vitals or None


def _extract_labs(text: str) -> Optional[dict[str, str]]:
    labs = {}
    for name, pattern in _LAB_PATTERNS.items():
        match = pattern.search(text)
        if match:
            labs[name] = match.group(1)
    return labs or None


def _extract_imaging(text: str) -> Optional[list[str]]:
    return _all_captures(_IMAGING_PATTERNS, text) or None


def _extract_allergies(text: str) -> Optional[str]:
    if _NKDA_PATTERN.search(text):
        return NKDA
    return _first_capture(_ALLERGY_PATTERNS, text)


def _extract_social_history(text: str) -> Optional[str]:
    findings = _all_captures(_SOCIAL_HISTORY_PATTERNS, text)
    return "; ".join(findings) if findings else None


def _extract_family_history(text: str) -> Optional[list[str]]:
    return _all_captures(_FAMILY_HISTORY_PATTERNS, text) or None


def _extract_review_of_systems(text: str) -> Optional[list[str]]:
    return _all_captures(_REVIEW_OF_SYSTEMS_PATTERNS, text) or None


def _extract_physical_exam(text: str) -> Optional[list[str]]:
    return _all_captures(_PHYSICAL_EXAM_PATTERNS, text) or None


def _extract_timeline(text: str) -> Optional[list[str]]:
    found = []
    for pattern in _TIMELINE_PATTERNS:
        found.extend(match.group(0).strip() for match in pattern.finditer(text))
    return _dedupe(found) or None


class MedicalInfoExtractor:
    """Populate a MedicalInfo record from normalized note text."""

    def __init__(self, knowledge_base: MedicalKnowledgeBase = DEFAULT_KNOWLEDGE_BASE) -> None:
        self.knowledge_base = knowledge_base

    def extract(self, text: str) -> MedicalInfo:
        text = text or ""
        lower_text = text.lower()
        kb = self.knowledge_base

        return MedicalInfo(
            demographics=extract_demographics(text),
            chief_complaint=_extract_chief_complaint(text, kb),
            symptoms=_scan_terms(kb.symptom_patterns, lower_text),
            conditions=_scan_terms(kb.condition_patterns, lower_text),
            medications=_extract_medications(lower_text, kb),
            procedures=_scan_terms(kb.procedure_patterns, lower_text),
            vitals=_extract_vitals(text),
            labs=_extract_labs(text),
            imaging=_extract_imaging(text),
            allergies=_extract_allergies(text),
            social_history=_extract_social_history(text),
            family_history=_extract_family_history(text),
            review_of_systems=_extract_review_of_systems(text),
            physical_exam=_extract_physical_exam(text),
            timeline=_extract_timeline(text),
        )
