"""Section providers shared by the SOAP, narrative and structured templates.

Every provider returns display text and falls back to a fixed sentence when
the backing data is missing, so a report built from an empty record still has
every section.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from extraction.medical_info import ON_MEDICATIONS, MedicalInfo
from knowledge import MedicalKnowledgeBase
from reporting.options import GenerationOptions

RULE = "=" * 68

DISCLAIMER = "\n".join([
    RULE,
    "Generated by Clinical History AI Agent",
    "Note: This is an AI-generated summary. Please verify all clinical information",
    "and correlate with direct patient assessment before making medical decisions.",
    RULE,
])

NO_MEDICATIONS = "No medications documented or medication reconciliation needed"
NO_PAST_HISTORY = "No significant past medical history documented"
NO_ALLERGIES = "No allergies documented; verify during clinical encounter"
NO_SOCIAL_HISTORY = "To be obtained during clinical encounter"
NO_FAMILY_HISTORY = "Non-contributory or to be obtained"
NO_VITALS = "Vital signs to be obtained during clinical encounter"
NO_LABS = "Laboratory studies to be obtained as clinically indicated"
NO_IMAGING = "Imaging studies to be obtained as clinically indicated"
NO_DEMOGRAPHICS = "Demographics to be obtained"
ROS_PENDING = "Complete review of systems to be obtained during clinical encounter."
EXAM_PENDING = "Complete physical examination to be performed during clinical encounter."
UNKNOWN_DURATION = "an undetermined duration"
_LEADING_FOR = re.compile(r"^for\s+", re.IGNORECASE)

_VITAL_FORMATS = (
    ("blood_pressure", "BP: {} mmHg"),
    ("heart_rate", "HR: {} bpm"),
    ("temperature", "Temp: {}°F"),
    ("respiratory_rate", "RR: {}/min"),
    ("oxygen_saturation", "O2 Sat: {}"),
)


def capitalize_first(value: Optional[str]) -> str:
    if not value:
        return ""
    return value[0].upper() + value[1:]


def numbered(items: list[str], indent: str = "", capitalize: bool = False) -> list[str]:
    return [
        f"{indent}{i}. {capitalize_first(item) if capitalize else item}"
        for i, item in enumerate(items, 1)
    ]


def long_timestamp(moment: datetime) -> str:
    """E.g. 'October 18th 2026, 3:46:12 pm'."""
    day = moment.day
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    hour = moment.hour % 12 or 12
    meridiem = "am" if moment.hour < 12 else "pm"
    return (
        f"{moment:%B} {day}{suffix} {moment.year}, "
        f"{hour}:{moment:%M}:{moment:%S} {meridiem}"
    )


def report_header(title: str, options: GenerationOptions, generated_at: datetime) -> list[str]:
    return [
        title,
        f"Generated: {long_timestamp(generated_at)}",
        f"Detail Level: {options.detail_level or 'standard'}",
    ]


# --- Diagnostic codes ---

def code_annotation(term: str, options: GenerationOptions, kb: MedicalKnowledgeBase) -> str:
    """'(I10)' next to a term when codes are requested, otherwise ''."""
    if not options.include_icd10:
        return ""
    return f"({kb.code_for(term)})"


def with_code(term: str, options: GenerationOptions, kb: MedicalKnowledgeBase) -> str:
    annotation = code_annotation(term, options, kb)
    label = capitalize_first(term)
    return f"{label} {annotation}" if annotation else label


# --- Complaint and history ---

def time_frame(info: MedicalInfo) -> str:
    if info.timeline:
        # "for 2 days" -> "2 days"
        return _LEADING_FOR.sub("", info.timeline[0])
    return UNKNOWN_DURATION


def complaint_location(info: MedicalInfo) -> str:
    complaint = info.chief_complaint.lower()
    for keyword, location in (("chest", "chest"), ("abdominal", "abdomen"), ("head", "head"), ("back", "back")):
        if keyword in complaint:
            return location
    return "to be determined"


def complaint_character(info: MedicalInfo) -> str:
    if "pain" in info.chief_complaint.lower():
        return "character to be described (sharp, dull, aching, burning, etc.)"
    return "quality to be characterized during assessment"


def severity_quality(info: MedicalInfo) -> str:
    if "pain" in info.chief_complaint.lower():
        return "Pain severity and quality to be assessed using appropriate pain scales."
    return "Symptom severity and characteristics to be evaluated during clinical assessment."


def associated_symptoms(info: MedicalInfo) -> list[str]:
    return info.symptoms[1:]


def history_of_present_illness(info: MedicalInfo) -> str:
    elements = [f"Patient reports {info.chief_complaint} that has been present for {time_frame(info)}."]
    if associated_symptoms(info):
        elements.append(f"Associated symptoms include {', '.join(associated_symptoms(info))}.")
    elements.append(severity_quality(info))
    elements.append("Precipitating and alleviating factors to be determined during clinical assessment.")
    if info.timeline:
        elements.append(f"Timeline: {', '.join(info.timeline)}.")
    return " ".join(elements)


def structured_hpi_lines(info: MedicalInfo) -> list[str]:
    return [
        f"Onset: {time_frame(info)}",
        f"Location: {complaint_location(info)}",
        f"Duration: {time_frame(info)}",
        f"Character: {complaint_character(info)}",
        f"Associated symptoms: {', '.join(associated_symptoms(info)) or 'None specifically noted'}",
        "Timing: timing pattern to be established during clinical interview",
        "Exacerbating factors: To be determined",
        "Relieving factors: To be determined",
        "Severity: To be assessed (1-10 scale)",
    ]


def past_medical_history_lines(
    info: MedicalInfo, options: GenerationOptions, kb: MedicalKnowledgeBase,
) -> list[str]:
    return [with_code(condition, options, kb) for condition in info.conditions]


def medication_lines(info: MedicalInfo, options: GenerationOptions) -> list[str]:
    """Medications to display; empty when gated off or none were found."""
    if not options.include_medications:
        return []
    return [capitalize_first(med) for med in info.medications]


def allergies_text(info: MedicalInfo) -> str:
    return info.allergies or NO_ALLERGIES


def social_history_text(info: MedicalInfo) -> str:
    return info.social_history or NO_SOCIAL_HISTORY


def family_history_text(info: MedicalInfo) -> str:
    if info.family_history:
        return "; ".join(info.family_history)
    return NO_FAMILY_HISTORY


def review_of_systems_text(info: MedicalInfo) -> str:
    if info.review_of_systems:
        return "; ".join(info.review_of_systems) + "\n" + ROS_PENDING
    return ROS_PENDING


def physical_exam_text(info: MedicalInfo) -> str:
    if info.physical_exam:
        return "; ".join(info.physical_exam) + "\n" + EXAM_PENDING
    return EXAM_PENDING


def demographics_text(info: MedicalInfo) -> str:
    demographics = info.demographics
    parts = []
    if demographics.age is not None:
        parts.append(f"Age: {demographics.age} years old")
    if demographics.gender:
        parts.append(f"Gender: {capitalize_first(demographics.gender)}")
    if demographics.race:
        parts.append(f"Race: {capitalize_first(demographics.race)}")
    return ", ".join(parts) or NO_DEMOGRAPHICS


# --- Objective data ---

def vitals_text(vitals: Optional[dict[str, str]]) -> str:
    if not vitals:
        return NO_VITALS
    parts = [fmt.format(vitals[key]) for key, fmt in _VITAL_FORMATS if vitals.get(key)]
    return ", ".join(parts) or "Stable, within normal limits"


def labs_text(labs: Optional[dict[str, str]]) -> str:
    if not labs:
        return NO_LABS
    return ", ".join(f"{name}: {value}" for name, value in labs.items())


def imaging_text(imaging: Optional[list[str]]) -> str:
    if not imaging:
        return NO_IMAGING
    return "; ".join(imaging)


def diagnostic_study_lines(info: MedicalInfo) -> list[str]:
    studies = []
    if info.labs:
        studies.append(f"Laboratory: {labs_text(info.labs)}")
    if info.imaging:
        studies.append(f"Imaging: {imaging_text(info.imaging)}")
    if info.procedures:
        studies.append(f"Procedures: {', '.join(info.procedures)}")
    return studies


# --- Assessment and plan ---

def assessment_text(info: MedicalInfo, options: GenerationOptions, kb: MedicalKnowledgeBase) -> str:
    lines = ["PRIMARY DIAGNOSES:"]
    if info.conditions:
        lines.extend(numbered(past_medical_history_lines(info, options, kb)))
    else:
        lines.append("1. Working diagnosis pending comprehensive clinical evaluation")

    if info.symptoms:
        lines.append("")
        lines.append("SYMPTOMS FOR EVALUATION:")
        lines.extend(numbered([with_code(s, options, kb) for s in info.symptoms]))

    if info.differential_diagnosis:
        lines.append("")
        lines.append("DIFFERENTIAL DIAGNOSIS:")
        lines.extend(numbered(info.differential_diagnosis, capitalize=True))

    return "\n".join(lines)


def plan_text(info: MedicalInfo) -> str:
    plan = info.assessment_plan
    lines: list[str] = []

    if plan.diagnostic:
        lines.append("DIAGNOSTIC:")
        lines.extend(numbered(plan.diagnostic))
        lines.append("")

    lines.append("THERAPEUTIC:")
    lines.extend(numbered(plan.therapeutic or [
        "Continue current medications as prescribed with regular monitoring",
        "Lifestyle modifications as appropriate",
    ]))
    lines.append("")

    lines.append("MONITORING:")
    lines.extend(numbered(plan.monitoring or [
        "Regular clinical assessment and vital signs monitoring",
        "Laboratory studies as clinically indicated",
    ]))
    lines.append("")

    lines.append("FOLLOW-UP:")
    lines.extend(numbered(plan.follow_up or [
        "Clinical reassessment in 1-2 weeks or sooner if symptoms worsen",
        "Patient education provided regarding condition management",
        "Return precautions discussed",
    ], capitalize=True))

    return "\n".join(lines)


# --- Narrative phrasing ---

def join_series(items: list[str]) -> str:
    """'a', 'a and b', 'a, b, and c'."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def patient_introduction(info: MedicalInfo) -> str:
    age = info.demographics.age
    gender = info.demographics.gender
    if age is not None and gender:
        who = f"a {age}-year-old {gender}"
    elif age is not None:
        who = f"a {age}-year-old individual"
    elif gender:
        who = f"a {gender} patient"
    else:
        who = "an individual"

    if info.conditions:
        return f"This patient is {who} with a medical history significant for {', '.join(info.conditions)}."
    return f"This patient is {who} with no significant documented past medical history."


def clinical_context_text(info: MedicalInfo, options: GenerationOptions) -> str:
    """Reasoner context without the medication clause when medications are hidden."""
    if options.include_medications:
        return info.clinical_context
    clauses = info.clinical_context.split(" with ")
    return " with ".join(c for c in clauses if c and c != ON_MEDICATIONS)


def clinical_considerations(info: MedicalInfo, options: GenerationOptions) -> str:
    considerations = []
    if len(info.conditions) > 2:
        considerations.append("Multi-morbidity considerations require coordinated care approach.")
    if options.include_medications and len(info.medications) > 5:
        considerations.append("Polypharmacy assessment needed for drug interactions and optimization.")
    if info.demographics.age is not None and info.demographics.age > 65:
        considerations.append(
            "Geriatric considerations include age-appropriate screening and functional assessment."
        )
    if not considerations:
        considerations.append("Standard clinical considerations apply for comprehensive patient care.")
    return " ".join(considerations)
