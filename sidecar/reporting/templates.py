"""The three report templates. Each one orders the shared section providers."""

from __future__ import annotations

from datetime import datetime

from extraction.medical_info import MedicalInfo
from knowledge import MedicalKnowledgeBase
from reporting import sections as s
from reporting.options import GenerationOptions


def _bullets(items: list[str], fallback: str) -> list[str]:
    if not items:
        return [f"• {fallback}"]
    return [f"• {item}" for item in items]


def render_soap(
    info: MedicalInfo,
    options: GenerationOptions,
    kb: MedicalKnowledgeBase,
    generated_at: datetime,
) -> str:
    lines = s.report_header("CLINICAL HISTORY - SOAP FORMAT", options, generated_at)
    lines.append("Source: AI-Generated from Medical Documentation")
    lines += [s.RULE, ""]

    lines += ["SUBJECTIVE:", ""]
    lines.append(f"Chief Complaint: {s.capitalize_first(info.chief_complaint)}")
    lines.append("")
    lines.append("History of Present Illness:")
    lines.append(s.history_of_present_illness(info))
    lines.append("")
    lines.append("Past Medical History:")
    lines += _bullets(s.past_medical_history_lines(info, options, kb), s.NO_PAST_HISTORY)
    lines.append("")
    lines.append("Medications:")
    lines += _bullets(s.medication_lines(info, options), s.NO_MEDICATIONS)
    lines.append("")
    lines.append(f"Allergies: {s.allergies_text(info)}")
    lines.append("")
    lines.append(f"Social History: {s.social_history_text(info)}")
    lines.append("")
    lines.append(f"Family History: {s.family_history_text(info)}")
    lines.append("")
    lines.append("Review of Systems:")
    lines.append(s.review_of_systems_text(info))
    lines.append("")

    lines += ["OBJECTIVE:", ""]
    lines.append(f"Vital Signs: {s.vitals_text(info.vitals)}")
    lines.append("")
    lines.append("Physical Examination:")
    lines.append(s.physical_exam_text(info))
    lines.append("")
    lines.append(f"Laboratory Results: {s.labs_text(info.labs)}")
    lines.append("")
    lines.append(f"Imaging Studies: {s.imaging_text(info.imaging)}")
    lines.append("")

    lines += ["ASSESSMENT:", ""]
    lines.append(s.assessment_text(info, options, kb))
    lines.append("")

    lines += ["PLAN:", ""]
    lines.append(s.plan_text(info))
    lines.append("")

    lines.append(s.DISCLAIMER)
    return "\n".join(lines)


def render_narrative(
    info: MedicalInfo,
    options: GenerationOptions,
    kb: MedicalKnowledgeBase,
    generated_at: datetime,
) -> str:
    lines = s.report_header("CLINICAL HISTORY - NARRATIVE FORMAT", options, generated_at)
    lines += [s.RULE, ""]

    lines += ["PATIENT PRESENTATION:", ""]
    presentation = [s.patient_introduction(info)]
    presentation.append(
        f"The patient presents with {info.chief_complaint} that has been present for {s.time_frame(info)}."
    )
    if s.associated_symptoms(info):
        presentation.append(
            f"Associated symptoms include {s.join_series(s.associated_symptoms(info))}."
        )
    context = s.clinical_context_text(info, options)
    if context:
        presentation.append(f"Clinical context: {context}.")
    lines.append(" ".join(presentation))
    lines.append("")

    lines += ["MEDICAL BACKGROUND:", ""]
    if info.conditions:
        coded = [s.with_code(c, options, kb) for c in info.conditions]
        lines.append(f"Documented medical conditions include {s.join_series(coded)}.")
    else:
        lines.append("No significant past medical history documented.")
    lines.append(f"Allergies: {s.allergies_text(info)}.")
    lines.append(f"Social history: {s.social_history_text(info)}.")
    lines.append(f"Family history: {s.family_history_text(info)}.")
    lines.append("")

    lines += ["CURRENT CLINICAL STATUS:", ""]
    lines.append(f"Vital signs: {s.vitals_text(info.vitals)}.")
    lines.append(f"Physical examination: {s.physical_exam_text(info)}")
    studies = s.diagnostic_study_lines(info)
    if studies:
        lines.append("Diagnostic studies: " + "; ".join(studies) + ".")
    else:
        lines.append(f"Diagnostic studies: {s.NO_LABS}.")
    lines.append("")

    lines += ["CURRENT THERAPEUTIC REGIMEN:", ""]
    medications = s.medication_lines(info, options)
    if medications:
        lines.append(f"The patient is currently receiving {s.join_series(medications)}.")
    else:
        lines.append(f"{s.NO_MEDICATIONS}.")
    lines.append("")

    lines += ["CLINICAL ASSESSMENT AND MANAGEMENT APPROACH:", ""]
    lines.append(s.assessment_text(info, options, kb))
    lines.append("")

    lines += ["RECOMMENDED FOLLOW-UP AND MONITORING:", ""]
    lines.append(s.plan_text(info))
    lines.append("")

    lines += ["CLINICAL CONSIDERATIONS:", ""]
    lines.append(s.clinical_considerations(info, options))
    lines.append("")

    lines.append(s.DISCLAIMER)
    return "\n".join(lines)


def render_structured(
    info: MedicalInfo,
    options: GenerationOptions,
    kb: MedicalKnowledgeBase,
    generated_at: datetime,
) -> str:
    lines = s.report_header("STRUCTURED CLINICAL HISTORY", options, generated_at)
    lines += [s.RULE, ""]

    def section(number: int, title: str, body: list[str]) -> None:
        lines.append(f"{number}. {title}:")
        lines.extend(f"   {line}" if line else "" for line in body)
        lines.append("")

    section(1, "PATIENT DEMOGRAPHICS", [s.demographics_text(info)])
    section(2, "CHIEF COMPLAINT", [s.capitalize_first(info.chief_complaint)])
    section(3, "HISTORY OF PRESENT ILLNESS", s.structured_hpi_lines(info))
    section(4, "PAST MEDICAL HISTORY",
            s.numbered(s.past_medical_history_lines(info, options, kb)) or [s.NO_PAST_HISTORY])
    section(5, "MEDICATIONS", s.numbered(s.medication_lines(info, options)) or [s.NO_MEDICATIONS])
    section(6, "ALLERGIES", [s.allergies_text(info)])
    section(7, "SOCIAL HISTORY", [s.social_history_text(info)])
    section(8, "FAMILY HISTORY", [s.family_history_text(info)])
    section(9, "REVIEW OF SYSTEMS", s.review_of_systems_text(info).split("\n"))
    section(10, "PHYSICAL EXAMINATION", [
        f"Vital Signs: {s.vitals_text(info.vitals)}",
        *s.physical_exam_text(info).split("\n"),
    ])
    section(11, "DIAGNOSTIC STUDIES", [
        f"Laboratory: {s.labs_text(info.labs)}",
        f"Imaging: {s.imaging_text(info.imaging)}",
        f"Procedures: {', '.join(info.procedures) or 'None documented'}",
    ])
    section(12, "ASSESSMENT", s.assessment_text(info, options, kb).split("\n"))
    section(13, "PLAN", s.plan_text(info).split("\n"))
    section(14, "CLINICAL CONSIDERATIONS", [s.clinical_considerations(info, options)])

    lines.append(s.DISCLAIMER)
    return "\n".join(lines)
