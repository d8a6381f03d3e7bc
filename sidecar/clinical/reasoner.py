"""Rule-based enrichment of an extracted MedicalInfo record.

Differential-diagnosis and plan rules are ordered tables of
(predicate, effect). Every rule is evaluated independently, so adding a rule
never changes whether another one fires.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from extraction.medical_info import ON_MEDICATIONS, AssessmentPlan, MedicalInfo

logger = logging.getLogger(__name__)

Predicate = Callable[[MedicalInfo], bool]


def _complaint_mentions(phrase: str) -> Predicate:
    return lambda info: phrase in info.chief_complaint.lower()


def _has_symptom(symptom: str) -> Predicate:
    return lambda info: symptom in info.symptoms


def _has_condition(condition: str) -> Predicate:
    return lambda info: condition in info.conditions


def _has_condition_containing(fragment: str) -> Predicate:
    return lambda info: any(fragment in c for c in info.conditions)


@dataclass(frozen=True)
class DifferentialRule:
    name: str
    applies: Predicate
    differentials: tuple[str, ...]


@dataclass(frozen=True)
class PlanRule:
    name: str
    applies: Predicate
    bucket: str  # AssessmentPlan field name
    items: tuple[str, ...]


DIFFERENTIAL_RULES: tuple[DifferentialRule, ...] = (
    DifferentialRule(
        "chest_pain",
        _complaint_mentions("chest pain"),
        ("acute coronary syndrome", "pulmonary embolism", "costochondritis", "gastroesophageal reflux"),
    ),
    DifferentialRule(
        "shortness_of_breath",
        _complaint_mentions("shortness of breath"),
        ("heart failure", "pulmonary embolism", "pneumonia", "asthma exacerbation"),
    ),
    DifferentialRule(
        "abdominal_pain",
        _complaint_mentions("abdominal pain"),
        ("appendicitis", "cholecystitis", "peptic ulcer disease", "bowel obstruction"),
    ),
    DifferentialRule(
        "diabetes_with_fatigue",
        lambda info: _has_condition_containing("diabetes")(info) and "fatigue" in info.symptoms,
        ("diabetic ketoacidosis", "hypoglycemia"),
    ),
)

PLAN_RULES: tuple[PlanRule, ...] = (
    PlanRule("chest_pain_workup", _has_symptom("chest pain"), "diagnostic",
             ("EKG", "chest X-ray", "cardiac enzymes")),
    PlanRule("dyspnea_workup", _has_symptom("shortness of breath"), "diagnostic",
             ("chest X-ray", "BNP", "arterial blood gas")),
    PlanRule("diabetes_monitoring", _has_condition_containing("diabetes"), "monitoring",
             ("hemoglobin A1c", "glucose monitoring")),
    PlanRule("hypertension_management", _has_condition("hypertension"), "therapeutic",
             ("continue antihypertensive therapy", "lifestyle modifications")),
    PlanRule("default_follow_up", lambda info: True, "follow_up",
             ("return in 1-2 weeks or sooner if symptoms worsen",)),
)


def build_clinical_context(info: MedicalInfo) -> str:
    contexts = []

    age = info.demographics.age
    if age is not None:
        if age < 18:
            contexts.append("pediatric patient")
        elif age > 65:
            contexts.append("elderly patient")

    if info.conditions:
        contexts.append(f"known {', '.join(info.conditions)}")

    if info.medications:
        contexts.append(ON_MEDICATIONS)

    return " with ".join(contexts)


def build_differential_diagnosis(
    info: MedicalInfo, rules: tuple[DifferentialRule, ...] = DIFFERENTIAL_RULES,
) -> list[str]:
    differentials: list[str] = []
    for rule in rules:
        if rule.applies(info):
            differentials.extend(rule.differentials)
    return list(dict.fromkeys(differentials))


def build_assessment_plan(
    info: MedicalInfo, rules: tuple[PlanRule, ...] = PLAN_RULES,
) -> AssessmentPlan:
    plan = AssessmentPlan()
    for rule in rules:
        if not rule.applies(info):
            continue
        bucket: list[str] = getattr(plan, rule.bucket)
        for item in rule.items:
            if item not in bucket:
                bucket.append(item)
    return plan


class ClinicalReasoner:
    """Add context, differentials and a plan skeleton to an extracted record."""

    def __init__(
        self,
        differential_rules: tuple[DifferentialRule, ...] = DIFFERENTIAL_RULES,
        plan_rules: tuple[PlanRule, ...] = PLAN_RULES,
    ) -> None:
        self.differential_rules = differential_rules
        self.plan_rules = plan_rules

    def enrich(self, info: MedicalInfo) -> MedicalInfo:
        info.clinical_context = build_clinical_context(info)
        info.differential_diagnosis = build_differential_diagnosis(info, self.differential_rules)
        info.assessment_plan = build_assessment_plan(info, self.plan_rules)
        logger.debug(
            "Enriched record: %d differentials, %d diagnostic plan items",
            len(info.differential_diagnosis), len(info.assessment_plan.diagnostic),
        )
        return info
