"""Immutable medical knowledge base: vocabulary tables plus diagnostic codes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .terms import (
    CONDITION_TERMS,
    DIAGNOSTIC_CODES,
    MEDICATION_TERMS,
    PROCEDURE_TERMS,
    SPECIALTY_TERMS,
    SYMPTOM_TERMS,
)

CODE_TO_BE_DETERMINED = "ICD-10: To be determined"


def compile_term(term: str) -> re.Pattern[str]:
    """Word-boundary pattern for a dictionary term; inner spaces match any whitespace run."""
    parts = [re.escape(word) for word in term.split()]
    return re.compile(r"\b" + r"\s+".join(parts) + r"\b", re.IGNORECASE)


def _compile_all(terms: tuple[str, ...]) -> tuple[tuple[str, re.Pattern[str]], ...]:
    return tuple((term, compile_term(term)) for term in terms)


@dataclass(frozen=True)
class MedicalKnowledgeBase:
    symptom_terms: tuple[str, ...]
    condition_terms: tuple[str, ...]
    medication_terms: tuple[str, ...]
    procedure_terms: tuple[str, ...]
    specialty_terms: tuple[str, ...]
    diagnostic_codes: Mapping[str, str]

    # Compiled once per instance; scanned read-only by every extraction call.
    symptom_patterns: tuple[tuple[str, re.Pattern[str]], ...] = field(init=False, repr=False)
    condition_patterns: tuple[tuple[str, re.Pattern[str]], ...] = field(init=False, repr=False)
    medication_patterns: tuple[tuple[str, re.Pattern[str]], ...] = field(init=False, repr=False)
    procedure_patterns: tuple[tuple[str, re.Pattern[str]], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "diagnostic_codes",
            MappingProxyType({k.lower(): v for k, v in self.diagnostic_codes.items()}),
        )
        object.__setattr__(self, "symptom_patterns", _compile_all(self.symptom_terms))
        object.__setattr__(self, "condition_patterns", _compile_all(self.condition_terms))
        object.__setattr__(self, "medication_patterns", _compile_all(self.medication_terms))
        object.__setattr__(self, "procedure_patterns", _compile_all(self.procedure_terms))

    def lookup_code(self, term: str) -> str | None:
        """Exact, case-normalized lookup. Returns None for unmapped terms."""
        if not term:
            return None
        return self.diagnostic_codes.get(term.strip().lower())

    def code_for(self, term: str) -> str:
        """Diagnostic code for a term, or the to-be-determined sentinel."""
        return self.lookup_code(term) or CODE_TO_BE_DETERMINED


def build_default_knowledge_base() -> MedicalKnowledgeBase:
    return MedicalKnowledgeBase(
        symptom_terms=SYMPTOM_TERMS,
        condition_terms=CONDITION_TERMS,
        medication_terms=MEDICATION_TERMS,
        procedure_terms=PROCEDURE_TERMS,
        specialty_terms=SPECIALTY_TERMS,
        diagnostic_codes=DIAGNOSTIC_CODES,
    )


DEFAULT_KNOWLEDGE_BASE = build_default_knowledge_base()
