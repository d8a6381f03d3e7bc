"""Tests for the medical vocabulary and diagnostic code lookup."""

import dataclasses

import pytest

from knowledge import (
    CODE_TO_BE_DETERMINED,
    DEFAULT_KNOWLEDGE_BASE,
    MedicalKnowledgeBase,
    compile_term,
)
from knowledge.terms import CONDITION_TERMS, MEDICATION_TERMS, SYMPTOM_TERMS


class TestVocabulary:
    def test_terms_are_lowercase(self):
        for term in SYMPTOM_TERMS + CONDITION_TERMS + MEDICATION_TERMS:
            assert term == term.lower()

    def test_terms_are_unique(self):
        for table in (SYMPTOM_TERMS, CONDITION_TERMS, MEDICATION_TERMS):
            assert len(table) == len(set(table))

    def test_every_symptom_matches_itself(self):
        for term, pattern in DEFAULT_KNOWLEDGE_BASE.symptom_patterns:
            assert pattern.search(f"patient has {term} today"), term

    def test_every_condition_matches_itself(self):
        for term, pattern in DEFAULT_KNOWLEDGE_BASE.condition_patterns:
            assert pattern.search(f"history of {term}."), term


class TestCompileTerm:
    def test_flexible_whitespace(self):
        assert compile_term("chest pain").search("CHEST   pain")

    def test_word_boundaries(self):
        pattern = compile_term("gout")
        assert pattern.search("history of gout")
        assert not pattern.search("goutiness")

    def test_special_characters_escaped(self):
        assert compile_term("chest x-ray").search("chest x-ray normal")


class TestCodeLookup:
    @pytest.mark.parametrize("term,code", [
        ("hypertension", "I10"),
        ("Hypertension", "I10"),
        ("  chest pain ", "R06.02"),
        ("copd", "J44.9"),
        ("chronic obstructive pulmonary disease", "J44.9"),
    ])
    def test_known_terms(self, term, code):
        assert DEFAULT_KNOWLEDGE_BASE.lookup_code(term) == code
        assert DEFAULT_KNOWLEDGE_BASE.code_for(term) == code

    def test_unmapped_term_resolves_to_sentinel(self):
        assert DEFAULT_KNOWLEDGE_BASE.lookup_code("gout") is None
        assert DEFAULT_KNOWLEDGE_BASE.code_for("gout") == CODE_TO_BE_DETERMINED

    def test_empty_term(self):
        assert DEFAULT_KNOWLEDGE_BASE.lookup_code("") is None
        assert DEFAULT_KNOWLEDGE_BASE.code_for("") == CODE_TO_BE_DETERMINED


class TestImmutability:
    def test_fields_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_KNOWLEDGE_BASE.symptom_terms = ()

    def test_codes_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_KNOWLEDGE_BASE.diagnostic_codes["new"] = "X00"

    def test_custom_knowledge_base_lowercases_codes(self):
        kb = MedicalKnowledgeBase(
            symptom_terms=("itch",),
            condition_terms=(),
            medication_terms=(),
            procedure_terms=(),
            specialty_terms=(),
            diagnostic_codes={"Itch": "L29.9"},
        )
        assert kb.code_for("itch") == "L29.9"
        assert kb.symptom_patterns[0][0] == "itch"
