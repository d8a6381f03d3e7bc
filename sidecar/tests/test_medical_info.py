"""Tests for the dictionary/regex MedicalInfo extractor."""

import pytest

from extraction.medical_info import (
    DEFAULT_CHIEF_COMPLAINT,
    NKDA,
    MedicalInfo,
    MedicalInfoExtractor,
)
from extraction.normalizer import normalize_text


@pytest.fixture
def extractor():
    return MedicalInfoExtractor()


def _extract(extractor: MedicalInfoExtractor, text: str) -> MedicalInfo:
    return extractor.extract(normalize_text(text))


# --- Chief complaint ---

class TestChiefComplaint:
    def test_labeled(self, extractor):
        info = _extract(extractor, "Chief Complaint: shortness of breath. HPI follows.")
        assert info.chief_complaint == "shortness of breath"

    def test_cc_label(self, extractor):
        assert _extract(extractor, "CC: headache x 3 days.").chief_complaint == "headache x 3 days"

    def test_patient_presents_with(self, extractor):
        info = _extract(extractor, "Patient presents with severe cough. Otherwise well.")
        assert info.chief_complaint == "severe cough"

    def test_falls_back_to_first_dictionary_symptom(self, extractor):
        # "cough" precedes "fever" in the symptom dictionary
        assert _extract(extractor, "Has fever and cough.").chief_complaint == "cough"

    def test_default_placeholder(self, extractor):
        assert _extract(extractor, "Routine visit.").chief_complaint == DEFAULT_CHIEF_COMPLAINT


# --- Dictionary scans ---

class TestDictionaryTerms:
    def test_symptoms_in_dictionary_order_and_deduplicated(self, extractor):
        info = _extract(extractor, "Nausea and chest pain. Chest pain again. Some nausea.")
        assert info.symptoms == ["chest pain", "nausea"]

    def test_conditions(self, extractor):
        info = _extract(extractor, "PMH: Asthma, hypertension and GOUT.")
        assert info.conditions == ["hypertension", "asthma", "gout"]

    def test_procedures(self, extractor):
        info = _extract(extractor, "Colonoscopy last year; lipid panel pending.")
        assert info.procedures == ["colonoscopy", "lipid panel"]

    def test_medications_with_dosage(self, extractor):
        info = _extract(extractor, "Takes metformin 500 mg and lisinopril 10mg daily. Also aspirin.")
        assert info.medications == ["lisinopril 10mg", "metformin 500 mg", "aspirin"]

    def test_word_boundaries(self, extractor):
        assert _extract(extractor, "Goutiness is not a word.").conditions == []


# --- Objective data ---

class TestVitals:
    def test_all_vitals(self, extractor):
        info = _extract(extractor, "BP 120/80, HR 72, Temp 98.6, RR 16, SpO2 98%")
        assert info.vitals == {
            "blood_pressure": "120/80",
            "heart_rate": "72",
            "temperature": "98.6",
            "respiratory_rate": "16",
            "oxygen_saturation": "98%",
        }

    def test_blood_pressure_only(self, extractor):
        assert _extract(extractor, "Blood pressure: 150 / 90.").vitals == {"blood_pressure": "150/90"}

    def test_no_vitals(self, extractor):
        assert _extract(extractor, "Feels fine.").vitals is None


class TestLabs:
    def test_labs_in_display_order(self, extractor):
        info = _extract(
            extractor,
            "Platelets 250, WBC 7.5, Glucose: 180, Hgb 13.5, Creatinine 1.2, Na 138, K 4.1",
        )
        assert info.labs == {
            "glucose": "180",
            "hemoglobin": "13.5",
            "creatinine": "1.2",
            "sodium": "138",
            "potassium": "4.1",
            "wbc": "7.5",
            "platelets": "250",
        }
        assert list(info.labs) == [
            "glucose", "hemoglobin", "creatinine", "sodium", "potassium", "wbc", "platelets",
        ]

    def test_no_labs(self, extractor):
        assert _extract(extractor, "No bloodwork today.").labs is None


class TestImaging:
    def test_captures(self, extractor):
        info = _extract(extractor, "Chest X-ray: no acute findings. CT scan: negative for PE.")
        assert info.imaging == ["no acute findings", "negative for PE"]

    def test_none(self, extractor):
        assert _extract(extractor, "Nothing ordered.").imaging is None


# --- Histories ---

class TestAllergies:
    def test_labeled(self, extractor):
        assert _extract(extractor, "Allergies: penicillin (rash).").allergies == "penicillin (rash)"

    @pytest.mark.parametrize("text", ["NKDA.", "No known drug allergies."])
    def test_nkda(self, extractor, text):
        assert _extract(extractor, text).allergies == NKDA

    def test_none(self, extractor):
        assert _extract(extractor, "Cough.").allergies is None


class TestHistories:
    def test_social_history_joined(self, extractor):
        info = _extract(extractor, "Social history: former smoker. Alcohol: occasional.")
        assert info.social_history == "former smoker; occasional"

    def test_family_history_list(self, extractor):
        info = _extract(extractor, "Family history: father with MI. FH: mother diabetic.")
        assert info.family_history == ["father with MI", "mother diabetic"]

    def test_review_of_systems(self, extractor):
        assert _extract(extractor, "ROS: negative for fever.").review_of_systems == ["negative for fever"]

    def test_physical_exam(self, extractor):
        assert _extract(extractor, "Physical exam: lungs clear.").physical_exam == ["lungs clear"]

    def test_short_labels_need_colon(self, extractor):
        info = _extract(extractor, "Pros and cons discussed.")
        assert info.review_of_systems is None


class TestTimeline:
    def test_all_distinct_matches(self, extractor):
        info = _extract(extractor, "Started 3 days ago and has persisted for 2 weeks, for 2 weeks.")
        assert info.timeline == ["3 days ago", "for 2 weeks"]

    def test_none(self, extractor):
        assert _extract(extractor, "Chronic.").timeline is None


# --- Whole record ---

def test_empty_text_gives_empty_record(extractor):
    assert extractor.extract("") == MedicalInfo()


def test_extraction_is_deterministic(extractor):
    text = normalize_text("62-year-old male with hypertension presents with chest pain for 2 days. BP: 150/90.")
    assert extractor.extract(text) == extractor.extract(text)


def test_scenario_record(extractor):
    info = _extract(
        extractor,
        "62-year-old male with hypertension presents with chest pain for 2 days. BP: 150/90.",
    )
    assert info.demographics.age == 62
    assert info.demographics.gender == "male"
    assert info.chief_complaint == "chest pain"
    assert info.symptoms == ["chest pain"]
    assert info.conditions == ["hypertension"]
    assert info.vitals == {"blood_pressure": "150/90"}
    assert info.timeline == ["for 2 days"]
