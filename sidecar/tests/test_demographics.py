"""Tests for demographics extraction."""

import pytest

from extraction.demographics import Demographics, extract_demographics
from extraction.normalizer import normalize_text


class TestAge:
    @pytest.mark.parametrize("text,age", [
        ("62-year-old male", 62),
        ("a 45 year old woman", 45),
        ("She is 30 years old", 30),
        ("Age: 71", 71),
        ("age 8", 8),
        ("54 yo M", 54),
        ("54yo", 54),
        ("39 y.o. female", 39),
    ])
    def test_age_forms(self, text, age):
        assert extract_demographics(text).age == age

    def test_first_pattern_wins(self):
        assert extract_demographics("Age: 50. Patient is a 62-year-old").age == 62

    def test_no_age(self):
        assert extract_demographics("Patient with cough").age is None


class TestGender:
    def test_male(self):
        assert extract_demographics("62-year-old male").gender == "male"

    def test_female(self):
        assert extract_demographics("Mrs. Jones is a 45 yo woman").gender == "female"

    def test_male_checked_first(self):
        assert extract_demographics("He and his wife; she reports").gender == "male"

    def test_no_partial_word_match(self):
        assert extract_demographics("history of the chest").gender is None


class TestRace:
    def test_labeled_race(self):
        assert extract_demographics("Race: African American").race == "african american"

    def test_labeled_ethnicity(self):
        assert extract_demographics("Ethnicity: Hispanic").race == "hispanic"

    def test_stops_at_next_label(self):
        text = normalize_text("Race: Hispanic Gender: female. Presents today")
        demographics = extract_demographics(text)
        assert demographics.race == "hispanic"
        assert demographics.gender == "female"

    def test_capped_at_three_words(self):
        assert extract_demographics("Race: White Hispanic Latino Other").race == "white hispanic latino"

    def test_unlabeled_ignored(self):
        assert extract_demographics("Hispanic male").race is None


def test_empty_text():
    assert extract_demographics("") == Demographics()
