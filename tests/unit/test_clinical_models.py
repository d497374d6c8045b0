"""
Unit tests for the clinical record models.

Tests:
- Intake record immutability, including its history collections
- The documented sample patient
"""

import pytest
from pydantic import ValidationError

from app.models.clinical import Medication, PatientRecord
from app.models.enums import Severity
from app.tools.drug_interactions import check_interactions


class TestPatientRecord:
    """Tests for PatientRecord."""

    def test_fields_cannot_be_reassigned(self, patient):
        with pytest.raises(ValidationError):
            patient.age = 60

    def test_history_collections_cannot_be_mutated(self, patient):
        with pytest.raises(AttributeError):
            patient.current_medications.append(Medication(name="Sildenafil"))
        with pytest.raises(AttributeError):
            patient.allergies.append("Sulfa")
        with pytest.raises(AttributeError):
            patient.conditions.append("Asthma")

        assert len(patient.current_medications) == 3

    def test_lists_are_accepted_on_input(self, patient_payload):
        record = PatientRecord.model_validate(patient_payload)

        assert record.allergies == ("Penicillin",)
        assert record.model_dump(by_alias=True)["conditions"] == (
            "Hypertension",
            "Type 2 Diabetes",
            "Angina",
        )

    def test_bmi(self, patient):
        assert patient.bmi == 30.0


class TestSamplePatient:
    """Tests for the sample patient shown in the API docs."""

    def test_example_validates(self):
        example = PatientRecord.model_json_schema()["example"]

        record = PatientRecord.model_validate(example)

        assert record.id == "12345"
        assert record.primary_complaint == "Erectile Dysfunction"
        assert [m.name for m in record.current_medications] == [
            "Lisinopril",
            "Metformin",
            "Nitroglycerin",
        ]

    def test_example_triggers_nitrate_interaction(self):
        record = PatientRecord.model_validate(PatientRecord.model_json_schema()["example"])

        warnings = check_interactions(record.current_medications, "Sildenafil")

        assert len(warnings) == 1
        assert warnings[0].severity == Severity.HIGH
