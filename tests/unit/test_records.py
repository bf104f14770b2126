"""
Unit Tests for Patient Chart Sources and Record Conversion
"""
import pytest

from chairside.core.clinical import Allergen, Medication, MedicalCondition, Procedure
from chairside.core.records import InMemoryChartSource, PatientChart, demo_charts
from chairside.utils.exceptions import InvalidRecordError, PatientNotFoundError


class TestFromRecord:
    """Tests for entity construction from upstream rows."""

    def test_allergy_row(self):
        allergen = Allergen.from_record({"allergen": "Penicillin", "severity": "high"})
        assert allergen == Allergen("Penicillin", "high")

    def test_medication_row(self):
        med = Medication.from_record({"medication_name": "Warfarin", "status": "active", "notes": "Daily"})
        assert med.name == "Warfarin"
        assert med.notes == "Daily"

    def test_condition_row(self):
        assert MedicalCondition.from_record({"condition_name": "Asthma"}).status is None

    def test_name_fallback(self):
        assert Medication.from_record({"name": "Atenolol"}).name == "Atenolol"

    def test_missing_key(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            MedicalCondition.from_record({"status": "active"})
        assert exc_info.value.to_dict()["details"]["record_kind"] == "condition"

    def test_non_string_name(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            Allergen.from_record({"allergen": 42})
        assert exc_info.value.details["received_type"] == "int"


class TestProcedureParse:
    """Tests for Procedure.parse()."""

    @pytest.mark.parametrize("code,expected", [
        ("root_canal", Procedure.ROOT_CANAL),
        (" Extraction ", Procedure.EXTRACTION),
        (Procedure.CROWN_PREP, Procedure.CROWN_PREP),
    ])
    def test_known(self, code, expected):
        assert Procedure.parse(code) is expected

    @pytest.mark.parametrize("code", ["veneer", "", None, 3])
    def test_unknown(self, code):
        assert Procedure.parse(code) is None

    def test_labels(self):
        assert Procedure.FILLING.label == "Composite Filling"


class TestInMemoryChartSource:
    """Tests for the in-memory chart source."""

    def test_demo_patients(self):
        source = InMemoryChartSource.with_demo_patients()
        assert source.patient_ids() == ["patient_001", "patient_002", "patient_003"]

        chart = source.get_chart("patient_002")
        assert chart.display_name == "Sarah Johnson"
        assert [a.name for a in chart.allergies] == ["Penicillin"]
        assert [m.name for m in chart.medications] == ["Warfarin"]
        assert [c.name for c in chart.conditions] == ["Hypertension"]

    def test_unknown_patient(self):
        source = InMemoryChartSource()
        with pytest.raises(PatientNotFoundError) as exc_info:
            source.get_chart("nobody")
        assert exc_info.value.code == "PATIENT_NOT_FOUND"
        assert exc_info.value.status_code == 404

    def test_from_records_builds_tuples(self):
        chart = PatientChart.from_records(
            "p1",
            allergy_rows=[{"allergen": "Lidocaine"}],
        )
        assert isinstance(chart.allergies, tuple)
        assert chart.medications == ()

    def test_demo_chart_evaluates(self, evaluator):
        chart = demo_charts()[0]
        result = evaluator.evaluate(
            "extraction", chart.allergies, chart.medications, chart.conditions
        )
        assert [a.message for a in result.alerts] == [
            "Allergy: Penicillin",
            "Anticoagulant therapy",
            "Cardiovascular condition",
        ]
        assert result.anesthesia.type.startswith("Mepivacaine")
        assert len(result.risks) == 3
