"""
Patient Chart Sources

The evaluator never queries storage itself.  A PatientChartSource hands it a
read-only PatientChart holding the three sections it reads.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from chairside.core.clinical.base import Allergen, MedicalCondition, Medication
from chairside.utils.exceptions import PatientNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatientChart:
    patient_id: str
    allergies: Tuple[Allergen, ...] = field(default_factory=tuple)
    medications: Tuple[Medication, ...] = field(default_factory=tuple)
    conditions: Tuple[MedicalCondition, ...] = field(default_factory=tuple)
    display_name: Optional[str] = None

    @classmethod
    def from_records(
        cls,
        patient_id: str,
        allergy_rows: Iterable[Mapping[str, Any]] = (),
        medication_rows: Iterable[Mapping[str, Any]] = (),
        condition_rows: Iterable[Mapping[str, Any]] = (),
        display_name: Optional[str] = None,
    ) -> "PatientChart":
        """Build a chart from rows shaped like the allergies / medications /
        medical_conditions tables."""
        return cls(
            patient_id=patient_id,
            allergies=tuple(Allergen.from_record(r) for r in allergy_rows),
            medications=tuple(Medication.from_record(r) for r in medication_rows),
            conditions=tuple(MedicalCondition.from_record(r) for r in condition_rows),
            display_name=display_name,
        )


class PatientChartSource(ABC):
    """Read-only access to patient charts."""

    @abstractmethod
    def get_chart(self, patient_id: str) -> PatientChart:
        """Return the chart, or raise PatientNotFoundError."""

    @abstractmethod
    def patient_ids(self) -> List[str]:
        ...


class InMemoryChartSource(PatientChartSource):
    """Chart source backed by a dict.  Used for demos and tests."""

    def __init__(self, charts: Optional[Iterable[PatientChart]] = None):
        self._charts: Dict[str, PatientChart] = {c.patient_id: c for c in charts or ()}

    def get_chart(self, patient_id: str) -> PatientChart:
        chart = self._charts.get(patient_id)
        if chart is None:
            logger.warning(f"InMemoryChartSource: no chart for patient {patient_id}")
            raise PatientNotFoundError(patient_id)
        return chart

    def patient_ids(self) -> List[str]:
        return sorted(self._charts)

    @classmethod
    def with_demo_patients(cls) -> "InMemoryChartSource":
        return cls(demo_charts())


_DEMO_PATIENTS = (
    ("patient_001", "John Smith"),
    ("patient_002", "Sarah Johnson"),
    ("patient_003", "Mike Davis"),
)


def demo_charts() -> List[PatientChart]:
    """Three demo patients, each charted the same way."""
    return [
        PatientChart.from_records(
            patient_id,
            allergy_rows=[{"allergen": "Penicillin", "severity": "high"}],
            medication_rows=[{"medication_name": "Warfarin", "status": "active", "notes": "Daily"}],
            condition_rows=[{"condition_name": "Hypertension", "status": "active"}],
            display_name=name,
        )
        for patient_id, name in _DEMO_PATIENTS
    ]
