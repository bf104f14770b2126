"""
Chairside Clinical Layer: Base Types

Defines the inputs the evaluator reads (allergies, medications, conditions,
procedure) and the outputs it produces (alerts, one anesthesia protocol,
risk notes).  Every type here is an immutable snapshot built fresh per call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from chairside.utils.exceptions import InvalidRecordError


class AlertType(str, Enum):
    """Which part of the chart produced an alert."""
    ALLERGY    = "allergy"
    MEDICATION = "medication"
    CONDITION  = "condition"
    ANESTHESIA = "anesthesia"
    RISK       = "risk"


class AlertSeverity(str, Enum):
    """
    Ranking signal for alerts.

    HIGH   – must change the plan (e.g. avoid a drug class)
    MEDIUM – plan proceeds with extra precautions
    LOW    – be prepared; no change expected
    """
    LOW    = "low"
    MEDIUM = "medium"
    HIGH   = "high"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    AlertSeverity.HIGH:   0,
    AlertSeverity.MEDIUM: 1,
    AlertSeverity.LOW:    2,
}


class Procedure(str, Enum):
    """Procedures the chairside assistant knows about."""
    ROOT_CANAL = "root_canal"
    EXTRACTION = "extraction"
    FILLING    = "filling"
    CROWN_PREP = "crown_prep"

    @property
    def label(self) -> str:
        return _PROCEDURE_LABELS[self]

    @classmethod
    def parse(cls, code: Any) -> Optional["Procedure"]:
        """Return the matching member, or None for anything unrecognised."""
        if isinstance(code, cls):
            return code
        if not isinstance(code, str):
            return None
        try:
            return cls(code.strip().lower())
        except ValueError:
            return None


_PROCEDURE_LABELS = {
    Procedure.ROOT_CANAL: "Root Canal Therapy",
    Procedure.EXTRACTION: "Tooth Extraction",
    Procedure.FILLING:    "Composite Filling",
    Procedure.CROWN_PREP: "Crown Preparation",
}


# ── Inputs ───────────────────────────────────────────────────────────────────

def _required_name(record: Mapping[str, Any], key: str, kind: str) -> str:
    value = record.get(key, record.get("name"))
    if value is None:
        raise InvalidRecordError(f"{kind} record is missing '{key}'", kind=kind, field=key)
    if not isinstance(value, str):
        raise InvalidRecordError(
            f"{kind} record field '{key}' must be a string",
            kind=kind,
            field=key,
            details={"received_type": type(value).__name__},
        )
    return value


@dataclass(frozen=True)
class Allergen:
    """A documented allergy.  Only ``name`` takes part in matching."""
    name: str
    severity: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Allergen":
        return cls(
            name=_required_name(record, "allergen", "allergy"),
            severity=record.get("severity"),
        )


@dataclass(frozen=True)
class Medication:
    """An active or historical medication.  Status and notes pass through."""
    name: str
    status: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Medication":
        return cls(
            name=_required_name(record, "medication_name", "medication"),
            status=record.get("status"),
            notes=record.get("notes"),
        )


@dataclass(frozen=True)
class MedicalCondition:
    """A charted medical condition."""
    name: str
    status: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "MedicalCondition":
        return cls(
            name=_required_name(record, "condition_name", "condition"),
            status=record.get("status"),
        )


# ── Outputs ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Alert:
    """One safety alert shown to the clinician before the procedure."""
    type: AlertType
    severity: AlertSeverity
    message: str
    recommendation: str

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class AnesthesiaRecommendation:
    """
    The single anesthetic protocol recommended for this visit.

    Precautions and contraindications are tuples; a recommendation is never
    edited in place.
    """
    type: str
    dosage: str
    route: str
    precautions: Tuple[str, ...] = field(default_factory=tuple)
    contraindications: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "dosage": self.dosage,
            "route": self.route,
            "precautions": list(self.precautions),
            "contraindications": list(self.contraindications),
        }


@dataclass(frozen=True)
class EvaluationResult:
    """
    Outcome of one chart evaluation.

    Unpacks as ``alerts, anesthesia, risks``; ``applied_overrides`` records
    which anesthesia override steps fired, in the order they were applied.
    """
    alerts: List[Alert]
    anesthesia: AnesthesiaRecommendation
    risks: List[str]
    applied_overrides: Tuple[str, ...] = ()

    def _triple(self) -> tuple:
        return (self.alerts, self.anesthesia, self.risks)

    # Behaves as the public triple; the audit trail is read by name
    def __iter__(self) -> Iterator:
        return iter(self._triple())

    def __len__(self) -> int:
        return 3

    def __getitem__(self, index):
        return self._triple()[index]

    def to_dict(self) -> dict:
        return {
            "alerts": [a.to_dict() for a in self.alerts],
            "anesthesia": self.anesthesia.to_dict(),
            "risks": list(self.risks),
            "applied_overrides": list(self.applied_overrides),
        }
