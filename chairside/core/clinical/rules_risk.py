"""
Procedure Risk Notes

Notes are appended independently: one for the procedure (if it has one),
one if any medication alert fired, one if any condition alert fired.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import List, Optional, Sequence

from .base import Alert, AlertType, Procedure

PROCEDURE_RISK_NOTES = MappingProxyType({
    Procedure.ROOT_CANAL: "Complex canal morphology possible—consider CBCT",
    Procedure.EXTRACTION: "Post-op bleeding risk—apply local hemostatics and sutures",
    Procedure.CROWN_PREP: "Soft-tissue management and isolation needed during preparation",
})

MEDICATION_INTERACTION_NOTE = "Medication interactions—review before prescribing or administering"
MEDICAL_COMPROMISE_NOTE = "Medically compromised patient—monitor closely and consult physician if needed"


def derive_risk_notes(
    procedure: Optional[Procedure],
    alerts: Sequence[Alert],
) -> List[str]:
    risks: List[str] = []

    note = PROCEDURE_RISK_NOTES.get(procedure)
    if note:
        risks.append(note)

    fired_types = {a.type for a in alerts}
    if AlertType.MEDICATION in fired_types:
        risks.append(MEDICATION_INTERACTION_NOTE)
    if AlertType.CONDITION in fired_types:
        risks.append(MEDICAL_COMPROMISE_NOTE)

    return risks
