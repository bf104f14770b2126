"""
Clinical Risk Evaluator

Central entry point.  Takes a patient's allergies, medications and
conditions plus the procedure about to be performed, and returns the
alerts, the anesthesia recommendation and the risk notes.

Usage:
    from chairside.core.clinical import ClinicalRiskEvaluator

    evaluator = ClinicalRiskEvaluator()
    alerts, anesthesia, risks = evaluator.evaluate(
        "extraction", allergies, medications, conditions
    )

Pipeline:
    1. rules_alerts.evaluate_alerts       (independent, additive)
    2. rules_anesthesia.select_anesthesia (ordered overrides, last wins)
    3. rules_risk.derive_risk_notes       (independent, additive)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .base import (
    Alert,
    AlertSeverity,
    Allergen,
    EvaluationResult,
    MedicalCondition,
    Medication,
    Procedure,
)
from .rules_alerts import ALERT_RULES, evaluate_alerts
from .rules_anesthesia import ANESTHESIA_OVERRIDES, select_anesthesia
from .rules_risk import derive_risk_notes

logger = logging.getLogger(__name__)


class ClinicalRiskEvaluator:
    """
    Pure rules engine over a chart snapshot.

    Stateless: safe to call from multiple threads / concurrent requests.
    """

    def evaluate(
        self,
        procedure: Any,
        allergies: Optional[Sequence[Allergen]] = None,
        medications: Optional[Sequence[Medication]] = None,
        conditions: Optional[Sequence[MedicalCondition]] = None,
    ) -> EvaluationResult:
        """
        Evaluate one chart for one procedure.

        Args:
            procedure:   Procedure code or member.  Unknown codes are
                         accepted and simply get no procedure risk note.
            allergies:   Allergen entries (None treated as empty).
            medications: Medication entries (None treated as empty).
            conditions:  MedicalCondition entries (None treated as empty).

        Returns:
            EvaluationResult, which unpacks as (alerts, anesthesia, risks).
        """
        allergies = tuple(allergies or ())
        medications = tuple(medications or ())
        conditions = tuple(conditions or ())

        parsed = Procedure.parse(procedure)
        if parsed is None:
            logger.debug(f"ClinicalRiskEvaluator: unrecognised procedure {procedure!r}, no procedure note")

        alerts = evaluate_alerts(allergies, medications, conditions)
        anesthesia, applied = select_anesthesia(parsed, alerts, allergies)
        risks = derive_risk_notes(parsed, alerts)

        logger.info(
            f"ClinicalRiskEvaluator [{parsed.value if parsed else procedure}]: "
            f"{len(alerts)} alert(s), anesthesia={anesthesia.type}, "
            f"{len(risks)} risk note(s)"
        )
        return EvaluationResult(
            alerts=alerts,
            anesthesia=anesthesia,
            risks=risks,
            applied_overrides=applied,
        )

    def evaluate_records(
        self,
        procedure: Any,
        allergy_rows: Iterable[Mapping[str, Any]] = (),
        medication_rows: Iterable[Mapping[str, Any]] = (),
        condition_rows: Iterable[Mapping[str, Any]] = (),
    ) -> EvaluationResult:
        """
        Evaluate upstream record rows (``allergen`` / ``medication_name`` /
        ``condition_name`` dicts).  Raises InvalidRecordError on a row with
        no usable name.
        """
        return self.evaluate(
            procedure,
            [Allergen.from_record(r) for r in allergy_rows or ()],
            [Medication.from_record(r) for r in medication_rows or ()],
            [MedicalCondition.from_record(r) for r in condition_rows or ()],
        )

    @staticmethod
    def supported_procedures() -> List[Procedure]:
        return list(Procedure)

    @staticmethod
    def alert_rules() -> List[Dict]:
        return [rule.to_dict() for rule in ALERT_RULES]

    @staticmethod
    def override_order() -> List[str]:
        return [o.name for o in ANESTHESIA_OVERRIDES]

    @staticmethod
    def summarise(result: EvaluationResult) -> Dict:
        """
        Build a compact summary dict suitable for JSON API responses.

        Example output:
        {
            "total_alerts": 2,
            "high_count": 1,
            "medium_count": 1,
            "low_count": 0,
            "highest_severity": "high",
            "alerts": [{...}, {...}],      # high first, ties in rule order
            "anesthesia": {...},
            "risks": ["..."],
            "applied_overrides": ["lidocaine_allergy"]
        }
        """
        counts = {severity: 0 for severity in AlertSeverity}
        for alert in result.alerts:
            counts[alert.severity] += 1

        ranked: List[Alert] = sorted(result.alerts, key=lambda a: a.severity.rank)
        highest = ranked[0].severity.value if ranked else None

        return {
            "total_alerts":      len(result.alerts),
            "high_count":        counts[AlertSeverity.HIGH],
            "medium_count":      counts[AlertSeverity.MEDIUM],
            "low_count":         counts[AlertSeverity.LOW],
            "highest_severity":  highest,
            "alerts":            [a.to_dict() for a in ranked],
            "anesthesia":        result.anesthesia.to_dict(),
            "risks":             list(result.risks),
            "applied_overrides": list(result.applied_overrides),
        }
