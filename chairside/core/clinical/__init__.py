"""
Chairside Clinical Layer

Turns a chart snapshot into pre-procedure safety alerts, one anesthesia
recommendation and procedure risk notes.

Usage:
    from chairside.core.clinical import ClinicalRiskEvaluator, Allergen

    evaluator = ClinicalRiskEvaluator()
    result = evaluator.evaluate("filling", [Allergen("Lidocaine")], [], [])
"""
from .engine import ClinicalRiskEvaluator
from .base import (
    Alert,
    AlertSeverity,
    AlertType,
    Allergen,
    AnesthesiaRecommendation,
    EvaluationResult,
    MedicalCondition,
    Medication,
    Procedure,
)

__all__ = [
    "ClinicalRiskEvaluator",
    "Alert",
    "AlertSeverity",
    "AlertType",
    "Allergen",
    "AnesthesiaRecommendation",
    "EvaluationResult",
    "MedicalCondition",
    "Medication",
    "Procedure",
]
