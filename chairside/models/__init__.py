"""Pydantic request/response models for the HTTP API."""
from .chairside import (
    AllergyRecord,
    MedicationRecord,
    ConditionRecord,
    EvaluationRequest,
    AlertResponse,
    AnesthesiaResponse,
    EvaluationResponse,
    ProcedureInfo,
    HealthResponse,
)

__all__ = [
    "AllergyRecord",
    "MedicationRecord",
    "ConditionRecord",
    "EvaluationRequest",
    "AlertResponse",
    "AnesthesiaResponse",
    "EvaluationResponse",
    "ProcedureInfo",
    "HealthResponse",
]
