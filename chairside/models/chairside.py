"""
Chairside API schemas.

Request rows mirror the upstream allergies / medications / medical_conditions
tables so a client can forward chart rows unchanged.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---- Request models ----

class AllergyRecord(BaseModel):
    allergen: str = Field(..., min_length=1, description="Substance name, e.g. 'Penicillin'")
    severity: Optional[str] = None


class MedicationRecord(BaseModel):
    medication_name: str = Field(..., min_length=1)
    status: Optional[str] = None
    notes: Optional[str] = None


class ConditionRecord(BaseModel):
    condition_name: str = Field(..., min_length=1)
    status: Optional[str] = None


class EvaluationRequest(BaseModel):
    """Chart snapshot plus the procedure about to be performed."""
    procedure: str = Field(..., description="root_canal | extraction | filling | crown_prep")
    allergies: List[AllergyRecord] = Field(default_factory=list)
    medications: List[MedicationRecord] = Field(default_factory=list)
    conditions: List[ConditionRecord] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {"example": {
            "procedure": "crown_prep",
            "allergies": [],
            "medications": [{"medication_name": "Atenolol", "status": "active"}],
            "conditions": [{"condition_name": "Hypertension", "status": "active"}],
        }}
    }


# ---- Response models ----

class AlertResponse(BaseModel):
    type: str
    severity: str
    message: str
    recommendation: str


class AnesthesiaResponse(BaseModel):
    type: str
    dosage: str
    route: str
    precautions: List[str] = []
    contraindications: List[str] = []


class EvaluationResponse(BaseModel):
    procedure: str
    procedure_recognized: bool
    patient_id: Optional[str] = None
    total_alerts: int
    high_count: int
    medium_count: int
    low_count: int
    highest_severity: Optional[str] = None
    alerts: List[AlertResponse]
    anesthesia: AnesthesiaResponse
    risks: List[str]
    applied_overrides: List[str] = []
    evaluated_at: datetime


class ProcedureInfo(BaseModel):
    code: str
    label: str


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
    uptime_seconds: float
