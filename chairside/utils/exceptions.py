"""
Custom Exception Hierarchy

Provides specific exception types for the record-handling edges of the
chairside service.  The clinical evaluator itself never raises for
well-formed input.
"""
from typing import Optional, Dict, Any


class ChairsideError(Exception):
    """Base exception for all chairside assistant errors."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class InvalidRecordError(ChairsideError):
    """An upstream patient record row could not be converted."""

    status_code = 422

    def __init__(
        self,
        message: str,
        kind: str = "unknown",
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="RECORD_ERROR",
            details={"record_kind": kind, "field": field, **(details or {})}
        )
        self.kind = kind
        self.field = field


class PatientNotFoundError(ChairsideError):
    """No chart exists for the requested patient."""

    status_code = 404

    def __init__(
        self,
        patient_id: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=f"Patient '{patient_id}' not found",
            code="PATIENT_NOT_FOUND",
            details={"patient_id": patient_id, **(details or {})}
        )
        self.patient_id = patient_id
