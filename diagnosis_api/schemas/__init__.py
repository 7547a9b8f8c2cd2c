"""Pydantic schemas for API requests and responses."""

from diagnosis_api.schemas.diagnosis import (
    DiagnosisCreate,
    DiagnosisFields,
    DiagnosisResponse,
    DiagnosisUpdate,
    ErrorResponse,
)

__all__ = [
    "DiagnosisCreate",
    "DiagnosisFields",
    "DiagnosisResponse",
    "DiagnosisUpdate",
    "ErrorResponse",
]
