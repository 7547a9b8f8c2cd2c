"""SQLAlchemy models."""

from diagnosis_api.models.diagnosis import UPDATABLE_FIELDS, Diagnosis

__all__ = [
    "Diagnosis",
    "UPDATABLE_FIELDS",
]
