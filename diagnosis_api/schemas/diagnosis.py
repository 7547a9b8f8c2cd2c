"""Pydantic schemas for the Diagnosis API.

Request schemas accept every field as optional text so that presence and
emptiness checks happen in the service layer, after sanitization.
"""

import json
from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _as_text(value: Any) -> Any:
    """Render any decoded JSON value as text; null stays null."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


# Booleans, numbers and nested values are accepted and stored as text
TextField = Annotated[str | None, BeforeValidator(_as_text)]


class DiagnosisFields(BaseModel):
    """Free-text fields shared by create and update requests."""

    diagnosis_name: TextField = Field(default=None, description="AI-predicted diagnosis")
    justification: TextField = Field(default=None, description="Rationale for the diagnosis")
    challenged_diagnosis: TextField = Field(
        default=None,
        description="Therapist's alternative diagnosis",
    )
    challenged_justification: TextField = Field(
        default=None,
        description="Therapist's rationale for the challenge",
    )


class DiagnosisCreate(DiagnosisFields):
    """Schema for creating a diagnosis. Name and justification are required."""

    pass


class DiagnosisUpdate(DiagnosisFields):
    """Schema for updating a diagnosis.

    Only fields present in the request body are applied; an explicit null
    clears the field.
    """

    pass


class DiagnosisResponse(BaseModel):
    """Schema for a diagnosis in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    client_id: UUID
    diagnosis_name: str
    justification: str
    challenged_diagnosis: str | None
    challenged_justification: str | None
    predicted_date: datetime
    updated_at: datetime | None


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    error: str
