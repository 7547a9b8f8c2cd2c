"""Diagnosis API routes.

Listing, latest-by-client lookup, creation and partial update of diagnosis
records. Validation and sanitization happen in the service; errors are
rendered as ``{"error": ...}`` by the handlers registered in main.
"""

from fastapi import APIRouter, Depends, Request, status

from diagnosis_api.schemas.diagnosis import (
    DiagnosisCreate,
    DiagnosisResponse,
    DiagnosisUpdate,
    ErrorResponse,
)
from diagnosis_api.services.diagnosis import DiagnosisService
from diagnosis_api.services.patch import DiagnosisPatch

router = APIRouter(prefix="/diagnoses", tags=["diagnoses"])

_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_diagnosis_service(request: Request) -> DiagnosisService:
    """Return the service created in the application lifespan."""
    return request.app.state.diagnosis_service


@router.get("", response_model=list[DiagnosisResponse], responses=_ERRORS)
async def list_diagnoses(
    service: DiagnosisService = Depends(get_diagnosis_service),
) -> list[DiagnosisResponse]:
    """List all diagnoses, newest predicted_date first."""
    diagnoses = await service.list_all()
    return [DiagnosisResponse.model_validate(d) for d in diagnoses]


@router.get("/{client_id}", response_model=DiagnosisResponse, responses=_ERRORS)
async def get_latest_diagnosis(
    client_id: str,
    service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisResponse:
    """Get the latest diagnosis for a client.

    Args:
        client_id: The client UUID.

    Returns:
        The client's diagnosis with the most recent predicted_date.
    """
    diagnosis = await service.get_latest_by_client(client_id)
    return DiagnosisResponse.model_validate(diagnosis)


@router.post(
    "/{client_id}",
    response_model=DiagnosisResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERRORS,
)
async def create_diagnosis(
    client_id: str,
    data: DiagnosisCreate | None = None,
    service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisResponse:
    """Create a diagnosis for a client.

    Args:
        client_id: The client UUID.
        data: diagnosis_name and justification, plus optional challenge fields.

    Returns:
        The created diagnosis.
    """
    diagnosis = await service.create(client_id, data or DiagnosisCreate())
    return DiagnosisResponse.model_validate(diagnosis)


@router.put("/{diagnosis_id}", response_model=DiagnosisResponse, responses=_ERRORS)
async def update_diagnosis(
    diagnosis_id: str,
    data: DiagnosisUpdate | None = None,
    service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisResponse:
    """Update some fields of a diagnosis, e.g. to record a challenge.

    Args:
        diagnosis_id: The diagnosis UUID.
        data: Any subset of the four text fields; null clears a challenge
            field. Null for diagnosis_name or justification is rejected
            with 400 since both columns are required.

    Returns:
        The updated diagnosis.
    """
    diagnosis = await service.update(diagnosis_id, DiagnosisPatch.from_update(data))
    return DiagnosisResponse.model_validate(diagnosis)
