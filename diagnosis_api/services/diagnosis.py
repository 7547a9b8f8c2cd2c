"""Diagnosis service.

Validates and sanitizes caller input, then delegates to the repository.
Every operation runs in its own session from the injected store client.
"""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from diagnosis_api.database import Database
from diagnosis_api.exceptions import InvalidInputError, NotFoundError
from diagnosis_api.models.diagnosis import Diagnosis
from diagnosis_api.repositories.diagnosis import DiagnosisRepository
from diagnosis_api.schemas.diagnosis import DiagnosisCreate
from diagnosis_api.services.patch import DiagnosisPatch
from diagnosis_api.utils.validation import is_valid_client_id, sanitize_text

logger = logging.getLogger(__name__)

INVALID_CLIENT_ID = "invalid clientId - must be a valid UUID"
REQUIRED_FIELDS_MISSING = "diagnosis_name and justification are required"
REQUIRED_FIELDS_NULL = "diagnosis_name and justification cannot be null"
NOTHING_TO_UPDATE = "nothing to update"
DIAGNOSIS_NOT_FOUND = "diagnosis not found"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _parse_client_id(client_id: str) -> uuid.UUID:
    if not is_valid_client_id(client_id):
        raise InvalidInputError(INVALID_CLIENT_ID)
    return uuid.UUID(client_id)


class DiagnosisService:
    """Create, read and amend diagnosis records."""

    def __init__(self, database: Database, clock: Callable[[], datetime] = utc_now):
        """Initialize the service.

        Args:
            database: Store client shared for the lifetime of the app.
            clock: Source of predicted_date and updated_at timestamps.
        """
        self.database = database
        self._clock = clock

    async def list_all(self) -> list[Diagnosis]:
        """Get every diagnosis, newest predicted_date first."""
        async with self.database.session() as session:
            return await DiagnosisRepository(session).list_all()

    async def get_latest_by_client(self, client_id: str) -> Diagnosis:
        """Get the client's current diagnosis.

        Args:
            client_id: Client UUID string from the request path.

        Returns:
            The client's diagnosis with the latest predicted_date.

        Raises:
            InvalidInputError: If client_id is not a valid UUID.
            NotFoundError: If the client has no diagnoses.
        """
        client_uuid = _parse_client_id(client_id)

        async with self.database.session() as session:
            records = await DiagnosisRepository(session).list_by_client(client_uuid, limit=1)

        if not records:
            raise NotFoundError(DIAGNOSIS_NOT_FOUND)
        return records[0]

    async def create(self, client_id: str, data: DiagnosisCreate) -> Diagnosis:
        """Record a new diagnosis for a client.

        Args:
            client_id: Client UUID string from the request path.
            data: Request body. Every text field is sanitized before storage.

        Returns:
            The stored diagnosis, including its generated id.

        Raises:
            InvalidInputError: If client_id is invalid, or diagnosis_name or
                justification is empty after sanitization.
        """
        client_uuid = _parse_client_id(client_id)

        diagnosis_name = sanitize_text(data.diagnosis_name)
        justification = sanitize_text(data.justification)
        if not diagnosis_name or not justification:
            raise InvalidInputError(REQUIRED_FIELDS_MISSING)

        async with self.database.session() as session:
            diagnosis = await DiagnosisRepository(session).insert(
                client_id=client_uuid,
                diagnosis_name=diagnosis_name,
                justification=justification,
                challenged_diagnosis=sanitize_text(data.challenged_diagnosis),
                challenged_justification=sanitize_text(data.challenged_justification),
                predicted_date=self._clock(),
            )

        logger.info("Created diagnosis %s for client %s", diagnosis.id, client_uuid)
        return diagnosis

    async def update(self, diagnosis_id: str, patch: DiagnosisPatch) -> Diagnosis:
        """Apply a partial update to a diagnosis.

        Present fields are sanitized and written; absent fields are left
        alone. Name and justification are not re-checked for emptiness, so
        an update may blank them.

        Args:
            diagnosis_id: Diagnosis UUID string from the request path.
            patch: Fields to change.

        Returns:
            The updated diagnosis.

        Raises:
            InvalidInputError: If the patch is empty, or sets diagnosis_name
                or justification to null.
            NotFoundError: If no diagnosis has that id.
        """
        if patch.is_empty():
            raise InvalidInputError(NOTHING_TO_UPDATE)

        values = patch.map_values(sanitize_text).present()
        # Both columns are NOT NULL; an empty string is still accepted
        if any(values.get(name, "") is None for name in ("diagnosis_name", "justification")):
            raise InvalidInputError(REQUIRED_FIELDS_NULL)
        values["updated_at"] = self._clock()

        try:
            diagnosis_uuid = uuid.UUID(diagnosis_id)
        except ValueError:
            raise NotFoundError(DIAGNOSIS_NOT_FOUND) from None

        async with self.database.session() as session:
            diagnosis = await DiagnosisRepository(session).update_fields(diagnosis_uuid, values)

        if diagnosis is None:
            raise NotFoundError(DIAGNOSIS_NOT_FOUND)
        return diagnosis
