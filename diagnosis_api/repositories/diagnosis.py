"""Diagnosis repository.

All statements are SQLAlchemy expressions with bound parameters; no value
is ever interpolated into SQL text.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from diagnosis_api.models.diagnosis import UPDATABLE_FIELDS, Diagnosis


class DiagnosisRepository:
    """Repository for Diagnosis persistence."""

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        Args:
            db: Async SQLAlchemy session.
        """
        self.db = db

    def _ordered(self, query: Select[tuple[Diagnosis]]) -> Select[tuple[Diagnosis]]:
        """Apply standard ordering (newest predicted_date first)."""
        return query.order_by(Diagnosis.predicted_date.desc())

    async def insert(
        self,
        client_id: uuid.UUID,
        diagnosis_name: str,
        justification: str,
        predicted_date: datetime,
        challenged_diagnosis: str | None = None,
        challenged_justification: str | None = None,
    ) -> Diagnosis:
        """Insert a new diagnosis and return it with its generated id."""
        diagnosis = Diagnosis(
            client_id=client_id,
            diagnosis_name=diagnosis_name,
            justification=justification,
            challenged_diagnosis=challenged_diagnosis,
            challenged_justification=challenged_justification,
            predicted_date=predicted_date,
        )
        self.db.add(diagnosis)
        await self.db.flush()
        await self.db.refresh(diagnosis)
        return diagnosis

    async def list_all(self) -> list[Diagnosis]:
        """Get every diagnosis, newest first."""
        result = await self.db.execute(self._ordered(select(Diagnosis)))
        return list(result.scalars().all())

    async def list_by_client(
        self,
        client_id: uuid.UUID,
        limit: int | None = None,
    ) -> list[Diagnosis]:
        """Get diagnoses for a client, newest first.

        Args:
            client_id: Client UUID.
            limit: Optional maximum number of records.

        Returns:
            List of Diagnosis objects ordered by predicted_date descending.
        """
        query = self._ordered(select(Diagnosis).where(Diagnosis.client_id == client_id))
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_fields(
        self,
        diagnosis_id: uuid.UUID,
        values: Mapping[str, Any],
    ) -> Diagnosis | None:
        """Apply a sparse column update to one diagnosis.

        Args:
            diagnosis_id: UUID of the diagnosis to update.
            values: Column values keyed by column name. Only the updatable
                text fields and updated_at are accepted.

        Returns:
            The updated Diagnosis, or None if no row has that id.

        Raises:
            ValueError: If values names a column outside the allowed set.
        """
        allowed = set(UPDATABLE_FIELDS) | {"updated_at"}
        unknown = set(values) - allowed
        if unknown:
            raise ValueError(f"Columns not updatable: {sorted(unknown)}")

        stmt = (
            update(Diagnosis)
            .where(Diagnosis.id == diagnosis_id)
            .values(**values)
            .returning(Diagnosis)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_all(self) -> int:
        """Delete every diagnosis. Only used for seeding and tests.

        Returns:
            Number of deleted rows.
        """
        result = await self.db.execute(delete(Diagnosis))
        return result.rowcount or 0
