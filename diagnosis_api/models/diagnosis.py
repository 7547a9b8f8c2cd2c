"""Diagnosis model.

A diagnosis is an AI-predicted assessment for a client, optionally
contested by a therapist through the challenged_* fields.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from diagnosis_api.database import Base

# Columns a partial update may touch, in the order they appear in SET clauses
UPDATABLE_FIELDS: tuple[str, ...] = (
    "diagnosis_name",
    "justification",
    "challenged_diagnosis",
    "challenged_justification",
)


class Diagnosis(Base):
    """Diagnosis record for a client at a point in time.

    A client may have many records; the one with the latest predicted_date
    is the client's current diagnosis.
    """

    __tablename__ = "diagnoses"

    # === Identity ===
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    # === Content ===
    diagnosis_name: Mapped[str] = mapped_column(Text, nullable=False)
    justification: Mapped[str] = mapped_column(Text, nullable=False)
    challenged_diagnosis: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Therapist's alternative diagnosis",
    )
    challenged_justification: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Therapist's rationale for the challenge",
    )

    # === Timing ===
    predicted_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_diagnoses_client_predicted", "client_id", "predicted_date"),
    )

    def __repr__(self) -> str:
        return f"<Diagnosis(id={self.id}, client_id={self.client_id}, name={self.diagnosis_name[:30]})>"
