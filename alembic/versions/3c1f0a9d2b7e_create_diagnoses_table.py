"""create_diagnoses_table

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-17

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create diagnoses table and indexes."""
    op.create_table(
        "diagnoses",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("diagnosis_name", sa.Text(), nullable=False),
        sa.Column("justification", sa.Text(), nullable=False),
        sa.Column("challenged_diagnosis", sa.Text(), nullable=True, comment="Therapist's alternative diagnosis"),
        sa.Column("challenged_justification", sa.Text(), nullable=True, comment="Therapist's rationale for the challenge"),
        sa.Column("predicted_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_index("ix_diagnoses_client_id", "diagnoses", ["client_id"])
    op.create_index("idx_diagnoses_client_predicted", "diagnoses", ["client_id", "predicted_date"])


def downgrade() -> None:
    """Drop diagnoses table."""
    op.drop_index("idx_diagnoses_client_predicted", table_name="diagnoses")
    op.drop_index("ix_diagnoses_client_id", table_name="diagnoses")
    op.drop_table("diagnoses")
