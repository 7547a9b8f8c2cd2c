"""Tests for the seed_database script."""

import random
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from diagnosis_api.repositories.diagnosis import DiagnosisRepository
from diagnosis_api.schemas.diagnosis import DiagnosisCreate
from diagnosis_api.scripts import seed_database as seed_module
from diagnosis_api.scripts.seed_database import SEED_DIAGNOSES, SEED_WINDOW_DAYS, seed_database
from diagnosis_api.utils.validation import is_valid_client_id, sanitize_text


class TestSeedDatabaseModule:
    """Tests for seed_database module structure."""

    def test_module_exports(self):
        assert hasattr(seed_module, "main")
        assert hasattr(seed_module, "seed_database")
        assert callable(seed_module.main)

    def test_seed_records_are_valid(self):
        """Seed data satisfies the same rules as API input."""
        assert len(SEED_DIAGNOSES) == 5
        for record in SEED_DIAGNOSES:
            assert is_valid_client_id(record["client_id"])
            assert record["diagnosis_name"]
            assert record["justification"]
            assert sanitize_text(record["diagnosis_name"]) == record["diagnosis_name"]

    def test_some_seed_records_are_challenged(self):
        challenged = [r for r in SEED_DIAGNOSES if r["challenged_diagnosis"]]
        assert len(challenged) == 2
        assert all(r["challenged_justification"] for r in challenged)


class TestSeedDatabase:
    """Tests for seeding against the test database."""

    @pytest.mark.asyncio
    async def test_seeds_all_records(self, database):
        stats = await seed_database(database, rng=random.Random(1))

        assert stats == {"deleted": 0, "inserted": len(SEED_DIAGNOSES)}
        async with database.session() as session:
            records = await DiagnosisRepository(session).list_all()
        assert {r.diagnosis_name for r in records} == {r["diagnosis_name"] for r in SEED_DIAGNOSES}

    @pytest.mark.asyncio
    async def test_reseeding_replaces_existing_rows(self, database, service):
        await service.create(
            str(uuid.uuid4()),
            DiagnosisCreate(diagnosis_name="Existing", justification="Row"),
        )

        await seed_database(database)
        stats = await seed_database(database)

        assert stats["deleted"] == len(SEED_DIAGNOSES)
        assert len(await service.list_all()) == len(SEED_DIAGNOSES)

    @pytest.mark.asyncio
    async def test_predicted_dates_within_window(self, database, service):
        before = datetime.now(timezone.utc)
        await seed_database(database)

        for record in await service.list_all():
            predicted = record.predicted_date
            if predicted.tzinfo is None:
                predicted = predicted.replace(tzinfo=timezone.utc)
            assert before - timedelta(days=SEED_WINDOW_DAYS) <= predicted <= before + timedelta(minutes=1)

    @pytest.mark.asyncio
    async def test_seeded_clients_are_queryable(self, database, service):
        await seed_database(database)

        latest = await service.get_latest_by_client(SEED_DIAGNOSES[1]["client_id"])

        assert latest.diagnosis_name == "Major Depressive Disorder"
        assert latest.challenged_diagnosis == "Adjustment Disorder with Depressed Mood"
