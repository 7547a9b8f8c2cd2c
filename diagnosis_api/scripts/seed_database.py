"""Seed database with example diagnoses.

Clears the diagnoses table and inserts a fixed set of example records with
predicted dates spread over the last 30 days.

Usage:
    python -m diagnosis_api.scripts.seed_database

The script is destructive: every existing diagnosis is deleted first.
"""

import asyncio
import random
import uuid
from datetime import datetime, timedelta, timezone

from diagnosis_api.config import settings
from diagnosis_api.database import Database
from diagnosis_api.repositories.diagnosis import DiagnosisRepository

SEED_WINDOW_DAYS = 30

SEED_DIAGNOSES: list[dict] = [
    {
        "client_id": "550e8400-e29b-41d4-a716-446655440001",
        "diagnosis_name": "Generalized Anxiety Disorder",
        "justification": (
            "Patient exhibits persistent excessive worry about multiple life events, difficulty "
            "controlling worry, restlessness, fatigue, difficulty concentrating, irritability, "
            "muscle tension, and sleep disturbance for more than 6 months. Symptoms cause "
            "significant distress and impairment in social and occupational functioning."
        ),
        "challenged_diagnosis": None,
        "challenged_justification": None,
    },
    {
        "client_id": "550e8400-e29b-41d4-a716-446655440002",
        "diagnosis_name": "Major Depressive Disorder",
        "justification": (
            "Patient reports depressed mood most of the day, markedly diminished interest in "
            "activities, significant weight loss, insomnia, psychomotor agitation, fatigue, "
            "feelings of worthlessness, diminished concentration, and recurrent thoughts of death "
            "for over 2 weeks. Symptoms represent a change from previous functioning."
        ),
        "challenged_diagnosis": "Adjustment Disorder with Depressed Mood",
        "challenged_justification": (
            "Symptoms appeared following recent job loss and divorce. Duration and severity may "
            "be better explained by adjustment disorder rather than major depression. Consider "
            "psychosocial stressors and timeline of symptom onset."
        ),
    },
    {
        "client_id": "550e8400-e29b-41d4-a716-446655440003",
        "diagnosis_name": "Social Anxiety Disorder",
        "justification": (
            "Patient experiences marked fear and anxiety in social situations where they may be "
            "scrutinized by others, including fear of negative evaluation, embarrassment, and "
            "humiliation. Avoids social interactions and public speaking. Symptoms persist for "
            "over 6 months and cause significant impairment."
        ),
        "challenged_diagnosis": None,
        "challenged_justification": None,
    },
    {
        "client_id": "550e8400-e29b-41d4-a716-446655440004",
        "diagnosis_name": "Attention-Deficit/Hyperactivity Disorder",
        "justification": (
            "Patient demonstrates persistent inattention including difficulty sustaining "
            "attention, careless mistakes, difficulty organizing tasks, avoids tasks requiring "
            "sustained mental effort, loses things, easily distracted, and forgetful. Symptoms "
            "present since childhood and cause impairment in multiple settings."
        ),
        "challenged_diagnosis": "Adult ADHD vs Anxiety-Related Concentration Issues",
        "challenged_justification": (
            "While ADHD symptoms are present, patient also reports high anxiety levels. "
            "Concentration difficulties may be secondary to anxiety rather than primary ADHD. "
            "Recommend anxiety treatment trial before confirming ADHD diagnosis."
        ),
    },
    {
        "client_id": "550e8400-e29b-41d4-a716-446655440005",
        "diagnosis_name": "Post-Traumatic Stress Disorder",
        "justification": (
            "Patient experienced traumatic event involving actual threat to life. Exhibits "
            "intrusive memories, nightmares, flashbacks, avoidance of trauma-related stimuli, "
            "negative alterations in mood and cognition, hypervigilance, exaggerated startle "
            "response, and sleep disturbances for over 1 month."
        ),
        "challenged_diagnosis": None,
        "challenged_justification": None,
    },
]


async def seed_database(
    database: Database,
    rng: random.Random | None = None,
) -> dict[str, int]:
    """
    Replace all diagnoses with the example set.

    Args:
        database: Store client to seed.
        rng: Random source for predicted-date offsets (injectable for tests).

    Returns:
        Dictionary with counts: deleted, inserted.
    """
    rng = rng or random.Random()
    now = datetime.now(timezone.utc)
    stats = {"deleted": 0, "inserted": 0}

    async with database.session() as session:
        repo = DiagnosisRepository(session)
        stats["deleted"] = await repo.delete_all()

        for record in SEED_DIAGNOSES:
            await repo.insert(
                client_id=uuid.UUID(record["client_id"]),
                diagnosis_name=record["diagnosis_name"],
                justification=record["justification"],
                challenged_diagnosis=record["challenged_diagnosis"],
                challenged_justification=record["challenged_justification"],
                predicted_date=now - timedelta(days=rng.randrange(SEED_WINDOW_DAYS)),
            )
            stats["inserted"] += 1

    return stats


async def run() -> dict[str, int]:
    """Connect, ensure the schema exists, seed and disconnect."""
    database = Database.from_settings(settings)
    try:
        print("\nVerifying database connection...")
        if not await database.verify_connectivity():
            raise RuntimeError("Database connection verification failed")
        print("  Database: connected")

        await database.create_schema()
        return await seed_database(database)
    finally:
        await database.close()


def main() -> None:
    """Main entry point for the seed script."""
    print("=" * 50)
    print("Diagnosis Database Seeding")
    print("=" * 50)

    stats = asyncio.run(run())

    print("\n" + "=" * 50)
    print("Summary")
    print("=" * 50)
    print(f"  Diagnoses deleted: {stats['deleted']}")
    print(f"  Diagnoses inserted: {stats['inserted']}")
    print("\nDatabase seeding complete!")


if __name__ == "__main__":
    main()
