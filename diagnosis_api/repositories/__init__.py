"""Repository layer for data access.

Repositories encapsulate database operations and provide a clean interface
for CRUD operations on domain objects.
"""

from diagnosis_api.repositories.diagnosis import DiagnosisRepository

__all__ = ["DiagnosisRepository"]
