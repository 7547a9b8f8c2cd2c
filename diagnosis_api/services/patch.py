"""Field-presence types for partial diagnosis updates.

Each updatable field of a ``DiagnosisPatch`` is either ``ABSENT`` (the caller
did not send it) or ``SetTo(value)`` (the caller sent it, possibly as null).
This keeps "omitted" and "explicitly cleared" apart without inspecting raw
request bodies.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any, Generic, TypeVar, Union

from diagnosis_api.models.diagnosis import UPDATABLE_FIELDS
from diagnosis_api.schemas.diagnosis import DiagnosisUpdate

T = TypeVar("T")


class _Absent:
    """Marker for a field the caller did not send."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class SetTo(Generic[T]):
    """A field the caller sent, with its (possibly null) value."""

    value: T


FieldUpdate = Union[_Absent, SetTo[T]]


@dataclass(frozen=True)
class DiagnosisPatch:
    """Sparse update for the four free-text diagnosis fields."""

    diagnosis_name: FieldUpdate[str | None] = ABSENT
    justification: FieldUpdate[str | None] = ABSENT
    challenged_diagnosis: FieldUpdate[str | None] = ABSENT
    challenged_justification: FieldUpdate[str | None] = ABSENT

    @classmethod
    def from_update(cls, data: DiagnosisUpdate | None) -> DiagnosisPatch:
        """Build a patch from a request body, keeping only fields that were sent."""
        if data is None:
            return cls()
        return cls(**{
            name: SetTo(getattr(data, name))
            for name in UPDATABLE_FIELDS
            if name in data.model_fields_set
        })

    def is_empty(self) -> bool:
        """True if no field is present."""
        return not self.present()

    def present(self) -> dict[str, Any]:
        """Values of the present fields, in column order."""
        return {
            f.name: getattr(self, f.name).value
            for f in fields(self)
            if isinstance(getattr(self, f.name), SetTo)
        }

    def map_values(self, func: Callable[[Any], Any]) -> DiagnosisPatch:
        """Return a new patch with ``func`` applied to every present value."""
        return DiagnosisPatch(**{name: SetTo(func(value)) for name, value in self.present().items()})
