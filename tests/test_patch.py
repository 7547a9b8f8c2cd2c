"""Tests for the field-presence patch types."""

from diagnosis_api.schemas.diagnosis import DiagnosisUpdate
from diagnosis_api.services.patch import ABSENT, DiagnosisPatch, SetTo


class TestAbsent:
    def test_absent_is_singleton(self):
        assert type(ABSENT)() is ABSENT

    def test_absent_is_falsy(self):
        assert not ABSENT

    def test_absent_repr(self):
        assert repr(ABSENT) == "ABSENT"


class TestDiagnosisPatch:
    """Tests for DiagnosisPatch construction and inspection."""

    def test_default_patch_is_empty(self):
        patch = DiagnosisPatch()
        assert patch.is_empty()
        assert patch.present() == {}

    def test_from_none_body_is_empty(self):
        assert DiagnosisPatch.from_update(None).is_empty()

    def test_from_empty_body_is_empty(self):
        assert DiagnosisPatch.from_update(DiagnosisUpdate()).is_empty()

    def test_omitted_fields_stay_absent(self):
        patch = DiagnosisPatch.from_update(
            DiagnosisUpdate.model_validate({"challenged_diagnosis": "X"})
        )
        assert patch.challenged_diagnosis == SetTo("X")
        assert patch.diagnosis_name is ABSENT
        assert patch.justification is ABSENT
        assert patch.challenged_justification is ABSENT
        assert patch.present() == {"challenged_diagnosis": "X"}

    def test_explicit_null_is_present(self):
        """An explicit null is distinct from an omitted field."""
        patch = DiagnosisPatch.from_update(
            DiagnosisUpdate.model_validate(
                {"challenged_diagnosis": None, "challenged_justification": None}
            )
        )
        assert not patch.is_empty()
        assert patch.challenged_diagnosis == SetTo(None)
        assert patch.present() == {
            "challenged_diagnosis": None,
            "challenged_justification": None,
        }

    def test_present_uses_column_order(self):
        patch = DiagnosisPatch(
            challenged_justification=SetTo("d"),
            diagnosis_name=SetTo("a"),
            challenged_diagnosis=SetTo("c"),
            justification=SetTo("b"),
        )
        assert list(patch.present()) == [
            "diagnosis_name",
            "justification",
            "challenged_diagnosis",
            "challenged_justification",
        ]

    def test_map_values_only_touches_present_fields(self):
        patch = DiagnosisPatch(diagnosis_name=SetTo("a"), challenged_diagnosis=SetTo(None))
        mapped = patch.map_values(lambda v: v.upper() if v is not None else None)
        assert mapped.diagnosis_name == SetTo("A")
        assert mapped.challenged_diagnosis == SetTo(None)
        assert mapped.justification is ABSENT

    def test_unknown_body_keys_are_ignored(self):
        patch = DiagnosisPatch.from_update(
            DiagnosisUpdate.model_validate({"client_id": "abc", "id": "x"})
        )
        assert patch.is_empty()
