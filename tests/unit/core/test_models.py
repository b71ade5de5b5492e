"""Tests for domain models and the Result type."""

import pytest
from pydantic import ValidationError

from core.domain.models import (
    PredictionResult,
    ReconciledRecord,
    ReconciliationReport,
    TargetField,
    default_record,
)
from core.services.result import Result


class TestResult:
    """Test the Result type for explicit error handling."""

    def test_result_ok_creates_successful_result(self) -> None:
        result: Result[str, Exception] = Result.ok("success")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "success"

    def test_result_error_creates_failed_result(self) -> None:
        error = ValueError("test error")
        result: Result[str, ValueError] = Result.err(error)
        assert not result.is_ok()
        assert result.is_err()
        assert result.unwrap_or("default") == "default"

    def test_unwrap_raises_on_error_result(self) -> None:
        result: Result[str, ValueError] = Result.err(ValueError("test error"))

        with pytest.raises(ValueError, match="test error"):
            result.unwrap()

    def test_unwrap_err_on_ok_raises(self) -> None:
        with pytest.raises(ValueError, match="unwrap_err"):
            Result.ok(1).unwrap_err()

    def test_falsy_values_are_ok(self) -> None:
        assert Result.ok({}).unwrap() == {}
        assert Result.ok(0).is_ok()


class TestTargetField:
    def test_closed_set_in_display_order(self) -> None:
        assert [f.value for f in TargetField] == [
            "pregnancies",
            "glucose",
            "bloodPressure",
            "skinThickness",
            "insulin",
            "bmi",
            "diabetesPedigreeFunction",
            "age",
        ]

    def test_display_metadata(self) -> None:
        assert TargetField.BLOOD_PRESSURE.label == "Blood Pressure"
        assert TargetField.DIABETES_PEDIGREE_FUNCTION.label == "Diabetes Pedigree Function"
        assert TargetField.BMI.step == 0.1
        assert TargetField.DIABETES_PEDIGREE_FUNCTION.step == 0.01
        assert TargetField.AGE.step == 1


class TestReconciledRecord:
    def test_default_record_is_all_zero(self) -> None:
        record = default_record()
        assert record.as_dict() == {field: 0.0 for field in TargetField}

    def test_default_record_returns_fresh_equal_instances(self) -> None:
        assert default_record() == default_record()

    def test_accepts_wire_names_and_attribute_names(self) -> None:
        by_alias = ReconciledRecord.model_validate({"bloodPressure": 72})
        by_name = ReconciledRecord(blood_pressure=72)
        assert by_alias == by_name
        assert by_alias.get(TargetField.BLOOD_PRESSURE) == 72

    def test_immutability(self) -> None:
        record = default_record()

        with pytest.raises(ValidationError, match="frozen"):
            record.glucose = 100.0  # type: ignore[misc]

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite(self, bad: float) -> None:
        with pytest.raises(ValidationError, match="finite"):
            ReconciledRecord(glucose=bad)

    def test_payload_uses_camel_case_keys(self) -> None:
        payload = default_record().with_values({TargetField.SKIN_THICKNESS: 35}).to_payload()
        assert list(payload) == [f.value for f in TargetField]
        assert payload["skinThickness"] == 35

    def test_with_values_returns_copy(self) -> None:
        base = default_record()
        updated = base.with_values({TargetField.INSULIN: 94})
        assert updated.insulin == 94
        assert base.insulin == 0


class TestReconciliationReport:
    def test_coverage_is_serialized(self) -> None:
        report = ReconciliationReport(
            record=default_record(), resolved=(TargetField.AGE, TargetField.BMI)
        )
        assert report.model_dump()["coverage"] == 0.25


def test_prediction_result_keeps_submitted_record() -> None:
    record = default_record().with_values({TargetField.GLUCOSE: 148})
    result = PredictionResult(prediction=1, submitted=record)
    assert result.submitted.glucose == 148
