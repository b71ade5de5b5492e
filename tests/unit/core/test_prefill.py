"""Tests for the prefill and submission workflow using protocol test doubles."""

from typing import Any

import pytest

from core.domain.models import PredictionResult, ReconciledRecord, TargetField, default_record
from core.services.prediction_api import ServiceError
from core.services.prefill import OperationFailed, PrefillService
from core.services.result import Result


class FakeExtractor:
    """Test double that implements the ExtractionService protocol."""

    def __init__(self, extracted: dict[str, Any] | None = None, error: ServiceError | None = None):
        self.extracted = extracted or {}
        self.error = error
        self.calls: list[tuple[bytes, str, str]] = []

    async def extract(
        self, content: bytes, filename: str, content_type: str = "application/octet-stream"
    ) -> Result[dict[str, Any], ServiceError]:
        self.calls.append((content, filename, content_type))
        if self.error is not None:
            return Result.err(self.error)
        return Result.ok(self.extracted)


class FakePredictor:
    """Test double that implements the PredictionService protocol."""

    def __init__(self, prediction: Any = 1, error: ServiceError | None = None) -> None:
        self.prediction = prediction
        self.error = error
        self.submitted: list[ReconciledRecord] = []

    async def predict(self, record: ReconciledRecord) -> Result[PredictionResult, ServiceError]:
        self.submitted.append(record)
        if self.error is not None:
            return Result.err(self.error)
        return Result.ok(PredictionResult(prediction=self.prediction, submitted=record))


@pytest.fixture
def lab_sheet() -> dict[str, Any]:
    return {
        "Pregnancies": "2",
        "Glucose": 148,
        "Diabetes Pedigree Function": "0.627",
        "unrelatedNote": "n/a",
    }


async def test_prefill_reconciles_extracted_pairs(lab_sheet: dict[str, Any]) -> None:
    extractor = FakeExtractor(lab_sheet)
    service = PrefillService(extractor, FakePredictor())

    result = await service.prefill_from_document(b"img", "lab.png", "image/png")

    assert result.is_ok()
    report = result.unwrap()
    assert report.record.pregnancies == 2
    assert report.record.glucose == 148
    assert report.record.diabetes_pedigree_function == 0.627
    assert report.ignored_labels == ("unrelatedNote",)
    assert extractor.calls == [(b"img", "lab.png", "image/png")]


async def test_prefill_preserves_untouched_form_values(lab_sheet: dict[str, Any]) -> None:
    service = PrefillService(FakeExtractor(lab_sheet), FakePredictor())
    form = default_record().with_values({TargetField.AGE: 50, TargetField.GLUCOSE: 90})

    report = (await service.prefill_from_document(b"img", "lab.png")).unwrap()
    form = report.apply_to(form)

    assert form.age == 50
    assert form.glucose == 148


async def test_prefill_with_nothing_recognized_is_still_ok() -> None:
    service = PrefillService(FakeExtractor({"favoriteColor": "blue"}), FakePredictor())

    result = await service.prefill_from_document(b"img", "lab.png")

    assert result.is_ok()
    assert result.unwrap().is_empty
    assert result.unwrap().record == default_record()


async def test_prefill_failure_becomes_notification() -> None:
    timeout = ServiceError("timeout of 10000ms exceeded", code="ECONNABORTED")
    extractor = FakeExtractor(error=timeout)
    service = PrefillService(extractor, FakePredictor())

    result = await service.prefill_from_document(b"img", "lab.png")

    assert result.is_err()
    failure = result.unwrap_err()
    assert isinstance(failure, OperationFailed)
    assert failure.notification == "Error extracting data from image: timeout of 10000ms exceeded"
    assert failure.cause.code == "ECONNABORTED"


async def test_prefill_without_file_reports_no_file() -> None:
    extractor = FakeExtractor(error=ServiceError("No file selected", code="ERR_NO_FILE"))
    service = PrefillService(extractor, FakePredictor())

    result = await service.prefill_from_document(b"", "")

    assert result.unwrap_err().notification == "No file selected"


async def test_submit_returns_prediction() -> None:
    predictor = FakePredictor(prediction=0)
    service = PrefillService(FakeExtractor(), predictor)
    record = default_record().with_values({TargetField.BMI: 33.6})

    result = await service.submit(record)

    assert result.unwrap().prediction == 0
    assert predictor.submitted == [record]


async def test_submit_failure_becomes_notification() -> None:
    predictor = FakePredictor(error=ServiceError("model not loaded", status=500))
    service = PrefillService(FakeExtractor(), predictor)

    result = await service.submit(default_record())

    assert result.unwrap_err().notification == "Error making prediction: model not loaded"
    assert result.unwrap_err().cause.status == 500
