"""
Form prefill and submission workflows.

Ties the external services to the reconciler: an uploaded document is sent for
extraction, the returned pairs are reconciled, and the caller decides how to
apply the result to its own form state. Submission sends a complete record to
the prediction service.
"""

from core.domain.models import PredictionResult, ReconciledRecord, ReconciliationReport
from core.services.prediction_api import ExtractionService, PredictionService, ServiceError
from core.services.reconciler import reconcile_with_report
from core.services.result import Result, logger


class OperationFailed(Exception):
    """User-facing failure notification for a prefill or submit attempt."""

    def __init__(self, notification: str, cause: ServiceError) -> None:
        super().__init__(notification)
        self.notification = notification
        self.cause = cause


class PrefillService:
    """Runs document prefill and prediction submission against injected services."""

    def __init__(self, extractor: ExtractionService, predictor: PredictionService) -> None:
        self.extractor = extractor
        self.predictor = predictor
        self.logger = logger.bind(component="prefill_service")

    async def prefill_from_document(
        self, content: bytes, filename: str, content_type: str = "application/octet-stream"
    ) -> Result[ReconciliationReport, OperationFailed]:
        """Extract labeled values from a document and reconcile them.

        Use ``report.record`` for a fresh form, or ``report.apply_to(current)``
        to overwrite only the fields the document actually supplied.
        """
        extracted = await self.extractor.extract(content, filename, content_type)
        if extracted.is_err():
            cause = extracted.unwrap_err()
            notification = (
                cause.message
                if cause.code == "ERR_NO_FILE"
                else f"Error extracting data from image: {cause.message}"
            )
            return Result.err(OperationFailed(notification, cause))

        report = reconcile_with_report(extracted.unwrap())
        if report.is_empty:
            # Indistinguishable from an all-zero document once applied.
            self.logger.warning(
                "extraction_matched_no_fields",
                filename=filename,
                ignored_count=len(report.ignored_labels),
            )
        return Result.ok(report)

    async def submit(self, record: ReconciledRecord) -> Result[PredictionResult, OperationFailed]:
        """Send a complete record for prediction."""
        predicted = await self.predictor.predict(record)
        if predicted.is_err():
            cause = predicted.unwrap_err()
            return Result.err(OperationFailed(f"Error making prediction: {cause.message}", cause))
        return Result.ok(predicted.unwrap())
