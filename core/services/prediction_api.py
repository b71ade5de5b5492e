"""
Clients for the document extraction and diabetes prediction services.

Both services live behind the same backend:

- ``POST /extract`` takes a multipart ``image`` upload and answers
  ``{"extracted": {label: value, ...}}``
- ``POST /predict`` takes the flat eight-field payload and answers
  ``{"prediction": ...}``

Failures never escape as exceptions; they come back as ``Result.err`` holding a
``ServiceError`` whose message is fit to show the user.
"""

from collections.abc import Mapping
from typing import Any, Protocol

import httpx

from core.config import ServiceConfig
from core.domain.models import PredictionResult, ReconciledRecord
from core.services.result import Result, logger

UNKNOWN_ERROR = "Unknown error"
NO_FILE_MESSAGE = "No file selected"


class ServiceError(Exception):
    """A failed call to the extraction or prediction service."""

    def __init__(self, message: str, status: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code


class ExtractionService(Protocol):
    """Turns an uploaded document into loosely-labeled key/value pairs."""

    async def extract(
        self, content: bytes, filename: str, content_type: str = "application/octet-stream"
    ) -> Result[dict[str, Any], ServiceError]: ...


class PredictionService(Protocol):
    """Scores a complete measurement record."""

    async def predict(self, record: ReconciledRecord) -> Result[PredictionResult, ServiceError]: ...


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        err = payload.get("error")
        if isinstance(err, str) and err.strip():
            return err.strip()
    return f"Request failed with status code {response.status_code}"


def _service_error(exc: Exception) -> ServiceError:
    """Map transport and protocol failures onto a user-facing ServiceError."""
    if isinstance(exc, httpx.HTTPStatusError):
        return ServiceError(
            _error_message(exc.response),
            status=exc.response.status_code,
            code="ERR_BAD_RESPONSE",
        )
    if isinstance(exc, httpx.TimeoutException):
        return ServiceError(str(exc) or "Request timed out", code="ECONNABORTED")
    if isinstance(exc, httpx.RequestError):
        return ServiceError(str(exc) or UNKNOWN_ERROR, code="ERR_NETWORK")
    return ServiceError(str(exc) or UNKNOWN_ERROR)


class DiabetesApiClient:
    """
    Async HTTP client for the extraction and prediction endpoints.

    Satisfies both ``ExtractionService`` and ``PredictionService``. A fresh
    connection is opened per call; retries are left to the caller.
    """

    def __init__(
        self,
        config: ServiceConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self.logger = logger.bind(component="diabetes_api", backend=config.backend_url)

    def _client(self, timeout_seconds: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.backend_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=self._transport,
        )

    async def extract(
        self, content: bytes, filename: str, content_type: str = "application/octet-stream"
    ) -> Result[dict[str, Any], ServiceError]:
        """Upload a document and return the raw extraction record."""
        if not content:
            return Result.err(ServiceError(NO_FILE_MESSAGE, code="ERR_NO_FILE"))
        if len(content) > self.config.max_upload_bytes:
            return Result.err(
                ServiceError(
                    f"File exceeds the {self.config.max_upload_bytes} byte upload limit",
                    code="ERR_TOO_LARGE",
                )
            )

        try:
            async with self._client(self.config.extract_timeout_seconds) as client:
                response = await client.post(
                    "/extract", files={"image": (filename, content, content_type)}
                )
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            error = _service_error(e)
            self.logger.error(
                "extraction_request_failed",
                error=error.message,
                status=error.status,
                code=error.code,
            )
            return Result.err(error)

        extracted = body.get("extracted") if isinstance(body, Mapping) else None
        if not isinstance(extracted, Mapping):
            extracted = {}
        self.logger.info("extraction_received", label_count=len(extracted), filename=filename)
        return Result.ok(dict(extracted))

    async def predict(self, record: ReconciledRecord) -> Result[PredictionResult, ServiceError]:
        """Submit the eight-field payload and return the service's prediction."""
        try:
            async with self._client(self.config.predict_timeout_seconds) as client:
                response = await client.post("/predict", json=record.to_payload())
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            error = _service_error(e)
            self.logger.error(
                "prediction_request_failed",
                error=error.message,
                status=error.status,
                code=error.code,
            )
            return Result.err(error)

        if not isinstance(body, Mapping) or "prediction" not in body:
            self.logger.error("prediction_response_malformed")
            return Result.err(
                ServiceError("Prediction missing from response", code="ERR_BAD_RESPONSE")
            )

        self.logger.info("prediction_received", prediction=body["prediction"])
        return Result.ok(PredictionResult(prediction=body["prediction"], submitted=record))
