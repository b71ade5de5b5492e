"""
Domain models for diabetes risk measurements.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation but could be swapped to dataclasses if needed.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class TargetField(str, Enum):
    """The eight numeric measurements the prediction service expects.

    Values are the wire names used in the prediction payload. Declaration
    order is the display order of the form.
    """

    PREGNANCIES = "pregnancies"
    GLUCOSE = "glucose"
    BLOOD_PRESSURE = "bloodPressure"
    SKIN_THICKNESS = "skinThickness"
    INSULIN = "insulin"
    BMI = "bmi"
    DIABETES_PEDIGREE_FUNCTION = "diabetesPedigreeFunction"
    AGE = "age"

    @property
    def label(self) -> str:
        return _FIELD_DISPLAY[self][0]

    @property
    def step(self) -> float:
        """Input granularity used when the value is shown in a numeric input."""
        return _FIELD_DISPLAY[self][1]


_FIELD_DISPLAY: dict[TargetField, tuple[str, float]] = {
    TargetField.PREGNANCIES: ("Pregnancies", 1),
    TargetField.GLUCOSE: ("Glucose", 1),
    TargetField.BLOOD_PRESSURE: ("Blood Pressure", 1),
    TargetField.SKIN_THICKNESS: ("Skin Thickness", 1),
    TargetField.INSULIN: ("Insulin", 1),
    TargetField.BMI: ("BMI", 0.1),
    TargetField.DIABETES_PEDIGREE_FUNCTION: ("Diabetes Pedigree Function", 0.01),
    TargetField.AGE: ("Age", 1),
}


class ReconciledRecord(BaseModel):
    """Complete set of measurements, one finite number per target field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)  # Immutable for better reasoning

    pregnancies: float = Field(default=0.0, alias=TargetField.PREGNANCIES.value)
    glucose: float = Field(default=0.0, alias=TargetField.GLUCOSE.value)
    blood_pressure: float = Field(default=0.0, alias=TargetField.BLOOD_PRESSURE.value)
    skin_thickness: float = Field(default=0.0, alias=TargetField.SKIN_THICKNESS.value)
    insulin: float = Field(default=0.0, alias=TargetField.INSULIN.value)
    bmi: float = Field(default=0.0, alias=TargetField.BMI.value)
    diabetes_pedigree_function: float = Field(
        default=0.0, alias=TargetField.DIABETES_PEDIGREE_FUNCTION.value
    )
    age: float = Field(default=0.0, alias=TargetField.AGE.value)

    @field_validator("*")
    @classmethod
    def must_be_finite(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError("measurement values must be finite numbers")
        return v

    def get(self, field: TargetField) -> float:
        return getattr(self, _ATTRIBUTES[field])

    def as_dict(self) -> dict[TargetField, float]:
        return {field: self.get(field) for field in TargetField}

    def to_payload(self) -> dict[str, float]:
        """Flat camelCase body for the prediction request."""
        return {field.value: self.get(field) for field in TargetField}

    def with_values(self, values: Mapping[TargetField, float]) -> "ReconciledRecord":
        """Return a copy with the given fields replaced (validated)."""
        merged = self.to_payload()
        merged.update({field.value: value for field, value in values.items()})
        return ReconciledRecord.model_validate(merged)


# TargetField -> attribute name on ReconciledRecord
_ATTRIBUTES: dict[TargetField, str] = {
    TargetField(info.alias): name for name, info in ReconciledRecord.model_fields.items()
}


def default_record() -> ReconciledRecord:
    """Zero-valued baseline record."""
    return ReconciledRecord()


class ReconciliationReport(BaseModel):
    """Reconciled record plus a coverage signal describing how it was produced."""

    model_config = ConfigDict(frozen=True)

    record: ReconciledRecord
    resolved: tuple[TargetField, ...] = Field(
        default=(), description="Fields written from the raw record, in first-seen order"
    )
    ignored_labels: tuple[str, ...] = Field(
        default=(), description="Raw labels that matched no alias"
    )
    invalid: tuple[TargetField, ...] = Field(
        default=(), description="Resolved fields whose final raw value was not numeric"
    )
    overridden: tuple[TargetField, ...] = Field(
        default=(), description="Fields written more than once (last write won)"
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def coverage(self) -> float:
        return len(self.resolved) / len(TargetField)

    @property
    def is_empty(self) -> bool:
        """True when nothing in the raw record resolved to a field."""
        return not self.resolved

    def apply_to(self, current: ReconciledRecord) -> ReconciledRecord:
        """Merge only the resolved fields onto an existing record."""
        return current.with_values({field: self.record.get(field) for field in self.resolved})


class PredictionResult(BaseModel):
    """Outcome returned by the prediction service."""

    model_config = ConfigDict(frozen=True)

    prediction: Any
    submitted: ReconciledRecord
