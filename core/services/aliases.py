"""
Alias table mapping canonical label keys to target fields.

This is the single owner of label vocabulary: anything that needs to know which
extracted labels feed which measurement imports it from here.
"""

from types import MappingProxyType

from core.domain.models import TargetField
from core.services.canonical import canonicalize
from core.services.result import Result

# Bump when keys are added, removed or remapped.
ALIAS_TABLE_VERSION = 1

ALIAS_TABLE: MappingProxyType[str, TargetField] = MappingProxyType(
    {
        "pregnancies": TargetField.PREGNANCIES,
        "glucose": TargetField.GLUCOSE,
        "bloodpressure": TargetField.BLOOD_PRESSURE,
        "systolic": TargetField.BLOOD_PRESSURE,
        "skinthickness": TargetField.SKIN_THICKNESS,
        "tricepsskin": TargetField.SKIN_THICKNESS,
        "insulin": TargetField.INSULIN,
        "bmi": TargetField.BMI,
        "diabetespedigreefunction": TargetField.DIABETES_PEDIGREE_FUNCTION,
        "dpf": TargetField.DIABETES_PEDIGREE_FUNCTION,
        "age": TargetField.AGE,
    }
)


class UnknownLabelError(LookupError):
    """A canonical key that matches no alias."""

    def __init__(self, key: str) -> None:
        super().__init__(f"No target field for label key {key!r}")
        self.key = key


def _check_table() -> None:
    for key in ALIAS_TABLE:
        if canonicalize(key) != key:
            raise ValueError(f"Alias key {key!r} is not in canonical form")
    for field in TargetField:
        if ALIAS_TABLE.get(canonicalize(field.value)) is not field:
            raise ValueError(f"Primary name of {field.value!r} is missing from the alias table")


_check_table()


def resolve(key: str) -> Result[TargetField, UnknownLabelError]:
    """Exact lookup of a canonical key. Unknown keys are an error result, not an exception."""
    field = ALIAS_TABLE.get(key)
    if field is None:
        return Result.err(UnknownLabelError(key))
    return Result.ok(field)


def aliases_for(field: TargetField) -> tuple[str, ...]:
    """All canonical keys that resolve to ``field``, in table order."""
    return tuple(key for key, target in ALIAS_TABLE.items() if target is field)
