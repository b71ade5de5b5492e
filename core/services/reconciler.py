"""
Reconciliation of extracted label/value pairs into a complete measurement record.

The recognition service returns whatever labels it read off the document, in
whatever spelling. Each entry is canonicalized, resolved through the alias
table and coerced to a number; everything else is ignored. The output always
carries all eight fields.

Conflicts are settled by input order: when two labels resolve to the same
field, the later entry wins.
"""

from collections.abc import Mapping

from core.domain.models import (
    ReconciledRecord,
    ReconciliationReport,
    TargetField,
    default_record,
)
from core.services.aliases import resolve
from core.services.canonical import canonicalize
from core.services.coercion import DEFAULT_VALUE, try_coerce
from core.services.result import logger

RawExtractionRecord = Mapping[object, object]

_logger = logger.bind(component="reconciler")


def reconcile_with_report(raw: RawExtractionRecord | None) -> ReconciliationReport:
    """Reconcile ``raw`` and describe which fields were actually filled."""
    values: dict[TargetField, float] = {}
    invalid: set[TargetField] = set()
    overridden: list[TargetField] = []
    ignored: list[str] = []

    for label, raw_value in (raw or {}).items():
        text = label if isinstance(label, str) else str(label)
        resolved = resolve(canonicalize(text))
        if resolved.is_err():
            ignored.append(text)
            continue

        field = resolved.unwrap()
        value = try_coerce(raw_value)
        if field in values and field not in overridden:
            overridden.append(field)
        if value is None:
            invalid.add(field)
            value = DEFAULT_VALUE
        else:
            invalid.discard(field)
        values[field] = value

    record = default_record().with_values(values) if values else default_record()
    report = ReconciliationReport(
        record=record,
        resolved=tuple(values),
        ignored_labels=tuple(ignored),
        invalid=tuple(field for field in values if field in invalid),
        overridden=tuple(overridden),
    )

    _logger.info(
        "extraction_reconciled",
        resolved_count=len(report.resolved),
        ignored_count=len(report.ignored_labels),
        invalid_fields=[field.value for field in report.invalid],
        overridden_fields=[field.value for field in report.overridden],
    )
    if ignored:
        _logger.debug("extraction_labels_ignored", labels=ignored)
    return report


def reconcile(raw: RawExtractionRecord | None) -> ReconciledRecord:
    """Map an arbitrary extraction record onto the eight target fields.

    Never raises: unknown labels are skipped, unusable values become 0 and
    missing fields stay at 0.
    """
    return reconcile_with_report(raw).record
