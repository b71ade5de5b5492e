"""
Core services for the application.

This package contains the reconciliation pipeline (canonicalize, resolve,
coerce, reconcile) and the clients for the extraction and prediction services.
"""

from .aliases import ALIAS_TABLE, ALIAS_TABLE_VERSION, UnknownLabelError, aliases_for, resolve
from .canonical import canonicalize
from .coercion import coerce, try_coerce
from .reconciler import RawExtractionRecord, reconcile, reconcile_with_report
from .result import Result

__all__ = [
    "ALIAS_TABLE",
    "ALIAS_TABLE_VERSION",
    "RawExtractionRecord",
    "Result",
    "UnknownLabelError",
    "aliases_for",
    "canonicalize",
    "coerce",
    "reconcile",
    "reconcile_with_report",
    "resolve",
    "try_coerce",
]
