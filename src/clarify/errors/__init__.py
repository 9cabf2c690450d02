"""
Error classification and enrichment for tax formula failures.
"""

from .exceptions import EvaluationError, ExpressionParseError, SpreadsheetError
from .descriptor import FailureDescriptor, FailureKind, describe_failure
from .classifiers import Classifier, DEFAULT_CLASSIFIERS, GENERIC
from .chain import ClassifierChain, DEFAULT_CHAIN
from .enricher import (
    ErrorEnricher,
    ErrorResult,
    SpreadsheetWorkbook,
    StaticWorkbook,
    enrich_error
)

__all__ = [
    # Failure types
    "EvaluationError",
    "ExpressionParseError",
    "SpreadsheetError",
    # Descriptor
    "FailureDescriptor",
    "FailureKind",
    "describe_failure",
    # Classification
    "Classifier",
    "DEFAULT_CLASSIFIERS",
    "GENERIC",
    "ClassifierChain",
    "DEFAULT_CHAIN",
    # Enrichment
    "ErrorEnricher",
    "ErrorResult",
    "SpreadsheetWorkbook",
    "StaticWorkbook",
    "enrich_error",
]
