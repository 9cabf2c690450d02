"""
Classifiers that turn a failure descriptor into a user-facing message.

Each classifier is a pair of plain functions: one recognizes a failure
shape, the other renders the message for it. The rules below are listed in
priority order; see chain.py for how they are evaluated.
"""

from dataclasses import dataclass
from typing import Callable, Tuple

from .descriptor import (
    CELLS_FIELD,
    NULL_REFERENCE_MESSAGE,
    TOKEN_FIELD,
    FailureDescriptor,
    FailureKind,
)


@dataclass(frozen=True)
class Classifier:
    """A single recognize-and-render rule"""
    name: str
    applies: Callable[[FailureDescriptor], bool]
    render: Callable[[str, FailureDescriptor], str]


# Invalid expression

def _is_invalid_expression(descriptor: FailureDescriptor) -> bool:
    return descriptor.kind == FailureKind.EXPRESSION_PARSE


def _invalid_expression_message(formula_name: str, descriptor: FailureDescriptor) -> str:
    return (
        "Invalid expression found in tax formula [" + formula_name +
        "]. Check that separators and delimiters use the English locale."
    )


# Circular reference

def _is_circular_reference(descriptor: FailureDescriptor) -> bool:
    return (
        descriptor.kind == FailureKind.SPREADSHEET
        and descriptor.message.startswith("Circular Reference")
        and descriptor.get_field(CELLS_FIELD) is not None
    )


def _circular_reference_message(formula_name: str, descriptor: FailureDescriptor) -> str:
    return (
        "Circular Reference in spreadsheet related to formula '" + formula_name +
        "'. Cells: " + descriptor.structured_fields[CELLS_FIELD]
    )


# Missing lookup table

def _is_missing_lookup_table(descriptor: FailureDescriptor) -> bool:
    return (
        descriptor.message == NULL_REFERENCE_MESSAGE
        and descriptor.stack_contains("VLookup")
    )


def _missing_lookup_table_message(formula_name: str, descriptor: FailureDescriptor) -> str:
    return "Missing Lookup Table"


# No match for token

def _is_no_match(descriptor: FailureDescriptor) -> bool:
    return (
        descriptor.kind == FailureKind.SPREADSHEET
        and descriptor.message == "No matches found"
        and descriptor.get_field(TOKEN_FIELD) is not None
    )


def _no_match_message(formula_name: str, descriptor: FailureDescriptor) -> str:
    return (
        "No match found for token [" + descriptor.structured_fields[TOKEN_FIELD] +
        "] related to formula '" + formula_name + "'."
    )


# Fallback

def _always(descriptor: FailureDescriptor) -> bool:
    return True


def _original_message(formula_name: str, descriptor: FailureDescriptor) -> str:
    return descriptor.message


INVALID_EXPRESSION = Classifier(
    name="invalid_expression",
    applies=_is_invalid_expression,
    render=_invalid_expression_message
)

CIRCULAR_REFERENCE = Classifier(
    name="circular_reference",
    applies=_is_circular_reference,
    render=_circular_reference_message
)

MISSING_LOOKUP_TABLE = Classifier(
    name="missing_lookup_table",
    applies=_is_missing_lookup_table,
    render=_missing_lookup_table_message
)

NO_MATCH_FOUND = Classifier(
    name="no_match_found",
    applies=_is_no_match,
    render=_no_match_message
)

GENERIC = Classifier(
    name="generic",
    applies=_always,
    render=_original_message
)

# Priority order: earlier rules win
DEFAULT_CLASSIFIERS: Tuple[Classifier, ...] = (
    INVALID_EXPRESSION,
    CIRCULAR_REFERENCE,
    MISSING_LOOKUP_TABLE,
    NO_MATCH_FOUND,
)
