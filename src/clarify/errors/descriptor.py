"""
Normalized view of a raised evaluation failure.

The classifiers never look at exception types directly. A raised failure is
turned into a FailureDescriptor once, at the boundary, and the rules match
on its fields.
"""

import logging
import traceback
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .exceptions import EvaluationError, ExpressionParseError, SpreadsheetError

logger = logging.getLogger(__name__)

NULL_REFERENCE_MESSAGE = "Object reference not set to an instance of an object"

TOKEN_FIELD = "token"
CELLS_FIELD = "cells"


class FailureKind(Enum):
    """Shape of a raised failure"""
    EXPRESSION_PARSE = "expression_parse"
    SPREADSHEET = "spreadsheet"
    NULL_REFERENCE = "null_reference"
    GENERIC = "generic"


@dataclass(frozen=True)
class FailureDescriptor:
    """
    Immutable description of a failure, consumed by the classifier chain.

    Attributes:
        message: Failure text, verbatim
        kind: Shape of the failure
        stack_frames: Trace lines, in order (may be empty)
        structured_fields: Extra data keyed by "token" / "cells"
    """
    message: str
    kind: FailureKind = FailureKind.GENERIC
    stack_frames: Tuple[str, ...] = ()
    structured_fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        # Copy into immutable containers
        object.__setattr__(self, "stack_frames", tuple(self.stack_frames))
        object.__setattr__(
            self, "structured_fields", MappingProxyType(dict(self.structured_fields))
        )

    def get_field(self, name: str) -> Optional[str]:
        """Structured field value, or None when absent"""
        return self.structured_fields.get(name)

    def stack_contains(self, text: str) -> bool:
        """Check if any stack line contains text (case-sensitive)"""
        return any(text in frame for frame in self.stack_frames)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FailureDescriptor":
        """
        Build a descriptor from a JSON-like mapping.

        Unknown kinds map to GENERIC. A "cells" list is comma-joined; other
        non-string structured values are dropped. stack_frames may be a list
        of lines or one trace string; anything else is ignored.

        Args:
            data: Mapping with "message" and optional "kind", "stack_frames",
                  "structured_fields"

        Returns:
            FailureDescriptor
        """
        try:
            kind = FailureKind(str(data.get("kind", FailureKind.GENERIC.value)).lower())
        except ValueError:
            logger.debug(f"Unknown failure kind {data.get('kind')!r}, treating as generic")
            kind = FailureKind.GENERIC

        raw_fields = data.get("structured_fields")
        if not isinstance(raw_fields, dict):
            raw_fields = {}
        fields = {key: value for key, value in raw_fields.items() if isinstance(value, str)}
        if isinstance(raw_fields.get(CELLS_FIELD), list):
            fields[CELLS_FIELD] = _join_cells(raw_fields[CELLS_FIELD])

        frames = data.get("stack_frames")
        if isinstance(frames, str):
            frames = frames.split("\n")
        elif not isinstance(frames, list):
            frames = ()

        message = data.get("message")

        return cls(
            message="" if message is None else str(message),
            kind=kind,
            stack_frames=tuple(str(frame) for frame in frames if frame),
            structured_fields=fields
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict"""
        return {
            "message": self.message,
            "kind": self.kind.value,
            "stack_frames": list(self.stack_frames),
            "structured_fields": dict(self.structured_fields),
        }


def describe_failure(error: BaseException) -> FailureDescriptor:
    """
    Build a FailureDescriptor from a raised failure.

    Never raises. A structured field that can't be read is left out, so
    rules depending on it won't match.

    Args:
        error: The raised exception

    Returns:
        FailureDescriptor for the classifier chain
    """
    message = _failure_message(error)

    return FailureDescriptor(
        message=message,
        kind=_failure_kind(error, message),
        stack_frames=_stack_frames(error),
        structured_fields=_structured_fields(error)
    )


def _failure_message(error: BaseException) -> str:
    if isinstance(error, EvaluationError) and isinstance(error.message, str):
        return error.message
    try:
        return str(error)
    except Exception as e:
        logger.debug(f"Could not read message of {type(error).__name__}: {e}")
        return type(error).__name__


def _failure_kind(error: BaseException, message: str) -> FailureKind:
    if isinstance(error, ExpressionParseError):
        return FailureKind.EXPRESSION_PARSE
    if isinstance(error, SpreadsheetError):
        return FailureKind.SPREADSHEET
    if message == NULL_REFERENCE_MESSAGE:
        return FailureKind.NULL_REFERENCE
    return FailureKind.GENERIC


def _structured_fields(error: BaseException) -> Dict[str, str]:
    if not isinstance(error, SpreadsheetError):
        return {}

    fields = {}

    if error.token is not None:
        try:
            fields[TOKEN_FIELD] = str(error.token)
        except Exception as e:
            logger.debug(f"Could not read token from {type(error).__name__}: {e}")

    if error.cells is not None:
        try:
            fields[CELLS_FIELD] = _join_cells(error.cells)
        except Exception as e:
            logger.debug(f"Could not read cells from {type(error).__name__}: {e}")

    return fields


def _join_cells(cells: Any) -> str:
    """Render a cell collection as a comma-joined string"""
    if isinstance(cells, str):
        return cells
    if isinstance(cells, (set, frozenset)):
        return ",".join(sorted(str(cell) for cell in cells))
    if isinstance(cells, Iterable):
        return ",".join(str(cell) for cell in cells)
    return str(cells)


def _stack_frames(error: BaseException) -> Tuple[str, ...]:
    trace = getattr(error, "stack_trace", None)

    if not isinstance(trace, str):
        try:
            trace = "".join(traceback.format_exception(
                type(error), error, error.__traceback__, chain=False
            ))
        except Exception as e:
            logger.debug(f"Could not format traceback: {e}")
            return ()

    return tuple(line for line in trace.split("\n") if line)
