"""
Failure types raised by the formula evaluation engine.

These are the shapes the classifiers know how to recognize. The engine
itself lives elsewhere; it only needs to raise one of these.
"""

from typing import Iterable, Optional, Union


class EvaluationError(Exception):
    """Base exception for failures raised while evaluating a tax formula"""

    def __init__(self, message: str, stack_trace: Optional[str] = None):
        super().__init__(message)
        self.message = message
        # Trace text reported by the engine, when it runs out of process
        self.stack_trace = stack_trace


class ExpressionParseError(EvaluationError):
    """Formula text could not be parsed (usually a locale delimiter issue)"""
    pass


class SpreadsheetError(EvaluationError):
    """
    Structured spreadsheet failure.

    Carries the offending token for failed lookups, or the cells involved
    in a circular reference.
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        cells: Optional[Union[str, Iterable[str]]] = None,
        stack_trace: Optional[str] = None
    ):
        super().__init__(message, stack_trace=stack_trace)
        self.token = token
        self.cells = cells
