"""
Error enrichment for failed tax formula evaluations.

Combines workbook metadata with the classifier chain to produce the
message shown to the user.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .chain import DEFAULT_CHAIN, ClassifierChain
from .descriptor import FailureDescriptor, describe_failure

logger = logging.getLogger(__name__)


class SpreadsheetWorkbook(ABC):
    """
    Read-only workbook metadata needed to describe a failure.

    Both accessors must be free of side effects and return stable values
    for a given workbook snapshot.
    """

    @abstractmethod
    def get_formula_name(self) -> str:
        """Name of the tax formula being evaluated"""
        pass

    @abstractmethod
    def get_presentation(self) -> Any:
        """Opaque value describing how the error should be displayed"""
        pass


@dataclass(frozen=True)
class StaticWorkbook(SpreadsheetWorkbook):
    """Workbook metadata with fixed values"""
    formula_name: str
    presentation: Any = None

    def get_formula_name(self) -> str:
        return self.formula_name

    def get_presentation(self) -> Any:
        return self.presentation


@dataclass(frozen=True)
class ErrorResult:
    """User-facing description of a failed formula evaluation"""
    formula_name: str
    message: str
    presentation: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict"""
        return {
            "formula_name": self.formula_name,
            "message": self.message,
            "presentation": self.presentation,
        }


class ErrorEnricher:
    """
    Turns a raised failure into an ErrorResult.

    Stateless apart from its chain, so one instance can serve any number of
    concurrent calls.
    """

    def __init__(self, chain: Optional[ClassifierChain] = None):
        """
        Initialize the enricher.

        Args:
            chain: Classifier chain to use (default: DEFAULT_CHAIN)
        """
        self.chain = chain or DEFAULT_CHAIN

    def enrich(
        self,
        workbook: SpreadsheetWorkbook,
        failure: Union[FailureDescriptor, BaseException]
    ) -> ErrorResult:
        """
        Build the user-facing result for a failure.

        Args:
            workbook: Metadata of the workbook whose formula failed
            failure: The raised exception, or an already built descriptor

        Returns:
            ErrorResult with the formula name, message and presentation
        """
        formula_name = workbook.get_formula_name()
        presentation = workbook.get_presentation()

        descriptor = failure if isinstance(failure, FailureDescriptor) else describe_failure(failure)

        classifier = self.chain.find_first_match(descriptor)
        logger.debug(
            f"Failure in formula '{formula_name}' matched classifier '{classifier.name}'",
            extra={"extra_data": {
                "formula_name": formula_name,
                "classifier": classifier.name,
                "kind": descriptor.kind.value,
            }}
        )

        try:
            message = classifier.render(formula_name, descriptor)
        except Exception as e:
            # Fall back to the original failure text
            logger.warning(
                f"Classifier '{classifier.name}' failed to render message: {e}",
                exc_info=True
            )
            message = self.chain.fallback.render(formula_name, descriptor)

        return ErrorResult(
            formula_name=formula_name,
            message=message,
            presentation=presentation
        )


_default_enricher = ErrorEnricher()


def enrich_error(
    workbook: SpreadsheetWorkbook,
    failure: Union[FailureDescriptor, BaseException]
) -> ErrorResult:
    """
    Convenience function to enrich a failure with the default rules.

    Args:
        workbook: Metadata of the workbook whose formula failed
        failure: The raised exception, or an already built descriptor

    Returns:
        ErrorResult
    """
    return _default_enricher.enrich(workbook, failure)
