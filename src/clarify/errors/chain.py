"""
Ordered classifier chain.

Classifiers are tried in list order and the first one that applies wins.
A fallback that always applies closes the chain, so a lookup never comes
back empty.
"""

from typing import Iterable, Tuple

from .classifiers import DEFAULT_CLASSIFIERS, GENERIC, Classifier
from .descriptor import FailureDescriptor


class ClassifierChain:
    """
    Immutable, ordered set of classifiers with a mandatory fallback.

    Safe to share between threads: nothing is mutated after construction.
    """

    __slots__ = ("_classifiers", "_fallback")

    def __init__(self, classifiers: Iterable[Classifier], *, fallback: Classifier):
        """
        Initialize the chain.

        Args:
            classifiers: Specific rules, highest priority first
            fallback: Rule used when no specific rule applies. Its
                      applies() must be true for every descriptor.

        Raises:
            TypeError: If a rule is not a Classifier
            ValueError: If the fallback is also listed among the rules
        """
        classifiers = tuple(classifiers)

        for classifier in classifiers + (fallback,):
            if not isinstance(classifier, Classifier):
                raise TypeError(f"Expected Classifier, got {type(classifier).__name__}")

        if fallback in classifiers:
            raise ValueError(
                f"Fallback classifier '{fallback.name}' must not be listed among the rules"
            )

        self._classifiers = classifiers
        self._fallback = fallback

    @property
    def classifiers(self) -> Tuple[Classifier, ...]:
        """Specific rules, in priority order"""
        return self._classifiers

    @property
    def fallback(self) -> Classifier:
        return self._fallback

    def find_first_match(self, descriptor: FailureDescriptor) -> Classifier:
        """
        Find the first classifier that applies to a descriptor.

        Args:
            descriptor: The failure to classify

        Returns:
            The first applying rule, or the fallback
        """
        for classifier in self._classifiers:
            if classifier.applies(descriptor):
                return classifier
        return self._fallback

    def classify(self, formula_name: str, descriptor: FailureDescriptor) -> str:
        """Render the message of the first matching classifier"""
        return self.find_first_match(descriptor).render(formula_name, descriptor)

    def __iter__(self):
        yield from self._classifiers
        yield self._fallback

    def __len__(self) -> int:
        return len(self._classifiers) + 1

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self)
        return f"ClassifierChain([{names}])"


# Built once and shared by every enricher
DEFAULT_CHAIN = ClassifierChain(DEFAULT_CLASSIFIERS, fallback=GENERIC)
