import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple, Optional

from fuzzy_infer.fuzzy_sets import FuzzySet

logger = logging.getLogger(__name__)

Inputs = Mapping[str, float]


class ConsequenceKind(Enum):
    """What a rule produces when its condition holds"""

    FUZZY_SET = "fuzzy_set"
    LABEL = "label"
    UNRECOGNIZED = "unrecognized"


class RuleEvaluation(NamedTuple):
    """Payload and weight of a rule whose condition held"""

    result: Any
    weight: float


def consequence_kind(consequence: Any) -> ConsequenceKind:
    # FuzzySet is callable too, so it has to be tested first
    if isinstance(consequence, FuzzySet):
        return ConsequenceKind.FUZZY_SET
    if callable(consequence):
        return ConsequenceKind.LABEL
    return ConsequenceKind.UNRECOGNIZED


@dataclass(frozen=True)
class FuzzyRule:
    """
    IF condition(inputs) THEN consequence, with a weight.

    The consequence is either a FuzzySet, consumed by defuzzification, or a
    function of the inputs returning a priority label, consumed by label
    inference. Any other value is accepted and behaves as an empty payload.
    """

    condition: Callable[[Inputs], bool]
    consequence: Any
    weight: float = 1.0

    def __post_init__(self):
        if self.consequence_kind is ConsequenceKind.UNRECOGNIZED:
            logger.debug("Rule consequence of type %s is not recognized, it will score 0",
                         type(self.consequence).__name__)

    @property
    def consequence_kind(self) -> ConsequenceKind:
        return consequence_kind(self.consequence)

    def evaluate(self, inputs: Inputs) -> Optional[RuleEvaluation]:
        """
        Evaluates the rule against the inputs

        Args:
            inputs: Crisp input values by name

        Returns:
            RuleEvaluation(result, weight) if the condition holds, None otherwise
        """
        if not self.condition(inputs):
            return None

        kind = self.consequence_kind
        if kind is ConsequenceKind.FUZZY_SET:
            result = self.consequence
        elif kind is ConsequenceKind.LABEL:
            result = self.consequence(inputs)
        else:
            result = None
        return RuleEvaluation(result, self.weight)

    def __str__(self):
        kind = self.consequence_kind
        if kind is ConsequenceKind.FUZZY_SET:
            target = self.consequence.name
        elif kind is ConsequenceKind.LABEL:
            target = getattr(self.consequence, "__name__", "label")
        else:
            target = "?"
        return f"Rule(then={target}, kind={kind.value}, weight={self.weight})"
