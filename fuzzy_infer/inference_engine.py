import logging
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np

from fuzzy_infer.config import (
    DEFAULT_PRIORITY,
    DEFAULT_STEP,
    DEFUZZIFICATION_METHODS,
    PRIORITY_SCALE,
    PRIORITY_THRESHOLDS,
)
from fuzzy_infer.fuzzy_rule import ConsequenceKind, FuzzyRule, Inputs, RuleEvaluation
from fuzzy_infer.fuzzy_sets import FuzzySet, domain_points

logger = logging.getLogger(__name__)


class InferenceEngine:
    """
    Evaluates an ordered rule base.

    A single rule base serves two outputs: `infer` maps the labels produced by
    the satisfied rules to a priority label through a weighted average, while
    the `defuzzify_*` methods aggregate the fuzzy-set consequences of all the
    rules (max) and reduce the result to a crisp number.

    The engine holds no mutable state, so an instance can be shared freely.
    """

    def __init__(self, rules: Iterable[FuzzyRule]):
        """
        Initializes the engine

        Args:
            rules: Rules, evaluated in the given order
        """
        self.rules = tuple(rules)
        logger.debug("Inference engine initialized with %d rules", len(self.rules))

    # ------------------------------------------------------------------
    # label inference
    # ------------------------------------------------------------------

    def evaluate_rules(self, inputs: Inputs) -> List[RuleEvaluation]:
        """Evaluations of the rules whose condition holds, in rule order"""
        results = []
        for rule in self.rules:
            evaluation = rule.evaluate(inputs)
            if evaluation is not None:
                results.append(evaluation)
        return results

    def infer(self, inputs: Inputs) -> str:
        """
        Priority label for the given inputs

        Args:
            inputs: Crisp input values by name

        Returns:
            One of the labels of the priority scale
        """
        results = self.evaluate_rules(inputs)
        logger.debug("%d of %d rules fired", len(results), len(self.rules))
        return self.aggregate_results(results)

    def priority_score(self, inputs: Inputs) -> Optional[float]:
        """Weighted-average score behind `infer`, None if nothing can be scored"""
        return self._weighted_score(self.evaluate_rules(inputs))

    def aggregate_results(self, results: Sequence[RuleEvaluation]) -> str:
        """
        Combines rule evaluations into a single priority label

        Args:
            results: Evaluations of the satisfied rules

        Returns:
            The label of the weighted-average score, or the default label when
            there is nothing to aggregate or the total weight is not positive
        """
        score = self._weighted_score(results)
        if score is None:
            return DEFAULT_PRIORITY

        label = self.reverse_priority_mapping(score)
        logger.debug("Aggregated score %.4f -> %s", score, label)
        return label

    def _weighted_score(self, results: Sequence[RuleEvaluation]) -> Optional[float]:
        if not results:
            return None

        total_weight = 0.0
        weighted_sum = 0.0
        for result, weight in results:
            weighted_sum += self.priority_mapping(result) * weight
            total_weight += weight

        if total_weight > 0:
            return weighted_sum / total_weight
        return None

    @staticmethod
    def priority_mapping(priority: Any) -> float:
        """Score of a rule payload; fuzzy sets and unknown payloads score 0"""
        if isinstance(priority, str):
            return PRIORITY_SCALE.get(priority, 0.0)
        return 0.0

    @staticmethod
    def reverse_priority_mapping(score: float) -> str:
        for threshold, label in PRIORITY_THRESHOLDS:
            if score >= threshold:
                return label
        return DEFAULT_PRIORITY

    # ------------------------------------------------------------------
    # defuzzification
    # ------------------------------------------------------------------

    def fuzzy_set_consequences(self) -> List[FuzzySet]:
        """Fuzzy-set consequences of all rules, in rule order"""
        return [
            rule.consequence for rule in self.rules
            if rule.consequence_kind is ConsequenceKind.FUZZY_SET
        ]

    def aggregate_membership(self, xs: Sequence[float]) -> np.ndarray:
        """
        Pointwise maximum of the fuzzy-set consequences

        Args:
            xs: Sample points

        Returns:
            Aggregated membership at each point (0 where no set is positive)
        """
        mu = np.zeros(len(xs), dtype=float)
        for fuzzy_set in self.fuzzy_set_consequences():
            mu = np.maximum(mu, fuzzy_set.sample(xs))
        return mu

    def defuzzify_centroid(self, x_min: float, x_max: float, step: float = DEFAULT_STEP) -> float:
        """
        Centre of gravity of the aggregated output

        Returns:
            sum(x * mu(x)) / sum(mu(x)), or 0 when the aggregate has no mass
        """
        xs = domain_points(x_min, x_max, step)
        mu = self.aggregate_membership(xs)

        denominator = float(np.sum(mu))
        if denominator == 0:
            logger.warning("Aggregated output has no mass on [%s, %s]. Outputting 0.", x_min, x_max)
            return 0.0

        centroid = float(np.sum(xs * mu)) / denominator
        logger.debug("Centroid: %.4f", centroid)
        return centroid

    def defuzzify_mom(self, x_min: float, x_max: float, step: float = DEFAULT_STEP) -> float:
        """
        Mean of maxima of the aggregated output

        Ties with the peak are detected by exact floating point equality, so
        a plateau is only recognised where the membership values are identical.

        Returns:
            Mean of the sample points reaching the peak, or 0 when nothing is
            sampled or the peak is not positive
        """
        xs = domain_points(x_min, x_max, step)
        if xs.size == 0:
            return 0.0

        mu = self.aggregate_membership(xs)
        peak = float(np.max(mu))
        if not peak > 0:
            logger.warning("Aggregated output has no positive membership on [%s, %s]. Outputting 0.",
                           x_min, x_max)
            return 0.0

        maxima = xs[mu == peak]
        mom = float(np.mean(maxima))
        logger.debug("Mean of maxima: %.4f (%d points at %.4f)", mom, maxima.size, peak)
        return mom

    def defuzzify_bisector(self, x_min: float, x_max: float, step: float = DEFAULT_STEP) -> float:
        """
        Point splitting the area under the aggregated output in two halves

        Returns:
            The first sample where the running area reaches half of the total,
            or x_min when the aggregate has no area
        """
        xs = domain_points(x_min, x_max, step)
        mu = self.aggregate_membership(xs)

        # both passes accumulate left to right, so the total is the last running sum
        left_area = np.cumsum(mu * step)
        total_area = float(left_area[-1]) if left_area.size else 0.0
        if total_area == 0:
            logger.warning("Aggregated output has no area on [%s, %s]. Outputting %s.",
                           x_min, x_max, x_min)
            return x_min

        reached = np.nonzero(left_area >= total_area / 2)[0]
        if reached.size == 0:
            return x_min

        bisector = float(xs[reached[0]])
        logger.debug("Bisector: %.4f", bisector)
        return bisector

    def defuzzify(self, x_min: float, x_max: float, step: float = DEFAULT_STEP,
                  method: str = "centroid") -> float:
        """
        Dispatcher for the defuzzification methods

        Args:
            x_min: Left end of the output domain
            x_max: Right end of the output domain
            step: Sampling step
            method: 'centroid', 'mom' or 'bisector'

        Returns:
            Crisp output value
        """
        if method == "centroid":
            return self.defuzzify_centroid(x_min, x_max, step)
        elif method == "mom":
            return self.defuzzify_mom(x_min, x_max, step)
        elif method == "bisector":
            return self.defuzzify_bisector(x_min, x_max, step)
        raise ValueError(f"method must be one of {list(DEFUZZIFICATION_METHODS)}")

    def __str__(self):
        return f"InferenceEngine(rules={len(self.rules)})"
