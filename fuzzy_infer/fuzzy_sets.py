import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence

import numpy as np
from simpful import FuzzySet as SimpfulFuzzySet
from simpful import Gaussian_MF, Trapezoidal_MF, Triangular_MF

from fuzzy_infer.config import DEFAULT_STEP, SAMPLE_COUNT_DECIMALS

logger = logging.getLogger(__name__)

MembershipFunction = Callable[[float], float]


def domain_points(x_min: float, x_max: float, step: float = DEFAULT_STEP) -> np.ndarray:
    """
    Samples the closed interval [x_min, x_max] with a fixed step

    The i-th point is x_min + i * step, for i in 0..floor((x_max - x_min) / step),
    so the number of points never depends on accumulated rounding. Every
    integration in the package samples through here.

    Args:
        x_min: Left end of the domain
        x_max: Right end of the domain
        step: Distance between consecutive points

    Returns:
        1-D array of sample points (empty when x_max < x_min)
    """
    if not np.isfinite(step) or step <= 0:
        raise ValueError(f"step must be a positive finite number, received {step}")
    if not (np.isfinite(x_min) and np.isfinite(x_max)):
        raise ValueError(f"Domain bounds must be finite, received [{x_min}, {x_max}]")

    if x_max < x_min:
        return np.empty(0, dtype=float)

    n_steps = int(np.floor(round((x_max - x_min) / step, SAMPLE_COUNT_DECIMALS)))
    points = x_min + np.arange(n_steps + 1, dtype=float) * step
    # the rounded count can put the last point a hair past x_max
    return np.minimum(points, x_max)


@dataclass(frozen=True)
class FuzzySet:
    """
    Named fuzzy set over the real line.

    The set only wraps its membership function; all combinators return new
    sets built from closures over the operands, which are never modified.
    A FuzzySet is callable, so it can itself be used as a membership function.
    """

    name: str
    membership: MembershipFunction

    def membership_degree(self, x: float) -> float:
        """Degree of membership of x"""
        return self.membership(x)

    def __call__(self, x: float) -> float:
        return self.membership(x)

    def sample(self, xs: Sequence[float]) -> np.ndarray:
        """
        Evaluates the membership function at every point of xs

        Args:
            xs: Sample points

        Returns:
            Array of membership degrees, aligned with xs
        """
        return np.array([self.membership(float(x)) for x in xs], dtype=float)

    def union(self, other: "FuzzySet") -> "FuzzySet":
        """Standard fuzzy OR: max of the two memberships"""
        return FuzzySet(
            f"Union({self.name}, {other.name})",
            lambda x: float(np.maximum(self.membership(x), other.membership(x))),
        )

    def intersection(self, other: "FuzzySet") -> "FuzzySet":
        """Standard fuzzy AND: min of the two memberships"""
        return FuzzySet(
            f"Intersection({self.name}, {other.name})",
            lambda x: float(np.minimum(self.membership(x), other.membership(x))),
        )

    def complement(self) -> "FuzzySet":
        return FuzzySet(f"Complement({self.name})", lambda x: 1 - self.membership(x))

    def normalize(self) -> "FuzzySet":
        """
        Clamps memberships above 1 back to 1

        Values <= 1 are returned unchanged: this divides by max(1, mu(x)) at
        each point and does not rescale by the peak of the set.
        """
        def normalized(x):
            mu = self.membership(x)
            return mu / max(1, mu)

        return FuzzySet(f"Normalized({self.name})", normalized)

    __or__ = union
    __and__ = intersection

    def __invert__(self) -> "FuzzySet":
        return self.complement()

    def centroid(self, x_min: float, x_max: float, step: float = DEFAULT_STEP) -> float:
        """
        Centre of gravity of the set over [x_min, x_max]

        Args:
            x_min: Left end of the domain
            x_max: Right end of the domain
            step: Sampling step

        Returns:
            sum(x * mu(x)) / sum(mu(x)), or 0 if the set has no mass on the domain
        """
        xs = domain_points(x_min, x_max, step)
        mu = self.sample(xs)

        denominator = float(np.sum(mu))
        if denominator == 0:
            return 0.0
        return float(np.sum(xs * mu)) / denominator


# membership factories

def ramp(lower: float, upper: float) -> MembershipFunction:
    """
    Linear shoulder: 0 at `lower`, 1 at `upper`, clipped outside

    With lower > upper the ramp descends.
    """
    if lower == upper:
        raise ValueError("ramp needs two distinct end points")

    def membership(x: float) -> float:
        return float(np.clip((x - lower) / (upper - lower), 0.0, 1.0))

    return membership


def _from_simpful(name: str, mf) -> FuzzySet:
    fs = SimpfulFuzzySet(function=mf, term=name)
    return FuzzySet(name, fs.get_value)


def triangular(name: str, a: float, b: float, c: float) -> FuzzySet:
    """Triangular set rising on [a, b] and falling on [b, c]"""
    return _from_simpful(name, Triangular_MF(a=a, b=b, c=c))


def trapezoidal(name: str, a: float, b: float, c: float, d: float) -> FuzzySet:
    """Trapezoidal set with core [b, c] and support [a, d]"""
    return _from_simpful(name, Trapezoidal_MF(a=a, b=b, c=c, d=d))


def gaussian(name: str, mu: float, sigma: float) -> FuzzySet:
    return _from_simpful(name, Gaussian_MF(mu=mu, sigma=sigma))


# linguistic partitions

class FuzzyDiscretizer:
    """Chooses the peak positions of a fuzzy partition from observed samples"""

    def __init__(self, num_fuzzy_sets: int, method: str = "uniform"):
        """
        Initializes the fuzzy discretizer

        Args:
            num_fuzzy_sets: Number of fuzzy sets in the partition
            method: Discretization method ('uniform' or 'quantile')
        """
        if num_fuzzy_sets < 2:
            raise ValueError("num_fuzzy_sets must be at least 2")
        if method not in ("uniform", "quantile"):
            raise ValueError(f"Method not supported: {method}")

        self.num_fuzzy_sets = num_fuzzy_sets
        self.method = method

    def run(self, samples: Sequence[float]) -> List[float]:
        """
        Calculates the peak positions for a variable

        Args:
            samples: Observed values of the variable

        Returns:
            Sorted list of num_fuzzy_sets peak positions
        """
        values = np.asarray(samples, dtype=float).ravel()
        if values.size == 0:
            raise ValueError("samples cannot be empty")

        if self.method == "uniform":
            # uniform division of the observed range
            points = np.linspace(np.min(values), np.max(values), self.num_fuzzy_sets)
        else:
            points = np.percentile(values, np.linspace(0, 100, self.num_fuzzy_sets))

        return np.sort(points).tolist()


LINGUISTIC_TERMS = {
    2: ["LOW", "HIGH"],
    3: ["LOW", "MEDIUM", "HIGH"],
    5: ["VERY_LOW", "LOW", "MEDIUM", "HIGH", "VERY_HIGH"],
    7: ["EXTREMELY_LOW", "VERY_LOW", "LOW", "MEDIUM", "HIGH", "VERY_HIGH", "EXTREMELY_HIGH"],
}


def create_triangular_fuzzy_sets(points: Sequence[float]) -> List[FuzzySet]:
    """
    Creates a strong triangular partition with one set peaking at each point

    The first and last sets are shoulders (trapezoids flat at the domain
    border), the others are triangles reaching 0 at the neighbouring peaks.

    Args:
        points: Sorted peak positions

    Returns:
        List of fuzzy sets, one per point
    """
    if len(points) < 2:
        raise ValueError("Points list must contain at least 2 points to create fuzzy sets")

    try:
        points = [float(p) for p in points]
    except (TypeError, ValueError):
        raise ValueError("All points must be numeric values")

    n_sets = len(points)
    terms = LINGUISTIC_TERMS.get(n_sets, [f"FS_{i}" for i in range(n_sets)])

    fuzzy_sets = []
    for i, term in enumerate(terms):
        if i == 0:
            fs = trapezoidal(term, points[0], points[0], points[0], points[1])
        elif i == n_sets - 1:
            fs = trapezoidal(term, points[i - 1], points[i], points[i], points[i])
        else:
            fs = triangular(term, points[i - 1], points[i], points[i + 1])
        fuzzy_sets.append(fs)

    logger.debug("Created %d fuzzy sets on [%s, %s]", n_sets, points[0], points[-1])
    return fuzzy_sets


def linguistic_partition(samples: Sequence[float], num_fuzzy_sets: int = 3,
                         method: str = "uniform") -> List[FuzzySet]:
    """Builds a triangular partition over the range of the observed samples"""
    points = FuzzyDiscretizer(num_fuzzy_sets, method).run(samples)
    return create_triangular_fuzzy_sets(points)
