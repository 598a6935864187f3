import logging
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd

from fuzzy_infer.config import DEFAULT_STEP
from fuzzy_infer.fuzzy_sets import FuzzySet, domain_points
from fuzzy_infer.inference_engine import InferenceEngine

logger = logging.getLogger(__name__)


def membership_table(fuzzy_sets: Sequence[FuzzySet], x_min: float, x_max: float,
                     step: float = DEFAULT_STEP) -> pd.DataFrame:
    """
    Tabulates the membership degrees of several sets on a common domain

    Args:
        fuzzy_sets: Sets to tabulate (names are used as column labels)
        x_min: Left end of the domain
        x_max: Right end of the domain
        step: Sampling step

    Returns:
        DataFrame with an 'x' column and one column per set
    """
    xs = domain_points(x_min, x_max, step)
    table = pd.DataFrame({"x": xs})
    for fuzzy_set in fuzzy_sets:
        if fuzzy_set.name in table.columns:
            logger.warning("Duplicate set name %r, column overwritten", fuzzy_set.name)
        table[fuzzy_set.name] = fuzzy_set.sample(xs)
    return table


def plot_fuzzy_sets(fuzzy_sets: Sequence[FuzzySet], x_min: float, x_max: float,
                    step: float = DEFAULT_STEP, ax: Optional[plt.Axes] = None, title: str = ""):
    """Draws the membership curve of each set and returns the axes"""
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    xs = domain_points(x_min, x_max, step)
    for fuzzy_set in fuzzy_sets:
        ax.plot(xs, fuzzy_set.sample(xs), label=fuzzy_set.name)

    ax.set_xlabel("x")
    ax.set_ylabel("Membership")
    ax.set_ylim(-0.05, 1.05)
    if title:
        ax.set_title(title)
    if fuzzy_sets:
        ax.legend()
    return ax


def plot_defuzzification(engine: InferenceEngine, x_min: float, x_max: float,
                         step: float = DEFAULT_STEP, ax: Optional[plt.Axes] = None):
    """
    Draws the aggregated output of an engine with its three crisp values

    Args:
        engine: Engine whose fuzzy-set consequences are aggregated
        x_min: Left end of the output domain
        x_max: Right end of the output domain
        step: Sampling step
        ax: Axes to draw on (a new figure is created if None)

    Returns:
        The matplotlib axes
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 4))

    xs = domain_points(x_min, x_max, step)
    ax.fill_between(xs, engine.aggregate_membership(xs), alpha=0.3, label="Aggregate")

    crisp_values = {
        "Centroid": engine.defuzzify_centroid(x_min, x_max, step),
        "MOM": engine.defuzzify_mom(x_min, x_max, step),
        "Bisector": engine.defuzzify_bisector(x_min, x_max, step),
    }
    for (name, value), style in zip(crisp_values.items(), ("-", "--", ":")):
        ax.axvline(value, linestyle=style, color="k", label=f"{name} = {value:.2f}")

    ax.set_xlabel("x")
    ax.set_ylabel("Membership")
    ax.legend()
    return ax
