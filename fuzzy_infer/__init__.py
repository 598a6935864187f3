# Import delle classi principali
from .fuzzy_sets import (
    FuzzySet,
    FuzzyDiscretizer,
    create_triangular_fuzzy_sets,
    domain_points,
    gaussian,
    linguistic_partition,
    ramp,
    trapezoidal,
    triangular,
)
from .fuzzy_rule import ConsequenceKind, FuzzyRule, RuleEvaluation
from .inference_engine import InferenceEngine
from .inspection import membership_table, plot_defuzzification, plot_fuzzy_sets

# Versione del pacchetto
__version__ = "1.0.0"

# Esporta le classi principali per semplificare gli import
__all__ = [
    "FuzzySet",
    "FuzzyRule",
    "RuleEvaluation",
    "ConsequenceKind",
    "InferenceEngine",
    "domain_points",
    "ramp",
    "triangular",
    "trapezoidal",
    "gaussian",
    "FuzzyDiscretizer",
    "create_triangular_fuzzy_sets",
    "linguistic_partition",
    "membership_table",
    "plot_fuzzy_sets",
    "plot_defuzzification",
]
