# fuzzy_infer/config.py
from typing import Dict, Final, Tuple

# Priority labels produced by label inference
URGENT: Final[str] = "Urgent"
HIGH_PRIORITY: Final[str] = "High Priority"
MEDIUM_PRIORITY: Final[str] = "Medium Priority"
LOW_PRIORITY: Final[str] = "Low Priority"

# Label returned when no rule fires or the total weight is not positive
DEFAULT_PRIORITY: Final[str] = LOW_PRIORITY

# Numeric score of each label (any other payload scores 0)
PRIORITY_SCALE: Final[Dict[str, float]] = {
    URGENT: 3.0,
    HIGH_PRIORITY: 2.0,
    MEDIUM_PRIORITY: 1.0,
}

# Decision boundaries, highest first; lower bounds are inclusive
PRIORITY_THRESHOLDS: Final[Tuple[Tuple[float, str], ...]] = (
    (2.5, URGENT),
    (1.5, HIGH_PRIORITY),
    (0.5, MEDIUM_PRIORITY),
)

# Sampling
DEFAULT_STEP: Final[float] = 0.1
SAMPLE_COUNT_DECIMALS: Final[int] = 9  # rounding applied to (max - min) / step before floor

# Defuzzification
DEFUZZIFICATION_METHODS: Final[Tuple[str, ...]] = ("centroid", "mom", "bisector")
