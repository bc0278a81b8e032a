"""
Heuristic Water-Quality Assessment

A fixed, hand-written formula that turns five environmental readings into
a score, a category label and a probability distribution. It is a
demonstration model, not a trained one, and its weights never change.

    logit = Σ(weight × feature) + bias
    score = clamp(sigmoid(logit), 0, 1)

Category logits are affine in the score and pushed through a softmax.
"""

import math
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from core.models import Assessment, AssessmentLabel, FeatureImportance, Reading

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# MODEL CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════
DEFAULT_READING = {
    "ph": 7.0,
    "turbidity": 2.0,
    "dissolved_oxygen": 8.0,
    "temperature": 20.0,
    "conductivity": 200.0,
}

# Positive weights improve the score, negative ones degrade it
WEIGHTS = {
    "ph": -0.6,
    "turbidity": -0.9,
    "dissolved_oxygen": 1.4,
    "temperature": -0.2,
    "conductivity": -0.001,
}

BIAS = 0.5

# Category offsets; order is the tie-break order
CATEGORY_OFFSETS = [
    (AssessmentLabel.EXCELLENT, 0.9),
    (AssessmentLabel.GOOD, 0.7),
    (AssessmentLabel.MODERATE, 0.45),
    (AssessmentLabel.POOR, 0.2),
    (AssessmentLabel.CRITICAL, 0.0),
]

CATEGORY_SLOPE = 5.0

EXPLANATION = (
    "Simulated assessment: a fixed linear combination of pH, turbidity, "
    "dissolved oxygen, temperature and conductivity produces class "
    "probabilities and a 0..1 score. This is a demonstration heuristic and "
    "does not replace a real model."
)


def sigmoid(x: float) -> float:
    if x >= 0:
        return 1 / (1 + math.exp(-x))
    z = math.exp(x)
    return z / (1 + z)


def _round3(value: float) -> float:
    """Round half-up on the exact binary value to three decimals."""
    return float(Decimal(value).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP))


def _numeric(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


# ═══════════════════════════════════════════════════════════════════════════
# ASSESSOR
# ═══════════════════════════════════════════════════════════════════════════
class HeuristicAssessor:
    """
    Deterministic water-quality assessor.

    Usage:
        assessor = HeuristicAssessor()
        result = assessor.assess(Reading(ph=6.5, dissolved_oxygen=4.0))
        result.label, result.probabilities
    """

    def resolve(self, reading: Reading) -> Dict[str, float]:
        """Fill in defaults for missing readings."""
        values = {}
        for name, default in DEFAULT_READING.items():
            value = _numeric(getattr(reading, name))
            values[name] = default if value is None else value
        return values

    def features(self, values: Dict[str, float]) -> Dict[str, float]:
        """Derived features fed to the linear model."""
        return {
            "ph": abs(values["ph"] - 7),
            "turbidity": min(values["turbidity"] / 10, 5),
            "dissolved_oxygen": values["dissolved_oxygen"],
            "temperature": abs(values["temperature"] - 20) / 10,
            "conductivity": values["conductivity"] / 1000,
        }

    def assess(self, reading: Reading) -> Assessment:
        """
        Assess a set of readings.

        Args:
            reading: Any subset of the five readings

        Returns:
            Assessment with score, label, probabilities and feature ranking
        """
        values = self.resolve(reading)
        features = self.features(values)

        logit = (
            WEIGHTS["ph"] * features["ph"]
            + WEIGHTS["turbidity"] * features["turbidity"]
            + WEIGHTS["dissolved_oxygen"] * features["dissolved_oxygen"]
            + WEIGHTS["temperature"] * features["temperature"]
            + WEIGHTS["conductivity"] * features["conductivity"]
            + BIAS
        )
        score = max(0.0, min(1.0, sigmoid(logit)))

        exp_values = [math.exp(CATEGORY_SLOPE * (score - offset)) for _, offset in CATEGORY_OFFSETS]
        total = sum(exp_values) or 1
        probabilities = {
            label.value: _round3(v / total)
            for (label, _), v in zip(CATEGORY_OFFSETS, exp_values)
        }

        # First maximum in category order wins
        best = max(probabilities, key=probabilities.get)

        contributions = [
            (abs(WEIGHTS[name] * features[name]), FeatureImportance(name=name, value=values[name], weight=WEIGHTS[name]))
            for name in DEFAULT_READING
        ]
        contributions.sort(key=lambda pair: pair[0], reverse=True)

        log.debug(f"Assessment logit={logit:.4f} score={score:.5f} label={best}")
        return Assessment(
            score=score,
            label=best,
            probabilities=probabilities,
            important_features=[fi for _, fi in contributions],
            explanation=EXPLANATION,
        )

    def explain(self, assessment: Assessment) -> str:
        """Human-readable breakdown of an assessment."""
        lines = [f"Score: {assessment.score:.3f} ({assessment.label})", ""]
        lines.append("Probabilities:")
        for label, prob in assessment.probabilities.items():
            lines.append(f"  {label}: {prob:.3f}")
        lines.append("")
        lines.append("Feature importance:")
        for feature in assessment.important_features:
            sign = "+" if feature.weight > 0 else ""
            lines.append(f"  {feature.name} = {feature.value:g} (weight {sign}{feature.weight})")
        return "\n".join(lines)


# ═══════════════════════════════════════════════════════════════════════════
# FACTORY FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════
_assessor: Optional[HeuristicAssessor] = None


def get_assessor() -> HeuristicAssessor:
    """Get the shared assessor instance."""
    global _assessor
    if _assessor is None:
        _assessor = HeuristicAssessor()
    return _assessor


def assess(reading: Reading) -> Assessment:
    return get_assessor().assess(reading)


def assess_water_object(**readings: Any) -> Assessment:
    """Assess from keyword readings, e.g. ``assess_water_object(ph=6.2)``."""
    known = {k: v for k, v in readings.items() if k in DEFAULT_READING}
    return get_assessor().assess(Reading(**known))


def assessment_weights() -> List[FeatureImportance]:
    """Model weights with their default inputs, for display."""
    return [FeatureImportance(name=n, value=DEFAULT_READING[n], weight=w) for n, w in WEIGHTS.items()]
