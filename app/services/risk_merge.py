"""Merge deterministic interaction warnings into an AI clinical analysis.

The rule table exists to catch severe, well-known interactions that the model
may omit or under-weight. A High-severity database hit therefore forces the
analysis to High risk with a score floor; it never lowers anything.
"""

from typing import List
from app.models.clinical import ClinicalAnalysis, InteractionWarning
from app.models.enums import RiskLevel, Severity
import logging

logger = logging.getLogger(__name__)

ESCALATED_RISK_SCORE_FLOOR = 90


def merge_and_escalate(
    analysis: ClinicalAnalysis, db_warnings: List[InteractionWarning]
) -> ClinicalAnalysis:
    """
    Combine database warnings with the model's analysis.

    Args:
        analysis: Validated analysis from the model. Not modified.
        db_warnings: Warnings from the deterministic interaction checker

    Returns:
        A new ClinicalAnalysis with db_warnings placed ahead of the model's
        warnings, and risk escalated when any db warning is High severity.
    """
    if not db_warnings:
        return analysis.model_copy()

    update = {"warnings": [*db_warnings, *analysis.warnings]}

    if any(w.severity == Severity.HIGH for w in db_warnings):
        update["risk_level"] = RiskLevel.HIGH
        update["risk_score"] = max(analysis.risk_score, ESCALATED_RISK_SCORE_FLOOR)
        logger.warning(
            f"High-severity database interaction: risk escalated "
            f"{analysis.risk_level.value}/{analysis.risk_score} -> "
            f"{update['risk_level'].value}/{update['risk_score']}"
        )

    return analysis.model_copy(update=update)
