"""Drug Interaction Checker Tool.

Cross-checks a proposed medication against the patient's current medications
using a small static rule table. Stands in for a drug interaction database
(First Databank or similar); matching is by lower-cased substring, so
"Nitroglycerin 0.4mg SL" matches the "nitroglycerin" token.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple
from app.models.clinical import InteractionWarning, Medication
from app.models.enums import Severity, WarningSource
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrugInteractionRule:
    """A known interaction between two drugs, matched symmetrically."""

    drugs: Tuple[str, str]
    severity: Severity
    description: str


INTERACTION_RULES: Tuple[DrugInteractionRule, ...] = (
    DrugInteractionRule(
        drugs=("sildenafil", "nitroglycerin"),
        severity=Severity.HIGH,
        description=(
            "CRITICAL: Concomitant use of PDE5 inhibitors (Sildenafil) and Nitrates "
            "can cause life-threatening hypotension."
        ),
    ),
    DrugInteractionRule(
        drugs=("tadalafil", "nitroglycerin"),
        severity=Severity.HIGH,
        description=(
            "CRITICAL: Concomitant use of PDE5 inhibitors (Tadalafil) and Nitrates "
            "can cause life-threatening hypotension."
        ),
    ),
    DrugInteractionRule(
        drugs=("lisinopril", "potassium"),
        severity=Severity.MODERATE,
        description="Risk of Hyperkalemia: ACE inhibitors can increase potassium levels.",
    ),
    DrugInteractionRule(
        drugs=("warfarin", "aspirin"),
        severity=Severity.HIGH,
        description="Increased risk of bleeding due to additive anticoagulant effects.",
    ),
    DrugInteractionRule(
        drugs=("metformin", "contrast dye"),
        severity=Severity.MODERATE,
        description=(
            "Risk of lactic acidosis. Metformin should be withheld before imaging "
            "procedures with contrast."
        ),
    ),
)


def normalize_drug_name(name: str) -> str:
    """Lower-case and trim a medication name for substring matching."""
    return (name or "").strip().lower()


def _rule_matches(rule: DrugInteractionRule, current: str, proposed: str) -> bool:
    drug_a, drug_b = rule.drugs
    return (drug_a in current and drug_b in proposed) or (
        drug_b in current and drug_a in proposed
    )


def check_interactions(
    current_medications: Sequence[Medication], proposed_medication_name: str
) -> List[InteractionWarning]:
    """
    Check a proposed medication against the patient's current medications.

    Args:
        current_medications: Medications the patient already takes
        proposed_medication_name: Medication named in the AI treatment plan

    Returns:
        One DRUG_DB warning per (current medication, rule) match, in
        medication order then rule order. Matches are not de-duplicated.
    """
    proposed = normalize_drug_name(proposed_medication_name)
    if not proposed or not current_medications:
        return []

    warnings: List[InteractionWarning] = []

    for med in current_medications:
        current = normalize_drug_name(med.name)
        if not current:
            continue

        for rule in INTERACTION_RULES:
            if _rule_matches(rule, current, proposed):
                logger.info(
                    f"Rule hit: {med.name} + {proposed_medication_name} ({rule.severity.value})"
                )
                warnings.append(
                    InteractionWarning(
                        severity=rule.severity,
                        description=rule.description,
                        source=WarningSource.DRUG_DB,
                    )
                )

    logger.info(
        f"Checked {proposed_medication_name!r} against {len(current_medications)} "
        f"medications: {len(warnings)} warnings"
    )
    return warnings


def format_interaction_for_display(warnings: List[InteractionWarning]) -> str:
    """
    Format interaction warnings as markdown grouped by severity.

    Args:
        warnings: Warnings from the checker and/or the analysis model

    Returns:
        Formatted string for display or prompt context
    """
    if not warnings:
        return "No known drug interactions detected."

    output = []
    for severity in (Severity.HIGH, Severity.MODERATE, Severity.LOW):
        group = [w for w in warnings if w.severity == severity]
        if not group:
            continue
        output.append(f"**{severity.value} ({len(group)}):**")
        for warning in group:
            tag = " [DATABASE FLAG]" if warning.source == WarningSource.DRUG_DB else ""
            output.append(f"-{tag} {warning.description}")
        output.append("")

    return "\n".join(output).strip()
