"""Append-only compliance log for review workflow transitions."""

from typing import List
from app.models.audit import AuditLogEntry
from app.models.clinical import TreatmentRecommendation
from app.models.enums import AuditAction
import logging

logger = logging.getLogger(__name__)

# Plan fields compared when a clinician finalizes a plan
_TRACKED_PLAN_FIELDS = (
    ("medication", "Medication"),
    ("dosage", "Dosage"),
    ("duration", "Duration"),
)


def append_audit_entry(
    log: List[AuditLogEntry], action: AuditAction, user: str, details: str
) -> List[AuditLogEntry]:
    """
    Append a new entry to the compliance log.

    Args:
        log: Existing entries, oldest first. Not modified.
        action: Workflow transition being recorded
        user: Clinician name, or "System" for automated steps
        details: Human-readable description

    Returns:
        New list with the entry appended at the end
    """
    entry = AuditLogEntry(action=AuditAction(action), user=user, details=details)
    logger.info(f"Audit {entry.action.value} by {user}: {details}")
    return [*log, entry]


def describe_plan_changes(
    original: TreatmentRecommendation, final: TreatmentRecommendation
) -> List[str]:
    """Return one "<Field>: old -> new" string per changed tracked field."""
    changes = []
    for attr, label in _TRACKED_PLAN_FIELDS:
        before = getattr(original, attr)
        after = getattr(final, attr)
        if before != after:
            changes.append(f"{label}: {before} -> {after}")
    return changes


def plan_review_entry(
    log: List[AuditLogEntry],
    original: TreatmentRecommendation,
    final: TreatmentRecommendation,
    user: str,
) -> List[AuditLogEntry]:
    """Log PLAN_MODIFIED with a field diff, or PLAN_APPROVED if nothing changed."""
    changes = describe_plan_changes(original, final)
    if changes:
        return append_audit_entry(
            log,
            AuditAction.PLAN_MODIFIED,
            user,
            f"Doctor modified: {', '.join(changes)}",
        )
    return append_audit_entry(
        log, AuditAction.PLAN_APPROVED, user, "Plan accepted without modification."
    )
