"""
Unit tests for the compliance log.

Tests:
- Append-only semantics
- Plan modification detection and diff text
"""

from app.models.enums import AuditAction
from app.services.audit_log import (
    append_audit_entry,
    describe_plan_changes,
    plan_review_entry,
)
from conftest import make_plan


class TestAppendAuditEntry:
    """Tests for append_audit_entry."""

    def test_returns_new_list_with_entry_at_end(self):
        log = append_audit_entry([], AuditAction.INTAKE_SUBMITTED, "Dr. Smith", "first")
        updated = append_audit_entry(log, AuditAction.ANALYSIS_GENERATED, "System", "second")

        assert len(log) == 1
        assert [e.details for e in updated] == ["first", "second"]
        assert updated[0] is log[0]

    def test_entries_get_unique_ids_and_timestamps(self):
        log = []
        for i in range(3):
            log = append_audit_entry(log, AuditAction.PLAN_APPROVED, "Dr. Smith", str(i))

        assert len({e.id for e in log}) == 3
        assert log[0].timestamp <= log[1].timestamp <= log[2].timestamp

    def test_accepts_action_value_string(self):
        log = append_audit_entry([], "PLAN_REJECTED", "Dr. Smith", "rejected")

        assert log[0].action == AuditAction.PLAN_REJECTED


class TestPlanModificationDetection:
    """Tests for describe_plan_changes and plan_review_entry."""

    def test_unchanged_plan_is_approved(self):
        log = plan_review_entry([], make_plan(), make_plan(), "Dr. Smith")

        assert log[-1].action == AuditAction.PLAN_APPROVED
        assert log[-1].details == "Plan accepted without modification."
        assert log[-1].user == "Dr. Smith"

    def test_dosage_change_is_logged_as_modified(self):
        original = make_plan(dosage="50mg")
        final = make_plan(dosage="25mg")

        log = plan_review_entry([], original, final, "Dr. Smith")

        assert log[-1].action == AuditAction.PLAN_MODIFIED
        assert log[-1].details == "Doctor modified: Dosage: 50mg -> 25mg"

    def test_each_changed_field_is_listed(self):
        original = make_plan()
        final = make_plan(medication="Tadalafil", dosage="5mg", duration="Daily")

        changes = describe_plan_changes(original, final)

        assert changes == [
            "Medication: Sildenafil -> Tadalafil",
            "Dosage: 50mg -> 5mg",
            "Duration: As needed, max once daily -> Daily",
        ]

    def test_rationale_and_confidence_edits_are_not_tracked(self):
        final = make_plan(rationale="Edited rationale", confidence_score=10)

        assert describe_plan_changes(make_plan(), final) == []
