"""Compliance record export."""

from typing import List
from app.models.audit import AuditLogEntry, ComplianceRecord, ExportMeta
from app.models.clinical import PatientRecord, TreatmentRecommendation
from app.config.settings import settings


def build_compliance_record(
    patient: PatientRecord,
    final_plan: TreatmentRecommendation,
    audit_log: List[AuditLogEntry],
) -> ComplianceRecord:
    """Bundle patient, final plan and the audit trail, log copied verbatim."""
    return ComplianceRecord(
        meta=ExportMeta(version=settings.app_version),
        patient=patient,
        final_treatment_plan=final_plan,
        compliance_log=list(audit_log),
    )


def export_filename(record: ComplianceRecord) -> str:
    """Download name, e.g. mediguard_record_12345_2026-10-17.json."""
    exported_on = record.meta.exported_at.date().isoformat()
    return f"mediguard_record_{record.patient.id}_{exported_on}.json"
